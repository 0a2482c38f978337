"""
Copyright 2026 optical-flat authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import logging
import math

import svgwrite

from .constants import (
    PLATE_HALF_LENGTH_PX,
    NORMAL_MARKER_HALF_LENGTH_PX,
    ARROW_HEAD_PX,
    SHIFT_LABEL_OFFSET_PX,
    SHIFT_LABEL_MIN_Y_PX,
    SHIFT_LABEL_BOTTOM_MARGIN_PX,
    PLATE_FILL,
    PLATE_EDGE,
    RAY_COLOR,
    NORMAL_COLOR,
    SHIFT_COLOR,
)
from .geometry import geometry
from .simulator import INCIDENCE, build_segments

logger = logging.getLogger(__name__)

LABEL_FONT = 'system-ui, -apple-system, Segoe UI, Roboto, Arial'


def format_shift(shift_mm):
    """Format a shift value with three decimals and the unit suffix."""
    if abs(shift_mm) < 5e-4:
        # No '-0.000' for float residue at n == 1
        shift_mm = 0.0
    return f'{shift_mm:.3f} mm'


def format_readout(shift_mm):
    """Text of the result readout, e.g. 'Light Shift: 1.646 mm'."""
    return f'Light Shift: {format_shift(shift_mm)}'


class SVGRenderer:
    """
    SVG renderer for the optical flat scene.

    The SVG is organized into four layers (bottom to top):
    - objects: the plate
    - graphic annotations: normal markers and the shift measurement
    - rays: incident, internal and outgoing segments
    - labels: text annotations

    Coordinate System:
        The renderer draws in canvas coordinates: the origin is the top-left
        corner and positive Y points downward, which is the system the
        engine computes in. No flip transform is applied.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        marker_scale (float): Multiplier for arrowheads and marker lengths
        dwg (svgwrite.Drawing): The SVG drawing object
    """

    def __init__(self, width=800, height=500, metadata_level='full', marker_scale=1.0):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 800)
            height (int): Canvas height in pixels (default: 500)
            metadata_level (str): Controls how much simulation metadata to embed.
                - 'none': No simulation metadata (smallest files)
                - 'standard': id + inkscape:label + class
                - 'full': All of 'standard' plus data-* attributes
            marker_scale (float): Multiplier for arrowheads and marker sizes
        """
        self.width = width
        self.height = height
        self.metadata_level = metadata_level
        self.marker_scale = marker_scale

        # profile='full' enables data-* attributes; debug=False disables
        # svgwrite's strict validation, which rejects custom namespaces.
        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(0, 0, width, height)
        self.dwg['xmlns:inkscape'] = 'http://www.inkscape.org/namespaces/inkscape'

        self.dwg.add(self.dwg.rect(insert=(0, 0), size=(width, height), fill='white'))

        self.layer_objects = self.dwg.add(self.dwg.g(
            id='layer-objects',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Objects'}
        ))
        self.layer_graphic_symb = self.dwg.add(self.dwg.g(
            id='layer-graphic-symb',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Graphic Annotations'}
        ))
        self.layer_rays = self.dwg.add(self.dwg.g(
            id='layer-rays',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Rays'}
        ))
        self.layer_labels = self.dwg.add(self.dwg.g(
            id='layer-labels',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Labels'}
        ))

        self.guide_pattern = '5, 4'

    def _normalize_coord(self, value):
        """Map -0.0 and values within 1e-10 of zero to 0.0."""
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _normalize_point(self, point):
        return {
            'x': self._normalize_coord(point['x']),
            'y': self._normalize_coord(point['y'])
        }

    def draw_plate(self, c1, c2, incidence=INCIDENCE, fill=PLATE_FILL, stroke=PLATE_EDGE):
        """
        Draw the plate as the quad between the planes dot(p, n_hat) == c1 and == c2.

        The quad is built wide along t_hat and clipped to the canvas with
        Shapely, so the SVG only contains the visible part.

        Args:
            c1 (float): Near surface offset
            c2 (float): Far surface offset
            incidence (IncidenceGeometry): Supplies n_hat and t_hat
            fill (str): Fill color
            stroke (str): Edge color

        Returns:
            bool: False if the plate lies entirely outside the canvas
        """
        quad = geometry.strip_polygon(incidence.n_hat, incidence.t_hat, c1, c2,
                                      PLATE_HALF_LENGTH_PX)
        visible = geometry.clip_to_viewport(quad, self.width, self.height)
        if visible.is_empty:
            logger.debug(f"Plate c1={c1:.1f} c2={c2:.1f} is outside the canvas")
            return False

        points = [(self._normalize_coord(x), self._normalize_coord(y))
                  for x, y in list(visible.exterior.coords)[:-1]]
        plate = self.dwg.polygon(points=points, fill=fill, stroke=stroke, stroke_width=1)
        if self.metadata_level != 'none':
            plate['id'] = 'plate'
            plate['class'] = 'plate'
            plate['inkscape:label'] = 'Optical flat'
        if self.metadata_level == 'full':
            plate['data-c1'] = f'{c1:.6f}'
            plate['data-c2'] = f'{c2:.6f}'
        self.layer_objects.add(plate)
        return True

    def draw_ray_segment(self, ray, color=RAY_COLOR, stroke_width=2, show_arrow=True,
                         arrow_size=None):
        """
        Draw a ray segment with an optional arrowhead at its end point.

        Args:
            ray (Ray): The ray segment to draw
            color (str): CSS color string
            stroke_width (float): Line width in pixels (default: 2)
            show_arrow (bool): If True, draw an arrowhead at p2
            arrow_size (float or None): Arrowhead length. If None,
                ARROW_HEAD_PX * marker_scale

        Returns:
            bool: False if the segment was skipped (non-finite or off-canvas)
        """
        if not ray.is_finite():
            return False

        p1, p2 = self._clip_to_viewbox(ray.p1.to_dict(), ray.p2.to_dict())
        if p1 is None or p2 is None:
            return False

        p1 = self._normalize_point(p1)
        p2 = self._normalize_point(p2)

        if arrow_size is None:
            arrow_size = ARROW_HEAD_PX * self.marker_scale

        group = self.dwg.g()
        if self.metadata_level != 'none':
            group['id'] = f'ray-{ray.uuid}'
            group['class'] = f'ray ray-{ray.segment_type}'
            group['inkscape:label'] = ray.segment_type
        if self.metadata_level == 'full':
            group['data-uuid'] = ray.uuid
            group['data-segment-type'] = ray.segment_type
            if ray.parent_uuid:
                group['data-parent-uuid'] = ray.parent_uuid

        group.add(self.dwg.line(
            start=(p1['x'], p1['y']),
            end=(p2['x'], p2['y']),
            stroke=color,
            stroke_width=stroke_width,
            stroke_linecap='round'
        ))

        if show_arrow:
            head = self._arrow_head(p1, p2, arrow_size)
            if head is not None:
                group.add(self.dwg.polygon(points=head, fill=color))

        self.layer_rays.add(group)
        return True

    def _arrow_head(self, p1, p2, size):
        """Triangle with its tip at p2, pointing along p1 -> p2."""
        dx = p2['x'] - p1['x']
        dy = p2['y'] - p1['y']
        length = math.sqrt(dx * dx + dy * dy)
        if length < 1e-6:
            return None

        ux = dx / length
        uy = dy / length
        half_width = size * 0.6
        left = (p2['x'] - ux * size - uy * half_width, p2['y'] - uy * size + ux * half_width)
        right = (p2['x'] - ux * size + uy * half_width, p2['y'] - uy * size - ux * half_width)
        return [(p2['x'], p2['y']), left, right]

    def draw_normal_marker(self, c, incidence=INCIDENCE, half_length=None, color=NORMAL_COLOR):
        """
        Draw a short normal tick through the foot point n_hat * c of a surface.

        Args:
            c (float): Surface offset along n_hat
            incidence (IncidenceGeometry): Supplies n_hat
            half_length (float or None): Half length of the tick. If None,
                NORMAL_MARKER_HALF_LENGTH_PX * marker_scale
            color (str): Stroke color
        """
        if half_length is None:
            half_length = NORMAL_MARKER_HALF_LENGTH_PX * self.marker_scale
        center = geometry.plane_point(incidence.n_hat, c)
        start = geometry.add(center, geometry.scale(incidence.n_hat, -half_length))
        end = geometry.add(center, geometry.scale(incidence.n_hat, half_length))

        line = self.dwg.line(
            start=(start.x, start.y),
            end=(end.x, end.y),
            stroke=color,
            stroke_width=1
        )
        if self.metadata_level != 'none':
            line['class'] = 'normal-marker'
        self.layer_graphic_symb.add(line)

    def draw_shift_annotation(self, ray_path, color=SHIFT_COLOR):
        """
        Draw the lateral shift measurement.

        Dashed guides run down from the entry and exit points to a measuring
        line just below the exit point; a double-headed arrow spans the two
        ray columns and the shift value is printed above it.

        Args:
            ray_path (RayPath): Engine output
            color (str): Annotation color

        Returns:
            float: y coordinate of the measuring line
        """
        x_in = ray_path.x_in
        x_out = ray_path.x_out
        y_meas = min(max(ray_path.exit_point.y + SHIFT_LABEL_OFFSET_PX, SHIFT_LABEL_MIN_Y_PX),
                     self.height - SHIFT_LABEL_BOTTOM_MARGIN_PX)
        head = ARROW_HEAD_PX * self.marker_scale

        group = self.dwg.g(stroke=color, fill=color)
        if self.metadata_level != 'none':
            group['id'] = 'shift-annotation'
            group['class'] = 'shift-annotation'
        if self.metadata_level == 'full':
            group['data-shift-mm'] = f'{ray_path.lateral_shift_mm:.6f}'

        guides = self.dwg.path(
            d=(f'M {x_in},{ray_path.entry_point.y} L {x_in},{y_meas} '
               f'M {x_out},{ray_path.exit_point.y} L {x_out},{y_meas}'),
            fill='none',
            stroke_width=1.8,
            stroke_dasharray=self.guide_pattern
        )
        group.add(guides)

        group.add(self.dwg.line(start=(x_in, y_meas), end=(x_out, y_meas), stroke_width=1.8))
        group.add(self.dwg.polygon(points=[
            (x_in, y_meas),
            (x_in + head, y_meas - head * 0.6),
            (x_in + head, y_meas + head * 0.6),
        ], stroke='none'))
        group.add(self.dwg.polygon(points=[
            (x_out, y_meas),
            (x_out - head, y_meas - head * 0.6),
            (x_out - head, y_meas + head * 0.6),
        ], stroke='none'))
        self.layer_graphic_symb.add(group)

        text = self.dwg.text(
            f'Shift = {format_shift(ray_path.lateral_shift_mm)}',
            insert=((x_in + x_out) / 2, y_meas - 7),
            fill=color,
            font_size='12px',
            font_family=LABEL_FONT,
            text_anchor='middle'
        )
        if self.metadata_level != 'none':
            text['id'] = 'label-shift'
        self.layer_labels.add(text)
        return y_meas

    def draw_ray_path(self, ray_path, segments=None, incidence=INCIDENCE, show_arrows=True):
        """
        Draw the full scene for one engine result.

        Args:
            ray_path (RayPath): Engine output
            segments (list or None): Ray segments; built from ray_path if None
            incidence (IncidenceGeometry): The fixed optical setup
            show_arrows (bool): Draw arrowheads on the ray segments
        """
        if segments is None:
            segments = build_segments(ray_path)

        self.draw_plate(ray_path.surfaces.c1, ray_path.surfaces.c2, incidence)
        for ray in segments:
            self.draw_ray_segment(ray, show_arrow=show_arrows)
        self.draw_normal_marker(ray_path.surfaces.c1, incidence)
        self.draw_normal_marker(ray_path.surfaces.c2, incidence)
        self.draw_shift_annotation(ray_path)

    def _clip_to_viewbox(self, p1, p2):
        """
        Clip a line segment to the canvas.

        Uses the Liang-Barsky algorithm.

        Args:
            p1 (dict): Start point
            p2 (dict): End point

        Returns:
            tuple: (clipped_p1, clipped_p2) or (None, None) if completely outside
        """
        min_x, min_y = 0.0, 0.0
        max_x, max_y = float(self.width), float(self.height)

        x1, y1 = p1['x'], p1['y']
        x2, y2 = p2['x'], p2['y']
        dx = x2 - x1
        dy = y2 - y1

        t0, t1 = 0.0, 1.0

        for p, q in ((-dx, x1 - min_x), (dx, max_x - x1), (-dy, y1 - min_y), (dy, max_y - y1)):
            if abs(p) < 1e-10:
                # Parallel to this edge
                if q < 0:
                    return None, None
            else:
                t = q / p
                if p < 0:
                    t0 = max(t0, t)
                else:
                    t1 = min(t1, t)

        if t0 > t1:
            return None, None

        clipped_p1 = {'x': x1 + t0 * dx, 'y': y1 + t0 * dy}
        clipped_p2 = {'x': x1 + t1 * dx, 'y': y1 + t1 * dy}

        return clipped_p1, clipped_p2

    def save(self, filename=None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (default: 'optical_flat.svg')
        """
        if filename is None:
            filename = 'optical_flat.svg'
        self.dwg.saveas(filename)
        logger.info(f"Saved SVG to {filename}")

    def to_string(self):
        """Get the SVG as an XML string."""
        return self.dwg.tostring()
