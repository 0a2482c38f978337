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
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import INCIDENCE_ANGLE_DEG
from .geometry import Point, geometry
from .optics import clamp_refractive_index, clamp_thickness_mm, refraction_angle
from .ray import Ray
from .scene import Scene

logger = logging.getLogger(__name__)

PLACEMENT_DEFAULT = 'default'
PLACEMENT_FALLBACK = 'fallback'


@dataclass(frozen=True)
class IncidenceGeometry:
    """
    The fixed optical setup.

    Attributes:
        incidence_angle (float): Angle of incidence in radians
        incoming_direction (Point): Unit direction of the incoming ray
        n_hat (Point): Unit normal of the plate surfaces, pointing into the plate
        t_hat (Point): Unit tangent of the surfaces, n_hat rotated by -90 degrees
    """
    incidence_angle: float
    incoming_direction: Point
    n_hat: Point
    t_hat: Point

    @classmethod
    def from_angle(cls, incidence_angle_deg: float = INCIDENCE_ANGLE_DEG) -> 'IncidenceGeometry':
        """
        Build the setup for a vertical (downward) incoming ray.

        The surface normal is the downward axis rotated toward +x by the
        incidence angle, so the ray meets the first surface at exactly that
        angle.
        """
        angle = math.radians(incidence_angle_deg)
        n_hat = geometry.normalize_vec(Point(math.sin(angle), math.cos(angle)))
        return cls(
            incidence_angle=angle,
            incoming_direction=Point(0.0, 1.0),
            n_hat=n_hat,
            t_hat=geometry.perpendicular(n_hat),
        )


# Computed once; never mutated
INCIDENCE = IncidenceGeometry.from_angle()


@dataclass(frozen=True)
class PlateConfig:
    """User inputs after clamping."""
    refractive_index: float
    thickness_mm: float

    @classmethod
    def from_inputs(cls, refractive_index: float, thickness_mm: float) -> 'PlateConfig':
        return cls(
            refractive_index=clamp_refractive_index(refractive_index),
            thickness_mm=clamp_thickness_mm(thickness_mm),
        )


@dataclass(frozen=True)
class PlateSurfaces:
    """
    The two plate surfaces as planes {p : dot(p, n_hat) == c}.

    c1 is the near (entry) surface and c2 the far (exit) surface;
    c2 - c1 == thickness_px.
    """
    c1: float
    c2: float
    thickness_px: float


@dataclass(frozen=True)
class RayPath:
    """
    Engine output for one configuration.

    Attributes:
        top_point (Point): Where the incoming ray enters the viewport
        entry_point (Point): Intersection with the near surface
        exit_point (Point): Intersection with the far surface
        bottom_point (Point): Where the outgoing ray leaves the viewport
        internal_direction (Point): Unit direction inside the plate
        refraction_angle (float): Refraction angle in radians
        lateral_shift_mm (float): Outgoing minus incoming ray x, in millimeters
        placement (str): 'default' or 'fallback', the placement step used
        config (PlateConfig): The clamped inputs that produced this path
        surfaces (PlateSurfaces): The plane offsets used
    """
    top_point: Point
    entry_point: Point
    exit_point: Point
    bottom_point: Point
    internal_direction: Point
    refraction_angle: float
    lateral_shift_mm: float
    placement: str
    config: PlateConfig
    surfaces: PlateSurfaces

    @property
    def x_in(self) -> float:
        return self.top_point.x

    @property
    def x_out(self) -> float:
        return self.exit_point.x

    @property
    def refraction_angle_deg(self) -> float:
        return math.degrees(self.refraction_angle)


def compute_plate_surfaces(thickness_mm: float, scene: Scene,
                           incidence: IncidenceGeometry = INCIDENCE) -> PlateSurfaces:
    """
    Place the two surfaces symmetrically about the viewport center.

    Args:
        thickness_mm: Clamped plate thickness in millimeters
        scene: Viewport and scale configuration
        incidence: The fixed optical setup

    Returns:
        PlateSurfaces with c2 - c1 == thickness_mm * scene.px_per_mm
    """
    t_px = scene.mm_to_px(thickness_mm)
    c_mid = geometry.dot(scene.center, incidence.n_hat)
    return PlateSurfaces(c1=c_mid - t_px * 0.5, c2=c_mid + t_px * 0.5, thickness_px=t_px)


def choose_entry_point(c1: float, scene: Scene,
                       incidence: IncidenceGeometry = INCIDENCE) -> Tuple[Point, str]:
    """
    Pick where the vertical incoming ray meets the near surface.

    Applies the scene's EntryPlacementPolicy: the default column first, then
    the fallback entry height when the default entry lands within the edge
    margin.

    Returns:
        (entry_point, placement) where placement is 'default' or 'fallback'
    """
    n_hat = incidence.n_hat
    policy = scene.placement

    x_in = scene.width * policy.default_x_fraction
    y_entry = (c1 - n_hat.x * x_in) / n_hat.y
    if policy.edge_margin_px <= y_entry <= scene.height - policy.edge_margin_px:
        return Point(x_in, y_entry), PLACEMENT_DEFAULT

    default_y = y_entry
    target_y = scene.height * policy.fallback_y_fraction
    x_in = (c1 - n_hat.y * target_y) / n_hat.x
    y_entry = (c1 - n_hat.x * x_in) / n_hat.y
    logger.info(f"Default entry y={default_y:.1f} outside margins; "
                f"using fallback column x={x_in:.1f}")
    return Point(x_in, y_entry), PLACEMENT_FALLBACK


def internal_direction(r: float, incidence: IncidenceGeometry = INCIDENCE) -> Point:
    """
    Unit direction inside the plate at angle r to the normal.

    The tangential component keeps the sign of the incoming ray's tangential
    component (a zero component counts as positive), and the normal
    component points toward the far surface.
    """
    tangential = geometry.dot(incidence.incoming_direction, incidence.t_hat)
    sign = math.copysign(1.0, tangential) if tangential != 0.0 else 1.0
    return geometry.normalize_vec(geometry.add(
        geometry.scale(incidence.t_hat, sign * math.sin(r)),
        geometry.scale(incidence.n_hat, math.cos(r)),
    ))


def compute_ray_path(refractive_index: float, thickness_mm: float,
                     scene: Optional[Scene] = None,
                     incidence: IncidenceGeometry = INCIDENCE) -> RayPath:
    """
    Trace the ray through the plate for one pair of inputs.

    This is a pure function: it reads nothing but its arguments and returns
    a fresh RayPath. Inputs are clamped (index >= 1, thickness in
    [0.3, 10] mm) before use, so the function never raises for numeric
    inputs.

    Args:
        refractive_index: Plate refractive index (floored at 1.0)
        thickness_mm: Plate thickness in millimeters (clamped)
        scene: Viewport and scale configuration (default Scene() if None)
        incidence: The fixed optical setup

    Returns:
        RayPath describing the three segments and the lateral shift
    """
    if scene is None:
        scene = Scene()

    config = PlateConfig.from_inputs(refractive_index, thickness_mm)
    surfaces = compute_plate_surfaces(config.thickness_mm, scene, incidence)

    entry, placement = choose_entry_point(surfaces.c1, scene, incidence)
    top = Point(entry.x, 0.0)

    r = refraction_angle(incidence.incidence_angle, config.refractive_index)
    d_inside = internal_direction(r, incidence)

    s_to_exit = geometry.ray_plane_distance(entry, d_inside, incidence.n_hat, surfaces.c2)
    exit_point = geometry.add(entry, geometry.scale(d_inside, s_to_exit))

    # Same medium on both sides: the outgoing ray is parallel to the incoming one
    bottom = Point(exit_point.x, scene.height)

    # The incoming ray is vertical, so the horizontal offset is the lateral shift
    shift_mm = scene.px_to_mm(exit_point.x - top.x)

    return RayPath(
        top_point=top,
        entry_point=entry,
        exit_point=exit_point,
        bottom_point=bottom,
        internal_direction=d_inside,
        refraction_angle=r,
        lateral_shift_mm=shift_mm,
        placement=placement,
        config=config,
        surfaces=surfaces,
    )


class Simulator:
    """
    Runs the engine for a scene and turns the result into ray segments.

    Attributes:
        scene (Scene): Viewport and scale configuration
        incidence (IncidenceGeometry): The fixed optical setup
        ray_path (RayPath or None): Result of the last run
        ray_segments (list): Incident, internal and outgoing segments of the last run
    """

    def __init__(self, scene: Optional[Scene] = None,
                 incidence: IncidenceGeometry = INCIDENCE) -> None:
        self.scene: Scene = scene if scene is not None else Scene()
        self.incidence: IncidenceGeometry = incidence
        self.ray_path: Optional[RayPath] = None
        self.ray_segments: List[Ray] = []

    def run(self, refractive_index: float, thickness_mm: float) -> List[Ray]:
        """
        Recompute the path from scratch and return its three segments.

        Args:
            refractive_index: Plate refractive index
            thickness_mm: Plate thickness in millimeters

        Returns:
            list: [incident, internal, outgoing] Ray segments
        """
        self.ray_path = compute_ray_path(refractive_index, thickness_mm,
                                         self.scene, self.incidence)
        self.ray_segments = build_segments(self.ray_path)
        logger.debug(
            f"n={self.ray_path.config.refractive_index:g} "
            f"t={self.ray_path.config.thickness_mm:g}mm "
            f"r={self.ray_path.refraction_angle_deg:.3f}deg "
            f"shift={self.ray_path.lateral_shift_mm:.3f}mm ({self.ray_path.placement})"
        )
        return self.ray_segments


def build_segments(ray_path: RayPath) -> List[Ray]:
    """Split a RayPath into linked incident/internal/outgoing segments."""
    incident = Ray(ray_path.top_point, ray_path.entry_point, segment_type='incident')
    internal = incident.continue_with(ray_path.exit_point, 'internal')
    outgoing = internal.continue_with(ray_path.bottom_point, 'outgoing')
    return [incident, internal, outgoing]
