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

from dataclasses import dataclass

from .constants import (
    DEFAULT_WIDTH,
    DEFAULT_HEIGHT,
    DEFAULT_PX_PER_MM,
    DEFAULT_ENTRY_X_FRACTION,
    ENTRY_EDGE_MARGIN_PX,
    FALLBACK_ENTRY_Y_FRACTION,
)
from .geometry import Point


@dataclass(frozen=True)
class EntryPlacementPolicy:
    """
    Where the incoming ray is placed horizontally.

    Two steps:
    1. Default: the ray runs down the column x = width * default_x_fraction.
    2. Fallback: if that column meets the near surface closer than
       edge_margin_px to the top or bottom edge, the column is re-derived so
       the entry point lands at y = height * fallback_y_fraction.

    The values are presentational; they only keep the entry point visible.
    """
    default_x_fraction: float = DEFAULT_ENTRY_X_FRACTION
    edge_margin_px: float = ENTRY_EDGE_MARGIN_PX
    fallback_y_fraction: float = FALLBACK_ENTRY_Y_FRACTION

    def __post_init__(self):
        for name in ('default_x_fraction', 'fallback_y_fraction'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.edge_margin_px < 0:
            raise ValueError(f"edge_margin_px must be non-negative, got {self.edge_margin_px}")


class Scene:
    """
    Viewport and rendering configuration for one optical flat simulation.

    The scene holds everything the engine needs besides the two optical
    inputs: the viewport size (the plate is centered in it), the
    pixels-per-millimeter scale shared by the engine and the renderer, and
    the entry placement policy.

    Attributes:
        width (float): Viewport width in pixels
        height (float): Viewport height in pixels
        px_per_mm (float): Rendering scale, pixels per millimeter
        placement (EntryPlacementPolicy): Incoming ray placement policy
        marker_scale (float): Multiplier for marker and arrow sizes
        show_ray_arrows (bool): Whether to draw arrowheads on ray segments
        metadata_level (str): SVG metadata level ('none', 'standard', 'full')
    """

    VALID_METADATA_LEVELS = ('none', 'standard', 'full')

    def __init__(self, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT,
                 px_per_mm=DEFAULT_PX_PER_MM, placement=None):
        self.width = width
        self.height = height
        self.px_per_mm = px_per_mm
        self.placement = placement if placement is not None else EntryPlacementPolicy()
        self.marker_scale = 1.0
        self.show_ray_arrows = True
        self._metadata_level = 'full'

    @property
    def width(self):
        return self._width

    @width.setter
    def width(self, value):
        if value <= 0:
            raise ValueError(f"Viewport width must be positive, got {value}")
        self._width = float(value)

    @property
    def height(self):
        return self._height

    @height.setter
    def height(self, value):
        if value <= 0:
            raise ValueError(f"Viewport height must be positive, got {value}")
        self._height = float(value)

    @property
    def px_per_mm(self):
        """Pixels per millimeter."""
        return self._px_per_mm

    @px_per_mm.setter
    def px_per_mm(self, value):
        if value <= 0:
            raise ValueError(f"px_per_mm must be positive, got {value}")
        self._px_per_mm = float(value)

    @property
    def metadata_level(self):
        return self._metadata_level

    @metadata_level.setter
    def metadata_level(self, value):
        if value not in self.VALID_METADATA_LEVELS:
            raise ValueError(
                f"Invalid metadata_level '{value}'. "
                f"Valid options: {self.VALID_METADATA_LEVELS}"
            )
        self._metadata_level = value

    @property
    def center(self) -> Point:
        """Geometric center of the viewport."""
        return Point(self.width * 0.5, self.height * 0.5)

    def mm_to_px(self, value_mm: float) -> float:
        return value_mm * self.px_per_mm

    def px_to_mm(self, value_px: float) -> float:
        return value_px / self.px_per_mm

    def __repr__(self):
        return (f"Scene(width={self.width:g}, height={self.height:g}, "
                f"px_per_mm={self.px_per_mm:g})")
