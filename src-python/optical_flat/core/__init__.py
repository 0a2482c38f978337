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

from .geometry import geometry, Point, Geometry
from . import constants
from .optics import (
    clamp_refractive_index,
    clamp_thickness_mm,
    refraction_angle,
    lateral_shift_closed_form,
    lateral_shift_limit,
)
from .ray import Ray
from .scene import Scene, EntryPlacementPolicy
from .simulator import (
    INCIDENCE,
    IncidenceGeometry,
    PlateConfig,
    PlateSurfaces,
    RayPath,
    Simulator,
    compute_ray_path,
    compute_plate_surfaces,
    choose_entry_point,
    internal_direction,
    build_segments,
)
from .svg_renderer import SVGRenderer, format_shift, format_readout

__all__ = [
    'geometry', 'Point', 'Geometry',
    'constants',
    'clamp_refractive_index', 'clamp_thickness_mm', 'refraction_angle',
    'lateral_shift_closed_form', 'lateral_shift_limit',
    'Ray',
    'Scene', 'EntryPlacementPolicy',
    'INCIDENCE', 'IncidenceGeometry', 'PlateConfig', 'PlateSurfaces', 'RayPath',
    'Simulator', 'compute_ray_path', 'compute_plate_surfaces', 'choose_entry_point',
    'internal_direction', 'build_segments',
    'SVGRenderer', 'format_shift', 'format_readout',
]
