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

Optical Flat
============

Light passing through a parallel-sided plate at 45 degrees incidence:
Snell's law refraction, the entry/exit points, and the lateral shift of
the beam, rendered to SVG.

Main modules:
- core: Geometry engine (Scene, Simulator, compute_ray_path) and SVG renderer
- ui: Paired input controls and the redraw loop
- analysis: Sweeps, export and render saving
- examples: Demonstrations

Quick start:
    from optical_flat import compute_ray_path
    path = compute_ray_path(1.5, 5.0)
    print(path.lateral_shift_mm)
"""

__version__ = "0.1.0"

from .core.scene import Scene
from .core.simulator import Simulator, compute_ray_path, RayPath
from .core.svg_renderer import SVGRenderer

__all__ = [
    'Scene',
    'Simulator',
    'compute_ray_path',
    'RayPath',
    'SVGRenderer',
    '__version__',
]
