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

===============================================================================
Analysis Utilities
===============================================================================
Helpers around the engine that are not needed for a single redraw:

- Parameter sweeps and closed-form comparison (numpy)
- CSV / JSON export of ray segments, sweeps and ray paths
- Saving rendered SVG (and PNG, when cairosvg is available)
===============================================================================
"""

from .sweeps import (
    shift_vs_thickness,
    shift_vs_index,
    closed_form_residuals,
)
from .saving import (
    ray_path_to_dict,
    save_ray_path_json,
    save_rays_csv,
    save_sweep_csv,
)
from .render_result import (
    save_render,
    reset_render_counter,
)

__all__ = [
    'shift_vs_thickness',
    'shift_vs_index',
    'closed_form_residuals',
    'ray_path_to_dict',
    'save_ray_path_json',
    'save_rays_csv',
    'save_sweep_csv',
    'save_render',
    'reset_render_counter',
]
