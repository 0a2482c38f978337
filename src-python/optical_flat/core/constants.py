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

"""
Constants used throughout the optical flat simulation.

Optical constants (angle of incidence, input bounds) sit next to the
presentation constants (viewport, placement policy, colors) so that the
engine, the renderer and the controls can share them without circular
imports.
"""

# Fixed angle of incidence at the first interface (degrees)
INCIDENCE_ANGLE_DEG = 45.0

# Refractive index floor: the plate is never less dense than the surrounding air
MIN_REFRACTIVE_INDEX = 1.0
DEFAULT_REFRACTIVE_INDEX = 1.5

# Plate thickness bounds (millimeters)
MIN_THICKNESS_MM = 0.3
MAX_THICKNESS_MM = 10.0
DEFAULT_THICKNESS_MM = 5.0

# Floor for the exit-plane denominator dot(d_inside, n_hat)
DENOMINATOR_EPSILON = 1e-6

# Default viewport (pixels) and rendering scale
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 500
DEFAULT_PX_PER_MM = 6.0

# Entry placement policy: default column for the incoming ray, the margin from
# the top/bottom edges that triggers the fallback, and the fallback entry height
DEFAULT_ENTRY_X_FRACTION = 0.35
ENTRY_EDGE_MARGIN_PX = 20.0
FALLBACK_ENTRY_Y_FRACTION = 0.2

# Renderer geometry (pixels at marker_scale == 1)
PLATE_HALF_LENGTH_PX = 2000.0
NORMAL_MARKER_HALF_LENGTH_PX = 16.0
ARROW_HEAD_PX = 8.0
SHIFT_LABEL_OFFSET_PX = 42.0
SHIFT_LABEL_MIN_Y_PX = 48.0
SHIFT_LABEL_BOTTOM_MARGIN_PX = 24.0

# Colors
PLATE_FILL = '#f6f6f7'
PLATE_EDGE = '#999'
RAY_COLOR = '#2c3e50'
NORMAL_COLOR = '#95a5a6'
SHIFT_COLOR = '#e67e22'
