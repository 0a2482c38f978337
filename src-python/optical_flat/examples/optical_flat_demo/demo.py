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
Optical Flat Demo - Lateral Shift Through a Glass Plate

A vertical ray hits a plate tilted so the angle of incidence is 45 degrees.
Inside the plate the ray bends toward the normal; after the second surface
it continues parallel to the incoming ray, shifted sideways.

Setup:
- Plate of crown glass (n = 1.5), 5 mm thick, centered in an 800x500 view
- Scale: 6 pixels per millimeter

Expected behavior:
- Refraction angle asin(sin 45 / 1.5) = 28.13 degrees
- Lateral shift 5 * sin(45 - 28.13) / cos(28.13) = 1.646 mm
- A thickness sweep shows the shift growing linearly with thickness
"""

import sys
import os
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from optical_flat.logging_config import setup_logging
from optical_flat.core.scene import Scene
from optical_flat.ui.controls import OpticalFlatApp
from optical_flat.analysis import shift_vs_thickness, save_sweep_csv, save_render, ray_path_to_dict


def main():
    """Render one configuration, then move the controls and sweep thickness."""
    # Print every recompute of the engine, the rest of the package at INFO
    setup_logging(logging.INFO, module_levels={'core.simulator': logging.DEBUG})

    print("Optical Flat Demo - Lateral Shift Through a Glass Plate")
    print("=" * 60)

    scene = Scene(width=800, height=500, px_per_mm=6.0)
    app = OpticalFlatApp(scene)

    path = app.ray_path
    print(f"n = {path.config.refractive_index}, t = {path.config.thickness_mm} mm")
    print(f"Refraction angle: {path.refraction_angle_deg:.3f} deg")
    print(app.readout)

    output_dir = os.path.join(os.path.dirname(__file__), 'output')
    descriptor = save_render(app.svg, output_dir, 'flat', scene.width, scene.height,
                             'Optical flat, n=1.5, t=5 mm',
                             shift_summary=ray_path_to_dict(path))
    print(f"Saved: {descriptor['svg_path']}")

    # Typing a thickness beyond the range clamps it to 10.0
    app.panel.thickness.set_from_number('12')
    print(f"Thickness control now shows {app.panel.thickness.number_text} mm")
    print(app.readout)

    thicknesses = [0.5 * k for k in range(1, 21)]
    shifts = shift_vs_thickness(1.5, thicknesses, scene)
    csv_path = save_sweep_csv('thickness_mm', thicknesses, shifts, output_dir)
    print(f"Thickness sweep saved to: {csv_path}")


if __name__ == "__main__":
    main()
