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
Headless input controls and the redraw loop
===============================================================================
Each input is a slider paired with a number entry. Editing either side
copies the value to the other and fires the listeners; the application
listens to both inputs and recomputes the whole scene on every change.
===============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Union

from ..core.constants import (
    DEFAULT_REFRACTIVE_INDEX,
    DEFAULT_THICKNESS_MM,
    MIN_THICKNESS_MM,
    MAX_THICKNESS_MM,
)
from ..core.optics import clamp_thickness_mm
from ..core.scene import Scene
from ..core.simulator import RayPath, Simulator
from ..core.svg_renderer import SVGRenderer, format_readout

logger = logging.getLogger(__name__)

Listener = Callable[['PairedControl'], None]


class PairedControl:
    """
    A continuous control (slider) and a discrete numeric entry that always
    show the same value.

    Attributes:
        name (str): Control name, used in log messages
        minimum (float or None): Slider lower bound
        maximum (float or None): Slider upper bound
        decimals (int or None): Digits shown in the text of both sides. A
            value written back with display() is stored as that text reads
        slider_text (str): What the slider currently shows
        number_text (str): What the number entry currently shows
    """

    def __init__(self, name: str, initial: float,
                 minimum: Optional[float] = None, maximum: Optional[float] = None,
                 decimals: Optional[int] = None) -> None:
        self.name = name
        self.minimum = minimum
        self.maximum = maximum
        self.decimals = decimals
        self._value = float(initial)
        self._listeners: List[Listener] = []
        self.slider_text = self._format(self._value)
        self.number_text = self.slider_text

    @property
    def value(self) -> float:
        return self._value

    def _format(self, value: float) -> str:
        if self.decimals is None:
            return repr(value)
        return f'{value:.{self.decimals}f}'

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _parse(self, raw: Union[str, float]) -> Optional[float]:
        try:
            return float(raw)
        except (TypeError, ValueError):
            logger.warning(f"Rejected input {raw!r} for {self.name}; keeping {self._value}")
            return None

    def _bound(self, value: float) -> float:
        if self.minimum is not None:
            value = max(self.minimum, value)
        if self.maximum is not None:
            value = min(self.maximum, value)
        return value

    def set_from_slider(self, raw: Union[str, float]) -> None:
        """
        User moved the slider: mirror it into the number entry.

        A slider cannot leave its range, so the value is bounded to
        [minimum, maximum] first.
        """
        value = self._parse(raw)
        if value is not None:
            self._set(self._bound(value))

    def set_from_number(self, raw: Union[str, float]) -> None:
        """User typed a number: mirror it into the slider. Not bounded."""
        value = self._parse(raw)
        if value is not None:
            self._set(value)

    def _set(self, value: float) -> None:
        self._show(value)
        for listener in list(self._listeners):
            listener(self)

    def display(self, value: float) -> None:
        """
        Write value back into both sides without notifying listeners.

        With decimals set, the stored value is re-read from the shown text,
        so later reads return exactly what the user sees.
        """
        if self.decimals is not None:
            value = float(self._format(value))
        self._show(value)

    def _show(self, value: float) -> None:
        self._value = float(value)
        self.slider_text = self._format(self._value)
        self.number_text = self.slider_text


class ControlPanel:
    """The two paired inputs: refractive index and plate thickness."""

    def __init__(self, refractive_index: float = DEFAULT_REFRACTIVE_INDEX,
                 thickness_mm: float = DEFAULT_THICKNESS_MM) -> None:
        # No bound on the raw index; the engine floors it at 1.0
        self.refractive_index = PairedControl('refractive_index', refractive_index)
        self.thickness = PairedControl('thickness_mm', thickness_mm,
                                       minimum=MIN_THICKNESS_MM, maximum=MAX_THICKNESS_MM,
                                       decimals=1)

    @property
    def controls(self) -> List[PairedControl]:
        return [self.refractive_index, self.thickness]


class OpticalFlatApp:
    """
    Wires the controls to the engine and the renderer.

    Every change on either control triggers a full, independent recompute.

    Attributes:
        scene (Scene): Viewport and scale configuration
        panel (ControlPanel): The input controls
        simulator (Simulator): Engine runner
        readout (str): 'Light Shift: <value> mm' for the last draw
        svg (str or None): SVG document of the last draw
        ray_path (RayPath or None): Engine output of the last draw
    """

    def __init__(self, scene: Optional[Scene] = None,
                 panel: Optional[ControlPanel] = None) -> None:
        self.scene = scene if scene is not None else Scene()
        self.panel = panel if panel is not None else ControlPanel()
        self.simulator = Simulator(self.scene)
        self.readout = ''
        self.svg: Optional[str] = None
        self.ray_path: Optional[RayPath] = None
        self.draw_count = 0

        for control in self.panel.controls:
            control.add_listener(self._on_input)

        self.draw()

    def _on_input(self, control: PairedControl) -> None:
        self.draw()

    def draw(self) -> RayPath:
        """Read the controls, recompute, render and refresh the readout."""
        n = self.panel.refractive_index.value
        t_mm = clamp_thickness_mm(self.panel.thickness.value)
        # Both thickness controls show the clamped value
        self.panel.thickness.display(t_mm)

        self.simulator.run(n, t_mm)
        ray_path = self.simulator.ray_path

        renderer = SVGRenderer(width=self.scene.width, height=self.scene.height,
                               metadata_level=self.scene.metadata_level,
                               marker_scale=self.scene.marker_scale)
        renderer.draw_ray_path(ray_path, self.simulator.ray_segments,
                               incidence=self.simulator.incidence,
                               show_arrows=self.scene.show_ray_arrows)

        self.svg = renderer.to_string()
        self.readout = format_readout(ray_path.lateral_shift_mm)
        self.ray_path = ray_path
        self.draw_count += 1
        return ray_path
