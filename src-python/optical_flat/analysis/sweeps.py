"""
Copyright 2026 optical-flat authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
Parameter sweeps
===============================================================================
Run the engine over a range of thicknesses or refractive indices and compare
the numeric shift with the closed form t * sin(i - r) / cos(r).

Each point is an independent engine call; nothing is cached.
===============================================================================
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

import numpy as np

from ..core.optics import (
    clamp_refractive_index,
    clamp_thickness_mm,
    lateral_shift_closed_form,
)
from ..core.scene import Scene
from ..core.simulator import INCIDENCE, IncidenceGeometry, compute_ray_path


def shift_vs_thickness(
    refractive_index: float,
    thicknesses_mm: Iterable[float],
    scene: Optional[Scene] = None,
    incidence: IncidenceGeometry = INCIDENCE,
) -> np.ndarray:
    """
    Lateral shift (mm) for each thickness at a fixed refractive index.

    Args:
        refractive_index: Plate refractive index
        thicknesses_mm: Raw thickness values (clamped by the engine)
        scene: Viewport and scale configuration
        incidence: The fixed optical setup

    Returns:
        Array of shifts, same length as thicknesses_mm
    """
    return np.array([
        compute_ray_path(refractive_index, t, scene, incidence).lateral_shift_mm
        for t in thicknesses_mm
    ], dtype=float)


def shift_vs_index(
    thickness_mm: float,
    indices: Iterable[float],
    scene: Optional[Scene] = None,
    incidence: IncidenceGeometry = INCIDENCE,
) -> np.ndarray:
    """Lateral shift (mm) for each refractive index at a fixed thickness."""
    return np.array([
        compute_ray_path(n, thickness_mm, scene, incidence).lateral_shift_mm
        for n in indices
    ], dtype=float)


def closed_form_residuals(
    refractive_indices: Iterable[float],
    thicknesses_mm: Iterable[float],
    scene: Optional[Scene] = None,
    incidence: IncidenceGeometry = INCIDENCE,
) -> Dict[str, np.ndarray]:
    """
    Compare engine and closed-form shifts on a grid.

    Inputs are clamped the same way the engine clamps them before the
    closed form is evaluated.

    Returns:
        Dict with 2D arrays (index along axis 0, thickness along axis 1):
        - 'engine': shifts from compute_ray_path
        - 'closed_form': t * sin(i - r) / cos(r)
        - 'residual': engine - closed_form
    """
    indices = np.asarray(list(refractive_indices), dtype=float)
    thicknesses = np.asarray(list(thicknesses_mm), dtype=float)

    engine = np.empty((indices.size, thicknesses.size))
    closed = np.empty_like(engine)
    for i, n in enumerate(indices):
        for j, t in enumerate(thicknesses):
            engine[i, j] = compute_ray_path(n, t, scene, incidence).lateral_shift_mm
            closed[i, j] = lateral_shift_closed_form(
                clamp_thickness_mm(t), clamp_refractive_index(n), incidence.incidence_angle)

    return {
        'engine': engine,
        'closed_form': closed,
        'residual': engine - closed,
    }
