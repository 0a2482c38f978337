"""
Copyright 2026 optical-flat authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
OPTICS UTILITIES
===============================================================================
Standalone functions for a parallel-sided plate:
- Input clamping (refractive index floor, thickness range)
- Refraction angle from Snell's law
- Closed-form lateral shift and its large-index limit

These utilities let the engine and the tests agree on the physics without
going through the vector geometry.
===============================================================================
"""

from __future__ import annotations

import math

from .constants import (
    MIN_REFRACTIVE_INDEX,
    MIN_THICKNESS_MM,
    MAX_THICKNESS_MM,
)


# =============================================================================
# Input Clamping
# =============================================================================

def clamp_refractive_index(n: float) -> float:
    """
    Floor the refractive index at MIN_REFRACTIVE_INDEX.

    There is no upper bound; an infinite index gives a zero refraction angle.
    NaN (an unparseable input) is treated as the floor.
    """
    if math.isnan(n):
        return MIN_REFRACTIVE_INDEX
    return max(MIN_REFRACTIVE_INDEX, n)


def clamp_thickness_mm(t_mm: float) -> float:
    """Clamp the plate thickness into [MIN_THICKNESS_MM, MAX_THICKNESS_MM]."""
    if math.isnan(t_mm):
        return MIN_THICKNESS_MM
    return min(MAX_THICKNESS_MM, max(MIN_THICKNESS_MM, t_mm))


# =============================================================================
# Snell's Law
# =============================================================================

def refraction_angle(incidence_angle: float, n: float) -> float:
    """
    Refraction angle (radians) inside the plate.

    Formula: sin(r) = sin(i) / n

    The asin argument is capped at 1, so an index below sin(i) yields a
    grazing 90 degree ray instead of a math domain error.

    Args:
        incidence_angle: Angle of incidence in radians (from surface normal).
        n: Refractive index of the plate relative to the surrounding medium.

    Returns:
        Refraction angle in radians.

    Example:
        >>> math.degrees(refraction_angle(math.radians(45), 1.5))
        28.12...
    """
    sin_r = min(1.0, math.sin(incidence_angle) / n)
    return math.asin(sin_r)


# =============================================================================
# Lateral Shift
# =============================================================================

def lateral_shift_closed_form(thickness: float, n: float, incidence_angle: float) -> float:
    """
    Perpendicular beam displacement caused by a parallel plate.

    Formula: d = t * sin(i - r) / cos(r)

    Args:
        thickness: Plate thickness (any length unit; the result uses the same unit).
        n: Refractive index of the plate.
        incidence_angle: Angle of incidence in radians.

    Returns:
        Lateral shift in the unit of thickness.

    Example:
        >>> lateral_shift_closed_form(5.0, 1.5, math.radians(45))
        1.6457...
    """
    r = refraction_angle(incidence_angle, n)
    return thickness * math.sin(incidence_angle - r) / math.cos(r)


def lateral_shift_limit(thickness: float, incidence_angle: float) -> float:
    """Shift approached as n -> infinity: t * sin(i)."""
    return thickness * math.sin(incidence_angle)
