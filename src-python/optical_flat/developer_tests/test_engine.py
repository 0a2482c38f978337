"""
===============================================================================
GEOMETRY ENGINE TESTS
===============================================================================

Tests for core.simulator and core.optics, covering:

1. INCIDENCE SETUP
   - n_hat / t_hat unit length and perpendicular
   - t_hat is n_hat rotated by -90 degrees
   - 45 degree angle between incoming ray and normal

2. SNELL'S LAW AND SHIFT PHYSICS
   - Refraction angle never exceeds the incidence angle
   - n = 1: no bending, zero shift
   - Shift linear in thickness, non-decreasing in n, bounded by t * sin(45)
   - n = 1.5, t = 5 mm against the closed form

3. CLAMPING
   - Thickness outside [0.3, 10] and index below 1 are clamped before use

4. PLACEMENT POLICY
   - Default column, bottom-edge fallback, top-edge fallback

Run with:
    python developer_tests/test_engine.py

Or with pytest:
    pytest developer_tests/test_engine.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from optical_flat.core.geometry import Point, geometry
from optical_flat.core.optics import (
    refraction_angle,
    lateral_shift_closed_form,
    lateral_shift_limit,
    clamp_refractive_index,
    clamp_thickness_mm,
)
from optical_flat.core.scene import Scene, EntryPlacementPolicy
from optical_flat.core.simulator import (
    INCIDENCE,
    IncidenceGeometry,
    PlateConfig,
    Simulator,
    compute_ray_path,
    compute_plate_surfaces,
    choose_entry_point,
)


# =============================================================================
# TEST CONFIGURATION
# =============================================================================

TOLERANCE = 1e-9
SHIFT_TOLERANCE_MM = 0.01
ANGLE_TOLERANCE = 0.001  # degrees


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


# =============================================================================
# INCIDENCE SETUP
# =============================================================================

def test_incidence_vectors_orthonormal():
    print("\n" + "=" * 60)
    print("TEST: IncidenceGeometry vectors")
    print("=" * 60)

    n_hat = INCIDENCE.n_hat
    t_hat = INCIDENCE.t_hat

    assert_close(geometry.length(n_hat), 1.0, msg="|n_hat|")
    assert_close(geometry.length(t_hat), 1.0, msg="|t_hat|")
    assert_close(geometry.dot(n_hat, t_hat), 0.0, msg="n_hat . t_hat")
    assert t_hat == Point(-n_hat.y, n_hat.x)
    print(f"  n_hat={n_hat}, t_hat={t_hat} - PASS")


def test_incidence_angle_is_45_degrees():
    cos_i = geometry.dot(INCIDENCE.incoming_direction, INCIDENCE.n_hat)
    assert_close(math.degrees(math.acos(cos_i)), 45.0, 1e-9, "angle(d_in, n_hat)")
    assert_close(math.degrees(INCIDENCE.incidence_angle), 45.0, msg="incidence_angle")
    assert INCIDENCE.incoming_direction == Point(0.0, 1.0)


def test_incidence_is_immutable():
    try:
        INCIDENCE.n_hat = Point(1.0, 0.0)
    except AttributeError:
        pass
    else:
        raise AssertionError("IncidenceGeometry should be frozen")


def test_incidence_from_angle_matches_constant():
    assert IncidenceGeometry.from_angle(45.0) == INCIDENCE


# =============================================================================
# SNELL'S LAW AND SHIFT PHYSICS
# =============================================================================

def test_refraction_angle_never_exceeds_incidence():
    i = INCIDENCE.incidence_angle
    assert_close(refraction_angle(i, 1.0), i, 1e-12, "n=1")
    for n in (1.0001, 1.2, 1.5, 2.0, 4.0, 100.0):
        r = refraction_angle(i, n)
        assert r < i, f"n={n}: r={math.degrees(r)} should be < 45"
    print("  r < 45 deg for all n > 1 - PASS")


def test_refraction_angle_clamps_asin_argument():
    # n below sin(i) would give an asin argument above 1
    r = refraction_angle(INCIDENCE.incidence_angle, 0.5)
    assert_close(r, math.pi / 2, 1e-12, "grazing refraction")


def test_unit_index_does_not_bend():
    for t in (0.3, 1.0, 5.0, 10.0):
        path = compute_ray_path(1.0, t)
        assert_close(path.internal_direction.x, 0.0, 1e-12, "d_inside.x")
        assert_close(path.internal_direction.y, 1.0, 1e-12, "d_inside.y")
        assert_close(path.lateral_shift_mm, 0.0, 1e-9, f"shift at t={t}")
    print("  n=1 gives zero shift - PASS")


def test_crown_glass_5mm_scenario():
    """n = 1.5, t = 5 mm against t * sin(i - r) / cos(r)."""
    print("\n" + "=" * 60)
    print("TEST: n=1.5, t=5mm")
    print("=" * 60)

    path = compute_ray_path(1.5, 5.0)
    r_deg = path.refraction_angle_deg
    assert_close(r_deg, 28.126, 0.001, "refraction angle")

    r = math.radians(r_deg)
    expected = 5.0 * math.sin(math.radians(45.0) - r) / math.cos(r)
    assert_close(path.lateral_shift_mm, expected, SHIFT_TOLERANCE_MM, "shift")
    assert_close(path.lateral_shift_mm, 1.6457, 1e-3, "shift value")
    print(f"  r={r_deg:.3f} deg, shift={path.lateral_shift_mm:.4f} mm - PASS")


def test_internal_direction_unit_length():
    for n in (1.0, 1.33, 1.5, 1.9, 3.0, 50.0):
        for t in (0.3, 2.5, 10.0):
            d = compute_ray_path(n, t).internal_direction
            assert_close(geometry.length(d), 1.0, 1e-12, f"|d_inside| n={n} t={t}")


def test_internal_direction_keeps_tangential_sign():
    incoming_t = geometry.dot(INCIDENCE.incoming_direction, INCIDENCE.t_hat)
    for n in (1.0, 1.5, 2.4):
        d = compute_ray_path(n, 5.0).internal_direction
        inside_t = geometry.dot(d, INCIDENCE.t_hat)
        assert inside_t * incoming_t > 0, f"n={n}: tangential sign flipped"
        # Moves toward the far surface
        assert geometry.dot(d, INCIDENCE.n_hat) > 0


def test_shift_linear_in_thickness():
    for n in (1.2, 1.5, 2.0):
        s1 = compute_ray_path(n, 2.0).lateral_shift_mm
        s2 = compute_ray_path(n, 4.0).lateral_shift_mm
        assert_close(s2, 2.0 * s1, 1e-9, f"doubling thickness at n={n}")

        previous = 0.0
        for t in (0.5, 1.0, 3.0, 6.0, 9.5):
            shift = compute_ray_path(n, t).lateral_shift_mm
            assert shift > previous, f"shift not increasing at n={n}, t={t}"
            previous = shift
    print("  shift strictly increasing and linear in t - PASS")


def test_shift_non_decreasing_in_index_and_bounded():
    t = 5.0
    limit = lateral_shift_limit(t, INCIDENCE.incidence_angle)
    previous = -1.0
    for n in (1.0, 1.1, 1.3, 1.5, 2.0, 3.0, 10.0, 1000.0):
        shift = compute_ray_path(n, t).lateral_shift_mm
        assert shift >= previous, f"shift decreased at n={n}"
        assert shift < limit + 1e-9
        previous = shift
    assert_close(compute_ray_path(1e9, t).lateral_shift_mm, limit, 1e-6, "large-n limit")
    print(f"  shift approaches t*sin(45) = {limit:.4f} - PASS")


def test_engine_matches_closed_form():
    i = INCIDENCE.incidence_angle
    for n in (1.0, 1.33, 1.5, 1.77, 2.4):
        for t in (0.3, 1.0, 4.2, 10.0):
            engine = compute_ray_path(n, t).lateral_shift_mm
            assert_close(engine, lateral_shift_closed_form(t, n, i), 1e-9, f"n={n} t={t}")


def test_engine_is_deterministic():
    a = compute_ray_path(1.52, 3.3)
    b = compute_ray_path(1.52, 3.3)
    assert a == b


# =============================================================================
# CLAMPING
# =============================================================================

def test_clamp_helpers():
    assert clamp_thickness_mm(0.1) == 0.3
    assert clamp_thickness_mm(25.0) == 10.0
    assert clamp_thickness_mm(4.0) == 4.0
    assert clamp_thickness_mm(float('nan')) == 0.3
    assert clamp_refractive_index(0.7) == 1.0
    assert clamp_refractive_index(1.7) == 1.7
    assert clamp_refractive_index(float('nan')) == 1.0


def test_thickness_clamped_before_use():
    over = compute_ray_path(1.5, 20.0)
    at_max = compute_ray_path(1.5, 10.0)
    assert over.config.thickness_mm == 10.0
    assert over.lateral_shift_mm == at_max.lateral_shift_mm

    under = compute_ray_path(1.5, 0.05)
    at_min = compute_ray_path(1.5, 0.3)
    assert under.config.thickness_mm == 0.3
    assert under.lateral_shift_mm == at_min.lateral_shift_mm
    print("  out-of-range thickness clamped - PASS")


def test_sub_unity_index_clamped():
    path = compute_ray_path(0.8, 5.0)
    assert path.config.refractive_index == 1.0
    assert_close(path.lateral_shift_mm, 0.0, 1e-9, "shift for clamped index")


def test_plate_config_from_inputs():
    config = PlateConfig.from_inputs(0.5, 11.0)
    assert config == PlateConfig(refractive_index=1.0, thickness_mm=10.0)


# =============================================================================
# SURFACES AND PLACEMENT
# =============================================================================

def test_surfaces_centered_and_separated():
    scene = Scene(width=800, height=500, px_per_mm=6.0)
    surfaces = compute_plate_surfaces(5.0, scene)
    c_mid = geometry.dot(scene.center, INCIDENCE.n_hat)

    assert_close(surfaces.c2 - surfaces.c1, 30.0, msg="separation")
    assert_close((surfaces.c1 + surfaces.c2) / 2, c_mid, msg="centering")
    assert surfaces.thickness_px == 30.0


def test_entry_and_exit_lie_on_surfaces():
    path = compute_ray_path(1.6, 7.0)
    assert_close(geometry.dot(path.entry_point, INCIDENCE.n_hat), path.surfaces.c1, 1e-9, "entry")
    assert_close(geometry.dot(path.exit_point, INCIDENCE.n_hat), path.surfaces.c2, 1e-9, "exit")
    assert path.top_point == Point(path.entry_point.x, 0.0)
    assert path.bottom_point.x == path.exit_point.x


def test_scale_does_not_change_shift_in_mm():
    small = compute_ray_path(1.5, 5.0, Scene(px_per_mm=4.0))
    large = compute_ray_path(1.5, 5.0, Scene(px_per_mm=8.0))
    assert_close(small.lateral_shift_mm, large.lateral_shift_mm, 1e-9, "shift vs scale")


def test_default_placement():
    scene = Scene(width=800, height=500)
    path = compute_ray_path(1.5, 5.0, scene)
    assert path.placement == 'default'
    assert_close(path.x_in, 280.0, msg="default column")
    assert 20.0 <= path.entry_point.y <= 480.0


def test_fallback_placement_bottom_edge():
    """A wide, short viewport puts the default entry below the bottom margin."""
    scene = Scene(width=2000, height=300)
    path = compute_ray_path(1.5, 5.0, scene)
    assert path.placement == 'fallback'
    assert_close(path.entry_point.y, 60.0, 1e-9, "fallback entry height")
    assert_close(geometry.dot(path.entry_point, INCIDENCE.n_hat), path.surfaces.c1, 1e-9, "on c1")
    print(f"  fallback column x={path.x_in:.2f} - PASS")


def test_fallback_placement_top_edge():
    policy = EntryPlacementPolicy(default_x_fraction=1.0)
    scene = Scene(width=800, height=200, placement=policy)
    surfaces = compute_plate_surfaces(5.0, scene)
    entry, placement = choose_entry_point(surfaces.c1, scene)
    assert placement == 'fallback'
    assert_close(entry.y, 40.0, 1e-9, "fallback entry height")


def test_fallback_shift_unchanged():
    default = compute_ray_path(1.5, 5.0, Scene(width=800, height=500))
    fallback = compute_ray_path(1.5, 5.0, Scene(width=2000, height=300))
    assert_close(default.lateral_shift_mm, fallback.lateral_shift_mm, 1e-9, "shift")


def test_simulator_segments_and_lineage():
    sim = Simulator(Scene())
    segments = sim.run(1.5, 5.0)
    assert [s.segment_type for s in segments] == ['incident', 'internal', 'outgoing']
    assert segments[0].parent_uuid is None
    assert segments[1].parent_uuid == segments[0].uuid
    assert segments[2].parent_uuid == segments[1].uuid
    assert segments[0].p2 == sim.ray_path.entry_point
    assert segments[1].p2 == sim.ray_path.exit_point
    # Outgoing ray parallel to the incoming one
    assert segments[2].direction == segments[0].direction


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    tests = [name for name in globals() if name.startswith('test_')]
    failed = []
    for name in tests:
        try:
            globals()[name]()
        except AssertionError as e:
            failed.append((name, str(e)))
            print(f"\n  FAILED: {name}\n    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {len(tests) - len(failed)}/{len(tests)} tests passed")
    print("=" * 78)
    return not failed


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
