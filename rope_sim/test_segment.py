"""Tests for Segment spring coupling, friction and integration."""

import pytest

from rope_sim.params import SegmentParams
from rope_sim.segment import Segment
from rope_sim.vec2 import ZERO_THRESHOLD, Vec2


@pytest.fixture
def params():
    return SegmentParams()


# =============================================================================
# Parameters
# =============================================================================

def test_default_params():
    p = SegmentParams()
    assert p.mass == 0.5
    assert p.stiffness == 0.5
    assert p.damping == 0.015
    assert p.rest_length == 20.0
    assert p.static_friction == 0.0016
    assert p.kinetic_friction == 0.0008
    assert p.speed_cap == 100.0
    assert p.force_cap == 50.0


@pytest.mark.parametrize("field", ["mass", "rest_length", "speed_cap", "force_cap"])
def test_params_reject_non_positive(field):
    with pytest.raises(ValueError):
        SegmentParams(**{field: 0.0})


@pytest.mark.parametrize("field", ["stiffness", "damping", "static_friction", "kinetic_friction"])
def test_params_reject_negative(field):
    with pytest.raises(ValueError):
        SegmentParams(**{field: -0.1})


# =============================================================================
# Integration
# =============================================================================

def test_segment_at_rest_stays_at_rest():
    """Zero force and zero velocity: nothing moves, however many ticks."""
    segment = Segment(Vec2(10.0, -4.0))
    for _ in range(100):
        segment.tick()
        assert segment.velocity == Vec2.ZERO
        assert segment.position == Vec2(10.0, -4.0)


def test_tiny_velocity_snaps_to_zero():
    segment = Segment(Vec2(0.0, 0.0))
    segment.velocity = Vec2(ZERO_THRESHOLD / 2.0, 0.0)
    segment.tick()
    assert segment.velocity == Vec2.ZERO
    assert segment.position == Vec2(0.0, 0.0)


def test_static_friction_absorbs_small_force(params):
    segment = Segment(Vec2(0.0, 0.0))
    segment.pull(Vec2(params.static_friction / 2.0, 0.0))
    segment.tick()
    assert segment.velocity == Vec2.ZERO
    assert segment.position == Vec2(0.0, 0.0)


def test_start_from_rest_uses_static_friction(params):
    segment = Segment(Vec2(0.0, 0.0))
    segment.pull(Vec2(1.0, 0.0))
    segment.tick()

    expected_speed = (1.0 - params.static_friction) / params.mass
    assert segment.velocity.x == pytest.approx(expected_speed)
    assert segment.velocity.y == pytest.approx(0.0)
    assert segment.position.x == pytest.approx(expected_speed)


def test_moving_segment_uses_kinetic_friction(params):
    segment = Segment(Vec2(0.0, 0.0))
    segment.velocity = Vec2(2.0, 0.0)
    segment.tick()

    expected_speed = 2.0 - params.kinetic_friction / params.mass
    assert segment.velocity.x == pytest.approx(expected_speed)
    assert segment.position.x == pytest.approx(expected_speed)


def test_kinetic_friction_stops_slow_segment(params):
    segment = Segment(Vec2(5.0, 5.0))
    segment.velocity = Vec2(0.0, params.kinetic_friction / params.mass / 2.0)
    segment.tick()
    assert segment.velocity == Vec2.ZERO
    assert segment.position == Vec2(5.0, 5.0)


def test_force_cap(params):
    segment = Segment(Vec2(0.0, 0.0))
    segment.pull(Vec2(0.0, 1000.0))
    segment.tick()
    assert segment.applied_force.length() == pytest.approx(params.force_cap)
    assert segment.velocity.length() <= params.speed_cap + 1e-9


def test_speed_cap(params):
    segment = Segment(Vec2(0.0, 0.0))
    for _ in range(20):
        segment.pull(Vec2(-1000.0, 1000.0))
        segment.tick()
        assert segment.velocity.length() <= params.speed_cap + 1e-9
    assert segment.velocity.length() == pytest.approx(params.speed_cap)


def test_force_accumulator_reset_after_tick():
    segment = Segment(Vec2(0.0, 0.0))
    segment.pull(Vec2(1.0, 2.0))
    segment.pull(Vec2(0.5, -1.0))
    assert segment.force == Vec2(1.5, 1.0)
    segment.tick()
    assert segment.force == Vec2.ZERO


def test_reset():
    segment = Segment(Vec2(0.0, 0.0))
    segment.pull(Vec2(3.0, 0.0))
    segment.tick()
    segment.reset(Vec2(7.0, 8.0))
    assert segment.position == Vec2(7.0, 8.0)
    assert segment.velocity == Vec2.ZERO
    assert segment.force == Vec2.ZERO


def test_kinetic_energy(params):
    segment = Segment(Vec2(0.0, 0.0))
    segment.velocity = Vec2(3.0, 4.0)
    assert segment.kinetic_energy() == pytest.approx(0.5 * params.mass * 25.0)


# =============================================================================
# Spring coupling
# =============================================================================

def test_no_force_at_rest_length(params):
    a = Segment(Vec2(0.0, 0.0))
    b = Segment(Vec2(params.rest_length, 0.0))
    a.apply_force_to_linked_segment(b)
    b.apply_force_to_linked_segment(a)
    assert a.force == Vec2.ZERO
    assert b.force == Vec2.ZERO


def test_no_force_when_compressed():
    a = Segment(Vec2(0.0, 0.0))
    b = Segment(Vec2(5.0, 5.0))
    a.apply_force_to_linked_segment(b)
    assert b.force == Vec2.ZERO


def test_no_force_when_coincident():
    a = Segment(Vec2(3.0, 3.0))
    b = Segment(Vec2(3.0, 3.0))
    a.velocity = Vec2(1.0, 0.0)
    a.apply_force_to_linked_segment(b)
    assert b.force == Vec2.ZERO


def test_stretched_spring_pulls_linked_toward_self(params):
    a = Segment(Vec2(0.0, 0.0))
    b = Segment(Vec2(30.0, 0.0))
    a.apply_force_to_linked_segment(b)

    # 10px of stretch scaled by stiffness, applied only to the linked segment
    assert b.force.x == pytest.approx(-10.0 * params.stiffness)
    assert b.force.y == pytest.approx(0.0)
    assert a.force == Vec2.ZERO


def test_damping_acts_along_spring_axis(params):
    a = Segment(Vec2(0.0, 0.0))
    b = Segment(Vec2(30.0, 0.0))

    # Transverse relative velocity: no damping contribution
    a.velocity = Vec2(0.0, 3.0)
    a.apply_force_to_linked_segment(b)
    assert b.force.x == pytest.approx(-10.0 * params.stiffness)
    assert b.force.y == pytest.approx(0.0)

    # Axial relative velocity: damped pull
    b.force = Vec2.ZERO
    a.velocity = Vec2(-2.0, 0.0)
    a.apply_force_to_linked_segment(b)
    expected = (-10.0 + -2.0 * params.damping) * params.stiffness
    assert b.force.x == pytest.approx(expected)
    assert b.force.y == pytest.approx(0.0)


def test_mirrored_calls_are_equal_and_opposite_at_rest():
    a = Segment(Vec2(0.0, 0.0))
    b = Segment(Vec2(18.0, 24.0))
    a.apply_force_to_linked_segment(b)
    b.apply_force_to_linked_segment(a)
    assert a.force.x == pytest.approx(-b.force.x)
    assert a.force.y == pytest.approx(-b.force.y)
    assert a.force.length() == pytest.approx(10.0 * 0.5)
