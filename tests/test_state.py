import pytest

from gantryscan.model.state import (
    Axis, AxisLimit, MachineLimits, MachineState, DEFAULT_LIMITS, INITIAL_STATE, LINEAR_AXES, ROTARY_AXES,
    as_axis
)


def test_default_limits():
    assert DEFAULT_LIMITS.x == AxisLimit(0.0, 100.0)
    assert DEFAULT_LIMITS.y == AxisLimit(0.0, 100.0)
    assert DEFAULT_LIMITS.z == AxisLimit(0.0, 100.0)
    assert DEFAULT_LIMITS.a == AxisLimit(-45.0, 45.0)
    assert DEFAULT_LIMITS.b == AxisLimit(-180.0, 180.0)


def test_initial_state():
    assert INITIAL_STATE.as_tuple() == (50.0, 50.0, 10.0, 0.0, 0.0)
    assert INITIAL_STATE.is_within(DEFAULT_LIMITS)


def test_axis_units():
    assert [axis.unit for axis in LINEAR_AXES] == ["mm", "mm", "mm"]
    assert [axis.unit for axis in ROTARY_AXES] == ["deg", "deg"]


def test_as_axis():
    assert as_axis("x") is Axis.X
    assert as_axis(Axis.B) is Axis.B
    with pytest.raises(KeyError):
        as_axis("w")


@pytest.mark.parametrize("value, expected", [(-5.0, 0.0), (0.0, 0.0), (42.5, 42.5), (100.0, 100.0), (250.0, 100.0)])
def test_axis_limit_clamp(value, expected):
    assert AxisLimit(0.0, 100.0).clamp(value) == expected


def test_clamped_state_is_within_limits():
    state = MachineState(x=-10, y=120, z=50, a=60, b=540)
    clamped = state.clamped(DEFAULT_LIMITS)
    assert clamped.as_tuple() == (0.0, 100.0, 50.0, 45.0, 180.0)
    assert clamped.is_within(DEFAULT_LIMITS)
    assert not state.is_within(DEFAULT_LIMITS)


def test_clamp_is_idempotent():
    state = MachineState(x=-10, y=120, z=50, a=-90, b=-200)
    once = state.clamped(DEFAULT_LIMITS)
    assert once.clamped(DEFAULT_LIMITS) == once


def test_with_axis_returns_new_state():
    state = MachineState()
    moved = state.with_axis("a", 30)
    assert moved.a == 30.0
    assert state.a == 0.0
    assert moved["a"] == moved[Axis.A] == 30.0


def test_custom_limits_lookup():
    limits = MachineLimits(z=AxisLimit(5.0, 20.0))
    assert limits["z"].clamp(0.0) == 5.0
    with pytest.raises(KeyError):
        limits["q"]
