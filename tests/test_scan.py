import math

import pytest

from gantryscan.model.scan import DEFAULT_ORBIT, OrbitParams, look_at_heading, orbit_state
from gantryscan.model.state import DEFAULT_LIMITS, AxisLimit, MachineLimits


def test_look_at_heading():
    assert look_at_heading(50, 10, 50, 50) == pytest.approx(0.0)
    assert look_at_heading(10, 50, 50, 50) == pytest.approx(90.0)
    assert look_at_heading(90, 50, 50, 50) == pytest.approx(-90.0)
    assert abs(look_at_heading(50, 90, 50, 50)) == pytest.approx(180.0)


def test_orbit_start():
    state = orbit_state(0.0)
    assert state.x == pytest.approx(DEFAULT_ORBIT.center_x + DEFAULT_ORBIT.radius)
    assert state.y == pytest.approx(DEFAULT_ORBIT.center_y)
    assert state.z == pytest.approx(DEFAULT_ORBIT.height_base)
    assert state.a == pytest.approx(DEFAULT_ORBIT.tilt_base)
    assert state.b == pytest.approx(-90.0)


def test_orbit_keeps_radius_and_faces_centre():
    for step in range(1, 50):
        t = step * 0.37
        state = orbit_state(t)
        dx = state.x - DEFAULT_ORBIT.center_x
        dy = state.y - DEFAULT_ORBIT.center_y
        assert math.hypot(dx, dy) == pytest.approx(DEFAULT_ORBIT.radius)
        assert state.b == pytest.approx(look_at_heading(state.x, state.y, 50, 50))


def test_orbit_stays_within_limits():
    for step in range(200):
        assert orbit_state(step * 0.1).is_within(DEFAULT_LIMITS)


def test_orbit_is_clamped_to_given_limits():
    limits = MachineLimits(x=AxisLimit(0.0, 60.0))
    params = OrbitParams(radius=45.0)
    assert orbit_state(0.0, params, limits).x == 60.0


def test_orbit_is_pure_function_of_time():
    assert orbit_state(3.21) == orbit_state(3.21)
