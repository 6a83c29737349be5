"""
Auto-Scan Orbit
===============
Canned parametric path used by the demo scan mode. The head circles the
figurine at a fixed radius, bobs up and down, keeps the tool slightly tilted
and turns B so it always faces the centre of the orbit.

This is not a path planner: the state is a pure function of elapsed time.
"""
from __future__ import annotations

from dataclasses import dataclass
import math

from gantryscan import config
from gantryscan.model.state import MachineLimits, MachineState, DEFAULT_LIMITS


@dataclass(frozen=True)
class OrbitParams:
    center_x: float = config.SCAN_CENTER_X
    center_y: float = config.SCAN_CENTER_Y
    radius: float = config.SCAN_RADIUS
    angular_speed: float = config.SCAN_ANGULAR_SPEED
    height_base: float = config.SCAN_HEIGHT_BASE
    height_amplitude: float = config.SCAN_HEIGHT_AMPLITUDE
    height_frequency: float = config.SCAN_HEIGHT_FREQUENCY
    tilt_base: float = config.SCAN_TILT_BASE
    tilt_amplitude: float = config.SCAN_TILT_AMPLITUDE
    tilt_frequency: float = config.SCAN_TILT_FREQUENCY


DEFAULT_ORBIT = OrbitParams()


def look_at_heading(x: float, y: float, target_x: float, target_y: float) -> float:
    """B angle (deg) that turns the head from (x, y) toward the target."""
    return math.degrees(math.atan2(target_x - x, target_y - y))


def orbit_state(
    t: float,
    params: OrbitParams = DEFAULT_ORBIT,
    limits: MachineLimits = DEFAULT_LIMITS
) -> MachineState:
    """Machine state on the orbit `t` seconds after the scan started, clamped."""
    angle = t * params.angular_speed
    x = params.center_x + math.cos(angle) * params.radius
    y = params.center_y + math.sin(angle) * params.radius
    z = params.height_base + math.sin(t * params.height_frequency) * params.height_amplitude

    b = look_at_heading(x, y, params.center_x, params.center_y)
    a = params.tilt_base + math.sin(t * params.tilt_frequency) * params.tilt_amplitude

    return MachineState(x=x, y=y, z=z, a=a, b=b).clamped(limits)
