"""
Machine State (Data Model)
==========================
This module defines the axis values of the simulated gantry and their limits.

Why is this file needed?
------------------------
1. State Management: It holds the five motor coordinates in one place.
2. Safety: Every value is clamped against the configured axis limits before
   it is stored, whichever input path produced it.
3. Decoupling: The store writes instances of these classes, the views and the
   kinematics only read them.

Classes:
    Axis: Names of the five machine axes.
    AxisLimit: Inclusive (min, max) bound of one axis.
    MachineLimits: Immutable set of limits for all five axes.
    MachineState: The five motor coordinates.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from gantryscan.utils import clamp


class Axis(str, Enum):
    X = "x"
    Y = "y"
    Z = "z"
    A = "a"  # Tilt
    B = "b"  # Rotate

    @property
    def is_linear(self) -> bool:
        return self in LINEAR_AXES

    @property
    def unit(self) -> str:
        return "mm" if self.is_linear else "deg"


LINEAR_AXES: tuple[Axis, ...] = (Axis.X, Axis.Y, Axis.Z)
ROTARY_AXES: tuple[Axis, ...] = (Axis.A, Axis.B)

AxisKey = Union[Axis, str]


def as_axis(key: AxisKey) -> Axis:
    """Resolve 'x' / Axis.X to Axis.X. Unknown names raise KeyError."""
    try:
        return Axis(key)
    except ValueError:
        raise KeyError(f"Unknown axis '{key}'.") from None


@dataclass(frozen=True)
class AxisLimit:
    min: float
    max: float

    def clamp(self, value: float) -> float:
        return clamp(value, self.min, self.max)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class MachineLimits:
    """Axis name -> AxisLimit. One instance is shared by the whole app."""
    x: AxisLimit = AxisLimit(0.0, 100.0)
    y: AxisLimit = AxisLimit(0.0, 100.0)
    z: AxisLimit = AxisLimit(0.0, 100.0)
    a: AxisLimit = AxisLimit(-45.0, 45.0)
    b: AxisLimit = AxisLimit(-180.0, 180.0)

    def __getitem__(self, key: AxisKey) -> AxisLimit:
        return getattr(self, as_axis(key).value)


@dataclass(frozen=True)
class MachineState:
    """
    Motor-space coordinates.
    x, y, z: linear position (0-100 machine units).
    a: tilt in degrees. b: rotation in degrees.
    """
    x: float = 50.0
    y: float = 50.0
    z: float = 10.0
    a: float = 0.0
    b: float = 0.0

    def __getitem__(self, key: AxisKey) -> float:
        return getattr(self, as_axis(key).value)

    def with_axis(self, key: AxisKey, value: float) -> MachineState:
        return replace(self, **{as_axis(key).value: float(value)})

    def clamped(self, limits: MachineLimits) -> MachineState:
        return MachineState(**{axis.value: limits[axis].clamp(self[axis]) for axis in Axis})

    def is_within(self, limits: MachineLimits) -> bool:
        return all(limits[axis].contains(self[axis]) for axis in Axis)

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        return self.x, self.y, self.z, self.a, self.b


DEFAULT_LIMITS = MachineLimits()
# Z starts low in machine units, which keeps the head high above the figurine
INITIAL_STATE = MachineState(x=50.0, y=50.0, z=10.0, a=0.0, b=0.0)
HOME_STATE = MachineState(x=0.0, y=0.0, z=0.0, a=0.0, b=0.0)
