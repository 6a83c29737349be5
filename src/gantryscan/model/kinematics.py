"""
Forward Kinematics & TCP Offset
===============================
Converts motor-space axis values into the tool-center-point (TCP) pose and
back-solves motor coordinates for a requested TCP position.

Conventions
-----------
* Right-handed frame, Z up in machine space.
* B rotates about the vertical Z axis. The controller's B is a compass value
  (increasing B turns left), so the math rotation uses -B.
* A tilts about the gimbal's local X axis.
* Chain: M = T(x, y, z) . Rb . Ra . Tool, with Tool = T(0, 0, -L).
  Tool is applied first in local space, then tilted by A, then turned by B,
  then translated by the base position.
* Matrices are numpy (4, 4) arrays indexed [row, col]. `pose_elements`
  flattens them column-major (translation at indices 12, 13, 14).

Changing the order or the sign of B desynchronizes the readout panel and the
3D scene.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from gantryscan.config import TOOL_LENGTH_OFFSET, ZERO_EPSILON, DISPLAY_DECIMALS
from gantryscan.model.state import MachineLimits, MachineState, AxisKey, as_axis, LINEAR_AXES, HOME_STATE

if TYPE_CHECKING:
    import numpy.typing as npt


# ------------------------------------------------------------------------------
# Elementary transforms
# ------------------------------------------------------------------------------

def translation(x: float, y: float, z: float) -> npt.NDArray[np.float64]:
    mat = np.eye(4)
    mat[:3, 3] = (x, y, z)
    return mat


def rotation_x(angle: float) -> npt.NDArray[np.float64]:
    """Rotation about X by `angle` radians."""
    c, s = np.cos(angle), np.sin(angle)
    mat = np.eye(4)
    mat[1:3, 1:3] = ((c, -s), (s, c))
    return mat


def rotation_y(angle: float) -> npt.NDArray[np.float64]:
    """Rotation about Y by `angle` radians."""
    c, s = np.cos(angle), np.sin(angle)
    mat = np.eye(4)
    mat[0, 0], mat[0, 2] = c, s
    mat[2, 0], mat[2, 2] = -s, c
    return mat


def rotation_z(angle: float) -> npt.NDArray[np.float64]:
    """Rotation about Z by `angle` radians."""
    c, s = np.cos(angle), np.sin(angle)
    mat = np.eye(4)
    mat[0:2, 0:2] = ((c, -s), (s, c))
    return mat


def scaling(factor: float) -> npt.NDArray[np.float64]:
    mat = np.eye(4)
    mat[0, 0] = mat[1, 1] = mat[2, 2] = factor
    return mat


def gimbal_rotation(a: float, b: float) -> npt.NDArray[np.float64]:
    """Rb . Ra for gimbal angles in degrees (B negated, B outer, A inner)."""
    return rotation_z(np.deg2rad(-b)) @ rotation_x(np.deg2rad(a))


def tool_vector(tool_length: float = TOOL_LENGTH_OFFSET) -> npt.NDArray[np.float64]:
    """Tool vector in the gimbal's local frame, pointing 'down' (-Z)."""
    return np.array([0.0, 0.0, -tool_length])


# ------------------------------------------------------------------------------
# Forward kinematics
# ------------------------------------------------------------------------------

def tcp_matrix(
    x: float,
    y: float,
    z: float,
    a: float,
    b: float,
    tool_length: float = TOOL_LENGTH_OFFSET
) -> npt.NDArray[np.float64]:
    """Absolute TCP transform M = T . Rb . Ra . Tool."""
    return translation(x, y, z) @ gimbal_rotation(a, b) @ translation(0.0, 0.0, -tool_length)


def forward_kinematics(
    x: float,
    y: float,
    z: float,
    a: float,
    b: float,
    tool_length: float = TOOL_LENGTH_OFFSET
) -> npt.NDArray[np.float64]:
    """
    TCP pose relative to the home pose (0, 0, 0, 0, 0).

    The rotation block is the absolute current rotation (home rotation is
    identity). The translation column is the current TCP position minus the
    home TCP position, so the home state reads as the origin.
    """
    current = tcp_matrix(x, y, z, a, b, tool_length)
    home = tcp_matrix(*HOME_STATE.as_tuple(), tool_length=tool_length)

    # current.t - home.t, grouped as base + (rotated tool - home tool) so that
    # a zero rotation contributes exactly zero displacement
    rotated_tool = current[:3, :3] @ tool_vector(tool_length)
    pose = current.copy()
    pose[:3, 3] = np.array([x, y, z], dtype=np.float64) + (rotated_tool - home[:3, 3])
    return pose


def state_pose(state: MachineState, tool_length: float = TOOL_LENGTH_OFFSET) -> npt.NDArray[np.float64]:
    return forward_kinematics(*state.as_tuple(), tool_length=tool_length)


def pose_elements(pose: npt.NDArray[np.float64]) -> list[float]:
    """The 16 matrix entries in column-major order."""
    return [float(v) for v in np.asarray(pose).flatten(order="F")]


# ------------------------------------------------------------------------------
# Inverse offset
# ------------------------------------------------------------------------------

def tool_offset(a: float, b: float, tool_length: float = TOOL_LENGTH_OFFSET) -> npt.NDArray[np.float64]:
    """
    How far the TCP sits from the raw motor (x, y, z) due to gimbal rotation.

    offset = Rb . (Ra . tool) - tool. Independent of (x, y, z).
    """
    vec = tool_vector(tool_length)
    rotated = gimbal_rotation(a, b)[:3, :3] @ vec
    return rotated - vec


@dataclass(frozen=True)
class TcpSolution:
    """Outcome of a TCP-space write on one linear axis."""
    axis: str
    requested: float
    motor_value: float
    offset: float

    @property
    def realized(self) -> float:
        """TCP coordinate actually reached after clamping."""
        return self.motor_value + self.offset

    @property
    def clamped(self) -> bool:
        return not np.isclose(self.realized, self.requested, rtol=0.0, atol=1e-9)


def solve_tcp_axis(
    key: AxisKey,
    target: float,
    state: MachineState,
    limits: MachineLimits,
    tool_length: float = TOOL_LENGTH_OFFSET
) -> TcpSolution:
    """
    Motor coordinate that puts the TCP at `target` along a linear axis.

    One direct step: the offset only depends on (a, b), so
    motor = target - offset[axis], then clamp into the axis limits.
    """
    axis = as_axis(key)
    if axis not in LINEAR_AXES:
        raise KeyError(f"TCP-space writes are only defined for linear axes, got '{axis.value}'.")

    offset = float(tool_offset(state.a, state.b, tool_length)[LINEAR_AXES.index(axis)])
    motor_value = limits[axis].clamp(target - offset)
    return TcpSolution(axis=axis.value, requested=float(target), motor_value=motor_value, offset=offset)


# ------------------------------------------------------------------------------
# Display helpers
# ------------------------------------------------------------------------------

def clean_value(value: float, eps: float = ZERO_EPSILON) -> float:
    """Treat floating point noise (e.g. 1.2e-16) as exactly zero."""
    return 0.0 if abs(value) < eps else float(value)


def clean_matrix(matrix: npt.NDArray[np.float64], eps: float = ZERO_EPSILON) -> npt.NDArray[np.float64]:
    cleaned = np.array(matrix, dtype=np.float64, copy=True)
    cleaned[np.abs(cleaned) < eps] = 0.0
    return cleaned


def format_value(value: float, decimals: int = DISPLAY_DECIMALS) -> str:
    return f"{clean_value(value):.{decimals}f}"


def format_matrix(matrix: npt.NDArray[np.float64], decimals: int = DISPLAY_DECIMALS) -> list[list[str]]:
    """Rows of display strings, noise-cleaned and rounded."""
    cleaned = clean_matrix(matrix)
    return [[f"{v:.{decimals}f}" for v in row] for row in cleaned]


def motor_tcp_difference(state: MachineState, tool_length: float = TOOL_LENGTH_OFFSET) -> npt.NDArray[np.float64]:
    """TCP minus motor position, i.e. the compensation shown to the operator."""
    pose = state_pose(state, tool_length)
    return pose[:3, 3] - np.array([state.x, state.y, state.z])
