"""
Rig Layout
==========
Maps a MachineState to world transforms of the moving parts of the scene.

The scene world is Y-up (the machine Z axis is vertical in world Y). Each
moving group is nested in the previous one:

    gantry (Y) -> carriage (X) -> head (Z) -> effector -> gimbal B -> gimbal A
                                                          -> tool / camera

The view attaches meshes to these groups; nothing here touches PyVista.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from gantryscan import config
from gantryscan.model.kinematics import translation, rotation_x, rotation_y, scaling
from gantryscan.model.state import MachineLimits, MachineState, DEFAULT_LIMITS
from gantryscan.utils import map_range

if TYPE_CHECKING:
    import numpy.typing as npt

RIG_GROUPS = (
    "world",
    "figurine",
    "gantry",
    "carriage",
    "head",
    "gimbal_b",
    "gimbal_a",
    "tool",
    "laser_gizmo",
    "camera",
    "camera_gizmo",
)

CARRIAGE_OFFSET_Z = 0.8
HEAD_OFFSET_Z = 0.5
EFFECTOR_OFFSET = (0.0, -1.8, 0.8)
TOOL_OFFSET = (0.0, -1.0, 0.0)
CAMERA_OFFSET = (0.4, -0.5, 0.0)
LENS_OFFSET = (0.1, -0.16, 0.0)
GIZMO_SCALE = 0.3


def world_position(state: MachineState, limits: MachineLimits = DEFAULT_LIMITS) -> tuple[float, float, float]:
    """Scene coordinates of carriage X, gantry Y and head height for a state."""
    out_min, out_max = config.WORLD_XY_RANGE
    head_top, head_bottom = config.WORLD_HEAD_RANGE
    pos_x = map_range(state.x, limits.x.min, limits.x.max, out_min, out_max)
    pos_y = map_range(state.y, limits.y.min, limits.y.max, out_min, out_max)
    head_y = map_range(state.z, limits.z.min, limits.z.max, head_top, head_bottom)
    return pos_x, pos_y, head_y


def figurine_scale(is_scanning: bool, elapsed: float = 0.0) -> float:
    """Figurine scale, with a subtle breathing pulse while scanning."""
    if not is_scanning:
        return config.FIGURINE_SCALE
    return config.FIGURINE_SCALE + math.sin(elapsed * config.FIGURINE_BREATH_FREQUENCY) * config.FIGURINE_BREATH_AMPLITUDE


def rig_transforms(
    state: MachineState,
    limits: MachineLimits = DEFAULT_LIMITS,
    is_scanning: bool = False,
    elapsed: float = 0.0
) -> dict[str, npt.NDArray[np.float64]]:
    """World matrix of every rig group, keyed by the names in RIG_GROUPS."""
    pos_x, pos_y, head_y = world_position(state, limits)
    carriage_height = config.GANTRY_HEIGHT - 0.5

    out: dict[str, npt.NDArray[np.float64]] = {
        "world": np.eye(4),
        "figurine": scaling(figurine_scale(is_scanning, elapsed)),
    }
    # Gantry rides the rails along world Z
    out["gantry"] = translation(0.0, 0.0, pos_y)
    out["carriage"] = out["gantry"] @ translation(pos_x, carriage_height, CARRIAGE_OFFSET_Z)
    out["head"] = out["carriage"] @ translation(0.0, head_y - carriage_height, HEAD_OFFSET_Z)

    effector = out["head"] @ translation(*EFFECTOR_OFFSET)
    out["gimbal_b"] = effector @ rotation_y(math.radians(state.b))
    out["gimbal_a"] = out["gimbal_b"] @ rotation_x(math.radians(state.a))

    out["tool"] = out["gimbal_a"] @ translation(*TOOL_OFFSET)
    # Gizmos: local Z turned to point down, like the scan direction
    out["laser_gizmo"] = out["tool"] @ translation(0.0, 0.2, 0.0) @ rotation_x(math.pi / 2) @ scaling(GIZMO_SCALE)
    out["camera"] = out["gimbal_a"] @ translation(*CAMERA_OFFSET)
    out["camera_gizmo"] = out["camera"] @ translation(*LENS_OFFSET) @ rotation_x(math.pi / 2) @ scaling(GIZMO_SCALE)
    return out
