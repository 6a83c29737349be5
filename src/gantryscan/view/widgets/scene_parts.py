"""
Scene Parts
Mesh primitives and the part list of the gantry scene.

Every part is attached to one rig group (see gantryscan.model.rig) and carries
a local matrix relative to that group. The view multiplies the two on every
state change.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

import numpy as np
import pyvista as pv

from gantryscan.config import GANTRY_HEIGHT
from gantryscan.model.kinematics import translation, rotation_x, rotation_z

if TYPE_CHECKING:
    import numpy.typing as npt

ROLE_SOLID = "solid"
ROLE_GIZMO = "gizmo"
ROLE_FRUSTUM = "frustum"
ROLE_SCAN = "scan"  # only shown while scanning

FRUSTUM_OPACITY_IDLE = 0.05
FRUSTUM_OPACITY_SCANNING = 0.15

SKIN_COLOR = "#ea580c"


@dataclass
class ScenePart:
    name: str
    group: str
    mesh: pv.PolyData
    color: str
    local: npt.NDArray[np.float64] = field(default_factory=lambda: np.eye(4))
    opacity: float = 1.0
    style: Optional[str] = None
    role: str = ROLE_SOLID
    lighting: bool = True


class MeshFactory:
    """Primitives centred at the origin, Y up."""

    @staticmethod
    def box(width: float, height: float, depth: float) -> pv.PolyData:
        w, h, d = width / 2, height / 2, depth / 2
        return pv.Box(bounds=(-w, w, -h, h, -d, d))

    @staticmethod
    def cylinder(
        radius: float,
        height: float,
        direction: tuple[float, float, float] = (0.0, 1.0, 0.0),
        resolution: int = 32
    ) -> pv.PolyData:
        return pv.Cylinder(
            center=(0.0, 0.0, 0.0), direction=direction, radius=radius, height=height, resolution=resolution
        )

    @staticmethod
    def cone(
        radius: float,
        height: float,
        direction: tuple[float, float, float] = (0.0, 1.0, 0.0),
        resolution: int = 24,
        capping: bool = True
    ) -> pv.PolyData:
        """Cone whose apex points along `direction`."""
        return pv.Cone(
            center=(0.0, 0.0, 0.0), direction=direction, height=height, radius=radius,
            resolution=resolution, capping=capping
        )

    @staticmethod
    def sphere(radius: float, resolution: int = 24) -> pv.PolyData:
        return pv.Sphere(radius=radius, center=(0.0, 0.0, 0.0),
                         theta_resolution=resolution, phi_resolution=resolution)


def _axis_arrows(group: str) -> list[ScenePart]:
    """Unit XYZ triad (X red, Y green, Z blue) for a gizmo group."""
    parts = []
    axes = (
        ("x", (1.0, 0.0, 0.0), "#ef4444"),
        ("y", (0.0, 1.0, 0.0), "#22c55e"),
        ("z", (0.0, 0.0, 1.0), "#3b82f6"),
    )
    for label, direction, color in axes:
        d = np.asarray(direction)
        parts.append(ScenePart(
            name=f"{group}_{label}_shaft", group=group, color=color, role=ROLE_GIZMO, lighting=False,
            mesh=MeshFactory.cylinder(0.02, 1.0, direction=direction, resolution=12),
            local=translation(*(d * 0.5)),
        ))
        parts.append(ScenePart(
            name=f"{group}_{label}_tip", group=group, color=color, role=ROLE_GIZMO, lighting=False,
            mesh=MeshFactory.cone(0.08, 0.2, direction=direction, resolution=12),
            local=translation(*(d * 1.1)),
        ))
    return parts


def _base_parts() -> list[ScenePart]:
    parts = [
        ScenePart("bed", "world", MeshFactory.box(16, 1, 16), "#cbd5e1", local=translation(0, -0.5, 0)),
    ]
    for side in (6, -6):
        parts.append(ScenePart(
            f"rail_{'r' if side > 0 else 'l'}", "world",
            MeshFactory.cylinder(0.15, 14, direction=(0.0, 0.0, 1.0)), "#94a3b8",
            local=translation(side, 0.1, 0),
        ))
    return parts


def _figurine_parts() -> list[ScenePart]:
    """Blocky dog on a round platform, the static scan target."""
    g = "figurine"
    body_y = 0.2
    head = translation(0, 1.8 + body_y, 1.2)
    parts = [
        ScenePart("platform", g, MeshFactory.cylinder(2.6, 0.2), "#334155", local=translation(0, 0.1, 0)),
        ScenePart("body", g, MeshFactory.box(1.4, 1.2, 2.2), SKIN_COLOR, local=translation(0, 0.8 + body_y, 0)),
        ScenePart("head", g, MeshFactory.box(1, 1, 1), SKIN_COLOR, local=head),
        ScenePart("snout", g, MeshFactory.box(0.6, 0.5, 0.4), "#fed7aa", local=head @ translation(0, -0.1, 0.6)),
        ScenePart("nose", g, MeshFactory.box(0.2, 0.15, 0.1), "#1e293b", local=head @ translation(0, 0, 0.85)),
        ScenePart("tail", g, MeshFactory.box(0.2, 0.8, 0.2), SKIN_COLOR,
                  local=translation(0, 1.2 + body_y, -1.1) @ rotation_x(0.5) @ translation(0, 0.3, 0)),
        ScenePart("scan_sphere", g, MeshFactory.sphere(2.0), "#4ade80", local=translation(0, 1.5, 0),
                  opacity=0.1, style="wireframe", role=ROLE_SCAN, lighting=False),
    ]
    for side in (1, -1):
        parts.append(ScenePart(
            f"ear_{side}", g, MeshFactory.box(0.2, 0.6, 0.4), "#7c2d12",
            local=head @ translation(0.4 * side, 0.6, 0) @ rotation_z(0.2 * side),
        ))
        parts.append(ScenePart(
            f"eye_{side}", g, MeshFactory.sphere(0.08, resolution=12), "black",
            local=head @ translation(0.25 * side, 0.1, 0.51),
        ))
    for i, (lx, lz) in enumerate(((0.5, 0.8), (-0.5, 0.8), (0.5, -0.8), (-0.5, -0.8))):
        parts.append(ScenePart(
            f"leg_{i}", g, MeshFactory.box(0.3, 0.8, 0.3), SKIN_COLOR, local=translation(lx, 0.4 + body_y, lz),
        ))
    return parts


def _machine_parts() -> list[ScenePart]:
    h = GANTRY_HEIGHT
    parts = [
        # Gantry bridge (moves on Y)
        ScenePart("gantry_leg_r", "gantry", MeshFactory.box(0.8, h, 1.5), "#e2e8f0", local=translation(6, h / 2, 0)),
        ScenePart("gantry_leg_l", "gantry", MeshFactory.box(0.8, h, 1.5), "#e2e8f0", local=translation(-6, h / 2, 0)),
        ScenePart("gantry_beam", "gantry", MeshFactory.box(14, 1, 1.5), "#cbd5e1", local=translation(0, h, 0)),
        # Carriage (moves on X)
        ScenePart("carriage", "carriage", MeshFactory.box(1.8, 1.2, 0.5), "#94a3b8"),
        ScenePart("z_column", "carriage", MeshFactory.box(1, 6, 1), "#64748b", local=translation(0, -2, 0.5)),
        # Head (moves on Z)
        ScenePart("z_slide", "head", MeshFactory.box(0.8, 8, 0.8), "#cbd5e1", local=translation(0, 2, 0.5)),
        # B turntable
        ScenePart("turntable", "gimbal_b", MeshFactory.cylinder(0.5, 0.4), "#475569", local=translation(0, 0.2, 0)),
        # Needle laser head (A tilted)
        ScenePart("tool_holder", "tool", MeshFactory.box(0.6, 0.8, 0.6), "#334155", local=translation(0, 0.8, 0)),
        ScenePart("needle", "tool", MeshFactory.cone(0.08, 1.8, direction=(0.0, -1.0, 0.0)), "#e2e8f0"),
        ScenePart("laser_beam", "tool", MeshFactory.cylinder(0.01, 5, resolution=8), "red",
                  local=translation(0, -2.5, 0), opacity=0.6, role=ROLE_SCAN, lighting=False),
        # Side mounted camera
        ScenePart("camera_bracket", "camera", MeshFactory.box(0.3, 0.2, 0.2), "#475569",
                  local=translation(-0.15, 0.5, 0)),
        ScenePart("camera_body", "camera", MeshFactory.box(0.4, 0.6, 0.4), "#0f172a",
                  local=translation(0.1, 0.2, 0)),
        ScenePart("camera_lens", "camera", MeshFactory.cylinder(0.15, 0.1), "#333333",
                  local=translation(0.1, -0.11, 0)),
        ScenePart("camera_glass", "camera", MeshFactory.cylinder(0.1, 0.02), "#10b981",
                  local=translation(0.1, -0.16, 0), lighting=False),
        ScenePart("camera_frustum", "camera", MeshFactory.cone(1.5, 5.5, resolution=4, capping=False), "#10b981",
                  local=translation(0.1, -3, 0), opacity=FRUSTUM_OPACITY_IDLE, role=ROLE_FRUSTUM, lighting=False),
    ]
    parts.extend(_axis_arrows("laser_gizmo"))
    parts.extend(_axis_arrows("camera_gizmo"))
    return parts


def build_scene_parts() -> list[ScenePart]:
    """All parts of the scene, static and moving."""
    return _base_parts() + _figurine_parts() + _machine_parts()
