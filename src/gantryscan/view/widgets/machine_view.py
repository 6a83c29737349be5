"""
3D Visualization Widget (PyVista Wrapper)
"""

from __future__ import annotations

from typing import Optional

import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QFrame, QStyle
)
from PySide6.QtGui import QCloseEvent, QResizeEvent

from pyvistaqt import QtInteractor
import pyvista as pv

from gantryscan import config
from gantryscan.model.rig import rig_transforms
from gantryscan.model.state import MachineLimits, MachineState
from gantryscan.view.widgets.grid_manager import GridManager
from gantryscan.view.widgets.scene_parts import (
    ScenePart, build_scene_parts, ROLE_FRUSTUM, ROLE_GIZMO, ROLE_SCAN,
    FRUSTUM_OPACITY_IDLE, FRUSTUM_OPACITY_SCANNING
)

logger = logging.getLogger(__name__)


class MachineViewWidget(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Managers ---
        self._grid_manager = GridManager(self.plotter)
        self._grid_manager.build()

        # --- Actors state ---
        self._part_actors: list[tuple[ScenePart, pv.Actor]] = []
        self._build_parts()

        # --- Visibility state ---
        self._visible_figurine: bool = True
        self._visible_gizmos: bool = True
        self._visible_frustum: bool = True
        self._is_scanning: bool = False

        self._setup_overlay_controls()
        self.reset_camera()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def update_scene(
        self,
        state: MachineState,
        limits: MachineLimits,
        is_scanning: bool = False,
        elapsed: float = 0.0,
        render: bool = True
    ) -> None:
        """
        Moves every rig group to the pose implied by `state` and applies the
        scanning-only visuals (beam, scan sphere, brighter frustum).
        """
        self._is_scanning = is_scanning
        try:
            transforms = rig_transforms(state, limits, is_scanning=is_scanning, elapsed=elapsed)
            for part, actor in self._part_actors:
                actor.user_matrix = transforms[part.group] @ part.local
                if part.role == ROLE_FRUSTUM:
                    actor.prop.opacity = FRUSTUM_OPACITY_SCANNING if is_scanning else FRUSTUM_OPACITY_IDLE
            self._apply_visibility()
        except Exception:
            logger.exception("Failed to update machine scene for %s", state)
            return

        if render:
            self.plotter.render()

    def reset_camera(self) -> None:
        cam = self.plotter.camera
        cam.position = config.CAMERA_POSITION
        cam.focal_point = config.CAMERA_FOCAL_POINT
        cam.up = config.CAMERA_VIEW_UP
        cam.view_angle = config.CAMERA_VIEW_ANGLE
        self.plotter.reset_camera_clipping_range()
        self.plotter.render()

    def set_gizmos_visible(self, visible: bool, render: bool = True) -> None:
        """
        Public slot to toggle the laser/camera axis gizmos.
        Args:
            visible: True to show, False to hide.
            render: If True, triggers a re-render immediately. Set False for batch updates.
        """
        self._visible_gizmos = visible
        if self.btn_vis_gizmo.isChecked() != visible:
            self.btn_vis_gizmo.blockSignals(True)
            self.btn_vis_gizmo.setChecked(visible)
            self.btn_vis_gizmo.blockSignals(False)

        self._apply_visibility()
        if render:
            self.plotter.render()

    def set_grid_visible(self, visible: bool, render: bool = True) -> None:
        """Public slot to toggle the floor grid."""
        self._grid_manager.set_visible(visible)
        if render:
            self.plotter.render()

    def set_frustum_visible(self, visible: bool, render: bool = True) -> None:
        """Public slot to toggle the camera frustum."""
        self._visible_frustum = visible
        if self.btn_vis_frustum.isChecked() != visible:
            self.btn_vis_frustum.blockSignals(True)
            self.btn_vis_frustum.setChecked(visible)
            self.btn_vis_frustum.blockSignals(False)

        self._apply_visibility()
        if render:
            self.plotter.render()

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _build_parts(self) -> None:
        """Adds one actor per scene part. Actors are moved later via user_matrix."""
        for part in build_scene_parts():
            actor = self.plotter.add_mesh(
                part.mesh,
                color=part.color,
                opacity=part.opacity,
                style=part.style,
                lighting=part.lighting,
                pickable=False,
                show_scalar_bar=False,
                reset_camera=False,
            )
            self._part_actors.append((part, actor))
        logger.debug("Scene built with %d parts.", len(self._part_actors))

    def _apply_visibility(self) -> None:
        """Applies visibility states to all layers."""
        for part, actor in self._part_actors:
            if part.role == ROLE_SCAN:
                visible = self._is_scanning
            elif part.role == ROLE_GIZMO:
                visible = self._visible_gizmos
            elif part.role == ROLE_FRUSTUM:
                visible = self._visible_frustum
            elif part.group == "figurine":
                visible = self._visible_figurine
            else:
                visible = True
            actor.SetVisibility(visible)

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background(config.BACKGROUND_COLOR)
        light = pv.Light(position=(10.0, 20.0, 5.0), focal_point=(0.0, 0.0, 0.0), intensity=0.6)
        self.plotter.add_light(light)

    def _setup_overlay_controls(self) -> None:
        """Floating toggle buttons."""
        self.overlay_widget = QFrame(self)
        self.overlay_widget.setStyleSheet("""
            QFrame { background-color: rgba(255, 255, 255, 200); border-radius: 6px; border: 1px solid #ccc; }
            QPushButton { background-color: transparent; border: none; padding: 4px; }
            QPushButton:checked { background-color: rgba(0, 120, 215, 50); border: 1px solid #0078D7; border-radius: 3px; }
            QPushButton:hover { background-color: rgba(0, 0, 0, 10); }
        """)

        layout = QHBoxLayout(self.overlay_widget)
        layout.setContentsMargins(4, 4, 4, 4)

        def make_btn(icon, slot, tooltip, default_state=True):
            btn = QPushButton()
            btn.setIcon(self.style().standardIcon(icon))
            btn.setCheckable(True)
            btn.setChecked(default_state)
            btn.setToolTip(tooltip)
            btn.toggled.connect(slot)
            layout.addWidget(btn)
            return btn

        self.btn_vis_figurine = make_btn(QStyle.SP_FileIcon, self.on_toggle_figurine, "Show scan object")
        self.btn_vis_gizmo = make_btn(QStyle.SP_FileDialogListView, self.on_toggle_gizmos, "Show axis gizmos")
        self.btn_vis_frustum = make_btn(QStyle.SP_DesktopIcon, self.on_toggle_frustum, "Show camera frustum")

        btn_home = QPushButton()
        btn_home.setIcon(self.style().standardIcon(QStyle.SP_BrowserReload))
        btn_home.setToolTip("Reset camera")
        btn_home.clicked.connect(self.reset_camera)
        layout.addWidget(btn_home)

        self.overlay_widget.adjustSize()
        self.overlay_widget.move(10, 10)

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self.overlay_widget.raise_()

    # --- Toggle Slots ---
    def on_toggle_figurine(self, checked: bool) -> None:
        self._visible_figurine = checked
        self._apply_visibility()
        self.plotter.render()

    def on_toggle_gizmos(self, checked: bool) -> None:
        self._visible_gizmos = checked
        self._apply_visibility()
        self.plotter.render()

    def on_toggle_frustum(self, checked: bool) -> None:
        self._visible_frustum = checked
        self._apply_visibility()
        self.plotter.render()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
