"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the control panel and the
3D machine view.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the store and the scanner to the view, so the scene
   and the readouts redraw whenever the machine state changes.
"""
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QLabel, QHBoxLayout, QMessageBox
)
from PySide6.QtCore import Qt, QSettings, QByteArray
from PySide6.QtGui import QAction

from gantryscan.config import VISIBLE_APP_NAME, MODEL_NAME
from gantryscan.controller.scanner import AutoScanner
from gantryscan.controller.store import MachineStore
from gantryscan.view.panels.control_panel import ControlPanel
from gantryscan.view.panels.matrix_panel import MatrixPanel, CoordinateReadout
from gantryscan.view.widgets.machine_view import MachineViewWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, store: MachineStore, scanner: AutoScanner) -> None:
        super().__init__()
        self.store: MachineStore = store
        self.scanner: AutoScanner = scanner

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # --- MAIN CONTAINER ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.control_panel = ControlPanel(self.store, self.scanner)
        self.control_panel.setMinimumWidth(320)
        splitter.addWidget(self.control_panel)

        # --- RIGHT SIDE: HUD + 3D View + Matrix ---
        right = QWidget()
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)
        right_layout.setSpacing(0)

        top_bar = QHBoxLayout()
        self.readout = CoordinateReadout(self.store)
        top_bar.addWidget(self.readout)
        top_bar.addStretch()
        lbl_model = QLabel(f"<b>{VISIBLE_APP_NAME.upper()}</b><br><small>{MODEL_NAME}</small>")
        lbl_model.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        lbl_model.setStyleSheet("QLabel { color: #64748b; padding-right: 8px; }")
        top_bar.addWidget(lbl_model)
        right_layout.addLayout(top_bar)

        self.visualizer = MachineViewWidget()
        right_layout.addWidget(self.visualizer, 1)

        self.matrix_panel = MatrixPanel(self.store)
        right_layout.addWidget(self.matrix_panel)

        splitter.addWidget(right)
        splitter.setSizes([350, 1050])

        # --- SIGNAL CONNECTIONS ---
        self.store.state_changed.connect(lambda _state: self.update_visualization())
        self.store.scanning_changed.connect(lambda _scanning: self.update_visualization())

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()
        self.store.scanning_changed.connect(self._sync_scan_action)

        self._restore_geometry()

        # Initial Render
        self.update_visualization()

    def _create_actions(self) -> None:
        # Machine Actions
        self.act_scan = QAction("Start Auto Scan", self)
        self.act_scan.setShortcut("F5")
        self.act_scan.triggered.connect(self.scanner.toggle)

        self.act_reset = QAction("Reset Axes", self)
        self.act_reset.setShortcut("Ctrl+R")
        self.act_reset.triggered.connect(self.store.reset)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        # View Actions
        self.act_reset_camera = QAction("Reset Camera", self)
        self.act_reset_camera.triggered.connect(self.visualizer.reset_camera)

        self.act_gizmos = QAction("Axis Gizmos", self)
        self.act_gizmos.setCheckable(True)
        self.act_gizmos.setChecked(True)
        self.act_gizmos.toggled.connect(self.visualizer.set_gizmos_visible)

        self.act_frustum = QAction("Camera Frustum", self)
        self.act_frustum.setCheckable(True)
        self.act_frustum.setChecked(True)
        self.act_frustum.toggled.connect(self.visualizer.set_frustum_visible)

        self.act_grid = QAction("Floor Grid", self)
        self.act_grid.setCheckable(True)
        self.act_grid.setChecked(True)
        self.act_grid.toggled.connect(self.visualizer.set_grid_visible)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        machine_menu = menu_bar.addMenu("&Machine")
        machine_menu.addAction(self.act_scan)
        machine_menu.addAction(self.act_reset)
        machine_menu.addSeparator()
        machine_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_reset_camera)
        view_menu.addSeparator()
        view_menu.addAction(self.act_gizmos)
        view_menu.addAction(self.act_frustum)
        view_menu.addAction(self.act_grid)

    # --- HELPER METHODS ---

    def _sync_scan_action(self, scanning: bool) -> None:
        self.act_scan.setText("Stop Auto Scan" if scanning else "Start Auto Scan")

    def update_visualization(self) -> None:
        self.visualizer.update_scene(
            self.store.state,
            self.store.limits,
            is_scanning=self.store.is_scanning,
            elapsed=self.scanner.elapsed,
        )

    def _restore_geometry(self) -> None:
        geometry = QSettings().value("ui/window_geometry")
        if isinstance(geometry, QByteArray) and not geometry.isEmpty():
            self.restoreGeometry(geometry)

    def closeEvent(self, event, /) -> None:
        """Stop the scan timer and release the render window before closing."""
        self.scanner.stop()
        QSettings().setValue("ui/window_geometry", self.saveGeometry())

        try:
            if self.visualizer and self.visualizer.plotter:
                self.visualizer.plotter.close()
        except Exception as e:
            logger.exception("Failed to close the 3D view")
            QMessageBox.critical(self, "Error", f"Failed to close the 3D view:\n{e}")

        event.accept()
