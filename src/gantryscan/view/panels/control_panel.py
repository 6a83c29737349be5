from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QLabel, QPushButton, QSlider,
    QDoubleSpinBox, QGridLayout, QStyle
)
from PySide6.QtCore import Qt, Signal

from gantryscan.config import TOOL_LENGTH_OFFSET, VISIBLE_APP_NAME
from gantryscan.controller.scanner import AutoScanner
from gantryscan.controller.store import MachineStore
from gantryscan.model.state import Axis, LINEAR_AXES, ROTARY_AXES
from gantryscan.view.panels.base import BasePanel

logger = logging.getLogger(__name__)

SLIDER_STEPS_PER_UNIT = 10  # 0.1 per slider step

AXIS_LABELS = {
    Axis.X: "X axis (TCP lateral)",
    Axis.Y: "Y axis (TCP longitudinal)",
    Axis.Z: "Z axis (TCP height)",
    Axis.A: "A axis (tilt)",
    Axis.B: "B axis (rotate)",
}

AXIS_COLORS = {
    Axis.X: "#3b82f6",
    Axis.Y: "#06b6d4",
    Axis.Z: "#10b981",
    Axis.A: "#a855f7",
    Axis.B: "#f97316",
}


# ==========================================
# HELPER WIDGETS
# ==========================================

class AxisControl(QWidget):
    """Label + numeric input + slider for one axis. Emits the edited value."""
    value_edited = Signal(float)

    def __init__(self, label: str, unit: str, color: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 6)

        header = QHBoxLayout()
        self.lbl = QLabel(label)
        self.lbl.setStyleSheet("font-weight: bold;")
        header.addWidget(self.lbl)
        header.addStretch()

        # Wide range on purpose: the store clamps, the spin box only parses
        self.spin = QDoubleSpinBox()
        self.spin.setDecimals(2)
        self.spin.setRange(-1e4, 1e4)
        self.spin.setSingleStep(0.1)
        self.spin.setSuffix(f" {unit}")
        self.spin.setKeyboardTracking(False)
        self.spin.setMinimumWidth(100)
        self.spin.valueChanged.connect(self.value_edited.emit)
        header.addWidget(self.spin)
        layout.addLayout(header)

        self.slider = QSlider(Qt.Horizontal)
        self.slider.setStyleSheet(f"QSlider::handle:horizontal {{ background: {color}; }}")
        self.slider.valueChanged.connect(self._on_slider_changed)
        layout.addWidget(self.slider)

    def set_display(self, value: float, minimum: float, maximum: float) -> None:
        """Update value and slider range without emitting `value_edited`."""
        self.spin.blockSignals(True)
        self.slider.blockSignals(True)
        try:
            self.slider.setRange(round(minimum * SLIDER_STEPS_PER_UNIT), round(maximum * SLIDER_STEPS_PER_UNIT))
            self.slider.setValue(round(value * SLIDER_STEPS_PER_UNIT))
            self.spin.setValue(value)
        finally:
            self.spin.blockSignals(False)
            self.slider.blockSignals(False)

    def value(self) -> float:
        return self.spin.value()

    def _on_slider_changed(self, position: int) -> None:
        self.value_edited.emit(position / SLIDER_STEPS_PER_UNIT)


# ==========================================
# MAIN PANEL
# ==========================================

class ControlPanel(BasePanel):
    """
    Manual control surface.

    Linear axes are shown and edited in TCP space (motor + rotational offset);
    the store back-solves the motor value. Rotary axes drive the motors directly.
    """
    def __init__(self, store: MachineStore, scanner: AutoScanner, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)
        self.scanner = scanner
        self.axis_controls: dict[Axis, AxisControl] = {}

        layout = QVBoxLayout(self)

        # --- Header ---
        header = QHBoxLayout()
        title = QLabel(f"<b>{VISIBLE_APP_NAME}</b><br><small>TCP coordinates (Cartesian)</small>")
        header.addWidget(title)
        header.addStretch()
        self.btn_reset = QPushButton()
        self.btn_reset.setIcon(self.style().standardIcon(QStyle.SP_BrowserReload))
        self.btn_reset.setToolTip("Reset axes")
        self.btn_reset.clicked.connect(self.on_reset_clicked)
        header.addWidget(self.btn_reset)
        layout.addLayout(header)

        # --- Scan toggle ---
        self.btn_scan = QPushButton()
        self.btn_scan.setMinimumHeight(40)
        self.btn_scan.clicked.connect(self.scanner.toggle)
        layout.addWidget(self.btn_scan)

        # --- Linear axes (TCP space) ---
        grp_linear = QGroupBox("TCP linear coordinates (XYZ)")
        l_linear = QVBoxLayout(grp_linear)
        for axis in LINEAR_AXES:
            ctrl = self._make_axis_control(axis)
            ctrl.value_edited.connect(lambda v, a=axis: self.store.set_tcp_axis(a, v))
            l_linear.addWidget(ctrl)
        layout.addWidget(grp_linear)

        # --- Gimbal axes (motor space) ---
        grp_gimbal = QGroupBox("Gimbal attitude (AB)")
        l_gimbal = QVBoxLayout(grp_gimbal)
        for axis in ROTARY_AXES:
            ctrl = self._make_axis_control(axis)
            ctrl.value_edited.connect(lambda v, a=axis: self.store.set_axis(a, v))
            l_gimbal.addWidget(ctrl)
        layout.addWidget(grp_gimbal)

        # --- Status ---
        grp_status = QGroupBox("System status")
        grid = QGridLayout(grp_status)
        grid.addWidget(QLabel("Mode:"), 0, 0)
        self.lbl_mode = QLabel()
        grid.addWidget(self.lbl_mode, 0, 1)
        grid.addWidget(QLabel("Safety monitor:"), 1, 0)
        self.lbl_safety = QLabel("Normal")
        self.lbl_safety.setStyleSheet("color: #10b981; font-weight: bold;")
        grid.addWidget(self.lbl_safety, 1, 1)
        layout.addWidget(grp_status)

        self.lbl_hint = QLabel(
            f"TCP mode enabled. Linear values are compensated for the tool length "
            f"({TOOL_LENGTH_OFFSET:g} mm) and match the matrix readout."
        )
        self.lbl_hint.setWordWrap(True)
        self.lbl_hint.setStyleSheet(
            "QLabel { padding: 5px; color: #2563eb; background-color: rgba(59,130,246,25); border-radius: 3px; }"
        )
        layout.addWidget(self.lbl_hint)

        layout.addStretch()

        self.store.tcp_clamped.connect(self.on_tcp_clamped)
        self.refresh()

    def _make_axis_control(self, axis: Axis) -> AxisControl:
        ctrl = AxisControl(AXIS_LABELS[axis], axis.unit, AXIS_COLORS[axis])
        self.axis_controls[axis] = ctrl
        return ctrl

    def refresh(self) -> None:
        state = self.store.state
        self.clear_limit_warning()
        limits = self.store.limits
        offset = self.store.offset()

        for i, axis in enumerate(LINEAR_AXES):
            d = float(offset[i])
            self.axis_controls[axis].set_display(state[axis] + d, limits[axis].min + d, limits[axis].max + d)
        for axis in ROTARY_AXES:
            self.axis_controls[axis].set_display(state[axis], limits[axis].min, limits[axis].max)

        if self.store.is_scanning:
            self.btn_scan.setText("Stop auto scan")
            self.btn_scan.setIcon(self.style().standardIcon(QStyle.SP_MediaPause))
            self.lbl_mode.setText("<b style='color:#8b5cf6'>Auto scan</b>")
        else:
            self.btn_scan.setText("Start auto scan")
            self.btn_scan.setIcon(self.style().standardIcon(QStyle.SP_MediaPlay))
            self.lbl_mode.setText("<b>Manual</b>")

    def on_reset_clicked(self) -> None:
        self.store.reset()

    def on_tcp_clamped(self, solution) -> None:
        # The motor may already sit at its limit, in which case no
        # state_changed arrives and the input still shows the request
        self.refresh()
        self.lbl_safety.setText(f"Limit reached on {solution.axis.upper()}")
        self.lbl_safety.setStyleSheet("color: #f59e0b; font-weight: bold;")
        self.lbl_safety.setToolTip(
            f"Requested {solution.requested:.2f}, reached {solution.realized:.2f}"
        )

    def clear_limit_warning(self) -> None:
        self.lbl_safety.setText("Normal")
        self.lbl_safety.setStyleSheet("color: #10b981; font-weight: bold;")
        self.lbl_safety.setToolTip("")
