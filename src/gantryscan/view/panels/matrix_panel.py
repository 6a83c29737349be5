"""
Kinematics Readout
==================
Shows the TCP pose (relative to home) as a 4x4 matrix, the motor/TCP
compensation and the raw motor position (heads-up coordinates).
"""
from __future__ import annotations

from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QGroupBox, QLabel, QHBoxLayout
from PySide6.QtCore import Qt
from PySide6.QtGui import QFont

from gantryscan.config import ROTATION_NOTICE_THRESHOLD
from gantryscan.controller.store import MachineStore
from gantryscan.model.kinematics import state_pose, format_matrix, motor_tcp_difference
from gantryscan.model.state import LINEAR_AXES
from gantryscan.view.panels.base import BasePanel

ROTATION_COLOR = "#c2410c"
TRANSLATION_COLOR = "#0e7490"
FIXED_ROW_COLOR = "#94a3b8"


def _mono_font() -> QFont:
    font = QFont("Monospace")
    font.setStyleHint(QFont.TypeWriter)
    return font


def format_delta(value: float) -> str:
    """Signed, one decimal (e.g. '+17.7', '-3.0', '0.0')."""
    value = round(value, 1) or 0.0  # no '-0.0'
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.1f}"


class MatrixPanel(BasePanel):
    def __init__(self, store: MachineStore, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        grp = QGroupBox("Kinematic transform matrix (TCP)")
        l_grp = QVBoxLayout(grp)

        grid = QGridLayout()
        grid.setHorizontalSpacing(16)
        self.cells: list[list[QLabel]] = []
        font = _mono_font()
        for row in range(4):
            row_labels = []
            for col in range(4):
                lbl = QLabel()
                lbl.setFont(font)
                lbl.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
                if row == 3:
                    color = FIXED_ROW_COLOR
                elif col == 3:
                    color = TRANSLATION_COLOR
                else:
                    color = ROTATION_COLOR
                weight = "bold" if col == 3 and row < 3 else "normal"
                lbl.setStyleSheet(f"color: {color}; font-weight: {weight};")
                grid.addWidget(lbl, row, col)
                row_labels.append(lbl)
            self.cells.append(row_labels)
        l_grp.addLayout(grid)

        self.lbl_status = QLabel()
        self.lbl_status.setWordWrap(True)
        self.lbl_status.setTextFormat(Qt.RichText)
        self.lbl_status.setStyleSheet("QLabel { padding: 5px; background-color: rgba(0,0,0,10); border-radius: 3px; }")
        l_grp.addWidget(self.lbl_status)

        layout.addWidget(grp)
        self.refresh()

    def refresh(self) -> None:
        state = self.store.state
        rows = format_matrix(state_pose(state))
        # Bottom row of a homogeneous transform is fixed
        rows[3] = ["0.00", "0.00", "0.00", "1.00"]
        for r, row in enumerate(rows):
            for c, text in enumerate(row):
                self.cells[r][c].setText(text)

        has_rotation = abs(state.a) > ROTATION_NOTICE_THRESHOLD or abs(state.b) > ROTATION_NOTICE_THRESHOLD
        if has_rotation:
            diff = motor_tcp_difference(state)
            deltas = "&nbsp;&nbsp;".join(
                f"Δ{axis.value.upper()}: {format_delta(float(d))}" for axis, d in zip(LINEAR_AXES, diff)
            )
            self.lbl_status.setText(
                "<b style='color:#059669'>Data synchronised</b><br>"
                "The console shows TCP coordinates. Tool offset compensated:<br>"
                f"<tt>{deltas}</tt>"
            )
        else:
            self.lbl_status.setText("A/B axes at zero. Motor and TCP coordinates coincide.")


class CoordinateReadout(BasePanel):
    """Heads-up display of the raw motor position."""

    def __init__(self, store: MachineStore, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        font = _mono_font()

        self.values: dict[str, QLabel] = {}
        colors = {"x": "#2563eb", "y": "#0891b2", "z": "#059669"}
        for axis in LINEAR_AXES:
            name = QLabel(f"<b>POS.{axis.value.upper()}</b>")
            name.setFont(font)
            value = QLabel()
            value.setFont(font)
            value.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
            value.setMinimumWidth(80)
            value.setStyleSheet(f"color: {colors[axis.value]};")
            layout.addWidget(name)
            layout.addWidget(value)
            self.values[axis.value] = value
        layout.addStretch()
        self.refresh()

    def refresh(self) -> None:
        state = self.store.state
        for axis in LINEAR_AXES:
            self.values[axis.value].setText(f"{state[axis]:.3f}")
