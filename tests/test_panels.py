"""
Headless widget tests for the control surface and the kinematics readout.
"""
import pytest

from gantryscan.model.kinematics import tool_offset
from gantryscan.model.state import Axis
from gantryscan.view.panels.control_panel import ControlPanel, SLIDER_STEPS_PER_UNIT
from gantryscan.view.panels.matrix_panel import CoordinateReadout, MatrixPanel, format_delta


@pytest.fixture
def control_panel(store, scanner):
    return ControlPanel(store, scanner)


@pytest.fixture
def matrix_panel(store):
    return MatrixPanel(store)


@pytest.mark.parametrize("value, expected", [
    (17.677669, "+17.7"),
    (7.3223, "+7.3"),
    (0.0, "0.0"),
    (-3.0, "-3.0"),
    (-0.04, "0.0"),
    (1e-16, "0.0"),
])
def test_format_delta(value, expected):
    assert format_delta(value) == expected


class TestMatrixPanel:

    def cell_texts(self, panel):
        return [[lbl.text() for lbl in row] for row in panel.cells]

    def test_initial_matrix(self, matrix_panel):
        cells = self.cell_texts(matrix_panel)
        assert [row[3] for row in cells[:3]] == ["50.00", "50.00", "10.00"]
        assert cells[3] == ["0.00", "0.00", "0.00", "1.00"]
        assert cells[0][:3] == ["1.00", "0.00", "0.00"]

    def test_bottom_row_fixed_under_rotation(self, store, matrix_panel):
        store.set_axis("a", 33.0)
        store.set_axis("b", -120.0)
        assert self.cell_texts(matrix_panel)[3] == ["0.00", "0.00", "0.00", "1.00"]

    def test_no_rotation_status(self, matrix_panel):
        assert "coincide" in matrix_panel.lbl_status.text()

    def test_rotation_below_threshold_counts_as_zero(self, store, matrix_panel):
        store.set_axis("a", 0.05)
        assert "coincide" in matrix_panel.lbl_status.text()

    def test_rotation_status_shows_deltas(self, store, matrix_panel):
        store.set_axis("a", 45.0)
        text = matrix_panel.lbl_status.text()
        assert "Data synchronised" in text
        assert "ΔX: 0.0" in text
        assert "ΔY: +17.7" in text
        assert "ΔZ: +7.3" in text
        assert self.cell_texts(matrix_panel)[2][3] == "17.32"

    def test_coordinate_readout_shows_motor_position(self, store):
        readout = CoordinateReadout(store)
        store.set_axis("a", 45.0)
        assert readout.values["z"].text() == "10.000"
        assert readout.values["x"].text() == "50.000"


class TestControlPanel:

    def test_linear_axes_show_tcp_values(self, store, control_panel):
        store.set_axis("a", 45.0)
        offset = tool_offset(45.0, 0.0)

        ctrl_y = control_panel.axis_controls[Axis.Y]
        ctrl_z = control_panel.axis_controls[Axis.Z]
        assert ctrl_y.value() == pytest.approx(50.0 + offset[1], abs=0.005)
        assert ctrl_z.value() == pytest.approx(10.0 + offset[2], abs=0.005)

    def test_slider_range_is_shifted_by_offset(self, store, control_panel):
        store.set_axis("a", 45.0)
        offset_z = tool_offset(45.0, 0.0)[2]
        slider = control_panel.axis_controls[Axis.Z].slider
        assert slider.minimum() == round(offset_z * SLIDER_STEPS_PER_UNIT)
        assert slider.maximum() == round((100.0 + offset_z) * SLIDER_STEPS_PER_UNIT)

    def test_rotary_axes_show_motor_values(self, store, control_panel):
        store.set_axis("b", 90.0)
        ctrl_b = control_panel.axis_controls[Axis.B]
        assert ctrl_b.value() == 90.0
        assert ctrl_b.slider.minimum() == -180 * SLIDER_STEPS_PER_UNIT

    def test_spin_edit_writes_tcp_space(self, store, control_panel):
        store.set_axis("a", 45.0)
        control_panel.axis_controls[Axis.Y].spin.setValue(60.0)
        assert store.state.y == pytest.approx(60.0 - tool_offset(45.0, 0.0)[1])

    def test_slider_edit_writes_tcp_space(self, store, control_panel):
        control_panel.axis_controls[Axis.X].slider.setValue(300)
        assert store.state.x == pytest.approx(30.0)

    def test_gimbal_edit_writes_motor_space(self, store, control_panel):
        control_panel.axis_controls[Axis.A].spin.setValue(20.0)
        assert store.state.a == 20.0

    def test_saturated_request_shows_realized_value(self, store, control_panel):
        """Motor Z already at its limit: the request changes no state but the display must still resync."""
        store.set_axis("a", 45.0)
        store.set_axis("z", 0.0)
        realized = tool_offset(45.0, 0.0)[2]
        ctrl = control_panel.axis_controls[Axis.Z]

        ctrl.spin.setValue(-50.0)

        assert store.state.z == 0.0
        assert ctrl.value() == pytest.approx(realized, abs=0.01)
        assert control_panel.lbl_safety.text() == "Limit reached on Z"

    def test_limit_warning_cleared_by_next_change(self, store, control_panel):
        store.set_axis("a", 45.0)
        control_panel.axis_controls[Axis.Z].spin.setValue(-50.0)
        store.set_axis("x", 20.0)
        assert control_panel.lbl_safety.text() == "Normal"

    def test_scan_state_shown(self, scanner, control_panel):
        assert control_panel.btn_scan.text() == "Start auto scan"
        scanner.start()
        assert control_panel.btn_scan.text() == "Stop auto scan"
        assert "Auto scan" in control_panel.lbl_mode.text()
        scanner.stop()
        assert "Manual" in control_panel.lbl_mode.text()
