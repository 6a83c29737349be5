"""
Machine Store
=============
Owns the running MachineState and funnels every write through one place.

Why is this file needed?
------------------------
1. Clamping: Manual slider input, TCP-space input and scan frames all pass
   through the same methods, which clamp against the axis limits.
2. Arbitration: A manual edit cancels the auto scan before it is applied, so
   the human always wins over the per-frame writer.
3. Sync: Views connect to the signals and never mutate the state themselves.
"""
from __future__ import annotations

import logging
import math
import numbers

from PySide6.QtCore import QObject, Signal

from gantryscan.model.kinematics import TcpSolution, solve_tcp_axis, tool_offset
from gantryscan.model.state import (
    AxisKey, MachineLimits, MachineState, DEFAULT_LIMITS, INITIAL_STATE, as_axis
)

logger = logging.getLogger(__name__)


def _is_number(value) -> bool:
    """Finite real number. None, text and NaN/inf are malformed input."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


class MachineStore(QObject):
    """Central machine state with signals for panel/scene sync."""
    state_changed = Signal(object)  # MachineState
    scanning_changed = Signal(bool)
    tcp_clamped = Signal(object)  # TcpSolution

    def __init__(
        self,
        limits: MachineLimits = DEFAULT_LIMITS,
        initial_state: MachineState = INITIAL_STATE,
        parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self._limits = limits
        self._initial_state = initial_state.clamped(limits)
        self._state = self._initial_state
        self._is_scanning = False

    # --- Read access ---

    @property
    def state(self) -> MachineState:
        return self._state

    @property
    def limits(self) -> MachineLimits:
        return self._limits

    @property
    def is_scanning(self) -> bool:
        return self._is_scanning

    def offset(self):
        """Current TCP offset caused by the gimbal angles."""
        return tool_offset(self._state.a, self._state.b)

    # --- Scan flag ---

    def set_scanning(self, scanning: bool) -> None:
        if scanning == self._is_scanning:
            return
        self._is_scanning = scanning
        logger.info("Auto scan %s.", "started" if scanning else "stopped")
        self.scanning_changed.emit(scanning)

    def toggle_scanning(self) -> None:
        self.set_scanning(not self._is_scanning)

    # --- Writes ---

    def set_axis(self, key: AxisKey, value: float) -> bool:
        """
        Manual write of one motor coordinate.

        Stops the auto scan, clamps, stores. Non-finite values are ignored and
        the prior value is kept. Returns True if the value was accepted.
        """
        axis = as_axis(key)
        if not _is_number(value):
            logger.debug("Ignoring non-numeric input %r for axis %s.", value, axis.value)
            return False

        self.set_scanning(False)

        limit = self._limits[axis]
        clamped = limit.clamp(value)
        if clamped != value:
            logger.debug("Axis %s: %.3f clamped to %.3f.", axis.value, value, clamped)

        self._commit(self._state.with_axis(axis, clamped))
        return True

    def set_tcp_axis(self, key: AxisKey, target: float) -> TcpSolution | None:
        """
        Manual write in TCP space: back-solve the motor value for a linear axis.

        The returned solution tells the caller whether clamping moved the
        realized TCP away from the requested one.
        """
        axis = as_axis(key)
        if not _is_number(target):
            logger.debug("Ignoring non-numeric TCP input %r for axis %s.", target, axis.value)
            return None

        solution = solve_tcp_axis(axis, target, self._state, self._limits)
        self.set_axis(axis, solution.motor_value)

        if solution.clamped:
            logger.warning(
                "TCP %s request %.3f saturated at motor limit, reached %.3f.",
                axis.value, solution.requested, solution.realized
            )
            self.tcp_clamped.emit(solution)
        return solution

    def apply_scan_frame(self, state: MachineState) -> bool:
        """
        Scan writer entry point. Frames arriving after the scan was cancelled
        are dropped.
        """
        if not self._is_scanning:
            return False
        self._commit(state.clamped(self._limits))
        return True

    def reset(self) -> None:
        """Stop scanning and return to the initial state."""
        self.set_scanning(False)
        logger.info("Machine state reset.")
        self._commit(self._initial_state)

    def _commit(self, new_state: MachineState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        self.state_changed.emit(self._state)
