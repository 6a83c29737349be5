from __future__ import annotations

import logging
import time
from typing import Callable

from PySide6.QtCore import QObject, QTimer

from gantryscan.config import SCAN_FPS
from gantryscan.controller.store import MachineStore
from gantryscan.model.scan import OrbitParams, DEFAULT_ORBIT, orbit_state

logger = logging.getLogger(__name__)


class AutoScanner(QObject):
    """
    Drives the demo orbit from a QTimer.

    Follows the store's scanning flag: the timer runs exactly while the store
    says it is scanning. Each tick computes the orbit state from the time since
    the scan started and writes it through `MachineStore.apply_scan_frame`.
    """
    def __init__(
        self,
        store: MachineStore,
        params: OrbitParams = DEFAULT_ORBIT,
        clock: Callable[[], float] = time.monotonic,
        parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.params = params
        self._clock = clock
        self._started_at: float | None = None

        self.timer = QTimer(self)
        self.set_fps(SCAN_FPS)
        self.timer.timeout.connect(self.tick)

        self.store.scanning_changed.connect(self._on_scanning_changed)

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        return self._clock() - self._started_at

    def set_fps(self, value: int) -> None:
        """Update timer interval based on FPS."""
        if value > 0:
            self.timer.setInterval(1000 // value)

    def start(self) -> None:
        self.store.set_scanning(True)

    def stop(self) -> None:
        self.store.set_scanning(False)

    def toggle(self) -> None:
        self.store.toggle_scanning()

    def tick(self) -> None:
        # A tick queued before cancellation must not write anything
        if not self.store.is_scanning or self._started_at is None:
            return
        t = self.elapsed
        self.store.apply_scan_frame(orbit_state(t, self.params, self.store.limits))

    def _on_scanning_changed(self, scanning: bool) -> None:
        if scanning:
            self._started_at = self._clock()
            self.timer.start()
            logger.debug("Scan timer started (%d ms).", self.timer.interval())
        else:
            self.timer.stop()
            self._started_at = None
            logger.debug("Scan timer stopped.")
