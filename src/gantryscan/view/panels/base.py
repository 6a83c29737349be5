from __future__ import annotations

from PySide6.QtWidgets import QWidget

from gantryscan.controller.store import MachineStore


class BasePanel(QWidget):
    """Base class for panels. Holds a reference to the machine store and redraws on change."""
    def __init__(self, store: MachineStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self.store.state_changed.connect(lambda _state: self.refresh())
        self.store.scanning_changed.connect(lambda _scanning: self.refresh())

    def refresh(self) -> None:
        """Re-read the store into the widgets."""
        raise NotImplementedError
