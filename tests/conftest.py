"""
Shared pytest fixtures.

Widgets are built on the offscreen Qt platform, so no display is needed.
The 3D view (VTK render window) is never created in tests.
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from gantryscan.controller.scanner import AutoScanner
from gantryscan.controller.store import MachineStore
from gantryscan.model.state import DEFAULT_LIMITS, INITIAL_STATE


@pytest.fixture(scope="session")
def qt_app():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def store(qt_app):
    """Fresh store at the initial state with default limits."""
    return MachineStore(limits=DEFAULT_LIMITS, initial_state=INITIAL_STATE)


class FakeClock:
    """Monotonic clock driven by the test."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scanner(store, clock):
    return AutoScanner(store, clock=clock)
