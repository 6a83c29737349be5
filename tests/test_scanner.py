import pytest

from gantryscan.config import SCAN_FPS
from gantryscan.model.scan import orbit_state


def test_timer_interval(scanner):
    assert scanner.timer.interval() == 1000 // SCAN_FPS


def test_timer_follows_scanning_flag(scanner, store):
    assert not scanner.timer.isActive()
    scanner.start()
    assert store.is_scanning
    assert scanner.timer.isActive()
    scanner.stop()
    assert not store.is_scanning
    assert not scanner.timer.isActive()


def test_tick_writes_orbit_state(scanner, store, clock):
    scanner.start()
    clock.advance(1.25)
    scanner.tick()
    assert scanner.elapsed == pytest.approx(1.25)
    assert store.state == orbit_state(1.25, scanner.params, store.limits)


def test_tick_while_idle_does_nothing(scanner, store, clock):
    before = store.state
    clock.advance(2.0)
    scanner.tick()
    assert store.state == before
    assert scanner.elapsed == 0.0


def test_manual_edit_cancels_immediately(scanner, store, clock):
    scanner.start()
    clock.advance(0.5)
    scanner.tick()

    store.set_axis("x", 20.0)
    edited = store.state
    assert not store.is_scanning
    assert not scanner.timer.isActive()

    # Ticks already queued before the cancellation must not overwrite the edit
    for _ in range(5):
        clock.advance(1 / SCAN_FPS)
        scanner.tick()
    assert store.state == edited
    assert store.state.x == 20.0


def test_restart_uses_fresh_time_origin(scanner, store, clock):
    scanner.start()
    clock.advance(3.0)
    scanner.stop()
    clock.advance(10.0)
    scanner.start()
    scanner.tick()
    assert store.state == orbit_state(0.0, scanner.params, store.limits)


def test_toggle(scanner, store):
    scanner.toggle()
    assert store.is_scanning
    scanner.toggle()
    assert not store.is_scanning
