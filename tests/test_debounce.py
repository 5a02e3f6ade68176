from typing import List

import pytest

from regex_highlight.scheduling import DebounceScheduler, DebounceState, ManualTimerSource


def make_scheduler(delay_ms: int) -> tuple[DebounceScheduler, ManualTimerSource, List[int]]:
    timers = ManualTimerSource()
    fired: List[int] = []
    scheduler = DebounceScheduler(
        lambda: fired.append(timers.now_ms), timers=timers, delay_ms=delay_ms
    )
    return scheduler, timers, fired


def test_burst_fires_once_after_quiet_period() -> None:
    scheduler, timers, fired = make_scheduler(20)

    scheduler.notify_change()  # t0
    timers.advance(5)
    scheduler.notify_change()  # t0 + 5
    timers.advance(3)
    scheduler.notify_change()  # t0 + 8
    timers.advance(19)
    assert fired == []
    assert scheduler.state is DebounceState.TIMER_RUNNING

    timers.advance(1)

    assert fired == [28]
    assert scheduler.state is DebounceState.IDLE
    assert timers.pending_count == 0


def test_immediate_mode_fires_synchronously() -> None:
    scheduler, timers, fired = make_scheduler(0)

    scheduler.notify_change()
    scheduler.notify_change()

    assert fired == [0, 0]
    assert timers.pending_count == 0


def test_manual_mode_ignores_changes() -> None:
    scheduler, timers, fired = make_scheduler(-1)

    for _ in range(5):
        scheduler.notify_change()
    timers.advance(1000)

    assert fired == []
    assert scheduler.state is DebounceState.IDLE


def test_delay_change_rearms_pending_timer() -> None:
    scheduler, timers, fired = make_scheduler(20)
    scheduler.notify_change()
    timers.advance(10)

    scheduler.set_delay(50)
    timers.advance(49)
    assert fired == []
    timers.advance(1)

    assert fired == [60]
    assert scheduler.delay_ms == 50


def test_delay_change_to_immediate_runs_pending_restyle() -> None:
    scheduler, timers, fired = make_scheduler(20)
    scheduler.notify_change()

    scheduler.set_delay(0)

    assert fired == [0]
    assert timers.pending_count == 0


def test_delay_change_to_manual_drops_pending_restyle() -> None:
    scheduler, timers, fired = make_scheduler(20)
    scheduler.notify_change()

    scheduler.set_delay(-1)
    timers.advance(100)

    assert fired == []


def test_delay_change_without_pending_timer_does_not_fire() -> None:
    scheduler, _timers, fired = make_scheduler(20)

    scheduler.set_delay(0)

    assert fired == []


def test_cancel_and_flush() -> None:
    scheduler, timers, fired = make_scheduler(20)

    assert scheduler.cancel() is False
    scheduler.notify_change()
    assert scheduler.cancel() is True
    timers.advance(50)
    assert fired == []

    scheduler.notify_change()
    assert scheduler.flush() is True
    assert fired == [50]
    assert scheduler.flush() is False


def test_state_returns_to_idle_when_callback_raises() -> None:
    timers = ManualTimerSource()

    def explode() -> None:
        raise RuntimeError("boom")

    scheduler = DebounceScheduler(explode, timers=timers, delay_ms=10)
    scheduler.notify_change()

    with pytest.raises(RuntimeError):
        timers.advance(10)

    assert scheduler.state is DebounceState.IDLE
