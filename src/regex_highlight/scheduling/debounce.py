"""Coalesce bursts of change notifications into a single callback."""

from __future__ import annotations

import enum
from typing import Callable, Optional

from regex_highlight.runtime import telemetry

from .timers import TimerHandle, TimerSource

MANUAL_ONLY = -1
IMMEDIATE = 0


class DebounceState(enum.Enum):
    IDLE = "idle"
    TIMER_RUNNING = "timer_running"


class DebounceScheduler:
    """Owns at most one pending timer for the restyle callback.

    ``delay_ms < 0`` ignores change notifications (manual only), ``0`` runs
    the callback synchronously on every notification, and a positive delay
    restarts a one-shot timer on every notification so only the last change
    of a burst fires, ``delay_ms`` after it.
    """

    def __init__(
        self,
        callback: Callable[[], object],
        *,
        timers: TimerSource,
        delay_ms: int = IMMEDIATE,
        logger_name: str | None = "regex_highlight.scheduling",
    ) -> None:
        self._callback = callback
        self._timers = timers
        self._delay_ms = int(delay_ms)
        self._handle: Optional[TimerHandle] = None
        self._logger_name = logger_name

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def state(self) -> DebounceState:
        if self._handle is None:
            return DebounceState.IDLE
        return DebounceState.TIMER_RUNNING

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def notify_change(self) -> None:
        if self._delay_ms < 0:
            return
        if self._delay_ms == 0:
            self._callback()
            return
        self._arm(self._delay_ms)

    def set_delay(self, delay_ms: int) -> None:
        """Reconfigure the delay, carrying a pending restyle into the new mode."""

        delay_ms = int(delay_ms)
        was_pending = self.pending
        self._delay_ms = delay_ms
        if not was_pending:
            return
        self.cancel()
        if delay_ms > 0:
            self._arm(delay_ms)
        elif delay_ms == 0:
            self._callback()

    def cancel(self) -> bool:
        handle, self._handle = self._handle, None
        if handle is None:
            return False
        handle.cancel()
        telemetry.record_event(
            "debounce.cancelled", level="debug", logger_name=self._logger_name
        )
        return True

    def flush(self) -> bool:
        """Run a pending callback now instead of waiting for the timer."""

        if not self.cancel():
            return False
        self._callback()
        return True

    def _arm(self, delay_ms: int) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = self._timers.call_later(delay_ms, self._fire)
        telemetry.record_event(
            "debounce.armed",
            level="debug",
            data={"delay_ms": delay_ms},
            logger_name=self._logger_name,
        )

    def _fire(self) -> None:
        self._handle = None
        telemetry.record_event(
            "debounce.fired",
            level="debug",
            data={"delay_ms": self._delay_ms},
            logger_name=self._logger_name,
        )
        self._callback()


__all__ = ["DebounceScheduler", "DebounceState", "IMMEDIATE", "MANUAL_ONLY"]
