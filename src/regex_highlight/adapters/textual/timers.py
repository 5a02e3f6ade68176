"""Timer source backed by Textual's ``set_timer``."""

from __future__ import annotations

from typing import Any

from regex_highlight.scheduling import TimerCallback


class TextualTimerHandle:
    def __init__(self, timer: Any) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class TextualTimerSource:
    """Schedules one-shot callbacks on a Textual message pump (app or widget)."""

    def __init__(self, pump: Any) -> None:
        self._pump = pump

    def call_later(self, delay_ms: int, callback: TimerCallback) -> TextualTimerHandle:
        timer = self._pump.set_timer(max(delay_ms, 0) / 1000.0, callback)
        return TextualTimerHandle(timer)


__all__ = ["TextualTimerHandle", "TextualTimerSource"]
