"""One-shot timer sources the debounce scheduler can run on."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol

TimerCallback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerSource(Protocol):
    """Schedules a callback to run once after ``delay_ms`` milliseconds."""

    def call_later(self, delay_ms: int, callback: TimerCallback) -> TimerHandle: ...


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class PendingTimer:
    deadline_ms: float
    delay_ms: int
    generation: int
    callback: TimerCallback


class PollingHandle:
    def __init__(self, source: "PollingTimerSource", generation: int) -> None:
        self._source = source
        self.generation = generation

    @property
    def active(self) -> bool:
        return self._source.is_pending(self.generation)

    def cancel(self) -> None:
        self._source.discard(self.generation)


class PollingTimerSource:
    """Deadline-based timers fired by a host-driven ``process_due`` poll.

    Hosts that already run a UI interval (``set_interval`` in Textual, an idle
    hook elsewhere) call ``process_due`` from it. ``clock`` returns
    milliseconds.
    """

    def __init__(self, clock: Callable[[], float] = monotonic_ms) -> None:
        self._clock = clock
        self._pending: Dict[int, PendingTimer] = {}
        self._generation = 0

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def is_pending(self, generation: int) -> bool:
        return generation in self._pending

    def discard(self, generation: int) -> None:
        self._pending.pop(generation, None)

    def call_later(self, delay_ms: int, callback: TimerCallback) -> PollingHandle:
        self._generation += 1
        self._pending[self._generation] = PendingTimer(
            deadline_ms=self._clock() + max(delay_ms, 0),
            delay_ms=delay_ms,
            generation=self._generation,
            callback=callback,
        )
        return PollingHandle(self, self._generation)

    def next_deadline(self) -> Optional[float]:
        if not self._pending:
            return None
        return min(timer.deadline_ms for timer in self._pending.values())

    def process_due(self) -> int:
        """Fire every timer whose deadline has passed, in deadline order."""

        now = self._clock()
        due: List[PendingTimer] = sorted(
            (timer for timer in self._pending.values() if timer.deadline_ms <= now),
            key=lambda timer: (timer.deadline_ms, timer.generation),
        )
        fired = 0
        for timer in due:
            # An earlier callback may have cancelled this one.
            if self._pending.pop(timer.generation, None) is None:
                continue
            timer.callback()
            fired += 1
        return fired


class ManualTimerSource(PollingTimerSource):
    """Polling timers on a virtual millisecond clock."""

    def __init__(self, start_ms: int = 0) -> None:
        self._now_ms = start_ms
        super().__init__(clock=lambda: self._now_ms)

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def advance(self, delta_ms: int) -> int:
        """Move the clock forward, firing timers at their own deadlines."""

        if delta_ms < 0:
            raise ValueError("Cannot move the clock backwards")
        target = self._now_ms + delta_ms
        fired = 0
        while True:
            deadline = self.next_deadline()
            if deadline is None or deadline > target:
                break
            self._now_ms = max(self._now_ms, int(deadline))
            fired += self.process_due()
        self._now_ms = target
        return fired


class AsyncioTimerSource:
    """Timers backed by ``loop.call_later``."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(
        self, delay_ms: int, callback: TimerCallback
    ) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(delay_ms, 0) / 1000.0, callback)


__all__ = [
    "AsyncioTimerSource",
    "ManualTimerSource",
    "PendingTimer",
    "PollingHandle",
    "PollingTimerSource",
    "TimerCallback",
    "TimerHandle",
    "TimerSource",
    "monotonic_ms",
]
