"""Debounce scheduling and the timer sources it runs on."""

from .debounce import IMMEDIATE, MANUAL_ONLY, DebounceScheduler, DebounceState
from .timers import (
    AsyncioTimerSource,
    ManualTimerSource,
    PollingHandle,
    PollingTimerSource,
    TimerCallback,
    TimerHandle,
    TimerSource,
)

__all__ = [
    "AsyncioTimerSource",
    "DebounceScheduler",
    "DebounceState",
    "IMMEDIATE",
    "MANUAL_ONLY",
    "ManualTimerSource",
    "PollingHandle",
    "PollingTimerSource",
    "TimerCallback",
    "TimerHandle",
    "TimerSource",
]
