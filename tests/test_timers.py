import asyncio
from typing import List

import pytest

from regex_highlight.scheduling import AsyncioTimerSource, ManualTimerSource, PollingTimerSource


def test_polling_source_fires_due_timers_in_deadline_order() -> None:
    now = [0.0]
    source = PollingTimerSource(clock=lambda: now[0])
    fired: List[str] = []
    source.call_later(30, lambda: fired.append("late"))
    source.call_later(10, lambda: fired.append("early"))

    now[0] = 15.0
    assert source.process_due() == 1
    now[0] = 30.0
    assert source.process_due() == 1

    assert fired == ["early", "late"]


def test_cancelled_handle_never_fires() -> None:
    source = ManualTimerSource()
    fired: List[str] = []
    handle = source.call_later(10, lambda: fired.append("x"))

    assert handle.active is True
    handle.cancel()
    source.advance(20)

    assert fired == []
    assert handle.active is False


def test_callback_can_cancel_a_later_due_timer() -> None:
    source = ManualTimerSource()
    fired: List[str] = []
    second = source.call_later(10, lambda: fired.append("second"))
    source.call_later(5, lambda: (fired.append("first"), second.cancel()))

    source.advance(10)

    assert fired == ["first"]


def test_manual_clock_cannot_go_backwards() -> None:
    with pytest.raises(ValueError):
        ManualTimerSource().advance(-1)


def test_asyncio_source_fires_and_cancels() -> None:
    fired: List[str] = []

    async def scenario() -> None:
        source = AsyncioTimerSource()
        source.call_later(1, lambda: fired.append("kept"))
        handle = source.call_later(1, lambda: fired.append("cancelled"))
        handle.cancel()
        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert fired == ["kept"]
