"""Map text-element offsets onto structural pointers and back."""

from __future__ import annotations

from regex_highlight.document import TextPointer
from regex_highlight.host import HostControl
from regex_highlight.runtime import telemetry

MAX_CORRECTION_STEPS = 10_000


def text_element_count(
    host: HostControl, start: TextPointer, end: TextPointer
) -> int:
    """Number of text elements between two pointers."""

    return host.get_text_range_length(start, end)


def text_element_offset(host: HostControl, pointer: TextPointer) -> int:
    """Number of text elements from the start of the document to ``pointer``."""

    return text_element_count(host, host.content_start, pointer)


def locate(
    target_offset: int,
    host: HostControl,
    *,
    max_steps: int = MAX_CORRECTION_STEPS,
) -> TextPointer:
    """Find the pointer sitting ``target_offset`` text elements into the document.

    A pointer moved forward by ``n`` falls short whenever the move crosses
    structural edges, since each edge consumes a unit without adding text.
    The shortfall is re-applied until the count matches. Overshooting,
    stalling or running out of correction steps all resolve to the end of
    the document.
    """

    start = host.content_start
    end = host.content_end
    if target_offset <= 0:
        return start
    if target_offset >= text_element_count(host, start, end):
        return end

    pointer = host.advance(start, target_offset)
    deficit = target_offset - text_element_count(host, start, pointer)
    steps = 0
    while deficit != 0:
        if deficit < 0:
            return _fail_safe(host, "overshoot", target_offset, steps)
        if steps >= max_steps:
            return _fail_safe(host, "diverged", target_offset, steps)
        moved = host.advance(pointer, deficit)
        if moved == pointer:
            return _fail_safe(host, "stalled", target_offset, steps)
        pointer = moved
        deficit = target_offset - text_element_count(host, start, pointer)
        steps += 1
    return pointer


def _fail_safe(
    host: HostControl, reason: str, target_offset: int, steps: int
) -> TextPointer:
    telemetry.record_event(
        "positions.fail_safe",
        level="warning",
        data={"reason": reason, "target": target_offset, "steps": steps},
        logger_name="regex_highlight.positions",
    )
    return host.content_end


__all__ = [
    "MAX_CORRECTION_STEPS",
    "locate",
    "text_element_count",
    "text_element_offset",
]
