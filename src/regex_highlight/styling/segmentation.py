"""Split text into alternating matched and unmatched segments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Pattern, Tuple


@dataclass(frozen=True, slots=True)
class Segment:
    start: int
    length: int
    is_match: bool

    @property
    def end(self) -> int:
        return self.start + self.length


def iter_segments(text: str, pattern: Pattern[str]) -> Iterator[Segment]:
    """Yield gap-free segments covering ``text`` in order.

    Matches come from ``pattern.finditer`` and are therefore non-overlapping
    and ascending. Empty matches are skipped; they would only produce
    zero-length segments.
    """

    cursor = 0
    for match in pattern.finditer(text):
        start, end = match.span()
        if start == end:
            continue
        if start > cursor:
            yield Segment(cursor, start - cursor, False)
        yield Segment(start, end - start, True)
        cursor = end
    if cursor < len(text):
        yield Segment(cursor, len(text) - cursor, False)


def segment_text(text: str, pattern: Pattern[str]) -> List[Segment]:
    return list(iter_segments(text, pattern))


def segment_strings(text: str, segments: List[Segment]) -> List[Tuple[str, bool]]:
    return [(text[seg.start : seg.end], seg.is_match) for seg in segments]


__all__ = ["Segment", "iter_segments", "segment_strings", "segment_text"]
