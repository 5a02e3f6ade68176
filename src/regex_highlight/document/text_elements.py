"""User-perceived character ("text element") helpers."""

from __future__ import annotations

from typing import List

import regex

_GRAPHEME = regex.compile(r"\X")


def split_text_elements(text: str) -> List[str]:
    """Split ``text`` into extended grapheme clusters.

    ``"\\r\\n"`` is a single cluster, as are a base letter followed by its
    combining marks.
    """

    return _GRAPHEME.findall(text)


def count_text_elements(text: str) -> int:
    if not text:
        return 0
    return sum(1 for _ in _GRAPHEME.finditer(text))


__all__ = ["split_text_elements", "count_text_elements"]
