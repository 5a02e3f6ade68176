"""Adapter boundary describing the rich-text control being highlighted."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from regex_highlight.document import Block, TextPointer

TextChangedHandler = Callable[..., None]


class HostControl(Protocol):
    """Narrow surface the highlighter consumes from a rich-text control."""

    @property
    def content_start(self) -> TextPointer: ...

    @property
    def content_end(self) -> TextPointer: ...

    @property
    def caret_position(self) -> TextPointer: ...

    @caret_position.setter
    def caret_position(self, position: TextPointer) -> None: ...

    @property
    def horizontal_offset(self) -> float: ...

    @property
    def vertical_offset(self) -> float: ...

    def get_full_text(self) -> str:
        """Return the plain text of the whole document."""
        ...

    def get_text_range_length(self, start: TextPointer, end: TextPointer) -> int:
        """Return the number of text elements between two pointers."""
        ...

    def advance(self, position: TextPointer, count: int) -> TextPointer:
        """Move ``count`` units forward, clamping at the end of the document."""
        ...

    def scroll_to(self, horizontal: float, vertical: float) -> None: ...

    def subscribe_text_changed(self, handler: TextChangedHandler) -> None: ...

    def unsubscribe_text_changed(self, handler: TextChangedHandler) -> None: ...

    def replace_content(self, block: Block) -> None:
        """Discard every existing block and install ``block`` as the document."""
        ...


class HostValidationError(RuntimeError):
    """Raised when a pointer does not address a position in the document."""

    def __init__(self, message: str, *, pointer: Optional[TextPointer] = None) -> None:
        super().__init__(message)
        self.pointer = pointer


__all__ = ["HostControl", "HostValidationError", "TextChangedHandler"]
