"""Textual front-end for the highlighter."""

from .controller import (
    RICH_STYLE_ATTRIBUTES,
    TextualHighlightAdapter,
    TextualHighlightHooks,
    render_document,
    render_run,
    style_for_attributes,
)
from .timers import TextualTimerHandle, TextualTimerSource

__all__ = [
    "RICH_STYLE_ATTRIBUTES",
    "TextualHighlightAdapter",
    "TextualHighlightHooks",
    "TextualTimerHandle",
    "TextualTimerSource",
    "render_document",
    "render_run",
    "style_for_attributes",
]
