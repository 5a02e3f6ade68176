"""Rebuild orchestration and the attachable highlight behaviour."""

from .behaviour import RegexHighlightBehaviour
from .guard import suspended_notifications
from .positions import (
    MAX_CORRECTION_STEPS,
    locate,
    text_element_count,
    text_element_offset,
)
from .restyler import RestyleOutcome, RestylePhase, Restyler

__all__ = [
    "MAX_CORRECTION_STEPS",
    "RegexHighlightBehaviour",
    "RestyleOutcome",
    "RestylePhase",
    "Restyler",
    "locate",
    "suspended_notifications",
    "text_element_count",
    "text_element_offset",
]
