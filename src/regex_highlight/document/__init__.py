"""Document model and text-element helpers."""

from .model import Block, StyledRun, TextPointer
from .text_elements import count_text_elements, split_text_elements

__all__ = [
    "Block",
    "StyledRun",
    "TextPointer",
    "count_text_elements",
    "split_text_elements",
]
