"""Data structures exchanged between the highlighter and its host."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping


@dataclass(frozen=True, slots=True, order=True)
class TextPointer:
    """Opaque, ordered position inside a host document.

    Only the host that produced a pointer knows what ``offset`` counts; the
    highlighter compares pointers and hands them back, nothing else.
    """

    offset: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("TextPointer offset cannot be negative")


@dataclass(frozen=True, slots=True)
class StyledRun:
    """Contiguous text sharing a single set of style attributes."""

    text: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def styled(self) -> bool:
        return bool(self.attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StyledRun):
            return NotImplemented
        return self.text == other.text and dict(self.attributes) == dict(
            other.attributes
        )

    def __hash__(self) -> int:
        return hash((self.text, tuple(sorted(self.attributes.items(), key=repr))))


@dataclass(frozen=True, slots=True)
class Block:
    """Paragraph-like container of runs."""

    runs: tuple[StyledRun, ...] = ()

    @classmethod
    def of(cls, runs: Iterable[StyledRun]) -> "Block":
        return cls(runs=tuple(runs))

    @classmethod
    def plain(cls, text: str) -> "Block":
        return cls(runs=(StyledRun(text),) if text else ())

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


__all__ = ["TextPointer", "StyledRun", "Block"]
