"""Style specs and the construction of styled runs from segments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from regex_highlight.document import Block, StyledRun

from .segmentation import Segment


@dataclass(frozen=True, slots=True)
class StyleSpec:
    """A single ``attribute -> value`` assignment applied to matched text."""

    attribute: str
    value: Any

    def __post_init__(self) -> None:
        if not self.attribute:
            raise ValueError("StyleSpec attribute cannot be empty")

    @classmethod
    def coerce(cls, item: "StyleSpecLike") -> Tuple["StyleSpec", ...]:
        """Normalize a spec, an ``(attribute, value)`` pair or a mapping."""

        if isinstance(item, StyleSpec):
            return (item,)
        if isinstance(item, Mapping):
            return tuple(cls(str(key), value) for key, value in item.items())
        attribute, value = item
        return (cls(str(attribute), value),)


StyleSpecLike = Union[StyleSpec, Tuple[str, Any], Mapping[str, Any]]


def normalize_specs(
    specs: Union[Iterable[StyleSpecLike], Mapping[str, Any], None],
) -> Tuple[StyleSpec, ...]:
    if specs is None:
        return ()
    if isinstance(specs, Mapping):
        return StyleSpec.coerce(specs)
    result: List[StyleSpec] = []
    for item in specs:
        result.extend(StyleSpec.coerce(item))
    return tuple(result)


def resolve_attributes(specs: Sequence[StyleSpec]) -> Dict[str, Any]:
    """Fold specs in order; the last value for an attribute wins."""

    attributes: Dict[str, Any] = {}
    for spec in specs:
        attributes[spec.attribute] = spec.value
    return attributes


def build_runs(
    text: str, segments: Iterable[Segment], specs: Sequence[StyleSpec]
) -> List[StyledRun]:
    attributes = resolve_attributes(specs)
    runs: List[StyledRun] = []
    for segment in segments:
        substring = text[segment.start : segment.end]
        if segment.is_match:
            runs.append(StyledRun(substring, attributes))
        else:
            runs.append(StyledRun(substring))
    return runs


def build_block(
    text: str, segments: Iterable[Segment], specs: Sequence[StyleSpec]
) -> Block:
    return Block.of(build_runs(text, segments, specs))


__all__ = [
    "StyleSpec",
    "StyleSpecLike",
    "build_block",
    "build_runs",
    "normalize_specs",
    "resolve_attributes",
]
