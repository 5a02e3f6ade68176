"""Highlighter options loaded from keyword arguments, mappings or the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from regex_highlight.host import BLOCK_TERMINATOR
from regex_highlight.runtime.telemetry import ENV_PREFIX
from regex_highlight.styling import PatternFlag, StyleSpec, normalize_specs

_KEY_ALIASES = {
    "pattern": "pattern",
    "regexpattern": "pattern",
    "flags": "flags",
    "regexoptions": "flags",
    "stylespecs": "style_specs",
    "styles": "style_specs",
    "propertyvalues": "style_specs",
    "changedelayms": "change_delay_ms",
    "textchangeddelay": "change_delay_ms",
    "terminator": "terminator",
}

_BOOLEAN_WORDS = {"true": True, "yes": True, "on": True, "false": False, "no": False, "off": False}


@dataclass(frozen=True, slots=True)
class HighlightOptions:
    """Everything a behaviour needs to highlight a document."""

    pattern: Optional[str] = None
    flags: PatternFlag = PatternFlag(0)
    style_specs: Tuple[StyleSpec, ...] = field(default_factory=tuple)
    change_delay_ms: int = 0
    terminator: str = BLOCK_TERMINATOR

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", PatternFlag.parse(self.flags))
        object.__setattr__(self, "style_specs", normalize_specs(self.style_specs))
        object.__setattr__(self, "change_delay_ms", int(self.change_delay_ms))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HighlightOptions":
        """Build options from snake_case or camelCase keys.

        Unknown keys raise ``ValueError`` so typos do not silently disable
        highlighting.
        """

        values: Dict[str, Any] = {}
        unknown = []
        for key, value in data.items():
            normalized = str(key).replace("_", "").replace("-", "").lower()
            target = _KEY_ALIASES.get(normalized)
            if target is None:
                unknown.append(key)
                continue
            values[target] = value
        if unknown:
            raise ValueError(f"Unknown option(s): {', '.join(map(str, unknown))}")
        return cls(**values)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        prefix: str = ENV_PREFIX,
    ) -> "HighlightOptions":
        """Read ``<prefix>PATTERN``, ``FLAGS``, ``STYLE``, ``CHANGE_DELAY_MS``
        and ``TERMINATOR``.

        ``STYLE`` holds ``attribute=value`` pairs separated by ``;``.
        """

        env = os.environ if environ is None else environ

        def read(name: str) -> Optional[str]:
            return env.get(f"{prefix}{name}")

        values: Dict[str, Any] = {}
        pattern = read("PATTERN")
        if pattern:
            values["pattern"] = pattern
        flags = read("FLAGS")
        if flags:
            values["flags"] = flags
        style = read("STYLE")
        if style:
            values["style_specs"] = parse_style_string(style)
        delay = read("CHANGE_DELAY_MS")
        if delay is not None and delay.strip():
            try:
                values["change_delay_ms"] = int(delay)
            except ValueError as exc:
                raise ValueError(
                    f"{prefix}CHANGE_DELAY_MS must be an integer, got {delay!r}"
                ) from exc
        terminator = read("TERMINATOR")
        if terminator is not None:
            # Only backslash escapes are decoded; other characters pass through.
            values["terminator"] = terminator.encode(
                "latin-1", "backslashreplace"
            ).decode("unicode_escape")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


def parse_style_string(raw: str) -> Tuple[StyleSpec, ...]:
    """Parse ``"bold=true; color=red"`` into style specs."""

    specs = []
    for chunk in raw.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        attribute, sep, value = chunk.partition("=")
        if not sep:
            raise ValueError(f"Style entry {chunk!r} is missing '='")
        specs.append(StyleSpec(attribute.strip(), _coerce_value(value.strip())))
    return tuple(specs)


def _coerce_value(value: str) -> Any:
    return _BOOLEAN_WORDS.get(value.lower(), value)


__all__ = ["HighlightOptions", "parse_style_string"]
