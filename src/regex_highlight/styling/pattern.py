"""Pattern configuration and compilation."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional, Pattern, Union

from regex_highlight.runtime import telemetry


class PatternFlag(enum.Flag):
    """Matching modes supported by the highlighter."""

    IGNORE_CASE = enum.auto()
    MULTILINE = enum.auto()
    DOT_ALL = enum.auto()
    VERBOSE = enum.auto()
    ASCII = enum.auto()

    @classmethod
    def none(cls) -> "PatternFlag":
        return cls(0)

    @classmethod
    def parse(cls, value: "FlagsLike") -> "PatternFlag":
        """Parse flags from a ``PatternFlag``, a name or a collection of names.

        Names are matched case-insensitively with underscores ignored, so
        ``"ignoreCase"``, ``"IGNORE_CASE"`` and the short form ``"i"`` are
        equivalent. Strings may hold several names separated by ``|``, ``,``
        or whitespace.
        """

        if value is None:
            return cls.none()
        if isinstance(value, PatternFlag):
            return value
        if isinstance(value, str):
            names: Iterable[str] = re.split(r"[|,\s]+", value)
        else:
            names = value
        flags = [
            cls._from_name(name)
            for name in names
            if isinstance(name, PatternFlag) or name.strip()
        ]
        return reduce(lambda left, right: left | right, flags, cls.none())

    @classmethod
    def _from_name(cls, name: str | "PatternFlag") -> "PatternFlag":
        if isinstance(name, PatternFlag):
            return name
        key = name.strip().replace("_", "").replace("-", "").lower()
        try:
            return _FLAG_ALIASES[key]
        except KeyError as exc:
            raise ValueError(f"Unknown pattern flag '{name}'") from exc

    def to_re_flags(self) -> re.RegexFlag:
        result = re.RegexFlag(0)
        for flag, re_flag in _RE_FLAGS.items():
            if flag in self:
                result |= re_flag
        return result


FlagsLike = Union[PatternFlag, str, Iterable[Union[str, PatternFlag]], None]

_RE_FLAGS = {
    PatternFlag.IGNORE_CASE: re.IGNORECASE,
    PatternFlag.MULTILINE: re.MULTILINE,
    PatternFlag.DOT_ALL: re.DOTALL,
    PatternFlag.VERBOSE: re.VERBOSE,
    PatternFlag.ASCII: re.ASCII,
}

_FLAG_ALIASES = {
    "ignorecase": PatternFlag.IGNORE_CASE,
    "i": PatternFlag.IGNORE_CASE,
    "multiline": PatternFlag.MULTILINE,
    "m": PatternFlag.MULTILINE,
    "dotall": PatternFlag.DOT_ALL,
    "singleline": PatternFlag.DOT_ALL,
    "s": PatternFlag.DOT_ALL,
    "verbose": PatternFlag.VERBOSE,
    "ignorepatternwhitespace": PatternFlag.VERBOSE,
    "x": PatternFlag.VERBOSE,
    "ascii": PatternFlag.ASCII,
    "a": PatternFlag.ASCII,
    "none": PatternFlag(0),
}


class PatternCompileError(ValueError):
    """Raised when a pattern source cannot be compiled."""

    def __init__(
        self, source: str, flags: PatternFlag, error: re.error
    ) -> None:
        super().__init__(f"Invalid pattern {source!r}: {error}")
        self.source = source
        self.flags = flags
        self.error = error


@dataclass(frozen=True, slots=True)
class PatternConfig:
    """Immutable pattern source plus matching flags."""

    source: str
    flags: PatternFlag = PatternFlag(0)

    def with_flags(self, flags: FlagsLike) -> "PatternConfig":
        return PatternConfig(self.source, PatternFlag.parse(flags))

    def compile(self) -> Pattern[str]:
        try:
            compiled = re.compile(self.source, self.flags.to_re_flags())
        except re.error as exc:
            telemetry.record_event(
                "pattern.invalid",
                level="warning",
                data={"source": self.source, "error": str(exc)},
                logger_name="regex_highlight.styling",
            )
            raise PatternCompileError(self.source, self.flags, exc) from exc
        telemetry.record_event(
            "pattern.compiled",
            level="debug",
            data={"source": self.source, "flags": self.flags},
            logger_name="regex_highlight.styling",
        )
        return compiled


def compile_pattern(
    source: Optional[str], flags: FlagsLike = None
) -> Optional[Pattern[str]]:
    """Compile ``source`` or return ``None`` when no pattern is configured."""

    if source is None:
        return None
    return PatternConfig(source, PatternFlag.parse(flags)).compile()


__all__ = [
    "FlagsLike",
    "PatternCompileError",
    "PatternConfig",
    "PatternFlag",
    "compile_pattern",
]
