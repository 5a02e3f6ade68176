"""Attachable behaviour that keeps a host document highlighted."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Pattern, Tuple, Union

from regex_highlight.config import HighlightOptions
from regex_highlight.host import BLOCK_TERMINATOR, HostControl
from regex_highlight.runtime import telemetry
from regex_highlight.scheduling import DebounceScheduler, TimerSource
from regex_highlight.styling import (
    FlagsLike,
    PatternConfig,
    PatternFlag,
    StyleSpec,
    StyleSpecLike,
    normalize_specs,
)

from .restyler import RestyleOutcome, RestylePhase, Restyler


class RegexHighlightBehaviour:
    """Restyles text matching a pattern whenever the host document changes.

    Configuration setters take effect immediately: a new pattern or new flags
    are compiled on the spot (``PatternCompileError`` propagates and the
    previous pattern stays live), a new delay reconfigures the debounce
    scheduler.
    """

    def __init__(
        self,
        *,
        timers: TimerSource,
        pattern: Optional[str] = None,
        flags: FlagsLike = None,
        style_specs: Union[Iterable[StyleSpecLike], None] = None,
        change_delay_ms: int = 0,
        terminator: str = BLOCK_TERMINATOR,
    ) -> None:
        self.terminator = terminator
        self._flags = PatternFlag.parse(flags)
        self._source: Optional[str] = None
        self._regex: Optional[Pattern[str]] = None
        self._specs: Tuple[StyleSpec, ...] = normalize_specs(style_specs)
        self._host: Optional[HostControl] = None
        self._restyler: Optional[Restyler] = None
        self._scheduler = DebounceScheduler(
            self.restyle, timers=timers, delay_ms=change_delay_ms
        )
        self.last_outcome: Optional[RestyleOutcome] = None
        if pattern is not None:
            self.set_pattern(pattern)

    @classmethod
    def from_options(
        cls, options: HighlightOptions, *, timers: TimerSource
    ) -> "RegexHighlightBehaviour":
        return cls(
            timers=timers,
            pattern=options.pattern,
            flags=options.flags,
            style_specs=options.style_specs,
            change_delay_ms=options.change_delay_ms,
            terminator=options.terminator,
        )

    # -- configuration -----------------------------------------------------

    @property
    def pattern(self) -> Optional[str]:
        return self._source

    @property
    def compiled_pattern(self) -> Optional[Pattern[str]]:
        return self._regex

    @property
    def flags(self) -> PatternFlag:
        return self._flags

    @property
    def style_specs(self) -> Tuple[StyleSpec, ...]:
        return self._specs

    @property
    def change_delay_ms(self) -> int:
        return self._scheduler.delay_ms

    @property
    def scheduler(self) -> DebounceScheduler:
        return self._scheduler

    def set_pattern(self, source: Optional[str]) -> None:
        if source is None:
            self._source = None
            self._regex = None
            telemetry.record_event(
                "pattern.cleared", logger_name="regex_highlight.behaviour"
            )
            return
        self._regex = PatternConfig(source, self._flags).compile()
        self._source = source

    def set_flags(self, flags: FlagsLike) -> None:
        parsed = PatternFlag.parse(flags)
        if self._source is not None:
            self._regex = PatternConfig(self._source, parsed).compile()
        self._flags = parsed

    def set_style_specs(
        self, specs: Union[Iterable[StyleSpecLike], None]
    ) -> None:
        self._specs = normalize_specs(specs)

    def set_change_delay(self, delay_ms: int) -> None:
        self._scheduler.set_delay(delay_ms)

    def configure(self, options: HighlightOptions) -> None:
        """Apply a whole option set; the pattern is compiled before anything changes."""

        compiled = (
            None
            if options.pattern is None
            else PatternConfig(options.pattern, options.flags).compile()
        )
        self._flags = options.flags
        self._source = options.pattern
        self._regex = compiled
        self._specs = options.style_specs
        self.terminator = options.terminator
        if self._restyler is not None:
            self._restyler.terminator = options.terminator
        self._scheduler.set_delay(options.change_delay_ms)

    # -- lifecycle ---------------------------------------------------------

    @property
    def host(self) -> Optional[HostControl]:
        return self._host

    @property
    def attached(self) -> bool:
        return self._host is not None

    @property
    def phase(self) -> RestylePhase:
        if self._restyler is None:
            return RestylePhase.IDLE
        return self._restyler.phase

    def attach(self, host: HostControl) -> None:
        if self._host is not None:
            raise RuntimeError("Behaviour is already attached to a host")
        self._host = host
        self._restyler = Restyler(
            host, handler=self.on_text_changed, terminator=self.terminator
        )
        host.subscribe_text_changed(self.on_text_changed)
        telemetry.record_event(
            "behaviour.attached",
            data={"host": getattr(host, "name", type(host).__name__)},
            logger_name="regex_highlight.behaviour",
        )

    def detach(self) -> None:
        host = self._host
        if host is None:
            return
        self._scheduler.cancel()
        host.unsubscribe_text_changed(self.on_text_changed)
        self._host = None
        self._restyler = None
        telemetry.record_event(
            "behaviour.detached",
            data={"host": getattr(host, "name", type(host).__name__)},
            logger_name="regex_highlight.behaviour",
        )

    # -- events ------------------------------------------------------------

    def on_text_changed(self, *_args: Any) -> None:
        self._scheduler.notify_change()

    def restyle(self) -> Optional[RestyleOutcome]:
        """Rebuild the attached document now, regardless of the delay mode."""

        if self._restyler is None:
            return None
        self.last_outcome = self._restyler.restyle(self._regex, self._specs)
        return self.last_outcome


__all__ = ["RegexHighlightBehaviour"]
