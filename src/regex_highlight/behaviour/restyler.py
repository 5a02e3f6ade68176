"""Rebuild a host document as alternating styled and plain runs."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Pattern, Sequence

from regex_highlight.document import count_text_elements
from regex_highlight.host import BLOCK_TERMINATOR, HostControl, TextChangedHandler
from regex_highlight.runtime import telemetry
from regex_highlight.styling import StyleSpec, build_block, segment_text

from .guard import suspended_notifications
from .positions import locate, text_element_offset


class RestylePhase(enum.Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    SEGMENTING = "segmenting"
    REBUILDING = "rebuilding"
    RESTORING = "restoring"


@dataclass(slots=True)
class RestyleOutcome:
    """Summary of a single restyle pass."""

    status: str
    segment_count: int = 0
    match_count: int = 0
    caret_offset: Optional[int] = None

    @property
    def rebuilt(self) -> bool:
        return self.status == "restyled"


class Restyler:
    """Runs the capture / segment / rebuild / restore pass against a host."""

    def __init__(
        self,
        host: HostControl,
        *,
        handler: TextChangedHandler,
        terminator: str = BLOCK_TERMINATOR,
        logger_name: str | None = "regex_highlight.restyle",
    ) -> None:
        self.host = host
        self.handler = handler
        self.terminator = terminator
        self._terminator_elements = count_text_elements(terminator)
        self._phase = RestylePhase.IDLE
        self._logger_name = logger_name

    @property
    def phase(self) -> RestylePhase:
        return self._phase

    def restyle(
        self,
        pattern: Optional[Pattern[str]],
        specs: Sequence[StyleSpec] = (),
    ) -> RestyleOutcome:
        if pattern is None:
            telemetry.record_event(
                "restyle.skipped",
                level="debug",
                data={"reason": "no_pattern"},
                logger_name=self._logger_name,
            )
            return RestyleOutcome(status="no_pattern")

        with telemetry.span(
            "restyle::document",
            logger_name=self._logger_name,
            component="restyle",
            metadata={"pattern": pattern.pattern},
        ) as handle:
            try:
                with suspended_notifications(self.host, self.handler):
                    outcome = self._run(pattern, specs)
            finally:
                self._phase = RestylePhase.IDLE
            handle.add_metadata("status", outcome.status)
            handle.add_metadata("segments", outcome.segment_count)
            return outcome

    def _run(
        self, pattern: Pattern[str], specs: Sequence[StyleSpec]
    ) -> RestyleOutcome:
        host = self.host
        self._phase = RestylePhase.CAPTURING
        text = host.get_full_text()
        if not text:
            return RestyleOutcome(status="empty")

        caret_offset = text_element_offset(host, host.caret_position)
        horizontal = host.horizontal_offset
        vertical = host.vertical_offset

        if self.terminator and text.endswith(self.terminator):
            text = text[: -len(self.terminator)]
            if host.caret_position == host.content_end:
                caret_offset -= self._terminator_elements
        if not text:
            return RestyleOutcome(status="empty")

        self._phase = RestylePhase.SEGMENTING
        segments = segment_text(text, pattern)

        self._phase = RestylePhase.REBUILDING
        host.replace_content(build_block(text, segments, specs))

        self._phase = RestylePhase.RESTORING
        host.caret_position = locate(caret_offset, host)
        host.scroll_to(horizontal, vertical)

        return RestyleOutcome(
            status="restyled",
            segment_count=len(segments),
            match_count=sum(1 for segment in segments if segment.is_match),
            caret_offset=caret_offset,
        )


__all__ = ["RestyleOutcome", "RestylePhase", "Restyler"]
