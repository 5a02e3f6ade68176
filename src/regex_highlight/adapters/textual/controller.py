"""Textual-facing adapter: feeds editor text to the host and renders runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from rich.style import Style
from rich.text import Text

from regex_highlight.behaviour import RegexHighlightBehaviour
from regex_highlight.document import StyledRun, count_text_elements
from regex_highlight.host import InMemoryRichText
from regex_highlight.runtime import telemetry
from regex_highlight.styling import PatternCompileError

RICH_STYLE_ATTRIBUTES = frozenset(
    {
        "color",
        "bgcolor",
        "bold",
        "dim",
        "italic",
        "underline",
        "blink",
        "blink2",
        "reverse",
        "conceal",
        "strike",
        "underline2",
        "frame",
        "encircle",
        "overline",
        "link",
    }
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def style_for_attributes(attributes: Mapping[str, Any]) -> Optional[Style]:
    """Translate run attributes into a ``rich`` style; unknown keys are dropped."""

    if not attributes:
        return None
    supported: Dict[str, Any] = {}
    for key, value in attributes.items():
        if key in RICH_STYLE_ATTRIBUTES:
            supported[key] = value
        else:
            telemetry.record_event(
                "adapter.unsupported_attribute",
                level="debug",
                data={"attribute": key},
                logger_name="regex_highlight.adapters",
            )
    if not supported:
        return None
    return Style(**supported)


def render_run(run: StyledRun) -> Text:
    style = style_for_attributes(run.attributes)
    return Text(run.text.replace("\r\n", "\n"), style=style or "")


def render_document(host: InMemoryRichText) -> Text:
    """Render every block as one line group, separated by newlines."""

    rendered = Text()
    blocks = host.blocks
    for index, block in enumerate(blocks):
        for run in block.runs:
            rendered.append_text(render_run(run))
        if index < len(blocks) - 1:
            rendered.append("\n")
    return rendered


@dataclass(slots=True)
class TextualHighlightHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_preview: Callable[[Text], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHighlightAdapter:
    """Bridges editor widgets, the in-memory host and the highlight behaviour."""

    def __init__(
        self,
        behaviour: RegexHighlightBehaviour,
        host: InMemoryRichText,
        hooks: TextualHighlightHooks,
    ) -> None:
        self.behaviour = behaviour
        self.host = host
        self.hooks = hooks
        self._rendered_version = -1
        host.subscribe_text_changed(self._on_host_changed)
        if not behaviour.attached:
            behaviour.attach(host)
        self.refresh()

    def close(self) -> None:
        self.host.unsubscribe_text_changed(self._on_host_changed)
        self.behaviour.detach()

    def handle_editor_text(self, text: str, *, caret_text: str = "") -> None:
        """Push the editor's full text into the host.

        ``caret_text`` is the editor text before the cursor; only its length
        in text elements is used.
        """

        caret_offset = count_text_elements(caret_text.replace("\r\n", "\n"))
        self.host.load_text(text, caret_offset=caret_offset)
        self._log("editor ->", length=len(text), caret=caret_offset)

    def set_pattern(self, source: Optional[str]) -> bool:
        """Apply a new pattern; compile errors are reported on the status line."""

        try:
            self.behaviour.set_pattern(source or None)
        except PatternCompileError as exc:
            self.hooks.update_status(f"pattern error: {exc.error}")
            self._log("pattern !", source=source, error=str(exc.error))
            return False
        self.hooks.update_status(f"pattern: {source}" if source else "no pattern")
        self.restyle()
        return True

    def restyle(self) -> None:
        outcome = self.behaviour.restyle()
        if outcome is not None:
            self._log(
                "restyle <-",
                status=outcome.status,
                segments=outcome.segment_count,
                matches=outcome.match_count,
            )
            if outcome.rebuilt:
                self.hooks.update_status(f"{outcome.match_count} match(es)")
        self.refresh()

    def refresh(self) -> None:
        self._rendered_version = self.host.version
        self.hooks.update_preview(render_document(self.host))

    def _on_host_changed(self, *_args: object) -> None:
        if self.host.version != self._rendered_version:
            self.refresh()

    def _log(self, prefix: str, **fields: object) -> None:
        parts = [prefix]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        self.hooks.log(" ".join(parts))


__all__ = [
    "RICH_STYLE_ATTRIBUTES",
    "TextualHighlightAdapter",
    "TextualHighlightHooks",
    "render_document",
    "render_run",
    "style_for_attributes",
]
