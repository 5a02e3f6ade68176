"""Executable Textual app demonstrating live regex highlighting."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Footer, Header, Input, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use regex_highlight.adapters.textual.app"
    ) from exc

from regex_highlight.behaviour import RegexHighlightBehaviour
from regex_highlight.config import HighlightOptions, parse_style_string
from regex_highlight.host import InMemoryRichText
from regex_highlight.runtime import telemetry

from .controller import TextualHighlightAdapter, TextualHighlightHooks
from .timers import TextualTimerSource

DEFAULT_STYLE = "bold=true;color=yellow"


class RegexHighlightApp(App[None]):
    """Editor on the left, highlighted preview on the right."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#pattern-input {
		height: 3;
	}

	#panes {
		height: 1fr;
	}

	#editor, #preview {
		width: 1fr;
		border: round $accent;
	}

	#preview {
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+r", "restyle", "Restyle"),
    ]

    def __init__(self, options: HighlightOptions, *, initial_text: str = "") -> None:
        super().__init__()
        self.options = options
        self.initial_text = initial_text
        self.host = InMemoryRichText.from_text(initial_text, name="editor")
        self.adapter: TextualHighlightAdapter | None = None
        self._preview: Static | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(
            value=self.options.pattern or "",
            placeholder="Regular expression",
            id="pattern-input",
        )
        with Horizontal(id="panes"):
            yield TextArea(self.initial_text, id="editor")
            with Vertical(id="preview"):
                self._preview = Static("", id="preview-text")
                yield self._preview
        self._status = Static("", id="status-line")
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        behaviour = RegexHighlightBehaviour.from_options(
            self.options, timers=TextualTimerSource(self)
        )
        hooks = TextualHighlightHooks(
            update_preview=self._update_preview,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualHighlightAdapter(behaviour, self.host, hooks)
        self.adapter.restyle()

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()
            self.adapter = None

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if not self.adapter:
            return
        area = event.text_area
        caret_text = area.get_text_range((0, 0), area.cursor_location)
        self.adapter.handle_editor_text(area.text, caret_text=caret_text)

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.adapter and event.input.id == "pattern-input":
            self.adapter.set_pattern(event.value)

    def action_restyle(self) -> None:
        if self.adapter:
            self.adapter.restyle()

    def _update_preview(self, text: Text) -> None:
        if self._preview:
            self._preview.update(text)

    def _update_status(self, status: str) -> None:
        if self._status:
            self._status.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "adapter.log",
            level="debug",
            data={"line": line},
            logger_name="regex_highlight.adapters",
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Live regex highlighting demo.")
    parser.add_argument("file", nargs="?", help="Text file to load into the editor")
    parser.add_argument(
        "--pattern",
        default=None,
        help="Regular expression to highlight (default: $REGEX_HIGHLIGHT_PATTERN)",
    )
    parser.add_argument(
        "--flags",
        default=None,
        help="Matching flags, e.g. 'ignoreCase|multiline'",
    )
    parser.add_argument(
        "--style",
        default=None,
        help=f"Style specs as attr=value;... (default: {DEFAULT_STYLE})",
    )
    parser.add_argument(
        "--delay",
        type=int,
        default=None,
        help="Change delay in ms: <0 manual (ctrl+r), 0 immediate, >0 debounce",
    )
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> HighlightOptions:
    base = HighlightOptions.from_env(os.environ)
    overrides = base.to_dict()
    if args.pattern is not None:
        overrides["pattern"] = args.pattern
    if args.flags is not None:
        overrides["flags"] = args.flags
    if args.style is not None:
        overrides["style_specs"] = parse_style_string(args.style)
    elif not base.style_specs:
        overrides["style_specs"] = parse_style_string(DEFAULT_STYLE)
    if args.delay is not None:
        overrides["change_delay_ms"] = args.delay
    return HighlightOptions(**overrides)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    initial_text = Path(args.file).read_text(encoding="utf-8") if args.file else ""
    app = RegexHighlightApp(build_options(args), initial_text=initial_text)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
