"""In-memory rich-text control used by the demo app and the test-suite.

The document is a list of blocks, each a list of runs. Positions are counted
in *symbols*, the same way flow-document editors count them: every block and
every run contributes an opening and a closing edge symbol, and every text
element inside a run contributes one symbol. Edge symbols occupy a position
but add no text, except the closing edge of a block which reads back as the
block terminator (``"\\r\\n"``). Moving a pointer forward by ``n`` therefore
advances by fewer than ``n`` text elements whenever it crosses an edge.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from regex_highlight.document import (
    Block,
    StyledRun,
    TextPointer,
    count_text_elements,
    split_text_elements,
)

from .protocol import HostValidationError, TextChangedHandler

BLOCK_TERMINATOR = "\r\n"


class SymbolKind(enum.Enum):
    BLOCK_START = "block_start"
    RUN_START = "run_start"
    ELEMENT = "element"
    RUN_END = "run_end"
    BLOCK_END = "block_end"


@dataclass(frozen=True, slots=True)
class Symbol:
    kind: SymbolKind
    block: int
    run: int = -1
    element: int = -1
    text: str = ""


class InMemoryRichText:
    """A tiny rich-text control implementing ``HostControl``."""

    def __init__(
        self, blocks: Iterable[Block] = (), *, name: str = "document"
    ) -> None:
        self.name = name
        self._blocks: List[Block] = list(blocks)
        self._symbols: Optional[List[Symbol]] = None
        self._caret = TextPointer(0)
        self._horizontal = 0.0
        self._vertical = 0.0
        self._handlers: List[TextChangedHandler] = []
        self.version = 0

    @classmethod
    def from_text(cls, text: str, *, name: str = "document") -> "InMemoryRichText":
        """Build a document holding one plain block per line of ``text``.

        A trailing newline leaves an empty last block, as in an editor.
        """

        return cls(_blocks_from_text(text), name=name)

    # -- structure ---------------------------------------------------------

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def symbols(self) -> Sequence[Symbol]:
        if self._symbols is None:
            self._symbols = _build_symbols(self._blocks)
        return self._symbols

    @property
    def content_start(self) -> TextPointer:
        return TextPointer(0)

    @property
    def content_end(self) -> TextPointer:
        return TextPointer(len(self.symbols()))

    def ensure_pointer(self, pointer: TextPointer) -> TextPointer:
        if pointer.offset > len(self.symbols()):
            raise HostValidationError("Pointer beyond end of document", pointer=pointer)
        return pointer

    # -- text --------------------------------------------------------------

    def get_text_range(self, start: TextPointer, end: TextPointer) -> str:
        start = self.ensure_pointer(start)
        end = self.ensure_pointer(end)
        if start > end:
            start, end = end, start
        parts: List[str] = []
        for symbol in self.symbols()[start.offset : end.offset]:
            if symbol.kind is SymbolKind.ELEMENT:
                parts.append(symbol.text)
            elif symbol.kind is SymbolKind.BLOCK_END:
                parts.append(BLOCK_TERMINATOR)
        return "".join(parts)

    def get_full_text(self) -> str:
        return self.get_text_range(self.content_start, self.content_end)

    def get_text_range_length(self, start: TextPointer, end: TextPointer) -> int:
        return count_text_elements(self.get_text_range(start, end))

    def advance(self, position: TextPointer, count: int) -> TextPointer:
        position = self.ensure_pointer(position)
        target = position.offset + count
        return TextPointer(min(max(target, 0), len(self.symbols())))

    # -- caret and viewport ------------------------------------------------

    @property
    def caret_position(self) -> TextPointer:
        return self._caret

    @caret_position.setter
    def caret_position(self, position: TextPointer) -> None:
        self._caret = self.ensure_pointer(position)

    @property
    def horizontal_offset(self) -> float:
        return self._horizontal

    @property
    def vertical_offset(self) -> float:
        return self._vertical

    def scroll_to(self, horizontal: float, vertical: float) -> None:
        self._horizontal = max(0.0, float(horizontal))
        self._vertical = max(0.0, float(vertical))

    # -- notifications -----------------------------------------------------

    def subscribe_text_changed(self, handler: TextChangedHandler) -> None:
        self._handlers.append(handler)

    def unsubscribe_text_changed(self, handler: TextChangedHandler) -> None:
        # Removing a handler that was never added is a no-op, like an event
        # unsubscription on most UI toolkits.
        if handler in self._handlers:
            self._handlers.remove(handler)

    def _changed(self) -> None:
        self._symbols = None
        self.version += 1
        for handler in list(self._handlers):
            handler(self)

    # -- mutation ----------------------------------------------------------

    def replace_content(self, block: Block) -> None:
        self._blocks = [block]
        self._symbols = None
        # Replacing the content resets the caret and the viewport.
        self._caret = TextPointer(0)
        self._horizontal = 0.0
        self._vertical = 0.0
        self._changed()

    def load_text(self, text: str, *, caret_offset: int = 0) -> None:
        """Replace the document with plain blocks built from ``text``.

        The caret is placed after ``caret_offset`` text elements before the
        change is announced.
        """

        self._blocks = _blocks_from_text(text)
        self._symbols = None
        self._caret = self.pointer_after_elements(caret_offset)
        self._changed()

    def pointer_after_elements(self, count: int) -> TextPointer:
        """Pointer directly after the ``count``-th text element."""

        if count <= 0:
            return self.content_start
        seen = 0
        for index, symbol in enumerate(self.symbols()):
            if symbol.kind in (SymbolKind.ELEMENT, SymbolKind.BLOCK_END):
                seen += 1
                if seen == count:
                    if symbol.kind is SymbolKind.BLOCK_END:
                        # Land at the start of the next block's text.
                        return self._skip_opening_edges(index + 1)
                    return TextPointer(index + 1)
        return self.content_end

    def _skip_opening_edges(self, offset: int) -> TextPointer:
        symbols = self.symbols()
        while offset < len(symbols) and symbols[offset].kind in (
            SymbolKind.BLOCK_START,
            SymbolKind.RUN_START,
        ):
            offset += 1
        return TextPointer(offset)

    def insert_text(self, text: str, *, at: Optional[TextPointer] = None) -> None:
        """Insert ``text`` at ``at`` (default: the caret) and move the caret past it."""

        if not text:
            return
        pointer = self.ensure_pointer(at if at is not None else self._caret)
        if not self._blocks:
            self._blocks = [Block.plain(text)]
            self._symbols = None
            self._caret = self._pointer_for(0, 0, count_text_elements(text))
            self._changed()
            return

        block_index, run_index, element_index = self._insertion_point(pointer)
        block = self._blocks[block_index]
        runs = list(block.runs)
        if run_index == len(runs):
            runs.append(StyledRun(""))
        run = runs[run_index]
        elements = split_text_elements(run.text)
        head = "".join(elements[:element_index])
        tail = "".join(elements[element_index:])
        runs[run_index] = StyledRun(head + text + tail, run.attributes)
        self._blocks[block_index] = Block.of(runs)
        self._symbols = None
        self._caret = self._pointer_for(
            block_index, run_index, count_text_elements(head + text)
        )
        self._changed()

    def delete_range(self, start: TextPointer, end: TextPointer) -> None:
        """Remove the text elements between two pointers.

        Block and run edges inside the range are kept; only text is removed.
        """

        start = self.ensure_pointer(start)
        end = self.ensure_pointer(end)
        if start > end:
            start, end = end, start
        doomed: dict[tuple[int, int], set[int]] = {}
        for symbol in self.symbols()[start.offset : end.offset]:
            if symbol.kind is SymbolKind.ELEMENT:
                doomed.setdefault((symbol.block, symbol.run), set()).add(
                    symbol.element
                )
        if not doomed:
            return
        for (block_index, run_index), removed in doomed.items():
            runs = list(self._blocks[block_index].runs)
            run = runs[run_index]
            kept = [
                element
                for index, element in enumerate(split_text_elements(run.text))
                if index not in removed
            ]
            runs[run_index] = StyledRun("".join(kept), run.attributes)
            self._blocks[block_index] = Block.of(runs)
        self._symbols = None
        self._caret = start
        self._changed()

    def _insertion_point(self, pointer: TextPointer) -> tuple[int, int, int]:
        symbols = self.symbols()
        offset = pointer.offset
        # Inside a run (between its edges): insert right there.
        if 0 < offset < len(symbols):
            before = symbols[offset - 1]
            if before.kind in (SymbolKind.RUN_START, SymbolKind.ELEMENT):
                return before.block, before.run, before.element + 1
        # On an edge: use the next run in the same block, else append to the
        # block that the pointer touches.
        for symbol in symbols[offset:]:
            if symbol.kind is SymbolKind.RUN_START:
                return symbol.block, symbol.run, 0
            if symbol.kind is SymbolKind.BLOCK_END:
                return symbol.block, len(self._blocks[symbol.block].runs), 0
        last = len(self._blocks) - 1
        return last, len(self._blocks[last].runs), 0

    def _pointer_for(self, block: int, run: int, element: int) -> TextPointer:
        for index, symbol in enumerate(self.symbols()):
            if (
                symbol.kind is SymbolKind.RUN_START
                and symbol.block == block
                and symbol.run == run
            ):
                return TextPointer(index + 1 + element)
        return self.content_end


def _blocks_from_text(text: str) -> List[Block]:
    if not text:
        return []
    normalized = text.replace("\r\n", "\n")
    return [Block.plain(line) for line in normalized.split("\n")]


def _build_symbols(blocks: Sequence[Block]) -> List[Symbol]:
    symbols: List[Symbol] = []
    for block_index, block in enumerate(blocks):
        symbols.append(Symbol(SymbolKind.BLOCK_START, block_index))
        for run_index, run in enumerate(block.runs):
            symbols.append(Symbol(SymbolKind.RUN_START, block_index, run_index))
            for element_index, element in enumerate(split_text_elements(run.text)):
                symbols.append(
                    Symbol(
                        SymbolKind.ELEMENT,
                        block_index,
                        run_index,
                        element_index,
                        element,
                    )
                )
            symbols.append(Symbol(SymbolKind.RUN_END, block_index, run_index))
        symbols.append(Symbol(SymbolKind.BLOCK_END, block_index))
    return symbols


__all__ = ["BLOCK_TERMINATOR", "InMemoryRichText", "Symbol", "SymbolKind"]
