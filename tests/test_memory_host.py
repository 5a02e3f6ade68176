from typing import List

import pytest

from regex_highlight.document import Block, StyledRun, TextPointer
from regex_highlight.host import HostValidationError, InMemoryRichText, SymbolKind


def test_full_text_appends_terminator_per_block() -> None:
    host = InMemoryRichText.from_text("ab\ncd")

    assert host.get_full_text() == "ab\r\ncd\r\n"
    assert len(host.blocks) == 2


def test_trailing_newline_keeps_empty_last_line() -> None:
    host = InMemoryRichText()

    host.load_text("foo\n")

    assert host.get_full_text() == "foo\r\n\r\n"
    assert host.blocks == (Block.plain("foo"), Block())


def test_empty_document_has_no_text() -> None:
    host = InMemoryRichText.from_text("")

    assert host.get_full_text() == ""
    assert host.content_start == host.content_end


def test_edges_occupy_positions_without_text() -> None:
    host = InMemoryRichText.from_text("ab\ncd")
    kinds = [symbol.kind for symbol in host.symbols()]

    assert kinds[:2] == [SymbolKind.BLOCK_START, SymbolKind.RUN_START]
    assert host.content_end == TextPointer(12)
    # Three symbols forward only crosses one character.
    assert host.get_text_range(host.content_start, TextPointer(3)) == "a"


def test_terminator_counts_as_one_text_element() -> None:
    host = InMemoryRichText.from_text("ab\ncd")

    assert host.get_text_range_length(host.content_start, host.content_end) == 6


def test_combining_marks_form_one_text_element() -> None:
    host = InMemoryRichText.from_text("e\u0301x")

    assert host.get_text_range_length(host.content_start, host.content_end) == 3
    elements = [s.text for s in host.symbols() if s.kind is SymbolKind.ELEMENT]
    assert elements == ["e\u0301", "x"]


def test_advance_clamps_to_document_bounds() -> None:
    host = InMemoryRichText.from_text("abc")

    assert host.advance(host.content_start, 100) == host.content_end
    assert host.advance(TextPointer(2), -10) == host.content_start


def test_pointer_validation() -> None:
    host = InMemoryRichText.from_text("abc")

    with pytest.raises(HostValidationError) as info:
        host.caret_position = TextPointer(99)
    assert info.value.pointer == TextPointer(99)


def test_insert_text_moves_caret_and_notifies() -> None:
    host = InMemoryRichText.from_text("ac")
    seen: List[int] = []
    host.subscribe_text_changed(lambda source: seen.append(source.version))
    host.caret_position = TextPointer(3)  # after "a"

    host.insert_text("b")

    assert host.get_full_text() == "abc\r\n"
    assert host.get_text_range(host.content_start, host.caret_position) == "ab"
    assert seen == [host.version]


def test_insert_into_empty_document_creates_block() -> None:
    host = InMemoryRichText()

    host.insert_text("hi")

    assert host.get_full_text() == "hi\r\n"
    assert host.get_text_range(host.content_start, host.caret_position) == "hi"


def test_delete_range_keeps_structure() -> None:
    host = InMemoryRichText.from_text("ab\ncd")

    host.delete_range(TextPointer(3), TextPointer(9))

    assert host.get_full_text() == "a\r\nd\r\n"
    assert len(host.blocks) == 2
    assert host.caret_position == TextPointer(3)


def test_replace_content_resets_viewport_and_notifies() -> None:
    host = InMemoryRichText.from_text("abc")
    host.scroll_to(4, 20)
    host.caret_position = host.content_end
    notified: List[str] = []
    host.subscribe_text_changed(lambda _: notified.append("changed"))

    host.replace_content(Block.of([StyledRun("x", {"bold": True})]))

    assert host.get_full_text() == "x\r\n"
    assert host.caret_position == host.content_start
    assert (host.horizontal_offset, host.vertical_offset) == (0.0, 0.0)
    assert notified == ["changed"]


def test_unsubscribe_unknown_handler_is_noop() -> None:
    host = InMemoryRichText.from_text("abc")

    host.unsubscribe_text_changed(lambda _: None)

    assert host.handler_count == 0


def test_load_text_places_caret_before_notifying() -> None:
    host = InMemoryRichText()
    carets: List[str] = []
    host.subscribe_text_changed(
        lambda source: carets.append(
            source.get_text_range(source.content_start, source.caret_position)
        )
    )

    host.load_text("foo\nbar", caret_offset=5)

    assert carets == ["foo\r\nb"]
