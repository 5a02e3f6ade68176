import re

import pytest

from regex_highlight.document import Block, StyledRun
from regex_highlight.styling import (
    PatternCompileError,
    PatternConfig,
    PatternFlag,
    StyleSpec,
    build_block,
    build_runs,
    compile_pattern,
    normalize_specs,
    resolve_attributes,
    segment_text,
)


def test_flag_parsing_accepts_several_spellings() -> None:
    assert PatternFlag.parse("ignoreCase") == PatternFlag.IGNORE_CASE
    assert PatternFlag.parse("IGNORE_CASE") == PatternFlag.IGNORE_CASE
    assert PatternFlag.parse("i") == PatternFlag.IGNORE_CASE
    assert PatternFlag.parse("ignoreCase|multiline") == (
        PatternFlag.IGNORE_CASE | PatternFlag.MULTILINE
    )
    assert PatternFlag.parse(["dotAll", PatternFlag.VERBOSE]) == (
        PatternFlag.DOT_ALL | PatternFlag.VERBOSE
    )
    assert PatternFlag.parse(None) == PatternFlag(0)


def test_unknown_flag_is_rejected() -> None:
    with pytest.raises(ValueError):
        PatternFlag.parse("rightToLeft")


def test_flags_map_onto_re_flags() -> None:
    flags = PatternFlag.IGNORE_CASE | PatternFlag.DOT_ALL

    assert flags.to_re_flags() == re.IGNORECASE | re.DOTALL


def test_compile_applies_flags() -> None:
    pattern = PatternConfig("foo", PatternFlag.IGNORE_CASE).compile()

    assert [m.group() for m in pattern.finditer("Foo fOO foo")] == ["Foo", "fOO", "foo"]


def test_compile_error_carries_context() -> None:
    with pytest.raises(PatternCompileError) as info:
        PatternConfig("(unclosed", PatternFlag.MULTILINE).compile()

    assert info.value.source == "(unclosed"
    assert info.value.flags == PatternFlag.MULTILINE
    assert isinstance(info.value.error, re.error)
    assert isinstance(info.value, ValueError)


def test_compile_pattern_without_source_returns_none() -> None:
    assert compile_pattern(None, "ignoreCase") is None
    assert compile_pattern("a+", "i").flags & re.IGNORECASE


def test_later_specs_win_for_same_attribute() -> None:
    specs = normalize_specs(
        [("color", "red"), StyleSpec("bold", True), ("color", "blue")]
    )

    assert resolve_attributes(specs) == {"color": "blue", "bold": True}


def test_spec_coercion_from_mapping() -> None:
    specs = normalize_specs({"bold": True, "italic": False})

    assert specs == (StyleSpec("bold", True), StyleSpec("italic", False))
    assert normalize_specs(None) == ()


def test_empty_attribute_rejected() -> None:
    with pytest.raises(ValueError):
        StyleSpec("", True)


def test_build_runs_styles_only_matches() -> None:
    text = "foo bar foo"
    segments = segment_text(text, re.compile("foo"))

    runs = build_runs(text, segments, (StyleSpec("bold", True),))

    assert runs == [
        StyledRun("foo", {"bold": True}),
        StyledRun(" bar "),
        StyledRun("foo", {"bold": True}),
    ]
    assert [run.styled for run in runs] == [True, False, True]


def test_build_block_without_specs_still_rebuilds() -> None:
    text = "foo bar"
    segments = segment_text(text, re.compile("bar"))

    block = build_block(text, segments, ())

    assert block == Block((StyledRun("foo "), StyledRun("bar")))
    assert block.text == text
