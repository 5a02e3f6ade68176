import pytest

from regex_highlight.behaviour import RegexHighlightBehaviour
from regex_highlight.config import HighlightOptions, parse_style_string
from regex_highlight.scheduling import ManualTimerSource
from regex_highlight.styling import PatternCompileError, PatternFlag, StyleSpec


def test_from_mapping_accepts_camel_case_keys() -> None:
    options = HighlightOptions.from_mapping(
        {
            "regexPattern": r"\d+",
            "regexOptions": "ignoreCase|multiline",
            "propertyValues": [("bold", True)],
            "textChangedDelay": "250",
        }
    )

    assert options.pattern == r"\d+"
    assert options.flags == PatternFlag.IGNORE_CASE | PatternFlag.MULTILINE
    assert options.style_specs == (StyleSpec("bold", True),)
    assert options.change_delay_ms == 250
    assert options.terminator == "\r\n"


def test_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="patern"):
        HighlightOptions.from_mapping({"patern": "foo"})


def test_from_env_reads_prefixed_values() -> None:
    environ = {
        "REGEX_HIGHLIGHT_PATTERN": "foo",
        "REGEX_HIGHLIGHT_FLAGS": "ignoreCase",
        "REGEX_HIGHLIGHT_STYLE": "bold=true; color=red",
        "REGEX_HIGHLIGHT_CHANGE_DELAY_MS": "-1",
        "REGEX_HIGHLIGHT_TERMINATOR": "\\n",
        "UNRELATED": "ignored",
    }

    options = HighlightOptions.from_env(environ)

    assert options.pattern == "foo"
    assert options.flags == PatternFlag.IGNORE_CASE
    assert options.style_specs == (StyleSpec("bold", True), StyleSpec("color", "red"))
    assert options.change_delay_ms == -1
    assert options.terminator == "\n"


def test_from_env_keeps_non_ascii_terminator() -> None:
    assert HighlightOptions.from_env(
        {"REGEX_HIGHLIGHT_TERMINATOR": "\u2029"}
    ).terminator == "\u2029"
    assert HighlightOptions.from_env(
        {"REGEX_HIGHLIGHT_TERMINATOR": "\\u2029"}
    ).terminator == "\u2029"
    assert HighlightOptions.from_env(
        {"REGEX_HIGHLIGHT_TERMINATOR": "\u00b6\\n"}
    ).terminator == "\u00b6\n"


def test_from_env_defaults_when_unset() -> None:
    options = HighlightOptions.from_env({})

    assert options == HighlightOptions()


def test_from_env_rejects_non_integer_delay() -> None:
    with pytest.raises(ValueError, match="CHANGE_DELAY_MS"):
        HighlightOptions.from_env({"REGEX_HIGHLIGHT_CHANGE_DELAY_MS": "soon"})


def test_parse_style_string() -> None:
    assert parse_style_string("bold=yes;;underline=off; color = blue ") == (
        StyleSpec("bold", True),
        StyleSpec("underline", False),
        StyleSpec("color", "blue"),
    )
    with pytest.raises(ValueError):
        parse_style_string("bold")


def test_behaviour_from_options() -> None:
    options = HighlightOptions(
        pattern="foo", flags="ignoreCase", style_specs=[("italic", True)], change_delay_ms=40
    )

    behaviour = RegexHighlightBehaviour.from_options(options, timers=ManualTimerSource())

    assert behaviour.pattern == "foo"
    assert behaviour.flags == PatternFlag.IGNORE_CASE
    assert behaviour.style_specs == (StyleSpec("italic", True),)
    assert behaviour.change_delay_ms == 40


def test_configure_with_invalid_pattern_changes_nothing() -> None:
    behaviour = RegexHighlightBehaviour(
        timers=ManualTimerSource(), pattern="foo", change_delay_ms=10
    )

    with pytest.raises(PatternCompileError):
        behaviour.configure(HighlightOptions(pattern="(", change_delay_ms=99))

    assert behaviour.pattern == "foo"
    assert behaviour.change_delay_ms == 10
