"""Tests for the marker parser and locators."""

from __future__ import annotations

import pytest

from altestkit.diagnostics.location import TextSpan
from altestkit.errors import MalformedMarkupError
from altestkit.markup import (
    LineLocator,
    LineMarker,
    MarkupParser,
    ResolvedSpan,
    SpanLocator,
    locator_for,
    parse_markup,
)


class TestParseMarkup:
    def test_text_without_markers_round_trips(self) -> None:
        text = "table 50100 T\n{\n    fields { }\n}\n"
        marked = parse_markup(text)
        assert marked.text == text
        assert marked.spans == ()

    def test_empty_text(self) -> None:
        marked = parse_markup("")
        assert marked.text == ""
        assert marked.spans == ()

    def test_single_span_offsets(self) -> None:
        marked = parse_markup("ab[|cd|]ef")
        assert marked.text == "abcdef"
        assert marked.spans == (ResolvedSpan(2, 2, 0),)

    def test_sibling_spans_are_ordered(self) -> None:
        marked = parse_markup("[|a|]b[|cd|]e")
        assert marked.text == "abcde"
        assert marked.spans == (ResolvedSpan(0, 1, 0), ResolvedSpan(2, 2, 1))

    def test_offsets_account_for_earlier_markers(self) -> None:
        marked = parse_markup("x[|y|]z[|w|]")
        assert marked.text == "xyzw"
        assert [s.start for s in marked.spans] == [1, 3]
        assert [marked.text[s.start : s.end] for s in marked.spans] == ["y", "w"]

    def test_empty_span(self) -> None:
        marked = parse_markup("a[||]b")
        assert marked.text == "ab"
        assert marked.spans == (ResolvedSpan(1, 0, 0),)

    def test_line_endings_preserved(self) -> None:
        marked = parse_markup("a\r\n[|b|]\n")
        assert marked.text == "a\r\nb\n"
        assert marked.spans[0].start == 3

    def test_lone_bracket_is_text(self) -> None:
        marked = parse_markup("x := a[1]; [|y|]")
        assert marked.text == "x := a[1]; y"
        assert marked.spans == (ResolvedSpan(11, 1, 0),)

    def test_custom_markers(self) -> None:
        marked = parse_markup("a<<b>>c", open_marker="<<", close_marker=">>")
        assert marked.text == "abc"
        assert marked.spans == (ResolvedSpan(1, 1, 0),)

    def test_parser_can_parse_twice(self) -> None:
        parser = MarkupParser("a[|b|]c")
        first = parser.parse()
        assert parser.parse() == first
        assert first.text == "abc"

    def test_identical_markers_rejected(self) -> None:
        with pytest.raises(ValueError):
            MarkupParser("x", "||", "||")

    def test_empty_marker_rejected(self) -> None:
        with pytest.raises(ValueError):
            MarkupParser("x", "", "|]")


class TestMalformedMarkup:
    def test_nested_markers_rejected(self) -> None:
        with pytest.raises(MalformedMarkupError) as exc_info:
            parse_markup("[|a[|b|]c|]")
        assert exc_info.value.offset == 3

    def test_unmatched_open_rejected(self) -> None:
        with pytest.raises(MalformedMarkupError) as exc_info:
            parse_markup("a[|b")
        assert exc_info.value.offset == 1
        assert "offset 1" in str(exc_info.value)

    def test_unmatched_close_rejected(self) -> None:
        with pytest.raises(MalformedMarkupError) as exc_info:
            parse_markup("a|]b")
        assert exc_info.value.offset == 1

    def test_close_after_complete_pair_rejected(self) -> None:
        with pytest.raises(MalformedMarkupError):
            parse_markup("[|a|]b|]")


class TestSingleSpan:
    def test_exactly_one(self) -> None:
        assert parse_markup("a[|b|]").single_span() == ResolvedSpan(1, 1, 0)

    def test_none(self) -> None:
        with pytest.raises(MalformedMarkupError):
            parse_markup("ab").single_span()

    def test_two(self) -> None:
        with pytest.raises(MalformedMarkupError):
            parse_markup("[|a|][|b|]").single_span()


class TestLocators:
    def test_span_locator_exact_match(self) -> None:
        locator = SpanLocator(TextSpan(2, 3))
        assert locator.matches(TextSpan(2, 3), "")
        assert not locator.matches(TextSpan(2, 2), "")

    def test_span_locator_overlap(self) -> None:
        locator = SpanLocator(TextSpan(2, 3))
        assert locator.overlaps(TextSpan(4, 5), "")
        assert not locator.overlaps(TextSpan(5, 1), "")

    def test_span_locator_describe(self) -> None:
        assert SpanLocator(TextSpan(3, 1)).describe("ab\ncd") == "<test>(2,1)-(2,2)"

    def test_line_locator_matches_start_line(self) -> None:
        text = "a\nbb\nc"
        locator = LineLocator(2)
        assert locator.matches(TextSpan(2, 2), text)
        assert locator.matches(TextSpan(3, 3), text)
        assert not locator.matches(TextSpan(5, 1), text)

    def test_line_marker_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            LineMarker(0)

    def test_locator_for(self) -> None:
        assert locator_for(LineMarker(3)) == LineLocator(3)
        assert locator_for(ResolvedSpan(1, 2, 0)) == SpanLocator(TextSpan(1, 2))
        assert locator_for(TextSpan(4, 0)) == SpanLocator(TextSpan(4, 0))
        with pytest.raises(TypeError):
            locator_for(7)  # type: ignore[arg-type]
