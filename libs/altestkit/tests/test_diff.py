"""Tests for line splitting, LCS alignment and diff rendering."""

from __future__ import annotations

from altestkit.diff import (
    BLOCK_SEPARATOR,
    LEGEND,
    ChangeKind,
    Line,
    compute_diff,
    render_diff,
    split_lines,
    visualize,
)
from altestkit.diff.renderer import DiffBlock, DiffEntry, align


class TestSplitLines:
    def test_empty_text_has_no_lines(self) -> None:
        assert split_lines("") == []

    def test_terminators_are_kept(self) -> None:
        assert split_lines("a\r\nb\rc\n") == [
            Line("a", "\r\n"),
            Line("b", "\r"),
            Line("c", "\n"),
        ]

    def test_last_line_without_terminator(self) -> None:
        assert split_lines("a\nb") == [Line("a", "\n"), Line("b", "")]

    def test_single_newline(self) -> None:
        assert split_lines("\n") == [Line("", "\n")]

    def test_lines_differ_by_ending(self) -> None:
        assert Line("a", "\n") != Line("a", "\r\n")


class TestVisualize:
    def test_whitespace_glyphs(self) -> None:
        assert visualize("a b\tc\r\n") == "a·b→c␍␊"

    def test_plain_text_unchanged(self) -> None:
        assert visualize("Flag") == "Flag"

    def test_line_visible(self) -> None:
        assert Line(" x", "\n").visible() == "·x␊"


class TestAlign:
    @staticmethod
    def _lines(chars: str) -> list[Line]:
        return [Line(c) for c in chars]

    def test_lcs_length(self) -> None:
        ops = align(self._lines("ABCABBA"), self._lines("CBABAC"))
        assert sum(1 for op in ops if op[0] == "equal") == 4

    def test_ops_cover_both_sides(self) -> None:
        expected, actual = self._lines("ABCABBA"), self._lines("CBABAC")
        ops = align(expected, actual)
        left = [i for op, i, _ in ops if op in ("equal", "delete")]
        right = [j for op, _, j in ops if op in ("equal", "insert")]
        assert left == list(range(len(expected)))
        assert right == list(range(len(actual)))

    def test_identical_inputs(self) -> None:
        lines = self._lines("abc")
        assert align(lines, lines) == [("equal", 0, 0), ("equal", 1, 1), ("equal", 2, 2)]

    def test_empty_sides(self) -> None:
        assert align([], self._lines("ab")) == [("insert", None, 0), ("insert", None, 1)]
        assert align(self._lines("ab"), []) == [("delete", 0, None), ("delete", 1, None)]


class TestComputeDiff:
    def test_equal_inputs_produce_no_blocks(self) -> None:
        text = "table T\r\n{\r\n}\r\n"
        assert compute_diff(text, text) == []
        assert render_diff(text, text) == ""

    def test_single_changed_line(self) -> None:
        blocks = compute_diff("a\nb\nc\n", "a\nB\nc\n")
        assert blocks == [
            DiffBlock(
                (
                    DiffEntry(2, ChangeKind.REMOVED, "B␊"),
                    DiffEntry(2, ChangeKind.ADDED, "b␊"),
                )
            )
        ]
        assert blocks[0].first_line == 2

    def test_line_ending_difference(self) -> None:
        blocks = compute_diff("a\r\n", "a\n")
        assert len(blocks) == 1
        assert [e.render() for e in blocks[0].entries] == ["-    1: a␊", "+    1: a␍␊"]

    def test_missing_trailing_newline(self) -> None:
        blocks = compute_diff("a", "a\n")
        assert [e.rendered_line for e in blocks[0].entries] == ["a␊", "a"]

    def test_pure_insertion_header_names_actual_line(self) -> None:
        blocks = compute_diff("a\nb\n", "a\n")
        assert len(blocks) == 1
        assert blocks[0].entries == (DiffEntry(2, ChangeKind.ADDED, "b␊"),)
        assert blocks[0].render() == "Line 2:\n+    2: b␊"

    def test_separate_blocks(self) -> None:
        blocks = compute_diff("a\nX\nc\nY\n", "a\nb\nc\nd\n")
        assert [b.first_line for b in blocks] == [2, 4]

    def test_whitespace_only_change_is_visible(self) -> None:
        blocks = compute_diff("x  := 1;\n", "x := 1;\n")
        assert [e.rendered_line for e in blocks[0].entries] == ["x·:=·1;␊", "x··:=·1;␊"]


class TestRenderDiff:
    def test_layout(self) -> None:
        report = render_diff("a\nb\n", "a\nc\n")
        assert report == "\n".join(
            [
                LEGEND,
                BLOCK_SEPARATOR,
                "Line 2:",
                "-    2: c␊",
                "+    2: b␊",
                BLOCK_SEPARATOR,
            ]
        )

    def test_deterministic(self) -> None:
        actual = "one\ntwo\nthree\n"
        expected = "one\n2\nthree\nfour\n"
        assert render_diff(actual, expected) == render_diff(actual, expected)

    def test_every_block_separated(self) -> None:
        report = render_diff("a\nX\nc\nY\n", "a\nb\nc\nd\n")
        assert report.count(BLOCK_SEPARATOR) == 3
        assert "Line 2:" in report
        assert "Line 4:" in report
