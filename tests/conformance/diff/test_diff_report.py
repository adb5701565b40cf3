"""
Conformance: Diff renderer - blocks, line numbers and visible whitespace
"""
import pytest
from altestkit.diff import BLOCK_SEPARATOR, ChangeKind, compute_diff, render_diff


# Each test case is a tuple: (description, actual, expected, block_headers)
# block_headers is the list of first affected line numbers, one per block

CASES = [
    ("equal_empty", "", "", []),
    ("equal_text", "table T\n{\n}\n", "table T\n{\n}\n", []),
    ("equal_crlf", "a\r\nb\r\n", "a\r\nb\r\n", []),
    ("crlf_vs_lf", "a\r\n", "a\n", [1]),
    ("one_changed_line", "a\nX\nc\n", "a\nb\nc\n", [2]),
    ("two_blocks", "X\nb\nc\nY\n", "a\nb\nc\nd\n", [1, 4]),
    ("adjacent_changes_one_block", "a\nX\nY\nd\n", "a\nb\nc\nd\n", [2]),
    ("added_line", "a\nb\nnew\n", "a\nb\n", [3]),
    ("removed_line", "a\n", "a\ngone\n", [2]),
    ("trailing_whitespace", "a \n", "a\n", [1]),
]


@pytest.mark.parametrize("description,actual,expected,headers", CASES, ids=[c[0] for c in CASES])
def test_diff_report(description, actual, expected, headers):
    """Blocks are reported exactly where the texts diverge."""
    blocks = compute_diff(actual, expected)
    assert [b.first_line for b in blocks] == headers
    report = render_diff(actual, expected)
    if headers:
        assert report.count(BLOCK_SEPARATOR) == len(headers) + 1
        for line in headers:
            assert f"Line {line}:" in report
    else:
        assert report == ""


def test_line_ending_difference_is_one_block():
    """Visible characters are identical; only the terminator differs."""
    [block] = compute_diff("a\r\n", "a\n")
    assert [(e.kind, e.line_number) for e in block.entries] == [
        (ChangeKind.REMOVED, 1),
        (ChangeKind.ADDED, 1),
    ]
    assert block.render() == "Line 1:\n-    1: a␊\n+    1: a␍␊"


def test_report_is_reproducible():
    actual = "one\ttwo\nthree\r\nfour"
    expected = "one two\nthree\nfour\n"
    first = render_diff(actual, expected)
    assert first == render_diff(actual, expected)
    assert "one→two␊" in first
    assert "one·two␊" in first
    assert "three␍␊" in first
