"""Line-level structural diff between actual and expected text.

The alignment is an exact longest-common-subsequence over lines (including
their terminators), so a report is reproducible byte for byte.  Lines only
present in the expected text are ``Removed`` entries, lines only present in
the actual text are ``Added`` entries.  Runs of changed lines with no
matching line between them form one block; blocks are rendered with a
header naming their first line and separated by a fixed separator line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from altestkit.diff.lines import Line, split_lines

BLOCK_SEPARATOR = "=" * 40
LEGEND = "(- expected, + actual; · space, → tab, ␍ CR, ␊ LF)"


class ChangeKind(Enum):
    """Direction of a differing line."""

    REMOVED = "-"
    ADDED = "+"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DiffEntry:
    """One differing line, numbered (1-based) within its own text."""

    line_number: int
    kind: ChangeKind
    rendered_line: str

    def render(self) -> str:
        return f"{self.kind}{self.line_number:>5}: {self.rendered_line}"


@dataclass(frozen=True)
class DiffBlock:
    """A contiguous group of differing lines."""

    entries: tuple[DiffEntry, ...]

    @property
    def first_line(self) -> int:
        """First affected line, preferring the expected side."""
        removed = [e.line_number for e in self.entries if e.kind is ChangeKind.REMOVED]
        if removed:
            return removed[0]
        return self.entries[0].line_number

    def render(self) -> str:
        body = "\n".join(entry.render() for entry in self.entries)
        return f"Line {self.first_line}:\n{body}"


# ---------------------------------------------------------------------------
# Alignment
# ---------------------------------------------------------------------------

# Edit operations: ("equal", i, j), ("delete", i, None), ("insert", None, j)
_Op = tuple[str, int | None, int | None]


def align(expected: Sequence[Line], actual: Sequence[Line]) -> list[_Op]:
    """Return an exact LCS edit script turning *expected* into *actual*."""
    n, m = len(expected), len(actual)

    prefix = 0
    while prefix < n and prefix < m and expected[prefix] == actual[prefix]:
        prefix += 1
    suffix = 0
    while (
        suffix < n - prefix
        and suffix < m - prefix
        and expected[n - 1 - suffix] == actual[m - 1 - suffix]
    ):
        suffix += 1

    a = expected[prefix : n - suffix]
    b = actual[prefix : m - suffix]
    rows, cols = len(a), len(b)

    # lcs[i][j] = LCS length of a[i:] and b[j:]
    lcs = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(rows - 1, -1, -1):
        row, below = lcs[i], lcs[i + 1]
        for j in range(cols - 1, -1, -1):
            if a[i] == b[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])

    ops: list[_Op] = [("equal", k, k) for k in range(prefix)]
    i = j = 0
    while i < rows and j < cols:
        if a[i] == b[j]:
            ops.append(("equal", prefix + i, prefix + j))
            i += 1
            j += 1
        elif lcs[i + 1][j] >= lcs[i][j + 1]:
            ops.append(("delete", prefix + i, None))
            i += 1
        else:
            ops.append(("insert", None, prefix + j))
            j += 1
    while i < rows:
        ops.append(("delete", prefix + i, None))
        i += 1
    while j < cols:
        ops.append(("insert", None, prefix + j))
        j += 1
    ops.extend(("equal", n - suffix + k, m - suffix + k) for k in range(suffix))
    return ops


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_diff(actual: str, expected: str) -> list[DiffBlock]:
    """Return the blocks of lines that differ between *actual* and *expected*.

    Equal inputs produce no blocks.
    """
    expected_lines = split_lines(expected)
    actual_lines = split_lines(actual)

    blocks: list[DiffBlock] = []
    removed: list[DiffEntry] = []
    added: list[DiffEntry] = []

    def flush() -> None:
        if removed or added:
            blocks.append(DiffBlock(tuple(removed + added)))
            removed.clear()
            added.clear()

    for op, i, j in align(expected_lines, actual_lines):
        if op == "equal":
            flush()
        elif op == "delete" and i is not None:
            removed.append(DiffEntry(i + 1, ChangeKind.REMOVED, expected_lines[i].visible()))
        elif op == "insert" and j is not None:
            added.append(DiffEntry(j + 1, ChangeKind.ADDED, actual_lines[j].visible()))
    flush()
    return blocks


def render_blocks(blocks: Sequence[DiffBlock]) -> str:
    """Serialize *blocks* into the report format."""
    if not blocks:
        return ""
    parts = [LEGEND]
    for block in blocks:
        parts.append(BLOCK_SEPARATOR)
        parts.append(block.render())
    parts.append(BLOCK_SEPARATOR)
    return "\n".join(parts)


def render_diff(actual: str, expected: str) -> str:
    """Compute and render the diff of *actual* against *expected*."""
    return render_blocks(compute_diff(actual, expected))
