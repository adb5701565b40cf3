"""Text spans and source location tracking for analyzer test documents."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True)
class TextSpan:
    """A contiguous character range in clean text (0-based offset)."""

    start: int
    length: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.length < 0:
            raise ValueError(f"Invalid span ({self.start}, {self.length})")

    @property
    def end(self) -> int:
        return self.start + self.length

    @classmethod
    def from_bounds(cls, start: int, end: int) -> TextSpan:
        return cls(start, end - start)

    def contains(self, offset: int) -> bool:
        """Return True if *offset* lies inside the span (end exclusive)."""
        return self.start <= offset < self.end

    def overlaps(self, other: TextSpan) -> bool:
        """Return True if both spans share at least one position.

        Empty spans overlap anything that contains their start, and two empty
        spans overlap when they sit at the same offset.
        """
        if self.length == 0 or other.length == 0:
            if self.length == 0 and other.length == 0:
                return self.start == other.start
            empty, full = (self, other) if self.length == 0 else (other, self)
            return full.start <= empty.start < full.end
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"[{self.start}..{self.end})"


def line_starts(text: str) -> list[int]:
    """Return the offsets at which each line of *text* begins.

    ``\\r\\n``, ``\\n`` and a lone ``\\r`` all terminate a line.
    """
    starts = [0]
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\r":
            if i + 1 < n and text[i + 1] == "\n":
                i += 1
            starts.append(i + 1)
        elif ch == "\n":
            starts.append(i + 1)
        i += 1
    return starts


@dataclass(frozen=True)
class SourceLocation:
    """A location in an analyzed document."""

    file: str
    line: int  # 1-indexed
    column: int  # 1-indexed
    end_line: int | None = None
    end_column: int | None = None

    @classmethod
    def from_span(cls, text: str, span: TextSpan, file: str = "<test>") -> SourceLocation:
        """Map *span* in *text* to 1-based line/column coordinates."""
        starts = line_starts(text)
        line, column = _position(starts, span.start)
        end_line, end_column = _position(starts, span.end)
        return cls(file, line, column, end_line, end_column)

    def __str__(self) -> str:
        if self.end_line is None or self.end_column is None:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}({self.line},{self.column})-({self.end_line},{self.end_column})"


def line_of(text: str, offset: int) -> int:
    """Return the 1-based line number containing *offset*."""
    return _position(line_starts(text), offset)[0]


def _position(starts: list[int], offset: int) -> tuple[int, int]:
    idx = bisect_right(starts, offset) - 1
    return idx + 1, offset - starts[idx] + 1
