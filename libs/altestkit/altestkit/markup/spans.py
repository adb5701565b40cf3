"""Resolved marker spans and line markers."""

from __future__ import annotations

from dataclasses import dataclass

from altestkit.diagnostics.location import TextSpan
from altestkit.errors import MalformedMarkupError


@dataclass(frozen=True)
class ResolvedSpan:
    """A span discovered between a marker pair, relative to the clean text.

    ``ordinal`` is the zero-based position of the span in discovery order.
    """

    start: int
    length: int
    ordinal: int = 0

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def span(self) -> TextSpan:
        return TextSpan(self.start, self.length)


@dataclass(frozen=True)
class LineMarker:
    """A 1-based line locating an expected diagnostic without inline markers."""

    line: int

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"Line markers are 1-based, got {self.line}")


@dataclass(frozen=True)
class MarkedText:
    """Result of parsing annotated text: clean text plus its spans."""

    text: str
    spans: tuple[ResolvedSpan, ...] = ()

    def single_span(self) -> ResolvedSpan:
        """Return the only span, or raise if there is not exactly one."""
        if len(self.spans) != 1:
            raise MalformedMarkupError(
                f"Expected exactly one marked span, found {len(self.spans)}"
            )
        return self.spans[0]
