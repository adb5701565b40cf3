"""Locators: how an expected diagnostic position is compared to a reported one.

A span locator requires exact span equality; a line locator only requires
the reported diagnostic to start on the given line.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from altestkit.diagnostics.location import SourceLocation, TextSpan, line_of
from altestkit.markup.spans import LineMarker, ResolvedSpan


class DiagnosticLocator(ABC):
    """Base type for expected-diagnostic locators."""

    @abstractmethod
    def matches(self, span: TextSpan, text: str) -> bool:
        """Return True if a diagnostic at *span* satisfies this locator."""

    @abstractmethod
    def overlaps(self, span: TextSpan, text: str) -> bool:
        """Return True if a diagnostic at *span* touches this locator."""

    @abstractmethod
    def describe(self, text: str, file: str = "<test>") -> str:
        """Human-readable position of this locator within *text*."""


@dataclass(frozen=True)
class SpanLocator(DiagnosticLocator):
    span: TextSpan

    @classmethod
    def from_resolved(cls, resolved: ResolvedSpan) -> SpanLocator:
        return cls(resolved.span)

    def matches(self, span: TextSpan, text: str) -> bool:
        return span == self.span

    def overlaps(self, span: TextSpan, text: str) -> bool:
        return span.overlaps(self.span)

    def describe(self, text: str, file: str = "<test>") -> str:
        return str(SourceLocation.from_span(text, self.span, file))


@dataclass(frozen=True)
class LineLocator(DiagnosticLocator):
    line: int

    @classmethod
    def from_marker(cls, marker: LineMarker) -> LineLocator:
        return cls(marker.line)

    def matches(self, span: TextSpan, text: str) -> bool:
        return line_of(text, span.start) == self.line

    def overlaps(self, span: TextSpan, text: str) -> bool:
        return self.matches(span, text)

    def describe(self, text: str, file: str = "<test>") -> str:
        return f"{file}: line {self.line}"


def locator_for(target: ResolvedSpan | LineMarker | TextSpan) -> DiagnosticLocator:
    """Build the locator matching the kind of *target*."""
    if isinstance(target, LineMarker):
        return LineLocator.from_marker(target)
    if isinstance(target, ResolvedSpan):
        return SpanLocator.from_resolved(target)
    if isinstance(target, TextSpan):
        return SpanLocator(target)
    raise TypeError(f"Cannot locate diagnostics with {type(target).__name__}")
