"""Marker subpackage (Layer 1 -- depends on diagnostics, errors)."""

from altestkit.markup.locators import DiagnosticLocator, LineLocator, SpanLocator, locator_for
from altestkit.markup.parser import (
    DEFAULT_CLOSE_MARKER,
    DEFAULT_OPEN_MARKER,
    MarkupParser,
    parse_markup,
)
from altestkit.markup.spans import LineMarker, MarkedText, ResolvedSpan

__all__ = [
    "DEFAULT_OPEN_MARKER",
    "DEFAULT_CLOSE_MARKER",
    "MarkupParser",
    "parse_markup",
    "MarkedText",
    "ResolvedSpan",
    "LineMarker",
    "DiagnosticLocator",
    "SpanLocator",
    "LineLocator",
    "locator_for",
]
