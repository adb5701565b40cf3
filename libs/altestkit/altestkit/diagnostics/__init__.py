"""Diagnostics subpackage (Layer 0 -- zero internal dependencies)."""

from altestkit.diagnostics.collector import DiagnosticCollector
from altestkit.diagnostics.diagnostic import Diagnostic, DiagnosticDescriptor
from altestkit.diagnostics.location import SourceLocation, TextSpan, line_of, line_starts
from altestkit.diagnostics.severity import DiagnosticSeverity

__all__ = [
    "TextSpan",
    "SourceLocation",
    "line_of",
    "line_starts",
    "DiagnosticSeverity",
    "DiagnosticDescriptor",
    "Diagnostic",
    "DiagnosticCollector",
]
