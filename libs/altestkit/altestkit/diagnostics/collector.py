"""Diagnostic collector handed to analyzers while they run."""

from __future__ import annotations

from altestkit.diagnostics.diagnostic import Diagnostic, DiagnosticDescriptor
from altestkit.diagnostics.location import TextSpan
from altestkit.diagnostics.severity import DiagnosticSeverity


class DiagnosticCollector:
    """Accumulates diagnostics reported during one analysis pass."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        """Record an already-built diagnostic."""
        self._diagnostics.append(diagnostic)

    def report_descriptor(
        self,
        descriptor: DiagnosticDescriptor,
        span: TextSpan,
        *args: object,
    ) -> None:
        """Record a diagnostic built from *descriptor* at *span*."""
        self._diagnostics.append(descriptor.create(span, *args))

    def error(self, diagnostic_id: str, message: str, span: TextSpan) -> None:
        """Record an error diagnostic."""
        self._diagnostics.append(Diagnostic(diagnostic_id, span, message, DiagnosticSeverity.ERROR))

    def has_errors(self) -> bool:
        """Return True if any error diagnostics have been recorded."""
        return any(d.severity == DiagnosticSeverity.ERROR for d in self._diagnostics)

    def get_all(self) -> list[Diagnostic]:
        """Return a copy of all collected diagnostics, in report order."""
        return list(self._diagnostics)

    def format_all(self) -> str:
        """Format all diagnostics as a newline-separated string."""
        return "\n".join(str(d) for d in self._diagnostics)
