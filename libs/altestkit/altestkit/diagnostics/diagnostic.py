"""Diagnostic descriptors and reported diagnostics."""

from __future__ import annotations

from dataclasses import dataclass

from altestkit.diagnostics.location import TextSpan
from altestkit.diagnostics.severity import DiagnosticSeverity


@dataclass(frozen=True)
class DiagnosticDescriptor:
    """Static description of a rule an analyzer can report."""

    id: str
    title: str
    message_format: str = "{0}"
    default_severity: DiagnosticSeverity = DiagnosticSeverity.WARNING

    def create(self, span: TextSpan, *args: object, severity: DiagnosticSeverity | None = None) -> Diagnostic:
        """Build a diagnostic for *span*, formatting the message with *args*."""
        message = self.message_format.format(*args) if args else self.message_format
        return Diagnostic(self.id, span, message, severity or self.default_severity)


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic reported against the clean text of a test document."""

    id: str
    span: TextSpan
    message: str
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING

    def __str__(self) -> str:
        return f"{self.span}: {self.severity} {self.id}: {self.message}"
