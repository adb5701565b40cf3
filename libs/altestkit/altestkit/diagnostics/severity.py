"""Diagnostic severity levels reported by analysis components."""

from __future__ import annotations

from enum import Enum


class DiagnosticSeverity(Enum):
    """Severity level of a reported diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HIDDEN = "hidden"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> DiagnosticSeverity:
        """Look up a severity by its lower-case name, as used in config files."""
        for member in cls:
            if member.value == name.lower():
                return member
        raise ValueError(f"Unknown diagnostic severity: {name!r}")
