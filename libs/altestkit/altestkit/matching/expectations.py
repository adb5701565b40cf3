"""Expectation model: what a test case expects a run to produce."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from altestkit.diagnostics.location import TextSpan
from altestkit.markup.locators import DiagnosticLocator, locator_for
from altestkit.markup.spans import LineMarker, ResolvedSpan
from altestkit.matching.transform import verify_transformation


@dataclass(frozen=True)
class ExpectedDiagnostic:
    """A diagnostic that must (or must not) be reported at a locator."""

    id: str
    locator: DiagnosticLocator
    message: str | None = None

    @classmethod
    def at(
        cls,
        diagnostic_id: str,
        target: ResolvedSpan | LineMarker | TextSpan,
        message: str | None = None,
    ) -> ExpectedDiagnostic:
        return cls(diagnostic_id, locator_for(target), message)


def expect_at_all(
    diagnostic_id: str,
    targets: Iterable[ResolvedSpan | LineMarker | TextSpan],
) -> list[ExpectedDiagnostic]:
    """One expectation of *diagnostic_id* per target, in target order."""
    return [ExpectedDiagnostic.at(diagnostic_id, t) for t in targets]


@dataclass(frozen=True)
class ExpectedTransformation:
    """The text a code action must produce, verbatim."""

    text: str

    def verify(self, actual: str) -> None:
        """Raise ``TransformationMismatchError`` unless *actual* is this text."""
        verify_transformation(actual, self.text)
