"""Matching reported diagnostics against expected ones.

Every failure of a check is collected before ``ExpectationNotMetError`` is
raised, so one run lists all missing and unexpected diagnostics together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from altestkit.diagnostics.diagnostic import Diagnostic
from altestkit.diagnostics.location import SourceLocation
from altestkit.errors import ExpectationNotMetError
from altestkit.markup.locators import DiagnosticLocator
from altestkit.matching.expectations import ExpectedDiagnostic


@dataclass
class MatchReport:
    """Outcome of matching expectations against reported diagnostics."""

    matched: list[tuple[ExpectedDiagnostic, Diagnostic]] = field(default_factory=list)
    missing: list[ExpectedDiagnostic] = field(default_factory=list)
    wrong_message: list[tuple[ExpectedDiagnostic, Diagnostic]] = field(default_factory=list)
    unexpected: list[Diagnostic] = field(default_factory=list)

    def ok(self, strict: bool = True) -> bool:
        if self.missing or self.wrong_message:
            return False
        return not (strict and self.unexpected)


def _describe(diagnostic: Diagnostic, text: str, file: str) -> str:
    where = SourceLocation.from_span(text, diagnostic.span, file)
    return f"{diagnostic.id} at {where}: {diagnostic.message!r}"


def _augment(
    expectation: int,
    edges: dict[int, list[int]],
    owner: dict[int, int],
    seen: set[int],
) -> bool:
    """Kuhn's augmenting path step: find *expectation* a diagnostic, rerouting others."""
    for diag in edges[expectation]:
        if diag in seen:
            continue
        seen.add(diag)
        if diag not in owner or _augment(owner[diag], edges, owner, seen):
            owner[diag] = expectation
            return True
    return False


def match_diagnostics(
    expected: Sequence[ExpectedDiagnostic],
    actual: Sequence[Diagnostic],
    text: str,
) -> MatchReport:
    """Pair expectations with reported diagnostics by maximum bipartite matching.

    An expectation can take any diagnostic with the same id that satisfies
    its locator.  Pairs that agree on the message are matched first; an
    expectation still unpaired may then take a located diagnostic whose
    message differs, which is recorded as a message mismatch instead of a
    miss.  Among equally good matchings, earlier diagnostics are preferred.
    """
    located: dict[int, list[int]] = {}
    exact: dict[int, list[int]] = {}
    for i, expectation in enumerate(expected):
        located[i] = [
            j
            for j, diag in enumerate(actual)
            if diag.id == expectation.id and expectation.locator.matches(diag.span, text)
        ]
        exact[i] = [
            j
            for j in located[i]
            if expectation.message is None or actual[j].message == expectation.message
        ]

    owner: dict[int, int] = {}
    for i in range(len(expected)):
        _augment(i, exact, owner, set())

    paired = set(owner.values())
    # Expectations left over may fall back to a mismatched message; paired
    # ones keep to exact edges so rerouting never costs them their message.
    edges = {i: (exact[i] if i in paired else located[i]) for i in range(len(expected))}
    for i in range(len(expected)):
        if i not in paired:
            _augment(i, edges, owner, set())

    partner = {i: j for j, i in owner.items()}
    report = MatchReport()
    for i, expectation in enumerate(expected):
        if i not in partner:
            report.missing.append(expectation)
            continue
        diag = actual[partner[i]]
        if expectation.message is None or diag.message == expectation.message:
            report.matched.append((expectation, diag))
        else:
            report.wrong_message.append((expectation, diag))

    report.unexpected = [diag for j, diag in enumerate(actual) if j not in owner]
    return report


def assert_diagnostics_match(
    expected: Sequence[ExpectedDiagnostic],
    actual: Sequence[Diagnostic],
    text: str,
    *,
    strict: bool = True,
    file: str = "<test>",
) -> MatchReport:
    """Raise ``ExpectationNotMetError`` unless every expectation is met.

    With *strict*, reported diagnostics of the expected ids that no
    expectation consumed are failures too.
    """
    report = match_diagnostics(expected, actual, text)
    failures: list[str] = []
    for expectation in report.missing:
        failures.append(
            f"Expected diagnostic {expectation.id} at {expectation.locator.describe(text, file)} "
            "was not reported"
        )
    for expectation, diag in report.wrong_message:
        failures.append(
            f"Diagnostic {diag.id} at {expectation.locator.describe(text, file)} has message "
            f"{diag.message!r}, expected {expectation.message!r}"
        )
    if strict:
        expected_ids = {e.id for e in expected}
        for diag in report.unexpected:
            if diag.id in expected_ids:
                failures.append(f"Unexpected diagnostic {_describe(diag, text, file)}")
    if failures:
        if actual:
            reported = "\n".join(f"  {_describe(d, text, file)}" for d in actual)
        else:
            reported = "  (none)"
        failures.append(f"Reported diagnostics:\n{reported}")
        raise ExpectationNotMetError(failures)
    return report


def assert_no_diagnostic_at(
    diagnostic_id: str,
    locators: Sequence[DiagnosticLocator],
    actual: Sequence[Diagnostic],
    text: str,
    *,
    file: str = "<test>",
) -> None:
    """Raise ``ExpectationNotMetError`` if a *diagnostic_id* diagnostic touches any locator."""
    failures: list[str] = []
    for locator in locators:
        for diag in actual:
            if diag.id == diagnostic_id and locator.overlaps(diag.span, text):
                failures.append(
                    f"Expected no diagnostic {diagnostic_id} at {locator.describe(text, file)}, "
                    f"but found {_describe(diag, text, file)}"
                )
    if failures:
        raise ExpectationNotMetError(failures)
