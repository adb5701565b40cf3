"""Test fixtures: the API test authors call.

Each assertion parses the markup, runs the component through the
``AnalysisRunner``, and matches the raw results, raising one of the
``ExpectationFailure`` errors when the expectation is not met::

    fixture = AnalyzerTestFixture(MyAnalyzer())
    fixture.has_diagnostic_at_all_markers("table T { [|field(1;F;Integer){}|] }", "AL0001")
"""

from __future__ import annotations

from typing import Sequence

from altestkit.config import CodeFixConfig, FixtureConfig
from altestkit.diagnostics.diagnostic import Diagnostic, DiagnosticDescriptor
from altestkit.diagnostics.location import SourceLocation
from altestkit.engine.actions import CodeAction
from altestkit.engine.base import AnalysisEngine
from altestkit.engine.components import (
    CodeFixProvider,
    Component,
    CompletionProvider,
    DiagnosticAnalyzer,
    RefactoringProvider,
)
from altestkit.errors import (
    ComponentFaultedError,
    ExpectationFailure,
    ExpectationNotMetError,
    HarnessError,
    MalformedMarkupError,
)
from altestkit.markup.locators import DiagnosticLocator, LineLocator, SpanLocator
from altestkit.markup.parser import parse_markup
from altestkit.markup.spans import LineMarker, MarkedText
from altestkit.matching.diagnostics import assert_diagnostics_match, assert_no_diagnostic_at
from altestkit.matching.expectations import ExpectedDiagnostic, ExpectedTransformation, expect_at_all
from altestkit.matching.selectors import CodeActionSelector, select_code_action
from altestkit.runner.checks import (
    Check,
    CompletionCheck,
    DiagnosticCheck,
    FixApplication,
    RefactoringApplication,
    RunResult,
)
from altestkit.runner.runner import AnalysisRunner
from altestkit.version import VersionGate


def _diagnostic_id(diagnostic: str | DiagnosticDescriptor) -> str:
    return diagnostic.id if isinstance(diagnostic, DiagnosticDescriptor) else diagnostic


def _apply(action: CodeAction, component: Component) -> str:
    try:
        return action.apply()
    except (HarnessError, ExpectationFailure):
        raise
    except Exception as exc:
        raise ComponentFaultedError(f"{component.name} ({action.title!r})", exc) from exc


class BaseTestFixture:
    """Parsing, running and version gating shared by every fixture kind."""

    def __init__(
        self,
        engine: AnalysisEngine | None = None,
        config: FixtureConfig | None = None,
        version: VersionGate | None = None,
    ) -> None:
        self.config = config or FixtureConfig()
        self.runner = AnalysisRunner(engine, self.config)
        self.version = version or VersionGate()

    @property
    def file(self) -> str:
        return self.config.document_name

    def parse(self, markup: str) -> MarkedText:
        return parse_markup(markup, self.config.open_marker, self.config.close_marker)

    def run(self, check: Check, text: str) -> RunResult:
        return self.runner.run_sync(check, text)


class AnalyzerTestFixture(BaseTestFixture):
    """Assertions about the diagnostics one or more analyzers report."""

    def __init__(
        self,
        analyzers: DiagnosticAnalyzer | Sequence[DiagnosticAnalyzer],
        engine: AnalysisEngine | None = None,
        config: FixtureConfig | None = None,
        version: VersionGate | None = None,
    ) -> None:
        super().__init__(engine, config, version)
        if isinstance(analyzers, DiagnosticAnalyzer):
            analyzers = [analyzers]
        self.analyzers = list(analyzers)

    def get_diagnostics(self, code: str) -> list[Diagnostic]:
        """Run the analyzers on plain *code* (no markers)."""
        return self.run(DiagnosticCheck(self.analyzers), code).diagnostics

    def _diagnostics_of(self, text: str, diagnostic_id: str) -> list[Diagnostic]:
        return [d for d in self.get_diagnostics(text) if d.id == diagnostic_id]

    # ------------------------------------------------------------------
    # Presence
    # ------------------------------------------------------------------

    def has_diagnostic(
        self,
        markup: str,
        diagnostic: str | DiagnosticDescriptor,
        message: str | None = None,
    ) -> None:
        """A diagnostic must be reported at the single marked span."""
        marked = self.parse(markup)
        diagnostic_id = _diagnostic_id(diagnostic)
        expected = [ExpectedDiagnostic.at(diagnostic_id, marked.single_span(), message)]
        actual = self._diagnostics_of(marked.text, diagnostic_id)
        assert_diagnostics_match(expected, actual, marked.text, strict=False, file=self.file)

    def has_diagnostic_at_line(
        self,
        code: str,
        diagnostic: str | DiagnosticDescriptor,
        line: int,
        message: str | None = None,
    ) -> None:
        """A diagnostic must start on *line* (1-based)."""
        diagnostic_id = _diagnostic_id(diagnostic)
        expected = [ExpectedDiagnostic.at(diagnostic_id, LineMarker(line), message)]
        actual = self._diagnostics_of(code, diagnostic_id)
        assert_diagnostics_match(expected, actual, code, strict=False, file=self.file)

    def has_diagnostic_at_all_markers(self, markup: str, diagnostic: str | DiagnosticDescriptor) -> None:
        """Every marked span gets exactly one diagnostic, and no other span gets one."""
        marked = self.parse(markup)
        diagnostic_id = _diagnostic_id(diagnostic)
        if not marked.spans:
            raise MalformedMarkupError(f"Markup contains no {self.config.open_marker} markers")
        expected = expect_at_all(diagnostic_id, marked.spans)
        actual = self._diagnostics_of(marked.text, diagnostic_id)
        assert_diagnostics_match(expected, actual, marked.text, strict=True, file=self.file)

    # ------------------------------------------------------------------
    # Absence
    # ------------------------------------------------------------------

    def _assert_absent(self, text: str, diagnostic_id: str, locators: list[DiagnosticLocator]) -> None:
        actual = self._diagnostics_of(text, diagnostic_id)
        assert_no_diagnostic_at(diagnostic_id, locators, actual, text, file=self.file)

    def no_diagnostic(self, markup: str, diagnostic: str | DiagnosticDescriptor) -> None:
        """No diagnostic may touch the single marked span."""
        marked = self.parse(markup)
        locator = SpanLocator.from_resolved(marked.single_span())
        self._assert_absent(marked.text, _diagnostic_id(diagnostic), [locator])

    def no_diagnostic_at_line(self, code: str, diagnostic: str | DiagnosticDescriptor, line: int) -> None:
        self._assert_absent(code, _diagnostic_id(diagnostic), [LineLocator(line)])

    def no_diagnostic_at_all_markers(self, markup: str, diagnostic: str | DiagnosticDescriptor) -> None:
        """No diagnostic may touch any marked span."""
        marked = self.parse(markup)
        locators: list[DiagnosticLocator] = [SpanLocator.from_resolved(s) for s in marked.spans]
        self._assert_absent(marked.text, _diagnostic_id(diagnostic), locators)


class CodeFixTestFixture(BaseTestFixture):
    """Applies a fix provider's action and compares the result verbatim."""

    def __init__(
        self,
        provider: CodeFixProvider,
        analyzers: DiagnosticAnalyzer | Sequence[DiagnosticAnalyzer] = (),
        engine: AnalysisEngine | None = None,
        config: CodeFixConfig | None = None,
        version: VersionGate | None = None,
    ) -> None:
        config = config or CodeFixConfig()
        super().__init__(engine, config, version)
        if isinstance(analyzers, DiagnosticAnalyzer):
            analyzers = [analyzers]
        self.provider = provider
        self.analyzers = list(analyzers) + list(getattr(config, "additional_analyzers", ()))

    def _fix(self, text: str, diagnostic_id: str, locator: DiagnosticLocator) -> RunResult:
        result = self.run(FixApplication(self.provider, self.analyzers, diagnostic_id, locator), text)
        if not result.fixed_diagnostics:
            reported = [
                f"  {d.id} at {SourceLocation.from_span(text, d.span, self.file)}"
                for d in result.diagnostics
            ] or ["  (none)"]
            raise ExpectationNotMetError(
                [
                    f"Expected diagnostic {diagnostic_id} at {locator.describe(text, self.file)} "
                    "to apply the fix to, but none was reported",
                    "Reported diagnostics:\n" + "\n".join(reported),
                ]
            )
        return result

    def test_code_fix(
        self,
        markup: str,
        expected: str,
        diagnostic: str | DiagnosticDescriptor,
        selector: CodeActionSelector | None = None,
    ) -> None:
        """Fix the diagnostic at the single marked span; the result must equal *expected*."""
        marked = self.parse(markup)
        locator = SpanLocator.from_resolved(marked.single_span())
        self._apply_and_verify(marked.text, expected, _diagnostic_id(diagnostic), locator, selector)

    def test_code_fix_at_line(
        self,
        code: str,
        expected: str,
        diagnostic: str | DiagnosticDescriptor,
        line: int,
        selector: CodeActionSelector | None = None,
    ) -> None:
        self._apply_and_verify(code, expected, _diagnostic_id(diagnostic), LineLocator(line), selector)

    def _apply_and_verify(
        self,
        text: str,
        expected: str,
        diagnostic_id: str,
        locator: DiagnosticLocator,
        selector: CodeActionSelector | None,
    ) -> None:
        result = self._fix(text, diagnostic_id, locator)
        action = select_code_action(result.available_actions, selector)
        ExpectedTransformation(expected).verify(_apply(action, self.provider))

    def no_code_fix(self, markup: str, diagnostic: str | DiagnosticDescriptor) -> None:
        """The provider must offer nothing for the diagnostic at the marked span."""
        marked = self.parse(markup)
        diagnostic_id = _diagnostic_id(diagnostic)
        locator = SpanLocator.from_resolved(marked.single_span())
        result = self.run(FixApplication(self.provider, self.analyzers, diagnostic_id, locator), marked.text)
        if result.available_actions:
            titles = ", ".join(repr(a.title) for a in result.available_actions)
            raise ExpectationNotMetError(
                [f"Expected no code fix for {diagnostic_id} at {locator.describe(marked.text, self.file)}, "
                 f"but got {titles}"]
            )


class CodeRefactoringTestFixture(BaseTestFixture):
    """Applies a refactoring on the marked span and compares the result verbatim."""

    def __init__(
        self,
        provider: RefactoringProvider,
        engine: AnalysisEngine | None = None,
        config: FixtureConfig | None = None,
        version: VersionGate | None = None,
    ) -> None:
        super().__init__(engine, config, version)
        self.provider = provider

    def test_code_refactoring(
        self,
        markup: str,
        expected: str,
        selector: CodeActionSelector | None = None,
    ) -> None:
        marked = self.parse(markup)
        span = marked.single_span().span
        result = self.run(RefactoringApplication(self.provider, span), marked.text)
        action = select_code_action(result.available_actions, selector)
        ExpectedTransformation(expected).verify(_apply(action, self.provider))

    def no_code_refactoring(self, markup: str) -> None:
        marked = self.parse(markup)
        span = marked.single_span().span
        result = self.run(RefactoringApplication(self.provider, span), marked.text)
        if result.available_actions:
            titles = ", ".join(repr(a.title) for a in result.available_actions)
            where = SourceLocation.from_span(marked.text, span, self.file)
            raise ExpectationNotMetError([f"Expected no refactoring at {where}, but got {titles}"])


class CompletionProviderFixture(BaseTestFixture):
    """Checks the completion items offered at the marked caret position.

    The caret is the start of the single marked span, so ``[||]`` works.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        engine: AnalysisEngine | None = None,
        config: FixtureConfig | None = None,
        version: VersionGate | None = None,
    ) -> None:
        super().__init__(engine, config, version)
        self.provider = provider

    def _labels_at(self, markup: str) -> tuple[MarkedText, list[str]]:
        marked = self.parse(markup)
        position = marked.single_span().start
        result = self.run(CompletionCheck(self.provider, position), marked.text)
        return marked, [item.label for item in result.completions]

    def test_completion(self, markup: str, expected: Sequence[str]) -> None:
        """Every label in *expected* must be offered."""
        marked, offered = self._labels_at(markup)
        missing = [label for label in expected if label not in offered]
        if missing:
            where = SourceLocation.from_span(marked.text, marked.single_span().span, self.file)
            raise ExpectationNotMetError(
                [f"Completion {label!r} was not offered at {where}" for label in missing]
                + [f"Offered: {offered}"]
            )

    def no_completion(self, markup: str, unexpected: Sequence[str]) -> None:
        """None of the labels in *unexpected* may be offered."""
        marked, offered = self._labels_at(markup)
        present = [label for label in unexpected if label in offered]
        if present:
            where = SourceLocation.from_span(marked.text, marked.single_span().span, self.file)
            raise ExpectationNotMetError(
                [f"Completion {label!r} should not be offered at {where}" for label in present]
            )
