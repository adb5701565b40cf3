"""The closed set of run kinds: diagnostics, fixes, refactorings, completions.

Each check knows how to drive a compilation and what to collect into a
``RunResult``; the runner owns setup, deadlines and cleanup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from altestkit.diagnostics.diagnostic import Diagnostic
from altestkit.diagnostics.location import TextSpan
from altestkit.engine.actions import CodeAction, CompletionItem
from altestkit.engine.base import Compilation
from altestkit.engine.components import (
    CodeFixProvider,
    CompletionProvider,
    DiagnosticAnalyzer,
    RefactoringProvider,
)
from altestkit.markup.locators import DiagnosticLocator


@dataclass
class RunResult:
    """Raw results of one run, before any matching."""

    text: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    available_actions: list[CodeAction] = field(default_factory=list)
    completions: list[CompletionItem] = field(default_factory=list)
    # Diagnostics a fix run asked the provider about.
    fixed_diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class RunContext:
    compilation: Compilation
    options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.compilation.text


class Check(ABC):
    """One kind of run."""

    kind: str = "check"

    @abstractmethod
    async def run(self, context: RunContext) -> RunResult:
        ...


@dataclass
class DiagnosticCheck(Check):
    """Run analyzers and collect what they report."""

    analyzers: Sequence[DiagnosticAnalyzer]
    kind = "diagnostics"

    async def run(self, context: RunContext) -> RunResult:
        bound = context.compilation.with_analyzers(self.analyzers, context.options)
        diagnostics = await bound.get_analyzer_diagnostics()
        return RunResult(context.text, diagnostics=diagnostics)


@dataclass
class FixApplication(Check):
    """Run prerequisite analyzers, then ask a fix provider for actions.

    Only diagnostics with ``diagnostic_id`` (and, if given, at ``locator``)
    are offered to the provider.  Actions keep the engine's order, first by
    diagnostic then by registration.
    """

    provider: CodeFixProvider
    analyzers: Sequence[DiagnosticAnalyzer]
    diagnostic_id: str
    locator: DiagnosticLocator | None = None
    kind = "code fix"

    async def run(self, context: RunContext) -> RunResult:
        bound = context.compilation.with_analyzers(self.analyzers, context.options)
        diagnostics = await bound.get_analyzer_diagnostics()
        targets = [
            d
            for d in diagnostics
            if d.id == self.diagnostic_id
            and (self.locator is None or self.locator.matches(d.span, context.text))
        ]
        actions: list[CodeAction] = []
        for diagnostic in targets:
            actions.extend(await context.compilation.run_code_fixes(self.provider, diagnostic))
        return RunResult(
            context.text,
            diagnostics=diagnostics,
            available_actions=actions,
            fixed_diagnostics=targets,
        )


@dataclass
class RefactoringApplication(Check):
    """Ask a refactoring provider for actions on a selected span."""

    provider: RefactoringProvider
    span: TextSpan
    kind = "refactoring"

    async def run(self, context: RunContext) -> RunResult:
        actions = await context.compilation.run_refactorings(self.provider, self.span)
        return RunResult(context.text, available_actions=actions)


@dataclass
class CompletionCheck(Check):
    """Ask a completion provider for items at a caret position."""

    provider: CompletionProvider
    position: int
    kind = "completion"

    async def run(self, context: RunContext) -> RunResult:
        items = await context.compilation.run_completions(self.provider, self.position)
        return RunResult(context.text, completions=items)
