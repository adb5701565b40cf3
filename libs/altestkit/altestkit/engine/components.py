"""Base classes for the components a harness run puts under test.

Component callbacks may be plain methods or coroutines; the engine awaits
whatever they return.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Mapping, Sequence

from altestkit.diagnostics.collector import DiagnosticCollector
from altestkit.diagnostics.diagnostic import Diagnostic, DiagnosticDescriptor
from altestkit.diagnostics.location import TextSpan
from altestkit.engine.actions import CodeAction, CompletionItem
from altestkit.engine.workspace import Document
from altestkit.syntax.tokens import Token


# ---------------------------------------------------------------------------
# Contexts
# ---------------------------------------------------------------------------


@dataclass
class AnalysisContext:
    """What an analyzer sees: the document, its tokens, and a report sink."""

    document: Document
    tokens: Sequence[Token]
    options: Mapping[str, Any] = field(default_factory=dict)
    collector: DiagnosticCollector = field(default_factory=DiagnosticCollector)

    @property
    def text(self) -> str:
        return self.document.text

    def report(self, diagnostic: Diagnostic) -> None:
        self.collector.report(diagnostic)


@dataclass
class CodeFixContext:
    """What a fix provider sees for one diagnostic."""

    document: Document
    tokens: Sequence[Token]
    diagnostic: Diagnostic
    actions: list[CodeAction] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def span(self) -> TextSpan:
        return self.diagnostic.span

    def register_code_fix(self, action: CodeAction) -> None:
        self.actions.append(action)


@dataclass
class RefactoringContext:
    """What a refactoring provider sees for a selected span."""

    document: Document
    tokens: Sequence[Token]
    span: TextSpan
    actions: list[CodeAction] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.document.text

    def register_refactoring(self, action: CodeAction) -> None:
        self.actions.append(action)


@dataclass
class CompletionContext:
    """What a completion provider sees at a caret position."""

    document: Document
    tokens: Sequence[Token]
    position: int
    items: list[CompletionItem] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.document.text

    def add_item(self, item: CompletionItem) -> None:
        self.items.append(item)


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


class Component(ABC):
    """Anything that can be put under test."""

    @property
    def name(self) -> str:
        return type(self).__name__


class DiagnosticAnalyzer(Component):
    """Reports diagnostics for the rules in ``supported_diagnostics``."""

    supported_diagnostics: Sequence[DiagnosticDescriptor] = ()

    @property
    def supported_ids(self) -> frozenset[str]:
        return frozenset(d.id for d in self.supported_diagnostics)

    @abstractmethod
    def analyze(self, context: AnalysisContext) -> Awaitable[None] | None:
        """Inspect ``context.document`` and report diagnostics."""


class CodeFixProvider(Component):
    """Offers code actions for diagnostics with ids in ``fixable_diagnostic_ids``."""

    fixable_diagnostic_ids: Sequence[str] = ()

    @abstractmethod
    def register_code_fixes(self, context: CodeFixContext) -> Awaitable[None] | None:
        """Register zero or more code actions for ``context.diagnostic``."""


class RefactoringProvider(Component):
    """Offers code actions for a selected span."""

    @abstractmethod
    def compute_refactorings(self, context: RefactoringContext) -> Awaitable[None] | None:
        """Register zero or more refactorings for ``context.span``."""


class CompletionProvider(Component):
    """Offers completion items at a caret position."""

    @abstractmethod
    def provide_completions(self, context: CompletionContext) -> Awaitable[None] | None:
        """Add completion items for ``context.position``."""
