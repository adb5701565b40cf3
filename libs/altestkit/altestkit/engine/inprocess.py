"""In-process engine: runs Python components directly on a tokenized document."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Sequence

from altestkit.diagnostics.collector import DiagnosticCollector
from altestkit.diagnostics.diagnostic import Diagnostic
from altestkit.diagnostics.location import TextSpan
from altestkit.engine.actions import CodeAction, CompletionItem
from altestkit.engine.base import AnalysisEngine, Compilation, invoke_component
from altestkit.engine.components import (
    AnalysisContext,
    CodeFixContext,
    CodeFixProvider,
    CompletionContext,
    CompletionProvider,
    DiagnosticAnalyzer,
    RefactoringContext,
    RefactoringProvider,
)
from altestkit.engine.workspace import Document, Project
from altestkit.errors import ComponentFaultedError
from altestkit.syntax.lexer import Lexer
from altestkit.syntax.tokens import Token

logger = logging.getLogger(__name__)


class InProcessCompilation(Compilation):
    """Tokenizes the document once and hands the tokens to every component."""

    def __init__(self, document: Document, project: Project, options: Mapping[str, Any]) -> None:
        super().__init__(document, project)
        self.options = dict(options)
        lexical = DiagnosticCollector()
        self.tokens: list[Token] = Lexer(document.text, lexical).tokenize()
        self._lexical_diagnostics = lexical.get_all()
        self._closed = False

    async def compiler_diagnostics(self) -> list[Diagnostic]:
        return list(self._lexical_diagnostics)

    async def run_analyzers(
        self,
        analyzers: Sequence[DiagnosticAnalyzer],
        options: Mapping[str, Any],
    ) -> list[Diagnostic]:
        merged = {**self.options, **options}
        reported: list[Diagnostic] = []
        for analyzer in analyzers:
            context = AnalysisContext(self.document, self.tokens, merged)
            await invoke_component(analyzer, analyzer.analyze, context)
            diagnostics = context.collector.get_all()
            for diagnostic in diagnostics:
                if diagnostic.id not in analyzer.supported_ids:
                    raise ComponentFaultedError(
                        analyzer.name,
                        ValueError(f"Reported diagnostic {diagnostic.id} is not supported"),
                    )
            reported.extend(diagnostics)
            # Yield so a pending deadline can cancel between analyzers.
            await asyncio.sleep(0)
        return reported

    async def run_code_fixes(self, provider: CodeFixProvider, diagnostic: Diagnostic) -> list[CodeAction]:
        if diagnostic.id not in provider.fixable_diagnostic_ids:
            return []
        context = CodeFixContext(self.document, self.tokens, diagnostic)
        await invoke_component(provider, provider.register_code_fixes, context)
        return list(context.actions)

    async def run_refactorings(self, provider: RefactoringProvider, span: TextSpan) -> list[CodeAction]:
        context = RefactoringContext(self.document, self.tokens, span)
        await invoke_component(provider, provider.compute_refactorings, context)
        return list(context.actions)

    async def run_completions(self, provider: CompletionProvider, position: int) -> list[CompletionItem]:
        context = CompletionContext(self.document, self.tokens, position)
        await invoke_component(provider, provider.provide_completions, context)
        return list(context.items)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if not self._closed:
            self.tokens = []
            self._closed = True
            logger.debug("Closed compilation of %r", self.document.name)


class InProcessEngine(AnalysisEngine):
    """Engine adapter that needs no external compiler."""

    name = "in-process"

    def compile_document(
        self,
        document: Document,
        project: Project,
        options: Mapping[str, Any] | None = None,
    ) -> InProcessCompilation:
        return InProcessCompilation(document, project, options or {})
