"""Adapter contract between the harness and an analysis engine.

An engine compiles one document into a ``Compilation``; the compilation
runs analyzers, fix providers, refactoring providers and completion
providers against it.  Version skew of the underlying engine is the
adapter's business; the harness only talks to this interface.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Mapping, Sequence, TypeVar

from altestkit.diagnostics.diagnostic import Diagnostic
from altestkit.diagnostics.location import TextSpan
from altestkit.engine.actions import CodeAction, CompletionItem
from altestkit.engine.components import (
    CodeFixProvider,
    Component,
    CompletionProvider,
    DiagnosticAnalyzer,
    RefactoringProvider,
)
from altestkit.engine.workspace import Document, Project
from altestkit.errors import ComponentFaultedError, ExpectationFailure, HarnessError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _call_in_thread(name: str, callback: Callable[..., Any], args: tuple[Any, ...]) -> asyncio.Future:
    """Run a plain callback on a daemon thread and return a future for it.

    The running loop stays free, so a deadline can expire while the
    callback blocks.  An abandoned thread never delays interpreter exit.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def resolve(result: Any, error: Exception | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def work() -> None:
        result, error = None, None
        try:
            result = callback(*args)
        except Exception as exc:
            error = exc
        try:
            loop.call_soon_threadsafe(resolve, result, error)
        except RuntimeError:
            logger.debug("%s finished after its run was abandoned", name)

    threading.Thread(target=work, name=f"altestkit-{name}", daemon=True).start()
    return future


async def invoke_component(
    component: Component,
    callback: Callable[..., Awaitable[T] | T],
    *args: Any,
) -> T:
    """Call a component callback, awaiting it if it returns an awaitable.

    Coroutine callbacks run on the event loop; plain callbacks run on a
    daemon thread so that a deadline still applies to them.  Any exception
    escaping the component is wrapped in ``ComponentFaultedError``.
    Cancellation is never wrapped.
    """
    try:
        if inspect.iscoroutinefunction(callback):
            result = await callback(*args)
        else:
            result = await _call_in_thread(component.name, callback, args)
        if inspect.isawaitable(result):
            result = await result
        return result
    except (HarnessError, ExpectationFailure):
        raise
    except Exception as exc:
        raise ComponentFaultedError(component.name, exc) from exc


class Compilation(ABC):
    """A compiled document ready to have components run against it."""

    def __init__(self, document: Document, project: Project) -> None:
        self.document = document
        self.project = project

    @property
    def text(self) -> str:
        return self.document.text

    @abstractmethod
    async def compiler_diagnostics(self) -> list[Diagnostic]:
        """Diagnostics the engine itself reports for the document."""

    @abstractmethod
    async def run_analyzers(
        self,
        analyzers: Sequence[DiagnosticAnalyzer],
        options: Mapping[str, Any],
    ) -> list[Diagnostic]:
        """Run *analyzers* and return everything they reported, in order."""

    @abstractmethod
    async def run_code_fixes(self, provider: CodeFixProvider, diagnostic: Diagnostic) -> list[CodeAction]:
        """Return the actions *provider* offers for *diagnostic*, in engine order."""

    @abstractmethod
    async def run_refactorings(self, provider: RefactoringProvider, span: TextSpan) -> list[CodeAction]:
        """Return the actions *provider* offers for *span*, in engine order."""

    @abstractmethod
    async def run_completions(self, provider: CompletionProvider, position: int) -> list[CompletionItem]:
        """Return the completion items *provider* offers at *position*."""

    def with_analyzers(
        self,
        analyzers: Sequence[DiagnosticAnalyzer],
        options: Mapping[str, Any] | None = None,
    ) -> CompilationWithAnalyzers:
        """Return this compilation bound to a set of analyzers."""
        return CompilationWithAnalyzers(self, analyzers, options or {})

    def close(self) -> None:
        """Release engine resources held by this compilation."""


class CompilationWithAnalyzers:
    """A compilation with attached analyzers."""

    def __init__(
        self,
        compilation: Compilation,
        analyzers: Sequence[DiagnosticAnalyzer],
        options: Mapping[str, Any],
    ) -> None:
        self.compilation = compilation
        self.analyzers = tuple(analyzers)
        self.options = dict(options)

    async def get_analyzer_diagnostics(self) -> list[Diagnostic]:
        """Run the analyzers and keep only diagnostics with ids they declare."""
        supported: set[str] = set()
        for analyzer in self.analyzers:
            supported |= analyzer.supported_ids
        reported = await self.compilation.run_analyzers(self.analyzers, self.options)
        return [d for d in reported if d.id in supported]

    async def get_all_diagnostics(self) -> list[Diagnostic]:
        """Compiler diagnostics followed by analyzer diagnostics."""
        compiler = await self.compilation.compiler_diagnostics()
        return compiler + await self.get_analyzer_diagnostics()


class AnalysisEngine(ABC):
    """Factory for compilations. One engine instance serves many cases."""

    name: str = "engine"

    @abstractmethod
    def compile_document(
        self,
        document: Document,
        project: Project,
        options: Mapping[str, Any] | None = None,
    ) -> Compilation:
        """Compile *document* as the sole document of *project*."""
