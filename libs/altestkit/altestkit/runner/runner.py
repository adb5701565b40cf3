"""Analysis runner: materializes a disposable project and executes one check."""

from __future__ import annotations

import asyncio
import logging

from altestkit.config import FixtureConfig
from altestkit.diagnostics.severity import DiagnosticSeverity
from altestkit.engine.base import AnalysisEngine, Compilation
from altestkit.engine.inprocess import InProcessEngine
from altestkit.engine.workspace import AdhocWorkspace, Document, Project, ProjectInfo
from altestkit.errors import (
    ComponentFaultedError,
    ExpectationFailure,
    HarnessError,
    InputDocumentError,
    TimedOutError,
)
from altestkit.runner.checks import Check, RunContext, RunResult

logger = logging.getLogger(__name__)


class AnalysisRunner:
    """Runs checks against clean text, one disposable workspace per run.

    Nothing is retried: a faulting or slow component is reported once.
    """

    def __init__(self, engine: AnalysisEngine | None = None, config: FixtureConfig | None = None) -> None:
        self.engine = engine or InProcessEngine()
        self.config = config or FixtureConfig()

    async def run(self, check: Check, text: str, *, timeout: float | None = None) -> RunResult:
        """Run *check* on *text*.

        *timeout* overrides ``config.timeout``.  Exceeding it cancels the
        engine call and raises ``TimedOutError``.
        """
        deadline = self.config.timeout if timeout is None else timeout
        logger.debug("Running %s check with %s engine", check.kind, self.engine.name)

        with AdhocWorkspace() as workspace:
            project = workspace.add_project(
                ProjectInfo(self.config.project_name, self.config.language, self.config.references)
            )
            document = workspace.add_document(project.id, self.config.document_name, text)
            compilation = self._compile(document, project)
            try:
                result = await asyncio.wait_for(self._execute(check, compilation), deadline)
            except asyncio.TimeoutError:
                raise TimedOutError(deadline, f"{check.kind} run") from None
            finally:
                compilation.close()

        logger.debug(
            "%s check finished: %d diagnostics, actions %s",
            check.kind,
            len(result.diagnostics),
            [a.title for a in result.available_actions],
        )
        return result

    def run_sync(self, check: Check, text: str, *, timeout: float | None = None) -> RunResult:
        """Blocking wrapper around ``run`` for synchronous test code."""
        return asyncio.run(self.run(check, text, timeout=timeout))

    def _compile(self, document: Document, project: Project) -> Compilation:
        try:
            return self.engine.compile_document(document, project, self.config.compiler_options)
        except (HarnessError, ExpectationFailure):
            raise
        except Exception as exc:
            raise ComponentFaultedError(self.engine.name, exc) from exc

    async def _execute(self, check: Check, compilation: Compilation) -> RunResult:
        try:
            if self.config.fail_on_input_errors:
                errors = [
                    d
                    for d in await compilation.compiler_diagnostics()
                    if d.severity == DiagnosticSeverity.ERROR
                ]
                if errors:
                    raise InputDocumentError(errors)
            return await check.run(RunContext(compilation, self.config.compiler_options))
        except (HarnessError, ExpectationFailure):
            raise
        except Exception as exc:
            raise ComponentFaultedError(self.engine.name, exc) from exc
