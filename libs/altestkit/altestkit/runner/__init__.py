"""Runner subpackage (Layer 3 -- depends on engine, config)."""

from altestkit.runner.checks import (
    Check,
    CompletionCheck,
    DiagnosticCheck,
    FixApplication,
    RefactoringApplication,
    RunContext,
    RunResult,
)
from altestkit.runner.runner import AnalysisRunner

__all__ = [
    "Check",
    "DiagnosticCheck",
    "FixApplication",
    "RefactoringApplication",
    "CompletionCheck",
    "RunContext",
    "RunResult",
    "AnalysisRunner",
]
