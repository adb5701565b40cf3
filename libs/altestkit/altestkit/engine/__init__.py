"""Engine subpackage (Layer 2 -- depends on diagnostics, syntax)."""

from altestkit.engine.actions import CodeAction, CompletionItem, TextEdit, apply_edits
from altestkit.engine.base import (
    AnalysisEngine,
    Compilation,
    CompilationWithAnalyzers,
    invoke_component,
)
from altestkit.engine.components import (
    AnalysisContext,
    CodeFixContext,
    CodeFixProvider,
    Component,
    CompletionContext,
    CompletionProvider,
    DiagnosticAnalyzer,
    RefactoringContext,
    RefactoringProvider,
)
from altestkit.engine.inprocess import InProcessCompilation, InProcessEngine
from altestkit.engine.workspace import AdhocWorkspace, Document, Project, ProjectInfo

__all__ = [
    "TextEdit",
    "apply_edits",
    "CodeAction",
    "CompletionItem",
    "Component",
    "DiagnosticAnalyzer",
    "CodeFixProvider",
    "RefactoringProvider",
    "CompletionProvider",
    "AnalysisContext",
    "CodeFixContext",
    "RefactoringContext",
    "CompletionContext",
    "AnalysisEngine",
    "Compilation",
    "CompilationWithAnalyzers",
    "invoke_component",
    "InProcessEngine",
    "InProcessCompilation",
    "AdhocWorkspace",
    "Document",
    "Project",
    "ProjectInfo",
]
