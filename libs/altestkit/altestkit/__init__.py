"""altestkit: a harness for testing AL code analyzers, fixes and refactorings.

Layers (each depends only on the ones above it):

- ``diagnostics``, ``errors`` -- spans, locations, diagnostics, error taxonomy
- ``markup``, ``diff``, ``syntax`` -- marker parser, diff renderer, tokenizer
- ``engine`` -- adapter contract, components, workspace, in-process engine
- ``runner``, ``matching`` -- run checks, match results
- ``fixtures`` -- the assertions test authors call
"""

from altestkit.config import CodeFixConfig, FixtureConfig, load_config
from altestkit.diagnostics import Diagnostic, DiagnosticDescriptor, DiagnosticSeverity, TextSpan
from altestkit.diff import compute_diff, render_diff
from altestkit.errors import (
    AmbiguousCodeActionError,
    ComponentFaultedError,
    ConfigError,
    ExpectationFailure,
    ExpectationNotMetError,
    HarnessError,
    InputDocumentError,
    MalformedMarkupError,
    NoApplicableCodeActionError,
    TimedOutError,
    TransformationMismatchError,
    TransformedCodeDifferentThanExpectedError,
    WorkspaceError,
)
from altestkit.fixtures import (
    AnalyzerTestFixture,
    CodeFixTestFixture,
    CodeRefactoringTestFixture,
    CompletionProviderFixture,
)
from altestkit.markup import LineMarker, ResolvedSpan, parse_markup
from altestkit.matching import ByEquivalenceKey, ByIndex, ByTitle, ByTitleContains, CodeActionSelector
from altestkit.version import VersionGate

__all__ = [
    "FixtureConfig",
    "CodeFixConfig",
    "load_config",
    "TextSpan",
    "DiagnosticSeverity",
    "DiagnosticDescriptor",
    "Diagnostic",
    "parse_markup",
    "ResolvedSpan",
    "LineMarker",
    "compute_diff",
    "render_diff",
    "CodeActionSelector",
    "ByIndex",
    "ByTitle",
    "ByTitleContains",
    "ByEquivalenceKey",
    "AnalyzerTestFixture",
    "CodeFixTestFixture",
    "CodeRefactoringTestFixture",
    "CompletionProviderFixture",
    "VersionGate",
    "HarnessError",
    "MalformedMarkupError",
    "ComponentFaultedError",
    "TimedOutError",
    "ConfigError",
    "WorkspaceError",
    "InputDocumentError",
    "ExpectationFailure",
    "ExpectationNotMetError",
    "AmbiguousCodeActionError",
    "NoApplicableCodeActionError",
    "TransformationMismatchError",
    "TransformedCodeDifferentThanExpectedError",
]
