"""Result matching subpackage (Layer 3 -- depends on markup, diff, engine)."""

from altestkit.matching.diagnostics import (
    MatchReport,
    assert_diagnostics_match,
    assert_no_diagnostic_at,
    match_diagnostics,
)
from altestkit.matching.expectations import (
    ExpectedDiagnostic,
    ExpectedTransformation,
    expect_at_all,
)
from altestkit.matching.selectors import (
    ByEquivalenceKey,
    ByIndex,
    ByTitle,
    ByTitleContains,
    CodeActionSelector,
    select_code_action,
)
from altestkit.matching.transform import verify_transformation

__all__ = [
    "ExpectedDiagnostic",
    "ExpectedTransformation",
    "expect_at_all",
    "MatchReport",
    "match_diagnostics",
    "assert_diagnostics_match",
    "assert_no_diagnostic_at",
    "CodeActionSelector",
    "ByIndex",
    "ByTitle",
    "ByTitleContains",
    "ByEquivalenceKey",
    "select_code_action",
    "verify_transformation",
]
