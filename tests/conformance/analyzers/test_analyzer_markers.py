"""
Conformance: Diagnostic expectations - every marked span gets a diagnostic
"""
import pytest
from altestkit import AnalyzerTestFixture, ExpectationNotMetError, MalformedMarkupError
from tests.conformance.components import MISSING_FLAG, FieldFlagAnalyzer, TodoCommentAnalyzer

TWO_FIELDS = (
    "table 50100 Item\n"
    "{\n"
    "    fields\n"
    "    {\n"
    "        [|field(1; Code; Code[20]) { }|]\n"
    "        [|field(2; Name; Text[100]) { }|]\n"
    "        field(3; Blocked; Boolean) { Flag = true; }\n"
    "    }\n"
    "}\n"
)


# Each test case is a tuple: (description, annotated_source, diagnostic_id)
# All cases are expected to pass HasDiagnosticAtAllMarkers

CASES = [
    ("two_fields", TWO_FIELDS, "AL0001"),
    ("single_field", "table T { [|field(1;F;Integer){}|] }", "AL0001"),
    ("quoted_name", 'table T { [|field(1;"My Field";Integer){}|] }', "AL0001"),
    ("crlf_document", "table T\r\n{\r\n    [|field(1;F;Integer){}|]\r\n}\r\n", "AL0001"),
    ("todo_comment", "codeunit 1 C\n{\n    [|// TODO: remove|]\n}\n", "AL0002"),
]


@pytest.mark.parametrize("description,source,diagnostic_id", CASES, ids=[c[0] for c in CASES])
def test_analyzer_markers(engine, description, source, diagnostic_id):
    """Diagnostics reported at exactly the marked spans pass."""
    fixture = AnalyzerTestFixture([FieldFlagAnalyzer(), TodoCommentAnalyzer()], engine)
    fixture.has_diagnostic_at_all_markers(source, diagnostic_id)


def test_descriptor_accepted_as_id(engine):
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    fixture.has_diagnostic_at_all_markers(TWO_FIELDS, MISSING_FLAG)


def test_missing_diagnostic_names_unmatched_span(engine):
    """Removing one actual diagnostic fails and names the span left unmatched."""
    fixed_second = TWO_FIELDS.replace("Text[100]) { }", "Text[100]) { Flag = false; }")
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    with pytest.raises(ExpectationNotMetError) as exc_info:
        fixture.has_diagnostic_at_all_markers(fixed_second, "AL0001")
    failures = exc_info.value.failures
    assert failures[0] == "Expected diagnostic AL0001 at Test.al(6,9)-(6,52) was not reported"
    assert failures[-1].startswith("Reported diagnostics:\n  AL0001 at Test.al(5,9)-(5,37)")
    assert len(failures) == 2


def test_unmarked_diagnostic_is_unexpected(engine):
    """A diagnostic outside every marker fails the all-markers check."""
    source = "table T { [|field(1;A;Integer){}|] field(2;B;Integer){} }"
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    with pytest.raises(ExpectationNotMetError) as exc_info:
        fixture.has_diagnostic_at_all_markers(source, "AL0001")
    assert any(f.startswith("Unexpected diagnostic AL0001") for f in exc_info.value.failures)


def test_all_failures_listed_together(engine):
    """Every unmatched marker is listed in one failure, not just the first."""
    source = "table T { [|field(1;A;Integer){ Flag=true; }|] [|field(2;B;Integer){ Flag=true; }|] }"
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    with pytest.raises(ExpectationNotMetError) as exc_info:
        fixture.has_diagnostic_at_all_markers(source, "AL0001")
    missing = [f for f in exc_info.value.failures if f.endswith("was not reported")]
    assert len(missing) == 2
    assert exc_info.value.failures[-1] == "Reported diagnostics:\n  (none)"


def test_no_markers_is_malformed(engine):
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    with pytest.raises(MalformedMarkupError):
        fixture.has_diagnostic_at_all_markers("table T { }", "AL0001")


def test_single_marker_with_message(engine):
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    fixture.has_diagnostic(
        "table T { [|field(1;Amount;Decimal){}|] }",
        "AL0001",
        "Field 'Amount' does not set the Flag property",
    )


def test_single_marker_wrong_message(engine):
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    with pytest.raises(ExpectationNotMetError, match="has message"):
        fixture.has_diagnostic("table T { [|field(1;Amount;Decimal){}|] }", "AL0001", "wrong")


def test_single_marker_requires_exactly_one_span(engine):
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    with pytest.raises(MalformedMarkupError):
        fixture.has_diagnostic(TWO_FIELDS, "AL0001")
