"""
Conformance: Diagnostic expectations - no diagnostic at marked spans
"""
import pytest
from altestkit import AnalyzerTestFixture, ExpectationNotMetError
from tests.conformance.components import FieldFlagAnalyzer


# Each test case is a tuple: (description, annotated_source)
# No AL0001 diagnostic may overlap any marked span

CASES = [
    ("flag_present", "table T { [|field(1;F;Integer){ Flag=true; }|] }"),
    ("flag_lowercase", "table T { [|field(1;F;Integer){ flag=false; }|] }"),
    ("outside_field", "[|table|] T { field(1;F;Integer){ Flag=true; } }"),
    ("marker_before_diagnostic", "table T [||]{ field(1;F;Integer){} }"),
    ("two_markers", "table T { [|field(1;A;Integer){ Flag=true; }|] [|field(2;B;Integer){ Flag=true; }|] }"),
]


@pytest.mark.parametrize("description,source", CASES, ids=[c[0] for c in CASES])
def test_analyzer_absence(engine, description, source):
    """Spans no diagnostic touches pass the absence check."""
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    fixture.no_diagnostic_at_all_markers(source, "AL0001")


def test_diagnostic_at_span_fails_with_location(engine):
    """A diagnostic at the marked span fails and names the span's location."""
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    with pytest.raises(ExpectationNotMetError) as exc_info:
        fixture.no_diagnostic_at_all_markers("table T {\n  [|field(1;F;Integer){}|]\n}", "AL0001")
    [failure] = exc_info.value.failures
    assert failure.startswith("Expected no diagnostic AL0001 at Test.al(2,3)-(2,23), but found AL0001")


def test_overlapping_diagnostic_fails(engine):
    """A diagnostic that only partly overlaps the span still fails."""
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    with pytest.raises(ExpectationNotMetError):
        fixture.no_diagnostic_at_all_markers("table T { field(1;[|F|];Integer){} }", "AL0001")


def test_other_ids_ignored(engine):
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    fixture.no_diagnostic_at_all_markers("table T { [|field(1;F;Integer){}|] }", "AL0002")


def test_single_marker_absence(engine):
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    fixture.no_diagnostic("table T { [|field(1;F;Integer){ Flag=true; }|] }", "AL0001")
    with pytest.raises(ExpectationNotMetError):
        fixture.no_diagnostic("table T { [|field(1;F;Integer){}|] }", "AL0001")


def test_preprocessor_directives_are_valid_input(engine):
    """Directive lines compile cleanly instead of aborting the case."""
    fixture = AnalyzerTestFixture(FieldFlagAnalyzer(), engine)
    source = "#pragma warning disable AA0001\ntable T { [|field(1;F;Integer){ Flag=true; }|] }\n#pragma warning restore AA0001"
    fixture.no_diagnostic(source, "AL0001")
