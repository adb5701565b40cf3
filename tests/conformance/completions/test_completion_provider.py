"""
Conformance: Completions - items offered at the marked caret
"""
import pytest
from altestkit import CompletionProviderFixture, ExpectationNotMetError, MalformedMarkupError
from tests.conformance.components import FieldPropertyCompletion


# Each test case is a tuple: (description, annotated_source, offered, not_offered)

CASES = [
    ("inside_field_body", "table T { field(1;F;Integer){[||]} }", ["Caption", "Flag"], ["begin"]),
    ("inside_field_body_spaced", "table T { field(1;F;Integer){ [||] } }", ["Editable"], ["var"]),
    ("outside_field", "codeunit 1 C { [||] }", ["begin", "var"], ["Flag"]),
    ("caret_is_span_start", "codeunit 1 C { [|x|] }", ["end"], ["Caption"]),
]


@pytest.mark.parametrize("description,source,offered,not_offered", CASES, ids=[c[0] for c in CASES])
def test_completion_provider(engine, description, source, offered, not_offered):
    """Expected labels are offered and excluded ones are not."""
    fixture = CompletionProviderFixture(FieldPropertyCompletion(), engine)
    fixture.test_completion(source, offered)
    fixture.no_completion(source, not_offered)


def test_missing_labels_listed_together(engine):
    fixture = CompletionProviderFixture(FieldPropertyCompletion(), engine)
    with pytest.raises(ExpectationNotMetError) as exc_info:
        fixture.test_completion("codeunit 1 C { [||] }", ["Caption", "Flag", "begin"])
    failures = exc_info.value.failures
    assert failures[0] == "Completion 'Caption' was not offered at Test.al(1,16)-(1,16)"
    assert failures[1] == "Completion 'Flag' was not offered at Test.al(1,16)-(1,16)"
    assert failures[2] == "Offered: ['begin', 'end', 'var']"


def test_unexpected_label(engine):
    fixture = CompletionProviderFixture(FieldPropertyCompletion(), engine)
    with pytest.raises(ExpectationNotMetError, match="'Flag' should not be offered"):
        fixture.no_completion("table T { field(1;F;Integer){[||]} }", ["Flag"])


def test_caret_requires_single_marker(engine):
    fixture = CompletionProviderFixture(FieldPropertyCompletion(), engine)
    with pytest.raises(MalformedMarkupError):
        fixture.test_completion("codeunit 1 C { }", ["begin"])
