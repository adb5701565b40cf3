"""Error taxonomy for the analyzer test harness.

Two roots:

- ``HarnessError`` for failures that abort a case before or outside of
  matching (malformed markup, faulting components, timeouts, bad config).
- ``ExpectationFailure`` for first-class test failures. It derives from
  ``AssertionError`` so test runners report them as failed assertions.
"""

from __future__ import annotations

from typing import Sequence


class HarnessError(Exception):
    """Base class for harness-internal failures."""


class MalformedMarkupError(HarnessError):
    """Raised when marker delimiters are unmatched or nested."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class ComponentFaultedError(HarnessError):
    """Raised when a component under test throws while being executed."""

    def __init__(self, component: str, cause: BaseException) -> None:
        super().__init__(f"{component} faulted: {type(cause).__name__}: {cause}")
        self.component = component
        self.cause = cause


class TimedOutError(HarnessError):
    """Raised when a run exceeds its deadline or is cancelled by it."""

    def __init__(self, timeout: float | None, what: str = "analysis run") -> None:
        super().__init__(f"{what} did not complete within {timeout} seconds")
        self.timeout = timeout


class ConfigError(HarnessError):
    """Raised for invalid fixture configuration."""


class WorkspaceError(HarnessError):
    """Raised when a disposed or inconsistent workspace is used."""


class InputDocumentError(HarnessError):
    """Raised when the input document already carries error diagnostics."""

    def __init__(self, diagnostics: Sequence[object]) -> None:
        lines = "\n".join(f"  {d}" for d in diagnostics)
        super().__init__(f"Input document contains errors:\n{lines}")
        self.diagnostics = list(diagnostics)


class ExpectationFailure(AssertionError):
    """Base class for expected, reportable test-failure outcomes."""


class ExpectationNotMetError(ExpectationFailure):
    """Wrong count or location of diagnostics.

    All individual failures of one check are collected in ``failures``.
    """

    def __init__(self, failures: Sequence[str]) -> None:
        self.failures = list(failures)
        super().__init__("\n".join(self.failures))


class AmbiguousCodeActionError(ExpectationFailure):
    """More than one code action was offered and no selector was supplied."""

    def __init__(self, titles: Sequence[str]) -> None:
        self.titles = list(titles)
        listing = "\n".join(f"  - {t}" for t in self.titles)
        super().__init__(
            f"{len(self.titles)} code actions were offered; supply a selector to pick one:\n{listing}"
        )


class NoApplicableCodeActionError(ExpectationFailure):
    """No code action was offered, or the selector matched none of them."""

    def __init__(self, titles: Sequence[str], criteria: str | None = None) -> None:
        self.titles = list(titles)
        self.criteria = criteria
        if not self.titles:
            message = "No code action was offered"
        else:
            listing = "\n".join(f"  - {t}" for t in self.titles)
            message = f"No code action matched {criteria}. Offered:\n{listing}"
        super().__init__(message)


class TransformationMismatchError(ExpectationFailure):
    """The transformed text differs from the expected text."""

    def __init__(self, actual: str, expected: str, diff: str) -> None:
        self.actual = actual
        self.expected = expected
        self.diff = diff
        super().__init__(f"Transformed code is different than expected:\n{diff}")


TransformedCodeDifferentThanExpectedError = TransformationMismatchError
