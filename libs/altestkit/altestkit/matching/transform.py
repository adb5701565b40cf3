"""Exact comparison of transformed text against the expected text."""

from __future__ import annotations

from altestkit.diff.renderer import render_diff
from altestkit.errors import TransformationMismatchError


def verify_transformation(actual: str, expected: str) -> None:
    """Raise ``TransformationMismatchError`` with a rendered diff unless equal.

    Equality is verbatim, line terminators included.
    """
    if actual == expected:
        return
    raise TransformationMismatchError(actual, expected, render_diff(actual, expected))
