"""Pytest configuration for conformance tests."""

import pytest
from altestkit.engine import InProcessEngine


def get_available_engines():
    """Return list of available analysis engine adapters."""
    engines = [InProcessEngine()]
    return engines


@pytest.fixture(params=get_available_engines(), ids=lambda e: e.name)
def engine(request):
    """Provide an analysis engine for testing.

    This fixture is parametrized to run tests against all available engines.
    Currently includes:
    - in-process: runs Python components on the built-in AL tokenizer
    """
    return request.param
