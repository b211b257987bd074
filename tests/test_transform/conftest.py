"""Shared test fixtures for transform tests."""

import pytest

from yaml_to_od.validation.errors import BuildWarnings


@pytest.fixture
def warnings() -> BuildWarnings:
    """Return an empty warning collector."""
    return BuildWarnings()
