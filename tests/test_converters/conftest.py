"""Shared fixtures for writer tests."""

import pytest

from yaml_to_od.ir.database import IRObjectDictionary
from yaml_to_od.models.root import ObjectDictionary
from yaml_to_od.transform.transformer import ObjectDictionaryCompiler

from tests.fixtures.sample_ods import DEVICE_OD, MINIMAL_OD


@pytest.fixture
def minimal_ir() -> IRObjectDictionary:
    """Compile the single-VAR document."""
    return ObjectDictionaryCompiler().compile(ObjectDictionary.model_validate(MINIMAL_OD))


@pytest.fixture
def device_ir() -> IRObjectDictionary:
    """Compile the document covering all shapes."""
    return ObjectDictionaryCompiler().compile(ObjectDictionary.model_validate(DEVICE_OD))
