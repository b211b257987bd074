"""Tests for the ObjectDictionary root model."""

import pytest
from pydantic import ValidationError

from yaml_to_od.models.entries import RecordEntry, VarEntry
from yaml_to_od.models.root import ObjectDictionary

from tests.fixtures.sample_ods import DEVICE_OD, OD_INVALID_SCHEMA


class TestObjectDictionary:
    """Tests for ObjectDictionary model."""

    def test_empty_document(self) -> None:
        """An empty document is valid."""
        doc = ObjectDictionary.model_validate({})
        assert doc.name == "OD"
        assert doc.objects == []

    def test_device_document(self) -> None:
        """Should parse all shapes."""
        doc = ObjectDictionary.model_validate(DEVICE_OD)
        assert len(doc.objects) == 7
        assert isinstance(doc.objects[0], VarEntry)
        assert isinstance(doc.objects[5], RecordEntry)

    def test_duplicate_index(self) -> None:
        """The same index twice is a schema error."""
        with pytest.raises(ValidationError, match="Duplicate object index 0x2000"):
            ObjectDictionary.model_validate(OD_INVALID_SCHEMA)

    def test_name_must_be_identifier(self) -> None:
        """The name prefixes every generated symbol."""
        with pytest.raises(ValidationError):
            ObjectDictionary.model_validate({"name": "1OD"})

    def test_unknown_root_key(self) -> None:
        """Extra root keys are rejected."""
        with pytest.raises(ValidationError, match="extra"):
            ObjectDictionary.model_validate({"objects": [], "schema": "v1"})


class TestEnabledEntries:
    """Tests for ObjectDictionary.enabled_entries."""

    def test_skips_disabled(self) -> None:
        """Disabled entries take no part in generation."""
        doc = ObjectDictionary.model_validate(DEVICE_OD)
        indices = [entry.index for entry in doc.enabled_entries()]
        assert 0x2000 not in indices
        assert len(indices) == 6

    def test_sorted_by_index(self) -> None:
        """Entries come out in ascending index order."""
        doc = ObjectDictionary.model_validate(
            {
                "objects": [
                    {"index": "0x2001", "data_type": "UNSIGNED8"},
                    {"index": "0x1000", "data_type": "UNSIGNED32"},
                    {"index": "0x1800", "data_type": "UNSIGNED8"},
                ]
            }
        )
        assert [entry.index for entry in doc.enabled_entries()] == [0x1000, 0x1800, 0x2001]
