"""Tests for entry models and the object type union."""

import pytest
from pydantic import TypeAdapter, ValidationError

from yaml_to_od.models.entries import (
    ArrayEntry,
    ObjectEntry,
    RecordEntry,
    SubEntry,
    VarEntry,
)
from yaml_to_od.models.types import AccessType, DataType, ObjectType, PDOMapping

entry_adapter: TypeAdapter[VarEntry | ArrayEntry | RecordEntry] = TypeAdapter(ObjectEntry)


class TestSubEntry:
    """Tests for SubEntry model."""

    def test_defaults(self) -> None:
        """Optional fields have neutral defaults."""
        sub = SubEntry(subindex="0x01")
        assert sub.subindex == 1
        assert sub.name == ""
        assert sub.data_type is None
        assert sub.default is None
        assert sub.access is None
        assert sub.pdo_mapping == PDOMapping.NO

    def test_extra_forbidden(self) -> None:
        """Unknown keys are schema errors."""
        with pytest.raises(ValidationError, match="extra"):
            SubEntry(subindex=0, low_limit=3)


class TestVarEntry:
    """Tests for VarEntry model."""

    def test_minimal(self) -> None:
        """Object type defaults to VAR and storage to RAM."""
        entry = VarEntry(index=0x2000, name="Value", data_type="UNSIGNED16", default=5)
        assert entry.object_type == ObjectType.VAR
        assert entry.storage_location == "RAM"
        assert entry.count_label == "ALL"
        assert entry.data_type == DataType.UNSIGNED16
        assert entry.default == "5"
        assert not entry.ext_io
        assert not entry.disabled

    def test_access_case_insensitive(self) -> None:
        """Access type accepts upper case."""
        entry = VarEntry(index=0x2000, access="RW")
        assert entry.access == AccessType.RW

    def test_invalid_access(self) -> None:
        """Unknown access types are rejected."""
        with pytest.raises(ValidationError):
            VarEntry(index=0x2000, access="rx")

    def test_storage_location_must_be_identifier(self) -> None:
        """Storage location becomes part of a C symbol."""
        with pytest.raises(ValidationError, match="pattern"):
            VarEntry(index=0x2000, storage_location="my group")

    def test_unknown_data_type_kept(self) -> None:
        """Unknown data types are not schema errors."""
        entry = VarEntry(index=0x2000, data_type="0x0020")
        assert entry.data_type == "0x0020"


class TestObjectEntryUnion:
    """Tests for the tagged object entry union."""

    def test_var_by_default(self) -> None:
        """Entries without object_type are VARs."""
        entry = entry_adapter.validate_python({"index": "0x1000", "data_type": "UNSIGNED32"})
        assert isinstance(entry, VarEntry)

    def test_array_by_alias(self) -> None:
        """ARR selects the array shape."""
        entry = entry_adapter.validate_python(
            {
                "index": "0x1003",
                "object_type": "ARR",
                "data_type": "UNSIGNED32",
                "sub_entries": [
                    {"subindex": 0, "data_type": "UNSIGNED8", "default": 1},
                    {"subindex": 1, "default": 0},
                ],
            }
        )
        assert isinstance(entry, ArrayEntry)
        assert entry.object_type == ObjectType.ARRAY
        assert entry.data_type == DataType.UNSIGNED32
        assert len(entry.sub_entries) == 2

    def test_record_by_code(self) -> None:
        """Object code 9 selects the record shape."""
        entry = entry_adapter.validate_python(
            {"index": "0x1018", "object_type": 9, "sub_entries": []}
        )
        assert isinstance(entry, RecordEntry)

    def test_unknown_object_type(self) -> None:
        """Unknown object types fail the union tag."""
        with pytest.raises(ValidationError, match="union_tag_invalid|does not match"):
            entry_adapter.validate_python({"index": "0x1000", "object_type": "DOMAIN"})

    def test_var_rejects_sub_entries(self) -> None:
        """Sub-entries only belong to ARRAY and RECORD."""
        with pytest.raises(ValidationError):
            entry_adapter.validate_python({"index": "0x1000", "sub_entries": []})


class TestDataTypeField:
    """The data type field accepts names, codes and unknown values."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("UNSIGNED32", DataType.UNSIGNED32),
            ("integer16", DataType.INTEGER16),
            (7, DataType.UNSIGNED32),
            ("0x0009", DataType.VISIBLE_STRING),
            (DataType.REAL32, DataType.REAL32),
        ],
    )
    def test_known_types(self, raw: object, expected: DataType) -> None:
        """Known types become DataType members."""
        entry = entry_adapter.validate_python({"index": 0x2000, "data_type": raw, "default": 1})
        assert isinstance(entry, VarEntry)
        assert entry.data_type is expected

    def test_unknown_type_is_plain_string(self) -> None:
        """Unknown types stay strings so the compiler can warn about them."""
        entry = entry_adapter.validate_python({"index": 0x2000, "data_type": "FLOAT128"})
        assert entry.data_type == "FLOAT128"
        assert not isinstance(entry.data_type, DataType)

    def test_array_element_type(self) -> None:
        """ARRAY entries carry an optional element type."""
        entry = entry_adapter.validate_python(
            {
                "index": 0x2100,
                "object_type": "ARRAY",
                "data_type": "UNSIGNED8",
                "sub_entries": [
                    {"subindex": 0, "data_type": "UNSIGNED8", "default": 1},
                    {"subindex": 1, "default": 0},
                ],
            }
        )
        assert isinstance(entry, ArrayEntry)
        assert entry.data_type is DataType.UNSIGNED8
        assert entry.sub_entries[1].data_type is None
