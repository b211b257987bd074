"""Pydantic models for object dictionary YAML/JSON documents.

These models are used for:

- Parsing and validating YAML/JSON object dictionary files
- Type-safe access to entries and sub-entries

Primary Entry Points:
    load_object_dictionary(path): Load and validate a YAML/JSON file
    loads_object_dictionary(text): The same for YAML/JSON text
    validate_object_dictionary(path): Validate and return list of errors
    ObjectDictionary: Root model for the entire document

Example:
-------
    >>> from yaml_to_od.models import load_object_dictionary
    >>> doc = load_object_dictionary("device.yaml")
    >>> print(f"Objects: {len(doc.objects)}")

Model Hierarchy:
    ObjectDictionary (root)
    └── objects - tagged by object_type
        ├── VarEntry - single value
        ├── ArrayEntry - count + equally typed SubEntry list
        └── RecordEntry - independently typed SubEntry list
"""

from yaml_to_od.models.common import (
    HexInt8,
    HexInt16,
    parse_hex_int,
    serialize_hex_int,
)
from yaml_to_od.models.entries import (
    ArrayEntry,
    ObjectEntry,
    RecordEntry,
    SubEntry,
    VarEntry,
)
from yaml_to_od.models.loader import (
    LoaderError,
    load_object_dictionary,
    load_yaml_file,
    loads_object_dictionary,
    parse_document,
    validate_object_dictionary,
)
from yaml_to_od.models.root import ObjectDictionary
from yaml_to_od.models.types import (
    AccessType,
    DataType,
    ObjectType,
    PDOMapping,
    parse_data_type,
)

__all__ = [
    # Common types
    "HexInt8",
    "HexInt16",
    "parse_hex_int",
    "serialize_hex_int",
    # Enumerations
    "AccessType",
    "DataType",
    "ObjectType",
    "PDOMapping",
    "parse_data_type",
    # Models
    "ObjectDictionary",
    "ObjectEntry",
    "VarEntry",
    "ArrayEntry",
    "RecordEntry",
    "SubEntry",
    # Loader utilities
    "LoaderError",
    "load_object_dictionary",
    "load_yaml_file",
    "loads_object_dictionary",
    "parse_document",
    "validate_object_dictionary",
]
