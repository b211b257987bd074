"""Intermediate Representation (IR) of a compiled object dictionary.

The IR sits between the Pydantic input models and the C writer:

1. Default values are encoded into C types and initializers
2. Storage is grouped by storage location
3. Descriptors match the CANopenNode ``OD_obj_*_t`` structures
4. Uses dataclasses for simple data structures
"""

from yaml_to_od.ir.database import IRObjectDictionary
from yaml_to_od.ir.objects import (
    IRArrayObject,
    IRDataRef,
    IREntry,
    IRExtension,
    IRObject,
    IRRecordObject,
    IRRecordSubObject,
    IRShortcut,
    IRStorageField,
    IRStorageGroup,
    IRVarObject,
)
from yaml_to_od.ir.types import IRAttribute, IREncodedValue, render_attributes

__all__ = [
    # Types
    "IRAttribute",
    "IREncodedValue",
    "render_attributes",
    # Storage
    "IRDataRef",
    "IRStorageField",
    "IRStorageGroup",
    # Descriptors
    "IRObject",
    "IRVarObject",
    "IRArrayObject",
    "IRRecordObject",
    "IRRecordSubObject",
    "IRExtension",
    # Database
    "IREntry",
    "IRShortcut",
    "IRObjectDictionary",
]
