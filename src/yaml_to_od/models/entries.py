"""Models for object dictionary entries and their sub-entries."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Discriminator, Field, Tag

from yaml_to_od.models.common import DefaultValue, HexInt8, HexInt16
from yaml_to_od.models.types import (
    AccessType,
    DataType,
    ObjectType,
    PDOMapping,
    parse_access_type,
    parse_data_type,
    parse_object_type,
    parse_pdo_mapping,
)

C_IDENTIFIER_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"

DataTypeField = Annotated[
    DataType | str | None,
    BeforeValidator(parse_data_type),
    Field(default=None, description="CANopen data type name or code"),
]

AccessField = Annotated[
    AccessType | None,
    BeforeValidator(parse_access_type),
    Field(default=None, description="SDO access type"),
]

PDOMappingField = Annotated[
    PDOMapping,
    BeforeValidator(parse_pdo_mapping),
    Field(default=PDOMapping.NO, description="PDO mapping classification"),
]


class SubEntry(BaseModel):
    """A sub-entry of an ARRAY or RECORD object.

    Example:
    -------
        ```yaml
        - subindex: 0x01
          name: Vendor-ID
          data_type: UNSIGNED32
          access: ro
          default: "0x00000000"
        ```

    """

    model_config = ConfigDict(extra="forbid")

    subindex: Annotated[HexInt8, Field(description="Subindex (0x00-0xFF)")]
    name: Annotated[str, Field(default="", description="Parameter name")]
    data_type: DataTypeField
    default: Annotated[DefaultValue, Field(default=None, description="Raw default value")]
    access: AccessField
    pdo_mapping: PDOMappingField


class _EntryBase(BaseModel):
    """Fields shared by all object shapes."""

    model_config = ConfigDict(extra="forbid")

    index: Annotated[HexInt16, Field(description="Object index (0x0000-0xFFFF)")]
    name: Annotated[str, Field(default="", description="Parameter name")]
    disabled: Annotated[
        bool,
        Field(default=False, description="Exclude the entry from generation"),
    ]
    storage_location: Annotated[
        str,
        Field(
            default="RAM",
            pattern=C_IDENTIFIER_PATTERN,
            description="Storage group the default value is placed in",
        ),
    ]
    ext_io: Annotated[
        bool,
        Field(default=False, description="Request the external I/O extension"),
    ]
    count_label: Annotated[
        str,
        Field(
            default="ALL",
            description="Counter bucket the entry is added to (empty to skip)",
        ),
    ]


class VarEntry(_EntryBase):
    """A single-value (VAR) object.

    Example:
    -------
        ```yaml
        - index: 0x1000
          name: Device type
          storage_location: PERSIST_COMM
          data_type: UNSIGNED32
          access: ro
          default: "0x00000000"
        ```

    """

    object_type: Annotated[
        Literal[ObjectType.VAR],
        BeforeValidator(parse_object_type),
        Field(default=ObjectType.VAR),
    ]
    data_type: DataTypeField
    default: Annotated[DefaultValue, Field(default=None, description="Raw default value")]
    access: AccessField
    pdo_mapping: PDOMappingField


class ArrayEntry(_EntryBase):
    """An ARRAY object: sub-entry 0 holds the element count, the rest share one type.

    Example:
    -------
        ```yaml
        - index: 0x1003
          name: Pre-defined error field
          object_type: ARRAY
          data_type: UNSIGNED32
          sub_entries:
            - {subindex: 0, name: Number of errors, data_type: UNSIGNED8, access: rw, default: 0}
            - {subindex: 1, name: Standard error field, access: ro, default: 0}
        ```

    """

    object_type: Annotated[Literal[ObjectType.ARRAY], BeforeValidator(parse_object_type)]
    data_type: Annotated[
        DataTypeField,
        Field(description="Element data type (sub-entries 1..N-1)"),
    ]
    sub_entries: Annotated[
        list[SubEntry],
        Field(default_factory=list, description="Sub-entries in subindex order"),
    ]


class RecordEntry(_EntryBase):
    """A RECORD object: independently typed and named sub-entries."""

    object_type: Annotated[Literal[ObjectType.RECORD], BeforeValidator(parse_object_type)]
    sub_entries: Annotated[
        list[SubEntry],
        Field(default_factory=list, description="Sub-entries in subindex order"),
    ]


def _object_type_tag(value: Any) -> str | None:
    """Pick the union member for raw input or an already built entry."""
    if isinstance(value, dict):
        raw = value.get("object_type", ObjectType.VAR)
    else:
        raw = getattr(value, "object_type", None)
    tag = parse_object_type(raw)
    if isinstance(tag, ObjectType):
        return tag.value
    return None if raw is None else str(raw)


ObjectEntry = Annotated[
    Union[
        Annotated[VarEntry, Tag(ObjectType.VAR.value)],
        Annotated[ArrayEntry, Tag(ObjectType.ARRAY.value)],
        Annotated[RecordEntry, Tag(ObjectType.RECORD.value)],
    ],
    Discriminator(_object_type_tag),
]
