"""Root model for an object dictionary document."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from yaml_to_od.models.entries import (
    C_IDENTIFIER_PATTERN,
    ArrayEntry,
    ObjectEntry,
    RecordEntry,
    VarEntry,
)


class ObjectDictionary(BaseModel):
    """Root model for object dictionary YAML/JSON files.

    Example:
    -------
        ```yaml
        name: OD
        objects:
          - index: 0x1000
            name: Device type
            data_type: UNSIGNED32
            access: ro
            default: "0x00000000"
          - index: 0x1018
            name: Identity
            object_type: RECORD
            sub_entries:
              ...
        ```

    """

    model_config = ConfigDict(extra="forbid")

    name: Annotated[
        str,
        Field(
            default="OD",
            pattern=C_IDENTIFIER_PATTERN,
            description="Symbol prefix of the generated object dictionary",
        ),
    ]
    objects: Annotated[
        list[ObjectEntry],
        Field(default_factory=list, description="Object dictionary entries"),
    ]

    @model_validator(mode="after")
    def check_unique_indices(self) -> ObjectDictionary:
        """Reject documents that define the same index twice."""
        seen: set[int] = set()
        for entry in self.objects:
            if entry.index in seen:
                raise ValueError(f"Duplicate object index 0x{entry.index:04X}")
            seen.add(entry.index)
        return self

    def enabled_entries(self) -> list[VarEntry | ArrayEntry | RecordEntry]:
        """Return the entries that take part in generation, in ascending index order."""
        return sorted(
            (entry for entry in self.objects if not entry.disabled),
            key=lambda entry: entry.index,
        )
