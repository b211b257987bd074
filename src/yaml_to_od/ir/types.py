"""IR models for encoded values and attribute flags.

These are the byte-accurate C representations produced by the value
encoder and consumed by the C writer.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class IRAttribute(Enum):
    """CANopenNode OD attribute flags, in the order they are composed."""

    SDO_RW = "ODA_SDO_RW"
    SDO_R = "ODA_SDO_R"
    SDO_W = "ODA_SDO_W"
    TRPDO = "ODA_TRPDO"
    TPDO = "ODA_TPDO"
    RPDO = "ODA_RPDO"
    MB = "ODA_MB"


def render_attributes(attributes: Iterable[IRAttribute]) -> str:
    """Render a flag set as a C expression (``0`` when empty).

    Examples:
    --------
        >>> render_attributes((IRAttribute.SDO_R, IRAttribute.MB))
        'ODA_SDO_R | ODA_MB'

    """
    rendered = " | ".join(attribute.value for attribute in attributes)
    return rendered or "0"


@dataclass(frozen=True)
class IREncodedValue:
    """C storage type and initializer for one default value.

    Attributes
    ----------
        c_type: C type of the storage, None when the value is undefined or
            the type has no storage representation (DOMAIN, unknown types).
        c_type_array: Array suffix of the declaration, e.g. ``[8]``.
        c_type_array0: Suffix that addresses the first element, e.g. ``[0]``.
        multibyte: True for scalars wider than one byte.
        length: Data length in bytes.
        c_value: C initializer; None means no storage is allocated and the
            descriptor gets a NULL data pointer.

    """

    c_type: str | None = None
    c_type_array: str = ""
    c_type_array0: str = ""
    multibyte: bool = False
    length: int = 0
    c_value: str | None = None

    @property
    def defined(self) -> bool:
        """Check if the value produces storage."""
        return self.c_value is not None
