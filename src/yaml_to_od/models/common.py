"""Field types shared by the object dictionary models.

CANopen documents write indices and subindices in hex (``0x1018``, ``0x01``),
while YAML hands over plain integers for unquoted hex literals. Both forms are
accepted and serialized back in the usual four/two digit notation.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, PlainSerializer


def parse_hex_int(value: Any) -> int:
    """Parse an integer or an integer string (``0x`` prefix for hex).

    Examples:
    --------
        >>> parse_hex_int("0x1018")
        4120
        >>> parse_hex_int(" 4120 ")
        4120

    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse boolean as integer: {value}")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Cannot parse {type(value).__name__} as integer: {value}")

    text = value.strip()
    is_hex = text[:2].lower() == "0x"
    try:
        return int(text, 16 if is_hex else 10)
    except ValueError:
        kind = "hex" if is_hex else "integer"
        raise ValueError(f"Invalid {kind} string: {text}") from None


def _unsigned(bits: int) -> Callable[[int], int]:
    limit = (1 << bits) - 1

    def check(value: int) -> int:
        if not 0 <= value <= limit:
            raise ValueError(f"Value {value} out of uint{bits} range (0-{limit})")
        return value

    return check


def serialize_hex_int(value: int, digits: int = 4) -> str:
    """Format an index as upper-case hex, e.g. ``0x1A00``."""
    return f"0x{value:0{digits}X}"


def _serialize_subindex(value: int) -> str:
    return serialize_hex_int(value, 2)


# Subindex: "0x01" or 1
HexInt8 = Annotated[
    int,
    BeforeValidator(parse_hex_int),
    AfterValidator(_unsigned(8)),
    PlainSerializer(_serialize_subindex, return_type=str),
]

# Object index: "0x1018" or 4120
HexInt16 = Annotated[
    int,
    BeforeValidator(parse_hex_int),
    AfterValidator(_unsigned(16)),
    PlainSerializer(serialize_hex_int, return_type=str),
]


def stringify_default(value: Any) -> str | None:
    """Turn a YAML scalar into the raw default-value string.

    YAML hands over ints, floats and booleans for unquoted defaults; the
    encoder works on the textual form only.

    Examples:
    --------
        >>> stringify_default(16)
        '16'
        >>> stringify_default(True)
        'true'
        >>> stringify_default(None) is None
        True

    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise ValueError(f"Default value must be a scalar, got {type(value).__name__}")


DefaultValue = Annotated[str | None, BeforeValidator(stringify_default)]
