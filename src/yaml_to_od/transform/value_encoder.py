"""Convert CANopen default values into C storage types and initializers."""

from __future__ import annotations

import re

from yaml_to_od.ir.types import IREncodedValue
from yaml_to_od.models.types import DataType
from yaml_to_od.validation.errors import WarningSink

NODE_ID_TOKEN = "$NODEID"

_HEX_PREFIX = re.compile(r"^0[xX][0-9a-fA-FUL]+", re.IGNORECASE)
_OCTAL_PREFIX = re.compile(r"^0[0-7]+")
_INTEGER_SYNTAX: dict[int, re.Pattern[str]] = {
    16: re.compile(r"(?:0[xX])?[0-9a-fA-F]+"),
    8: re.compile(r"[0-7]+"),
    10: re.compile(r"[+-]?[0-9]+"),
}

# Scalar types: (C type, length in bytes)
SIGNED_TYPES: dict[DataType, tuple[str, int]] = {
    DataType.INTEGER8: ("int8_t", 1),
    DataType.INTEGER16: ("int16_t", 2),
    DataType.INTEGER32: ("int32_t", 4),
    DataType.INTEGER64: ("int64_t", 8),
}

UNSIGNED_TYPES: dict[DataType, tuple[str, int]] = {
    DataType.UNSIGNED8: ("uint8_t", 1),
    DataType.UNSIGNED16: ("uint16_t", 2),
    DataType.UNSIGNED32: ("uint32_t", 4),
    DataType.UNSIGNED64: ("uint64_t", 8),
}

FLOAT_TYPES: dict[DataType, tuple[str, int]] = {
    DataType.REAL32: ("float32_t", 4),
    DataType.REAL64: ("float64_t", 8),
}

# Integers without a C scalar type: (length in bytes, signed)
ODD_WIDTH_TYPES: dict[DataType, tuple[int, bool]] = {
    DataType.INTEGER24: (3, True),
    DataType.INTEGER40: (5, True),
    DataType.INTEGER48: (6, True),
    DataType.INTEGER56: (7, True),
    DataType.UNSIGNED24: (3, False),
    DataType.UNSIGNED40: (5, False),
    DataType.UNSIGNED48: (6, False),
    DataType.UNSIGNED56: (7, False),
    DataType.TIME_OF_DAY: (6, False),
    DataType.TIME_DIFFERENCE: (6, False),
}

STRING_TYPES = frozenset(
    {DataType.VISIBLE_STRING, DataType.OCTET_STRING, DataType.UNICODE_STRING}
)

_CHAR_ESCAPES: dict[int, str] = {
    0x00: "\\0",
    0x07: "\\a",
    0x08: "\\b",
    0x09: "\\t",
    0x0A: "\\n",
    0x0B: "\\v",
    0x0C: "\\f",
    0x0D: "\\r",
    0x22: '\\"',
    0x27: "\\'",
    0x5C: "\\\\",
}


class ValueOverflowError(ValueError):
    """Default value does not fit into the width of its data type."""


def detect_base(value: str) -> tuple[str, int]:
    """Detect the numeric base of a literal.

    ``0x``/``0X`` prefixed values are hexadecimal (C ``U``/``L`` suffix
    letters are dropped), a leading zero followed by octal digits is octal,
    anything else is decimal.

    Examples:
    --------
        >>> detect_base("0x1000UL")
        ('0x1000', 16)
        >>> detect_base("017")
        ('017', 8)
        >>> detect_base("-5")
        ('-5', 10)

    """
    if _HEX_PREFIX.match(value):
        return re.sub(r"[UL]", "", value, flags=re.IGNORECASE), 16
    if _OCTAL_PREFIX.match(value):
        return value, 8
    return value, 10


def parse_integer(value: str, base: int) -> int:
    """Parse an integer literal in the given base.

    Raises
    ------
        ValueError: If the literal is not valid in that base.

    """
    if not _INTEGER_SYNTAX[base].fullmatch(value):
        raise ValueError(f"Invalid base {base} integer: {value!r}")
    if base == 16 and value[:2].lower() == "0x":
        value = value[2:]
    return int(value, base)


def to_signed(value: str, base: int, bits: int) -> int:
    """Parse a signed integer of the given width.

    Decimal literals carry their sign; hexadecimal and octal literals are
    two's complement bit patterns of the full width.

    Raises
    ------
        ValueError: If the value is invalid or out of range.

    """
    number = parse_integer(value, base)
    if base == 10:
        if not -(1 << (bits - 1)) <= number < (1 << (bits - 1)):
            raise ValueError(f"Value {value} out of int{bits} range")
        return number
    if number >= 1 << bits:
        raise ValueError(f"Value {value} out of int{bits} range")
    if number >= 1 << (bits - 1):
        number -= 1 << bits
    return number


def to_unsigned(value: str, base: int, bits: int) -> int:
    """Parse an unsigned integer of the given width.

    Raises
    ------
        ValueError: If the value is invalid, negative or out of range.

    """
    number = parse_integer(value, base)
    if not 0 <= number < (1 << bits):
        raise ValueError(f"Value {value} out of uint{bits} range")
    return number


def escape_char(code: int) -> str:
    """Escape one ASCII code for use inside a C character literal."""
    if code in _CHAR_ESCAPES:
        return _CHAR_ESCAPES[code]
    if code < 0x20 or code >= 0x7F:
        return f"\\x{code:02X}"
    return chr(code)


def _normalize_number(value: str) -> tuple[str, int]:
    """Strip the node-ID placeholder and detect the base of a numeric default."""
    if NODE_ID_TOKEN in value:
        value = value.replace(NODE_ID_TOKEN, "").replace("+", "").strip()
        if not value:
            value = "0"
    return detect_base(value)


def data_type_name(data_type: DataType | str | None) -> str:
    """Get the display name of a data type (raw string for unknown types)."""
    return data_type.value if isinstance(data_type, DataType) else str(data_type)


def encode_value(
    data_type: DataType | str | None,
    default: str | None,
    string_length: int,
    label: str,
    warnings: WarningSink,
) -> IREncodedValue:
    """Encode a default value for its CANopen data type.

    Problems never abort the run: an unknown type, an unparsable value or
    an overflowing odd-width integer adds a warning and the result has no
    initializer, so no storage is allocated for it.

    Args:
    ----
        data_type: CANopen data type (unknown types may come as a string).
        default: Raw default value from the object dictionary.
        string_length: Minimum number of elements for string types.
        label: Hex index of the object, used in warning messages.
        warnings: Sink receiving build warnings.

    Returns:
    -------
        IREncodedValue with type, length and optional initializer.

    """
    value_defined = bool(default)
    value = default or ""
    base = 10
    if value_defined and data_type not in STRING_TYPES:
        value = value.strip()
        if value:
            value, base = _normalize_number(value)
        else:
            value_defined = False
    raw = value if value_defined else None

    try:
        if data_type == DataType.BOOLEAN:
            return _encode_boolean(raw)
        if data_type in SIGNED_TYPES:
            return _encode_signed(data_type, raw, base)
        if data_type in UNSIGNED_TYPES:
            return _encode_unsigned(data_type, raw, base)
        if data_type in FLOAT_TYPES:
            c_type, length = FLOAT_TYPES[data_type]
            if raw is None:
                return IREncodedValue(multibyte=True, length=length)
            return IREncodedValue(c_type=c_type, multibyte=True, length=length, c_value=raw)
        if data_type == DataType.DOMAIN:
            return IREncodedValue()
        if data_type == DataType.VISIBLE_STRING:
            return _encode_visible_string(raw, string_length)
        if data_type == DataType.OCTET_STRING:
            return _encode_octet_string(raw, string_length)
        if data_type == DataType.UNICODE_STRING:
            return _encode_unicode_string(raw, string_length)
        if data_type in ODD_WIDTH_TYPES:
            return _encode_odd_width(data_type, raw, base)
    except ValueOverflowError:
        warnings.add_warning(
            f"Error in 0x{label}: Overflow error in default value {value} "
            f"of type {data_type_name(data_type)}"
        )
        return IREncodedValue(length=ODD_WIDTH_TYPES[data_type][0])
    except ValueError:
        warnings.add_warning(
            f"Error in 0x{label}: Error converting default value {value} "
            f"to type {data_type_name(data_type)}"
        )
        return _failed_encoding(data_type)

    warnings.add_warning(f"Error in 0x{label}: Unknown dataType: {data_type_name(data_type)}")
    return IREncodedValue()


def _encode_boolean(value: str | None) -> IREncodedValue:
    if value is None:
        return IREncodedValue(length=1)
    c_value = "false" if value.lower() == "false" or value == "0" else "true"
    return IREncodedValue(c_type="bool_t", length=1, c_value=c_value)


def _encode_signed(data_type: DataType, value: str | None, base: int) -> IREncodedValue:
    c_type, length = SIGNED_TYPES[data_type]
    if value is None:
        return IREncodedValue(multibyte=length > 1, length=length)
    c_value = str(to_signed(value, base, length * 8))
    return IREncodedValue(c_type=c_type, multibyte=length > 1, length=length, c_value=c_value)


def _encode_unsigned(data_type: DataType, value: str | None, base: int) -> IREncodedValue:
    c_type, length = UNSIGNED_TYPES[data_type]
    if value is None:
        return IREncodedValue(multibyte=length > 1, length=length)
    c_value = f"0x{to_unsigned(value, base, length * 8):0{length * 2}X}"
    return IREncodedValue(c_type=c_type, multibyte=length > 1, length=length, c_value=c_value)


def _encode_visible_string(value: str | None, string_length: int) -> IREncodedValue:
    if value is None and string_length <= 0:
        return IREncodedValue()

    chars: list[str] = []
    if value is not None:
        chars = [f"'{escape_char(b)}'" for b in value.encode("ascii", errors="replace")]
    chars.extend("'\\0'" for _ in range(string_length - len(chars)))
    return _string_storage("char", chars, len(chars))


def _encode_octet_string(value: str | None, string_length: int) -> IREncodedValue:
    if value is not None:
        value = value.strip() or None
    if value is None and string_length <= 0:
        return IREncodedValue()

    octets: list[str] = []
    if value is not None:
        for token in value.split():
            octets.append(f"0x{to_unsigned(*detect_base(token), 8):02X}")
    octets.extend("0x00" for _ in range(string_length - len(octets)))
    return _string_storage("uint8_t", octets, len(octets))


def _encode_unicode_string(value: str | None, string_length: int) -> IREncodedValue:
    if value is None and string_length <= 0:
        return IREncodedValue()

    words: list[str] = []
    if value is not None:
        encoded = value.encode("utf-16-le")
        for i in range(0, len(encoded), 2):
            words.append(f"0x{encoded[i] | encoded[i + 1] << 8:04X}")
    words.extend("0x0000" for _ in range(string_length - len(words)))
    return _string_storage("uint16_t", words, len(words) * 2)


def _string_storage(c_type: str, elements: list[str], length: int) -> IREncodedValue:
    return IREncodedValue(
        c_type=c_type,
        c_type_array=f"[{len(elements)}]",
        c_type_array0="[0]",
        length=length,
        c_value="{" + ", ".join(elements) + "}",
    )


def _encode_odd_width(data_type: DataType, value: str | None, base: int) -> IREncodedValue:
    """Encode a 3/5/6/7 byte integer as little-endian bytes, like ``{0x56, 0x34, 0x12}``."""
    length, signed = ODD_WIDTH_TYPES[data_type]
    if value is None:
        return IREncodedValue(length=length)

    number = to_signed(value, base, 64) if signed else to_unsigned(value, base, 64)
    # negative values leave bits set above the width
    if number < 0 or number >= 1 << (length * 8):
        raise ValueOverflowError(value)

    octets = [f"0x{byte:02X}" for byte in number.to_bytes(length, "little")]
    return IREncodedValue(
        c_type="uint8_t",
        c_type_array=f"[{length}]",
        c_type_array0="[0]",
        length=length,
        c_value="{" + ", ".join(octets) + "}",
    )


def _failed_encoding(data_type: DataType | str | None) -> IREncodedValue:
    """Type information of a value that could not be converted."""
    if data_type in SIGNED_TYPES:
        c_type, length = SIGNED_TYPES[data_type]
        return IREncodedValue(c_type=c_type, multibyte=length > 1, length=length)
    if data_type in UNSIGNED_TYPES:
        c_type, length = UNSIGNED_TYPES[data_type]
        return IREncodedValue(c_type=c_type, multibyte=length > 1, length=length)
    if data_type in ODD_WIDTH_TYPES:
        return IREncodedValue(length=ODD_WIDTH_TYPES[data_type][0])
    return IREncodedValue()
