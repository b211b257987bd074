"""Enumerations used by object dictionary entries."""

from __future__ import annotations

from enum import Enum
from typing import Any

from yaml_to_od.models.common import parse_hex_int


class DataType(str, Enum):
    """CANopen static data types (CiA 301).

    The enum value is the type name as it appears in EDS/XDD files.
    """

    BOOLEAN = "BOOLEAN"
    INTEGER8 = "INTEGER8"
    INTEGER16 = "INTEGER16"
    INTEGER32 = "INTEGER32"
    UNSIGNED8 = "UNSIGNED8"
    UNSIGNED16 = "UNSIGNED16"
    UNSIGNED32 = "UNSIGNED32"
    REAL32 = "REAL32"
    VISIBLE_STRING = "VISIBLE_STRING"
    OCTET_STRING = "OCTET_STRING"
    UNICODE_STRING = "UNICODE_STRING"
    TIME_OF_DAY = "TIME_OF_DAY"
    TIME_DIFFERENCE = "TIME_DIFFERENCE"
    DOMAIN = "DOMAIN"
    INTEGER24 = "INTEGER24"
    REAL64 = "REAL64"
    INTEGER40 = "INTEGER40"
    INTEGER48 = "INTEGER48"
    INTEGER56 = "INTEGER56"
    INTEGER64 = "INTEGER64"
    UNSIGNED24 = "UNSIGNED24"
    UNSIGNED40 = "UNSIGNED40"
    UNSIGNED48 = "UNSIGNED48"
    UNSIGNED56 = "UNSIGNED56"
    UNSIGNED64 = "UNSIGNED64"


# Object dictionary index of each static data type definition
DATA_TYPE_CODES: dict[int, DataType] = {
    0x01: DataType.BOOLEAN,
    0x02: DataType.INTEGER8,
    0x03: DataType.INTEGER16,
    0x04: DataType.INTEGER32,
    0x05: DataType.UNSIGNED8,
    0x06: DataType.UNSIGNED16,
    0x07: DataType.UNSIGNED32,
    0x08: DataType.REAL32,
    0x09: DataType.VISIBLE_STRING,
    0x0A: DataType.OCTET_STRING,
    0x0B: DataType.UNICODE_STRING,
    0x0C: DataType.TIME_OF_DAY,
    0x0D: DataType.TIME_DIFFERENCE,
    0x0F: DataType.DOMAIN,
    0x10: DataType.INTEGER24,
    0x11: DataType.REAL64,
    0x12: DataType.INTEGER40,
    0x13: DataType.INTEGER48,
    0x14: DataType.INTEGER56,
    0x15: DataType.INTEGER64,
    0x16: DataType.UNSIGNED24,
    0x18: DataType.UNSIGNED40,
    0x19: DataType.UNSIGNED48,
    0x1A: DataType.UNSIGNED56,
    0x1B: DataType.UNSIGNED64,
}


class AccessType(str, Enum):
    """SDO access classification of an entry."""

    RW = "rw"
    RWR = "rwr"  # read-write, mapped on read (TPDO)
    RWW = "rww"  # read-write, mapped on write (RPDO)
    RO = "ro"
    CONST = "const"
    WO = "wo"


class PDOMapping(str, Enum):
    """PDO mapping classification of an entry."""

    NO = "no"
    OPTIONAL = "optional"
    TPDO = "TPDO"
    RPDO = "RPDO"


class ObjectType(str, Enum):
    """Object shape of a dictionary entry."""

    VAR = "VAR"
    ARRAY = "ARRAY"
    RECORD = "RECORD"


# Abbreviations used by older editors
_OBJECT_TYPE_ALIASES: dict[str, ObjectType] = {
    "VAR": ObjectType.VAR,
    "ARRAY": ObjectType.ARRAY,
    "ARR": ObjectType.ARRAY,
    "RECORD": ObjectType.RECORD,
    "REC": ObjectType.RECORD,
}

# CiA 306 object codes
_OBJECT_TYPE_CODES: dict[int, ObjectType] = {
    0x7: ObjectType.VAR,
    0x8: ObjectType.ARRAY,
    0x9: ObjectType.RECORD,
}


def parse_object_type(value: Any) -> Any:
    """Normalize an object type given by name, abbreviation or object code.

    Unrecognized values are returned unchanged so Pydantic reports them.

    Examples:
    --------
        >>> parse_object_type("rec")
        <ObjectType.RECORD: 'RECORD'>
        >>> parse_object_type(8)
        <ObjectType.ARRAY: 'ARRAY'>

    """
    if isinstance(value, ObjectType):
        return value
    if isinstance(value, str) and value.strip().upper() in _OBJECT_TYPE_ALIASES:
        return _OBJECT_TYPE_ALIASES[value.strip().upper()]
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        try:
            return _OBJECT_TYPE_CODES.get(parse_hex_int(value), value)
        except ValueError:
            return value
    return value


def parse_data_type(value: Any) -> DataType | str | None:
    """Normalize a data type given by name or by CiA 301 code.

    Names are matched case-insensitively. Anything that is not a known data
    type is kept as a string; the encoder reports it as unknown.

    Examples:
    --------
        >>> parse_data_type("unsigned8")
        <DataType.UNSIGNED8: 'UNSIGNED8'>
        >>> parse_data_type("0x0007")
        <DataType.UNSIGNED32: 'UNSIGNED32'>
        >>> parse_data_type("0x0020")
        '0x0020'

    """
    if value is None or isinstance(value, DataType):
        return value
    if isinstance(value, bool):
        return str(value)

    if isinstance(value, int):
        return DATA_TYPE_CODES.get(value, f"0x{value:04X}")

    text = str(value).strip()
    try:
        return DataType(text.upper())
    except ValueError:
        pass

    try:
        code = parse_hex_int(text)
    except ValueError:
        return text
    return DATA_TYPE_CODES.get(code, text)


def parse_access_type(value: Any) -> Any:
    """Normalize an access type (case-insensitive)."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def parse_pdo_mapping(value: Any) -> Any:
    """Normalize a PDO mapping classification.

    YAML 1.1 loads bare ``no``/``yes`` as booleans, which map to
    ``no``/``optional``.
    """
    if isinstance(value, bool):
        return PDOMapping.OPTIONAL if value else PDOMapping.NO
    if isinstance(value, str):
        text = value.strip()
        for member in PDOMapping:
            if member.value.lower() == text.lower():
                return member
    return value
