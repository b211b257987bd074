"""Tests for default value encoding."""

import pytest

from yaml_to_od.ir.types import IREncodedValue
from yaml_to_od.models.types import DataType
from yaml_to_od.transform.value_encoder import (
    detect_base,
    encode_value,
    escape_char,
    parse_integer,
    to_signed,
    to_unsigned,
)
from yaml_to_od.validation.errors import BuildWarnings


def encode(
    data_type: DataType | str | None,
    default: str | None,
    warnings: BuildWarnings,
    string_length: int = 0,
) -> IREncodedValue:
    return encode_value(data_type, default, string_length, "2000", warnings)


class TestNumberParsing:
    """Tests for base detection and integer parsing."""

    def test_detect_hex(self) -> None:
        """C suffixes are stripped from hex literals."""
        assert detect_base("0x1000UL") == ("0x1000", 16)
        assert detect_base("0X0a") == ("0X0a", 16)

    def test_detect_octal(self) -> None:
        """A leading zero means octal."""
        assert detect_base("017") == ("017", 8)

    def test_detect_decimal(self) -> None:
        """Everything else is decimal, including a plain zero."""
        assert detect_base("0") == ("0", 10)
        assert detect_base("-12") == ("-12", 10)

    def test_parse_integer_rejects_bad_digits(self) -> None:
        """Digits must be valid in the detected base."""
        with pytest.raises(ValueError):
            parse_integer("08", 8)
        with pytest.raises(ValueError):
            parse_integer("12a", 10)

    def test_signed_two_complement(self) -> None:
        """Hex input to a signed type is a bit pattern."""
        assert to_signed("0xFF", 16, 8) == -1
        assert to_signed("0x80", 16, 8) == -128
        assert to_signed("0x7F", 16, 8) == 127

    def test_signed_decimal_range(self) -> None:
        """Decimal input to a signed type must fit."""
        assert to_signed("-128", 10, 8) == -128
        with pytest.raises(ValueError):
            to_signed("128", 10, 8)

    def test_unsigned_range(self) -> None:
        """Unsigned values must be non-negative and fit."""
        assert to_unsigned("255", 10, 8) == 255
        with pytest.raises(ValueError):
            to_unsigned("256", 10, 8)
        with pytest.raises(ValueError):
            to_unsigned("-1", 10, 8)

    def test_escape_char(self) -> None:
        """Quotes, backslashes and non-printables are escaped."""
        assert escape_char(ord("a")) == "a"
        assert escape_char(0x27) == "\\'"
        assert escape_char(0x5C) == "\\\\"
        assert escape_char(0x0A) == "\\n"
        assert escape_char(0x01) == "\\x01"


class TestScalarEncoding:
    """Tests for BOOLEAN, integer and float types."""

    def test_boolean(self, warnings: BuildWarnings) -> None:
        """Booleans render as false/true."""
        assert encode(DataType.BOOLEAN, "0", warnings).c_value == "false"
        assert encode(DataType.BOOLEAN, "FALSE", warnings).c_value == "false"
        result = encode(DataType.BOOLEAN, "1", warnings)
        assert result.c_value == "true"
        assert result.c_type == "bool_t"
        assert result.length == 1
        assert not result.multibyte

    def test_unsigned_hex_padding(self, warnings: BuildWarnings) -> None:
        """Unsigned values are zero-padded hex of the type width."""
        result = encode(DataType.UNSIGNED32, "0x80", warnings)
        assert result.c_type == "uint32_t"
        assert result.c_value == "0x00000080"
        assert result.length == 4
        assert result.multibyte

    def test_unsigned8_not_multibyte(self, warnings: BuildWarnings) -> None:
        """One-byte scalars are not multibyte."""
        result = encode(DataType.UNSIGNED8, "10", warnings)
        assert result.c_value == "0x0A"
        assert not result.multibyte

    def test_octal_input(self, warnings: BuildWarnings) -> None:
        """Octal literals are converted."""
        assert encode(DataType.UNSIGNED16, "017", warnings).c_value == "0x000F"

    def test_signed_decimal(self, warnings: BuildWarnings) -> None:
        """Signed values render as decimal."""
        result = encode(DataType.INTEGER16, "-5", warnings)
        assert result.c_type == "int16_t"
        assert result.c_value == "-5"

    def test_signed_from_hex(self, warnings: BuildWarnings) -> None:
        """Hex input to a signed type is sign-extended."""
        assert encode(DataType.INTEGER8, "0xFF", warnings).c_value == "-1"

    def test_node_id_placeholder(self, warnings: BuildWarnings) -> None:
        """The node-ID token and plus signs are removed."""
        assert encode(DataType.UNSIGNED32, "$NODEID+0x180", warnings).c_value == "0x00000180"
        assert encode(DataType.UNSIGNED32, "0x600 + $NODEID", warnings).c_value == "0x00000600"
        assert encode(DataType.UNSIGNED8, "$NODEID", warnings).c_value == "0x00"
        assert not warnings.has_warnings

    def test_real_passes_through(self, warnings: BuildWarnings) -> None:
        """Floats keep their literal."""
        result = encode(DataType.REAL32, "1.5", warnings)
        assert result.c_type == "float32_t"
        assert result.c_value == "1.5"
        assert result.multibyte
        assert encode(DataType.REAL64, "0.25", warnings).length == 8

    def test_no_default(self, warnings: BuildWarnings) -> None:
        """Without a default only the length is known, there is no C type."""
        result = encode(DataType.UNSIGNED16, None, warnings)
        assert result.c_type is None
        assert result.length == 2
        assert result.multibyte
        assert result.c_value is None
        assert not result.defined
        assert encode(DataType.UNSIGNED16, "  ", warnings).c_value is None
        assert not warnings.has_warnings

    @pytest.mark.parametrize(
        ("data_type", "length"),
        [
            (DataType.BOOLEAN, 1),
            (DataType.UNSIGNED8, 1),
            (DataType.INTEGER32, 4),
            (DataType.REAL32, 4),
            (DataType.REAL64, 8),
        ],
    )
    def test_no_default_has_no_c_type(
        self, data_type: DataType, length: int, warnings: BuildWarnings
    ) -> None:
        """Undefined scalars of every family carry a length but no C type."""
        result = encode(data_type, None, warnings)
        assert result.c_type is None
        assert result.length == length
        assert result.c_value is None

    def test_conversion_error(self, warnings: BuildWarnings) -> None:
        """Out of range values warn and allocate nothing."""
        result = encode(DataType.INTEGER8, "128", warnings)
        assert result.c_value is None
        assert result.c_type == "int8_t"
        assert warnings.messages == [
            "Error in 0x2000: Error converting default value 128 to type INTEGER8"
        ]

    def test_garbage_value(self, warnings: BuildWarnings) -> None:
        """Unparsable values warn."""
        encode(DataType.UNSIGNED32, "lots", warnings)
        assert warnings.messages == [
            "Error in 0x2000: Error converting default value lots to type UNSIGNED32"
        ]

    def test_domain(self, warnings: BuildWarnings) -> None:
        """DOMAIN has no storage and no warning."""
        result = encode(DataType.DOMAIN, "0", warnings)
        assert result.c_type is None
        assert result.c_value is None
        assert result.length == 0
        assert not warnings.has_warnings

    def test_unknown_type(self, warnings: BuildWarnings) -> None:
        """Unknown types warn and allocate nothing."""
        result = encode("0x0020", "1", warnings)
        assert result.c_value is None
        assert warnings.messages == ["Error in 0x2000: Unknown dataType: 0x0020"]


_SIGNED_WIDTHS = [
    (DataType.INTEGER8, "int8_t", 8),
    (DataType.INTEGER16, "int16_t", 16),
    (DataType.INTEGER32, "int32_t", 32),
    (DataType.INTEGER64, "int64_t", 64),
]

_UNSIGNED_WIDTHS = [
    (DataType.UNSIGNED8, "uint8_t", 8),
    (DataType.UNSIGNED16, "uint16_t", 16),
    (DataType.UNSIGNED32, "uint32_t", 32),
    (DataType.UNSIGNED64, "uint64_t", 64),
]


class TestIntegerLimits:
    """The rendered literal of every fixed-width integer reads back as its value."""

    @pytest.mark.parametrize(("data_type", "c_type", "bits"), _SIGNED_WIDTHS)
    @pytest.mark.parametrize("pick", ["min", "max", "zero", "mid"])
    def test_signed(
        self,
        data_type: DataType,
        c_type: str,
        bits: int,
        pick: str,
        warnings: BuildWarnings,
    ) -> None:
        """Signed limits render as decimal literals."""
        number = {
            "min": -(1 << (bits - 1)),
            "max": (1 << (bits - 1)) - 1,
            "zero": 0,
            "mid": -(1 << (bits - 2)) + 3,
        }[pick]
        result = encode(data_type, str(number), warnings)
        assert result.c_type == c_type
        assert result.length == bits // 8
        assert result.c_value is not None
        assert int(result.c_value) == number
        assert not warnings.has_warnings

    @pytest.mark.parametrize(("data_type", "c_type", "bits"), _UNSIGNED_WIDTHS)
    @pytest.mark.parametrize("pick", ["min", "max", "mid"])
    def test_unsigned(
        self,
        data_type: DataType,
        c_type: str,
        bits: int,
        pick: str,
        warnings: BuildWarnings,
    ) -> None:
        """Unsigned limits render as hex literals padded to the width."""
        number = {
            "min": 0,
            "max": (1 << bits) - 1,
            "mid": (1 << (bits - 1)) + 5,
        }[pick]
        result = encode(data_type, str(number), warnings)
        assert result.c_type == c_type
        assert result.c_value is not None
        assert len(result.c_value) == 2 + bits // 4
        assert int(result.c_value, 16) == number
        assert not warnings.has_warnings

    @pytest.mark.parametrize(("data_type", "c_type", "bits"), _SIGNED_WIDTHS)
    def test_signed_one_past_max(
        self, data_type: DataType, c_type: str, bits: int, warnings: BuildWarnings
    ) -> None:
        """One past the signed maximum is a conversion error."""
        result = encode(data_type, str(1 << (bits - 1)), warnings)
        assert result.c_value is None
        assert result.c_type == c_type
        assert warnings.has_warnings


class TestOddWidthEncoding:
    """Tests for 24/40/48/56 bit integers."""

    def test_unsigned24_little_endian(self, warnings: BuildWarnings) -> None:
        """Bytes are listed least significant first."""
        result = encode(DataType.UNSIGNED24, "0x010203", warnings)
        assert result.c_type == "uint8_t"
        assert result.c_type_array == "[3]"
        assert result.c_type_array0 == "[0]"
        assert result.c_value == "{0x03, 0x02, 0x01}"
        assert result.length == 3
        assert not result.multibyte
        assert not warnings.has_warnings

    def test_unsigned24_overflow(self, warnings: BuildWarnings) -> None:
        """A value wider than the type overflows."""
        result = encode(DataType.UNSIGNED24, "0x1000000", warnings)
        assert result.c_value is None
        assert result.length == 3
        assert warnings.messages == [
            "Error in 0x2000: Overflow error in default value 0x1000000 of type UNSIGNED24"
        ]

    def test_integer24_negative(self, warnings: BuildWarnings) -> None:
        """Negative values set bits above the width and overflow."""
        result = encode(DataType.INTEGER24, "-1", warnings)
        assert result.c_value is None
        assert result.c_type is None
        assert result.c_type_array == ""
        assert result.length == 3
        assert warnings.messages == [
            "Error in 0x2000: Overflow error in default value -1 of type INTEGER24"
        ]

    def test_integer24_full_width(self, warnings: BuildWarnings) -> None:
        """Positive values up to the full byte width are accepted."""
        result = encode(DataType.INTEGER24, "0xFFFFFF", warnings)
        assert result.c_value == "{0xFF, 0xFF, 0xFF}"
        assert result.c_type == "uint8_t"
        assert not warnings.has_warnings

    def test_integer48(self, warnings: BuildWarnings) -> None:
        """Six byte integers."""
        result = encode(DataType.INTEGER48, "0x0102", warnings)
        assert result.c_value == "{0x02, 0x01, 0x00, 0x00, 0x00, 0x00}"
        assert result.length == 6

    def test_time_of_day_is_six_bytes(self, warnings: BuildWarnings) -> None:
        """TIME_OF_DAY is stored like UNSIGNED48."""
        result = encode(DataType.TIME_OF_DAY, None, warnings)
        assert result.length == 6
        assert result.c_type is None
        assert result.c_value is None
        assert encode(DataType.TIME_OF_DAY, "1", warnings).c_type_array == "[6]"


class TestStringEncoding:
    """Tests for string types."""

    def test_visible_string_padded(self, warnings: BuildWarnings) -> None:
        """Strings are padded with NUL up to the minimum length."""
        result = encode(DataType.VISIBLE_STRING, "abc", warnings, string_length=5)
        assert result.c_type == "char"
        assert result.c_type_array == "[5]"
        assert result.c_type_array0 == "[0]"
        assert result.c_value == "{'a', 'b', 'c', '\\0', '\\0'}"
        assert result.length == 5
        assert not result.multibyte

    def test_visible_string_longer_than_hint(self, warnings: BuildWarnings) -> None:
        """The hint is a minimum only."""
        result = encode(DataType.VISIBLE_STRING, "abcd", warnings, string_length=2)
        assert result.length == 4
        assert result.c_type_array == "[4]"

    def test_visible_string_keeps_whitespace(self, warnings: BuildWarnings) -> None:
        """String defaults are not stripped."""
        result = encode(DataType.VISIBLE_STRING, " a", warnings)
        assert result.c_value == "{' ', 'a'}"

    def test_visible_string_escapes(self, warnings: BuildWarnings) -> None:
        """Quotes are escaped."""
        result = encode(DataType.VISIBLE_STRING, "it's", warnings)
        assert result.c_value == "{'i', 't', '\\'', 's'}"

    def test_empty_string_with_hint(self, warnings: BuildWarnings) -> None:
        """An empty default still reserves the hinted length."""
        result = encode(DataType.VISIBLE_STRING, None, warnings, string_length=3)
        assert result.c_value == "{'\\0', '\\0', '\\0'}"
        assert result.length == 3

    def test_empty_string_without_hint(self, warnings: BuildWarnings) -> None:
        """No default and no hint: no storage."""
        result = encode(DataType.VISIBLE_STRING, "", warnings)
        assert result.c_type is None
        assert result.c_value is None
        assert result.length == 0

    def test_octet_string(self, warnings: BuildWarnings) -> None:
        """Octets are separated by whitespace, each with its own base."""
        result = encode(DataType.OCTET_STRING, "01 0x1F 255", warnings, string_length=4)
        assert result.c_type == "uint8_t"
        assert result.c_value == "{0x01, 0x1F, 0xFF, 0x00}"
        assert result.length == 4

    def test_octet_string_bad_token(self, warnings: BuildWarnings) -> None:
        """An octet that does not fit a byte is a conversion error."""
        result = encode(DataType.OCTET_STRING, "0x100", warnings)
        assert result.c_value is None
        assert result.c_type is None
        assert warnings.messages == [
            "Error in 0x2000: Error converting default value 0x100 to type OCTET_STRING"
        ]

    def test_unicode_string(self, warnings: BuildWarnings) -> None:
        """Unicode strings are UTF-16 code units, two bytes each."""
        result = encode(DataType.UNICODE_STRING, "Hi", warnings, string_length=3)
        assert result.c_type == "uint16_t"
        assert result.c_value == "{0x0048, 0x0069, 0x0000}"
        assert result.length == 6
