r"""Primitive codecs: fixed-width integers, booleans and strings.

Layout:

    u8/u16/u32/u64   1/2/4/8 bytes, little-endian, unsigned
    i64              8 bytes, two's-complement bit pattern, little-endian
    bool             1 byte, 0x00 or 0x01 (any nonzero byte decodes as True)
    string           u32 UTF-8 byte length, then the UTF-8 bytes

>>> writer = ByteWriter()
>>> encode_i64(writer, -5)
>>> encode_string(writer, "hi")
>>> writer.to_bytes().hex()
'fbffffffffffffff020000006869'
"""

from __future__ import annotations

from ..exceptions import EncodeError, FormatError, RangeError
from .buffer import ByteReader, ByteWriter

U8_MAX = (1 << 8) - 1
U16_MAX = (1 << 16) - 1
U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


def to_twos_complement(value: int, bits: int = 64) -> int:
    """Return the unsigned two's-complement bit pattern of a signed value.

    Args:
        value: Signed integer in [-2^(bits-1), 2^(bits-1) - 1]
        bits: Width of the pattern

    Returns:
        Unsigned integer in [0, 2^bits - 1]

    Raises:
        RangeError: If value doesn't fit in a signed integer of this width
    """
    min_value = -(1 << (bits - 1))
    max_value = (1 << (bits - 1)) - 1
    if value < min_value or value > max_value:
        raise RangeError(
            f"Value {value} doesn't fit in a signed {bits}-bit integer "
            f"(range: {min_value} to {max_value})"
        )
    if value < 0:
        return (1 << bits) + value
    return value


def from_twos_complement(pattern: int, bits: int = 64) -> int:
    """Reinterpret an unsigned bit pattern as a signed two's-complement value.

    Args:
        pattern: Unsigned integer in [0, 2^bits - 1]
        bits: Width of the pattern

    Returns:
        Signed integer value
    """
    if pattern < 0 or pattern >> bits:
        raise ValueError(f"Pattern {pattern} is not an unsigned {bits}-bit integer")
    if pattern & (1 << (bits - 1)):
        return pattern - (1 << bits)
    return pattern


def _check_int(value: object, kind: str) -> int:
    # bool is an int subclass but never a valid integer field value
    if not isinstance(value, int) or isinstance(value, bool):
        raise EncodeError(f"{kind}: expected int, got {type(value).__name__}")
    return value


def _encode_uint(writer: ByteWriter, value: object, size: int, kind: str) -> None:
    number = _check_int(value, kind)
    max_value = (1 << (size * 8)) - 1
    if number < 0 or number > max_value:
        raise RangeError(f"{kind}: value {number} out of bounds [0, {max_value}]")
    writer.write_uint(number, size)


def encode_u8(writer: ByteWriter, value: int) -> None:
    _encode_uint(writer, value, 1, "u8")


def encode_u16(writer: ByteWriter, value: int) -> None:
    _encode_uint(writer, value, 2, "u16")


def encode_u32(writer: ByteWriter, value: int) -> None:
    _encode_uint(writer, value, 4, "u32")


def encode_u64(writer: ByteWriter, value: int) -> None:
    _encode_uint(writer, value, 8, "u64")


def decode_u8(reader: ByteReader) -> int:
    return reader.read_uint(1)


def decode_u16(reader: ByteReader) -> int:
    return reader.read_uint(2)


def decode_u32(reader: ByteReader) -> int:
    return reader.read_uint(4)


def decode_u64(reader: ByteReader) -> int:
    return reader.read_uint(8)


def encode_i64(writer: ByteWriter, value: int) -> None:
    """Encode a signed 64-bit integer as its two's-complement pattern.

    Raises:
        EncodeError: If value is not an int
        RangeError: If value is outside [-2^63, 2^63 - 1]
    """
    number = _check_int(value, "i64")
    writer.write_uint(to_twos_complement(number, 64), 8)


def decode_i64(reader: ByteReader) -> int:
    """Decode a signed 64-bit integer from its two's-complement pattern."""
    return from_twos_complement(reader.read_uint(8), 64)


def encode_bool(writer: ByteWriter, value: bool) -> None:
    """Encode a boolean as a single 0x00/0x01 byte."""
    if not isinstance(value, bool):
        raise EncodeError(f"bool: expected bool, got {type(value).__name__}")
    writer.write_byte(0x01 if value else 0x00)


def decode_bool(reader: ByteReader) -> bool:
    """Decode a boolean byte; any nonzero byte is True."""
    return reader.read_byte() != 0


def encode_string(writer: ByteWriter, value: str) -> None:
    """Encode a string as a u32 byte length followed by its UTF-8 bytes.

    Raises:
        EncodeError: If value is not a str or cannot be encoded as UTF-8
        RangeError: If the UTF-8 form is longer than a u32 can count
    """
    if not isinstance(value, str):
        raise EncodeError(f"string: expected str, got {type(value).__name__}")
    try:
        data = value.encode("utf-8")
    except UnicodeEncodeError as err:
        raise EncodeError(f"string: cannot encode as UTF-8: {err}") from err
    if len(data) > U32_MAX:
        raise RangeError(f"string: {len(data)} bytes exceeds the u32 length prefix")
    writer.write_uint(len(data), 4)
    writer.write_bytes(data)


def decode_string(reader: ByteReader) -> str:
    """Decode a u32-length-prefixed UTF-8 string.

    Raises:
        FormatError: If the declared length exceeds the remaining bytes or the
            bytes are not valid UTF-8
    """
    length = reader.read_uint(4)
    if length > reader.remaining():
        raise FormatError(
            f"string: declared length {length} exceeds remaining {reader.remaining()} bytes"
        )
    raw = reader.read_bytes(length)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as err:
        raise FormatError(f"string: invalid UTF-8 encoding: {err}") from err
