"""Tests for primitive codecs."""

from __future__ import annotations

import pytest

from borshwire.codec.buffer import ByteReader, ByteWriter
from borshwire.codec.primitives import (
    I64_MAX,
    I64_MIN,
    U16_MAX,
    U64_MAX,
    decode_bool,
    decode_i64,
    decode_string,
    decode_u16,
    decode_u32,
    decode_u64,
    encode_bool,
    encode_i64,
    encode_string,
    encode_u8,
    encode_u16,
    encode_u32,
    encode_u64,
    from_twos_complement,
    to_twos_complement,
)
from borshwire.exceptions import EncodeError, FormatError, RangeError


def _encode(encoder, value) -> bytes:  # type: ignore[no-untyped-def]
    writer = ByteWriter()
    encoder(writer, value)
    return writer.to_bytes()


class TestByteBuffers:
    """Test the writer/reader pair."""

    def test_write_uint_little_endian(self) -> None:
        writer = ByteWriter()
        writer.write_uint(0x0102, 2)
        assert writer.to_bytes() == b"\x02\x01"

    def test_write_uint_overflow(self) -> None:
        writer = ByteWriter()
        with pytest.raises(ValueError, match="requires more than"):
            writer.write_uint(256, 1)

    def test_write_byte_range(self) -> None:
        writer = ByteWriter()
        with pytest.raises(ValueError):
            writer.write_byte(256)

    def test_reader_tracks_position(self) -> None:
        reader = ByteReader(b"\x01\x02\x03")
        assert reader.read_byte() == 1
        assert reader.position() == 1
        assert reader.remaining() == 2
        assert reader.read_bytes(2) == b"\x02\x03"
        assert reader.is_empty()

    def test_reader_out_of_data(self) -> None:
        reader = ByteReader(b"\x01")
        with pytest.raises(FormatError, match="Not enough bytes at offset 0"):
            reader.read_bytes(2)
        # The failed read consumed nothing
        assert reader.position() == 0


class TestIntegers:
    """Test unsigned and signed integer codecs."""

    def test_unsigned_widths(self) -> None:
        assert _encode(encode_u8, 1) == b"\x01"
        assert _encode(encode_u16, 2) == b"\x02\x00"
        assert _encode(encode_u32, 3) == b"\x03\x00\x00\x00"
        assert _encode(encode_u64, 4) == b"\x04" + bytes(7)

    def test_unsigned_bounds(self) -> None:
        assert _encode(encode_u16, U16_MAX) == b"\xff\xff"
        assert _encode(encode_u64, U64_MAX) == b"\xff" * 8

    @pytest.mark.parametrize(
        ("encoder", "value"),
        [
            (encode_u8, 256),
            (encode_u8, -1),
            (encode_u16, U16_MAX + 1),
            (encode_u32, 1 << 32),
            (encode_u64, U64_MAX + 1),
        ],
    )
    def test_unsigned_out_of_range(self, encoder, value: int) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(RangeError, match="out of bounds"):
            _encode(encoder, value)

    def test_bool_is_not_an_integer(self) -> None:
        with pytest.raises(EncodeError, match="expected int"):
            _encode(encode_u8, True)

    def test_decode_unsigned(self) -> None:
        assert decode_u16(ByteReader(b"\x02\x00")) == 2
        assert decode_u32(ByteReader(b"\x03\x00\x00\x00")) == 3
        assert decode_u64(ByteReader(b"\xff" * 8)) == U64_MAX

    def test_negative_five(self) -> None:
        data = _encode(encode_i64, -5)
        assert data.hex() == "fbffffffffffffff"
        assert decode_i64(ByteReader(data)) == -5

    def test_i64_bounds(self) -> None:
        assert _encode(encode_i64, I64_MIN).hex() == "0000000000000080"
        assert _encode(encode_i64, I64_MAX).hex() == "ffffffffffffff7f"
        assert decode_i64(ByteReader(bytes.fromhex("0000000000000080"))) == I64_MIN

    @pytest.mark.parametrize("value", [I64_MIN - 1, I64_MAX + 1])
    def test_i64_out_of_range(self, value: int) -> None:
        with pytest.raises(RangeError):
            _encode(encode_i64, value)

    def test_twos_complement_small_width(self) -> None:
        assert to_twos_complement(-1, bits=8) == 0xFF
        assert from_twos_complement(0x80, bits=8) == -128
        assert from_twos_complement(0x7F, bits=8) == 127

    def test_truncated_integer(self) -> None:
        with pytest.raises(FormatError):
            decode_u64(ByteReader(bytes(5)))


class TestBool:
    """Test boolean codec."""

    def test_encode(self) -> None:
        assert _encode(encode_bool, True) == b"\x01"
        assert _encode(encode_bool, False) == b"\x00"

    def test_encode_rejects_int(self) -> None:
        with pytest.raises(EncodeError, match="expected bool"):
            _encode(encode_bool, 1)

    def test_decode_nonzero_is_true(self) -> None:
        assert decode_bool(ByteReader(b"\x00")) is False
        assert decode_bool(ByteReader(b"\x01")) is True
        assert decode_bool(ByteReader(b"\x02")) is True


class TestString:
    """Test length-prefixed UTF-8 string codec."""

    def test_hi(self) -> None:
        assert _encode(encode_string, "hi").hex() == "020000006869"

    def test_empty(self) -> None:
        assert _encode(encode_string, "") == b"\x00\x00\x00\x00"

    def test_length_counts_bytes_not_characters(self) -> None:
        data = _encode(encode_string, "é")
        assert data[:4] == b"\x02\x00\x00\x00"
        assert decode_string(ByteReader(data)) == "é"

    def test_encode_rejects_bytes(self) -> None:
        with pytest.raises(EncodeError, match="expected str"):
            _encode(encode_string, b"hi")

    def test_invalid_utf8(self) -> None:
        with pytest.raises(FormatError, match="invalid UTF-8"):
            decode_string(ByteReader(b"\x02\x00\x00\x00\xff\xfe"))

    def test_declared_length_too_long(self) -> None:
        with pytest.raises(FormatError, match="exceeds remaining"):
            decode_string(ByteReader(b"\x05\x00\x00\x00hi"))

    def test_truncated_length_prefix(self) -> None:
        with pytest.raises(FormatError):
            decode_string(ByteReader(b"\x02\x00"))
