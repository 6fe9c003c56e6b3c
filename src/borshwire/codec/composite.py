r"""Composite codecs: fixed byte arrays, byte vectors, sequences and options.

Composite codecs delegate the encoding of their elements to another codec, passed
in as an ``Encoder``/``Decoder`` callable.

Layout:

    fixed[N]       exactly N raw bytes, no length prefix
    bytes          u32 byte count, then the raw bytes
    sequence<T>    u32 element count, then each element encoded as T
    option<T>      [0x00] when absent, [0x01][T] when present

>>> from borshwire.codec.primitives import decode_u64, encode_u64
>>> writer = ByteWriter()
>>> encode_option(writer, 9, encode_u64)
>>> encode_option(writer, None, encode_u64)
>>> writer.to_bytes().hex()
'01090000000000000000'
>>> reader = ByteReader(writer.to_bytes())
>>> decode_option(reader, decode_u64), decode_option(reader, decode_u64)
(9, None)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Protocol, TypeVar

from ..exceptions import EncodeError, FormatError, RangeError
from .buffer import ByteReader, ByteWriter
from .primitives import U32_MAX

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
T_contra = TypeVar("T_contra", contravariant=True)


class Encoder(Protocol[T_contra]):
    def __call__(self, writer: ByteWriter, value: T_contra, /) -> None:
        ...


class Decoder(Protocol[T_co]):
    def __call__(self, reader: ByteReader, /) -> T_co:
        ...


def encode_fixed_bytes(writer: ByteWriter, value: bytes, length: int) -> None:
    """Encode exactly ``length`` raw bytes.

    Raises:
        EncodeError: If value is not bytes-like
        RangeError: If value is not exactly ``length`` bytes long
    """
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise EncodeError(f"fixed[{length}]: expected bytes, got {type(value).__name__}")
    if len(value) != length:
        raise RangeError(f"fixed[{length}]: expected {length} bytes, got {len(value)} bytes")
    writer.write_bytes(value)


def decode_fixed_bytes(reader: ByteReader, length: int) -> bytes:
    return reader.read_bytes(length)


def encode_byte_vector(writer: ByteWriter, value: bytes) -> None:
    """Encode a dynamic byte vector (same layout as a sequence of u8)."""
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise EncodeError(f"bytes: expected bytes, got {type(value).__name__}")
    if len(value) > U32_MAX:
        raise RangeError(f"bytes: {len(value)} bytes exceeds the u32 length prefix")
    writer.write_uint(len(value), 4)
    writer.write_bytes(value)


def decode_byte_vector(reader: ByteReader) -> bytes:
    length = reader.read_uint(4)
    if length > reader.remaining():
        raise FormatError(
            f"bytes: declared length {length} exceeds remaining {reader.remaining()} bytes"
        )
    return reader.read_bytes(length)


def encode_sequence(writer: ByteWriter, values: Sequence[T], encoder: Encoder[T]) -> None:
    """Encode a u32 element count followed by each element, in order.

    Raises:
        EncodeError: If values is not a sequence
        RangeError: If there are more elements than a u32 can count
    """
    if isinstance(values, (str, bytes, bytearray)) or not isinstance(values, Sequence):
        raise EncodeError(f"sequence: expected a list, got {type(values).__name__}")
    if len(values) > U32_MAX:
        raise RangeError(f"sequence: {len(values)} elements exceeds the u32 length prefix")
    writer.write_uint(len(values), 4)
    for value in values:
        encoder(writer, value)


def decode_sequence(reader: ByteReader, decoder: Decoder[T]) -> list[T]:
    """Decode a u32 element count followed by exactly that many elements."""
    count = reader.read_uint(4)
    return [decoder(reader) for _ in range(count)]


def encode_option(writer: ByteWriter, value: Optional[T], encoder: Encoder[T]) -> None:
    if value is None:
        writer.write_byte(0x00)
    else:
        writer.write_byte(0x01)
        encoder(writer, value)


def decode_option(reader: ByteReader, decoder: Decoder[T]) -> Optional[T]:
    """Decode an optional value.

    The presence byte must be 0x00 or 0x01; unlike booleans, other values are
    rejected.

    Raises:
        FormatError: If the presence byte is not 0 or 1
    """
    offset = reader.position()
    flag = reader.read_byte()
    if flag == 0x00:
        return None
    if flag == 0x01:
        return decoder(reader)
    raise FormatError(f"option: invalid presence byte 0x{flag:02x} at offset {offset}")
