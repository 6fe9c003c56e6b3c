"""Property-based tests using hypothesis."""

from __future__ import annotations

from typing import Annotated, Optional

from hypothesis import given
from hypothesis import strategies as st

from borshwire import I64, U16, U64, BaseMessage, FixedBytes, decode, deserialize, encode
from borshwire.codec import schema as wire
from borshwire.codec.buffer import ByteReader
from borshwire.codec.primitives import I64_MAX, I64_MIN, U64_MAX, decode_i64
from borshwire.codec.registry import SchemaRegistry
from borshwire.exceptions import DecodeError


class Record(BaseMessage):
    """Message covering every shape for property testing."""

    id: U16
    balance: U64
    delta: I64
    active: bool
    key: Annotated[bytes, FixedBytes(length=4)]
    label: str
    blob: bytes
    tags: list[U16]
    limit: Optional[U64]


records = st.builds(
    Record,
    id=st.integers(min_value=0, max_value=0xFFFF),
    balance=st.integers(min_value=0, max_value=U64_MAX),
    delta=st.integers(min_value=I64_MIN, max_value=I64_MAX),
    active=st.booleans(),
    key=st.binary(min_size=4, max_size=4),
    label=st.text(max_size=20),
    blob=st.binary(max_size=20),
    tags=st.lists(st.integers(min_value=0, max_value=0xFFFF), max_size=5),
    limit=st.none() | st.integers(min_value=0, max_value=U64_MAX),
)


class TestCodecProperties:
    """Property-based tests for codec."""

    @given(msg=records)
    def test_encode_decode_roundtrip(self, msg: Record) -> None:
        """Test encode/decode is invertible."""
        assert decode(Record, encode(msg)) == msg

    @given(msg=records)
    def test_encode_deterministic(self, msg: Record) -> None:
        """Test encoding depends only on field values."""
        copy = Record(**msg.model_dump())
        assert encode(copy) == encode(msg)

    @given(value=st.integers(min_value=I64_MIN, max_value=I64_MAX))
    def test_i64_matches_int_to_bytes(self, value: int) -> None:
        data = value.to_bytes(8, "little", signed=True)
        assert decode_i64(ByteReader(data)) == value

    @given(msg=records, cut=st.integers(min_value=1, max_value=8))
    def test_truncation_never_decodes(self, msg: Record, cut: int) -> None:
        """Any strict prefix fails to decode instead of producing a value."""
        data = encode(msg)
        try:
            decode(Record, data[: max(len(data) - cut, 0)])
        except DecodeError:
            return
        raise AssertionError("truncated data decoded successfully")

    @given(data=st.binary(max_size=64))
    def test_arbitrary_bytes_raise_only_decode_errors(self, data: bytes) -> None:
        """Malformed input fails with a decode error, never another exception."""
        registry = SchemaRegistry()
        ref = wire.sequence(wire.option(wire.STRING))
        try:
            deserialize(ref, data, registry)
        except DecodeError:
            pass
