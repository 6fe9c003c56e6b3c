"""borshwire: Borsh Wire Codec

A Python library for schema-driven Borsh binary serialization. Values are
modeled as Pydantic classes (or described by explicit schema entries) and
encoded to the deterministic little-endian layout used by Solana programs.

Key Features:
- Pydantic-based message modeling
- Fixed-width integers, strings, byte arrays, sequences, options and enums
- Immutable, validated schema registries
- Strict decoding that rejects truncated, malformed or trailing input

Quick Start:
    >>> from borshwire import BaseMessage, U8, U64, encode, decode
    >>>
    >>> class Transfer(BaseMessage):
    ...     kind: U8
    ...     amount: U64
    ...     memo: str
    >>>
    >>> msg = Transfer(kind=1, amount=500, memo="rent")
    >>> data = encode(msg)
    >>> decoded = decode(Transfer, data)
    >>> decoded == msg
    True
"""

from __future__ import annotations

from .codec import (
    SchemaRegistry,
    decode,
    deserialize,
    deserialize_prefix,
    encode,
    registry_for,
    serialize,
)
from .exceptions import (
    BorshwireError,
    DecodeError,
    EncodeError,
    FormatError,
    RangeError,
    SchemaError,
    UnknownVariantError,
)
from .models import I64, U8, U16, U32, U64, BaseEnum, BaseMessage, FixedBytes
from .utils import encoded_size, field_sizes, fixed_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "decode",
    "serialize",
    "deserialize",
    "deserialize_prefix",
    "SchemaRegistry",
    "registry_for",
    # Models
    "BaseMessage",
    "BaseEnum",
    "U8",
    "U16",
    "U32",
    "U64",
    "I64",
    "FixedBytes",
    # Exceptions
    "BorshwireError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    "RangeError",
    "FormatError",
    "UnknownVariantError",
    # Utilities
    "encoded_size",
    "field_sizes",
    "fixed_size",
]
