"""Field type helpers and utilities.

This module provides type aliases and helpers for declaring message fields with
a fixed wire layout. Each integer alias carries its range constraint (checked by
Pydantic) and its wire type (used by the codec).
"""

from __future__ import annotations

from typing import Annotated, Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

from ..codec import schema as wire
from ..codec.primitives import I64_MAX, I64_MIN, U8_MAX, U16_MAX, U32_MAX, U64_MAX

U8 = Annotated[int, Field(ge=0, le=U8_MAX), wire.U8]
U16 = Annotated[int, Field(ge=0, le=U16_MAX), wire.U16]
U32 = Annotated[int, Field(ge=0, le=U32_MAX), wire.U32]
U64 = Annotated[int, Field(ge=0, le=U64_MAX), wire.U64]
I64 = Annotated[int, Field(ge=I64_MIN, le=I64_MAX), wire.I64]


def FixedBytes(*, length: int, **kwargs: Any) -> FieldInfo:
    """Create a fixed-length bytes field.

    A ``bytes`` field without this marker is a dynamic byte vector with a u32
    length prefix; with it, the field is exactly ``length`` raw bytes.

    Args:
        length: Exact length in bytes
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as Annotated metadata.

    Example:
        ```python
        from typing import Annotated

        from borshwire import BaseMessage, FixedBytes

        class Message(BaseMessage):
            pubkey: Annotated[bytes, FixedBytes(length=32)]
        ```
    """
    return cast(FieldInfo, Field(min_length=length, max_length=length, **kwargs))
