"""Binary decoder for borshwire messages.

This module provides deserialize() and decode(), which rebuild a value from its
Borsh byte layout.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from ..exceptions import FormatError
from ..models.base import BaseMessage
from .buffer import ByteReader
from .registry import SchemaRegistry, TypeLike, registry_for
from .structs import decode_value

T = TypeVar("T", bound=BaseMessage)


def deserialize_prefix(
    type_: TypeLike,
    data: bytes | bytearray | memoryview,
    registry: Optional[SchemaRegistry] = None,
) -> tuple[Any, int]:
    """Decode one value from the front of a buffer.

    Args:
        type_: Root type (name, model class or TypeRef)
        data: Binary data to decode
        registry: Registry to resolve types in; defaults to the registry rooted
            at ``type_`` when it is a model class

    Returns:
        Tuple of (value, bytes_consumed)

    Raises:
        SchemaError: If the root type or a nested type cannot be resolved
        FormatError: If data is truncated or malformed
            (or, when ``type_`` is an enum variant class, holds a different variant)
        UnknownVariantError: If an enum discriminant is out of range
    """
    if registry is None:
        if isinstance(type_, type) and issubclass(type_, BaseMessage):
            registry = registry_for(type_)
        else:
            registry = SchemaRegistry()

    reader = ByteReader(data)
    value = decode_value(reader, registry.root_ref(type_), registry)
    if isinstance(type_, type) and not isinstance(value, type_):
        # A variant class selects its whole enum; the data may hold a sibling variant
        raise FormatError(
            f"Decoded {type(value).__name__} where {type_.__name__} was expected"
        )
    return value, reader.position()


def deserialize(
    type_: TypeLike,
    data: bytes | bytearray | memoryview,
    registry: Optional[SchemaRegistry] = None,
    *,
    allow_trailing: bool = False,
) -> Any:
    """Decode a value that spans the whole buffer.

    Args:
        type_: Root type (name, model class or TypeRef)
        data: Binary data to decode
        registry: Registry to resolve types in
        allow_trailing: If True, ignore bytes left after the value

    Returns:
        Decoded value

    Raises:
        SchemaError: If the root type or a nested type cannot be resolved
        FormatError: If data is truncated, malformed, or has trailing bytes
        UnknownVariantError: If an enum discriminant is out of range

    Examples:
        ```python
        from borshwire import deserialize

        state = deserialize(BorshDemoState, data)
        note = deserialize("NestedStruct", data, registry)
        ```
    """
    value, consumed = deserialize_prefix(type_, data, registry)
    if not allow_trailing and consumed != len(data):
        raise FormatError(
            f"Unexpected {len(data) - consumed} trailing bytes after decoding {consumed} bytes"
        )
    return value


def decode(message_class: type[T], data: bytes | bytearray | memoryview) -> T:
    """Decode a message of the given class from the whole buffer.

    Example:
        >>> from borshwire.demo import NestedStruct
        >>> decode(NestedStruct, bytes(8))
        NestedStruct(count=0, note='')
    """
    message: T = deserialize(message_class, data)
    return message
