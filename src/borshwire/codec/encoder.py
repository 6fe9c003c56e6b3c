"""Binary encoder for borshwire messages.

This module provides serialize() and encode(), which turn a value into its
Borsh byte layout.
"""

from __future__ import annotations

from typing import Any, Optional

from ..exceptions import EncodeError
from ..models.base import BaseMessage
from .buffer import ByteWriter
from .registry import SchemaRegistry, TypeLike, registry_for
from .structs import encode_value


def serialize(
    value: Any,
    registry: Optional[SchemaRegistry] = None,
    type_: Optional[TypeLike] = None,
) -> bytes:
    """Serialize a value to bytes.

    Fields are encoded in declaration order, little-endian, with no padding.

    Args:
        value: Value to encode; a message instance, or any value matching ``type_``
        registry: Registry to resolve types in; defaults to the registry rooted at
            the value's class (or an empty registry for plain wire types)
        type_: Root type (name, model class or TypeRef); defaults to the value's class

    Returns:
        Encoded bytes

    Raises:
        SchemaError: If the root type or a nested type cannot be resolved
        EncodeError: If a value doesn't match its declared type
        RangeError: If a value doesn't fit its declared width

    Examples:
        ```python
        from borshwire import BaseMessage, U32, serialize

        class NestedStruct(BaseMessage):
            count: U32
            note: str

        serialize(NestedStruct(count=7, note="hi")).hex()
        # '07000000020000006869'
        ```
    """
    if registry is None:
        registry = _default_registry(value, type_)

    root = registry.root_ref(type_, value)
    writer = ByteWriter()
    encode_value(writer, value, root, registry)
    encoded = writer.to_bytes()

    # Check max_bytes constraint if present
    max_bytes = getattr(type(value), "borsh_max_bytes", None)
    if max_bytes is not None and len(encoded) > max_bytes:
        raise EncodeError(
            f"Encoded message size ({len(encoded)} bytes) exceeds borsh_max_bytes={max_bytes}"
        )

    return encoded


def encode(message: BaseMessage) -> bytes:
    """Encode a message instance using the registry rooted at its class.

    Example:
        >>> from borshwire.demo import NestedStruct
        >>> encode(NestedStruct(count=0, note="")).hex()
        '0000000000000000'
    """
    return serialize(message)


def _default_registry(value: Any, type_: Optional[TypeLike]) -> SchemaRegistry:
    if isinstance(type_, type) and issubclass(type_, BaseMessage):
        return registry_for(type_)
    if type_ is None and isinstance(value, BaseMessage):
        return registry_for(type(value))
    # Plain wire types (and unresolvable names) need no entries
    return SchemaRegistry()
