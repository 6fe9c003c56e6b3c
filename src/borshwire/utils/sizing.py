"""Message size calculation utilities.

This module provides functions to calculate encoded sizes. ``fixed_size`` works
from the schema alone; the others depend on field values because strings,
byte vectors, sequences and options have variable length.
"""

from __future__ import annotations

from typing import Optional, Union

from ..codec.buffer import ByteWriter
from ..codec.encoder import serialize
from ..codec.registry import SchemaRegistry, registry_for
from ..codec.schema import EnumSchema, TypeKind, TypeRef
from ..codec.structs import encode_value
from ..models.base import BaseMessage

_LEAF_SIZES = {
    TypeKind.U8: 1,
    TypeKind.U16: 2,
    TypeKind.U32: 4,
    TypeKind.U64: 8,
    TypeKind.I64: 8,
    TypeKind.BOOL: 1,
}


def encoded_size(message: BaseMessage) -> int:
    """Calculate the encoded size of a message in bytes.

    Example:
        >>> from borshwire.demo import NestedStruct
        >>> encoded_size(NestedStruct(count=7, note="hi"))
        10
    """
    return len(serialize(message))


def field_sizes(message: BaseMessage) -> dict[str, int]:
    """Get the encoded size in bytes of each field of a message.

    Example:
        >>> from borshwire.demo import NestedStruct
        >>> field_sizes(NestedStruct(count=7, note="hi"))
        {'count': 4, 'note': 6}
    """
    registry = registry_for(type(message))
    schema = registry.resolve(type(message))
    if isinstance(schema, EnumSchema):
        # A variant's fields live in its payload struct
        variant = schema.variants[type(message).discriminant()]
        schema = registry.resolve_struct(variant.payload)

    sizes: dict[str, int] = {}
    for field in schema.fields:
        writer = ByteWriter()
        encode_value(writer, getattr(message, field.name), field.type_ref, registry)
        sizes[field.name] = len(writer)
    return sizes


def fixed_size(
    type_: Union[TypeRef, str, type[BaseMessage]],
    registry: Optional[SchemaRegistry] = None,
) -> Optional[int]:
    """Return the encoded size shared by every value of a type, or None if it varies.

    Enums have a fixed size only when all their variants' payloads have the
    same fixed size.

    Example:
        >>> from borshwire.demo import NestedStruct, PubkeyBytes
        >>> fixed_size(PubkeyBytes)
        32
        >>> fixed_size(NestedStruct) is None
        True
    """
    if registry is None:
        if isinstance(type_, type) and issubclass(type_, BaseMessage):
            registry = registry_for(type_)
        else:
            registry = SchemaRegistry()
    return _ref_size(registry.root_ref(type_), registry)


def _ref_size(ref: TypeRef, registry: SchemaRegistry) -> Optional[int]:
    if ref.kind in _LEAF_SIZES:
        return _LEAF_SIZES[ref.kind]
    if ref.kind is TypeKind.FIXED:
        return ref.length
    if ref.kind is not TypeKind.DEFINED:
        # string, bytes, sequence and option
        return None

    entry = registry.resolve(ref)
    if isinstance(entry, EnumSchema):
        payload_sizes = {
            _ref_size(TypeRef(TypeKind.DEFINED, name=variant.payload), registry)
            for variant in entry.variants
        }
        if len(payload_sizes) != 1 or None in payload_sizes:
            return None
        (payload_size,) = payload_sizes
        assert payload_size is not None
        return 1 + payload_size

    total = 0
    for field in entry.fields:
        size = _ref_size(field.type_ref, registry)
        if size is None:
            return None
        total += size
    return total
