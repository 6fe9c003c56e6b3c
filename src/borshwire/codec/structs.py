"""Struct codec and per-type dispatch.

``encode_value``/``decode_value`` map each TypeKind to its codec; structs encode
their fields back to back in declaration order with no separators or padding.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable

from pydantic import ValidationError

from ..exceptions import EncodeError, FormatError
from .buffer import ByteReader, ByteWriter
from .composite import (
    decode_byte_vector,
    decode_fixed_bytes,
    decode_option,
    decode_sequence,
    encode_byte_vector,
    encode_fixed_bytes,
    encode_option,
    encode_sequence,
)
from .primitives import (
    decode_bool,
    decode_i64,
    decode_string,
    decode_u8,
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
)
from .schema import EnumSchema, StructSchema, TypeKind, TypeRef

if TYPE_CHECKING:
    from .registry import SchemaRegistry

_LEAF_ENCODERS: dict[TypeKind, Callable[[ByteWriter, Any], None]] = {
    TypeKind.U8: encode_u8,
    TypeKind.U16: encode_u16,
    TypeKind.U32: encode_u32,
    TypeKind.U64: encode_u64,
    TypeKind.I64: encode_i64,
    TypeKind.BOOL: encode_bool,
    TypeKind.STRING: encode_string,
    TypeKind.BYTES: encode_byte_vector,
}

_LEAF_DECODERS: dict[TypeKind, Callable[[ByteReader], Any]] = {
    TypeKind.U8: decode_u8,
    TypeKind.U16: decode_u16,
    TypeKind.U32: decode_u32,
    TypeKind.U64: decode_u64,
    TypeKind.I64: decode_i64,
    TypeKind.BOOL: decode_bool,
    TypeKind.STRING: decode_string,
    TypeKind.BYTES: decode_byte_vector,
}
# Maximum number of struct/enum entries open at once while encoding or decoding.
# Self-references through sequences and options are bounded by the data only, so
# the limit keeps hostile or runaway input from exhausting the interpreter stack.
MAX_NESTING_DEPTH = 64


def encode_value(
    writer: ByteWriter, value: Any, ref: TypeRef, registry: SchemaRegistry, depth: int = 0
) -> None:
    """Encode a value of any wire type.

    Raises:
        SchemaError: If a defined reference is not in the registry
        EncodeError: If the value doesn't match its type or nests deeper than
            MAX_NESTING_DEPTH entries
    """
    leaf = _LEAF_ENCODERS.get(ref.kind)
    if leaf is not None:
        leaf(writer, value)
    elif ref.kind is TypeKind.FIXED:
        assert ref.length is not None
        encode_fixed_bytes(writer, value, ref.length)
    elif ref.kind is TypeKind.SEQUENCE:
        assert ref.inner is not None
        inner = ref.inner
        encode_sequence(writer, value, lambda w, v: encode_value(w, v, inner, registry, depth))
    elif ref.kind is TypeKind.OPTION:
        assert ref.inner is not None
        inner = ref.inner
        encode_option(writer, value, lambda w, v: encode_value(w, v, inner, registry, depth))
    else:
        if depth >= MAX_NESTING_DEPTH:
            raise EncodeError(f"{ref}: nesting depth exceeds {MAX_NESTING_DEPTH}")
        entry = registry.resolve(ref)
        if isinstance(entry, EnumSchema):
            # Import here to avoid circular dependency
            from .variant import encode_variant

            encode_variant(writer, value, entry, registry, depth + 1)
        else:
            encode_struct(writer, value, entry, registry, depth + 1)


def decode_value(reader: ByteReader, ref: TypeRef, registry: SchemaRegistry, depth: int = 0) -> Any:
    """Decode a value of any wire type.

    Raises:
        SchemaError: If a defined reference is not in the registry
        DecodeError: If data is truncated or malformed
        FormatError: If the data nests deeper than MAX_NESTING_DEPTH entries
    """
    leaf = _LEAF_DECODERS.get(ref.kind)
    if leaf is not None:
        return leaf(reader)
    if ref.kind is TypeKind.FIXED:
        assert ref.length is not None
        return decode_fixed_bytes(reader, ref.length)
    if ref.kind is TypeKind.SEQUENCE:
        assert ref.inner is not None
        inner = ref.inner
        return decode_sequence(reader, lambda r: decode_value(r, inner, registry, depth))
    if ref.kind is TypeKind.OPTION:
        assert ref.inner is not None
        inner = ref.inner
        return decode_option(reader, lambda r: decode_value(r, inner, registry, depth))

    if depth >= MAX_NESTING_DEPTH:
        raise FormatError(
            f"{ref}: nesting depth exceeds {MAX_NESTING_DEPTH} at offset {reader.position()}"
        )
    entry = registry.resolve(ref)
    if isinstance(entry, EnumSchema):
        # Import here to avoid circular dependency
        from .variant import decode_variant

        return decode_variant(reader, entry, registry, depth + 1)
    return decode_struct(reader, entry, registry, depth + 1)


def _field_values(value: Any, schema: StructSchema) -> list[Any]:
    if schema.model is None:
        if not isinstance(value, Mapping):
            raise EncodeError(f"{schema.name}: expected a mapping, got {type(value).__name__}")
        declared = set(schema.field_names())
        missing = [name for name in schema.field_names() if name not in value]
        extra = sorted(str(key) for key in value if key not in declared)
        if missing or extra:
            raise EncodeError(f"{schema.name}: missing fields {missing}, unexpected fields {extra}")
        return [value[name] for name in schema.field_names()]

    if not isinstance(value, schema.model):
        raise EncodeError(
            f"{schema.name}: expected {schema.model.__name__}, got {type(value).__name__}"
        )
    values = []
    for field in schema.fields:
        try:
            values.append(getattr(value, field.name))
        except AttributeError as err:
            raise EncodeError(f"{schema.name}: field {field.name} is not set") from err
    return values


def encode_struct(
    writer: ByteWriter, value: Any, schema: StructSchema, registry: SchemaRegistry, depth: int = 0
) -> None:
    """Encode each field of a struct in declaration order.

    Raises:
        EncodeError: If the value is not an instance of the struct (or, for
            model-less entries, a mapping with exactly the declared fields)
    """
    for field, field_value in zip(schema.fields, _field_values(value, schema)):
        encode_value(writer, field_value, field.type_ref, registry, depth)


def build_model(model: type[Any], values: dict[str, Any]) -> Any:
    """Construct a decoded model instance, mapping validation failures to FormatError."""
    try:
        return model(**values)
    except ValidationError as err:
        raise FormatError(f"Decoded data is not a valid {model.__name__}: {err}") from err


def decode_struct(
    reader: ByteReader, schema: StructSchema, registry: SchemaRegistry, depth: int = 0
) -> Any:
    """Decode each field of a struct in declaration order.

    Returns:
        An instance of the struct's model, or a dict for model-less entries
    """
    values = {}
    for field in schema.fields:
        values[field.name] = decode_value(reader, field.type_ref, registry, depth)
    if schema.model is None:
        return values
    return build_model(schema.model, values)
