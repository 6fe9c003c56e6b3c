r"""Tagged union (enum) codec.

Layout:

    [discriminant: u8][payload struct]

The discriminant is the variant's zero-based position in the enum's declared
variant list. Unit variants have an empty payload, so they encode as the
discriminant byte alone.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..exceptions import EncodeError, UnknownVariantError
from .buffer import ByteReader, ByteWriter
from .schema import EnumSchema, VariantSchema
from .structs import decode_struct, encode_struct

if TYPE_CHECKING:
    from .registry import SchemaRegistry


def _select_variant(
    value: Any, schema: EnumSchema, registry: SchemaRegistry
) -> tuple[int, VariantSchema, Any]:
    """Return (discriminant, variant, payload value) for an enum value."""
    if schema.model is None:
        if not isinstance(value, Mapping) or len(value) != 1:
            raise EncodeError(
                f"{schema.name}: expected a single-key mapping {{variant: payload}}, got {value!r}"
            )
        ((variant_name, payload),) = value.items()
        for index, variant in enumerate(schema.variants):
            if variant.name == variant_name:
                return index, variant, payload
        raise EncodeError(
            f"{schema.name}: unknown variant {variant_name!r}, "
            f"expected one of {list(schema.variant_names())}"
        )

    for index, variant in enumerate(schema.variants):
        if type(value) is registry.resolve_struct(variant.payload).model:
            return index, variant, value
    raise EncodeError(
        f"{schema.name}: {type(value).__name__} is not a variant of {schema.name}, "
        f"expected one of {list(schema.variant_names())}"
    )


def encode_variant(
    writer: ByteWriter, value: Any, schema: EnumSchema, registry: SchemaRegistry, depth: int = 0
) -> None:
    """Encode the discriminant byte followed by the selected variant's payload.

    Raises:
        EncodeError: If the value is not one of the enum's declared variants
    """
    index, variant, payload = _select_variant(value, schema, registry)
    writer.write_byte(index)
    encode_struct(writer, payload, registry.resolve_struct(variant.payload), registry, depth)


def decode_variant(
    reader: ByteReader, schema: EnumSchema, registry: SchemaRegistry, depth: int = 0
) -> Any:
    """Decode a discriminant byte and the payload of the variant it selects.

    Raises:
        UnknownVariantError: If the discriminant doesn't index a declared variant
    """
    offset = reader.position()
    index = reader.read_byte()
    if index >= len(schema.variants):
        raise UnknownVariantError(
            f"{schema.name}: discriminant {index} at offset {offset} is out of range "
            f"({len(schema.variants)} variants)"
        )

    variant = schema.variants[index]
    payload = decode_struct(reader, registry.resolve_struct(variant.payload), registry, depth)
    if schema.model is None:
        return {variant.name: payload}
    return payload
