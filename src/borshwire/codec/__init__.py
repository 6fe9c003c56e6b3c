"""Borsh binary codec for borshwire.

This module provides the schema registry and the encoding and decoding
functions for the Borsh wire format.
"""

from __future__ import annotations

from .decoder import decode, deserialize, deserialize_prefix
from .encoder import encode, serialize
from .registry import SchemaRegistry, registry_for
from .schema import EnumSchema, FieldSchema, StructSchema, TypeKind, TypeRef, VariantSchema

__all__ = [
    "encode",
    "decode",
    "serialize",
    "deserialize",
    "deserialize_prefix",
    "SchemaRegistry",
    "registry_for",
    "TypeKind",
    "TypeRef",
    "FieldSchema",
    "StructSchema",
    "EnumSchema",
    "VariantSchema",
]
