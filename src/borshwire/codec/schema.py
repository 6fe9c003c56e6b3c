"""Schema model: type references and registry entries.

A schema describes a type's wire layout. Type references (``TypeRef``) form a
closed set of kinds; struct and enum entries are looked up by name in a
``SchemaRegistry``.

Example:
    >>> nested = StructSchema(
    ...     name="NestedStruct",
    ...     fields=(FieldSchema("count", U32), FieldSchema("note", STRING)),
    ... )
    >>> [str(field.type_ref) for field in nested.fields]
    ['u32', 'string']
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional, Union

from ..exceptions import SchemaError


class TypeKind(str, enum.Enum):
    """Closed set of wire-level constructs."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    I64 = "i64"
    BOOL = "bool"
    STRING = "string"
    FIXED = "fixed"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    OPTION = "option"
    DEFINED = "defined"


@dataclass(frozen=True)
class TypeRef:
    """Reference to a wire type.

    Attributes:
        kind: Wire construct
        length: Byte count for ``fixed`` arrays
        inner: Element type for ``sequence`` and ``option``
        name: Registry entry name for ``defined`` references
    """

    kind: TypeKind
    length: Optional[int] = None
    inner: Optional[TypeRef] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is TypeKind.FIXED:
            if self.length is None or self.length < 0:
                raise SchemaError(f"fixed array requires a non-negative length, got {self.length}")
        elif self.length is not None:
            raise SchemaError(f"{self.kind.value} does not take a length")

        if self.kind in (TypeKind.SEQUENCE, TypeKind.OPTION):
            if self.inner is None:
                raise SchemaError(f"{self.kind.value} requires an inner type")
        elif self.inner is not None:
            raise SchemaError(f"{self.kind.value} does not take an inner type")

        if self.kind is TypeKind.DEFINED:
            if not self.name:
                raise SchemaError("defined type reference requires a name")
        elif self.name is not None:
            raise SchemaError(f"{self.kind.value} does not take a name")

    def __str__(self) -> str:
        if self.kind is TypeKind.FIXED:
            return f"fixed[{self.length}]"
        if self.kind in (TypeKind.SEQUENCE, TypeKind.OPTION):
            return f"{self.kind.value}<{self.inner}>"
        if self.kind is TypeKind.DEFINED:
            return str(self.name)
        return self.kind.value


U8 = TypeRef(TypeKind.U8)
U16 = TypeRef(TypeKind.U16)
U32 = TypeRef(TypeKind.U32)
U64 = TypeRef(TypeKind.U64)
I64 = TypeRef(TypeKind.I64)
BOOL = TypeRef(TypeKind.BOOL)
STRING = TypeRef(TypeKind.STRING)
BYTES = TypeRef(TypeKind.BYTES)


def fixed(length: int) -> TypeRef:
    return TypeRef(TypeKind.FIXED, length=length)


def sequence(inner: TypeRef) -> TypeRef:
    return TypeRef(TypeKind.SEQUENCE, inner=inner)


def option(inner: TypeRef) -> TypeRef:
    return TypeRef(TypeKind.OPTION, inner=inner)


def defined(name: str) -> TypeRef:
    return TypeRef(TypeKind.DEFINED, name=name)


@dataclass(frozen=True)
class FieldSchema:
    """A named field and its wire type."""

    name: str
    type_ref: TypeRef


@dataclass(frozen=True)
class StructSchema:
    """Ordered list of fields, encoded back to back in declaration order.

    Attributes:
        name: Type identifier in the registry
        fields: Field descriptors in wire order
        model: Class used to build decoded values; when None, values are dicts
    """

    name: str
    fields: tuple[FieldSchema, ...]
    model: Optional[type[Any]] = None

    def __post_init__(self) -> None:
        names = [field.name for field in self.fields]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise SchemaError(f"Struct {self.name}: duplicate fields {duplicates}")

    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)


@dataclass(frozen=True)
class VariantSchema:
    """A named enum variant whose payload is a struct entry."""

    name: str
    payload: str


@dataclass(frozen=True)
class EnumSchema:
    """Ordered list of variants; a variant's position is its discriminant.

    Attributes:
        name: Type identifier in the registry
        variants: Variants in wire order
        model: Enum root class; when None, values are single-key dicts
            mapping the variant name to its payload
    """

    name: str
    variants: tuple[VariantSchema, ...]
    model: Optional[type[Any]] = None

    def __post_init__(self) -> None:
        if not self.variants:
            raise SchemaError(f"Enum {self.name} has no variants")
        if len(self.variants) > 256:
            raise SchemaError(
                f"Enum {self.name} has {len(self.variants)} variants; "
                f"a u8 discriminant allows at most 256"
            )
        names = [variant.name for variant in self.variants]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise SchemaError(f"Enum {self.name}: duplicate variants {duplicates}")

    def variant_names(self) -> tuple[str, ...]:
        return tuple(variant.name for variant in self.variants)


Schema = Union[StructSchema, EnumSchema]
