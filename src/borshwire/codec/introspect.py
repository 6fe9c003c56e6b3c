"""Schema introspection for Pydantic models.

This module walks BaseMessage/BaseEnum classes and extracts their registry
entries: field order, the wire type of each field, and the variants of each
enum. It runs once per registry; encoding and decoding never inspect types.
"""

from __future__ import annotations

import types
from typing import Annotated, Any, Iterable, Optional, Union, get_args, get_origin

from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from ..models.base import BaseEnum, BaseMessage
from . import schema as wire
from .schema import EnumSchema, FieldSchema, Schema, StructSchema, TypeRef, VariantSchema


def variant_entry_name(enum_name: str, variant_name: str) -> str:
    """Return the registry name of a variant's payload struct."""
    return f"{enum_name}.{variant_name}"


class ModelIntrospector:
    """Collects the registry entries of a set of models and everything they reference.

    Example:
        >>> from borshwire.demo import NestedStruct
        >>> introspector = ModelIntrospector()
        >>> introspector.add_model(NestedStruct)
        'NestedStruct'
        >>> introspector.entries["NestedStruct"].field_names()
        ('count', 'note')
    """

    def __init__(self) -> None:
        self.entries: dict[str, Schema] = {}
        self._models: dict[str, type[BaseMessage]] = {}

    def add_model(self, model: type[BaseMessage]) -> str:
        """Register a model (and its dependencies) and return its type identifier.

        Raises:
            SchemaError: If the model or one of its fields cannot be mapped to a wire type
        """
        if not (isinstance(model, type) and issubclass(model, BaseMessage)):
            raise SchemaError(f"{model!r} is not a BaseMessage subclass")

        if issubclass(model, BaseEnum) and not model.is_enum_root():
            # A variant class stands for its whole enum
            model = model.enum_root()

        name = model.type_name()
        known = self._models.get(name)
        if known is not None:
            if known is not model:
                raise SchemaError(
                    f"Type name {name!r} is used by both {known.__qualname__} and {model.__qualname__}"
                )
            return name

        # Claim the name before recursing so self-referencing models terminate
        self._models[name] = model
        if issubclass(model, BaseEnum):
            self.entries[name] = self._enum_schema(name, model)
        else:
            self.entries[name] = self._struct_schema(name, model)
        return name

    def _enum_schema(self, name: str, model: type[BaseEnum]) -> EnumSchema:
        if model.model_fields:
            raise SchemaError(f"Enum {name}: the enum root cannot declare fields")

        variants: list[VariantSchema] = []
        for variant in model.borsh_variants:
            variant_name = variant.type_name()
            payload_name = variant_entry_name(name, variant_name)
            if payload_name in self.entries:
                raise SchemaError(f"Enum {name}: duplicate variant {variant_name!r}")
            self.entries[payload_name] = self._struct_schema(payload_name, variant)
            variants.append(VariantSchema(name=variant_name, payload=payload_name))

        return EnumSchema(name=name, variants=tuple(variants), model=model)

    def _struct_schema(self, name: str, model: type[BaseMessage]) -> StructSchema:
        fields = tuple(
            FieldSchema(field_name, self._field_type(f"{name}.{field_name}", field_info))
            for field_name, field_info in model.model_fields.items()
        )
        return StructSchema(name=name, fields=fields, model=model)

    def _field_type(self, where: str, field_info: FieldInfo) -> TypeRef:
        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {where} has no type annotation")
        return self._type_ref(where, annotation, field_info.metadata)

    def _type_ref(self, where: str, annotation: Any, metadata: Iterable[Any]) -> TypeRef:
        """Map a type annotation (plus its Annotated metadata) to a wire type."""
        if get_origin(annotation) is Annotated:
            inner, *extra = get_args(annotation)
            return self._type_ref(where, inner, [*metadata, *extra])

        constraints = _flatten_metadata(metadata)

        # An explicit wire type always wins
        for item in constraints:
            if isinstance(item, TypeRef):
                return item

        origin = get_origin(annotation)
        args = get_args(annotation)

        # Optional[T] (Union[T, None] or T | None)
        if origin is Union or origin is types.UnionType:
            non_none_args = [arg for arg in args if arg is not type(None)]
            if len(non_none_args) == 1 and len(args) == 2:
                return wire.option(self._type_ref(where, non_none_args[0], ()))
            raise SchemaError(f"Field {where}: complex Union types not supported, use a BaseEnum")

        if origin is list:
            if not args:
                raise SchemaError(f"Field {where}: list fields need an element type")
            return wire.sequence(self._type_ref(where, args[0], ()))

        if annotation is bool:
            return wire.BOOL

        if annotation is str:
            return wire.STRING

        if annotation is bytes:
            min_length, max_length = _length_constraints(constraints)
            if max_length is None:
                return wire.BYTES
            if min_length != max_length:
                raise SchemaError(
                    f"Field {where}: bounded byte strings are not a wire type; "
                    f"use FixedBytes(length=N) or plain bytes"
                )
            return wire.fixed(max_length)

        if annotation is int:
            raise SchemaError(
                f"Field {where}: integer fields need a wire width (U8, U16, U32, U64 or I64)"
            )

        if isinstance(annotation, type) and issubclass(annotation, BaseEnum):
            if not annotation.is_enum_root():
                raise SchemaError(
                    f"Field {where}: declare the enum root "
                    f"{annotation.enum_root().__name__}, not the variant {annotation.__name__}"
                )
            return wire.defined(self.add_model(annotation))

        if isinstance(annotation, type) and issubclass(annotation, BaseMessage):
            return wire.defined(self.add_model(annotation))

        raise SchemaError(f"Field {where}: unsupported type {annotation!r}")


def _flatten_metadata(metadata: Iterable[Any]) -> list[Any]:
    # Field(...) inside Annotated nests its constraints in its own metadata
    flat: list[Any] = []
    for item in metadata:
        if isinstance(item, FieldInfo):
            flat.extend(item.metadata)
        else:
            flat.append(item)
    return flat


def _length_constraints(constraints: Iterable[Any]) -> tuple[Optional[int], Optional[int]]:
    min_length = None
    max_length = None
    for constraint in constraints:
        if hasattr(constraint, "min_length"):
            min_length = constraint.min_length
        if hasattr(constraint, "max_length"):
            max_length = constraint.max_length
    return min_length, max_length


def schemas_from_models(*models: type[BaseMessage]) -> dict[str, Schema]:
    """Return the registry entries for the given models and their dependencies."""
    introspector = ModelIntrospector()
    for model in models:
        introspector.add_model(model)
    return introspector.entries
