"""Schema registry: the read-only table of type identifiers to layouts.

A registry is built once and never mutated afterward, so any number of encode
and decode calls may read it concurrently without locking.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Optional, Union

from structlog import get_logger

from ..exceptions import SchemaError
from ..models.base import BaseEnum, BaseMessage
from .introspect import schemas_from_models
from .schema import EnumSchema, Schema, StructSchema, TypeKind, TypeRef

logger = get_logger()

TypeLike = Union[TypeRef, str, type[BaseMessage]]


class SchemaRegistry(Mapping[str, Schema]):
    """Immutable mapping from type identifier to registry entry.

    Construction validates the whole table, so a registry that exists is
    complete: every ``defined`` reference resolves, every variant payload is a
    struct entry, and no type contains itself without a sequence, option or
    byte-vector indirection.

    Example:
        >>> from borshwire.demo import BorshDemoAccount
        >>> registry = SchemaRegistry.from_models(BorshDemoAccount)
        >>> registry.resolve("NestedStruct").field_names()
        ('count', 'note')
    """

    def __init__(self, entries: Iterable[Schema] = ()) -> None:
        table: dict[str, Schema] = {}
        for entry in entries:
            existing = table.get(entry.name)
            if existing is not None and existing != entry:
                raise SchemaError(f"Conflicting definitions for type {entry.name!r}")
            table[entry.name] = entry

        self._entries: Mapping[str, Schema] = MappingProxyType(table)
        self._by_model: Mapping[type[Any], str] = MappingProxyType(
            {entry.model: name for name, entry in table.items() if entry.model is not None}
        )
        self._validate()
        logger.debug("schema registry built", entries=len(table))

    @classmethod
    def from_models(cls, *models: type[BaseMessage]) -> SchemaRegistry:
        """Build a registry from model classes and everything they reference."""
        return cls(schemas_from_models(*models).values())

    def __getitem__(self, name: str) -> Schema:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SchemaRegistry({sorted(self._entries)!r})"

    def resolve(self, ref: TypeLike) -> Schema:
        """Return the entry for a type identifier, defined reference or model class.

        Raises:
            SchemaError: If the type is not in the registry
        """
        name = self.name_of(ref)
        try:
            return self._entries[name]
        except KeyError:
            raise SchemaError(f"Unknown type {name!r}") from None

    def resolve_struct(self, ref: TypeLike) -> StructSchema:
        entry = self.resolve(ref)
        if not isinstance(entry, StructSchema):
            raise SchemaError(f"Type {entry.name!r} is an enum, expected a struct")
        return entry

    def name_of(self, ref: TypeLike) -> str:
        """Return the type identifier a reference points at."""
        if isinstance(ref, str):
            return ref
        if isinstance(ref, TypeRef):
            if ref.kind is not TypeKind.DEFINED or ref.name is None:
                raise SchemaError(f"{ref} is not a reference to a registry entry")
            return ref.name
        if isinstance(ref, type):
            if issubclass(ref, BaseEnum) and not ref.is_enum_root():
                ref = ref.enum_root()
            name = self._by_model.get(ref)
            if name is None:
                raise SchemaError(f"Model {ref.__qualname__} is not in the registry")
            return name
        raise SchemaError(f"Cannot resolve {ref!r} to a registry entry")

    def root_ref(self, type_: Union[TypeLike, None], value: Any = None) -> TypeRef:
        """Return the type reference to encode or decode a root value with.

        Plain type references are used as-is; names and model classes become
        ``defined`` references. When no type is given, the value's class is used.
        """
        if isinstance(type_, TypeRef):
            self._check_ref(type_, str(type_))
            self._check_element_sizes(type_, str(type_))
            return type_
        if type_ is None:
            if not isinstance(value, BaseMessage):
                raise SchemaError(
                    f"Cannot infer the schema of a {type(value).__name__} value; pass a type"
                )
            type_ = type(value)
        return TypeRef(TypeKind.DEFINED, name=self.resolve(type_).name)

    def _validate(self) -> None:
        for entry in self._entries.values():
            if isinstance(entry, StructSchema):
                for field in entry.fields:
                    self._check_ref(field.type_ref, f"{entry.name}.{field.name}")
            else:
                for variant in entry.variants:
                    payload = self._entries.get(variant.payload)
                    if payload is None:
                        raise SchemaError(
                            f"Enum {entry.name}: variant {variant.name} refers to "
                            f"unknown type {variant.payload!r}"
                        )
                    if not isinstance(payload, StructSchema):
                        raise SchemaError(
                            f"Enum {entry.name}: payload of variant {variant.name} must be a struct"
                        )
                    if entry.model is not None and payload.model is None:
                        raise SchemaError(
                            f"Enum {entry.name}: variant {variant.name} needs a model class "
                            f"because the enum has one"
                        )
        self._check_acyclic()
        for entry in self._entries.values():
            if isinstance(entry, StructSchema):
                for field in entry.fields:
                    self._check_element_sizes(field.type_ref, f"{entry.name}.{field.name}")

    def _check_ref(self, ref: TypeRef, where: str) -> None:
        if ref.kind is TypeKind.DEFINED:
            if ref.name not in self._entries:
                raise SchemaError(f"Field {where} refers to unknown type {ref.name!r}")
        elif ref.inner is not None:
            self._check_ref(ref.inner, where)

    def _check_element_sizes(self, ref: TypeRef, where: str) -> None:
        # A count prefix over zero-byte elements lets 4 bytes of input demand
        # billions of decoded values
        if ref.kind is TypeKind.SEQUENCE:
            assert ref.inner is not None
            if self._is_zero_sized(ref.inner):
                raise SchemaError(
                    f"Field {where}: {ref} has zero-sized elements; sequences need elements "
                    f"that occupy at least one byte"
                )
        if ref.inner is not None:
            self._check_element_sizes(ref.inner, where)

    def _is_zero_sized(self, ref: TypeRef) -> bool:
        """Return True if every value of the type encodes to zero bytes.

        Only valid on an acyclic table: struct fields are followed without a guard.
        """
        if ref.kind is TypeKind.FIXED:
            return ref.length == 0
        if ref.kind is not TypeKind.DEFINED:
            return False
        entry = self.resolve(ref)
        if isinstance(entry, EnumSchema):
            # the discriminant byte is always present
            return False
        return all(self._is_zero_sized(field.type_ref) for field in entry.fields)

    def _direct_dependencies(self, entry: Schema) -> list[str]:
        """Return the entries an encoding of ``entry`` always recurses into."""
        if isinstance(entry, EnumSchema):
            return [variant.payload for variant in entry.variants]
        # sequence and option bound recursion by the data, so they are not followed
        return [
            field.type_ref.name
            for field in entry.fields
            if field.type_ref.kind is TypeKind.DEFINED and field.type_ref.name is not None
        ]

    def _check_acyclic(self) -> None:
        done: set[str] = set()

        def visit(name: str, path: list[str]) -> None:
            if name in done:
                return
            if name in path:
                cycle = " -> ".join([*path[path.index(name):], name])
                raise SchemaError(f"Type contains itself without an indirection: {cycle}")
            path.append(name)
            for dependency in self._direct_dependencies(self._entries[name]):
                visit(dependency, path)
            path.pop()
            done.add(name)

        for name in self._entries:
            visit(name, [])


_registries: dict[type[BaseMessage], SchemaRegistry] = {}
_registries_lock = threading.Lock()


def registry_for(model: type[BaseMessage]) -> SchemaRegistry:
    """Return the process-wide registry rooted at a model class.

    The registry is built on first use, under a lock, and reused afterward.
    Variant classes share the registry of their enum root.
    """
    if issubclass(model, BaseEnum) and not model.is_enum_root():
        model = model.enum_root()

    registry: Optional[SchemaRegistry] = _registries.get(model)
    if registry is not None:
        return registry

    with _registries_lock:
        registry = _registries.get(model)
        if registry is None:
            log = logger.new(root=model.type_name())
            registry = SchemaRegistry.from_models(model)
            _registries[model] = registry
            log.debug("registry cached", entries=len(registry))
    return registry
