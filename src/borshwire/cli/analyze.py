"""Schema analysis and decoding CLI commands."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path
from typing import Any

from ..codec.decoder import deserialize
from ..codec.registry import registry_for
from ..codec.schema import EnumSchema, StructSchema, TypeKind, TypeRef
from ..models.base import BaseEnum, BaseMessage
from ..utils.sizing import fixed_size

_MODULE_NAME = "borshwire_user_module"


def load_models(file_path: Path) -> list[type[BaseMessage]]:
    """Load all BaseMessage classes defined in a Python file.

    Enum variants are left out; they are listed under their enum root.

    Args:
        file_path: Path to Python file containing message definitions
    """
    spec = importlib.util.spec_from_file_location(_MODULE_NAME, file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[_MODULE_NAME] = module
    spec.loader.exec_module(module)

    models = []
    for _name, obj in inspect.getmembers(module, inspect.isclass):
        if obj.__module__ != _MODULE_NAME or not issubclass(obj, BaseMessage):
            continue
        if issubclass(obj, BaseEnum) and not obj.is_enum_root():
            continue
        models.append(obj)
    return models


def analyze_file(file_path: Path) -> None:
    """Print the wire layout of every model in a Python file."""
    models = load_models(file_path)
    if not models:
        print(f"No BaseMessage classes found in {file_path}")
        return

    print("|" * 7, "borshwire: Borsh Wire Codec", "|" * 7)
    print(f"{len(models)} type{'s' if len(models) != 1 else ''} loaded.")
    print("Sizes are in bytes.")
    print()

    for model in models:
        analyze_model(model)


def _size_label(size: int | None) -> str:
    return "variable" if size is None else str(size)


def analyze_model(model: type[BaseMessage]) -> None:
    """Print the layout of a single model class.

    Args:
        model: Message or enum root class to analyze
    """
    registry = registry_for(model)
    schema = registry.resolve(model)
    print("=" * 60)
    print(f"{schema.name}  (size: {_size_label(fixed_size(model))})")

    if isinstance(schema, EnumSchema):
        for index, variant in enumerate(schema.variants):
            payload = registry.resolve_struct(variant.payload)
            print(f"  [{index}] {variant.name}")
            _print_fields(payload, registry, indent=6)
    else:
        _print_fields(schema, registry, indent=2)
    print()


def _print_fields(schema: StructSchema, registry: Any, indent: int) -> None:
    if not schema.fields:
        print(" " * indent + "(no fields)")
        return
    for field in schema.fields:
        size = fixed_size(field.type_ref, registry)
        print(" " * indent + f"{field.name:<24} {_describe(field.type_ref):<28} {_size_label(size)}")


def _describe(ref: TypeRef) -> str:
    if ref.kind is TypeKind.DEFINED:
        return f"-> {ref.name}"
    return str(ref)


def decode_hex(file_path: Path, type_name: str, hex_data: str) -> Any:
    """Decode hex data as the named model from a Python file."""
    models = {model.type_name(): model for model in load_models(file_path)}
    model = models.get(type_name)
    if model is None:
        raise ValueError(f"Type {type_name!r} not found in {file_path}; found {sorted(models)}")
    return deserialize(model, bytes.fromhex(hex_data))
