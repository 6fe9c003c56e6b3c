"""Run the usage examples in module and function docstrings."""

from __future__ import annotations

import doctest
import importlib

import pytest

EXAMPLE_MODULES = [
    "borshwire",
    "borshwire.codec.buffer",
    "borshwire.codec.primitives",
    "borshwire.codec.composite",
    "borshwire.codec.schema",
    "borshwire.codec.introspect",
    "borshwire.codec.registry",
    "borshwire.codec.encoder",
    "borshwire.codec.decoder",
    "borshwire.utils.sizing",
]


@pytest.mark.parametrize("module_name", EXAMPLE_MODULES)
def test_docstring_examples(module_name: str) -> None:
    """Each example runs in a fresh namespace holding only the module's globals."""
    module = importlib.import_module(module_name)
    result = doctest.testmod(module, verbose=False, report=True)
    assert result.attempted > 0
    assert result.failed == 0
