"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging

import pytest
import structlog

from borshwire.codec import schema as wire
from borshwire.codec.registry import SchemaRegistry
from borshwire.codec.schema import FieldSchema, StructSchema
from borshwire.demo import PUBKEY_LEN

# Keep debug events from the registry out of test output
structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))


@pytest.fixture
def authority() -> bytes:
    """Sample 32-byte public key."""
    return bytes(range(PUBKEY_LEN))


@pytest.fixture
def nested_registry() -> SchemaRegistry:
    """Registry with a single model-less struct entry."""
    return SchemaRegistry(
        [
            StructSchema(
                name="Nested",
                fields=(FieldSchema("count", wire.U32), FieldSchema("note", wire.STRING)),
            )
        ]
    )
