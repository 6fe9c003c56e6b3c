"""Pydantic message modeling for borshwire.

This module provides the BaseMessage and BaseEnum classes and the field type
aliases for defining wire types with Pydantic.
"""

from __future__ import annotations

from .base import BaseEnum, BaseMessage
from .fields import I64, U8, U16, U32, U64, FixedBytes

__all__ = [
    "BaseMessage",
    "BaseEnum",
    "U8",
    "U16",
    "U32",
    "U64",
    "I64",
    "FixedBytes",
]
