"""Exception hierarchy for borshwire.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BorshwireError for easy catching of any borshwire-specific error.
"""

from __future__ import annotations


class BorshwireError(Exception):
    """Base exception for all borshwire errors."""

    pass


class SchemaError(BorshwireError):
    """Raised when a schema is invalid or a type reference cannot be resolved.

    This is a programming error in the schema definition, not a data error.

    Examples:
        - Unknown type identifier
        - Field annotation with no wire mapping (e.g. a bare ``int``)
        - Enum with no variants or more than 256 variants
        - A type containing itself without a sequence/option indirection
    """

    pass


class EncodeError(BorshwireError):
    """Raised when encoding a value fails.

    Examples:
        - Field value has the wrong Python type
        - Enum value is not one of the enum's declared variants
        - Encoded message exceeds borsh_max_bytes
    """

    pass


class RangeError(EncodeError):
    """Raised when a value does not fit its declared width.

    Examples:
        - Unsigned integer negative or too large for its width
        - Signed 64-bit integer outside [-2^63, 2^63-1]
        - Fixed byte array of the wrong length
        - Sequence or string longer than a u32 length prefix allows
    """

    pass


class DecodeError(BorshwireError):
    """Raised when decoding binary data fails."""

    pass


class FormatError(DecodeError):
    """Raised when binary data does not follow the wire format.

    Examples:
        - Truncated data (insufficient bytes)
        - Invalid UTF-8 in a string field
        - Presence byte other than 0 or 1
        - Trailing bytes after the decoded value
    """

    pass


class UnknownVariantError(DecodeError):
    """Raised when a decoded discriminant does not index a declared variant."""

    pass
