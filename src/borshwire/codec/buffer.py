"""Byte-level writing and reading utilities.

This module provides the byte buffer the encoders append to and the cursor the
decoders advance. All multi-byte integers are little-endian.
"""

from __future__ import annotations

from ..exceptions import FormatError


class ByteWriter:
    """Appends encoded fragments to a growing byte buffer.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write_byte(1)
        >>> writer.write_uint(2, size=2)
        >>> writer.to_bytes().hex()
        '010200'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def write_byte(self, value: int) -> None:
        """Write a single byte.

        Args:
            value: Byte value (0-255)

        Raises:
            ValueError: If value doesn't fit in a byte
        """
        if value < 0 or value > 0xFF:
            raise ValueError(f"write_byte requires a value 0-255, got {value}")
        self._buffer.append(value)

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Write raw bytes."""
        self._buffer.extend(data)

    def write_uint(self, value: int, size: int) -> None:
        """Write an unsigned integer using ``size`` little-endian bytes.

        Args:
            value: Unsigned integer value to write
            size: Width in bytes

        Raises:
            ValueError: If value is negative or doesn't fit in size bytes
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        try:
            self._buffer.extend(value.to_bytes(size, byteorder="little", signed=False))
        except OverflowError as err:
            raise ValueError(f"Value {value} requires more than {size} bytes") from err

    def __len__(self) -> int:
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buffer)


class ByteReader:
    """Cursor over an input buffer.

    Each read consumes bytes from the front of the buffer. Reading past the end
    raises FormatError and leaves the cursor where it was.

    Example:
        >>> reader = ByteReader(bytes.fromhex("010200"))
        >>> reader.read_byte()
        1
        >>> reader.read_uint(2)
        2
        >>> reader.is_empty()
        True
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        """Initialize a reader over the given data.

        Args:
            data: Byte buffer to read from
        """
        self._view = memoryview(data).cast("B")
        self._position = 0

    def _require(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"Cannot read a negative number of bytes: {n}")
        available = len(self._view) - self._position
        if n > available:
            raise FormatError(
                f"Not enough bytes at offset {self._position}: need {n}, have {available}"
            )

    def read_byte(self) -> int:
        """Read a single byte as an unsigned int.

        Raises:
            FormatError: If the buffer is exhausted
        """
        self._require(1)
        value = self._view[self._position]
        self._position += 1
        return value

    def read_bytes(self, n: int) -> bytes:
        """Read exactly n bytes.

        Raises:
            FormatError: If fewer than n bytes remain
        """
        self._require(n)
        data = bytes(self._view[self._position : self._position + n])
        self._position += n
        return data

    def read_uint(self, size: int) -> int:
        """Read an unsigned little-endian integer of ``size`` bytes."""
        return int.from_bytes(self.read_bytes(size), byteorder="little", signed=False)

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._view) - self._position

    def position(self) -> int:
        """Return the number of bytes consumed so far."""
        return self._position

    def is_empty(self) -> bool:
        return self._position >= len(self._view)
