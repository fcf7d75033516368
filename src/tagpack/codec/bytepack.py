"""Byte-level packing and unpacking utilities.

This module provides the low-level primitives used by the encoder and decoder.
All multi-byte values are written and read big-endian.
"""

from __future__ import annotations

import struct
from typing import BinaryIO, Union

from ..exceptions import UnexpectedEndOfInput

_FLOAT64 = struct.Struct(">d")

# Largest single read() request made to a stream source
STREAM_CHUNK_SIZE = 64 * 1024

BytesLike = Union[bytes, bytearray, memoryview]


class BytePacker:
    """Packs values into a growing byte buffer.

    Example:
        >>> packer = BytePacker()
        >>> packer.write_tag(0xCD)
        >>> packer.write_uint(500, num_bytes=2)
        >>> packer.to_bytes()
        b'\\xcd\\x01\\xf4'
    """

    def __init__(self) -> None:
        """Initialize an empty byte packer."""
        self._buffer = bytearray()

    def write_tag(self, tag: int) -> None:
        """Write a single tag byte."""
        self._buffer.append(tag)

    def write_uint(self, value: int, num_bytes: int) -> None:
        """Write an unsigned integer using exactly num_bytes bytes.

        Args:
            value: Unsigned integer value to write (must be >= 0)
            num_bytes: Payload width in bytes (1, 2, 4 or 8)

        Raises:
            ValueError: If value is negative or doesn't fit in num_bytes
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        if num_bytes not in (1, 2, 4, 8):
            raise ValueError(f"num_bytes must be 1, 2, 4 or 8, got {num_bytes}")

        max_value = (1 << (8 * num_bytes)) - 1
        if value > max_value:
            raise ValueError(
                f"Value {value} requires more than {num_bytes} bytes (max: {max_value})"
            )

        self._buffer += value.to_bytes(num_bytes, "big")

    def write_int(self, value: int, num_bytes: int) -> None:
        """Write a signed integer using two's complement encoding.

        Raises:
            ValueError: If value doesn't fit in num_bytes using two's complement
        """
        if num_bytes not in (1, 2, 4, 8):
            raise ValueError(f"num_bytes must be 1, 2, 4 or 8, got {num_bytes}")

        bits = 8 * num_bytes
        min_value = -(1 << (bits - 1))
        max_value = (1 << (bits - 1)) - 1
        if value < min_value or value > max_value:
            raise ValueError(
                f"Value {value} doesn't fit in {num_bytes} bytes (range: {min_value} to {max_value})"
            )

        self._buffer += value.to_bytes(num_bytes, "big", signed=True)

    def write_float64(self, value: float) -> None:
        """Write an IEEE-754 binary64 value."""
        self._buffer += _FLOAT64.pack(value)

    def write_bytes(self, data: BytesLike) -> None:
        """Write raw bytes verbatim."""
        self._buffer += data

    def byte_length(self) -> int:
        """Return the current number of bytes written."""
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return the packed bytes."""
        return bytes(self._buffer)


class ByteUnpacker:
    """Reads values sequentially from a byte buffer or a binary stream.

    A buffer source knows how many bytes remain, so callers can reject
    impossible lengths before allocating. A stream source cannot, so long
    payloads are read from it in chunks of at most STREAM_CHUNK_SIZE bytes
    and memory only grows with the bytes the stream actually delivers.

    Example:
        >>> unpacker = ByteUnpacker(b"\\xcd\\x01\\xf4")
        >>> unpacker.read_tag()
        205
        >>> unpacker.read_uint(2)
        500
    """

    def __init__(self, source: BytesLike | BinaryIO) -> None:
        """Initialize an unpacker over a bytes-like object or a readable binary stream.

        Args:
            source: Bytes-like buffer, or an object with a ``read(n)`` method
        """
        self._data = memoryview(b"")
        self._stream: BinaryIO | None = None
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._data = memoryview(source).cast("B")
        elif hasattr(source, "read"):
            self._stream = source
        else:
            raise TypeError(
                f"source must be bytes-like or a readable binary stream, got {type(source).__name__}"
            )
        self._position = 0

    def _take(self, num_bytes: int) -> bytes:
        if self._stream is not None:
            chunk = self._read_stream(self._stream, num_bytes)
        else:
            available = len(self._data) - self._position
            if num_bytes > available:
                raise UnexpectedEndOfInput(num_bytes, available, self._position)
            chunk = bytes(self._data[self._position : self._position + num_bytes])
        self._position += num_bytes
        return chunk

    def _read_stream(self, stream: BinaryIO, num_bytes: int) -> bytes:
        buffer = bytearray()
        while len(buffer) < num_bytes:
            chunk = stream.read(min(STREAM_CHUNK_SIZE, num_bytes - len(buffer)))
            if not chunk:
                raise UnexpectedEndOfInput(num_bytes, len(buffer), self._position)
            buffer += chunk
        return bytes(buffer)

    def read_tag(self) -> int:
        """Read a single tag byte.

        Raises:
            UnexpectedEndOfInput: If no more bytes are available
        """
        return self._take(1)[0]

    def read_uint(self, num_bytes: int) -> int:
        """Read a big-endian unsigned integer of num_bytes bytes.

        Raises:
            UnexpectedEndOfInput: If not enough bytes are available
        """
        return int.from_bytes(self._take(num_bytes), "big")

    def read_int(self, num_bytes: int) -> int:
        """Read a big-endian two's complement integer of num_bytes bytes."""
        return int.from_bytes(self._take(num_bytes), "big", signed=True)

    def read_float64(self) -> float:
        """Read an IEEE-754 binary64 value."""
        return _FLOAT64.unpack(self._take(8))[0]

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read num_bytes raw bytes.

        Raises:
            UnexpectedEndOfInput: If not enough bytes are available
        """
        return self._take(num_bytes)

    def bytes_remaining(self) -> int | None:
        """Return the number of unread bytes, or None for a stream source."""
        if self._stream is not None:
            return None
        return len(self._data) - self._position

    def position(self) -> int:
        """Return the number of bytes consumed so far."""
        return self._position
