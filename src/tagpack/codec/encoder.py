"""Binary encoder for tagpack values.

This module provides the encode() function that converts a value tree to its
tag-prefixed wire representation. Dispatch is on the declared variant, never
on magnitude: ``UInt32(1)`` always encodes with the uint32 tag and a 4-byte
payload.
"""

from __future__ import annotations

import logging
from typing import BinaryIO

from ..exceptions import EncodeError, UnsupportedType, ValueTooLarge
from ..models.values import (
    KEY_TYPES,
    Bool,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Map,
    Nil,
    Seq,
    Str,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Value,
)
from . import tags
from .bytepack import BytePacker

logger = logging.getLogger(__name__)

# Variant -> (tag, payload width in bytes, signed)
INT_LAYOUT: dict[type, tuple[int, int, bool]] = {
    Int8: (tags.INT8, 1, True),
    Int16: (tags.INT16, 2, True),
    Int32: (tags.INT32, 4, True),
    Int64: (tags.INT64, 8, True),
    UInt8: (tags.UINT8, 1, False),
    UInt16: (tags.UINT16, 2, False),
    UInt32: (tags.UINT32, 4, False),
    UInt64: (tags.UINT64, 8, False),
}


def str_header(length: int) -> tuple[int, int]:
    """Choose the smallest string length class for length bytes.

    Returns:
        (tag, prefix width in bytes); a prefix width of 0 means the length is
        embedded in the tag.

    Raises:
        ValueTooLarge: If length exceeds 4294967295
    """
    if length <= tags.MAX_FIXSTR:
        return tags.FIXSTR | length, 0
    if length <= tags.MAX_UINT8:
        return tags.STR8, 1
    if length <= tags.MAX_UINT16:
        return tags.STR16, 2
    if length <= tags.MAX_UINT32:
        return tags.STR32, 4
    raise ValueTooLarge("string", length, tags.MAX_UINT32)


def array_header(count: int) -> tuple[int, int]:
    """Choose the smallest array length class for count elements."""
    if count <= tags.MAX_FIXARRAY:
        return tags.FIXARRAY | count, 0
    if count <= tags.MAX_UINT16:
        return tags.ARRAY16, 2
    if count <= tags.MAX_UINT32:
        return tags.ARRAY32, 4
    raise ValueTooLarge("array", count, tags.MAX_UINT32)


def map_header(count: int) -> tuple[int, int]:
    """Choose the smallest map length class for count pairs."""
    if count <= tags.MAX_FIXMAP:
        return tags.FIXMAP | count, 0
    if count <= tags.MAX_UINT16:
        return tags.MAP16, 2
    if count <= tags.MAX_UINT32:
        return tags.MAP32, 4
    raise ValueTooLarge("map", count, tags.MAX_UINT32)


def encode(value: Value) -> bytes:
    """Encode a tagpack value to bytes.

    Containers are encoded depth-first, elements and map entries in the order
    they are held. Map entries are never sorted.

    Args:
        value: Value tree to encode

    Returns:
        Encoded bytes

    Raises:
        UnsupportedType: If value, or anything nested in it, is not a tagpack value
        ValueTooLarge: If a string, array or map is longer than 4294967295

    Examples:
        ```python
        from tagpack import Int8, Seq, UInt32, encode

        encode(UInt32(1))                # b"\\xce\\x00\\x00\\x00\\x01"
        encode(Seq([Int8(1), Int8(2)]))  # b"\\x92\\xd0\\x01\\xd0\\x02"
        ```
    """
    packer = BytePacker()
    _encode_value(packer, value)
    encoded = packer.to_bytes()
    logger.debug("Encoded %s into %d bytes", type(value).__name__, len(encoded))
    return encoded


def dump(value: Value, fp: BinaryIO) -> None:
    """Encode value and write it to a writable binary stream.

    The value is fully encoded before anything is written, so a failed
    encode leaves the stream untouched.
    """
    fp.write(encode(value))


def _write_header(packer: BytePacker, header: tuple[int, int], length: int) -> None:
    tag, prefix_width = header
    packer.write_tag(tag)
    if prefix_width:
        packer.write_uint(length, prefix_width)


def _encode_value(packer: BytePacker, value: Value) -> None:
    """Encode a single value (recursively for containers).

    Raises:
        UnsupportedType: If value is not a tagpack value
        ValueTooLarge: If a length does not fit any length class
    """
    # Nil
    if isinstance(value, Nil):
        packer.write_tag(tags.NIL)
        return

    # Boolean
    if isinstance(value, Bool):
        packer.write_tag(tags.TRUE if value.value else tags.FALSE)
        return

    # Fixed-width integers
    layout = INT_LAYOUT.get(type(value))
    if layout is not None:
        tag, width, signed = layout
        packer.write_tag(tag)
        try:
            if signed:
                packer.write_int(value.value, width)  # type: ignore[union-attr]
            else:
                packer.write_uint(value.value, width)  # type: ignore[union-attr]
        except ValueError as err:
            raise EncodeError(f"{type(value).__name__}: {err}") from err
        return

    # Floats
    if isinstance(value, Float32):
        packer.write_tag(tags.FLOAT32)
        try:
            packer.write_bytes(value.bits)
        except OverflowError as err:
            raise EncodeError(f"Float32: {err}") from err
        return

    if isinstance(value, Float64):
        packer.write_tag(tags.FLOAT64)
        packer.write_float64(value.value)
        return

    # Byte string
    if isinstance(value, Str):
        length = len(value.value)
        _write_header(packer, str_header(length), length)
        packer.write_bytes(value.value)
        return

    # Sequence
    if isinstance(value, Seq):
        count = len(value.items)
        _write_header(packer, array_header(count), count)
        for item in value.items:
            _encode_value(packer, item)
        return

    # Map
    if isinstance(value, Map):
        count = len(value.entries)
        _write_header(packer, map_header(count), count)
        for key, item in value.entries:
            if not isinstance(key, KEY_TYPES):
                raise UnsupportedType(key, f"Unsupported map key type: {type(key).__name__}")
            _encode_value(packer, key)
            _encode_value(packer, item)
        return

    raise UnsupportedType(value)
