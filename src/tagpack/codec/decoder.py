"""Binary decoder for tagpack values.

This module provides decode(), decode_prefix() and load(), which rebuild a
value tree from its tag-prefixed wire representation. A single dispatcher
covers every tag family, short-form and explicit-width alike.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO

from ..exceptions import (
    DepthLimitExceeded,
    InvalidKeyError,
    InvalidLength,
    SizeLimitExceeded,
    TrailingDataError,
    UnexpectedEndOfInput,
    UnknownTag,
)
from ..models.values import (
    KEY_TYPES,
    Bool,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Key,
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
from .bytepack import BytesLike, ByteUnpacker
from .config import DEFAULT_CONFIG, DecoderConfig

logger = logging.getLogger(__name__)

INT_VARIANTS: dict[int, type] = {
    tags.INT8: Int8,
    tags.INT16: Int16,
    tags.INT32: Int32,
    tags.INT64: Int64,
    tags.UINT8: UInt8,
    tags.UINT16: UInt16,
    tags.UINT32: UInt32,
    tags.UINT64: UInt64,
}


@dataclass
class _DecodeContext:
    """Per-call decoder state. Never shared between calls."""

    unpacker: ByteUnpacker
    config: DecoderConfig
    elements: int = 0


def decode(data: BytesLike, config: DecoderConfig | None = None) -> Value:
    """Decode exactly one value from data.

    Args:
        data: Encoded bytes
        config: Decoder limits (defaults to DecoderConfig())

    Returns:
        Decoded value tree

    Raises:
        UnexpectedEndOfInput: If data ends before the value is complete
        UnknownTag: If a tag byte matches no tag family
        InvalidLength: If a short-form marker carries an out-of-range length
        InvalidKeyError: If a map key is nil, a float or a container
        LimitExceeded: If the input exceeds a configured limit
        TrailingDataError: If bytes remain after the value

    Examples:
        ```python
        from tagpack import decode

        decode(b"\\xd0\\x07")                 # Int8(value=7)
        decode(b"\\xa5hello")                 # Str(value=b'hello')
        decode(b"\\x92\\xd0\\x01\\xd0\\x02")  # Seq of two Int8
        ```
    """
    value, consumed = decode_prefix(data, config)
    total = memoryview(data).nbytes
    if consumed != total:
        raise TrailingDataError(consumed, total)
    return value


def decode_prefix(data: BytesLike, config: DecoderConfig | None = None) -> tuple[Value, int]:
    """Decode one value from the start of data.

    Bytes after the value are left alone, so callers can decode a sequence of
    concatenated values by slicing off ``consumed`` each time.

    Returns:
        Tuple (value, number of bytes consumed)

    Raises:
        Same as decode(), except TrailingDataError
    """
    unpacker = ByteUnpacker(data)
    value = _decode_root(unpacker, config)
    return value, unpacker.position()


def load(fp: BinaryIO, config: DecoderConfig | None = None) -> Value:
    """Decode one value from a readable binary stream.

    Reads exactly the bytes that make up the value and nothing more.

    Raises:
        Same as decode_prefix()
    """
    return _decode_root(ByteUnpacker(fp), config)


def _decode_root(unpacker: ByteUnpacker, config: DecoderConfig | None) -> Value:
    ctx = _DecodeContext(unpacker, config or DEFAULT_CONFIG)
    value = _decode_value(ctx, 0)
    logger.debug(
        "Decoded %s from %d bytes (%d values)",
        type(value).__name__,
        unpacker.position(),
        ctx.elements,
    )
    return value


def _short_length(tag: int, family: int, limit: int) -> int:
    """Extract the length embedded in a short-form tag.

    Raises:
        InvalidLength: If the embedded length is outside 0..limit
    """
    length = tag - family
    if length < 0 or length > limit:
        raise InvalidLength(
            f"Short-form tag 0x{tag:02x} encodes length {length}, allowed range 0-{limit}"
        )
    return length


def _require(ctx: _DecodeContext, needed: int) -> None:
    """Reject a declared length a buffer source cannot satisfy.

    Stream sources are skipped; they are read in bounded chunks instead.

    Raises:
        UnexpectedEndOfInput: If fewer than ``needed`` bytes remain
    """
    remaining = ctx.unpacker.bytes_remaining()
    if remaining is not None and needed > remaining:
        raise UnexpectedEndOfInput(needed, remaining, ctx.unpacker.position())


def _reserve(ctx: _DecodeContext, count: int, values_each: int, kind: str) -> None:
    """Reject a declared container length before allocating for it.

    Every encoded value takes at least one byte, so a buffer source must
    still hold ``count * values_each`` bytes.

    Raises:
        UnexpectedEndOfInput: If a buffer source cannot hold that many values
        SizeLimitExceeded: If the values would exceed max_elements
    """
    values = count * values_each
    _require(ctx, values)

    if ctx.elements + values > ctx.config.max_elements:
        logger.debug("Rejected %s of %d entries: max_elements exceeded", kind, count)
        raise SizeLimitExceeded(
            f"{kind} of {count} entries exceeds max_elements={ctx.config.max_elements}"
        )


def _enter(ctx: _DecodeContext, depth: int) -> int:
    """Return the nesting depth of a container's children.

    Raises:
        DepthLimitExceeded: If the children would exceed max_depth
    """
    child_depth = depth + 1
    if child_depth > ctx.config.max_depth:
        logger.debug("Rejected container at depth %d: max_depth exceeded", child_depth)
        raise DepthLimitExceeded(
            f"Nesting depth {child_depth} exceeds max_depth={ctx.config.max_depth}"
        )
    return child_depth


def _decode_value(ctx: _DecodeContext, depth: int) -> Value:
    """Decode one value, recursing into containers.

    Args:
        ctx: Decoder state for this call
        depth: Number of containers enclosing this value
    """
    ctx.elements += 1
    if ctx.elements > ctx.config.max_elements:
        raise SizeLimitExceeded(f"More than max_elements={ctx.config.max_elements} values")

    unpacker = ctx.unpacker
    offset = unpacker.position()
    tag = unpacker.read_tag()

    # Nil and booleans
    if tag == tags.NIL:
        return Nil()
    if tag == tags.FALSE:
        return Bool(False)
    if tag == tags.TRUE:
        return Bool(True)

    # Fixed-width integers
    if tag in tags.SIGNED_TAGS:
        return INT_VARIANTS[tag](unpacker.read_int(tags.PAYLOAD_WIDTH[tag]))
    if tag in tags.UNSIGNED_TAGS:
        return INT_VARIANTS[tag](unpacker.read_uint(tags.PAYLOAD_WIDTH[tag]))

    # Floats
    if tag == tags.FLOAT32:
        return Float32.from_bits(unpacker.read_bytes(tags.PAYLOAD_WIDTH[tags.FLOAT32]))
    if tag == tags.FLOAT64:
        return Float64(unpacker.read_float64())

    # Strings
    if tags.is_fixstr(tag):
        return _decode_str(ctx, _short_length(tag, tags.FIXSTR, tags.MAX_FIXSTR))
    if tag in tags.STR_PREFIX_WIDTH:
        return _decode_str(ctx, unpacker.read_uint(tags.STR_PREFIX_WIDTH[tag]))

    # Arrays
    if tags.is_fixarray(tag):
        return _decode_seq(ctx, _short_length(tag, tags.FIXARRAY, tags.MAX_FIXARRAY), depth)
    if tag in tags.ARRAY_PREFIX_WIDTH:
        return _decode_seq(ctx, unpacker.read_uint(tags.ARRAY_PREFIX_WIDTH[tag]), depth)

    # Maps
    if tags.is_fixmap(tag):
        return _decode_map(ctx, _short_length(tag, tags.FIXMAP, tags.MAX_FIXMAP), depth)
    if tag in tags.MAP_PREFIX_WIDTH:
        return _decode_map(ctx, unpacker.read_uint(tags.MAP_PREFIX_WIDTH[tag]), depth)

    raise UnknownTag(tag, offset)


def _decode_str(ctx: _DecodeContext, length: int) -> Str:
    max_len = ctx.config.max_str_len
    if max_len is not None and length > max_len:
        logger.debug("Rejected string of %d bytes: max_str_len exceeded", length)
        raise SizeLimitExceeded(f"String of {length} bytes exceeds max_str_len={max_len}")
    _require(ctx, length)
    return Str(ctx.unpacker.read_bytes(length))


def _decode_seq(ctx: _DecodeContext, count: int, depth: int) -> Seq:
    child_depth = _enter(ctx, depth)
    _reserve(ctx, count, 1, "array")
    return Seq([_decode_value(ctx, child_depth) for _ in range(count)])


def _decode_map(ctx: _DecodeContext, count: int, depth: int) -> Map:
    child_depth = _enter(ctx, depth)
    _reserve(ctx, count, 2, "map")

    # Duplicate keys: the later value wins, the first position is kept.
    entries: dict[Key, Value] = {}
    for _ in range(count):
        offset = ctx.unpacker.position()
        key = _decode_value(ctx, child_depth)
        if not isinstance(key, KEY_TYPES):
            raise InvalidKeyError(
                f"Map key at offset {offset} is {type(key).__name__}; "
                f"keys must be booleans, integers or strings"
            )
        entries[key] = _decode_value(ctx, child_depth)
    return Map(entries.items())
