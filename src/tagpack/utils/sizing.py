"""Encoded size calculation.

This module computes how many bytes a value will occupy on the wire
without actually encoding it.
"""

from __future__ import annotations

from ..codec import tags
from ..codec.encoder import INT_LAYOUT, array_header, map_header, str_header
from ..exceptions import UnsupportedType
from ..models.values import KEY_TYPES, Bool, Float32, Float64, Map, Nil, Seq, Str, Value


def encoded_size(value: Value) -> int:
    """Calculate the encoded size of a value in bytes.

    The result always equals ``len(encode(value))``.

    Args:
        value: Value tree to measure

    Returns:
        Size in bytes

    Raises:
        UnsupportedType: If value, or anything nested in it, is not a tagpack value
        ValueTooLarge: If a string, array or map is longer than 4294967295

    Example:
        >>> encoded_size(UInt32(1))
        5
        >>> encoded_size(Str(b"hello"))
        6
    """
    if isinstance(value, (Nil, Bool)):
        return 1

    layout = INT_LAYOUT.get(type(value))
    if layout is not None:
        return 1 + layout[1]

    if isinstance(value, Float32):
        return 1 + tags.PAYLOAD_WIDTH[tags.FLOAT32]

    if isinstance(value, Float64):
        return 1 + tags.PAYLOAD_WIDTH[tags.FLOAT64]

    if isinstance(value, Str):
        length = len(value.value)
        return 1 + str_header(length)[1] + length

    if isinstance(value, Seq):
        header = 1 + array_header(len(value.items))[1]
        return header + sum(encoded_size(item) for item in value.items)

    if isinstance(value, Map):
        size = 1 + map_header(len(value.entries))[1]
        for key, item in value.entries:
            if not isinstance(key, KEY_TYPES):
                raise UnsupportedType(key, f"Unsupported map key type: {type(key).__name__}")
            size += encoded_size(key) + encoded_size(item)
        return size

    raise UnsupportedType(value)
