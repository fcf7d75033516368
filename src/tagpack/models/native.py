"""Conversion between native Python objects and the tagpack value model.

The value model is closed and width-explicit. These helpers give callers a
shortcut for plain Python data, choosing a default width for each native type.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..exceptions import UnsupportedType
from .values import (
    KEY_TYPES,
    VALUE_TYPES,
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

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

_INT_TYPES = (Int8, Int16, Int32, Int64, UInt8, UInt16, UInt32, UInt64)


def from_python(obj: Any) -> Value:
    """Convert a native Python object to a tagpack value.

    Mapping of native types:
      - None → Nil
      - bool → Bool
      - int → Int64, or UInt64 above the int64 range
      - float → Float64
      - str → Str (UTF-8 bytes)
      - bytes, bytearray, memoryview → Str
      - list, tuple → Seq
      - dict (any Mapping) → Map, in iteration order
      - tagpack values pass through unchanged

    Raises:
        UnsupportedType: If obj (or anything nested in it) has no mapping,
            including integers outside [-2**63, 2**64 - 1] and dict keys that
            convert to nil, a float or a container
    """
    if isinstance(obj, VALUE_TYPES):
        return obj

    if obj is None:
        return Nil()

    # bool before int (bool is an int subclass)
    if isinstance(obj, bool):
        return Bool(obj)

    if isinstance(obj, int):
        if INT64_MIN <= obj <= INT64_MAX:
            return Int64(obj)
        if INT64_MAX < obj <= UINT64_MAX:
            return UInt64(obj)
        raise UnsupportedType(obj, f"Integer {obj} outside the int64/uint64 range")

    if isinstance(obj, float):
        return Float64(obj)

    if isinstance(obj, str):
        return Str(obj.encode("utf-8"))

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return Str(bytes(obj))

    if isinstance(obj, (list, tuple)):
        return Seq(from_python(item) for item in obj)

    if isinstance(obj, Mapping):
        entries = []
        for k, v in obj.items():
            key = from_python(k)
            if not isinstance(key, KEY_TYPES):
                raise UnsupportedType(k, f"Unsupported map key type: {type(k).__name__}")
            entries.append((key, from_python(v)))
        return Map(entries)

    raise UnsupportedType(obj)


def to_python(value: Value, text: bool = True) -> Any:
    """Convert a tagpack value to native Python objects.

    Integer and float widths are dropped. Str becomes ``str`` when ``text`` is
    True and the payload is valid UTF-8, otherwise ``bytes``. Map becomes a
    dict (keys that collide once widths are dropped keep the later value),
    Seq becomes a list.

    Raises:
        UnsupportedType: If value is not a tagpack value
    """
    if isinstance(value, Nil):
        return None

    if isinstance(value, (Bool, Float32, Float64) + _INT_TYPES):
        return value.value

    if isinstance(value, Str):
        if text:
            try:
                return value.text()
            except UnicodeDecodeError:
                return value.value
        return value.value

    if isinstance(value, Seq):
        return [to_python(item, text) for item in value.items]

    if isinstance(value, Map):
        return {to_python(k, text): to_python(v, text) for k, v in value.entries}

    raise UnsupportedType(value)
