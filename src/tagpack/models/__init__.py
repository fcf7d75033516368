"""Value model for tagpack.

This module provides the closed set of value variants that the codec
encodes and decodes, and helpers to convert them from and to native Python.
"""

from __future__ import annotations

from .native import from_python, to_python
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

__all__ = [
    "Value",
    "Key",
    "Nil",
    "Bool",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
    "Str",
    "Seq",
    "Map",
    "KEY_TYPES",
    "VALUE_TYPES",
    "from_python",
    "to_python",
]
