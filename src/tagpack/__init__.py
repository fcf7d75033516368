"""tagpack: width-preserving MessagePack-style codec

A Python library for a compact, self-describing binary encoding of dynamic
values: nil, booleans, signed and unsigned integers of four widths, two
float widths, byte strings, sequences and maps.

Key Features:
- Pydantic-based closed value model with exact integer and float widths
- Width-preserving encoding: a UInt32 is always sent as a uint32
- Single tag dispatcher covering short-form and explicit-width families
- Decoder limits for untrusted input (nesting depth, value count, string size)

Quick Start:
    >>> from tagpack import Int8, Map, Str, decode, encode
    >>>
    >>> value = Map([(Str(b"key"), Int8(5)), (Str(b"abc"), Int8(6))])
    >>> data = encode(value)
    >>> data
    b'\\x82\\xa3key\\xd0\\x05\\xa3abc\\xd0\\x06'
    >>> decode(data) == value
    True

Plain Python data can be converted with from_python()/to_python(), or
packed directly with packb()/unpackb().
"""

from __future__ import annotations

from typing import Any

from .codec import DecoderConfig, decode, decode_prefix, dump, encode, load
from .codec.bytepack import BytesLike
from .exceptions import (
    DecodeError,
    DepthLimitExceeded,
    EncodeError,
    InvalidKeyError,
    InvalidLength,
    LimitExceeded,
    SizeLimitExceeded,
    TagpackError,
    TrailingDataError,
    UnexpectedEndOfInput,
    UnknownTag,
    UnsupportedType,
    ValueTooLarge,
)
from .models import (
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
    from_python,
    to_python,
)
from .utils import encoded_size

__version__ = "0.1.0"


def packb(obj: Any) -> bytes:
    """Encode a native Python object (see from_python() for the type mapping)."""
    return encode(from_python(obj))


def unpackb(data: BytesLike, config: DecoderConfig | None = None, text: bool = True) -> Any:
    """Decode bytes to native Python objects (see to_python())."""
    return to_python(decode(data, config), text=text)


__all__ = [
    # Core API
    "encode",
    "decode",
    "decode_prefix",
    "dump",
    "load",
    "DecoderConfig",
    # Native conversion
    "from_python",
    "to_python",
    "packb",
    "unpackb",
    # Value model
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
    # Exceptions
    "TagpackError",
    "EncodeError",
    "UnsupportedType",
    "ValueTooLarge",
    "DecodeError",
    "UnexpectedEndOfInput",
    "UnknownTag",
    "InvalidLength",
    "InvalidKeyError",
    "TrailingDataError",
    "LimitExceeded",
    "DepthLimitExceeded",
    "SizeLimitExceeded",
    # Sizing
    "encoded_size",
    # Version
    "__version__",
]
