"""The tagpack value model.

Every encodable value is an instance of exactly one of the frozen Pydantic
models below. Integer and float variants carry their width in the type, so
``Int8(1)``, ``Int16(1)`` and ``UInt8(1)`` are three different values that
encode to three different tags.

Example:
    >>> from tagpack.models import Int8, Map, Seq, Str
    >>> Seq([Int8(1), Int8(2)])
    Seq(items=(Int8(value=1), Int8(value=2)))
    >>> Map([(Str(b"key"), Int8(5))]).as_dict()
    {Str(value=b'key'): Int8(value=5)}
"""

from __future__ import annotations

import struct
from collections.abc import Iterable, Mapping
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, StrictBool, StrictInt, field_validator

_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")
_UNSET: Any = object()


class _Variant(BaseModel):
    """Common configuration: immutable, hashable, no extra fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class _Scalar(_Variant):
    """A variant holding a single ``value`` field, constructible positionally."""

    def __init__(self, value: Any = _UNSET, /, **data: Any) -> None:
        if value is not _UNSET:
            data["value"] = value
        super().__init__(**data)


class Nil(_Variant):
    """The nil value."""


class Bool(_Scalar):
    value: StrictBool


class Int8(_Scalar):
    value: Annotated[StrictInt, Field(ge=-(2**7), le=2**7 - 1)]


class Int16(_Scalar):
    value: Annotated[StrictInt, Field(ge=-(2**15), le=2**15 - 1)]


class Int32(_Scalar):
    value: Annotated[StrictInt, Field(ge=-(2**31), le=2**31 - 1)]


class Int64(_Scalar):
    value: Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]


class UInt8(_Scalar):
    value: Annotated[StrictInt, Field(ge=0, le=2**8 - 1)]


class UInt16(_Scalar):
    value: Annotated[StrictInt, Field(ge=0, le=2**16 - 1)]


class UInt32(_Scalar):
    value: Annotated[StrictInt, Field(ge=0, le=2**32 - 1)]


class UInt64(_Scalar):
    value: Annotated[StrictInt, Field(ge=0, le=2**64 - 1)]


class _Float(_Scalar):
    """Float variants compare and hash by IEEE-754 bit pattern.

    A NaN equals a NaN with the same payload, and ``0.0`` differs from ``-0.0``.
    """

    @property
    def bits(self) -> bytes:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.bits == other.bits  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.bits))


class Float32(_Float):
    """An IEEE-754 binary32 value.

    The stored value is rounded to the nearest binary32 on construction, so
    it always equals what the wire carries. Values built with
    :meth:`from_bits` also keep the exact 4-byte pattern, including NaN
    payloads that a Python float cannot carry.
    """

    value: float
    _raw: bytes | None = PrivateAttr(default=None)

    @field_validator("value")
    @classmethod
    def _round_to_binary32(cls, v: float) -> float:
        try:
            return _FLOAT32.unpack(_FLOAT32.pack(v))[0]
        except OverflowError as err:
            raise ValueError(f"{v!r} is outside the float32 range") from err

    @classmethod
    def from_bits(cls, raw: bytes) -> Float32:
        """Build a Float32 from its 4-byte big-endian pattern."""
        result = cls(_FLOAT32.unpack(raw)[0])
        result._raw = bytes(raw)
        return result

    @property
    def bits(self) -> bytes:
        """The 4-byte big-endian wire pattern."""
        if self._raw is not None:
            return self._raw
        return _FLOAT32.pack(self.value)


class Float64(_Float):
    """An IEEE-754 binary64 value."""

    value: float

    @property
    def bits(self) -> bytes:
        """The 8-byte big-endian wire pattern."""
        return _FLOAT64.pack(self.value)


class Str(_Scalar):
    """A byte string. Length is counted in bytes; content is not validated as text."""

    value: bytes

    @classmethod
    def from_text(cls, text: str, encoding: str = "utf-8") -> Str:
        """Build a Str from text using the given encoding."""
        return cls(text.encode(encoding))

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the payload as text.

        Raises:
            UnicodeDecodeError: If the payload is not valid in the encoding
        """
        return self.value.decode(encoding)

    def __len__(self) -> int:
        return len(self.value)


class Seq(_Variant):
    """An ordered sequence of values."""

    items: tuple[Value, ...] = ()

    def __init__(self, items: Iterable[Value] = _UNSET, /, **data: Any) -> None:
        if items is not _UNSET:
            data["items"] = tuple(items)
        super().__init__(**data)

    def __len__(self) -> int:
        return len(self.items)


class Map(_Variant):
    """A sequence of (key, value) pairs, kept in the order given.

    Keys are restricted to :data:`Key` so that equality and hashing are
    well defined. A repeated key keeps the position of its first occurrence
    and the value of its last, the same way the decoder resolves it.
    """

    entries: tuple[tuple[Key, Value], ...] = ()

    def __init__(self, entries: Iterable[tuple[Key, Value]] = _UNSET, /, **data: Any) -> None:
        if entries is not _UNSET:
            data["entries"] = tuple(entries)
        super().__init__(**data)

    @field_validator("entries")
    @classmethod
    def _merge_duplicate_keys(
        cls, entries: tuple[tuple[Key, Value], ...]
    ) -> tuple[tuple[Key, Value], ...]:
        merged = dict(entries)
        if len(merged) == len(entries):
            return entries
        return tuple(merged.items())

    @classmethod
    def from_dict(cls, mapping: Mapping[Key, Value]) -> Map:
        """Build a Map from a mapping, preserving its iteration order."""
        return cls(mapping.items())

    def as_dict(self) -> dict[Key, Value]:
        """Return the entries as a dict."""
        return dict(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


Key = Union[Bool, Int8, Int16, Int32, Int64, UInt8, UInt16, UInt32, UInt64, Str]
Value = Union[
    Nil,
    Bool,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Float32,
    Float64,
    Str,
    Seq,
    Map,
]

KEY_TYPES: tuple[type[BaseModel], ...] = (
    Bool,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Str,
)
VALUE_TYPES: tuple[type[BaseModel], ...] = (Nil, Float32, Float64, Seq, Map) + KEY_TYPES

Seq.model_rebuild()
Map.model_rebuild()
