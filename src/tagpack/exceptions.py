"""Exception hierarchy for tagpack.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from TagpackError for easy catching of any tagpack-specific error.
"""

from __future__ import annotations


class TagpackError(Exception):
    """Base exception for all tagpack errors."""

    pass


class EncodeError(TagpackError):
    """Raised when encoding a value fails.

    Examples:
        - Input is not a tagpack value
        - String, array or map length exceeds the largest length class
    """

    pass


class UnsupportedType(EncodeError):
    """Raised when an object has no mapping onto the value model."""

    def __init__(self, obj: object, message: str | None = None) -> None:
        self.obj = obj
        super().__init__(message or f"Unsupported type: {type(obj).__name__}")


class ValueTooLarge(EncodeError):
    """Raised when a length does not fit the largest length-prefix family."""

    def __init__(self, kind: str, length: int, limit: int) -> None:
        self.kind = kind
        self.length = length
        self.limit = limit
        super().__init__(f"{kind} length {length} exceeds maximum {limit}")


class DecodeError(TagpackError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Leading byte that matches no tag family
        - Short-form length outside its embedded range
        - Input exceeding the configured decoder limits
    """

    pass


class UnexpectedEndOfInput(DecodeError):
    """Raised when fewer bytes remain than the current field requires."""

    def __init__(self, needed: int, available: int, offset: int) -> None:
        self.needed = needed
        self.available = available
        self.offset = offset
        super().__init__(
            f"Truncated data at offset {offset}: need {needed} bytes, have {available}"
        )


class UnknownTag(DecodeError):
    """Raised when a leading byte matches no known tag family."""

    def __init__(self, tag: int, offset: int) -> None:
        self.tag = tag
        self.offset = offset
        super().__init__(f"Unknown tag 0x{tag:02x} at offset {offset}")


class InvalidLength(DecodeError):
    """Raised when a short-form marker encodes an out-of-range length."""

    pass


class InvalidKeyError(DecodeError):
    """Raised when a decoded map key is not a bool, integer or string."""

    pass


class TrailingDataError(DecodeError):
    """Raised by decode() when bytes remain after the first value."""

    def __init__(self, consumed: int, total: int) -> None:
        self.consumed = consumed
        self.total = total
        super().__init__(f"{total - consumed} trailing bytes after value ({consumed} consumed)")


class LimitExceeded(DecodeError):
    """Base class for decoder resource limit violations."""

    pass


class DepthLimitExceeded(LimitExceeded):
    """Raised when container nesting exceeds DecoderConfig.max_depth."""

    pass


class SizeLimitExceeded(LimitExceeded):
    """Raised when a declared length or total value count exceeds a configured limit."""

    pass
