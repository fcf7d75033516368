"""Wire tag table.

Every encoded value starts with one tag byte. Fixed-width families map a
single byte to one payload layout; short ("fix") families embed a small
length in the low bits of the tag.

All multi-byte payloads and length prefixes are big-endian.
"""

from __future__ import annotations

# ── Fixed single-byte tags ───────────────────────────────────
NIL: int = 0xC0
FALSE: int = 0xC2
TRUE: int = 0xC3

FLOAT32: int = 0xCA
FLOAT64: int = 0xCB

UINT8: int = 0xCC
UINT16: int = 0xCD
UINT32: int = 0xCE
UINT64: int = 0xCF
INT8: int = 0xD0
INT16: int = 0xD1
INT32: int = 0xD2
INT64: int = 0xD3

# ── Length-prefixed families ─────────────────────────────────
STR8: int = 0xD9
STR16: int = 0xDA
STR32: int = 0xDB
ARRAY16: int = 0xDC
ARRAY32: int = 0xDD
MAP16: int = 0xDE
MAP32: int = 0xDF

# ── Short-form families (length in the low bits) ─────────────
FIXMAP: int = 0x80
FIXARRAY: int = 0x90
FIXSTR: int = 0xA0

FIXMAP_MASK: int = 0x0F
FIXARRAY_MASK: int = 0x0F
FIXSTR_MASK: int = 0x1F

# Largest length each family can carry.
MAX_FIXSTR: int = 31
MAX_FIXARRAY: int = 15
MAX_FIXMAP: int = 15
MAX_UINT8: int = 0xFF
MAX_UINT16: int = 0xFFFF
MAX_UINT32: int = 0xFFFFFFFF

# Payload width in bytes for each fixed-width numeric tag.
PAYLOAD_WIDTH: dict[int, int] = {
    UINT8: 1,
    UINT16: 2,
    UINT32: 4,
    UINT64: 8,
    INT8: 1,
    INT16: 2,
    INT32: 4,
    INT64: 8,
    FLOAT32: 4,
    FLOAT64: 8,
}

# Width in bytes of the explicit length prefix.
STR_PREFIX_WIDTH: dict[int, int] = {STR8: 1, STR16: 2, STR32: 4}
ARRAY_PREFIX_WIDTH: dict[int, int] = {ARRAY16: 2, ARRAY32: 4}
MAP_PREFIX_WIDTH: dict[int, int] = {MAP16: 2, MAP32: 4}

SIGNED_TAGS: frozenset[int] = frozenset({INT8, INT16, INT32, INT64})
UNSIGNED_TAGS: frozenset[int] = frozenset({UINT8, UINT16, UINT32, UINT64})
FLOAT_TAGS: frozenset[int] = frozenset({FLOAT32, FLOAT64})


def is_fixstr(tag: int) -> bool:
    """Return True if tag is a short-form string marker (0xa0-0xbf)."""
    return tag & ~FIXSTR_MASK == FIXSTR


def is_fixarray(tag: int) -> bool:
    """Return True if tag is a short-form array marker (0x90-0x9f)."""
    return tag & ~FIXARRAY_MASK == FIXARRAY


def is_fixmap(tag: int) -> bool:
    """Return True if tag is a short-form map marker (0x80-0x8f)."""
    return tag & ~FIXMAP_MASK == FIXMAP
