"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from tagpack import Bool, Float64, Int8, Map, Nil, Seq, Str, UInt16


@pytest.fixture
def sample_map_bytes() -> bytes:
    """Short-form map {"key": 5, "abc": 6}."""
    return bytes([0x82, 0xA3]) + b"key" + bytes([0xD0, 0x05, 0xA3]) + b"abc" + bytes([0xD0, 0x06])


@pytest.fixture
def sample_value() -> Map:
    """Nested value touching every container family."""
    return Map(
        [
            (Str(b"id"), UInt16(513)),
            (Str(b"ok"), Bool(True)),
            (Str(b"ratio"), Float64(0.25)),
            (Str(b"tags"), Seq([Str(b"a"), Str(b"b"), Nil()])),
            (Int8(-1), Map([(Bool(False), Seq())])),
        ]
    )
