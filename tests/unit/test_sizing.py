"""Unit tests for encoded size calculation."""

from __future__ import annotations

import pytest

from tagpack import (
    Bool,
    Float32,
    Float64,
    Int16,
    Map,
    Nil,
    Seq,
    Str,
    UInt32,
    UInt64,
    UnsupportedType,
    encode,
    encoded_size,
)


class TestEncodedSize:
    """Test encoded_size() against encode()."""

    @pytest.mark.parametrize(
        "value, size",
        [
            (Nil(), 1),
            (Bool(True), 1),
            (Int16(-3), 3),
            (UInt32(1), 5),
            (UInt64(1), 9),
            (Float32(1.0), 5),
            (Float64(1.0), 9),
            (Str(b"hello"), 6),
            (Str(b"x" * 32), 34),
            (Str(b"x" * 256), 259),
            (Seq(), 1),
            (Seq([Nil()] * 16), 19),
            (Map([(Bool(True), Nil())]), 3),
        ],
    )
    def test_sizes(self, value: object, size: int) -> None:
        """Test known sizes."""
        assert encoded_size(value) == size  # type: ignore[arg-type]
        assert len(encode(value)) == size  # type: ignore[arg-type]

    def test_nested(self, sample_value: Map) -> None:
        """Test a nested tree matches its encoding."""
        assert encoded_size(sample_value) == len(encode(sample_value))

    def test_unsupported(self) -> None:
        """Test non-model input."""
        with pytest.raises(UnsupportedType):
            encoded_size("text")  # type: ignore[arg-type]
