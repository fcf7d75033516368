"""Unit tests for the value model."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from tagpack import (
    Bool,
    Float32,
    Float64,
    Int8,
    Int16,
    Int64,
    Map,
    Nil,
    Seq,
    Str,
    UInt8,
    UInt64,
)


class TestIntegerVariants:
    """Test integer range checks and width-exact equality."""

    @pytest.mark.parametrize(
        "cls, low, high",
        [
            (Int8, -128, 127),
            (Int16, -32768, 32767),
            (Int64, -(2**63), 2**63 - 1),
            (UInt8, 0, 255),
            (UInt64, 0, 2**64 - 1),
        ],
    )
    def test_bounds(self, cls: type, low: int, high: int) -> None:
        """Test the inclusive range of each width."""
        assert cls(low).value == low
        assert cls(high).value == high

        with pytest.raises(ValidationError):
            cls(low - 1)

        with pytest.raises(ValidationError):
            cls(high + 1)

    def test_bool_is_not_an_integer(self) -> None:
        """Test strict integers reject booleans."""
        with pytest.raises(ValidationError):
            Int8(True)

    def test_keyword_construction(self) -> None:
        """Test positional and keyword forms are equivalent."""
        assert Int8(5) == Int8(value=5)
        assert Seq([Nil()]) == Seq(items=[Nil()])

    def test_width_exact_equality(self) -> None:
        """Test equal magnitudes of different widths are different values."""
        assert Int8(1) == Int8(1)
        assert Int8(1) != Int16(1)
        assert Int8(1) != UInt8(1)
        assert Bool(True) != Int8(1)

    def test_frozen(self) -> None:
        """Test values are immutable."""
        value = Int8(1)
        with pytest.raises(ValidationError):
            value.value = 2  # type: ignore[misc]

    def test_hashable(self) -> None:
        """Test scalar variants can be dict keys."""
        table = {Int8(1): "a", UInt8(1): "b", Str(b"x"): "c"}
        assert table[Int8(1)] == "a"
        assert table[UInt8(1)] == "b"
        assert table[Str(b"x")] == "c"


class TestFloatVariants:
    """Test float variants."""

    def test_float32_rounds_to_binary32(self) -> None:
        """Test Float32 stores the nearest binary32 value."""
        value = Float32(0.1)
        assert value.value != 0.1
        assert value.value == pytest.approx(0.1, rel=1e-7)
        assert Float32(value.value) == value

    def test_float32_infinities(self) -> None:
        """Test infinities are representable."""
        assert Float32(math.inf).value == math.inf
        assert Float32(-math.inf).value == -math.inf

    def test_float32_out_of_range(self) -> None:
        """Test finite values beyond binary32 are rejected."""
        with pytest.raises(ValidationError, match="float32 range"):
            Float32(1e39)

    def test_float64_keeps_value(self) -> None:
        """Test Float64 is stored as given."""
        assert Float64(0.1).value == 0.1
        assert Float64(1).value == 1.0

    @pytest.mark.parametrize("cls", [Float32, Float64])
    def test_nan_equals_itself(self, cls: type) -> None:
        """Test equality follows the bit pattern, so NaN equals NaN."""
        assert cls(math.nan) == cls(math.nan)
        assert hash(cls(math.nan)) == hash(cls(math.nan))

    @pytest.mark.parametrize("cls", [Float32, Float64])
    def test_signed_zeros_differ(self, cls: type) -> None:
        """Test 0.0 and -0.0 are different values."""
        assert cls(0.0) != cls(-0.0)

    def test_float_widths_differ(self) -> None:
        """Test Float32 and Float64 of the same number are different values."""
        assert Float32(1.5) != Float64(1.5)

    def test_float32_from_bits_keeps_pattern(self) -> None:
        """Test a signalling NaN pattern is kept verbatim."""
        value = Float32.from_bits(b"\x7f\x80\x00\x01")

        assert math.isnan(value.value)
        assert value.bits == b"\x7f\x80\x00\x01"
        assert value == Float32.from_bits(b"\x7f\x80\x00\x01")
        assert value != Float32.from_bits(b"\x7f\xc0\x00\x01")

    def test_float32_from_bits_matches_value(self) -> None:
        """Test an ordinary pattern equals the same number built from a float."""
        assert Float32.from_bits(b"\x3f\xc0\x00\x00") == Float32(1.5)
        assert Float32(1.5).bits == b"\x3f\xc0\x00\x00"



class TestStr:
    """Test byte strings."""

    def test_text_helpers(self) -> None:
        """Test text conversion helpers."""
        value = Str.from_text("héllo")
        assert value.value == "héllo".encode()
        assert len(value) == 6
        assert value.text() == "héllo"

    def test_invalid_text(self) -> None:
        """Test text() on non-UTF-8 payloads."""
        with pytest.raises(UnicodeDecodeError):
            Str(b"\xff").text()


class TestContainers:
    """Test Seq and Map."""

    def test_seq(self) -> None:
        """Test sequences keep order and accept any value."""
        value = Seq([Int8(1), Nil(), Seq([Float64(1.5)])])
        assert len(value) == 3
        assert value.items[1] == Nil()
        assert Seq() == Seq([])

    def test_seq_rejects_native_objects(self) -> None:
        """Test elements must be model values."""
        with pytest.raises(ValidationError):
            Seq([42])

    def test_map_from_dict_keeps_order(self) -> None:
        """Test dict iteration order is kept."""
        value = Map.from_dict({Str(b"b"): Int8(1), Str(b"a"): Int8(2)})
        assert [k for k, _ in value.entries] == [Str(b"b"), Str(b"a")]

    def test_map_duplicate_keys_last_write_wins(self) -> None:
        """Test a repeated key keeps its first position and its last value."""
        value = Map([(Int8(1), Nil()), (Str(b"x"), Nil()), (Int8(1), Bool(True))])

        assert len(value) == 2
        assert value.entries == ((Int8(1), Bool(True)), (Str(b"x"), Nil()))
        assert value == Map([(Int8(1), Bool(True)), (Str(b"x"), Nil())])
        assert value.as_dict() == {Int8(1): Bool(True), Str(b"x"): Nil()}

    def test_map_keys_of_different_width_kept(self) -> None:
        """Test Int8(1) and UInt8(1) are not duplicates."""
        assert len(Map([(Int8(1), Nil()), (UInt8(1), Nil())])) == 2

    @pytest.mark.parametrize("key", [Nil(), Float32(1.0), Float64(1.0), Seq(), Map()])
    def test_map_rejects_unhashable_kinds_as_keys(self, key: object) -> None:
        """Test keys are limited to booleans, integers and strings."""
        with pytest.raises(ValidationError):
            Map([(key, Nil())])

    def test_nested_equality(self) -> None:
        """Test structural equality of trees."""
        left = Map([(Str(b"k"), Seq([Int8(1), Int8(2)]))])
        right = Map([(Str(b"k"), Seq([Int8(1), Int8(2)]))])
        other = Map([(Str(b"k"), Seq([Int8(1), Int16(2)]))])

        assert left == right
        assert left != other
