"""Property-based tests using hypothesis."""

from __future__ import annotations

import math

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from tmplpack import calcsize, pack, unpack

INTEGER_RANGES = {
    "C": (0, 2**8 - 1),
    "c": (-(2**7), 2**7 - 1),
    "S": (0, 2**16 - 1),
    "s": (-(2**15), 2**15 - 1),
    "L": (0, 2**32 - 1),
    "l": (-(2**31), 2**31 - 1),
    "Q": (0, 2**64 - 1),
    "q": (-(2**63), 2**63 - 1),
    "n": (0, 2**16 - 1),
    "N": (0, 2**32 - 1),
    "v": (0, 2**16 - 1),
    "V": (0, 2**32 - 1),
}


class TestIntegerProperties:
    """Property-based tests for integer directives."""

    @pytest.mark.parametrize("char", sorted(INTEGER_RANGES))
    @given(data=st.data())
    def test_roundtrip_in_range(self, char: str, data: st.DataObject) -> None:
        """Test that in-range values survive pack then unpack."""
        low, high = INTEGER_RANGES[char]
        values = data.draw(st.lists(st.integers(min_value=low, max_value=high), max_size=8))
        assert unpack(pack(values, f"{char}*"), f"{char}*") == values

    @given(value=st.integers(min_value=0, max_value=2**32 - 1))
    def test_big_endian_reverses_little(self, value: int) -> None:
        """Test that L> is the byte reverse of L<."""
        assert pack([value], "L>") == pack([value], "L<")[::-1]

    @given(value=st.integers())
    def test_truncation_keeps_low_bits(self, value: int) -> None:
        """Test that any integer packs to its low 16 bits."""
        assert unpack(pack([value], "v"), "v") == [value & 0xFFFF]


class TestFloatProperties:
    """Property-based tests for float directives."""

    @given(data=st.binary(min_size=8, max_size=8))
    def test_double_bit_exact(self, data: bytes) -> None:
        """Test that any 8 bytes survive unpack then pack."""
        assert pack(unpack(data, "E"), "E") == data
        assert pack(unpack(data, "G"), "G") == data

    @given(value=st.floats(width=32, allow_nan=False))
    def test_single_roundtrip(self, value: float) -> None:
        """Test that single precision values survive pack then unpack."""
        (decoded,) = unpack(pack([value], "g"), "g")
        assert decoded == value
        assert math.copysign(1.0, decoded) == math.copysign(1.0, value)


class TestStringProperties:
    """Property-based tests for string directives."""

    @given(value=st.integers(min_value=0, max_value=0x1FFFFF))
    def test_utf8_roundtrip(self, value: int) -> None:
        """Test that every codepoint below 0x200000 survives U."""
        assert unpack(pack([value], "U"), "U") == [value]

    @given(value=st.text(max_size=20))
    def test_utf8_matches_builtin_codec(self, value: str) -> None:
        """Test that U* matches Python's UTF-8 encoding for valid text."""
        codepoints = [ord(char) for char in value]
        assume(all(not 0xD800 <= cp <= 0xDFFF for cp in codepoints))
        assert pack(codepoints, "U*") == value.encode("utf-8")

    @given(value=st.binary(max_size=200))
    def test_base64_roundtrip(self, value: bytes) -> None:
        """Test that m decodes what it encodes, wrapped or not."""
        assert unpack(pack([value], "m"), "m") == [value]
        assert unpack(pack([value], "m0"), "m") == [value]

    @given(value=st.binary(max_size=64))
    def test_hex_roundtrip(self, value: bytes) -> None:
        """Test that H* decodes what it encodes."""
        digits = value.hex()
        assert unpack(pack([digits], "H*"), "H*") == [digits]
        assert pack([digits], "H*") == value

    @given(value=st.binary(max_size=64))
    def test_null_padded_roundtrip(self, value: bytes) -> None:
        """Test that a* is the identity."""
        assert unpack(pack([value], "a*"), "a*") == [value]

    @given(value=st.binary(max_size=64).filter(lambda b: b"\x00" not in b))
    def test_null_terminated_roundtrip(self, value: bytes) -> None:
        """Test that Z* survives for values without NUL."""
        packed = pack([value], "Z*")
        assert len(packed) == len(value) + 1
        assert unpack(packed, "Z*") == [value]


class TestSizeProperties:
    """Property-based tests for calcsize."""

    @given(
        header=st.integers(min_value=0, max_value=2**32 - 1),
        count=st.integers(min_value=0, max_value=2**16 - 1),
        name=st.binary(max_size=16),
    )
    def test_calcsize_matches_packed_length(self, header: int, count: int, name: bytes) -> None:
        """Test that calcsize agrees with the length of packed output."""
        template = "N n a8 x2 E"
        assert len(pack([header, count, name, 1.0], template)) == calcsize(template)
