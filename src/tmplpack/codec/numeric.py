"""Fixed-width integer and IEEE-754 float codecs.

Integers are serialized with ``int.to_bytes`` after truncation to the
directive width; floats go through ``struct`` with an explicit byte order so
the round trip is bit-exact.
"""

from __future__ import annotations

import math
import numbers
import operator
import struct
from decimal import Decimal
from typing import Any, Optional

from ..exceptions import PackRangeError, PackTypeError

_REALS = (numbers.Real, Decimal)

_FLOAT_FORMATS = {
    (4, True): "<f",
    (4, False): ">f",
    (8, True): "<d",
    (8, False): ">d",
}


def to_int(value: Any) -> int:
    """Convert a pack input value to an integer.

    Integers (and bools) pass through, other real numbers are truncated
    toward zero, objects with ``__index__`` are accepted.

    Raises:
        PackRangeError: If value is a non-finite float
        PackTypeError: If value is not numeric
    """
    if isinstance(value, int):
        return value
    if isinstance(value, _REALS):
        try:
            return int(value)
        except (ValueError, OverflowError) as err:
            raise PackRangeError(f"{value!r} out of range of Integer") from err
    try:
        return operator.index(value)
    except TypeError as err:
        raise PackTypeError(f"can't convert {type(value).__name__} into Integer") from err


def to_float(value: Any) -> float:
    """Convert a pack input value to a float.

    Raises:
        PackRangeError: If value is an integer too large for a float
        PackTypeError: If value is not a real number
    """
    if isinstance(value, float):
        return value
    if isinstance(value, _REALS):
        try:
            return float(value)
        except OverflowError as err:
            raise PackRangeError(f"{value!r} out of range of Float") from err
    raise PackTypeError(f"can't convert {type(value).__name__} into Float")


def encode_int(value: int, width: int, little_endian: bool) -> bytes:
    """Serialize the low ``width`` bytes of an integer.

    Values outside the width are truncated, two's complement for negatives.

    Args:
        value: Integer to encode
        width: Width in bytes
        little_endian: Byte order

    Returns:
        ``width`` bytes
    """
    unsigned_value = value & ((1 << (width * 8)) - 1)
    return unsigned_value.to_bytes(width, "little" if little_endian else "big")


def decode_int(
    data: bytes,
    little_endian: bool,
    signed: bool,
    max_native_bits: Optional[int] = None,
) -> int:
    """Reassemble an integer from its bytes.

    Args:
        data: Exactly the directive width in bytes
        little_endian: Byte order
        signed: Sign-extend with two's complement
        max_native_bits: Bit width the result must fit as a signed integer,
            or None for no limit

    Returns:
        Decoded integer

    Raises:
        PackRangeError: If the value does not fit in max_native_bits
    """
    value = int.from_bytes(data, "little" if little_endian else "big", signed=signed)

    if max_native_bits is not None:
        limit = 1 << (max_native_bits - 1)
        if value < -limit or value >= limit:
            raise PackRangeError(f"cannot unpack to Integer: {value}")

    return value


def encode_float(value: float, width: int, little_endian: bool) -> bytes:
    """Serialize a float as IEEE-754 single (width 4) or double (width 8).

    Finite doubles too large for single precision become signed infinity.
    """
    fmt = _FLOAT_FORMATS[(width, little_endian)]
    try:
        return struct.pack(fmt, value)
    except OverflowError:
        return struct.pack(fmt, math.copysign(math.inf, value))


def decode_float(data: bytes, little_endian: bool) -> float:
    """Reinterpret 4 or 8 bytes as an IEEE-754 float."""
    (value,) = struct.unpack(_FLOAT_FORMATS[(len(data), little_endian)], data)
    return value
