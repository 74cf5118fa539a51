"""UTF-8 codepoint, padded string and hex nibble codecs.

Decoders take the unread bytes and return ``(value, consumed)``; the engine
advances its cursor by ``consumed``.
"""

from __future__ import annotations

from typing import Any, Optional

from ..exceptions import ArgumentError, PackRangeError, PackTypeError

# Smallest codepoint that needs a sequence of index + 1 bytes
UTF8_LIMITS = (0x0, 0x80, 0x800, 0x10000, 0x200000, 0x4000000)

HEX_DIGITS = "0123456789abcdef"

_SPACE_OR_NUL = b" \t\n\v\f\r\0"


def to_bytes(value: Any) -> bytes:
    """Convert a pack input value for a string directive to bytes.

    ``str`` values are encoded as UTF-8.

    Raises:
        PackTypeError: If value is not a string or bytes-like object
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise PackTypeError(f"can't convert {type(value).__name__} into String")


def encode_utf8(codepoint: int) -> bytes:
    """Encode a codepoint as a 1 to 4 byte UTF-8 sequence.

    Surrogates and values up to 0x1FFFFF are accepted.

    Raises:
        PackRangeError: If codepoint is negative or >= 0x200000
    """
    c = codepoint
    if c < 0:
        raise PackRangeError("pack(U): value out of range")
    if c < 0x80:
        return bytes([c])
    if c < 0x800:
        return bytes([0xC0 | (c >> 6), 0x80 | (c & 0x3F)])
    if c < 0x10000:
        return bytes([0xE0 | (c >> 12), 0x80 | ((c >> 6) & 0x3F), 0x80 | (c & 0x3F)])
    if c < 0x200000:
        return bytes(
            [
                0xF0 | (c >> 18),
                0x80 | ((c >> 12) & 0x3F),
                0x80 | ((c >> 6) & 0x3F),
                0x80 | (c & 0x3F),
            ]
        )
    raise PackRangeError("pack(U): value out of range")


def _utf8_length(lead: int) -> int:
    if not lead & 0x80:
        return 1
    if not lead & 0x40:
        return 0
    if not lead & 0x20:
        return 2
    if not lead & 0x10:
        return 3
    if not lead & 0x08:
        return 4
    # 5 and 6 byte forms lie outside Unicode
    return 0


def decode_utf8(data: bytes) -> tuple[Optional[int], int]:
    """Decode one UTF-8 sequence from the start of ``data``.

    Args:
        data: Unread bytes

    Returns:
        ``(codepoint, consumed)``. Empty input gives ``(None, 1)``.

    Raises:
        ArgumentError: If the sequence is malformed, truncated or overlong
    """
    if not data:
        return None, 1

    lead = data[0]
    length = _utf8_length(lead)
    if length == 0:
        raise ArgumentError("malformed UTF-8 character")
    if length == 1:
        return lead, 1
    if length > len(data):
        raise ArgumentError(
            f"malformed UTF-8 character (expected {length} bytes, given {len(data)} bytes)"
        )

    codepoint = lead & (0x7F >> length)
    for byte in data[1:length]:
        if byte & 0xC0 != 0x80:
            raise ArgumentError("malformed UTF-8 character")
        codepoint = (codepoint << 6) | (byte & 0x3F)

    if codepoint < UTF8_LIMITS[length - 1]:
        raise ArgumentError("redundant UTF-8 sequence")
    return codepoint, length


def encode_string(
    source: bytes,
    count: Optional[int],
    null_pad: bool = False,
    null_terminate: bool = False,
) -> bytes:
    """Encode a string for ``A``, ``a`` or ``Z``.

    Args:
        source: String bytes
        count: Field width, or None for ``*``
        null_pad: Pad with NUL instead of space (``a``)
        null_terminate: Pad with NUL and terminate ``*`` with NUL (``Z``)

    Returns:
        Encoded bytes
    """
    pad = b"\0" if null_pad or null_terminate else b" "

    if count is None:
        return source + b"\0" if null_terminate else source
    if count <= len(source):
        return source[:count]
    return source + pad * (count - len(source))


def decode_string(
    data: bytes,
    count: Optional[int],
    null_pad: bool = False,
    null_terminate: bool = False,
) -> tuple[bytes, int]:
    """Decode a string for ``A``, ``a`` or ``Z``.

    ``A`` strips trailing whitespace and NUL, ``a`` keeps the bytes as is,
    ``Z`` stops at the first NUL.

    Args:
        data: Unread bytes
        count: Field width, or None for ``*``

    Returns:
        ``(value, consumed)``
    """
    size = len(data) if count is None else min(count, len(data))
    field = data[:size]

    if null_terminate:
        end = field.find(b"\0")
        if end >= 0:
            if count is None:
                size = end + 1
            return field[:end], size
        return field, size
    if null_pad:
        return field, size
    return field.rstrip(_SPACE_OR_NUL), size


def _hex_value(char: int) -> int:
    if 0x30 <= char <= 0x39:
        return char - 0x30
    if 0x41 <= char <= 0x46:
        return char - 0x41 + 10
    if 0x61 <= char <= 0x66:
        return char - 0x61 + 10
    return 0


def encode_hex(source: bytes, count: Optional[int], low_nibble_first: bool = False) -> bytes:
    """Encode hex digits as nibbles (``H``, ``h``).

    Args:
        source: ASCII hex digits; other characters count as 0
        count: Number of nibbles to emit, or None for all of source
        low_nibble_first: Put the first digit in the low nibble (``h``)

    Returns:
        ceil(count / 2) bytes, zero-filled when source is shorter than count
    """
    if count is None:
        count = len(source)
    digits = source[:count]
    first_shift, second_shift = (0, 4) if low_nibble_first else (4, 0)

    result = bytearray()
    for i in range(0, count, 2):
        first = _hex_value(digits[i]) if i < len(digits) else 0
        second = _hex_value(digits[i + 1]) if i + 1 < len(digits) else 0
        result.append((first << first_shift) | (second << second_shift))
    return bytes(result)


def decode_hex(
    data: bytes, count: Optional[int], low_nibble_first: bool = False
) -> tuple[str, int]:
    """Decode bytes into hex digits (``H``, ``h``).

    Args:
        data: Unread bytes
        count: Number of digits to emit, or None for two per byte

    Returns:
        ``(digits, consumed)``
    """
    if count is None:
        count = len(data) * 2
    first_shift, second_shift = (0, 4) if low_nibble_first else (4, 0)

    digits: list[str] = []
    consumed = 0
    for byte in data:
        if len(digits) >= count:
            break
        consumed += 1
        digits.append(HEX_DIGITS[(byte >> first_shift) & 0x0F])
        if len(digits) < count:
            digits.append(HEX_DIGITS[(byte >> second_shift) & 0x0F])
    return "".join(digits), consumed
