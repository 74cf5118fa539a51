"""Base64 codec for the ``m`` directive.

Encoding wraps lines after a count-derived number of source bytes. Decoding
is lenient: bytes outside the alphabet are skipped and decoding stops after
the first group that carries ``=`` padding.
"""

from __future__ import annotations

import base64
from typing import Optional

BASE64_CHARS = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

IGNORE = 0xFF
PADDING = 0xFE

DEFAULT_LINE_BYTES = 45


def _make_decode_table() -> bytes:
    table = bytearray([IGNORE]) * 128
    for value, char in enumerate(BASE64_CHARS):
        table[char] = value
    table[ord("=")] = PADDING
    return bytes(table)


# Built once at import, read-only afterwards
DECODE_TABLE = _make_decode_table()


def line_bytes(count: Optional[int]) -> int:
    """Return the number of source bytes per output line for a count.

    0 disables line wrapping; None, 1 and 2 select the default of 45.
    """
    if count is None or count in (1, 2):
        return DEFAULT_LINE_BYTES
    return count - count % 3


def encode_base64(source: bytes, count: Optional[int]) -> bytes:
    """Encode bytes as base64 text.

    Args:
        source: Bytes to encode
        count: Directive count (line length selector), None for ``*``

    Returns:
        Base64 text, each line terminated by a newline when wrapping
    """
    if not source:
        return b""

    width = line_bytes(count)
    if width == 0:
        return base64.b64encode(source)

    lines = [
        base64.b64encode(source[start : start + width]) + b"\n"
        for start in range(0, len(source), width)
    ]
    return b"".join(lines)


def decode_base64(data: bytes) -> tuple[bytes, int]:
    """Decode base64 text.

    Args:
        data: Unread bytes

    Returns:
        ``(decoded, consumed)``. A trailing incomplete group is dropped.
    """
    result = bytearray()
    position = 0
    size = len(data)

    while size - position >= 4:
        symbols = []
        padding = 0
        while len(symbols) < 4 and position < size:
            char = data[position]
            position += 1
            if char >= len(DECODE_TABLE):
                continue
            symbol = DECODE_TABLE[char]
            if symbol == IGNORE:
                continue
            if symbol == PADDING:
                symbol = 0
                padding += 1
            symbols.append(symbol)

        if len(symbols) < 4:
            break

        group = (symbols[0] << 18) | (symbols[1] << 12) | (symbols[2] << 6) | symbols[3]
        decoded = group.to_bytes(3, "big")
        if padding == 0:
            result += decoded
        elif padding == 1:
            result += decoded[:2]
            break
        else:
            result += decoded[:1]
            break

    return bytes(result), position
