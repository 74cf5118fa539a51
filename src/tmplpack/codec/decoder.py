"""Unpack engine.

This module provides the unpack() and unpack_first() functions that convert
bytes back to a list of values following a template.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import ArgumentError, PackRuntimeError
from .b64 import decode_base64
from .buffer import ByteCursor, BytesLike
from .directives import CodecKind, Directive, Flag
from .numeric import decode_float, decode_int
from .template import Template, TemplateLike
from .text import decode_hex, decode_string, decode_utf8

logger = logging.getLogger(__name__)


def unpack(
    data: BytesLike,
    template: TemplateLike,
    *,
    config: Optional[CodecConfig] = None,
) -> list[Any]:
    """Unpack bytes into a list of values according to a template.

    Fixed-width numeric directives that run out of bytes yield None for every
    repetition still requested; this is not an error. String directives
    (``A a Z H h m``) decode once and use the count as a width.

    Args:
        data: Bytes to unpack
        template: Template text
        config: Codec configuration (default: host configuration)

    Returns:
        Decoded values in template order

    Raises:
        ArgumentError: If the template or the data is malformed
        PackRangeError: If an integer exceeds config.max_native_bits
        PackRuntimeError: If an alias cannot be resolved on this configuration

    Examples:
        ```python
        from tmplpack import unpack

        unpack(b"\\x00\\x01\\x02\\x00", "n v")  # [1, 2]
        unpack(b"ab   ", "A5")  # [b"ab"]
        unpack(b"\\x01", "S")  # [None]
        ```
    """
    groups = _unpack(data, template, config or DEFAULT_CONFIG, single=False)
    return [value for values, _ in groups for value in values]


def unpack_first(
    data: BytesLike,
    template: TemplateLike,
    *,
    config: Optional[CodecConfig] = None,
) -> Any:
    """Unpack only the first value of a template.

    Decoding stops after the first directive that produces values; the rest
    of the template is not parsed.

    Returns:
        First decoded value, or None if that directive produced none
    """
    groups = _unpack(data, template, config or DEFAULT_CONFIG, single=True)
    values = groups[0][0] if groups else []
    return values[0] if values else None


def unpack_groups(
    data: BytesLike,
    template: TemplateLike,
    *,
    config: Optional[CodecConfig] = None,
) -> list[tuple[list[Any], int]]:
    """Unpack bytes, keeping the values of each directive together.

    Returns:
        One ``(values, end)`` pair per value-producing directive, where
        ``end`` is the input offset after that directive. ``x`` and ignored
        characters produce no pair.
    """
    return _unpack(data, template, config or DEFAULT_CONFIG, single=False)


def _unpack(
    data: BytesLike, template: TemplateLike, config: CodecConfig, single: bool
) -> list[tuple[list[Any], int]]:
    cursor = ByteCursor(data)
    groups: list[tuple[list[Any], int]] = []
    total = 0

    for directive in Template(template, config):
        kind = directive.kind

        if kind is CodecKind.NOOP:
            continue

        if kind is CodecKind.NULL:
            _skip(cursor, directive)
            continue

        values: list[Any] = []
        if directive.count_is_width:
            value, consumed = _decode_string_kind(directive, cursor.peek(_window(directive)))
            cursor.advance(min(consumed, cursor.remaining()))
            values.append(value)
        elif kind is CodecKind.UTF8:
            _decode_codepoints(cursor, directive, values)
        else:
            _decode_fixed(cursor, directive, config, values)

        groups.append((values, cursor.position()))
        total += len(values)

        if single:
            break

    logger.debug("unpack: %d bytes -> %d values", cursor.position(), total)
    return groups


def _window(directive: Directive) -> int:
    """Number of unread bytes a string-kind directive may look at (-1 for all)."""
    size = directive.byte_size
    return -1 if size is None else size


def _skip(cursor: ByteCursor, directive: Directive) -> None:
    """Skip bytes for ``x``.

    Raises:
        ArgumentError: If fewer than count bytes remain
    """
    if directive.consume_all:
        cursor.advance(cursor.remaining())
        return
    if cursor.remaining() < directive.count:
        raise ArgumentError("x outside of string")
    cursor.advance(directive.count)


def _decode_fixed(
    cursor: ByteCursor, directive: Directive, config: CodecConfig, result: list[Any]
) -> None:
    """Decode a repeating fixed-width integer or float directive."""
    width = directive.width
    remaining = directive.count

    while remaining is None or remaining > 0:
        if cursor.remaining() < width:
            if remaining:
                result.extend([None] * remaining)
            return

        data = cursor.read(width)
        if directive.kind is CodecKind.INTEGER:
            result.append(
                decode_int(
                    data,
                    directive.little_endian,
                    directive.signed,
                    config.max_native_bits,
                )
            )
        elif directive.kind is CodecKind.FLOAT:
            result.append(decode_float(data, directive.little_endian))
        else:
            raise PackRuntimeError(
                f"unexpected directive kind {directive.kind.value} for {directive}"
            )

        if remaining is not None:
            remaining -= 1


def _decode_codepoints(cursor: ByteCursor, directive: Directive, result: list[Any]) -> None:
    """Decode a repeating ``U`` directive until count or the data runs out."""
    remaining = directive.count

    while remaining is None or remaining > 0:
        codepoint, consumed = decode_utf8(cursor.peek(4))
        if codepoint is None:
            return
        cursor.advance(consumed)
        result.append(codepoint)
        if remaining is not None:
            remaining -= 1


def _decode_string_kind(directive: Directive, data: bytes) -> tuple[Any, int]:
    kind = directive.kind
    flags = directive.flags

    if kind is CodecKind.STRING:
        return decode_string(
            data,
            directive.count,
            null_pad=bool(flags & Flag.NULL_PAD),
            null_terminate=bool(flags & Flag.NULL_TERMINATE),
        )

    if kind is CodecKind.HEX:
        return decode_hex(data, directive.count, low_nibble_first=bool(flags & Flag.LSB))

    if kind is CodecKind.BASE64:
        return decode_base64(data)

    raise PackRuntimeError(f"unexpected directive kind {kind.value} for {directive}")
