"""Pack engine.

This module provides the pack() function that converts a sequence of values
to bytes following a template.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import PackRangeError, PackRuntimeError
from .b64 import encode_base64
from .buffer import ByteBuffer
from .directives import CodecKind, Directive, Flag
from .numeric import encode_float, encode_int, to_float, to_int
from .template import Template, TemplateLike
from .text import encode_hex, encode_string, encode_utf8, to_bytes

logger = logging.getLogger(__name__)


def pack(
    values: Sequence[Any],
    template: TemplateLike,
    *,
    config: Optional[CodecConfig] = None,
) -> bytes:
    """Pack values into bytes according to a template.

    Values are consumed left to right. Numeric directives take one value per
    repetition (``*`` takes all that remain); string directives (``A a Z H h
    m``) take exactly one value and use the count as a width. ``x`` writes
    NUL bytes and takes no value. Unknown directive characters are ignored.

    Args:
        values: Input values
        template: Template text
        config: Codec configuration (default: host configuration)

    Returns:
        Packed bytes

    Raises:
        ArgumentError: If the template is malformed
        PackRangeError: If a value is out of range for its directive
        PackTypeError: If a value cannot be converted for its directive
        PackRuntimeError: If an alias cannot be resolved on this configuration

    Examples:
        ```python
        from tmplpack import pack

        pack([1, 2], "n v")  # b"\\x00\\x01\\x02\\x00"
        pack(["ab"], "A5")  # b"ab   "
        pack([0x20AC], "U")  # b"\\xe2\\x82\\xac"
        ```
    """
    config = config or DEFAULT_CONFIG
    buffer = ByteBuffer()
    index = 0

    for directive in Template(template, config):
        kind = directive.kind

        if kind is CodecKind.NOOP:
            continue

        if kind is CodecKind.NULL:
            if not directive.consume_all:
                buffer.fill(0, directive.count)
            continue

        if directive.count_is_width:
            if index < len(values):
                buffer.write(_encode_string_kind(directive, to_bytes(values[index])))
                index += 1
            continue

        remaining = directive.count
        while index < len(values) and (remaining is None or remaining > 0):
            buffer.write(_encode_value(directive, values[index]))
            index += 1
            if remaining is not None:
                remaining -= 1

        if remaining:
            logger.debug(
                "pack: values exhausted at directive %s (%d missing)", directive, remaining
            )

    logger.debug("pack: %d values -> %d bytes", index, len(buffer))
    return buffer.to_bytes()


def _encode_value(directive: Directive, value: Any) -> bytes:
    """Encode one value for a repeating directive.

    Raises:
        PackRangeError: If value is out of range
        PackTypeError: If value cannot be converted
    """
    kind = directive.kind

    if kind is CodecKind.INTEGER:
        return encode_int(to_int(value), directive.width, directive.little_endian)

    if kind is CodecKind.FLOAT:
        return encode_float(to_float(value), directive.width, directive.little_endian)

    if kind is CodecKind.UTF8:
        if isinstance(value, float):
            raise PackRangeError("pack(U): value out of range")
        return encode_utf8(to_int(value))

    raise PackRuntimeError(f"unexpected directive kind {kind.value} for {directive}")


def _encode_string_kind(directive: Directive, source: bytes) -> bytes:
    """Encode the single value of a string, hex or base64 directive."""
    kind = directive.kind
    flags = directive.flags

    if kind is CodecKind.STRING:
        return encode_string(
            source,
            directive.count,
            null_pad=bool(flags & Flag.NULL_PAD),
            null_terminate=bool(flags & Flag.NULL_TERMINATE),
        )

    if kind is CodecKind.HEX:
        return encode_hex(source, directive.count, low_nibble_first=bool(flags & Flag.LSB))

    if kind is CodecKind.BASE64:
        return encode_base64(source, directive.count)

    raise PackRuntimeError(f"unexpected directive kind {kind.value} for {directive}")
