"""Packed size calculation utilities.

This module provides functions to calculate how many bytes a template or a
packed message occupies without packing any values.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ..codec.directives import CodecKind, Directive
from ..codec.schema import MessageSchema
from ..codec.template import Template, TemplateLike
from ..config import CodecConfig
from ..exceptions import ArgumentError


def directive_size(directive: Directive) -> int:
    """Return the number of bytes a directive packs to.

    Args:
        directive: Parsed directive

    Returns:
        Size in bytes (0 for ignored characters)

    Raises:
        ArgumentError: If the directive has no static size (``*``, ``U``, ``m``)
    """
    size = directive.byte_size
    if size is None:
        if directive.kind in (CodecKind.UTF8, CodecKind.BASE64):
            raise ArgumentError(f"{directive.char!r} has no fixed size")
        raise ArgumentError(f"'{directive.char}*' has no fixed size")
    return size


def directive_sizes(
    template: TemplateLike, *, config: Optional[CodecConfig] = None
) -> list[tuple[Directive, Optional[int]]]:
    """List every directive of a template with its size.

    Returns:
        ``(directive, size)`` pairs; size is None when it depends on the values.
        Ignored characters are skipped.
    """
    sizes: list[tuple[Directive, Optional[int]]] = []
    for directive in Template(template, config):
        if directive.kind is CodecKind.NOOP:
            continue
        try:
            size: Optional[int] = directive_size(directive)
        except ArgumentError:
            size = None
        sizes.append((directive, size))
    return sizes


def calcsize(template: TemplateLike, *, config: Optional[CodecConfig] = None) -> int:
    """Calculate the number of bytes a template packs to.

    Args:
        template: Template text
        config: Codec configuration (default: host configuration)

    Returns:
        Size in bytes

    Raises:
        ArgumentError: If any directive has no static size

    Example:
        >>> calcsize("N n a8 x2")
        16
    """
    return sum(directive_size(directive) for directive in Template(template, config))


def encoded_size(message_or_class: BaseModel | type[BaseModel]) -> int:
    """Calculate the packed size of a message in bytes.

    Args:
        message_or_class: Message instance or class

    Returns:
        Size in bytes

    Raises:
        SchemaError: If the schema is invalid
        ArgumentError: If a field has no static size
    """
    if isinstance(message_or_class, BaseModel):
        message_class = type(message_or_class)
    else:
        message_class = message_or_class

    return calcsize(MessageSchema.from_model(message_class).template)


def field_sizes(message_or_class: BaseModel | type[BaseModel]) -> dict[str, int]:
    """Get the packed size in bytes of each field in a message.

    Example:
        >>> field_sizes(Header)
        {'magic': 4, 'version': 1, 'name': 8}
    """
    if isinstance(message_or_class, BaseModel):
        message_class = type(message_or_class)
    else:
        message_class = message_or_class

    schema = MessageSchema.from_model(message_class)
    return {field.name: directive_size(field.directive) for field in schema.fields}
