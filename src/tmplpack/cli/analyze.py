"""Template analysis CLI command."""

from __future__ import annotations

from typing import Optional

from ..codec.directives import CodecKind, Directive
from ..config import CodecConfig
from ..utils.sizing import directive_sizes


def _describe(directive: Directive) -> str:
    kind = directive.kind
    if kind is CodecKind.INTEGER:
        sign = "signed" if directive.signed else "unsigned"
        return f"{sign} {directive.width * 8}-bit integer, {directive.byte_order}-endian"
    if kind is CodecKind.FLOAT:
        precision = "double" if directive.width == 8 else "single"
        return f"{precision} float, {directive.byte_order}-endian"
    if kind is CodecKind.UTF8:
        return "UTF-8 codepoint"
    if kind is CodecKind.STRING:
        if directive.char == "Z":
            return "NUL-terminated string"
        if directive.char == "a":
            return "NUL-padded string"
        return "space-padded string"
    if kind is CodecKind.HEX:
        order = "low" if directive.char == "h" else "high"
        return f"hex string, {order} nibble first"
    if kind is CodecKind.BASE64:
        return "base64 string"
    return "NUL bytes"


def analyze_template(template: str, config: Optional[CodecConfig] = None) -> None:
    """Print a per-directive breakdown of a template.

    Args:
        template: Template text
        config: Codec configuration (default: host configuration)
    """
    sizes = directive_sizes(template, config=config)

    print(f"{'=' * 19} {template} {'=' * 19}")
    print(f"{len(sizes)} directive{'s' if len(sizes) != 1 else ''}.")
    print("Sizes are in bytes; '-' means the size depends on the values.")
    print()

    for i, (directive, size) in enumerate(sizes, 1):
        desc = f"{i}. {directive}"
        size_text = "-" if size is None else str(size)
        dots = "." * max(1, 24 - len(desc) - len(size_text))
        print(f"        {desc}{dots}{size_text}  {_describe(directive)}")

    print()
    if all(size is not None for _, size in sizes):
        total = sum(size for _, size in sizes if size is not None)
        print(f"Packed size: {total} bytes")
    else:
        print("Packed size: variable")
