"""Template-driven binary codec.

This package provides the pack and unpack engines, the template parser and
the per-kind codecs they drive, plus encoding of PackedMessage models.
"""

from __future__ import annotations

from .decoder import unpack, unpack_first, unpack_groups
from .directives import CodecKind, Directive, ElementKind, Flag
from .encoder import pack
from .message import decode, encode
from .schema import FieldSchema, MessageSchema
from .template import Template, iter_directives, parse_template

__all__ = [
    "pack",
    "unpack",
    "unpack_first",
    "unpack_groups",
    "encode",
    "decode",
    "Template",
    "iter_directives",
    "parse_template",
    "Directive",
    "CodecKind",
    "ElementKind",
    "Flag",
    "MessageSchema",
    "FieldSchema",
]
