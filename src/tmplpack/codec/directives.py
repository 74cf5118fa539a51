"""Directive table and directive descriptors.

The table maps every template character to the codec that handles it, the
kind of Python value it consumes or produces, its fixed byte width and its
default flags. Aliases (``I``/``i``) are not in the table; the template
parser resolves them against the configured native int width.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


class CodecKind(enum.Enum):
    """Byte-level transformation performed by a directive."""

    INTEGER = "integer"
    FLOAT = "float"
    UTF8 = "utf8"
    STRING = "string"
    HEX = "hex"
    BASE64 = "base64"
    NULL = "null"
    NOOP = "noop"


class ElementKind(enum.Enum):
    """Kind of Python value a directive consumes on pack."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    NONE = "none"


class Flag(enum.IntFlag):
    """Directive flags.

    Attributes:
        SIGNED: Integer is two's complement
        NATIVE_SIZE: ``_`` or ``!`` modifier, use the native width
        LITTLE: ``<`` modifier or inherently little-endian directive
        BIG: ``>`` modifier or inherently big-endian directive
        LSB: Low nibble first (``h``)
        NULL_PAD: Pad with NUL and never trim (``a``)
        NULL_TERMINATE: NUL-terminated string (``Z``)
    """

    NONE = 0
    SIGNED = 0x01
    NATIVE_SIZE = 0x02
    LITTLE = 0x04
    BIG = 0x08
    LSB = 0x10
    NULL_PAD = 0x20
    NULL_TERMINATE = 0x40


@dataclass(frozen=True)
class TableEntry:
    """Static description of one directive character."""

    kind: CodecKind
    element: ElementKind
    width: int = 0
    flags: Flag = Flag.NONE


def _entries() -> dict[str, TableEntry]:
    integer = ElementKind.INTEGER
    real = ElementKind.FLOAT
    string = ElementKind.STRING

    table = {
        "A": TableEntry(CodecKind.STRING, string),
        "a": TableEntry(CodecKind.STRING, string, flags=Flag.NULL_PAD),
        "Z": TableEntry(CodecKind.STRING, string, flags=Flag.NULL_TERMINATE),
        "C": TableEntry(CodecKind.INTEGER, integer, 1),
        "c": TableEntry(CodecKind.INTEGER, integer, 1, Flag.SIGNED),
        "S": TableEntry(CodecKind.INTEGER, integer, 2),
        "s": TableEntry(CodecKind.INTEGER, integer, 2, Flag.SIGNED),
        "L": TableEntry(CodecKind.INTEGER, integer, 4),
        "l": TableEntry(CodecKind.INTEGER, integer, 4, Flag.SIGNED),
        "Q": TableEntry(CodecKind.INTEGER, integer, 8),
        "q": TableEntry(CodecKind.INTEGER, integer, 8, Flag.SIGNED),
        "n": TableEntry(CodecKind.INTEGER, integer, 2, Flag.BIG),
        "N": TableEntry(CodecKind.INTEGER, integer, 4, Flag.BIG),
        "v": TableEntry(CodecKind.INTEGER, integer, 2, Flag.LITTLE),
        "V": TableEntry(CodecKind.INTEGER, integer, 4, Flag.LITTLE),
        "D": TableEntry(CodecKind.FLOAT, real, 8),
        "d": TableEntry(CodecKind.FLOAT, real, 8),
        "F": TableEntry(CodecKind.FLOAT, real, 4),
        "f": TableEntry(CodecKind.FLOAT, real, 4),
        "E": TableEntry(CodecKind.FLOAT, real, 8, Flag.LITTLE),
        "e": TableEntry(CodecKind.FLOAT, real, 4, Flag.LITTLE),
        "G": TableEntry(CodecKind.FLOAT, real, 8, Flag.BIG),
        "g": TableEntry(CodecKind.FLOAT, real, 4, Flag.BIG),
        "U": TableEntry(CodecKind.UTF8, integer),
        "H": TableEntry(CodecKind.HEX, string),
        "h": TableEntry(CodecKind.HEX, string, flags=Flag.LSB),
        "m": TableEntry(CodecKind.BASE64, string),
        "x": TableEntry(CodecKind.NULL, ElementKind.NONE),
    }
    return table


DIRECTIVE_TABLE: Mapping[str, TableEntry] = MappingProxyType(_entries())

NOOP_ENTRY = TableEntry(CodecKind.NOOP, ElementKind.NONE)

# Directives the ``_ ! < >`` modifiers may follow
MODIFIABLE = frozenset("sSiIlLqQ")

# Native-size aliases and their resolution per native int width
INT_ALIASES: Mapping[str, Mapping[int, str]] = MappingProxyType(
    {
        "I": MappingProxyType({2: "S", 4: "L", 8: "Q"}),
        "i": MappingProxyType({2: "s", 4: "l", 8: "q"}),
    }
)

_COUNT_IS_WIDTH = frozenset({CodecKind.STRING, CodecKind.HEX, CodecKind.BASE64})


@dataclass(frozen=True)
class Directive:
    """One parsed directive.

    Attributes:
        char: Directive character as written in the template (before aliasing)
        kind: Codec that handles the directive
        element: Kind of value consumed on pack
        width: Fixed byte width (0 if variable)
        count: Explicit count, or None for ``*`` (consume all)
        flags: Flag set after modifiers are applied
        little_endian: Resolved byte order
    """

    char: str
    kind: CodecKind
    element: ElementKind
    width: int
    count: Optional[int]
    flags: Flag
    little_endian: bool

    @property
    def consume_all(self) -> bool:
        return self.count is None

    @property
    def signed(self) -> bool:
        return bool(self.flags & Flag.SIGNED)

    @property
    def count_is_width(self) -> bool:
        """True when the count sizes one value instead of repeating it."""
        return self.kind in _COUNT_IS_WIDTH

    @property
    def byte_order(self) -> str:
        return "little" if self.little_endian else "big"

    @property
    def byte_size(self) -> Optional[int]:
        """Packed size in bytes, or None when it depends on the values."""
        kind = self.kind
        if kind is CodecKind.NOOP:
            return 0
        if kind in (CodecKind.UTF8, CodecKind.BASE64) or self.count is None:
            return None
        if kind is CodecKind.HEX:
            return (self.count + 1) // 2
        if kind in (CodecKind.STRING, CodecKind.NULL):
            return self.count
        return self.width * self.count

    def __str__(self) -> str:
        return self.char + ("*" if self.count is None else str(self.count))
