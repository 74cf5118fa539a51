"""Template parsing.

A template is a sequence of groups ``directive [count] [modifier...]``. The
parser reads one group at a time so errors surface at the directive that
caused them, in the same order the engines consume input.
"""

from __future__ import annotations

import sys
from typing import Iterator, Optional, Union

from ..config import DEFAULT_CONFIG, NATIVE_SHORT_SIZE, CodecConfig
from ..exceptions import ArgumentError, PackRuntimeError, PackTypeError
from .directives import (
    DIRECTIVE_TABLE,
    INT_ALIASES,
    MODIFIABLE,
    NOOP_ENTRY,
    CodecKind,
    Directive,
    Flag,
)

TemplateLike = Union[str, bytes, bytearray]

_MODIFIER_FLAGS = {
    "_": Flag.NATIVE_SIZE,
    "!": Flag.NATIVE_SIZE,
    "<": Flag.LITTLE,
    ">": Flag.BIG,
}


class Template:
    """Cursor over a template string.

    Example:
        >>> template = Template("n2 a4 C*")
        >>> [str(d) for d in template]
        ['n2', 'a4', 'C*']
    """

    def __init__(self, text: TemplateLike, config: Optional[CodecConfig] = None) -> None:
        """Initialize a template cursor.

        Args:
            text: Template text (str, or ASCII bytes)
            config: Codec configuration for alias and byte order resolution

        Raises:
            PackTypeError: If text is not a string
        """
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("latin-1")
        if not isinstance(text, str):
            raise PackTypeError(f"can't convert {type(text).__name__} into String")

        self.text = text
        self.config = config or DEFAULT_CONFIG
        self._offset = 0

    def __iter__(self) -> Iterator[Directive]:
        while self.has_next():
            yield self.next_directive()

    @property
    def offset(self) -> int:
        return self._offset

    def has_next(self) -> bool:
        return self._offset < len(self.text)

    def next_directive(self) -> Directive:
        """Read the next directive group.

        Returns:
            Parsed directive. Unknown characters yield a NOOP directive.

        Raises:
            ArgumentError: If a modifier follows a directive that takes none
            PackRuntimeError: If an alias cannot be resolved or the count is too big
            IndexError: If the template is exhausted
        """
        if not self.has_next():
            raise IndexError("Attempted to read past end of template")

        text = self.text
        char = text[self._offset]
        self._offset += 1

        resolved = self._resolve_alias(char)
        entry = DIRECTIVE_TABLE.get(resolved, NOOP_ENTRY)
        flags = entry.flags
        count: Optional[int] = 1

        # Suffix: count and modifiers, in any order
        while self._offset < len(text):
            ch = text[self._offset]
            self._offset += 1
            if "0" <= ch <= "9":
                count = self._read_count(ch)
            elif ch == "*":
                count = None
            elif ch in _MODIFIER_FLAGS:
                if char not in MODIFIABLE:
                    raise ArgumentError(f"'{ch}' allowed only after types sSiIlLqQ")
                flags |= _MODIFIER_FLAGS[ch]
            else:
                self._offset -= 1
                break

        width = entry.width
        if flags & Flag.NATIVE_SIZE:
            width = self._native_width(char, width)

        little_endian = bool(flags & Flag.LITTLE) or (
            not flags & Flag.BIG and self.config.little_endian
        )

        return Directive(
            char=char,
            kind=entry.kind,
            element=entry.element,
            width=width,
            count=count,
            flags=flags,
            little_endian=little_endian,
        )

    def _read_count(self, first: str) -> int:
        text = self.text
        count = int(first)
        while self._offset < len(text) and "0" <= text[self._offset] <= "9":
            count = count * 10 + int(text[self._offset])
            self._offset += 1
            if count > sys.maxsize:
                raise PackRuntimeError("too big template length")
        return count

    def _resolve_alias(self, char: str) -> str:
        aliases = INT_ALIASES.get(char)
        if aliases is None:
            return char

        size = self.config.native_int_size
        if size not in aliases:
            raise PackRuntimeError(f"tmplpack does not support sizeof(int) == {size}")
        return aliases[size]

    def _native_width(self, char: str, width: int) -> int:
        family = char.lower()
        if family == "s":
            return NATIVE_SHORT_SIZE
        if family == "i":
            return self.config.native_int_size
        if family == "l":
            return self.config.native_long_size
        return width


def iter_directives(
    template: TemplateLike, config: Optional[CodecConfig] = None
) -> Iterator[Directive]:
    """Iterate over the directives of a template.

    Args:
        template: Template text
        config: Codec configuration (default: host configuration)

    Returns:
        Iterator of parsed directives, NOOP directives included
    """
    return iter(Template(template, config))


def parse_template(
    template: TemplateLike, config: Optional[CodecConfig] = None
) -> list[Directive]:
    """Parse a whole template into a list of directives.

    NOOP directives (unknown characters, whitespace) are dropped.
    """
    return [d for d in Template(template, config) if d.kind is not CodecKind.NOOP]
