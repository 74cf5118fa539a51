"""tmplpack: template-driven binary packing

A Python library that converts between sequences of values and flat byte
buffers, directed by a compact template language of single-character
directives (integers, floats, UTF-8 codepoints, padded strings, hex and
base64).

Key Features:
- Fixed-width 8/16/32/64-bit integers with explicit or native byte order
- IEEE-754 single and double precision, bit-exact round trip
- Space/NUL padded and NUL-terminated strings, hex nibbles, base64
- Pydantic-based message models with a fixed binary layout

Quick Start:
    >>> from tmplpack import pack, unpack
    >>> data = pack([1, 513, b"hi"], "C n Z*")
    >>> data
    b'\\x01\\x02\\x01hi\\x00'
    >>> unpack(data, "C n Z*")
    [1, 513, b'hi']

Template grammar:
    template  := group*
    group     := directive [count] [modifier]*
    count     := digit+ | '*'
    modifier  := '_' | '!' | '<' | '>'   (only after s S i I l L q Q)
"""

from __future__ import annotations

from .codec import (
    decode,
    encode,
    iter_directives,
    pack,
    parse_template,
    unpack,
    unpack_first,
)
from .config import DEFAULT_CONFIG, NATIVE_BYTE_ORDER, CodecConfig
from .exceptions import (
    ArgumentError,
    DecodeError,
    EncodeError,
    PackRangeError,
    PackRuntimeError,
    PackTypeError,
    SchemaError,
    TmplpackError,
)
from .models import Packed, PackedBytes, PackedFloat, PackedInt, PackedMessage, PackedStr
from .utils import calcsize, encoded_size, field_sizes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "pack",
    "unpack",
    "unpack_first",
    "calcsize",
    "iter_directives",
    "parse_template",
    # Configuration
    "CodecConfig",
    "DEFAULT_CONFIG",
    "NATIVE_BYTE_ORDER",
    # Models
    "PackedMessage",
    "Packed",
    "PackedBytes",
    "PackedFloat",
    "PackedInt",
    "PackedStr",
    "encode",
    "decode",
    "encoded_size",
    "field_sizes",
    # Exceptions
    "TmplpackError",
    "ArgumentError",
    "PackRangeError",
    "PackTypeError",
    "PackRuntimeError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    # Version
    "__version__",
]
