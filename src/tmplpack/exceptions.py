"""Exception hierarchy for tmplpack.

All exceptions inherit from TmplpackError so callers can catch any
tmplpack-specific failure in one place. The core codec errors also derive
from the matching builtin (ValueError, TypeError, RuntimeError) so code that
only knows the builtins keeps working.
"""

from __future__ import annotations


class TmplpackError(Exception):
    """Base exception for all tmplpack errors."""

    pass


class ArgumentError(TmplpackError, ValueError):
    """Raised when the template or the input bytes are malformed.

    Examples:
        - Malformed or truncated UTF-8 sequence
        - Modifier (``_ ! < >``) after a directive that is not sSiIlLqQ
        - ``x`` skipping past the end of the input on unpack
    """

    pass


class PackRangeError(TmplpackError, ValueError):
    """Raised when a value is outside the range a directive can represent.

    Examples:
        - Negative or overflowed buffer length
        - Codepoint out of range for ``U``
        - Decoded integer wider than the configured native width
    """

    pass


class PackTypeError(TmplpackError, TypeError):
    """Raised when an input value cannot be converted for its directive."""

    pass


class PackRuntimeError(TmplpackError, RuntimeError):
    """Raised on unsupported host configuration or internal inconsistency.

    Examples:
        - Native int width other than 2, 4 or 8 bytes when resolving ``I``/``i``
        - Template count too large
    """

    pass


class SchemaError(TmplpackError):
    """Raised when a packed message schema is invalid.

    Examples:
        - Field without a directive
        - Directive that does not yield exactly one value
    """

    pass


class EncodeError(TmplpackError):
    """Raised when encoding a packed message fails."""

    pass


class DecodeError(TmplpackError):
    """Raised when decoding a packed message fails.

    Examples:
        - Truncated data (a field decoded to no value)
        - Decoded value rejected by field validation
    """

    pass
