"""Field helpers that attach a directive to a model field.

Each helper is a thin wrapper around Pydantic's Field() that stores the
directive in ``json_schema_extra`` where MessageSchema finds it.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

_STRING_DIRECTIVES = ("A", "a", "Z")


def _with_directive(directive: str, kwargs: dict[str, Any]) -> dict[str, Any]:
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra["directive"] = directive
    kwargs["json_schema_extra"] = extra
    return kwargs


def Packed(directive: str, **kwargs: Any) -> FieldInfo:
    """Create a field packed with an arbitrary directive.

    Args:
        directive: Directive group, e.g. ``"n"``, ``"E"``, ``"H8"``
        **kwargs: Additional Field() arguments

    Example:
        >>> class Message(PackedMessage):
        ...     digest: str = Packed("H16")
    """
    return cast(FieldInfo, Field(**_with_directive(directive, kwargs)))


def PackedInt(
    directive: str = "N", *, ge: int | None = None, le: int | None = None, **kwargs: Any
) -> FieldInfo:
    """Create an integer field.

    Args:
        directive: Integer directive (``C c S s L l Q q n N v V U``, default ``N``)
        ge: Minimum value (inclusive)
        le: Maximum value (inclusive)
        **kwargs: Additional Field() arguments

    Example:
        >>> class Message(PackedMessage):
        ...     sequence: int = PackedInt("n", ge=0)
    """
    return cast(FieldInfo, Field(ge=ge, le=le, **_with_directive(directive, kwargs)))


def PackedFloat(directive: str = "G", **kwargs: Any) -> FieldInfo:
    """Create a float field (``D d F f E e G g``, default big-endian double ``G``)."""
    return cast(FieldInfo, Field(**_with_directive(directive, kwargs)))


def PackedBytes(length: int, directive: str = "a", **kwargs: Any) -> FieldInfo:
    """Create a fixed-width bytes field.

    Values longer than ``length`` are rejected by validation; shorter ones are
    padded when packed.

    Args:
        length: Field width in bytes
        directive: ``A``, ``a`` (default) or ``Z``
        **kwargs: Additional Field() arguments
    """
    if directive not in _STRING_DIRECTIVES:
        raise ValueError(f"directive must be one of {_STRING_DIRECTIVES}, got {directive!r}")
    return cast(
        FieldInfo, Field(max_length=length, **_with_directive(f"{directive}{length}", kwargs))
    )


def PackedStr(length: int, directive: str = "A", **kwargs: Any) -> FieldInfo:
    """Create a fixed-width text field, stored as UTF-8.

    Args:
        length: Field width in bytes
        directive: ``A`` (default, space padded), ``a`` or ``Z``
        **kwargs: Additional Field() arguments

    Example:
        >>> class Message(PackedMessage):
        ...     callsign: str = PackedStr(8)
    """
    if directive not in _STRING_DIRECTIVES:
        raise ValueError(f"directive must be one of {_STRING_DIRECTIVES}, got {directive!r}")
    return cast(FieldInfo, Field(**_with_directive(f"{directive}{length}", kwargs)))
