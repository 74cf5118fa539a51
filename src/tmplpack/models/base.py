"""Base message class for packed Pydantic models.

This module provides the PackedMessage class that all packed messages should
inherit from.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class PackedMessage(BaseModel):
    """Base class for messages with a fixed binary layout.

    Each field declares the directive it is packed with, using Packed() or
    one of the typed helpers. Fields are packed in declaration order.

    Example:
        >>> from typing import ClassVar, Optional
        >>> class Header(PackedMessage):
        ...     magic: int = PackedInt("N")
        ...     version: int = PackedInt("C", ge=1, le=3)
        ...     name: str = PackedStr(8)
        ...
        ...     tmplpack_max_bytes: ClassVar[Optional[int]] = 16

    Attributes:
        tmplpack_max_bytes: Maximum packed size in bytes (optional, for validation)
    """

    model_config = ConfigDict(
        strict=False,
        validate_assignment=True,
        extra="forbid",
    )

    tmplpack_max_bytes: ClassVar[int | None] = None
