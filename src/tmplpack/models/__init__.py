"""Pydantic message modeling for tmplpack.

This module provides the PackedMessage class and field helpers for defining
messages with a fixed binary layout.
"""

from __future__ import annotations

from .base import PackedMessage
from .fields import Packed, PackedBytes, PackedFloat, PackedInt, PackedStr

__all__ = [
    "PackedMessage",
    "Packed",
    "PackedBytes",
    "PackedFloat",
    "PackedInt",
    "PackedStr",
]
