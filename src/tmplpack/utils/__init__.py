"""Utility functions for tmplpack.

This module provides packed size calculation.
"""

from __future__ import annotations

from .sizing import calcsize, directive_size, directive_sizes, encoded_size, field_sizes

__all__ = [
    "calcsize",
    "directive_size",
    "directive_sizes",
    "encoded_size",
    "field_sizes",
]
