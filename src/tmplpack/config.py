"""Codec configuration.

This module holds the host-dependent parameters the template parser and the
unpack engine consult: the native byte order, the native ``int``/``long``
widths used by ``I``/``i`` and the ``_``/``!`` modifiers, and the optional
native integer width bound applied to decoded integers.
"""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass
from typing import Optional

# Resolved once at import, read-only afterwards
NATIVE_BYTE_ORDER: str = sys.byteorder
NATIVE_SHORT_SIZE: int = struct.calcsize("h")
NATIVE_INT_SIZE: int = struct.calcsize("i")
NATIVE_LONG_SIZE: int = struct.calcsize("l")


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for the pack and unpack engines.

    Attributes:
        byte_order: Byte order used when a directive has no explicit ``<``/``>``
            and no fixed order of its own ("little" or "big").
            Defaults to the host byte order.

        native_int_size: Width in bytes of the native ``int`` (default: host).
            ``I``/``i`` resolve to ``L``/``l`` for 4, ``Q``/``q`` for 8 and
            ``S``/``s`` for 2. Any other width fails when such a directive
            is parsed.

        native_long_size: Width in bytes of the native ``long`` selected by
            ``l_``/``L_`` (default: host).

        max_native_bits: Bit width of the host integer type decoded integers
            must fit in, or None for unbounded (default). With 32, for
            example, unpacking ``L`` of 0xFFFFFFFF raises PackRangeError.

    Examples:
        ```python
        from tmplpack import CodecConfig, pack, unpack

        # Big-endian host
        config = CodecConfig(byte_order="big")
        pack([1], "S", config=config)  # b"\\x00\\x01"

        # Emulate a 32-bit signed native integer
        config = CodecConfig(max_native_bits=32)
        unpack(b"\\xff\\xff\\xff\\xff", "L", config=config)  # raises PackRangeError
        ```
    """

    byte_order: str = NATIVE_BYTE_ORDER
    native_int_size: int = NATIVE_INT_SIZE
    native_long_size: int = NATIVE_LONG_SIZE
    max_native_bits: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.byte_order not in ("little", "big"):
            raise ValueError(f"byte_order must be 'little' or 'big', got {self.byte_order!r}")

        if self.native_int_size <= 0:
            raise ValueError(f"native_int_size must be > 0, got {self.native_int_size}")

        if self.native_long_size <= 0:
            raise ValueError(f"native_long_size must be > 0, got {self.native_long_size}")

        if self.max_native_bits is not None and self.max_native_bits < 2:
            raise ValueError(f"max_native_bits must be >= 2 or None, got {self.max_native_bits}")

    @property
    def little_endian(self) -> bool:
        """Whether the default byte order is little-endian."""
        return self.byte_order == "little"


DEFAULT_CONFIG = CodecConfig()
