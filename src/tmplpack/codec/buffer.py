"""Byte buffers used by the pack and unpack engines.

ByteBuffer is the growable output of pack; ByteCursor walks the input of
unpack. Both are owned by a single engine call.
"""

from __future__ import annotations

import sys
from typing import Union

from ..exceptions import PackRangeError

BytesLike = Union[bytes, bytearray, memoryview]

INITIAL_CAPACITY = 128


class ByteBuffer:
    """Growable byte buffer with a write cursor.

    Capacity doubles whenever a write would exceed it; ``to_bytes`` returns
    only the written prefix.

    Example:
        >>> buffer = ByteBuffer()
        >>> buffer.write(b"\\x01\\x02")
        2
        >>> buffer.fill(0, 2)
        2
        >>> buffer.to_bytes()
        b'\\x01\\x02\\x00\\x00'
    """

    def __init__(self, capacity: int = INITIAL_CAPACITY) -> None:
        """Initialize an empty buffer.

        Args:
            capacity: Initial allocated size in bytes (must be > 0)
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {capacity}")
        self._data = bytearray(capacity)
        self._length = 0

    def ensure_capacity(self, size: int) -> bytearray:
        """Grow the storage so that at least ``size`` bytes fit.

        Args:
            size: Required total size in bytes

        Returns:
            The underlying mutable storage

        Raises:
            PackRangeError: If size is negative or not representable
        """
        if size < 0 or size > sys.maxsize:
            raise PackRangeError("negative (or overflowed) integer")

        capacity = len(self._data)
        if size > capacity:
            while size > capacity:
                capacity *= 2
            self._data.extend(bytes(capacity - len(self._data)))
        return self._data

    def write(self, data: BytesLike) -> int:
        """Append bytes at the write cursor.

        Args:
            data: Bytes to write

        Returns:
            Number of bytes written
        """
        count = len(data)
        end = self._length + count
        storage = self.ensure_capacity(end)
        storage[self._length : end] = data
        self._length = end
        return count

    def fill(self, byte: int, count: int) -> int:
        """Append ``count`` copies of ``byte``.

        Negative counts write nothing.

        Returns:
            Number of bytes written
        """
        if count <= 0:
            return 0
        end = self._length + count
        storage = self.ensure_capacity(end)
        storage[self._length : end] = bytes([byte]) * count
        self._length = end
        return count

    def __len__(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return len(self._data)

    def to_bytes(self) -> bytes:
        """Return the written bytes, truncated to the logical length."""
        return bytes(self._data[: self._length])


class ByteCursor:
    """Read cursor over an immutable byte buffer.

    Example:
        >>> cursor = ByteCursor(b"\\x01\\x02\\x03")
        >>> cursor.peek(2)
        b'\\x01\\x02'
        >>> cursor.advance(2)
        >>> cursor.remaining()
        1
    """

    def __init__(self, data: BytesLike) -> None:
        """Initialize a cursor at offset 0.

        Args:
            data: Byte buffer to read
        """
        self._data = bytes(data)
        self._position = 0

    def position(self) -> int:
        """Return the current read offset."""
        return self._position

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def peek(self, size: int = -1) -> bytes:
        """Return up to ``size`` unread bytes without advancing (all if negative)."""
        if size < 0:
            return self._data[self._position :]
        return self._data[self._position : self._position + size]

    def advance(self, count: int) -> None:
        """Move the cursor forward by ``count`` bytes.

        Raises:
            IndexError: If the cursor would move past the end of the buffer
        """
        if count < 0 or count > self.remaining():
            raise IndexError(
                f"Cannot advance {count} bytes, have {self.remaining()}"
            )
        self._position += count

    def read(self, size: int) -> bytes:
        """Read exactly ``size`` bytes.

        Raises:
            IndexError: If not enough bytes are available
        """
        if size > self.remaining():
            raise IndexError(f"Not enough bytes: need {size}, have {self.remaining()}")
        data = self.peek(size)
        self._position += size
        return data
