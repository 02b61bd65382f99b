"""Big-endian reader over raw class file data."""

from __future__ import annotations

import struct

_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")


class ClassFormatError(ValueError):
    """Raised when class file data is malformed."""


class ClassReader:
    """Consumes big-endian unsigned integers and byte runs from class data."""

    __slots__ = ("_data", "_pos")

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos

    def _take(self, n: int) -> bytes:
        end = self._pos + n
        if n < 0 or end > len(self._data):
            raise ClassFormatError(
                f"truncated class data: wanted {n} bytes at offset "
                f"{self._pos}, {self.remaining} left"
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def read_u8(self) -> int:
        return self._take(1)[0]

    def read_u16(self) -> int:
        return _U16.unpack(self._take(2))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self._take(4))[0]

    def read_u64(self) -> int:
        return _U64.unpack(self._take(8))[0]

    def read_u16s(self) -> list[int]:
        """Read a u2 count followed by that many u2 values."""
        count = self.read_u16()
        return [self.read_u16() for _ in range(count)]

    def read_bytes(self, n: int) -> bytes:
        return self._take(n)