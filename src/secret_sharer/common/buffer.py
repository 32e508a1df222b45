"""Owned, resizable byte buffer used to carry serialized shares."""

from __future__ import annotations

import struct

from ..errors import StructuralError

_UINT32 = struct.Struct("<I")


class ShareBuffer:
    """Byte container with offset based reads and writes."""

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytearray(data)

    @classmethod
    def allocate(cls, size: int) -> "ShareBuffer":
        if size < 0:
            raise StructuralError(f"Buffer size must be non-negative, got {size}.")
        return cls(bytes(size))

    @property
    def size(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShareBuffer):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"ShareBuffer(size={self.size})"

    def _check_range(self, offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > len(self._data):
            raise StructuralError(
                f"Range [{offset}, {offset + length}) outside buffer of {len(self._data)} bytes."
            )

    def write(self, offset: int, data: bytes | bytearray | memoryview) -> None:
        self._check_range(offset, len(data))
        self._data[offset : offset + len(data)] = data

    def read(self, offset: int, length: int) -> bytes:
        self._check_range(offset, length)
        return bytes(self._data[offset : offset + length])

    def resize(self, size: int) -> None:
        """Grow with zero bytes or truncate to ``size``."""
        if size < 0:
            raise StructuralError(f"Buffer size must be non-negative, got {size}.")
        if size < len(self._data):
            del self._data[size:]
        else:
            self._data.extend(bytes(size - len(self._data)))

    def write_uint32(self, offset: int, value: int) -> None:
        self.write(offset, _UINT32.pack(value))

    def read_uint32(self, offset: int) -> int:
        return _UINT32.unpack(self.read(offset, _UINT32.size))[0]


__all__ = ["ShareBuffer"]
