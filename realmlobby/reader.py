"""Bounds-checked sequential reader over an immutable byte buffer."""

from __future__ import annotations

import struct
from typing import Any

_BYTE_ORDER_PREFIXES = ("<", ">", "!", "=", "@")


def _compile(fmt: str) -> struct.Struct:
    if not fmt.startswith(_BYTE_ORDER_PREFIXES):
        fmt = "<" + fmt
    return struct.Struct(fmt)


class BufferReader:
    """Read packed values from bytes; formats default to little-endian."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._offset = 0

    def _take(self, size: int, what: str) -> bytes:
        if size < 0 or self._offset + size > len(self._data):
            raise EOFError(f"BufferReader: {what} out of bounds")
        return self._data[self._offset: self._offset + size]

    def _unpack(self, fmt: str, what: str) -> tuple[Any, int]:
        packer = _compile(fmt)
        values = packer.unpack(self._take(packer.size, what))
        return (values[0] if len(values) == 1 else values), packer.size

    def read(self, fmt: str) -> Any:
        """Unpack one struct format; a single field comes back unwrapped."""
        value, size = self._unpack(fmt, "read")
        self._offset += size
        return value

    def read_bytes(self, size: int) -> bytes:
        chunk = self._take(size, "readBytes")
        self._offset += size
        return chunk

    def read_string(self, length: int) -> str:
        chunk = self._take(length, "readString")
        self._offset += length
        return chunk.decode("utf-8", "replace")

    def read_array(self, fmt: str, count: int) -> list[Any]:
        return [self.read(fmt) for _ in range(count)]

    def skip(self, count: int) -> None:
        self._take(count, "skip")
        self._offset += count

    def peek(self, fmt: str) -> Any:
        """Unpack without moving the cursor."""
        value, _ = self._unpack(fmt, "peek")
        return value

    def eof(self) -> bool:
        return self._offset >= len(self._data)

    def tell(self) -> int:
        return self._offset

    def remaining(self) -> int:
        return len(self._data) - self._offset