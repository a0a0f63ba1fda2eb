"""Key/value attributes shown on a character selection slot."""

from __future__ import annotations

from .bytestream import ByteBuffer
from .utility import is_in_range

MAX_KEYS = 4


class CharacterSlotData:
    """Ordered list of (key, value) text pairs with a UTF-16 wire form."""

    def __init__(self, data: bytes | None = None) -> None:
        self.entries: list[tuple[str, str]] = []
        if data:
            self.deserialize(data)

    def deserialize(self, data: bytes) -> None:
        self.read_from(ByteBuffer(bytes(data)))

    def read_from(self, stream: ByteBuffer) -> None:
        """Read pairs from a stream; a key count outside 0..4 leaves this empty."""
        self.entries = []
        count = stream.read_i32()
        if not is_in_range(count, 0, MAX_KEYS):
            return
        keys = [stream.read_utf16() for _ in range(count)]
        stream.read_i32()  # value count, always equal to the key count
        self.entries = [(key, stream.read_utf16()) for key in keys]

    def serialize(self) -> bytes:
        stream = ByteBuffer()
        stream.write_u32(len(self.entries))
        for key, _ in self.entries:
            stream.write_utf16(key)
        stream.write_u32(len(self.entries))
        for _, value in self.entries:
            stream.write_utf16(value)
        return stream.buffer

    def is_empty(self) -> bool:
        return not self.entries

    def get_value(self, key: str) -> str:
        """Value of the first matching key, or '' if absent."""
        return next((value for k, value in self.entries if k == key), "")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharacterSlotData):
            return NotImplemented
        return self.entries == other.entries

    def __repr__(self) -> str:
        return f"CharacterSlotData({self.entries!r})"