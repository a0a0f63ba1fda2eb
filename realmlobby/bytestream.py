"""Little-endian byte buffer used for lobby messages."""

from __future__ import annotations

import struct

from .crypt import decrypt_symmetric, encrypt_symmetric
from .utility import round_up


def _text_bytes(text: str | bytes) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    return bytes(text)


def _utf16_units(text: str) -> bytes:
    return text.encode("utf-16-le", "surrogatepass")


def _from_utf16(data: bytes) -> str:
    return data.decode("utf-16-le", "surrogatepass")


class ByteBuffer:
    """Growable buffer with a read cursor; writes always append at the end."""

    def __init__(self, data: bytes | bytearray | str | int | None = None) -> None:
        if data is None:
            self._data = bytearray()
        elif isinstance(data, int):
            self._data = bytearray(data)
        elif isinstance(data, str):
            self._data = bytearray(data.encode("utf-8"))
        else:
            self._data = bytearray(data)
        self._position = 0

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    @property
    def buffer(self) -> bytes:
        """A copy of the whole buffer."""
        return bytes(self._data)

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, where: int) -> None:
        if where < 0:
            raise ValueError("position cannot be negative")
        self._position = min(where, len(self._data))

    def resize(self, size: int) -> None:
        """Truncate or zero-extend the buffer to size bytes."""
        if size < len(self._data):
            del self._data[size:]
        else:
            self._data.extend(bytes(size - len(self._data)))

    def forward(self, length: int) -> None:
        """Advance the cursor, stopping at the end of the buffer."""
        self._position = min(self._position + length, len(self._data))

    # -- raw access -------------------------------------------------------

    def write_bytes(self, data: bytes | bytearray) -> None:
        data = bytes(data)
        self._data.extend(data)
        self._position += len(data)

    def read_bytes(self, length: int) -> bytes:
        end = self._position + length
        if length < 0 or end > len(self._data):
            raise EOFError("read_bytes: Attempt to read past end of buffer")
        chunk = bytes(self._data[self._position:end])
        self._position = end
        return chunk

    def _read_scalar(self, size: int) -> bytes | None:
        # A read at or beyond the end yields None (the value 0) and leaves the cursor.
        if self._position >= len(self._data):
            return None
        return self.read_bytes(size)

    def _write_int(self, value: int, size: int) -> None:
        self.write_bytes((value & ((1 << (8 * size)) - 1)).to_bytes(size, "little"))

    def _read_int(self, size: int, signed: bool) -> int:
        chunk = self._read_scalar(size)
        if chunk is None:
            return 0
        return int.from_bytes(chunk, "little", signed=signed)

    # -- scalars ----------------------------------------------------------

    def write_u8(self, value: int) -> None:
        self._write_int(value, 1)

    def write_u16(self, value: int) -> None:
        self._write_int(value, 2)

    def write_u32(self, value: int) -> None:
        self._write_int(value, 4)

    def write_i8(self, value: int) -> None:
        self._write_int(value, 1)

    def write_i16(self, value: int) -> None:
        self._write_int(value, 2)

    def write_i32(self, value: int) -> None:
        self._write_int(value, 4)

    def write_f32(self, value: float) -> None:
        self.write_bytes(struct.pack("<f", value))

    def read_u8(self) -> int:
        return self._read_int(1, False)

    def read_u16(self) -> int:
        return self._read_int(2, False)

    def read_u32(self) -> int:
        return self._read_int(4, False)

    def read_i8(self) -> int:
        return self._read_int(1, True)

    def read_i16(self) -> int:
        return self._read_int(2, True)

    def read_i32(self) -> int:
        return self._read_int(4, True)

    def read_f32(self) -> float:
        chunk = self._read_scalar(4)
        if chunk is None:
            return 0.0
        return struct.unpack("<f", chunk)[0]

    # -- strings ----------------------------------------------------------

    def write_utf8(self, text: str | bytes, length: int | None = None) -> None:
        """Write a u32 length followed by the bytes, padded or cut to length if given."""
        raw = _text_bytes(text)
        if length is None:
            self.write_u32(len(raw))
            self.write_bytes(raw)
            return
        self.write_u32(length)
        if length > len(raw):
            self.write_bytes(raw + bytes(length - len(raw)))
        else:
            self.write_bytes(raw[:length])

    def write_utf16(self, text: str, length: int | None = None) -> None:
        """Write a u32 code-unit count followed by UTF-16LE units; length is ignored."""
        units = _utf16_units(text)
        self.write_u32(len(units) // 2)
        self.write_bytes(units)

    def write_sz_utf8(self, text: str | bytes, length: int | None = None) -> None:
        """Write null-terminated bytes, or bytes zero-padded to a fixed length."""
        raw = _text_bytes(text)
        if length is None:
            self.write_bytes(raw + b"\x00")
            return
        if len(raw) > length:
            raise ValueError("write_sz_utf8: string longer than the fixed length")
        self.write_bytes(raw + bytes(length - len(raw)))

    def write_sz_utf16(self, text: str, length: int | None = None) -> None:
        """Write UTF-16LE units, null-terminated or zero-padded to length bytes."""
        units = _utf16_units(text)
        self.write_bytes(units)
        if length is None:
            self.write_u16(0)
        elif len(units) < length:
            self.write_bytes(bytes(length - len(units)))

    def write_encrypted_utf8(self, text: str | bytes) -> None:
        raw = _text_bytes(text)
        encrypted = encrypt_symmetric(raw)
        self.write_u32(len(encrypted) + 4)
        self.write_u32(len(raw))
        self.write_bytes(encrypted)

    def write_encrypted_utf16(self, text: str) -> None:
        units = _utf16_units(text)
        encrypted = encrypt_symmetric(units)
        # Block length counts 2-byte words and includes the 4-byte decrypted length.
        self.write_u32((len(encrypted) + 4) // 2)
        self.write_u32(len(units))
        self.write_bytes(encrypted)

    def read_utf8(self, length: int | None = None) -> str:
        if length is None:
            length = self.read_u32()
        if self._position + length > len(self._data):
            raise EOFError("read_utf8: Attempt to read past end of buffer")
        return self.read_bytes(length).decode("utf-8", "replace")

    def read_utf16(self, length: int | None = None) -> str:
        if length is None:
            length = self.read_u32()
        if self._position + 2 * length > len(self._data):
            raise EOFError("read_utf16: Attempt to read past end of buffer")
        return _from_utf16(self.read_bytes(2 * length))

    def read_sz_utf8(self) -> str:
        end = self._data.find(0, self._position)
        if end < 0:
            raise EOFError("read_sz_utf8: missing terminator")
        value = bytes(self._data[self._position:end])
        self._position = end + 1
        return value.decode("utf-8", "replace")

    def read_sz_utf16(self) -> str:
        data = self._data
        end = next(
            (
                i
                for i in range(self._position, len(data) - 1, 2)
                if data[i] == 0 and data[i + 1] == 0
            ),
            None,
        )
        if end is None:
            raise EOFError("read_sz_utf16: missing terminator")
        value = bytes(data[self._position:end])
        self._position = end + 2
        return _from_utf16(value)

    def _read_encrypted_block(self, has_block_length: bool) -> tuple[int, bytes]:
        if has_block_length:
            block_length = self.read_u32() * 2
            decrypted_length = self.read_u32()
            encrypted_length = block_length - 4
        else:
            decrypted_length = self.read_u32()
            encrypted_length = round_up(decrypted_length, 16)
        if encrypted_length < 0:
            raise EOFError("encrypted block length is invalid")
        return decrypted_length, self.read_bytes(encrypted_length)

    def read_encrypted_utf8(self, has_block_length: bool = True) -> str:
        """Read an encrypted narrow string; the whole decrypted block is returned."""
        decrypted_length, encrypted = self._read_encrypted_block(has_block_length)
        if decrypted_length == 0:
            return ""
        return decrypt_symmetric(encrypted).decode("utf-8", "replace")

    def read_encrypted_utf16(self, has_block_length: bool = True) -> str:
        """Read an encrypted UTF-16 string of the stored decrypted byte length."""
        decrypted_length, encrypted = self._read_encrypted_block(has_block_length)
        if decrypted_length == 0:
            return ""
        decrypted = decrypt_symmetric(encrypted)
        return _from_utf16(decrypted[: decrypted_length - decrypted_length % 2])

    # -- encrypted raw bytes ----------------------------------------------

    def write_encrypted_bytes(self, data: bytes | bytearray) -> None:
        data = bytes(data)
        encrypted = encrypt_symmetric(data)
        self.write_u32(len(encrypted) + 4)
        self.write_u32(len(data))
        self.write_bytes(encrypted)

    def read_encrypted_bytes(self, length: int) -> bytes:
        return decrypt_symmetric(self.read_bytes(length))