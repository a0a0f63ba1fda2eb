"""Symmetric encryption of lobby payloads with the game's default key."""

from __future__ import annotations

import random

from .aes import BLOCK_SIZE, Rijndael

KEY_LENGTH = 32

# The game normally negotiates a per-user key; the lobby always uses its default.
_DEFAULT_KEY = bytes.fromhex(
    "646c666b2071732" "73b722b742069716534743975656572" "6a4b444a2077646" "16a"
)

_CIPHER = Rijndael()


def _pad(data: bytes) -> bytes:
    remainder = len(data) % BLOCK_SIZE
    if remainder:
        data += bytes(BLOCK_SIZE - remainder)
    return data


def _as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def generate_symmetric_key() -> bytes:
    """Return a fresh 32-byte key; every byte lies in 0..254."""
    return bytes(random.randrange(255) for _ in range(KEY_LENGTH))


def get_symmetric_key() -> bytes:
    """Return the default symmetric key."""
    return _DEFAULT_KEY


def encrypt_symmetric(data: bytes | bytearray | memoryview) -> bytes:
    """Zero-pad to a 16-byte multiple and encrypt with the default key."""
    return _CIPHER.encrypt_ecb(_pad(bytes(data)), _DEFAULT_KEY)


def decrypt_symmetric(data: bytes | bytearray | memoryview) -> bytes:
    """Zero-pad to a 16-byte multiple and decrypt with the default key."""
    return _CIPHER.decrypt_ecb(_pad(bytes(data)), _DEFAULT_KEY)


def encrypt_string(data: bytes | str) -> bytes:
    """Encrypt a narrow string; text is taken as UTF-8."""
    return encrypt_symmetric(_as_bytes(data))


def decrypt_string(data: bytes | str) -> bytes:
    """Decrypt a narrow string, keeping any zero padding."""
    return decrypt_symmetric(_as_bytes(data))


def encrypt_wide_string(text: str) -> bytes:
    """Encrypt text as little-endian UTF-16 code units."""
    return encrypt_symmetric(text.encode("utf-16-le", "surrogatepass"))


def decrypt_wide_string(data: bytes) -> str:
    """Decrypt UTF-16 text, stopping at the first zero code unit."""
    plain = decrypt_symmetric(data)
    end = next(
        (i for i in range(0, len(plain) - 1, 2) if plain[i] == 0 and plain[i + 1] == 0),
        len(plain) - len(plain) % 2,
    )
    return plain[:end].decode("utf-16-le", "surrogatepass")