"""AES-256 block cipher in ECB mode."""

from __future__ import annotations

BLOCK_SIZE = 16
KEY_SIZE = 32
_NB = 4
_NK = 8
_NR = 14


def _xtime(value: int) -> int:
    value <<= 1
    if value & 0x100:
        value ^= 0x11B
    return value


def _gf_mul(a: int, b: int) -> int:
    result = 0
    while b:
        if b & 1:
            result ^= a
        a = _xtime(a)
        b >>= 1
    return result


def _rotl8(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (8 - shift))) & 0xFF


def _build_sbox() -> bytes:
    table = bytearray(256)
    for x in range(256):
        inverse = 1
        for _ in range(254):
            inverse = _gf_mul(inverse, x)
        if x == 0:
            inverse = 0
        table[x] = (
            inverse
            ^ _rotl8(inverse, 1)
            ^ _rotl8(inverse, 2)
            ^ _rotl8(inverse, 3)
            ^ _rotl8(inverse, 4)
            ^ 0x63
        )
    return bytes(table)


_SBOX = _build_sbox()
_INV_SBOX = bytes(_SBOX.index(x) for x in range(256))
_MUL = {n: bytes(_gf_mul(n, x) for x in range(256)) for n in (2, 3, 9, 11, 13, 14)}

_CMDS = ((2, 3, 1, 1), (1, 2, 3, 1), (1, 1, 2, 3), (3, 1, 1, 2))
_INV_CMDS = ((14, 11, 13, 9), (9, 14, 11, 13), (13, 9, 14, 11), (11, 13, 9, 14))

# State bytes are stored column-major: state[row + 4 * column].
_SHIFT = tuple(r + 4 * ((c + r) % _NB) for c in range(_NB) for r in range(4))
_INV_SHIFT = tuple(r + 4 * ((c - r) % _NB) for c in range(_NB) for r in range(4))


def _multiply(coefficient: int, value: int) -> int:
    return value if coefficient == 1 else _MUL[coefficient][value]


def _mix(state: list[int], matrix: tuple[tuple[int, ...], ...]) -> list[int]:
    mixed = []
    for column in range(_NB):
        col = state[4 * column: 4 * column + 4]
        for row in matrix:
            acc = 0
            for coefficient, value in zip(row, col):
                acc ^= _multiply(coefficient, value)
            mixed.append(acc)
    return mixed


def _add_round_key(state: list[int], round_key: bytes) -> list[int]:
    return [s ^ k for s, k in zip(state, round_key)]


def _expand_key(key: bytes) -> list[bytes]:
    words = [list(key[4 * i: 4 * i + 4]) for i in range(_NK)]
    rcon = 1
    for i in range(_NK, _NB * (_NR + 1)):
        temp = list(words[i - 1])
        if i % _NK == 0:
            temp = temp[1:] + temp[:1]
            temp = [_SBOX[b] for b in temp]
            temp[0] ^= rcon
            rcon = _xtime(rcon)
        elif i % _NK == 4:
            temp = [_SBOX[b] for b in temp]
        words.append([a ^ b for a, b in zip(words[i - _NK], temp)])
    flat = bytes(b for word in words for b in word)
    return [flat[16 * r: 16 * r + 16] for r in range(_NR + 1)]


def _encrypt_block(block: bytes, round_keys: list[bytes]) -> bytes:
    state = _add_round_key(list(block), round_keys[0])
    for round_key in round_keys[1:_NR]:
        state = [_SBOX[b] for b in state]
        state = [state[i] for i in _SHIFT]
        state = _mix(state, _CMDS)
        state = _add_round_key(state, round_key)
    state = [_SBOX[b] for b in state]
    state = [state[i] for i in _SHIFT]
    return bytes(_add_round_key(state, round_keys[_NR]))


def _decrypt_block(block: bytes, round_keys: list[bytes]) -> bytes:
    state = _add_round_key(list(block), round_keys[_NR])
    for round_key in reversed(round_keys[1:_NR]):
        state = [state[i] for i in _INV_SHIFT]
        state = [_INV_SBOX[b] for b in state]
        state = _add_round_key(state, round_key)
        state = _mix(state, _INV_CMDS)
    state = [state[i] for i in _INV_SHIFT]
    state = [_INV_SBOX[b] for b in state]
    return bytes(_add_round_key(state, round_keys[0]))


def _check(data: bytes, key: bytes) -> None:
    if len(data) % BLOCK_SIZE != 0:
        raise ValueError(f"Plaintext length must be divisible by {BLOCK_SIZE}")
    if len(key) != KEY_SIZE:
        raise ValueError(f"Key must be {KEY_SIZE} bytes long")


class Rijndael:
    """AES with a 256-bit key, applied block by block (ECB)."""

    def encrypt_ecb(self, data: bytes, key: bytes) -> bytes:
        """Encrypt data whose length is a multiple of 16 bytes."""
        data, key = bytes(data), bytes(key)
        _check(data, key)
        round_keys = _expand_key(key)
        return b"".join(
            _encrypt_block(data[i: i + BLOCK_SIZE], round_keys)
            for i in range(0, len(data), BLOCK_SIZE)
        )

    def decrypt_ecb(self, data: bytes, key: bytes) -> bytes:
        """Decrypt data whose length is a multiple of 16 bytes."""
        data, key = bytes(data), bytes(key)
        _check(data, key)
        round_keys = _expand_key(key)
        return b"".join(
            _decrypt_block(data[i: i + BLOCK_SIZE], round_keys)
            for i in range(0, len(data), BLOCK_SIZE)
        )