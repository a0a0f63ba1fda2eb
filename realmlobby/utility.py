"""Small numeric, address and text helpers."""

from __future__ import annotations

import ipaddress
from typing import Any


def round_up(number: int, multiple: int) -> int:
    """Round number up to a multiple; negative values round toward zero."""
    if multiple == 0:
        return number
    remainder = abs(number) % abs(multiple)
    if remainder == 0:
        return number
    if number < 0:
        return -(abs(number) - remainder)
    return number + multiple - remainder


def round_down(number: int, multiple: int) -> int:
    """Round number down to a multiple; negative values step by the remainder."""
    if multiple == 0:
        return number
    remainder = abs(number) % abs(multiple)
    if remainder == 0:
        return number
    if number < 0:
        return -(abs(number) + remainder)
    return number - remainder


def byte_swap16(value: int) -> int:
    """Swap the two bytes of a 16-bit value."""
    value &= 0xFFFF
    return ((value << 8) | (value >> 8)) & 0xFFFF


def byte_swap32(value: int) -> int:
    """Reverse the byte order of a 32-bit value."""
    value &= 0xFFFFFFFF
    return (
        ((value << 24) & 0xFF000000)
        | ((value << 8) & 0x00FF0000)
        | ((value >> 8) & 0x0000FF00)
        | ((value >> 24) & 0x000000FF)
    )


def is_in_range(value: Any, minimum: Any, maximum: Any) -> bool:
    """True when minimum <= value <= maximum."""
    return minimum <= value <= maximum


def ip_from_addr(addr: Any) -> str:
    """Dotted IPv4 text for a socket address, packed address or integer; '' if invalid."""
    host = addr[0] if isinstance(addr, tuple) else addr
    if isinstance(host, (bytearray, memoryview)):
        host = bytes(host)
    try:
        return str(ipaddress.IPv4Address(host))
    except (ValueError, TypeError):
        return ""


def wide_to_utf8(text: str) -> bytes:
    """Encode text as UTF-8; lone surrogates become U+FFFD."""
    if not text:
        return b""
    units = text.encode("utf-16-le", "surrogatepass")
    return units.decode("utf-16-le", "replace").encode("utf-8")


def utf8_to_wide(data: bytes) -> str:
    """Decode UTF-8 bytes; invalid sequences become U+FFFD."""
    if not data:
        return ""
    return bytes(data).decode("utf-8", "replace")