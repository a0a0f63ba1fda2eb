"""Zero-run-length compression used by character saves."""

from __future__ import annotations

_MAX_RUN = 255


def decompress(data: bytes) -> bytes:
    """Expand each 0x00 followed by a count byte into 1 + count zeros."""
    output = bytearray()
    stream = iter(bytes(data))
    for byte in stream:
        output.append(byte)
        if byte == 0:
            count = next(stream, None)
            if count is None:
                break
            output.extend(bytes(count))
    return bytes(output)


def compress(data: bytes) -> bytes:
    """Replace runs of zeros with 0x00 and the number of extra zeros (at most 255)."""
    data = bytes(data)
    output = bytearray()
    i = 0
    size = len(data)
    while i < size:
        if data[i] != 0:
            output.append(data[i])
            i += 1
            continue
        i += 1
        extra = 0
        while i < size and data[i] == 0 and extra < _MAX_RUN:
            i += 1
            extra += 1
        output += bytes((0, extra))
    return bytes(output)