import struct

import pytest

from realmlobby.reader import BufferReader


def test_read_defaults_to_little_endian():
    reader = BufferReader(struct.pack("<iH", -5, 513))
    assert reader.read("i") == -5
    assert reader.read("H") == 513
    assert reader.eof()


def test_read_honours_explicit_byte_order():
    reader = BufferReader(struct.pack(">I", 1234))
    assert reader.read(">I") == 1234


def test_read_multi_field_returns_tuple():
    reader = BufferReader(struct.pack("<ff", 1.5, -2.0))
    assert reader.read("ff") == (1.5, -2.0)


def test_read_out_of_bounds_keeps_position():
    reader = BufferReader(b"\x01\x02")
    with pytest.raises(EOFError):
        reader.read("I")
    assert reader.tell() == 0
    assert reader.read("H") == struct.unpack("<H", b"\x01\x02")[0]


def test_peek_does_not_advance():
    reader = BufferReader(struct.pack("<I", 99))
    assert reader.peek("I") == 99
    assert reader.tell() == 0
    assert reader.read("I") == 99


def test_read_array_and_remaining():
    values = [3, 1, 4, 1, 5]
    reader = BufferReader(struct.pack("<5i", *values) + b"xy")
    assert reader.read_array("i", 5) == values
    assert reader.remaining() == 2
    assert reader.read_bytes(2) == b"xy"


def test_read_string_and_skip():
    reader = BufferReader(b"name\x00\x00rest")
    reader.skip(0)
    assert reader.read_string(6) == "name\x00\x00"
    reader.skip(2)
    assert reader.read_string(2) == "st"
    with pytest.raises(EOFError):
        reader.skip(1)


def test_read_bytes_out_of_bounds():
    reader = BufferReader(b"abc")
    with pytest.raises(EOFError):
        reader.read_bytes(4)
    assert reader.remaining() == 3