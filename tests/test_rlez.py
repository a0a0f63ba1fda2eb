from hypothesis import given, strategies as st

from realmlobby.rlez import compress, decompress


def test_compress_pinned():
    assert compress(b"\x01\x00\x00\x00\x02") == b"\x01\x00\x02\x02"


def test_decompress_inverse_of_pinned():
    assert decompress(b"\x01\x00\x02\x02") == b"\x01\x00\x00\x00\x02"


def test_trailing_zero_without_count():
    assert decompress(b"\x05\x00") == b"\x05\x00"


def test_long_zero_run_is_split():
    data = bytes(300)
    packed = compress(data)
    assert len(packed) == 4
    assert packed[0] == 0 and packed[2] == 0
    assert decompress(packed) == data


def test_empty():
    assert compress(b"") == b""
    assert decompress(b"") == b""


@given(st.binary(max_size=700))
def test_round_trip(data):
    assert decompress(compress(data)) == data


@given(st.binary(max_size=300).filter(lambda b: 0 not in b))
def test_no_zeros_is_unchanged(data):
    assert compress(data) == data
    assert decompress(data) == data