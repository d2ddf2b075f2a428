"""Property-based tests for the COBS codec."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from cobsbuf import (
    buffer_size,
    encode_into,
    decode_into,
    decode_in_place,
    encode,
    decode,
    InsufficientBuffer,
)

# long non-zero runs exercise the 254-byte block boundary
payloads = st.one_of(
    st.binary(max_size=1200),
    st.lists(st.integers(min_value=1, max_value=255), min_size=250, max_size=800).map(bytes),
    st.lists(st.sampled_from([0x00, 0x01, 0xFF]), max_size=600).map(bytes),
)


@given(data=payloads, delimiter=st.booleans())
@settings(max_examples=200)
def test_round_trip(data, delimiter):
    if not data and not delimiter:
        return  # a lone 0x01 is below the decoder's two-byte minimum
    encoded = encode(data, delimiter)
    assert decode(encoded) == data

    buf = bytearray(encoded)
    n = decode_in_place(buf)
    assert bytes(buf[:n]) == data


@given(data=payloads)
def test_no_sentinel_in_encoding(data):
    assert 0x00 not in encode(data, False)


@given(data=payloads)
def test_only_delimiter_is_final_byte(data):
    encoded = encode(data, True)
    assert encoded.index(0x00) == len(encoded) - 1


@given(data=payloads, delimiter=st.booleans())
def test_size_bound(data, delimiter):
    assert len(encode(data, delimiter)) <= buffer_size(len(data), delimiter)


@given(data=payloads, delimiter=st.booleans())
def test_one_byte_short_buffer_rejected(data, delimiter):
    size = buffer_size(len(data), delimiter)
    out = bytearray(b"\xaa" * (size - 1))
    with pytest.raises(InsufficientBuffer):
        encode_into(data, out, delimiter)
    assert out == b"\xaa" * (size - 1)


@given(data=st.binary(min_size=2, max_size=1200))
def test_arbitrary_input_never_overruns(data):
    out = bytearray(len(data) - 1)
    n = decode_into(data, out)
    assert 0 <= n <= len(data) - 1


@given(data=st.binary(min_size=2, max_size=1200))
def test_in_place_matches_separate_buffer(data):
    out = bytearray(len(data) - 1)
    n = decode_into(data, out)

    buf = bytearray(data)
    m = decode_in_place(buf)
    assert m == n
    assert buf[:m] == out[:n]
