import numpy as np
import pytest

from lfsr_keygen.errors import InvalidSymbol
from lfsr_keygen.utils.bitops import (
    as_bit_array,
    bits_to_str,
    fingerprint,
    pack_bits_msb,
    parse_bits,
    unpack_bits_msb,
)


def test_parse_bits_from_string_and_ints():
    assert parse_bits("1001") == [1, 0, 0, 1]
    assert parse_bits((1, 0, True)) == [1, 0, 1]
    assert parse_bits("") == []


@pytest.mark.parametrize("bad", ["10201", "1 0", [0, 3], [-1], [0.9, 1], [1.0, 0.5], [1.0, 0], [None]])
def test_parse_bits_rejects_other_symbols(bad):
    with pytest.raises(InvalidSymbol):
        parse_bits(bad)


def test_parse_bits_rejects_bytes():
    with pytest.raises(TypeError):
        parse_bits(b"0101")


def test_as_bit_array():
    arr = as_bit_array("0110")
    assert arr.dtype == np.uint8
    assert arr.tolist() == [0, 1, 1, 0]
    assert as_bit_array(np.array([[1, 0], [0, 1]])).tolist() == [1, 0, 0, 1]
    with pytest.raises(InvalidSymbol):
        as_bit_array(np.array([0, 1, 2]))


def test_fingerprint_is_injective_for_fixed_width():
    m = 6
    seen = set()
    for v in range(1 << m):
        bits = [(v >> (m - 1 - i)) & 1 for i in range(m)]
        fp = fingerprint(bits)
        assert fp == v
        seen.add(fp)
    assert len(seen) == 1 << m


def test_bits_to_str():
    assert bits_to_str([1, 0, 1, 1]) == "1011"
    assert bits_to_str(np.array([0, 1], dtype=np.uint8)) == "01"


def test_pack_unpack_msb():
    data = b"\xDE\xAD\xBE\xEF"
    bits = unpack_bits_msb(data)
    assert bits[:8].tolist() == [1, 1, 0, 1, 1, 1, 1, 0]
    assert pack_bits_msb(bits) == data
    assert unpack_bits_msb(b"").size == 0
    with pytest.raises(ValueError):
        pack_bits_msb(np.ones(7, dtype=np.uint8))


def test_parse_bits_accepts_numpy_integers():
    assert parse_bits(list(np.array([1, 0, 1]))) == [1, 0, 1]
    assert all(type(b) is int for b in parse_bits(list(np.array([1, 0]))))


def test_as_bit_array_rejects_float_arrays():
    with pytest.raises(InvalidSymbol):
        as_bit_array(np.array([1.0, 0.0]))
    with pytest.raises(InvalidSymbol):
        as_bit_array([0.9, 1])
