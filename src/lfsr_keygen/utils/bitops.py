# src/lfsr_keygen/utils/bitops.py
from __future__ import annotations

from typing import Iterable, List, Sequence, Union

import numpy as np

from lfsr_keygen.errors import InvalidSymbol

BitsLike = Union[str, Sequence[int], np.ndarray]


def parse_bits(bits: BitsLike) -> List[int]:
    """
    Accept a '0'/'1' string, a sequence of 0/1 ints or a uint8 array.
    Returns a fresh list of ints. Raises InvalidSymbol on anything else.
    """
    if isinstance(bits, str):
        out: List[int] = []
        for i, ch in enumerate(bits):
            if ch == "0":
                out.append(0)
            elif ch == "1":
                out.append(1)
            else:
                raise InvalidSymbol(f"invalid bit symbol {ch!r} at position {i}")
        return out

    if isinstance(bits, (bytes, bytearray)):
        raise TypeError("bits must be a '0'/'1' string or a sequence of ints, not bytes")

    out = []
    for i, b in enumerate(bits):
        # bool is an int; floats are rejected rather than truncated
        if not is_index(b) or b not in (0, 1):
            raise InvalidSymbol(f"invalid bit value {b!r} at position {i}")
        out.append(int(b))
    return out


def is_index(value) -> bool:
    """True for Python and numpy integers (bool included); floats are not indices."""
    return isinstance(value, (int, np.integer))


def as_bit_array(bits: BitsLike) -> np.ndarray:
    """Same as parse_bits(), but returns a flat uint8 ndarray."""
    if isinstance(bits, np.ndarray):
        arr = np.asarray(bits).reshape(-1)
        if arr.dtype.kind not in "biu":
            raise InvalidSymbol(f"bit array must have an integer dtype, got {arr.dtype}")
        if arr.size and not np.isin(arr, (0, 1)).all():
            raise InvalidSymbol("bit array must contain only 0 and 1")
        return arr.astype(np.uint8)
    return np.asarray(parse_bits(bits), dtype=np.uint8)


def bits_to_str(bits: Iterable[int]) -> str:
    return "".join("1" if b & 1 else "0" for b in bits)


def fingerprint(bits: Sequence[int]) -> int:
    """
    Canonical hashable form of a register state: the bits packed into an
    int of width len(bits), index 0 as the most significant bit.
    """
    v = 0
    for b in bits:
        v = (v << 1) | (b & 1)
    return v


def unpack_bits_msb(data: bytes) -> np.ndarray:
    if not data:
        return np.zeros((0,), dtype=np.uint8)
    return np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8))


def pack_bits_msb(bits: np.ndarray) -> bytes:
    bits = np.asarray(bits, dtype=np.uint8).reshape(-1)
    if bits.size % 8 != 0:
        raise ValueError(f"Bit length must be multiple of 8, got {bits.size}")
    return np.packbits(bits).tobytes()
