from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from lfsr_keygen.cipher.modules._common import keystream_bits, xor_cyclic
from lfsr_keygen.utils.bitops import pack_bits_msb, unpack_bits_msb


@dataclass(frozen=True)
class Config:
    """
    Bitwise XOR over bytes: the message is unpacked MSB-first, bit i is
    XORed with keystream[i % k], then repacked.

    This is NOT crypto.
    """


def tx(data: bytes, *, keystream: Any, cfg: Any) -> bytes:
    return _xor_packed(data, keystream)


def rx(data: bytes, *, keystream: Any, cfg: Any) -> bytes:
    return _xor_packed(data, keystream)


def _xor_packed(data: bytes, keystream: Any) -> bytes:
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("data must be bytes-like")
    ks = keystream_bits(keystream)
    bits = unpack_bits_msb(bytes(data))
    if bits.size == 0:
        return b""
    return pack_bits_msb(xor_cyclic(bits, ks).astype(np.uint8))
