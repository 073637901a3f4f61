from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lfsr_keygen.cipher.modules._common import keystream_bits, xor_cyclic
from lfsr_keygen.errors import InvalidSymbol
from lfsr_keygen.utils.bitops import as_bit_array, bits_to_str


@dataclass(frozen=True)
class Config:
    """
    Bit-string XOR: message and keystream are '0'/'1' strings.

    allow_empty: accept an empty message (returns ""). Off by default,
    a message must match [01]+.
    """
    allow_empty: bool = False


def tx(message: str, *, keystream: Any, cfg: Any) -> str:
    return _xor_bitstring(message, keystream, cfg)


def rx(data: str, *, keystream: Any, cfg: Any) -> str:
    return _xor_bitstring(data, keystream, cfg)


def _xor_bitstring(message: str, keystream: Any, cfg: Any) -> str:
    if not isinstance(message, str):
        raise TypeError("binary message must be a '0'/'1' string")

    ks = keystream_bits(keystream)
    if not message and not getattr(cfg, "allow_empty", False):
        raise InvalidSymbol("binary message must contain at least one 0 or 1")

    bits = as_bit_array(message)
    return bits_to_str(xor_cyclic(bits, ks).tolist())
