from __future__ import annotations

from typing import Any

import numpy as np

from lfsr_keygen.errors import EmptyKeystream
from lfsr_keygen.utils.bitops import as_bit_array


def keystream_bits(keystream: Any) -> np.ndarray:
    """Normalize keystream to a uint8 bit array; reject k == 0."""
    if keystream is None:
        raise EmptyKeystream("key stream is empty")
    ks = as_bit_array(keystream)
    if ks.size == 0:
        raise EmptyKeystream("key stream is empty")
    return ks


def xor_cyclic(values: np.ndarray, ks: np.ndarray) -> np.ndarray:
    """
    out[i] = values[i] ^ ks[i % len(ks)]
    np.resize repeats ks to the requested length.
    """
    values = np.asarray(values, dtype=np.uint8).reshape(-1)
    if values.size == 0:
        return values.copy()
    return values ^ np.resize(ks, values.size).astype(np.uint8)
