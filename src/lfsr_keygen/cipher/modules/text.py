from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from lfsr_keygen.cipher.modules._common import keystream_bits, xor_cyclic


@dataclass(frozen=True)
class Config:
    """
    Per-symbol XOR: every message byte is XORed with ONE keystream bit,
    wrapping the keystream when the message is longer. Symmetric:
      rx(tx(x)) == x

    encoding: used when the message is given as str.
    """
    encoding: str = "utf-8"


def tx(message: Union[str, bytes], *, keystream: Any, cfg: Any) -> bytes:
    """
    Encrypt. Uniform module API: tx(message, *, keystream, cfg)
    """
    return _xor_bytes(_as_bytes(message, cfg), keystream)


def rx(data: bytes, *, keystream: Any, cfg: Any) -> bytes:
    """
    Decrypt. Identical to tx() on bytes.
    """
    return _xor_bytes(_as_bytes(data, cfg), keystream)


# ----------------------------
# Internal
# ----------------------------

def _as_bytes(message: Any, cfg: Any) -> bytes:
    if isinstance(message, str):
        encoding = getattr(cfg, "encoding", "utf-8")
        return message.encode(encoding)
    if isinstance(message, (bytes, bytearray)):
        return bytes(message)
    raise TypeError("message must be str or bytes-like")


def _xor_bytes(data: bytes, keystream: Any) -> bytes:
    ks = keystream_bits(keystream)
    arr = np.frombuffer(data, dtype=np.uint8)
    return xor_cyclic(arr, ks).tobytes()
