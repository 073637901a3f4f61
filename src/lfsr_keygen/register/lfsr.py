# src/lfsr_keygen/register/lfsr.py
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union

from lfsr_keygen.errors import InvalidConfig, InvalidSymbol
from lfsr_keygen.utils.bitops import bits_to_str, fingerprint, is_index, parse_bits

MIN_WIDTH = 2


class LFSR:
    """
    Fibonacci (SISO) linear feedback shift register.

    Index 0 is the input end, index m-1 the output end. Each shift():
      feedback = XOR of register[t] for t in taps   (pre-shift state)
      output   = register[m-1]
      register shifts one place toward the output end
      register[0] = feedback

    This is NOT crypto.
    """

    def __init__(self, seed: Union[str, Sequence[int]], taps: Iterable[int]) -> None:
        try:
            register = parse_bits(seed)
        except InvalidSymbol as e:
            raise InvalidConfig(f"seed: {e}") from e

        m = len(register)
        if m < MIN_WIDTH:
            raise InvalidConfig(f"seed must be at least {MIN_WIDTH} bits, got {m}")

        tap_list: List[int] = []
        for t in taps:
            if isinstance(t, bool) or not is_index(t):
                raise InvalidConfig(f"tap index must be int, got {t!r}")
            if not (0 <= t < m):
                raise InvalidConfig(f"tap index {t} out of range [0, {m - 1}]")
            tap_list.append(int(t))

        self._register = register
        self._taps: Tuple[int, ...] = tuple(tap_list)
        self._m = m

    # ----------------------------
    # Observation
    # ----------------------------

    @property
    def width(self) -> int:
        return self._m

    @property
    def taps(self) -> Tuple[int, ...]:
        return self._taps

    @property
    def register(self) -> Tuple[int, ...]:
        """Read-only snapshot of the current state."""
        return tuple(self._register)

    def state_str(self) -> str:
        return bits_to_str(self._register)

    def fingerprint(self) -> int:
        return fingerprint(self._register)

    def feedback(self) -> int:
        """Bit the next shift() will inject at index 0. Does not mutate."""
        fb = 0
        reg = self._register
        for t in self._taps:
            fb ^= reg[t]
        return fb

    # ----------------------------
    # Clocking
    # ----------------------------

    def shift(self) -> int:
        reg = self._register
        fb = self.feedback()
        output = reg[-1]
        reg[1:] = reg[:-1]
        reg[0] = fb
        return output

    def clock(self, n: int) -> List[int]:
        if n < 0:
            raise ValueError("n must be >= 0")
        return [self.shift() for _ in range(n)]

    def copy(self) -> "LFSR":
        return LFSR(self._register, self._taps)

    def __repr__(self) -> str:
        return f"LFSR(seed={self.state_str()!r}, taps={list(self._taps)!r})"
