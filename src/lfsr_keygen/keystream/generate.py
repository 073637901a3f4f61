# src/lfsr_keygen/keystream/generate.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from lfsr_keygen.errors import DegenerateKeystream
from lfsr_keygen.register.lfsr import LFSR
from lfsr_keygen.utils.bitops import bits_to_str
from lfsr_keygen.utils.cancel import CancelToken, check_cancel

logger = logging.getLogger(__name__)

TRACE_HEADER = "Clock Cycle | Register State | Feedback Bit | Output Bit"


@dataclass(frozen=True)
class TraceRecord:
    """
    One clock cycle:
      cycle: 0-based index
      state: register snapshot BEFORE the shift
      feedback: bit that entered index 0 on this cycle
      output: bit shifted out of index m-1
    """
    cycle: int
    state: Tuple[int, ...]
    feedback: int
    output: int


@dataclass(frozen=True)
class KeyStreamResult:
    bits: np.ndarray
    trace: List[TraceRecord] = field(default_factory=list)
    period: int = 0            # clocks actually run
    closed: bool = False       # True if a repeated state ended generation
    degenerate: bool = False   # True if no 1 bit was produced; bits is then empty

    def __len__(self) -> int:
        return int(self.bits.size)

    def to_str(self) -> str:
        return bits_to_str(self.bits.tolist())

    def unwrap(self) -> np.ndarray:
        if self.degenerate:
            raise DegenerateKeystream("key stream consists entirely of zeros")
        return self.bits


def generate_key_stream(
    lfsr: LFSR,
    *,
    cancel: Optional[CancelToken] = None,
) -> KeyStreamResult:
    """
    Clock lfsr until a state repeats or 2^m - 1 clocks have run, whichever
    comes first. Mutates lfsr.

    An all-zero stream is reported with degenerate=True and empty bits; the
    trace is kept so the caller can show what happened.
    """
    if not isinstance(lfsr, LFSR):
        raise TypeError("lfsr must be an LFSR")

    max_len = (1 << lfsr.width) - 1
    seen: Dict[int, int] = {}
    out: List[int] = []
    trace: List[TraceRecord] = []
    closed = False

    cycle = 0
    while cycle < max_len:
        check_cancel(cancel)
        state = lfsr.fingerprint()
        if state in seen:
            closed = True
            break
        seen[state] = cycle

        snapshot = lfsr.register
        fb = lfsr.feedback()
        bit = lfsr.shift()
        out.append(bit)
        trace.append(TraceRecord(cycle=cycle, state=snapshot, feedback=fb, output=bit))
        cycle += 1

    if 1 not in out:
        logger.warning(
            "key stream consists entirely of zeros (taps %s); choose different taps or seed",
            list(lfsr.taps),
        )
        return KeyStreamResult(
            bits=np.zeros((0,), dtype=np.uint8),
            trace=trace,
            period=cycle,
            closed=closed,
            degenerate=True,
        )

    return KeyStreamResult(
        bits=np.asarray(out, dtype=np.uint8),
        trace=trace,
        period=cycle,
        closed=closed,
    )


def render_trace(trace: Sequence[TraceRecord]) -> str:
    lines = [TRACE_HEADER, "-" * 55]
    for r in trace:
        state = "[" + ", ".join(str(b) for b in r.state) + "]"
        lines.append(f"{r.cycle:11d} | {state} | {r.feedback} | {r.output}")
    return "\n".join(lines)


def chunk_key_stream(bits: str, width: int = 50) -> List[str]:
    if width <= 0:
        raise ValueError("width must be positive")
    return [bits[i:i + width] for i in range(0, len(bits), width)]
