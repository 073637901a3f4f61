# src/lfsr_keygen/search/taps.py
from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Set, Tuple

from lfsr_keygen.errors import InvalidConfig, NoPrimitivePolynomialFound
from lfsr_keygen.register.lfsr import LFSR, MIN_WIDTH
from lfsr_keygen.utils.cancel import CancelToken, check_cancel

logger = logging.getLogger(__name__)

# Search cost is O(2^(m-1) * 2^m) in the worst case.
MAX_SEARCH_WIDTH = 24


@dataclass(frozen=True)
class TapSearchResult:
    """
    taps: tap set to use
    verified: True if taps passed is_primitive_polynomial(), False for the fallback
    candidates_tested: number of candidates evaluated before returning
    """
    taps: Tuple[int, ...]
    verified: bool
    candidates_tested: int


def _check_width(m: int, max_width: int) -> int:
    if isinstance(m, bool) or not isinstance(m, int):
        raise TypeError("m must be int")
    if not (MIN_WIDTH <= m <= max_width):
        raise InvalidConfig(f"register width must be in [{MIN_WIDTH}, {max_width}], got {m}")
    return m


def fallback_taps(m: int) -> Tuple[int, ...]:
    """Unverified taps returned when no candidate is primitive."""
    return (m - 1, m - 2)


def tap_candidates(m: int) -> Iterator[Tuple[int, ...]]:
    """
    Every candidate contains the top tap m-1. For i = 1 .. 2^(m-1) - 1 the
    other taps are the positions j in [0, m-2] where bit j of i is set.
    Yields in ascending i; call again to restart.
    """
    for i in range(1, 1 << (m - 1)):
        taps = [m - 1]
        for j in range(m - 1):
            if i & (1 << j):
                taps.append(j)
        yield tuple(taps)


def is_primitive_polynomial(
    m: int,
    taps: Sequence[int],
    *,
    cancel: Optional[CancelToken] = None,
) -> bool:
    """
    Seed all-ones and clock 2^m - 1 times, fingerprinting before each clock.
    Any repeated state means the period is short: fail immediately.
    """
    lfsr = LFSR("1" * m, taps)
    period = (1 << m) - 1
    seen: Set[int] = set()

    for _ in range(period):
        check_cancel(cancel)
        state = lfsr.fingerprint()
        if state in seen:
            return False
        seen.add(state)
        lfsr.shift()

    return len(seen) == period


def _check_candidate(args: Tuple[int, Tuple[int, ...]]) -> bool:
    # Process-pool entry point; every call owns its LFSR and seen-set.
    m, taps = args
    return is_primitive_polynomial(m, taps)


def search_primitive_taps(
    m: int,
    *,
    strict: bool = False,
    cancel: Optional[CancelToken] = None,
    workers: int = 1,
    max_width: int = MAX_SEARCH_WIDTH,
) -> TapSearchResult:
    """
    Return the first candidate (in tap_candidates() order) that is primitive.

    If nothing passes: strict -> NoPrimitivePolynomialFound, otherwise the
    unverified fallback (m-1, m-2) with verified=False.

    With workers > 1, cancel is checked before the pool starts and then
    between results, i.e. per chunk rather than per clock.
    """
    _check_width(m, max_width)
    if workers < 1:
        raise ValueError("workers must be >= 1")

    tested = 0
    if workers == 1:
        for taps in tap_candidates(m):
            tested += 1
            if is_primitive_polynomial(m, taps, cancel=cancel):
                logger.debug("m=%d: primitive taps %s after %d candidates", m, list(taps), tested)
                return TapSearchResult(taps=taps, verified=True, candidates_tested=tested)
    else:
        # Workers do not see the token; cancellation is observed between results,
        # so a cancel during a chunk takes effect once that chunk finishes.
        check_cancel(cancel)
        candidates = list(tap_candidates(m))
        chunksize = max(1, len(candidates) // (workers * 4))
        with ProcessPoolExecutor(max_workers=workers) as pool:
            results = pool.map(_check_candidate, [(m, t) for t in candidates], chunksize=chunksize)
            # map() yields in submission order, so the first hit matches the serial search
            for taps, ok in zip(candidates, results):
                tested += 1
                if cancel is not None and cancel.cancelled:
                    pool.shutdown(wait=False, cancel_futures=True)
                    cancel.check()
                if ok:
                    logger.debug("m=%d: primitive taps %s after %d candidates", m, list(taps), tested)
                    pool.shutdown(wait=False, cancel_futures=True)
                    return TapSearchResult(taps=taps, verified=True, candidates_tested=tested)

    if strict:
        raise NoPrimitivePolynomialFound(f"no primitive tap set found for m={m}")

    taps = fallback_taps(m)
    logger.warning(
        "m=%d: no primitive tap set found, falling back to unverified taps %s", m, list(taps)
    )
    return TapSearchResult(taps=taps, verified=False, candidates_tested=tested)


def find_primitive_taps(
    m: int,
    *,
    strict: bool = False,
    cancel: Optional[CancelToken] = None,
    workers: int = 1,
    max_width: int = MAX_SEARCH_WIDTH,
) -> Tuple[int, ...]:
    return search_primitive_taps(
        m, strict=strict, cancel=cancel, workers=workers, max_width=max_width
    ).taps
