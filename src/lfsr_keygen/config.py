from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from lfsr_keygen.errors import InvalidConfig
from lfsr_keygen.search.taps import MAX_SEARCH_WIDTH
from lfsr_keygen.utils.bitops import is_index


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Key generation configuration.

    seed: '0'/'1' string, register width m = len(seed)
    taps: explicit tap indices, or None -> search for primitive taps
    min_seed_bits: shortest accepted seed
    require_one: reject seeds without any '1' (all-zero state never leaves zero)
    min_key_bits: keystreams shorter than this are flagged as short
    strict_taps: raise NoPrimitivePolynomialFound instead of using fallback taps
    max_width: upper bound on m for the tap search
    """
    seed: str
    taps: Optional[Tuple[int, ...]] = None
    min_seed_bits: int = 7
    require_one: bool = True
    min_key_bits: int = 100
    strict_taps: bool = False
    max_width: int = MAX_SEARCH_WIDTH


def validate_seed(seed: str, *, min_bits: int = 7, require_one: bool = True) -> str:
    if not isinstance(seed, str):
        raise TypeError("seed must be a '0'/'1' string")
    if len(seed) < min_bits:
        raise InvalidConfig(f"seed must be at least {min_bits} bits, got {len(seed)}")
    if seed.strip("01"):
        raise InvalidConfig("seed must contain only 0s and 1s")
    if require_one and "1" not in seed:
        raise InvalidConfig("seed must contain at least one '1'")
    return seed


def validate_taps(taps: Sequence[int], width: int) -> Tuple[int, ...]:
    out = []
    for t in taps:
        if isinstance(t, bool) or not is_index(t):
            raise InvalidConfig(f"tap index must be int, got {t!r}")
        if not (0 <= t < width):
            raise InvalidConfig(f"invalid tap position {t}: must be between 0 and {width - 1}")
        out.append(int(t))
    return tuple(out)


def validate_config(cfg: GeneratorConfig) -> GeneratorConfig:
    validate_seed(cfg.seed, min_bits=cfg.min_seed_bits, require_one=cfg.require_one)
    if len(cfg.seed) > cfg.max_width:
        raise InvalidConfig(f"seed longer than max_width={cfg.max_width}")
    if cfg.taps is not None:
        validate_taps(cfg.taps, len(cfg.seed))
    if cfg.min_key_bits < 0:
        raise InvalidConfig("min_key_bits must be >= 0")
    return cfg
