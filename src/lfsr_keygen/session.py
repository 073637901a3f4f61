from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from lfsr_keygen.cipher import stage as cipher_stage
from lfsr_keygen.config import GeneratorConfig, validate_config, validate_taps
from lfsr_keygen.errors import EmptyKeystream
from lfsr_keygen.keystream.generate import KeyStreamResult, generate_key_stream
from lfsr_keygen.register.lfsr import LFSR
from lfsr_keygen.search.taps import search_primitive_taps
from lfsr_keygen.utils.cancel import CancelToken

logger = logging.getLogger(__name__)


class KeyGenSession:
    """
    Explicit context for one seed: resolved taps and the current keystream.
    Nothing here is process-global; build one session per seed.
    """

    def __init__(self, cfg: GeneratorConfig, *, cancel: Optional[CancelToken] = None) -> None:
        self.cfg = validate_config(cfg)
        self.cancel = cancel
        self.taps: Optional[Tuple[int, ...]] = None
        self.taps_verified: Optional[bool] = None
        self.result: Optional[KeyStreamResult] = None

    @property
    def width(self) -> int:
        return len(self.cfg.seed)

    @property
    def short(self) -> bool:
        """True if the current keystream is shorter than cfg.min_key_bits."""
        return self.result is not None and len(self.result) < self.cfg.min_key_bits

    def recommended_taps(self) -> Tuple[int, ...]:
        return search_primitive_taps(
            self.width,
            strict=self.cfg.strict_taps,
            cancel=self.cancel,
            max_width=self.cfg.max_width,
        ).taps

    def resolve_taps(self) -> Tuple[int, ...]:
        if self.taps is not None:
            return self.taps

        if self.cfg.taps is not None:
            self.taps = validate_taps(self.cfg.taps, self.width)
            # caller-supplied taps are not checked for primitivity
            self.taps_verified = None
        else:
            res = search_primitive_taps(
                self.width,
                strict=self.cfg.strict_taps,
                cancel=self.cancel,
                max_width=self.cfg.max_width,
            )
            self.taps = res.taps
            self.taps_verified = res.verified
        return self.taps

    def generate(self) -> KeyStreamResult:
        taps = self.resolve_taps()
        lfsr = LFSR(self.cfg.seed, taps)
        self.result = generate_key_stream(lfsr, cancel=self.cancel)

        if not self.result.degenerate and self.short:
            logger.warning(
                "key stream is %d bits, less than %d (taps %s)",
                len(self.result), self.cfg.min_key_bits, list(taps),
            )
        return self.result

    def keystream(self) -> str:
        if self.result is None or self.result.degenerate:
            raise EmptyKeystream("no valid key stream generated")
        return self.result.to_str()

    def encrypt(self, message: Any, *, mode: str = "text") -> Any:
        return cipher_stage.encrypt(message, self.keystream(), cfg=cipher_stage.Config(module=mode))

    def decrypt(self, ciphertext: Any, *, mode: str = "text") -> Any:
        return cipher_stage.decrypt(ciphertext, self.keystream(), cfg=cipher_stage.Config(module=mode))
