# src/lfsr_keygen/errors.py
from __future__ import annotations


class LFSRError(Exception):
    """Base class for every recoverable error raised by lfsr_keygen."""


class InvalidConfig(LFSRError, ValueError):
    """Bad seed length/format or out-of-range tap index."""


class DegenerateKeystream(LFSRError):
    """Generated keystream contains no 1 bit."""


class EmptyKeystream(LFSRError, ValueError):
    """XOR cipher called with a zero-length keystream."""


class InvalidSymbol(LFSRError, ValueError):
    """Binary-mode message or keystream contains something other than 0/1."""


class NoPrimitivePolynomialFound(LFSRError, LookupError):
    """Strict tap search exhausted every candidate."""


class Cancelled(LFSRError):
    """A long-running loop observed a cancelled token."""
