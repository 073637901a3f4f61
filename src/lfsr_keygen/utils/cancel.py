# src/lfsr_keygen/utils/cancel.py
from __future__ import annotations

import threading
from typing import Optional

from lfsr_keygen.errors import Cancelled


class CancelToken:
    """
    Cooperative cancellation for the O(2^m) loops (tap search, primitivity
    test, keystream generation). Loops call check() once per iteration.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def check(self) -> None:
        if self._event.is_set():
            raise Cancelled("operation cancelled")


def check_cancel(token: Optional[CancelToken]) -> None:
    if token is not None:
        token.check()
