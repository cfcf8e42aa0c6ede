"""Cancellation token for blocking waits."""
from __future__ import annotations

import threading


class CancelToken:
    """Thread-safe flag a caller sets to abort a running wait early."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True as soon as the token is cancelled."""
        if seconds <= 0:
            return self._event.is_set()
        return self._event.wait(seconds)
