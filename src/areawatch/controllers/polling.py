"""Polling engine: every "wait until X shows up on screen" operation.

Each wait starts a monotonic timer and repeatedly captures and matches
through the VisionController until its stopping condition holds or the
timeout elapses. Between polls the engine sleeps ``poll_interval_ms``
(capped by the time left); the sleep is interruptible through a CancelToken.
With ``poll_interval_ms=0`` the engine re-polls continuously.

A timeout of zero or less never polls (wait_vanish excepted: it always
looks once to know whether the pattern is there at all). ``timeout_ms=None``
uses the region's own ``wait_timeout_ms``.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, List, Optional, Sequence
import logging
import threading
import time

from ..config.defaults import DEFAULT_POLL_INTERVAL_MS
from ..core.cancel import CancelToken
from ..core.region import Region
from ..vision.pattern import Match
from .vision import VisionController

logger = logging.getLogger(__name__)


class WaitOutcome(Enum):
    FOUND = "found"
    VANISHED = "vanished"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


class _Deadline:
    def __init__(self, timeout_ms: int, clock: Callable[[], float]) -> None:
        self._clock = clock
        self._start = clock()
        self.timeout_s = float(timeout_ms) / 1000.0

    def elapsed(self) -> float:
        return self._clock() - self._start

    def remaining(self) -> float:
        return self.timeout_s - self.elapsed()

    def expired(self) -> bool:
        return self.elapsed() >= self.timeout_s


def _is_cancelled(cancel: Optional[CancelToken]) -> bool:
    return cancel is not None and cancel.cancelled


class Waiter:
    """Blocking waits on regions, bounded by a timeout and an optional CancelToken."""

    def __init__(
        self,
        vision: Optional[VisionController] = None,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.vision = vision if vision is not None else VisionController()
        self.poll_interval_ms = max(0, int(poll_interval_ms))
        self._clock = clock
        self._tls = threading.local()

    @classmethod
    def from_config(cls, config_manager, vision: Optional[VisionController] = None) -> "Waiter":
        return cls(vision, poll_interval_ms=config_manager.get_int("poll_interval_ms", DEFAULT_POLL_INTERVAL_MS))

    @property
    def last_outcome(self) -> Optional[WaitOutcome]:
        """Outcome of the most recent wait made from the calling thread."""
        return getattr(self._tls, "outcome", None)

    # --------------------------- helpers ---------------------------
    def _deadline(self, region: Region, timeout_ms: Optional[int]) -> _Deadline:
        return _Deadline(region.wait_timeout_ms if timeout_ms is None else timeout_ms, self._clock)

    def _pause(self, deadline: _Deadline, cancel: Optional[CancelToken]) -> bool:
        """Sleep until the next poll. Return True when the wait was cancelled."""
        seconds = min(self.poll_interval_ms / 1000.0, deadline.remaining())
        if cancel is not None:
            return cancel.wait(seconds)
        if seconds > 0:
            time.sleep(seconds)
        return False

    def _finish(self, op: str, outcome: WaitOutcome, region: Region, what: Any, polls: int, deadline: _Deadline) -> None:
        self._tls.outcome = outcome
        elapsed_ms = deadline.elapsed() * 1000.0
        if outcome in (WaitOutcome.FOUND, WaitOutcome.VANISHED):
            logger.debug("%s: %s %r in %r after %d poll(s), %.1fms", op, outcome.value, what, region, polls, elapsed_ms)
        else:
            logger.info("%s: %s waiting for %r in %r after %d poll(s), %.1fms", op, outcome.value, what, region, polls, elapsed_ms)

    # --------------------------- waits ---------------------------
    def wait_for(
        self,
        region: Region,
        pattern: Any,
        timeout_ms: Optional[int] = None,
        cancel: Optional[CancelToken] = None,
    ) -> Optional[Match]:
        """Poll until ``pattern`` appears; return its match, or None on timeout/cancel."""
        deadline = self._deadline(region, timeout_ms)
        polls = 0
        while not deadline.expired():
            if _is_cancelled(cancel):
                self._finish("wait_for", WaitOutcome.CANCELLED, region, pattern, polls, deadline)
                return None
            match = self.vision.find(region, pattern)
            polls += 1
            if match is not None:
                self._finish("wait_for", WaitOutcome.FOUND, region, pattern, polls, deadline)
                return match
            if self._pause(deadline, cancel):
                self._finish("wait_for", WaitOutcome.CANCELLED, region, pattern, polls, deadline)
                return None
        self._finish("wait_for", WaitOutcome.TIMED_OUT, region, pattern, polls, deadline)
        return None

    def wait_for_count(
        self,
        region: Region,
        pattern: Any,
        count: int,
        timeout_ms: Optional[int] = None,
        cancel: Optional[CancelToken] = None,
    ) -> List[Match]:
        """Poll until at least ``count`` occurrences are visible at once.

        Returns the most recent result set: the satisfying one, or whatever
        the last poll saw when the deadline passed ([] if no poll happened).
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        deadline = self._deadline(region, timeout_ms)
        result: List[Match] = []
        polls = 0
        while not deadline.expired():
            if _is_cancelled(cancel):
                self._finish("wait_for_count", WaitOutcome.CANCELLED, region, pattern, polls, deadline)
                return result
            result = self.vision.find_all(region, pattern)
            polls += 1
            if len(result) >= count:
                self._finish("wait_for_count", WaitOutcome.FOUND, region, pattern, polls, deadline)
                return result
            if self._pause(deadline, cancel):
                self._finish("wait_for_count", WaitOutcome.CANCELLED, region, pattern, polls, deadline)
                return result
        self._finish("wait_for_count", WaitOutcome.TIMED_OUT, region, pattern, polls, deadline)
        return result

    def wait_vanish(
        self,
        region: Region,
        pattern: Any,
        timeout_ms: Optional[int] = None,
        cancel: Optional[CancelToken] = None,
    ) -> WaitOutcome:
        """Poll until ``pattern`` is no longer found.

        Returns VANISHED, TIMED_OUT (still present at the deadline) or CANCELLED.
        """
        deadline = self._deadline(region, timeout_ms)
        if _is_cancelled(cancel):
            self._finish("wait_vanish", WaitOutcome.CANCELLED, region, pattern, 0, deadline)
            return WaitOutcome.CANCELLED
        match = self.vision.find(region, pattern)
        polls = 1
        while match is not None:
            if self._pause(deadline, cancel):
                self._finish("wait_vanish", WaitOutcome.CANCELLED, region, pattern, polls, deadline)
                return WaitOutcome.CANCELLED
            if deadline.expired():
                self._finish("wait_vanish", WaitOutcome.TIMED_OUT, region, pattern, polls, deadline)
                return WaitOutcome.TIMED_OUT
            match = self.vision.find(region, pattern)
            polls += 1
        self._finish("wait_vanish", WaitOutcome.VANISHED, region, pattern, polls, deadline)
        return WaitOutcome.VANISHED

    def wait_any(
        self,
        region: Region,
        patterns: Sequence[Any],
        timeout_ms: Optional[int] = None,
        cancel: Optional[CancelToken] = None,
    ) -> Optional[Match]:
        """Poll until any of ``patterns`` appears.

        Each poll captures once and tries the patterns in order against that
        bitmap; the first hit wins. The scan stops early once the deadline
        passes.
        """
        patterns = list(patterns)
        if not patterns:
            raise ValueError("wait_any needs at least one pattern")
        deadline = self._deadline(region, timeout_ms)
        polls = 0
        while not deadline.expired():
            if _is_cancelled(cancel):
                self._finish("wait_any", WaitOutcome.CANCELLED, region, patterns, polls, deadline)
                return None
            with self.vision.captured(region) as bitmap:
                polls += 1
                for pattern in patterns:
                    match = self.vision.find_in(bitmap, pattern)
                    if match is not None:
                        self._finish("wait_any", WaitOutcome.FOUND, region, pattern, polls, deadline)
                        return match
                    if deadline.expired():
                        break
            if self._pause(deadline, cancel):
                self._finish("wait_any", WaitOutcome.CANCELLED, region, patterns, polls, deadline)
                return None
        self._finish("wait_any", WaitOutcome.TIMED_OUT, region, patterns, polls, deadline)
        return None
