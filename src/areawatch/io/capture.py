"""Screen capture provider backed by mss.

Captures a BGR numpy frame of an absolute screen rectangle. mss handles are
not thread-safe, so one instance is kept per thread.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Protocol, Any

import mss
import numpy as np

from ..config.defaults import PERF_ENABLED
from ..core.geometry import Rect

logger = logging.getLogger(__name__)


class CaptureProvider(Protocol):
    """Anything that snapshots the live display for a rectangle."""

    def capture(self, rect: Rect) -> Any: ...


class MssCapture:
    """CaptureProvider returning BGR uint8 arrays of shape (height, width, 3)."""

    def __init__(self) -> None:
        self._tls = threading.local()

    def _get_sct(self, force_new: bool = False):
        sct = getattr(self._tls, "sct", None)
        if force_new or sct is None:
            if sct is not None:
                try:
                    sct.close()
                except Exception as e:  # stale handle, replaced below
                    logger.debug("capture: closing stale mss handle failed: %s", e)
            sct = mss.mss()
            self._tls.sct = sct
        return sct

    def _safe_grab(self, region: dict):
        sct = self._get_sct()
        try:
            return sct.grab(region)
        except AttributeError:
            # Handle invalidated (e.g. display change); reopen once
            sct = self._get_sct(force_new=True)
            return sct.grab(region)

    def capture(self, rect: Rect) -> np.ndarray:
        """Capture a BGR frame for an absolute rectangle.

        Zero or negative sized rectangles produce an empty frame instead of
        reaching mss.
        """
        rect = Rect(*rect)
        if rect.width <= 0 or rect.height <= 0:
            return np.zeros((max(0, rect.height), max(0, rect.width), 3), dtype=np.uint8)
        t0 = time.perf_counter()
        frame = np.array(self._safe_grab(rect.as_region_dict()))  # BGRA
        if PERF_ENABLED or logger.isEnabledFor(logging.DEBUG):
            logger.debug("capture: grab %.1fms rect=%s", (time.perf_counter() - t0) * 1000.0, tuple(rect))
        return np.ascontiguousarray(frame[:, :, :3])

    def close(self) -> None:
        """Close the calling thread's mss handle."""
        sct = getattr(self._tls, "sct", None)
        if sct is not None:
            sct.close()
            self._tls.sct = None
