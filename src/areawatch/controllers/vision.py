"""Matching facade: capture a region, then ask the engine about it.

Responsibility:
- Thin orchestration between a CaptureProvider (IO) and a MatchingEngine.
- Every capture is scoped: the bitmap is released before a call returns,
  on every exit path, so nothing outlives one capture-and-match cycle.
- Structured logging: DEBUG for per-call timings and hit counts.
"""
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional
import logging
import time

import cv2

from ..config.defaults import PERF_ENABLED
from ..core.logging_setup import get_artifacts_dir
from ..core.region import Region
from ..io.capture import CaptureProvider, MssCapture
from ..vision.pattern import Match, MatchingEngine, PatternEngine

logger = logging.getLogger(__name__)


def _release(bitmap: Any) -> None:
    close = getattr(bitmap, "close", None)
    if callable(close):
        close()


class VisionController:
    """Finds patterns in regions using a capture provider and a matching engine."""

    def __init__(
        self,
        capture: Optional[CaptureProvider] = None,
        engine: Optional[MatchingEngine] = None,
    ) -> None:
        self.capture = capture if capture is not None else MssCapture()
        self.engine = engine if engine is not None else PatternEngine()

    # --------------------------- capture ---------------------------
    def grab(self, region: Region) -> Any:
        """Return a fresh bitmap of the region; the caller owns it."""
        t0 = time.perf_counter()
        bitmap = self.capture.capture(region.rectangle)
        if PERF_ENABLED:
            logger.debug("vision: grab %.1fms %r", (time.perf_counter() - t0) * 1000.0, region)
        return bitmap

    @contextmanager
    def captured(self, region: Region) -> Iterator[Any]:
        """Scoped capture: the bitmap is released when the block exits."""
        bitmap = self.grab(region)
        try:
            yield bitmap
        finally:
            _release(bitmap)

    # --------------------------- matching ---------------------------
    def find_in(self, bitmap: Any, pattern: Any) -> Optional[Match]:
        return self.engine.find(bitmap, pattern)

    def find_all_in(self, bitmap: Any, pattern: Any) -> List[Match]:
        return list(self.engine.find_all(bitmap, pattern))

    def find(self, region: Region, pattern: Any) -> Optional[Match]:
        """Best match of ``pattern`` in a fresh capture of ``region``, or None."""
        with self.captured(region) as bitmap:
            match = self.find_in(bitmap, pattern)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("vision: find %r in %r -> %s", pattern, region, match)
        return match

    def find_all(self, region: Region, pattern: Any) -> List[Match]:
        """Every occurrence of ``pattern`` in a fresh capture, in engine order."""
        with self.captured(region) as bitmap:
            matches = self.find_all_in(bitmap, pattern)
        logger.debug("vision: find_all %r in %r -> %d hit(s)", pattern, region, len(matches))
        return matches

    # --------------------------- debugging ---------------------------
    def save_snapshot(self, region: Region, path: Optional[str] = None) -> Optional[Path]:
        """Write the region's current pixels to a PNG.

        Defaults to <session>/artifacts/region-<x>_<y>_<w>x<h>-<ms>.png.
        Returns the path, or None when the capture could not be written.
        """
        if path is None:
            r = region.rectangle
            name = f"region-{r.x}_{r.y}_{r.width}x{r.height}-{int(time.time() * 1000)}.png"
            out_path = get_artifacts_dir() / name
        else:
            out_path = Path(path)
            out_path.parent.mkdir(parents=True, exist_ok=True)
        with self.captured(region) as bitmap:
            if bitmap is None or getattr(bitmap, "size", 0) == 0:
                logger.warning("vision: nothing to snapshot for %r", region)
                return None
            try:
                ok = cv2.imwrite(str(out_path), bitmap)
            except cv2.error:
                logger.exception("vision: snapshot write failed for %s", out_path)
                return None
        if not ok:
            logger.warning("vision: snapshot not written: %s", out_path)
            return None
        logger.info("vision: snapshot saved: %s", out_path)
        return out_path
