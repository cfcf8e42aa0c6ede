"""Display bounds helpers.

Centralizes the monitor queries regions need: the virtual screen (union of
all monitors) and the bounds of a single monitor. All functions return safe
fallbacks when no display can be queried.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Any

from ..config.defaults import FALLBACK_SCREEN
from .geometry import Rect

# Optional deps with proper typing
mss: Optional[Any]
try:
    import mss
except ImportError:  # pragma: no cover - optional import
    mss = None

logger = logging.getLogger(__name__)


def _monitor_rect(monitor: dict) -> Rect:
    return Rect(
        int(monitor.get("left", 0)),
        int(monitor.get("top", 0)),
        int(monitor.get("width", 0)),
        int(monitor.get("height", 0)),
    )


def monitors() -> List[Rect]:
    """Return the bounds of every physical monitor (index 0 is the first monitor)."""
    if mss is None:
        return [Rect(*FALLBACK_SCREEN)]
    try:
        with mss.mss() as sct:
            return [_monitor_rect(m) for m in sct.monitors[1:]] or [_monitor_rect(sct.monitors[0])]
    except Exception as e:
        logger.debug("screen: monitor query failed: %s", e)
        return [Rect(*FALLBACK_SCREEN)]


def virtual_screen() -> Rect:
    """Return the virtual screen rectangle (union of all monitors)."""
    if mss is None:
        return Rect(*FALLBACK_SCREEN)
    try:
        with mss.mss() as sct:
            return _monitor_rect(sct.monitors[0])
    except Exception as e:
        logger.debug("screen: virtual screen query failed: %s", e)
        return Rect(*FALLBACK_SCREEN)


def monitor_bounds(index: int) -> Rect:
    """Return the bounds of monitor ``index``; raises IndexError when it does not exist."""
    mons = monitors()
    if not 0 <= index < len(mons):
        raise IndexError(f"No monitor {index} (found {len(mons)})")
    return mons[index]
