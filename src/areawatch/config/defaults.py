"""
Central defaults for regions, waits and matching.

Modules import from here instead of hardcoding values. Environment toggles
are read once at import time.
"""
from __future__ import annotations

from typing import List, Optional
import os

from ..core.styles import DEFAULT_FONT, DEFAULT_HIGHLIGHT_COLOR

# Region defaults
DEFAULT_WAIT_TIMEOUT_MS: int = 10000
HIGHLIGHT_COLOR = DEFAULT_HIGHLIGHT_COLOR
HIGHLIGHT_FONT = DEFAULT_FONT

# Polling: sleep between polls; 0 polls continuously
DEFAULT_POLL_INTERVAL_MS: int = 10

# Matching
DEFAULT_MATCH_THRESHOLD: float = 0.9
DEFAULT_SCALES: List[float] = [1.0]
# Neighbouring hits closer than this fraction of the template size are merged
FIND_ALL_OVERLAP: float = 0.5
# Cap on find-all results; None returns every occurrence
FIND_ALL_MAX_RESULTS: Optional[int] = None

# Similarity highlights are at most half transparent
SIMILARITY_ALPHA_MAX: int = 127

# Fallback when no display can be queried (headless)
FALLBACK_SCREEN = (0, 0, 1920, 1080)

# Environment flags
PERF_ENABLED: bool = os.environ.get("AW_VISION_PERF", "0") == "1"

__all__ = [
    "DEFAULT_WAIT_TIMEOUT_MS",
    "HIGHLIGHT_COLOR",
    "HIGHLIGHT_FONT",
    "DEFAULT_POLL_INTERVAL_MS",
    "DEFAULT_MATCH_THRESHOLD",
    "DEFAULT_SCALES",
    "FIND_ALL_OVERLAP",
    "FIND_ALL_MAX_RESULTS",
    "SIMILARITY_ALPHA_MAX",
    "FALLBACK_SCREEN",
    "PERF_ENABLED",
]
