"""Config subpackage.

- defaults: central knobs for region defaults, polling and matching
"""
from .defaults import (
    DEFAULT_WAIT_TIMEOUT_MS,
    HIGHLIGHT_COLOR,
    HIGHLIGHT_FONT,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_MATCH_THRESHOLD,
    DEFAULT_SCALES,
    FIND_ALL_OVERLAP,
    FIND_ALL_MAX_RESULTS,
    SIMILARITY_ALPHA_MAX,
    FALLBACK_SCREEN,
    PERF_ENABLED,
)

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
