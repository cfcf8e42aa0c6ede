"""Patterns, matches and the matching engine contract.

A Pattern knows how to look for itself in a captured bitmap:

    try_match(bitmap) -> Match | None
    try_match_all(bitmap) -> list[Match]

The default engine (PatternEngine) just delegates to those methods, so any
object with that shape can be waited for. TemplatePattern is the OpenCV
implementation shipped with the package.

Match coordinates are relative to the bitmap, i.e. to the top-left of the
region that was captured; use Match.area_in(region) for screen coordinates.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Protocol, Sequence, Union, runtime_checkable
import logging
import time

import cv2
import numpy as np

from ..config.defaults import (
    DEFAULT_MATCH_THRESHOLD,
    DEFAULT_SCALES,
    FIND_ALL_MAX_RESULTS,
    FIND_ALL_OVERLAP,
    PERF_ENABLED,
)
from ..core.geometry import Point, Rect, Size
from ..core.region import Region
from .matcher import all_matches, best_match_multi
from .preprocess import MODES, to_gray

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Match:
    """One occurrence of a pattern inside a captured bitmap."""

    location: Point
    size: Size
    score: float
    label: Optional[str] = None

    @property
    def rect(self) -> Rect:
        return Rect.from_point(self.location, self.size)

    @property
    def center(self) -> Point:
        return Point(self.location.x + self.size.width // 2, self.location.y + self.size.height // 2)

    def area_in(self, region: Region) -> Region:
        """The matched rectangle as an absolute Region, given the region that was captured."""
        return region.sub_rect(self.rect)


@runtime_checkable
class Pattern(Protocol):
    def try_match(self, bitmap: Any) -> Optional[Match]: ...
    def try_match_all(self, bitmap: Any) -> List[Match]: ...


class MatchingEngine(Protocol):
    def find(self, bitmap: Any, pattern: Any) -> Optional[Match]: ...
    def find_all(self, bitmap: Any, pattern: Any) -> List[Match]: ...


class PatternEngine:
    """MatchingEngine that lets each pattern do its own matching."""

    def find(self, bitmap: Any, pattern: Pattern) -> Optional[Match]:
        return pattern.try_match(bitmap)

    def find_all(self, bitmap: Any, pattern: Pattern) -> List[Match]:
        return list(pattern.try_match_all(bitmap))


class TemplatePattern:
    """Image template matched with normalized cross-correlation.

    template: BGR/BGRA/gray numpy array, or a path to an image file.
    threshold: minimum score in [0, 1] for a hit.
    scales: template scales tried by try_match (try_match_all uses 1.0 only).
    modes: image representations tried (see preprocess.MODES).
    max_results: optional cap on try_match_all; None returns every occurrence.
    """

    def __init__(
        self,
        template: Union[np.ndarray, str, Path],
        threshold: float = DEFAULT_MATCH_THRESHOLD,
        scales: Optional[Sequence[float]] = None,
        modes: Optional[Sequence[str]] = None,
        label: Optional[str] = None,
        max_results: Optional[int] = FIND_ALL_MAX_RESULTS,
    ) -> None:
        if isinstance(template, (str, Path)):
            img = cv2.imread(str(template), cv2.IMREAD_COLOR)
            if img is None:
                raise FileNotFoundError(f"Template image not found: {template}")
            label = label or Path(template).stem
            template = img
        if template is None or template.size == 0:
            raise ValueError("Template image is empty")
        if not 0.0 <= float(threshold) <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.template_gray = to_gray(np.asarray(template))
        self.threshold = float(threshold)
        self.scales = list(scales or DEFAULT_SCALES)
        self.modes = list(modes or ["gray"])
        for m in self.modes:
            if m not in MODES:
                raise ValueError(f"Unknown match mode: {m!r}")
        if max_results is not None and max_results < 1:
            raise ValueError(f"max_results must be >= 1 or None, got {max_results}")
        self.label = label
        self.max_results = max_results

    @property
    def size(self) -> Size:
        h, w = self.template_gray.shape[:2]
        return Size(int(w), int(h))

    def try_match(self, bitmap: np.ndarray) -> Optional[Match]:
        if bitmap is None or bitmap.size == 0:
            return None
        t0 = time.perf_counter()
        score, loc, wh, meta = best_match_multi(to_gray(bitmap), self.template_gray, self.scales, self.modes)
        if PERF_ENABLED or logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "pattern %s: best_score=%.3f meta=%s %.1fms",
                self.label, float(score), str(meta), (time.perf_counter() - t0) * 1000.0,
            )
        if loc is None or wh is None or score < self.threshold:
            return None
        return Match(Point(*loc), Size(*wh), float(score), self.label)

    def try_match_all(self, bitmap: np.ndarray) -> List[Match]:
        if bitmap is None or bitmap.size == 0:
            return []
        hits = all_matches(
            to_gray(bitmap),
            self.template_gray,
            self.threshold,
            mode=self.modes[0],
            overlap=FIND_ALL_OVERLAP,
            max_results=self.max_results,
        )
        size = self.size
        return [Match(Point(*loc), size, score, self.label) for score, loc in hits]

    def __repr__(self) -> str:
        w, h = self.size
        return f"TemplatePattern(label={self.label!r}, size={w}x{h}, threshold={self.threshold})"
