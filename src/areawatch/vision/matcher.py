"""
Template matching strategies (multi-scale, multi-variant).

Pure functions that take numpy arrays and return scores and match metadata.
Patterns compose these; nothing here captures or logs above DEBUG.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple
import logging
import cv2
import numpy as np

from .preprocess import variants, resize_tpl

logger = logging.getLogger(__name__)


def _fits(screen: np.ndarray, tpl: np.ndarray) -> bool:
    return (
        screen.size > 0
        and tpl.size > 0
        and tpl.shape[0] <= screen.shape[0]
        and tpl.shape[1] <= screen.shape[1]
    )


def match_methods(
    modes: Sequence[str],
    screen_v: Dict[str, np.ndarray],
    tpl_v: Dict[str, np.ndarray],
    scale: float,
) -> Tuple[float, Optional[Tuple[int, int]], Optional[Dict]]:
    """Try multiple method variants and return best score and metadata."""
    best_local_score = -1.0
    best_local_loc = None
    best_local_meta = None
    for m in modes:
        scr = screen_v.get(m)
        tp = tpl_v.get(m)
        if scr is None or tp is None or not _fits(scr, tp):
            continue
        try:
            res = cv2.matchTemplate(scr, tp, cv2.TM_CCOEFF_NORMED)
        except cv2.error as e:
            logger.debug("matcher: %s failed at scale %.2f: %s", m, scale, e)
            continue
        _, sc, _, loc = cv2.minMaxLoc(res)
        if np.isfinite(sc) and sc > best_local_score:
            best_local_score = float(sc)
            best_local_loc = (int(loc[0]), int(loc[1]))
            best_local_meta = {"method": m, "scale": float(scale)}
    return best_local_score, best_local_loc, best_local_meta


def best_match_multi(
    screenshot_gray: np.ndarray,
    template_gray: np.ndarray,
    scales: Sequence[float],
    modes: Optional[Sequence[str]] = None,
):
    """Return (score, loc, (w,h), meta) for best match across strategies and scales.

    modes: subset of preprocess.MODES; defaults to plain gray.
    """
    if not modes:
        modes = ["gray"]
    screen_v = variants(screenshot_gray, modes)

    best_score = -1.0
    best_loc = None
    best_wh = None
    best_meta = None

    for s in scales:
        tpl_scaled = resize_tpl(template_gray, s)
        tpl_v = variants(tpl_scaled, modes)
        sc, loc, meta = match_methods(modes, screen_v, tpl_v, s)
        if sc > best_score and loc is not None:
            best_score = sc
            best_loc = loc
            best_wh = (tpl_scaled.shape[1], tpl_scaled.shape[0])
            best_meta = meta
    return best_score, best_loc, best_wh, (best_meta or {})


def all_matches(
    screenshot_gray: np.ndarray,
    template_gray: np.ndarray,
    threshold: float,
    mode: str = "gray",
    overlap: float = 0.5,
    max_results: Optional[int] = None,
) -> List[Tuple[float, Tuple[int, int]]]:
    """Return [(score, (x, y))] for every occurrence scoring >= threshold.

    Best scores first. Hits closer than ``overlap`` times the template size
    to a better hit are treated as the same occurrence. ``max_results=None``
    returns all of them; a cap that cuts results off is logged as a warning.
    """
    screen = variants(screenshot_gray, [mode])[mode]
    tpl = variants(template_gray, [mode])[mode]
    if not _fits(screen, tpl):
        return []
    try:
        res = cv2.matchTemplate(screen, tpl, cv2.TM_CCOEFF_NORMED)
    except cv2.error as e:
        logger.debug("matcher: find-all %s failed: %s", mode, e)
        return []
    res = np.nan_to_num(res, nan=-1.0, posinf=-1.0, neginf=-1.0)
    ys, xs = np.where(res >= threshold)
    if len(xs) == 0:
        return []
    order = np.argsort(-res[ys, xs], kind="stable")

    h, w = tpl.shape[:2]
    min_dx = max(1, int(w * overlap))
    min_dy = max(1, int(h * overlap))
    out: List[Tuple[float, Tuple[int, int]]] = []
    for n, i in enumerate(order):
        x, y = int(xs[i]), int(ys[i])
        if any(abs(x - ox) < min_dx and abs(y - oy) < min_dy for _, (ox, oy) in out):
            continue
        out.append((float(res[y, x]), (x, y)))
        if max_results is not None and len(out) >= max_results:
            if n + 1 < len(order):
                logger.warning(
                    "matcher: find-all stopped at max_results=%d with %d candidate(s) unchecked",
                    max_results, len(order) - n - 1,
                )
            break
    return out
