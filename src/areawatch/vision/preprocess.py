"""
Pure image preprocessing and template preparation utilities.

Stateless, side-effect-free functions used by the matcher. Only the
representations a caller asks for are computed, since these run once per
poll.

Logging: Functions here avoid heavy logging for performance; callers can
wrap them and log as needed at DEBUG level.
"""
from __future__ import annotations

from typing import Dict, Iterable
import logging
import cv2
import numpy as np

logger = logging.getLogger(__name__)

MODES = ("gray", "gray_blur", "gray_eq", "gray_clahe", "edges", "grad")


def to_gray(img: np.ndarray) -> np.ndarray:
    """Convert a BGR/BGRA/gray uint8 image to single-channel gray."""
    if img.ndim == 2:
        return img
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


def edges(img: np.ndarray) -> np.ndarray:
    """Robust Canny edge extraction with adaptive thresholds.

    Falls back to fixed thresholds on error. Pure function.
    """
    try:
        v = float(np.median(img))
        lo = int(max(0, 0.66 * v))
        hi = int(min(255, 1.33 * v))
        return cv2.Canny(img, lo, hi)
    except cv2.error:
        return cv2.Canny(img, 50, 150)


def gradient(gray: np.ndarray) -> np.ndarray:
    """Gradient magnitude normalized to 8-bit."""
    gx = cv2.Sobel(gray, cv2.CV_32F, 1, 0, ksize=3)
    gy = cv2.Sobel(gray, cv2.CV_32F, 0, 1, ksize=3)
    mag = cv2.magnitude(gx, gy)
    mmin, mmax = float(mag.min()), float(mag.max())
    if mmax > mmin:
        return cv2.convertScaleAbs((mag - mmin) * (255.0 / (mmax - mmin)))
    return np.zeros_like(gray)


def variants(gray: np.ndarray, modes: Iterable[str]) -> Dict[str, np.ndarray]:
    """Compute the requested illumination-invariant representations of a gray image.

    Keys:
    - gray: unchanged
    - gray_blur: lightly denoised grayscale
    - gray_eq: global histogram equalization
    - gray_clahe: local contrast-limited equalization
    - edges: Canny edges with adaptive thresholds
    - grad: gradient magnitude (normalized to 8-bit)
    """
    out: Dict[str, np.ndarray] = {}
    for m in modes:
        if m in out:
            continue
        if m == "gray":
            out[m] = gray
        elif m == "gray_blur":
            out[m] = cv2.GaussianBlur(gray, (3, 3), 0)
        elif m == "gray_eq":
            out[m] = cv2.equalizeHist(gray)
        elif m == "gray_clahe":
            out[m] = cv2.createCLAHE(clipLimit=2.0, tileGridSize=(8, 8)).apply(gray)
        elif m == "edges":
            out[m] = edges(gray)
        elif m == "grad":
            out[m] = gradient(gray)
        else:
            raise ValueError(f"Unknown match mode: {m!r} (expected one of {', '.join(MODES)})")
    return out


def resize_tpl(tpl: np.ndarray, scale: float) -> np.ndarray:
    """Resize template with appropriate interpolation, clamped to min size 8x8."""
    h, w = tpl.shape[:2]
    if abs(scale - 1.0) < 1e-6:
        return tpl
    nh, nw = max(8, int(h * scale)), max(8, int(w * scale))
    return cv2.resize(tpl, (nw, nh), interpolation=cv2.INTER_AREA if scale < 1.0 else cv2.INTER_CUBIC)
