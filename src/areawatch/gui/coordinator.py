"""Overlay coordinator: the one object that draws highlights and captions.

Create a single OverlayCoordinator per process and hand it to whatever needs
to mark regions on screen. All calls are serialized by one lock, so regions
can be highlighted from several threads. The renderer is created on first
use; call ensure_renderer() from the GUI thread at startup when the renderer
is a Qt widget.

Drawn items accumulate until clear().
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol
import logging
import threading

from ..config.defaults import SIMILARITY_ALPHA_MAX
from ..core.geometry import Point, Rect
from ..core.region import Region
from ..core.styles import Brush, Color, Font, Pen

logger = logging.getLogger(__name__)

BORDER = "border"
FILL = "fill"
CAPTION = "caption"


class OverlayRenderer(Protocol):
    def highlight_border(self, rect: Rect, pen: Pen) -> None: ...
    def highlight_fill(self, rect: Rect, brush: Brush) -> None: ...
    def caption(self, point: Point, text: str, font: Font, brush: Brush) -> None: ...
    def clear(self) -> None: ...


@dataclass(frozen=True)
class OverlayItem:
    kind: str
    rect: Optional[Rect] = None
    point: Optional[Point] = None
    pen: Optional[Pen] = None
    brush: Optional[Brush] = None
    text: Optional[str] = None
    font: Optional[Font] = None


def similarity_alpha(similarity: float) -> int:
    """Alpha for a similarity highlight: similarity in [0, 1] -> [0, 127]."""
    s = max(0.0, min(1.0, float(similarity)))
    return int(s * SIMILARITY_ALPHA_MAX)


def _qt_renderer() -> OverlayRenderer:
    from .overlay import QtOverlayRenderer

    return QtOverlayRenderer.create()


class OverlayCoordinator:
    """Thread-safe owner of the shared overlay and the items drawn on it."""

    def __init__(self, renderer_factory: Optional[Callable[[], OverlayRenderer]] = None) -> None:
        self._factory = renderer_factory or _qt_renderer
        self._renderer: Optional[OverlayRenderer] = None
        self._items: List[OverlayItem] = []
        self._lock = threading.RLock()

    def ensure_renderer(self) -> OverlayRenderer:
        with self._lock:
            if self._renderer is None:
                self._renderer = self._factory()
                logger.debug("overlay: renderer created: %s", type(self._renderer).__name__)
            return self._renderer

    @property
    def items(self) -> List[OverlayItem]:
        """Snapshot of everything currently drawn."""
        with self._lock:
            return list(self._items)

    # --------------------------- drawing ---------------------------
    def highlight_border(self, region: Region, pen: Optional[Pen] = None) -> None:
        """Outline the region with ``pen`` (default: the region's highlight color)."""
        pen = pen or Pen(region.highlight_color)
        rect = region.rectangle
        with self._lock:
            self.ensure_renderer().highlight_border(rect, pen)
            self._items.append(OverlayItem(BORDER, rect=rect, pen=pen))

    def highlight_fill(self, region: Region, brush: Brush) -> None:
        rect = region.rectangle
        with self._lock:
            self.ensure_renderer().highlight_fill(rect, brush)
            self._items.append(OverlayItem(FILL, rect=rect, brush=brush))

    def highlight_similarity(self, region: Region, similarity: float, color: Optional[Color] = None) -> None:
        """Fill the region, more opaque the higher the similarity (at most half opaque)."""
        base = color or region.highlight_color
        self.highlight_fill(region, Brush(base.with_alpha(similarity_alpha(similarity))))

    def caption(
        self,
        region: Region,
        text: str,
        font: Optional[Font] = None,
        brush: Optional[Brush] = None,
    ) -> None:
        """Write ``text`` at the region's top-left corner."""
        font = font or region.highlight_font
        brush = brush or Brush(region.highlight_color)
        point = region.top_left
        with self._lock:
            self.ensure_renderer().caption(point, str(text), font, brush)
            self._items.append(OverlayItem(CAPTION, point=point, brush=brush, text=str(text), font=font))

    def clear(self) -> None:
        """Remove every highlight and caption."""
        with self._lock:
            if self._renderer is not None:
                self._renderer.clear()
            dropped = len(self._items)
            self._items.clear()
        logger.debug("overlay: cleared %d item(s)", dropped)

    def close(self) -> None:
        """Clear and drop the renderer; a later draw creates a new one."""
        with self._lock:
            self.clear()
            renderer, self._renderer = self._renderer, None
        close = getattr(renderer, "close", None)
        if callable(close):
            close()
