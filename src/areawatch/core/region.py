"""Screen regions and the rules for deriving one region from another.

A Region is a rectangle on the virtual screen plus the per-region settings
used when waiting in it or highlighting it. Derived points (center and
corners) are recomputed every time the rectangle is assigned, so they are
never stale.

Derivations (sub-areas, neighbouring areas) build brand new regions: the
parent is never mutated and no link to it is kept. Nothing is clamped; a
derivation that runs past the screen edge yields a zero or negative size.

Usage:
    r = Region.from_xywh(0, 0, 100, 100)
    r.offset(10, 20)                           # Point(10, 20)
    r.sub_area(10, 10, 30, 30).rectangle       # Rect(10, 10, 30, 30)
    r.right_area(AreaExtent(distance=5))       # up to the right screen edge
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..config.defaults import DEFAULT_WAIT_TIMEOUT_MS, HIGHLIGHT_COLOR, HIGHLIGHT_FONT
from . import screen
from .geometry import Point, Rect, Size
from .styles import Color, Font

# Sentinel size for adjacent areas: extend up to the virtual screen edge
TO_EDGE = 0


@dataclass(frozen=True)
class AreaExtent:
    """How far away and how large an adjacent area is.

    distance: gap in pixels between this region and the new one.
    size: width (left/right) or height (top/bottom) of the new area;
          TO_EDGE (0) extends it to the edge of the virtual screen.
    """

    distance: int = 0
    size: int = TO_EDGE

    @classmethod
    def to_edge(cls, distance: int = 0) -> "AreaExtent":
        return cls(distance=distance, size=TO_EDGE)

    @property
    def extends_to_edge(self) -> bool:
        return self.size == TO_EDGE


class EdgeSizing(Enum):
    """Sizing rules for left_area/top_area.

    CORRECTED: the new area is exactly ``size`` wide/high and ends
        ``distance`` pixels before this region.
    LEGACY: historical formulas kept for compatibility. The new area starts
        at ``edge - distance - size`` but is ``edge - distance`` wide/high,
        so it overlaps this region whenever ``size`` is given.
    """

    CORRECTED = "corrected"
    LEGACY = "legacy"


class Region:
    """A rectangular screen area with derived corners and per-region defaults."""

    def __init__(
        self,
        rectangle: Optional[Rect] = None,
        *,
        wait_timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS,
        highlight_color: Color = HIGHLIGHT_COLOR,
        highlight_font: Font = HIGHLIGHT_FONT,
        edge_sizing: EdgeSizing = EdgeSizing.CORRECTED,
    ) -> None:
        # No rectangle: the whole virtual screen spanning all displays
        self.rectangle = screen.virtual_screen() if rectangle is None else Rect(*rectangle)
        self.wait_timeout_ms = int(wait_timeout_ms)
        self.highlight_color = highlight_color
        self.highlight_font = highlight_font
        # Used by left_area/top_area when no sizing is passed
        self.edge_sizing = EdgeSizing(edge_sizing)

    # --------------------------- constructors ---------------------------
    @classmethod
    def from_xywh(cls, x: int, y: int, width: int, height: int, **options) -> "Region":
        return cls(Rect(int(x), int(y), int(width), int(height)), **options)

    @classmethod
    def from_point(cls, point: Point, size: Size, **options) -> "Region":
        return cls(Rect.from_point(point, size), **options)

    @classmethod
    def from_monitor(cls, index: int = 0, **options) -> "Region":
        """Region covering the full bounds of one display."""
        return cls(screen.monitor_bounds(index), **options)

    @classmethod
    def full_screen(cls, **options) -> "Region":
        return cls(screen.virtual_screen(), **options)

    # --------------------------- rectangle & derived points ---------------------------
    @property
    def rectangle(self) -> Rect:
        return self._rectangle

    @rectangle.setter
    def rectangle(self, value: Rect) -> None:
        rect = Rect(*value)
        self._rectangle = rect
        self._center = Point(rect.left + int(rect.width / 2), rect.top + int(rect.height / 2))
        self._top_left = Point(rect.left, rect.top)
        self._top_right = Point(rect.right, rect.top)
        self._bottom_left = Point(rect.left, rect.bottom)
        self._bottom_right = Point(rect.right, rect.bottom)

    @property
    def center(self) -> Point:
        return self._center

    @property
    def top_left(self) -> Point:
        return self._top_left

    @property
    def top_right(self) -> Point:
        return self._top_right

    @property
    def bottom_left(self) -> Point:
        return self._bottom_left

    @property
    def bottom_right(self) -> Point:
        return self._bottom_right

    def with_rectangle(self, rectangle: Rect) -> "Region":
        """Copy of this region's settings over a different rectangle."""
        return Region(
            rectangle,
            wait_timeout_ms=self.wait_timeout_ms,
            highlight_color=self.highlight_color,
            highlight_font=self.highlight_font,
            edge_sizing=self.edge_sizing,
        )

    def contains(self, point: Point) -> bool:
        r = self._rectangle
        return r.left <= point[0] < r.right and r.top <= point[1] < r.bottom

    # --------------------------- offsets & sub-areas ---------------------------
    def offset(self, x: Union[int, Point], y: Optional[int] = None) -> Point:
        """Map a point relative to this region's top-left to screen coordinates.

        Accepts ``offset(x, y)`` or ``offset(point)``.
        """
        if y is None:
            x, y = x  # type: ignore[misc]
        return Point(self._rectangle.x + int(x), self._rectangle.y + int(y))

    def sub_area(self, x: int, y: int, width: int, height: int) -> "Region":
        """Region at offset (x, y) from this region's top-left, sized exactly (width, height)."""
        return Region.from_point(self.offset(x, y), Size(int(width), int(height)))

    def sub_rect(self, rect: Rect) -> "Region":
        return Region.from_point(self.offset(rect[0], rect[1]), Size(int(rect[2]), int(rect[3])))

    def sub_area_at(self, point: Point, size: Size) -> "Region":
        return Region.from_point(self.offset(point), size)

    # --------------------------- adjacent areas ---------------------------
    def right_area(self, extent: Optional[AreaExtent] = None, *, screen_rect: Optional[Rect] = None) -> "Region":
        ext = extent or AreaExtent()
        r = self._rectangle
        x = r.right + ext.distance
        if ext.extends_to_edge:
            width = _screen(screen_rect).right - x
        else:
            width = ext.size
        return Region(Rect(x, r.top, width, r.height))

    def bottom_area(self, extent: Optional[AreaExtent] = None, *, screen_rect: Optional[Rect] = None) -> "Region":
        ext = extent or AreaExtent()
        r = self._rectangle
        y = r.bottom + ext.distance
        if ext.extends_to_edge:
            height = _screen(screen_rect).bottom - y
        else:
            height = ext.size
        return Region(Rect(r.left, y, r.width, height))

    def left_area(
        self,
        extent: Optional[AreaExtent] = None,
        *,
        sizing: Optional[EdgeSizing] = None,
        screen_rect: Optional[Rect] = None,
    ) -> "Region":
        """Area left of this region; ``sizing`` defaults to the region's edge_sizing."""
        ext = extent or AreaExtent()
        r = self._rectangle
        if (sizing or self.edge_sizing) is EdgeSizing.LEGACY:
            x = _screen(screen_rect).left if ext.extends_to_edge else r.left - ext.distance - ext.size
            return Region(Rect(x, r.top, r.left - ext.distance, r.height))
        end = r.left - ext.distance
        if ext.extends_to_edge:
            x = _screen(screen_rect).left
            return Region(Rect(x, r.top, end - x, r.height))
        return Region(Rect(end - ext.size, r.top, ext.size, r.height))

    def top_area(
        self,
        extent: Optional[AreaExtent] = None,
        *,
        sizing: Optional[EdgeSizing] = None,
        screen_rect: Optional[Rect] = None,
    ) -> "Region":
        ext = extent or AreaExtent()
        r = self._rectangle
        if (sizing or self.edge_sizing) is EdgeSizing.LEGACY:
            y = _screen(screen_rect).top if ext.extends_to_edge else r.top - ext.distance - ext.size
            return Region(Rect(r.left, y, r.width, r.top - ext.distance))
        end = r.top - ext.distance
        if ext.extends_to_edge:
            y = _screen(screen_rect).top
            return Region(Rect(r.left, y, r.width, end - y))
        return Region(Rect(r.left, end - ext.size, r.width, ext.size))

    # --------------------------- dunder ---------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Region):
            return NotImplemented
        return self._rectangle == other._rectangle

    # Equality follows the mutable rectangle, so regions are unhashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        r = self._rectangle
        return f"Region(x={r.x}, y={r.y}, width={r.width}, height={r.height})"


def _screen(screen_rect: Optional[Rect]) -> Rect:
    return screen.virtual_screen() if screen_rect is None else Rect(*screen_rect)


__all__ = ["Region", "AreaExtent", "EdgeSizing", "TO_EDGE"]
