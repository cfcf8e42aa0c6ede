"""Integer screen geometry: points, sizes and rectangles."""
from __future__ import annotations

from typing import NamedTuple


class Point(NamedTuple):
    x: int
    y: int


class Size(NamedTuple):
    width: int
    height: int


class Rect(NamedTuple):
    """Axis-aligned rectangle (x, y, width, height); right/bottom are exclusive."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_point(cls, point: Point, size: Size) -> "Rect":
        return cls(int(point[0]), int(point[1]), int(size[0]), int(size[1]))

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def location(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def as_region_dict(self) -> dict:
        """Return the {left, top, width, height} dict used by mss."""
        return {"left": self.x, "top": self.y, "width": self.width, "height": self.height}


__all__ = ["Point", "Size", "Rect"]
