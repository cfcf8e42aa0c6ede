"""Drawing values shared by regions and the overlay.

These are plain immutable values; the overlay renderer turns them into
toolkit objects (QPen/QBrush/QFont) only for the duration of a paint.
"""
from __future__ import annotations

from typing import NamedTuple


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse "#RRGGBB" or "#AARRGGBB" (leading '#' optional)."""
        s = str(value).strip().lstrip("#")
        if len(s) == 6:
            return cls(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
        if len(s) == 8:
            return cls(int(s[2:4], 16), int(s[4:6], 16), int(s[6:8], 16), int(s[0:2], 16))
        raise ValueError(f"Invalid color: {value!r}")

    def with_alpha(self, alpha: int) -> "Color":
        return Color(self.r, self.g, self.b, max(0, min(255, int(alpha))))

    def to_hex(self) -> str:
        if self.a == 255:
            return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
        return f"#{self.a:02X}{self.r:02X}{self.g:02X}{self.b:02X}"


class Pen(NamedTuple):
    color: Color
    width: int = 1


class Brush(NamedTuple):
    color: Color


class Font(NamedTuple):
    # Empty family means the platform's caption font
    family: str = ""
    point_size: int = 9


DEFAULT_HIGHLIGHT_COLOR = Color(139, 0, 0)  # dark red
DEFAULT_FONT = Font()

__all__ = [
    "Color",
    "Pen",
    "Brush",
    "Font",
    "DEFAULT_HIGHLIGHT_COLOR",
    "DEFAULT_FONT",
]
