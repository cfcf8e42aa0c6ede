"""Headless stand-ins for the display, patterns and overlay used across tests."""

import numpy as np

from areawatch.core.geometry import Point, Rect, Size
from areawatch.vision.pattern import Match


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeBitmap:
    def __init__(self, visible, owner):
        self.visible = list(visible)
        self.owner = owner
        self.closed = False

    def close(self):
        self.closed = True
        self.owner.released += 1


class FakeCapture:
    """Replays a script of frames; each frame lists the labels visible in it.

    The last frame repeats forever. Every capture advances ``clock`` by ``cost``.
    """

    def __init__(self, frames, clock=None, cost=0.0):
        self.frames = [list(f) for f in frames] or [[]]
        self.clock = clock
        self.cost = cost
        self.calls = 0
        self.released = 0
        self.rects = []

    def capture(self, rect):
        frame = self.frames[min(self.calls, len(self.frames) - 1)]
        self.calls += 1
        self.rects.append(Rect(*rect))
        if self.clock is not None:
            self.clock.advance(self.cost)
        return FakeBitmap(frame, self)


class FakePattern:
    """Pattern that is found whenever its label is visible in a FakeBitmap."""

    def __init__(self, label):
        self.label = label
        self.tries = 0

    def try_match(self, bitmap):
        self.tries += 1
        if self.label in bitmap.visible:
            return Match(Point(0, 0), Size(1, 1), 1.0, self.label)
        return None

    def try_match_all(self, bitmap):
        self.tries += 1
        return [
            Match(Point(i, 0), Size(1, 1), 1.0, self.label)
            for i, seen in enumerate(bitmap.visible)
            if seen == self.label
        ]

    def __repr__(self):
        return f"FakePattern({self.label!r})"


class ArrayCapture:
    """Capture provider cropping a fixed BGR screen image."""

    def __init__(self, screen):
        self.screen = screen
        self.calls = 0

    def capture(self, rect):
        self.calls += 1
        x, y, w, h = rect
        return self.screen[max(0, y):max(0, y + h), max(0, x):max(0, x + w)].copy()


def noise(shape, seed):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=shape, dtype=np.uint8)


class RecordingRenderer:
    """OverlayRenderer that records calls instead of drawing."""

    def __init__(self):
        self.calls = []
        self.closed = False

    def highlight_border(self, rect, pen):
        self.calls.append(("border", rect, pen))

    def highlight_fill(self, rect, brush):
        self.calls.append(("fill", rect, brush))

    def caption(self, point, text, font, brush):
        self.calls.append(("caption", point, text, font, brush))

    def clear(self):
        self.calls.clear()

    def close(self):
        self.closed = True
