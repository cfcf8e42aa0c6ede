import pytest

from areawatch.core import screen
from areawatch.core.geometry import Rect


class FakeMss:
    def __init__(self, monitors):
        self.monitors = monitors

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeMssModule:
    def __init__(self, monitors):
        self._monitors = monitors

    def mss(self):
        return FakeMss(self._monitors)


MONITORS = [
    {"left": -1280, "top": 0, "width": 3200, "height": 1080},
    {"left": 0, "top": 0, "width": 1920, "height": 1080},
    {"left": -1280, "top": 56, "width": 1280, "height": 1024},
]


def test_virtual_screen_and_monitors(monkeypatch):
    monkeypatch.setattr(screen, "mss", FakeMssModule(MONITORS))
    assert screen.virtual_screen() == Rect(-1280, 0, 3200, 1080)
    assert screen.monitors() == [Rect(0, 0, 1920, 1080), Rect(-1280, 56, 1280, 1024)]
    assert screen.monitor_bounds(1) == Rect(-1280, 56, 1280, 1024)
    with pytest.raises(IndexError):
        screen.monitor_bounds(2)


def test_fallback_without_mss(monkeypatch):
    monkeypatch.setattr(screen, "mss", None)
    assert screen.virtual_screen() == Rect(0, 0, 1920, 1080)
    assert screen.monitors() == [Rect(0, 0, 1920, 1080)]


def test_fallback_when_display_query_fails(monkeypatch):
    class Broken:
        def mss(self):
            raise RuntimeError("no display")

    monkeypatch.setattr(screen, "mss", Broken())
    assert screen.virtual_screen() == Rect(0, 0, 1920, 1080)
