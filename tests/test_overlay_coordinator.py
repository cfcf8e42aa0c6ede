import threading
import time

import pytest

from areawatch.core.geometry import Point, Rect
from areawatch.core.region import Region
from areawatch.core.styles import Brush, Color, Font, Pen
from areawatch.gui.coordinator import BORDER, CAPTION, FILL, OverlayCoordinator, similarity_alpha

from helpers import RecordingRenderer


@pytest.fixture
def renderers():
    return []


@pytest.fixture
def overlay(renderers):
    def factory():
        r = RecordingRenderer()
        renderers.append(r)
        return r

    return OverlayCoordinator(renderer_factory=factory)


def test_renderer_is_created_lazily_once(overlay, renderers):
    assert renderers == []
    region = Region(Rect(0, 0, 10, 10))
    overlay.highlight_border(region)
    overlay.highlight_border(region)
    assert len(renderers) == 1
    assert len(renderers[0].calls) == 2


def test_clear_before_drawing_does_not_create_renderer(overlay, renderers):
    overlay.clear()
    assert renderers == []


def test_border_uses_region_color_by_default(overlay, renderers):
    region = Region(Rect(1, 2, 3, 4), highlight_color=Color(0, 128, 0))
    overlay.highlight_border(region)
    overlay.highlight_border(region, Pen(Color(0, 0, 255), width=3))
    assert renderers[0].calls == [
        ("border", Rect(1, 2, 3, 4), Pen(Color(0, 128, 0))),
        ("border", Rect(1, 2, 3, 4), Pen(Color(0, 0, 255), width=3)),
    ]
    assert [i.kind for i in overlay.items] == [BORDER, BORDER]


def test_highlights_accumulate_until_clear(overlay, renderers):
    a = Region(Rect(0, 0, 10, 10))
    b = Region(Rect(20, 20, 10, 10))
    overlay.highlight_border(a)
    overlay.highlight_fill(b, Brush(Color(1, 2, 3, 40)))
    assert [i.rect for i in overlay.items] == [a.rectangle, b.rectangle]

    overlay.clear()
    assert overlay.items == []
    assert renderers[0].calls == []


@pytest.mark.parametrize("similarity,alpha", [
    (0.0, 0),
    (0.5, 63),
    (1.0, 127),
    (1.5, 127),
    (-0.2, 0),
])
def test_similarity_alpha(similarity, alpha):
    assert similarity_alpha(similarity) == alpha


def test_highlight_similarity_fills_with_scaled_alpha(overlay, renderers):
    region = Region(Rect(0, 0, 5, 5), highlight_color=Color(139, 0, 0))
    overlay.highlight_similarity(region, 0.5)
    overlay.highlight_similarity(region, 1.0, color=Color(0, 0, 255))
    kinds = [c[0] for c in renderers[0].calls]
    assert kinds == ["fill", "fill"]
    assert renderers[0].calls[0][2] == Brush(Color(139, 0, 0, 63))
    assert renderers[0].calls[1][2] == Brush(Color(0, 0, 255, 127))
    assert all(i.kind == FILL for i in overlay.items)


def test_caption_at_top_left(overlay, renderers):
    region = Region(Rect(30, 40, 100, 100), highlight_font=Font("Consolas", 12))
    overlay.caption(region, "hello")
    kind, point, text, font, brush = renderers[0].calls[0]
    assert (kind, point, text, font) == ("caption", Point(30, 40), "hello", Font("Consolas", 12))
    assert brush == Brush(region.highlight_color)
    assert overlay.items[0].kind == CAPTION


def test_close_drops_renderer(overlay, renderers):
    overlay.highlight_border(Region(Rect(0, 0, 1, 1)))
    overlay.close()
    assert renderers[0].closed
    overlay.highlight_border(Region(Rect(0, 0, 1, 1)))
    assert len(renderers) == 2


def test_concurrent_highlights_are_serialized(renderers):
    class RacyRenderer(RecordingRenderer):
        def __init__(self):
            super().__init__()
            self.count = 0
            self.inside = 0
            self.overlapped = False

        def highlight_border(self, rect, pen):
            self.inside += 1
            if self.inside > 1:
                self.overlapped = True
            n = self.count
            time.sleep(0)
            self.count = n + 1
            self.inside -= 1

    renderer = RacyRenderer()
    overlay = OverlayCoordinator(renderer_factory=lambda: renderer)

    def worker(i):
        for j in range(50):
            overlay.highlight_border(Region(Rect(i, j, 1, 1)))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert renderer.count == 400
    assert not renderer.overlapped
    assert len(overlay.items) == 400
