import numpy as np
import pytest

from areawatch.controllers.vision import VisionController
from areawatch.core.geometry import Point, Rect, Size
from areawatch.core.region import Region
from areawatch.vision.pattern import Match

from helpers import ArrayCapture, FakeCapture, FakePattern, noise


class RecordingEngine:
    def __init__(self):
        self.seen = []

    def find(self, bitmap, pattern):
        self.seen.append(("find", pattern))
        return Match(Point(1, 2), Size(3, 4), 0.5, "engine")

    def find_all(self, bitmap, pattern):
        self.seen.append(("find_all", pattern))
        return (m for m in [Match(Point(0, 0), Size(1, 1), 0.9), Match(Point(5, 5), Size(1, 1), 0.8)])


def test_find_releases_bitmap_and_returns_match():
    capture = FakeCapture([["ok"]])
    vision = VisionController(capture=capture)
    match = vision.find(Region(Rect(0, 0, 10, 10)), FakePattern("ok"))
    assert match.label == "ok"
    assert capture.released == 1


def test_find_all_keeps_engine_order():
    engine = RecordingEngine()
    vision = VisionController(capture=FakeCapture([[]]), engine=engine)
    matches = vision.find_all(Region(Rect(0, 0, 10, 10)), "pattern")
    assert [m.location for m in matches] == [Point(0, 0), Point(5, 5)]
    assert engine.seen == [("find_all", "pattern")]


def test_custom_engine_is_used():
    engine = RecordingEngine()
    vision = VisionController(capture=FakeCapture([[]]), engine=engine)
    assert vision.find(Region(Rect(0, 0, 10, 10)), "pattern").label == "engine"


def test_captured_releases_on_error():
    capture = FakeCapture([[]])
    vision = VisionController(capture=capture)
    with pytest.raises(KeyError):
        with vision.captured(Region(Rect(0, 0, 1, 1))):
            raise KeyError("x")
    assert capture.released == 1


def test_save_snapshot_to_explicit_path(tmp_path):
    vision = VisionController(capture=ArrayCapture(noise((40, 60, 3), seed=1)))
    out = vision.save_snapshot(Region(Rect(10, 10, 20, 20)), str(tmp_path / "nested" / "snap.png"))
    assert out is not None and out.exists()


def test_save_snapshot_defaults_to_session_artifacts(tmp_path, monkeypatch):
    monkeypatch.setenv("AW_LOG_SESSION_DIR", str(tmp_path))
    vision = VisionController(capture=ArrayCapture(noise((40, 60, 3), seed=2)))
    out = vision.save_snapshot(Region(Rect(0, 0, 8, 8)))
    assert out.parent == tmp_path / "artifacts"
    assert out.name.startswith("region-0_0_8x8-")


def test_save_snapshot_of_empty_region_returns_none(tmp_path):
    vision = VisionController(capture=ArrayCapture(np.zeros((10, 10, 3), dtype=np.uint8)))
    assert vision.save_snapshot(Region(Rect(0, 0, 0, 0)), str(tmp_path / "empty.png")) is None
