"""Config manager: defaults, persistence, env overrides and typed views."""

from areawatch.core.config import ConfigManager
from areawatch.core.geometry import Rect
from areawatch.core.region import AreaExtent, EdgeSizing, Region
from areawatch.core.styles import Color, Font


def test_config_defaults_and_save(tmp_path):
    cfg_path = tmp_path / "config.ini"
    cfg = ConfigManager(str(cfg_path))
    assert cfg.get("log_level") == "INFO"
    assert cfg.get_int("wait_timeout_ms") == 10000
    assert cfg.get_int("poll_interval_ms") == 10
    assert cfg.get_float("match_threshold") == 0.9
    assert cfg.highlight_color() == Color(139, 0, 0)
    # Modify and save
    cfg.config["DEFAULT"]["log_level"] = "DEBUG"
    cfg.save()
    cfg2 = ConfigManager(str(cfg_path))
    assert cfg2.get("log_level") == "DEBUG"


def test_env_overrides_file(tmp_path, monkeypatch):
    cfg = ConfigManager(str(tmp_path / "config.ini"))
    monkeypatch.setenv("AW_WAIT_TIMEOUT_MS", "250")
    assert cfg.get_int("wait_timeout_ms") == 250


def test_region_options_build_regions(tmp_path):
    cfg_path = tmp_path / "config.ini"
    cfg_path.write_text(
        "[DEFAULT]\n"
        "wait_timeout_ms = 1500\n"
        "highlight_color = #00FF00\n"
        "highlight_font_family = Consolas\n"
        "highlight_font_size = 11\n",
        encoding="utf-8",
    )
    cfg = ConfigManager(str(cfg_path))
    r = Region.from_xywh(0, 0, 10, 10, **cfg.region_options())
    assert r.wait_timeout_ms == 1500
    assert r.highlight_color == Color(0, 255, 0)
    assert r.highlight_font == Font("Consolas", 11)


def test_invalid_values_fall_back(tmp_path):
    cfg = ConfigManager(str(tmp_path / "config.ini"))
    cfg.config["DEFAULT"]["wait_timeout_ms"] = "soon"
    cfg.config["DEFAULT"]["highlight_color"] = "red"
    cfg.config["DEFAULT"]["edge_sizing"] = "sideways"
    assert cfg.get_int("wait_timeout_ms", 42) == 42
    assert cfg.highlight_color() == Color(139, 0, 0)
    assert cfg.edge_sizing() is EdgeSizing.CORRECTED


def test_edge_sizing_reaches_regions(tmp_path):
    cfg_path = tmp_path / "config.ini"
    cfg_path.write_text("[DEFAULT]\nedge_sizing = Legacy\n", encoding="utf-8")
    cfg = ConfigManager(str(cfg_path))
    assert cfg.edge_sizing() is EdgeSizing.LEGACY

    r = Region.from_xywh(500, 100, 100, 50, **cfg.region_options())
    left = r.left_area(AreaExtent(10, 200), screen_rect=Rect(0, 0, 1920, 1080))
    assert left.rectangle == Rect(290, 100, 490, 50)


def test_edge_sizing_defaults_to_corrected(tmp_path):
    cfg = ConfigManager(str(tmp_path / "config.ini"))
    r = Region.from_xywh(500, 100, 100, 50, **cfg.region_options())
    assert r.edge_sizing is EdgeSizing.CORRECTED
    left = r.left_area(AreaExtent(10, 200), screen_rect=Rect(0, 0, 1920, 1080))
    assert left.rectangle == Rect(290, 100, 200, 50)


def test_color_hex_round_trip():
    assert Color.from_hex("#8B0000") == Color(139, 0, 0)
    assert Color.from_hex("#808B0000") == Color(139, 0, 0, 128)
    assert Color(139, 0, 0, 128).to_hex() == "#808B0000"
    assert Color(1, 2, 3).with_alpha(999).a == 255
