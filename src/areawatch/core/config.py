"""core.config
Configuration core: load/save helpers for config.ini.

A small ConfigManager used to read and persist key/value settings: region
defaults, polling interval, matching threshold and log level. Typed getters
convert the stored strings; region_options() feeds Region keyword overrides.
"""

import logging
import os
from configparser import ConfigParser
from pathlib import Path
from typing import Optional

from ..config.defaults import (
    DEFAULT_MATCH_THRESHOLD,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_WAIT_TIMEOUT_MS,
    HIGHLIGHT_COLOR,
    HIGHLIGHT_FONT,
)
from .region import EdgeSizing
from .styles import Color, Font

logger = logging.getLogger(__name__)

DEFAULTS = {
    "log_level": "INFO",
    "wait_timeout_ms": str(DEFAULT_WAIT_TIMEOUT_MS),
    "poll_interval_ms": str(DEFAULT_POLL_INTERVAL_MS),
    "highlight_color": HIGHLIGHT_COLOR.to_hex(),
    "highlight_font_family": HIGHLIGHT_FONT.family,
    "highlight_font_size": str(HIGHLIGHT_FONT.point_size),
    "match_threshold": str(DEFAULT_MATCH_THRESHOLD),
    "edge_sizing": EdgeSizing.CORRECTED.value,
}


class ConfigManager:
    """Simple configuration manager backed by an INI file.

    Behaviour:
    - Uses a single DEFAULT section for lookups.
    - Fills in defaults for missing keys; the file is written on save().
    - Defaults to a per-user config path (%APPDATA% on Windows,
      XDG_CONFIG_HOME or ~/.config on other systems) unless an explicit
      path is provided.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        if config_path:
            self.config_path = Path(config_path)
        else:
            if os.name == "nt":
                base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
                self.config_path = base.joinpath("AreaWatch", "config.ini")
            else:
                base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
                self.config_path = base.joinpath("areawatch", "config.ini")

        self.config = ConfigParser()
        self.load()

    def load(self) -> None:
        """Load configuration from disk and fill in missing defaults."""
        if self.config_path.exists():
            self.config.read(self.config_path, encoding="utf-8")

        for key, value in DEFAULTS.items():
            if key not in self.config["DEFAULT"]:
                self.config["DEFAULT"][key] = value

    def get(self, key: str, fallback=None):
        """Get a configuration value.

        Precedence is env (AW_<KEY>, <KEY>) > config.ini > fallback.
        """
        for ek in (f"AW_{str(key).upper()}", str(key).upper()):
            val = os.environ.get(ek)
            if val is not None and str(val) != "":
                return val
        return self.config["DEFAULT"].get(key, fallback)

    def get_int(self, key: str, fallback: int = 0) -> int:
        raw = self.get(key)
        try:
            return int(str(raw).strip())
        except (TypeError, ValueError):
            if raw not in (None, ""):
                logger.warning("config: %s=%r is not an integer, using %d", key, raw, fallback)
            return fallback

    def get_float(self, key: str, fallback: float = 0.0) -> float:
        raw = self.get(key)
        try:
            return float(str(raw).strip())
        except (TypeError, ValueError):
            if raw not in (None, ""):
                logger.warning("config: %s=%r is not a number, using %s", key, raw, fallback)
            return fallback

    # --------------------------- typed views ---------------------------
    def highlight_color(self) -> Color:
        raw = self.get("highlight_color", DEFAULTS["highlight_color"])
        try:
            return Color.from_hex(raw)
        except ValueError:
            logger.warning("config: invalid highlight_color %r, using default", raw)
            return HIGHLIGHT_COLOR

    def highlight_font(self) -> Font:
        family = self.get("highlight_font_family", "") or ""
        return Font(str(family), self.get_int("highlight_font_size", HIGHLIGHT_FONT.point_size))

    def region_options(self) -> dict:
        """Keyword overrides for Region(...) built from the configuration."""
        return {
            "wait_timeout_ms": self.get_int("wait_timeout_ms", DEFAULT_WAIT_TIMEOUT_MS),
            "highlight_color": self.highlight_color(),
            "highlight_font": self.highlight_font(),
            "edge_sizing": self.edge_sizing(),
        }

    def edge_sizing(self) -> EdgeSizing:
        raw = str(self.get("edge_sizing", EdgeSizing.CORRECTED.value)).strip().lower()
        try:
            return EdgeSizing(raw)
        except ValueError:
            logger.warning("config: unknown edge_sizing %r, using corrected", raw)
            return EdgeSizing.CORRECTED

    def save(self) -> None:
        """Persist current configuration to disk (creates parent directories)."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as fh:
            self.config.write(fh)
