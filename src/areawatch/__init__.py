"""areawatch: screen regions, timeout-bounded visual waits and a debug overlay.

Typical use:
    from areawatch import Region, Waiter, TemplatePattern

    area = Region.from_xywh(0, 0, 800, 600)
    match = Waiter().wait_for(area, TemplatePattern("ok_button.png"), timeout_ms=5000)
"""
from .core.geometry import Point, Rect, Size
from .core.region import AreaExtent, EdgeSizing, Region, TO_EDGE
from .core.styles import Brush, Color, Font, Pen
from .core.cancel import CancelToken
from .vision.pattern import Match, Pattern, PatternEngine, TemplatePattern
from .controllers.vision import VisionController
from .controllers.polling import Waiter, WaitOutcome
from .gui.coordinator import OverlayCoordinator

__all__ = [
    "Point",
    "Rect",
    "Size",
    "AreaExtent",
    "EdgeSizing",
    "Region",
    "TO_EDGE",
    "Brush",
    "Color",
    "Font",
    "Pen",
    "CancelToken",
    "Match",
    "Pattern",
    "PatternEngine",
    "TemplatePattern",
    "VisionController",
    "Waiter",
    "WaitOutcome",
    "OverlayCoordinator",
]
