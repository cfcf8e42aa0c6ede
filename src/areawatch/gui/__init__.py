"""GUI subpackage.

- coordinator: OverlayCoordinator (shared, lock-protected overlay state)
- overlay: QtOverlayRenderer (PyQt6 window; imported lazily so the rest of
  the package works without a display)
"""
from .coordinator import OverlayCoordinator, OverlayItem, OverlayRenderer, similarity_alpha

__all__ = ["OverlayCoordinator", "OverlayItem", "OverlayRenderer", "similarity_alpha"]
