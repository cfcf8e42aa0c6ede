"""Controllers: orchestration over capture, matching and polling.

- vision: VisionController (capture + match facade)
- polling: Waiter (timeout-bounded waits) and WaitOutcome
"""
from .vision import VisionController
from .polling import Waiter, WaitOutcome

__all__ = ["VisionController", "Waiter", "WaitOutcome"]
