"""IO subpackage for platform integrations.

- capture: screen capture provider (mss)
"""
from .capture import CaptureProvider, MssCapture

__all__ = ["CaptureProvider", "MssCapture"]
