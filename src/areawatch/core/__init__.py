"""Core subpackage.

- geometry: Point, Size, Rect
- region: Region and its derivation rules
- screen: virtual screen / monitor bounds
- styles: drawing values (Color, Pen, Brush, Font)
- cancel: CancelToken for waits
- config, logging_setup: ambient configuration and logging
"""
