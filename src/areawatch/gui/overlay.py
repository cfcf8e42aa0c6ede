"""Transparent, click-through overlay window spanning the virtual screen.

Draw calls may come from any thread; they are forwarded to the GUI thread
through signals and painted in paintEvent.
"""
from typing import List, Optional

from PyQt6.QtCore import QObject, QPoint, QRect, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPainter, QPen
from PyQt6.QtWidgets import QApplication, QWidget

from ..core import screen
from ..core.geometry import Point, Rect
from ..core.styles import Brush, Color, Font, Pen
from .coordinator import BORDER, CAPTION, FILL, OverlayItem


def _qcolor(color: Color) -> QColor:
    return QColor(color.r, color.g, color.b, color.a)


def _qfont(font: Font) -> QFont:
    qf = QFont(font.family) if font.family else QFont()
    if font.point_size > 0:
        qf.setPointSize(int(font.point_size))
    return qf


class OverlaySignals(QObject):
    # Thread-safe draw operations
    _add_item_sig = pyqtSignal(object)
    _clear_sig = pyqtSignal()


class QtOverlayRenderer(QWidget):
    """OverlayRenderer drawing on a frameless, input-transparent top-level window."""

    def __init__(self, bounds: Optional[Rect] = None):
        super().__init__()
        self._items: List[OverlayItem] = []
        self._bounds = Rect(*bounds) if bounds is not None else screen.virtual_screen()

        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint
            | Qt.WindowType.Tool
            | Qt.WindowType.WindowTransparentForInput
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating, True)
        self.setGeometry(QRect(*self._bounds))

        self.signals = OverlaySignals(self)
        self.signals._add_item_sig.connect(self._add_item_ui)
        self.signals._clear_sig.connect(self._clear_ui)

    @classmethod
    def create(cls, bounds: Optional[Rect] = None) -> "QtOverlayRenderer":
        """Create and show the overlay. Must run on the GUI thread."""
        if QApplication.instance() is None:
            raise RuntimeError("QtOverlayRenderer needs a running QApplication")
        overlay = cls(bounds)
        overlay.show()
        return overlay

    # --------------------------- OverlayRenderer ---------------------------
    def highlight_border(self, rect: Rect, pen: Pen) -> None:
        self.signals._add_item_sig.emit(OverlayItem(BORDER, rect=Rect(*rect), pen=pen))

    def highlight_fill(self, rect: Rect, brush: Brush) -> None:
        self.signals._add_item_sig.emit(OverlayItem(FILL, rect=Rect(*rect), brush=brush))

    def caption(self, point: Point, text: str, font: Font, brush: Brush) -> None:
        self.signals._add_item_sig.emit(OverlayItem(CAPTION, point=Point(*point), text=text, font=font, brush=brush))

    def clear(self) -> None:
        self.signals._clear_sig.emit()

    # --------------------------- GUI thread ---------------------------
    def _add_item_ui(self, item: OverlayItem) -> None:
        self._items.append(item)
        self.update()

    def _clear_ui(self) -> None:
        self._items.clear()
        self.update()

    def paintEvent(self, event):  # type: ignore
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, False)
            # Items are in absolute screen coordinates
            painter.translate(-self._bounds.x, -self._bounds.y)
            for item in self._items:
                if item.kind == BORDER and item.rect is not None and item.pen is not None:
                    qpen = QPen(_qcolor(item.pen.color))
                    qpen.setWidth(max(1, int(item.pen.width)))
                    painter.setPen(qpen)
                    painter.setBrush(Qt.BrushStyle.NoBrush)
                    painter.drawRect(QRect(*item.rect))
                elif item.kind == FILL and item.rect is not None and item.brush is not None:
                    painter.fillRect(QRect(*item.rect), QBrush(_qcolor(item.brush.color)))
                elif item.kind == CAPTION and item.point is not None and item.brush is not None:
                    qfont = _qfont(item.font or Font())
                    painter.setFont(qfont)
                    painter.setPen(_qcolor(item.brush.color))
                    ascent = painter.fontMetrics().ascent()
                    painter.drawText(QPoint(item.point.x, item.point.y + ascent), item.text or "")
        finally:
            painter.end()
