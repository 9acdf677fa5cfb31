"""
Qt Drawing Surface
==================
Adapts a QPainter to the renderer's `Surface` protocol.

Any QPaintDevice works: the canvas back buffer (QImage), an export image or
a QPrinter. Pens are cached per (colour, width) because the renderer switches
pens twice per segment.
"""
from __future__ import annotations

from PySide6.QtCore import QPoint, Qt
from PySide6.QtGui import QColor, QPainter, QPen


class QPainterSurface:
    def __init__(self, painter: QPainter) -> None:
        self.painter = painter
        self._pos = QPoint(0, 0)
        self._pens: dict[tuple[tuple[int, int, int], int], QPen] = {}
        # Hard pixels; the shadow-stroke effect relies on exact 1 px offsets
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, False)

    def select_pen(self, color: tuple[int, int, int], width: int) -> None:
        key = (tuple(color), width)
        pen = self._pens.get(key)
        if pen is None:
            pen = QPen(QColor(*color))
            pen.setWidth(width)
            pen.setStyle(Qt.PenStyle.SolidLine)
            self._pens[key] = pen
        self.painter.setPen(pen)

    def move_to(self, x: int, y: int) -> None:
        self._pos = QPoint(x, y)

    def line_to(self, x: int, y: int) -> None:
        end = QPoint(x, y)
        self.painter.drawLine(self._pos, end)
        self._pos = end

    def device_size(self) -> tuple[int, int]:
        device = self.painter.device()
        return device.width(), device.height()
