"""
Sand Canvas Widget
==================
The interactive drawing area.

Why is this file needed?
------------------------
1. Incremental painting: Qt only allows painting on a widget inside
   `paintEvent`, so segments are painted into a back buffer (QImage) as they
   arrive and the widget just blits the buffer.
2. Resize: a new size means a new screen mapping, a new buffer and a full
   history repaint. The repaint is debounced, and a running repaint gives up
   as soon as a newer resize arrives.
3. Seeding: a left click converts the pixel to a normalized point and asks
   for a new drawing.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt, Signal, QSize, QTimer, QCoreApplication
from PySide6.QtGui import QColor, QImage, QPainter, QMouseEvent, QPaintEvent, QResizeEvent
from PySide6.QtWidgets import QWidget, QSizePolicy

from sandpendulum.config import BACKGROUND_RGB
from sandpendulum.model.state import SimulationState
from sandpendulum.model.trajectory import Point
from sandpendulum.model.viewport import ViewportMapping
from sandpendulum.view.renderer import InkMode, paint_full_history, paint_segment
from sandpendulum.view.widgets.qt_surface import QPainterSurface

logger = logging.getLogger(__name__)


class SandCanvas(QWidget):
    # Emitted with the normalized seed point on a left click
    seed_requested = Signal(object)

    def __init__(self, state: SimulationState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.state = state
        self._background = QColor(*BACKGROUND_RGB)
        self._buffer = QImage()
        self._repainting = False

        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setAttribute(Qt.WA_OpaquePaintEvent, True)
        self.setCursor(Qt.CrossCursor)
        self.setMinimumSize(QSize(100, 100))

        # init debounce timer
        self._repaint_timer = QTimer(self)
        self._repaint_timer.setSingleShot(True)
        self._repaint_timer.setInterval(50)
        self._repaint_timer.timeout.connect(self.redraw)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def buffer(self) -> QImage:
        return self._buffer

    def paint_point(self, index: int) -> None:
        """Paint the segment ending at `index` into the buffer and schedule a blit."""
        if self._repainting:
            # the running full repaint reaches this index by itself
            return
        if self._buffer.isNull() or self.state.screen_mapping.is_degenerate:
            return
        painter = QPainter(self._buffer)
        try:
            paint_segment(
                QPainterSurface(painter), self.state.screen_mapping,
                self.state.trajectory, index, InkMode.SCREEN
            )
        finally:
            painter.end()
        self.update()

    def redraw(self) -> None:
        """Clear the buffer and repaint the complete history."""
        if self._repainting:
            self._repaint_timer.start()
            return
        if self._buffer.isNull() or self.state.screen_mapping.is_degenerate:
            return

        buffer = self._buffer
        buffer.fill(self._background)
        self._repainting = True
        painter = QPainter(buffer)
        try:
            segments = paint_full_history(
                QPainterSurface(painter),
                self.state.screen_mapping,
                self.state.trajectory,
                InkMode.SCREEN,
                should_abort=lambda: self._superseded(buffer),
            )
        finally:
            painter.end()
            self._repainting = False
        logger.debug(f"Full repaint: {segments} segments.")
        self.update()

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        size = event.size()
        self.state.screen_mapping = ViewportMapping.from_size(size.width(), size.height())
        self._buffer = QImage(size, QImage.Format.Format_RGB32)
        self._buffer.fill(self._background)
        self._repaint_timer.start()

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        if self._buffer.isNull():
            painter.fillRect(event.rect(), self._background)
        else:
            painter.drawImage(event.rect(), self._buffer, event.rect())
        painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position().toPoint()
        if not self.rect().contains(pos) or self.state.screen_mapping.is_degenerate:
            return
        seed: Point = self.state.screen_mapping.to_normalized(pos.x(), pos.y())
        self.seed_requested.emit(seed)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _superseded(self, buffer: QImage) -> bool:
        """Let pending events run; True if a resize replaced `buffer` meanwhile."""
        QCoreApplication.processEvents()
        return buffer is not self._buffer
