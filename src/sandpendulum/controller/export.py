"""
Print & Image Export
====================
Paints the full trajectory history onto a paper-like surface.

Why is this file needed?
------------------------
1. Separate mapping: a printer page or an export image has its own size and
   resolution, so it gets its own `ViewportMapping` (with a margin) stored as
   `state.print_mapping`. The screen mapping is left alone.
2. Error reporting: device failures are turned into `ExportError` with a code
   and a description so the GUI can report them. The trajectory is only read,
   so a failed export leaves it valid and exportable again.
"""
from __future__ import annotations

import logging
import os
from enum import IntEnum

from PySide6.QtGui import QImage, QPainter, QColor
from PySide6.QtPrintSupport import QPrinter

from sandpendulum.config import EXPORT_IMAGE_SIZE, PAPER_RGB, PRINT_MARGIN
from sandpendulum.model.errors import ExportError
from sandpendulum.model.state import SimulationState
from sandpendulum.model.viewport import ViewportMapping
from sandpendulum.view.renderer import InkMode, paint_full_history
from sandpendulum.view.widgets.qt_surface import QPainterSurface

logger = logging.getLogger(__name__)


class ExportErrorCode(IntEnum):
    PAINTER_BEGIN_FAILED = 1
    PAINTER_END_FAILED = 2
    PRINTER_ERROR = 3
    IMAGE_SAVE_FAILED = 4
    INVALID_SIZE = 5


def _paint_history(state: SimulationState, painter: QPainter) -> int:
    surface = QPainterSurface(painter)
    # printers report their printable area, in device pixels
    width, height = surface.device_size()
    mapping = ViewportMapping.from_size(width, height, PRINT_MARGIN)
    state.print_mapping = mapping
    return paint_full_history(surface, mapping, state.trajectory, InkMode.PAPER)


def render_image(state: SimulationState, size: tuple[int, int] = EXPORT_IMAGE_SIZE) -> QImage:
    """Render the whole history onto a new white image of `size` pixels."""
    width, height = size
    if width <= 0 or height <= 0:
        raise ExportError(ExportErrorCode.INVALID_SIZE, f"Invalid image size {width} x {height}.")

    image = QImage(width, height, QImage.Format.Format_RGB32)
    image.fill(QColor(*PAPER_RGB))

    painter = QPainter()
    if not painter.begin(image):
        raise ExportError(ExportErrorCode.PAINTER_BEGIN_FAILED, "Could not start painting on the export image.")
    try:
        segments = _paint_history(state, painter)
    finally:
        painter.end()

    logger.debug(f"Rendered {segments} segments onto a {width} x {height} image.")
    return image


def export_image(state: SimulationState, filepath: str, size: tuple[int, int] = EXPORT_IMAGE_SIZE) -> str:
    """
    Save the drawing as an image file (format chosen by the extension).

    Returns:
        The path written.
    Raises:
        ExportError: If the image cannot be rendered or written.
    """
    image = render_image(state, size)
    if not image.save(filepath):
        raise ExportError(
            ExportErrorCode.IMAGE_SAVE_FAILED,
            f"Could not write image to '{os.path.abspath(filepath)}'."
        )
    logger.info(f"Drawing exported to: {filepath}")
    return filepath


def print_trajectory(state: SimulationState, printer: QPrinter) -> int:
    """
    Paint the drawing onto one printer page.

    Returns:
        Number of segments painted.
    Raises:
        ExportError: If the printer cannot be opened or reports an error.
    """
    target = printer.printerName() or printer.outputFileName() or "default printer"
    logger.info(f"Printing to: {target}")

    painter = QPainter()
    if not painter.begin(printer):
        raise ExportError(ExportErrorCode.PAINTER_BEGIN_FAILED, f"Could not start printing on '{target}'.")
    try:
        segments = _paint_history(state, painter)
    finally:
        ended = painter.end()

    if printer.printerState() == QPrinter.PrinterState.Error:
        raise ExportError(ExportErrorCode.PRINTER_ERROR, f"Printer '{target}' reported an error.")
    if not ended:
        raise ExportError(ExportErrorCode.PAINTER_END_FAILED, f"Could not finish the page on '{target}'.")
    return segments
