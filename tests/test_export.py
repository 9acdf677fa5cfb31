import numpy as np
import pytest

from PySide6.QtGui import QColor
from PySide6.QtPrintSupport import QPrinter

from sandpendulum.config import INK_RGB, PAPER_RGB, PRINT_MARGIN
from sandpendulum.controller.export import ExportErrorCode, export_image, print_trajectory, render_image
from sandpendulum.model.errors import ExportError
from sandpendulum.model.state import SimulationState
from sandpendulum.model.trajectory import Point
from sandpendulum.model.viewport import ViewportMapping


@pytest.fixture
def state():
    s = SimulationState()
    s.trajectory.reset(Point(0.0, 0.0))
    s.trajectory.append(Point(0.5, 0.0))
    return s


def test_render_image_paints_ink_on_white(qapp, state):
    image = render_image(state, (120, 120))

    assert image.width() == 120 and image.height() == 120
    # 5/6 of the half size: radius 50 around (60, 60)
    assert state.print_mapping == ViewportMapping(60, 60, 50)
    assert image.pixelColor(70, 60) == QColor(*INK_RGB)
    assert image.pixelColor(5, 5) == QColor(*PAPER_RGB)


def test_render_leaves_screen_mapping_and_trajectory_alone(qapp, state):
    screen = ViewportMapping(10, 10, 10)
    state.screen_mapping = screen
    before = state.trajectory.points().copy()

    render_image(state, (64, 48))

    assert state.screen_mapping == screen
    np.testing.assert_array_equal(state.trajectory.points(), before)


@pytest.mark.parametrize("size", [(0, 100), (100, -1)])
def test_render_invalid_size(qapp, state, size):
    with pytest.raises(ExportError) as info:
        render_image(state, size)
    assert info.value.code == ExportErrorCode.INVALID_SIZE


def test_export_image_writes_file(qapp, state, tmp_path):
    target = tmp_path / "drawing.png"
    assert export_image(state, str(target), (200, 200)) == str(target)
    assert target.exists()
    assert target.stat().st_size > 0


def test_export_to_missing_directory_fails_cleanly(qapp, state, tmp_path):
    target = tmp_path / "missing" / "drawing.png"
    with pytest.raises(ExportError) as info:
        export_image(state, str(target), (100, 100))

    assert info.value.code == ExportErrorCode.IMAGE_SAVE_FAILED
    assert str(info.value).startswith(f"Error {int(ExportErrorCode.IMAGE_SAVE_FAILED)}:")
    assert not target.exists()

    # the drawing is still intact and can be exported again
    assert len(state.trajectory) == 2
    retry = tmp_path / "drawing.png"
    export_image(state, str(retry), (100, 100))
    assert retry.exists()


def test_print_to_pdf(qapp, state, tmp_path):
    target = tmp_path / "drawing.pdf"
    printer = QPrinter(QPrinter.PrinterMode.HighResolution)
    printer.setOutputFormat(QPrinter.OutputFormat.PdfFormat)
    printer.setOutputFileName(str(target))

    assert print_trajectory(state, printer) == 1
    assert target.exists()
    # sized from the printable area the printer reports
    assert state.print_mapping == ViewportMapping.from_size(printer.width(), printer.height(), PRINT_MARGIN)
    assert not state.print_mapping.is_degenerate
