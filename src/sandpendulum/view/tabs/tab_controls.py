"""
Parameter Control Panel
=======================
Sliders and text fields for the period ratio and the drag, plus the print and
export buttons.

Each parameter can be set two ways:
- the vertical slider (integer position, nonlinear mapping, top = largest);
- the text field, validated on every edit. Invalid text only beeps; the
  parameter and the slider keep their previous values.
"""
import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QSlider, QLineEdit, QGroupBox,
    QApplication
)
from PySide6.QtCore import Signal, Qt

from sandpendulum.config import SLIDER_RANGE
from sandpendulum.model.errors import InvalidParameterInput
from sandpendulum.model.parameters import (
    SimulationParameters, slider_to_ratio, ratio_to_slider, slider_to_drag, drag_to_slider,
    parse_ratio_text, parse_drag_text, format_ratio, format_drag
)

logger = logging.getLogger(__name__)

SLIDER_HEIGHT = 200
LINE_STEP = 5


class ParameterControlPanel(QWidget):
    parameters_changed = Signal()
    print_requested = Signal()
    export_requested = Signal()

    def __init__(self, parameters: SimulationParameters) -> None:
        super().__init__()
        self.parameters = parameters

        layout = QVBoxLayout(self)

        # --- Ratio ---
        grp_ratio = QGroupBox("Ratio")
        l_ratio = QVBoxLayout(grp_ratio)
        self.ratio_slider = self._make_slider(page_step=SLIDER_RANGE // 16, tick_interval=SLIDER_RANGE // 8)
        self.ratio_slider.valueChanged.connect(self.on_ratio_slider_changed)
        self.ratio_edit = QLineEdit()
        self.ratio_edit.setMaxLength(10)
        self.ratio_edit.setToolTip("Period Y / period X (1.0 - 50.0)")
        self.ratio_edit.textEdited.connect(self.on_ratio_text_edited)
        l_ratio.addLayout(self._centered(self.ratio_slider))
        l_ratio.addWidget(self.ratio_edit)
        layout.addWidget(grp_ratio)

        # --- Drag ---
        grp_drag = QGroupBox("Drag")
        l_drag = QVBoxLayout(grp_drag)
        self.drag_slider = self._make_slider(page_step=SLIDER_RANGE // 10, tick_interval=SLIDER_RANGE // 10)
        self.drag_slider.valueChanged.connect(self.on_drag_slider_changed)
        self.drag_edit = QLineEdit()
        self.drag_edit.setMaxLength(10)
        self.drag_edit.setToolTip("Speed lost per X period (0.0 - 0.5)")
        self.drag_edit.textEdited.connect(self.on_drag_text_edited)
        l_drag.addLayout(self._centered(self.drag_slider))
        l_drag.addWidget(self.drag_edit)
        layout.addWidget(grp_drag)

        # --- Output ---
        self.btn_print = QPushButton("Print")
        self.btn_print.clicked.connect(lambda: self.print_requested.emit())
        layout.addWidget(self.btn_print)

        self.btn_export = QPushButton("Export Image...")
        self.btn_export.clicked.connect(lambda: self.export_requested.emit())
        layout.addWidget(self.btn_export)

        layout.addStretch()

        self.load_from_state()

    # --- HELPERS ---

    @staticmethod
    def _make_slider(page_step: int, tick_interval: int) -> QSlider:
        slider = QSlider(Qt.Vertical)
        slider.setRange(0, SLIDER_RANGE)
        # position 0 is drawn at the top
        slider.setInvertedAppearance(True)
        slider.setInvertedControls(True)
        slider.setSingleStep(LINE_STEP)
        slider.setPageStep(page_step)
        slider.setTickInterval(tick_interval)
        slider.setTickPosition(QSlider.TicksBothSides)
        slider.setMinimumHeight(SLIDER_HEIGHT)
        return slider

    @staticmethod
    def _centered(widget: QWidget) -> QHBoxLayout:
        row = QHBoxLayout()
        row.addStretch()
        row.addWidget(widget)
        row.addStretch()
        return row

    @staticmethod
    def _set_silently(widget: QWidget, setter, value) -> None:
        widget.blockSignals(True)
        try:
            setter(value)
        finally:
            widget.blockSignals(False)

    def load_from_state(self) -> None:
        """Sync all widgets with the current parameters."""
        p = self.parameters
        self._set_silently(self.ratio_slider, self.ratio_slider.setValue, ratio_to_slider(p.period_ratio))
        self._set_silently(self.ratio_edit, self.ratio_edit.setText, format_ratio(p.period_ratio))
        self._set_silently(self.drag_slider, self.drag_slider.setValue, drag_to_slider(p.drag))
        self._set_silently(self.drag_edit, self.drag_edit.setText, format_drag(p.drag))

    def _reject(self, error: InvalidParameterInput) -> None:
        logger.debug(f"Rejected input: {error}")
        QApplication.beep()

    # --- SLOTS ---

    def on_ratio_slider_changed(self, pos: int) -> None:
        self.parameters.period_ratio = slider_to_ratio(pos)
        self._set_silently(self.ratio_edit, self.ratio_edit.setText, format_ratio(self.parameters.period_ratio))
        self.parameters_changed.emit()

    def on_drag_slider_changed(self, pos: int) -> None:
        self.parameters.drag = slider_to_drag(pos)
        self._set_silently(self.drag_edit, self.drag_edit.setText, format_drag(self.parameters.drag))
        self.parameters_changed.emit()

    def on_ratio_text_edited(self, text: str) -> None:
        try:
            ratio = parse_ratio_text(text)
        except InvalidParameterInput as e:
            self._reject(e)
            return
        self.parameters.period_ratio = ratio
        self._set_silently(self.ratio_slider, self.ratio_slider.setValue, ratio_to_slider(ratio))
        self.parameters_changed.emit()

    def on_drag_text_edited(self, text: str) -> None:
        try:
            drag = parse_drag_text(text)
        except InvalidParameterInput as e:
            self._reject(e)
            return
        self.parameters.drag = drag
        self._set_silently(self.drag_slider, self.drag_slider.setValue, drag_to_slider(drag))
        self.parameters_changed.emit()
