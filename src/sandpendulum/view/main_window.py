"""
Main Application Window
=======================
The primary GUI container holding the parameter panel and the sand canvas.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the canvas clicks, the panel buttons and the menu
   actions to the simulation worker and the export functions.
3. Status: The window caption tells the user what the simulation is doing.
"""
from __future__ import annotations

import logging
import math

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QSplitter, QFileDialog, QMessageBox, QApplication
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent
from PySide6.QtPrintSupport import QPrinter, QPrintDialog

from sandpendulum.config import APP_NAME
from sandpendulum.controller.export import export_image, print_trajectory
from sandpendulum.controller.workers import SimulationWorker
from sandpendulum.model.errors import ExportError
from sandpendulum.model.state import SimulationState
from sandpendulum.model.trajectory import Point
from sandpendulum.view.tabs.tab_controls import ParameterControlPanel
from sandpendulum.view.widgets.sand_canvas import SandCanvas

logger = logging.getLogger(__name__)

CAPTION_IDLE = f"{APP_NAME}  -  click on starting point"
CAPTION_RUNNING = APP_NAME
CAPTION_DONE = f"{APP_NAME}   (done)"


def progress_caption(length: int) -> str:
    return f"{APP_NAME}    step {length}"


class MainWindow(QMainWindow):
    def __init__(self, state: SimulationState) -> None:
        super().__init__()
        self.state: SimulationState = state

        self.setWindowTitle(CAPTION_IDLE)
        self.resize(1000, 800)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QHBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)

        # --- LEFT SIDE: Parameters ---
        self.controls = ParameterControlPanel(self.state.parameters)
        splitter.addWidget(self.controls)

        # --- RIGHT SIDE: Canvas ---
        self.canvas = SandCanvas(self.state)
        splitter.addWidget(self.canvas)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([120, 880])

        # --- SIMULATION ---
        self.worker = SimulationWorker(self.state, self)

        # --- SIGNAL CONNECTIONS ---
        self.canvas.seed_requested.connect(self.on_seed_requested)
        self.worker.point_added.connect(self.canvas.paint_point)
        self.worker.progress_updated.connect(self.on_progress)
        self.worker.finished.connect(self.on_finished)
        self.worker.seeded.connect(self.on_seeded)
        self.controls.parameters_changed.connect(self.on_parameters_changed)
        self.controls.print_requested.connect(self.on_print)
        self.controls.export_requested.connect(self.on_export_image)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

    def _create_actions(self) -> None:
        self.act_export = QAction("Export Image...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_export_image)

        self.act_print = QAction("Print...", self)
        self.act_print.setShortcut("Ctrl+P")
        self.act_print.triggered.connect(self.on_print)

        self.act_plot = QAction("Amplitude Plot", self)
        self.act_plot.triggered.connect(self.on_plot)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_export)
        file_menu.addAction(self.act_print)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_plot)

    # --- SLOTS ---

    def on_seed_requested(self, seed: Point) -> None:
        self.worker.seed(seed)

    def on_seeded(self) -> None:
        self.setWindowTitle(CAPTION_RUNNING)
        self.canvas.redraw()

    def on_parameters_changed(self) -> None:
        p = self.state.parameters
        # takes effect with the next simulated point
        logger.debug(f"Parameters changed: ratio = {p.period_ratio:.4f}, drag = {p.drag:.5f}")

    def on_progress(self, length: int) -> None:
        self.setWindowTitle(progress_caption(length))

    def on_finished(self) -> None:
        self.setWindowTitle(CAPTION_DONE)

    def on_print(self) -> None:
        printer = QPrinter(QPrinter.PrinterMode.HighResolution)
        dialog = QPrintDialog(printer, self)
        if dialog.exec() != QPrintDialog.DialogCode.Accepted:
            return

        QApplication.setOverrideCursor(Qt.WaitCursor)
        try:
            print_trajectory(self.state, printer)
        except ExportError as e:
            logger.error(f"Printing failed: {e}")
            QMessageBox.critical(self, "Print Error", f"Printer error number is {e.code}:\n{e.description}")
        finally:
            QApplication.restoreOverrideCursor()

    def on_export_image(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(
            self, "Export Image", "sand-pendulum.png", "Images (*.png *.jpg *.bmp)"
        )
        if not fname:
            return

        QApplication.setOverrideCursor(Qt.WaitCursor)
        try:
            export_image(self.state, fname)
        except ExportError as e:
            logger.error(f"Export failed: {e}")
            QMessageBox.critical(self, "Export Error", f"Error number {e.code}:\n{e.description}")
        finally:
            QApplication.restoreOverrideCursor()

    def on_plot(self) -> None:
        if not self.state.is_active:
            QMessageBox.information(self, APP_NAME, "Click on a starting point first.")
            return
        # matplotlib is only needed for this window
        from sandpendulum.analysis.envelope import plot_trajectory
        # one X oscillation takes period_x / 2pi ticks
        plot_trajectory(self.state.trajectory, self.state.parameters.period_x / (2.0 * math.pi))

    def closeEvent(self, event: QCloseEvent, /) -> None:
        """Stop the simulation before the canvas goes away."""
        self.worker.stop()
        event.accept()
