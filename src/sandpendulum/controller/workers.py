"""
Timer-driven Worker (Qt glue)
=============================
This module binds the pure `PendulumDriver` to the Qt event loop.

Why is this file needed?
------------------------
1. Timing: a QTimer provides the periodic ticks.
2. Responsiveness: `QCoreApplication.processEvents` is the event pump the
   driver calls after each point, so the GUI keeps reacting during a burst.
3. Signals: the GUI learns about new points, progress and completion through
   Qt Signals instead of holding a reference to the driver's callbacks.

Everything runs on the GUI thread. Signals are delivered with direct
connections, so a segment is painted before the driver moves on.

Classes:
    QtTickTimer: `TickTimer` implementation on top of QTimer.
    SimulationWorker: Owns the timer and the driver, exposes Qt signals.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, QCoreApplication, Signal

from sandpendulum.controller.driver import PendulumDriver
from sandpendulum.model.state import SimulationState, DriverPhase
from sandpendulum.model.trajectory import Point

logger = logging.getLogger(__name__)


class QtTickTimer:
    def __init__(self, timer: QTimer) -> None:
        self.timer = timer

    def start(self, interval_ms: int) -> None:
        self.timer.start(interval_ms)

    def stop(self) -> None:
        self.timer.stop()


def pump_qt_events() -> None:
    """Let pending input, resize and timer events run."""
    QCoreApplication.processEvents()


class SimulationWorker(QObject):
    # Signals to update the UI from the driver
    point_added = Signal(int)  # index of the new point
    progress_updated = Signal(int)  # trajectory length
    finished = Signal()
    seeded = Signal()

    def __init__(self, state: SimulationState, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.state = state

        self._timer = QTimer(self)
        self._timer.timeout.connect(self.on_tick)

        self.driver = PendulumDriver(
            state=state,
            timer=QtTickTimer(self._timer),
            on_point=self.point_added.emit,
            pump_events=pump_qt_events,
            on_progress=self.progress_updated.emit,
            on_done=self.finished.emit,
        )

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def seed(self, point: Point) -> None:
        self.driver.reset(point)
        self.seeded.emit()

    def on_tick(self) -> None:
        self.driver.tick()

    def stop(self) -> None:
        if self.state.phase is not DriverPhase.DEAD:
            self.driver.shutdown()
