import os

# Headless Qt and matplotlib for the whole session
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from sandpendulum.model.parameters import SimulationParameters


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def params() -> SimulationParameters:
    return SimulationParameters(period_ratio=1.02, drag=0.125, period_x=500.0)
