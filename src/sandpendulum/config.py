"""
Configuration & Constants
=========================
This module serves as the central registry for the simulation constants.

Why is this file needed?
------------------------
1. Single source: the slider resolution, the default physics parameters and
   the pacing of the driver are used by the model, the controller and the GUI.
2. Tunables: a few values (period X, capacity, pacing) are meant to be user
   settable. They are bundled in `SimulationConfig` so the command line can
   override them without touching module globals.

Exports:
    APP_NAME (str): Visible application name (window caption prefix).
    SLIDER_RANGE (int): Integer resolution of the parameter sliders.
    SimulationConfig: Dataclass with the run-time tunables.
"""
from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction

APP_NAME: str = "Sand Pendulum"

# Colours as RGB tuples, converted to QColor by the view layer
BACKGROUND_RGB: tuple[int, int, int] = (230, 230, 230)
PAPER_RGB: tuple[int, int, int] = (255, 255, 255)
INK_RGB: tuple[int, int, int] = (0, 0, 0)

# Slider resolution (reduces roundoff glitches)
SLIDER_RANGE: int = 2000

# Physics defaults
DEFAULT_PERIOD_RATIO: float = 1.02  # period Y / period X
DEFAULT_DRAG: float = 0.125  # velocity loss per X period
DEFAULT_PERIOD_X: float = 500.0  # simulation ticks

# Valid text-entry ranges
MIN_PERIOD_RATIO: float = 1.0
MAX_PERIOD_RATIO: float = 50.0
MIN_DRAG: float = 0.0
MAX_DRAG: float = 0.5

# Pacing
MAX_POINTS: int = 50_000
POINTS_PER_TIMER: int = 250
POINTS_PER_SECOND: int = 100_000
PROGRESS_EVERY: int = 1000  # caption update interval (points)

# Print / export surfaces keep a margin around the drawing
PRINT_MARGIN: Fraction = Fraction(5, 6)
EXPORT_IMAGE_SIZE: tuple[int, int] = (2400, 2400)


@dataclass
class SimulationConfig:
    """Run-time tunables of one simulation run."""
    period_x: float = DEFAULT_PERIOD_X
    max_points: int = MAX_POINTS
    points_per_timer: int = POINTS_PER_TIMER
    points_per_second: int = POINTS_PER_SECOND

    def __post_init__(self) -> None:
        if self.period_x <= 0.0:
            raise ValueError(f"period_x must be positive, got {self.period_x}")
        if self.max_points < 2:
            raise ValueError(f"max_points must be at least 2, got {self.max_points}")
        if self.points_per_timer < 1 or self.points_per_second < 1:
            raise ValueError("points_per_timer and points_per_second must be positive")

    @property
    def timer_interval_ms(self) -> int:
        """Wall-clock interval between two driver ticks."""
        return max(1, self.points_per_timer * 1000 // self.points_per_second)
