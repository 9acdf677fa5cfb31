"""
Simulation Parameters & Slider Conversions
==========================================
Holds the tunable physics values and converts them to and from the integer
slider positions and the text fields of the control panel.

Why is this file needed?
------------------------
The sliders work on the integer range [0, SLIDER_RANGE]. The mappings are
nonlinear so the perceptually useful part of each range gets most of the
slider travel. Position 0 is the top of the slider and the largest value.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass

from sandpendulum.config import (
    SLIDER_RANGE, DEFAULT_PERIOD_RATIO, DEFAULT_DRAG, DEFAULT_PERIOD_X,
    MIN_PERIOD_RATIO, MAX_PERIOD_RATIO, MIN_DRAG, MAX_DRAG
)
from sandpendulum.model.errors import InvalidParameterInput

RATIO_ANGLE_SPAN = 1.55  # tan() argument at slider position 0

# Plain decimal or exponent notation, no digit separators
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class SimulationParameters:
    """Live parameters read by the integrator on every step."""
    period_ratio: float = DEFAULT_PERIOD_RATIO
    drag: float = DEFAULT_DRAG
    period_x: float = DEFAULT_PERIOD_X

    @property
    def period_y(self) -> float:
        return self.period_x * self.period_ratio


def clamp_position(pos: int) -> int:
    return min(max(int(pos), 0), SLIDER_RANGE)


# --- SLIDER <-> VALUE ---

def slider_to_ratio(pos: int) -> float:
    return math.tan((SLIDER_RANGE - pos) * RATIO_ANGLE_SPAN / SLIDER_RANGE) + 1.0


def ratio_to_slider(ratio: float) -> int:
    return clamp_position(SLIDER_RANGE - round(SLIDER_RANGE * math.atan(ratio - 1.0) / RATIO_ANGLE_SPAN))


def slider_to_drag(pos: int) -> float:
    return (SLIDER_RANGE - pos) * 0.5 / SLIDER_RANGE


def drag_to_slider(drag: float) -> int:
    return clamp_position(SLIDER_RANGE - round(drag * SLIDER_RANGE / 0.5))


# --- TEXT <-> VALUE ---

def format_ratio(ratio: float) -> str:
    return f"{ratio:.4f}"


def format_drag(drag: float) -> str:
    return f"{drag:6.5f}"


def _parse_bounded(name: str, text: str, low: float, high: float) -> float:
    stripped = text.strip()
    if not _NUMBER_RE.fullmatch(stripped):
        raise InvalidParameterInput(name, text, low, high)
    value = float(stripped)
    if not (low <= value <= high):
        raise InvalidParameterInput(name, text, low, high)
    return value


def parse_ratio_text(text: str) -> float:
    """
    Parse a typed period ratio.

    Raises:
        InvalidParameterInput: If the text is not a number in [1.0, 50.0].
    """
    return _parse_bounded("period ratio", text, MIN_PERIOD_RATIO, MAX_PERIOD_RATIO)


def parse_drag_text(text: str) -> float:
    """
    Parse a typed drag value.

    Raises:
        InvalidParameterInput: If the text is not a number in [0.0, 0.5].
    """
    return _parse_bounded("drag", text, MIN_DRAG, MAX_DRAG)
