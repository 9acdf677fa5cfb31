import math

import numpy as np
import pytest

from sandpendulum.config import SLIDER_RANGE
from sandpendulum.model.errors import InvalidParameterInput
from sandpendulum.model.parameters import (
    SimulationParameters, slider_to_ratio, ratio_to_slider, slider_to_drag, drag_to_slider,
    parse_ratio_text, parse_drag_text, format_ratio, format_drag, RATIO_ANGLE_SPAN
)


def test_defaults():
    p = SimulationParameters()
    assert p.period_ratio == 1.02
    assert p.drag == 0.125
    assert p.period_x == 500.0
    assert p.period_y == pytest.approx(510.0)


def test_default_slider_positions():
    assert ratio_to_slider(1.02) == 1974
    assert drag_to_slider(0.125) == 1500


def test_slider_extremes():
    assert slider_to_ratio(SLIDER_RANGE) == 1.0
    assert slider_to_ratio(0) == pytest.approx(math.tan(1.55) + 1.0)
    assert slider_to_drag(SLIDER_RANGE) == 0.0
    assert slider_to_drag(0) == 0.5


def test_every_position_round_trips():
    for pos in range(SLIDER_RANGE + 1):
        assert ratio_to_slider(slider_to_ratio(pos)) == pos
        assert drag_to_slider(slider_to_drag(pos)) == pos


def test_ratio_round_trip_within_half_a_step():
    # tan() is steep near the top, so the error is measured in slider (angle) space
    half_step = 0.5 * RATIO_ANGLE_SPAN / SLIDER_RANGE
    for ratio in np.linspace(1.0, 49.0, 500):
        back = slider_to_ratio(ratio_to_slider(ratio))
        assert abs(math.atan(back - 1.0) - math.atan(ratio - 1.0)) <= half_step + 1e-12


def test_drag_round_trip_within_half_a_step():
    half_step = 0.5 * 0.5 / SLIDER_RANGE
    for drag in np.linspace(0.0, 0.5, 500):
        assert abs(slider_to_drag(drag_to_slider(drag)) - drag) <= half_step + 1e-12


def test_inverse_is_clamped():
    # 50 is past the top of the tan() range
    assert ratio_to_slider(50.0) == 0
    assert drag_to_slider(0.6) == 0
    assert drag_to_slider(-0.1) == SLIDER_RANGE


@pytest.mark.parametrize("text, expected", [
    ("1.5", 1.5),
    (" 2.25 ", 2.25),
    ("1", 1.0),
    ("50.0", 50.0),
    ("1e1", 10.0),
    ("2.", 2.0),
    ("+3", 3.0),
])
def test_parse_ratio_valid(text, expected):
    assert parse_ratio_text(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "0.99", "50.01", "-2", "nan", "inf", "1.5x", "1_5", "1,5", "1e999"])
def test_parse_ratio_invalid(text):
    with pytest.raises(InvalidParameterInput):
        parse_ratio_text(text)


@pytest.mark.parametrize("text, expected", [("0", 0.0), ("0.5", 0.5), ("0.12500 ", 0.125), (".25", 0.25)])
def test_parse_drag_valid(text, expected):
    assert parse_drag_text(text) == expected


@pytest.mark.parametrize("text", ["-0.1", "0.51", "", "x", "0_1", "."])
def test_parse_drag_invalid(text):
    with pytest.raises(InvalidParameterInput):
        parse_drag_text(text)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        parse_drag_text("1.0")


def test_formatting():
    assert format_ratio(1.02) == "1.0200"
    assert format_drag(0.125) == "0.12500"
    assert format_drag(0.0) == "0.00000"
