"""Tests for the compass rose and angle helpers."""

from __future__ import annotations

import pytest

from fieldsurvey.core.orientation.compass import (
    COMPASS_POINTS,
    cardinal_direction,
    clamp,
    round_half_up,
    wrap_360,
)


@pytest.mark.parametrize(
    "value, expected",
    [(2.5, 3), (3.5, 4), (-0.5, 0), (-1.5, -1), (11.6, 12), (359.4, 359), (359.5, 360)],
)
def test_round_half_up_matches_browser_rounding(value, expected):
    assert round_half_up(value) == expected


def test_wrap_and_clamp():
    assert wrap_360(370) == 10
    assert wrap_360(-10) == 350
    assert wrap_360(360) == 0
    assert clamp(120, -90, 90) == 90
    assert clamp(-120, -90, 90) == -90
    assert clamp(12, -90, 90) == 12


@pytest.mark.parametrize(
    "azimuth, expected",
    [
        (0, "N"),
        (11, "N"),
        (12, "NNE"),
        (23, "NNE"),
        (45, "NE"),
        (90, "E"),
        (180, "S"),
        (270, "W"),
        (337, "NNW"),
        (349, "N"),
        (359, "N"),
        (360, "N"),
    ],
)
def test_cardinal_direction(azimuth, expected):
    assert cardinal_direction(azimuth) == expected


def test_every_compass_point_at_its_bearing():
    for index, label in enumerate(COMPASS_POINTS):
        assert cardinal_direction(index * 22.5) == label


def test_rose_order_is_clockwise_from_north():
    assert len(COMPASS_POINTS) == 16
    assert COMPASS_POINTS[0] == "N"
    assert COMPASS_POINTS[4] == "E"
    assert COMPASS_POINTS[8] == "S"
    assert COMPASS_POINTS[12] == "W"
    assert COMPASS_POINTS[-1] == "NNW"
