"""Tests for the seam-aware moving average."""

from __future__ import annotations

import pytest

from fieldsurvey.core.orientation.circular_smoother import CircularSmoother


def feed(smoother, values):
    result = None
    for value in values:
        result = smoother.update(value)
    return result


def test_plain_mean_without_wraparound():
    smoother = CircularSmoother(window=5)
    assert feed(smoother, [10, 12, 11, 13, 12]) == 12
    assert not smoother.straddles_seam()


def test_wraparound_window_averages_near_north():
    smoother = CircularSmoother(window=5)
    result = feed(smoother, [350, 355, 358, 2, 5])

    assert smoother.straddles_seam()
    assert result == 358


def test_two_readings_either_side_of_north_do_not_average_to_south():
    smoother = CircularSmoother(window=5)
    result = feed(smoother, [359, 1])
    assert result == 0


def test_high_values_alone_are_not_treated_as_straddling():
    smoother = CircularSmoother(window=5)
    assert feed(smoother, [300, 310]) == 305
    assert not smoother.straddles_seam()


def test_fifo_eviction_drops_oldest_value():
    smoother = CircularSmoother(window=5)
    feed(smoother, [100, 10, 10, 10, 10])
    assert smoother.mean() == 28

    result = smoother.update(10)

    assert len(smoother) == 5
    assert smoother.values() == (10, 10, 10, 10, 10)
    assert result == 10


def test_result_always_in_range():
    smoother = CircularSmoother(window=3)
    for value in [359, 359, 359, 0, 359, 1, 180, 270, 89, 271]:
        result = smoother.update(value)
        assert 0 <= result < 360


def test_empty_and_clear():
    smoother = CircularSmoother(window=5)
    assert smoother.mean() is None

    smoother.update(42)
    assert smoother.last_value == 42

    smoother.clear()
    assert len(smoother) == 0
    assert smoother.mean() is None
    assert smoother.last_value is None


def test_window_must_be_positive():
    with pytest.raises(ValueError):
        CircularSmoother(window=0)
