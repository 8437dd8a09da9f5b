"""
Angle helpers and the 16-point compass rose.

All angles are degrees, 0 = North, increasing clockwise. Rounding is
half-up (2.5 -> 3, -0.5 -> 0) to match what the browser reports, not
Python's banker's rounding.
"""

import math

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)
SECTOR_WIDTH_DEG = 360.0 / len(COMPASS_POINTS)  # 22.5°


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +inf."""
    return int(math.floor(value + 0.5))


def wrap_360(angle: float) -> float:
    """Normalize to [0, 360)."""
    return angle % 360


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def cardinal_direction(azimuth: float) -> str:
    """
    Convert an azimuth to its 16-point compass label.

    Each label covers 22.5° centred on its bearing, so N spans
    [348.75, 11.25). Values that round to index 16 (e.g. 360) wrap to N.

    Args:
        azimuth: Heading in degrees

    Returns:
        One of N, NNE, NE, ... NNW
    """
    index = round_half_up(azimuth / SECTOR_WIDTH_DEG) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]
