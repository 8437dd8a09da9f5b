"""Orientation samples delivered by the host platform."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class HeadingSource(Enum):
    """Which platform reading the azimuth of a sample comes from."""

    ABSOLUTE_COMPASS = "absolute_compass"                  # alpha is North-referenced
    DEVICE_RELATIVE_FALLBACK = "device_relative_fallback"  # alpha relative to start pose
    PLATFORM_COMPASS_HEADING = "platform_compass_heading"  # e.g. iOS webkitCompassHeading


def finite_or_none(value) -> Optional[float]:
    """Coerce a raw reading to float, mapping missing/NaN/inf/garbage to None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True)
class OrientationSample:
    """Single orientation reading (degrees), consumed once by the engine."""

    heading_source: HeadingSource
    alpha: Optional[float] = None            # 0-360, rotation around vertical axis
    beta: Optional[float] = None             # -180-180, forward/back tilt
    gamma: Optional[float] = None            # -90-90, left/right tilt (unused)
    compass_heading: Optional[float] = None  # Required by PLATFORM_COMPASS_HEADING
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        for name in ("alpha", "beta", "gamma", "compass_heading"):
            object.__setattr__(self, name, finite_or_none(getattr(self, name)))

    @property
    def heading_value(self) -> Optional[float]:
        """Reading the active heading source depends on."""
        if self.heading_source is HeadingSource.PLATFORM_COMPASS_HEADING:
            return self.compass_heading
        return self.alpha

    @property
    def is_empty(self) -> bool:
        return self.heading_value is None and self.beta is None
