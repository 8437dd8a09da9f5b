"""
Circular moving average for compass azimuths.

A naive mean of 359° and 1° gives 180°, the opposite direction. The
smoother keeps the last N raw azimuths and, when the window straddles the
0°/360° seam, lifts the low half by 360° before averaging:

    [350, 355, 358, 2, 5] -> [350, 355, 358, 362, 365] -> 358

Usage:
    smoother = CircularSmoother(window=5)
    smoothed = smoother.update(raw_azimuth)
"""

from collections import deque
from typing import Optional, Tuple

import numpy as np

from fieldsurvey.core.orientation.compass import round_half_up


class CircularSmoother:
    """Fixed-size FIFO of raw azimuths with a seam-aware mean."""

    def __init__(self, window: int = 5, seam_low: float = 90.0, seam_high: float = 270.0) -> None:
        if window < 1:
            raise ValueError("window must be at least one")
        self.window = window
        self.seam_low = seam_low
        self.seam_high = seam_high
        self.buffer = deque(maxlen=window)  # Oldest evicted on overflow
        self.last_value: Optional[int] = None

    def update(self, azimuth: float) -> int:
        """Append a raw azimuth and return the refreshed smoothed value."""
        self.buffer.append(azimuth)
        self.last_value = self.mean()
        return self.last_value

    def mean(self) -> Optional[int]:
        """Integer circular mean of the buffer, in [0, 360); None when empty."""
        if not self.buffer:
            return None

        values = np.asarray(self.buffer, dtype=float)
        if self.straddles_seam():
            values = np.where(values < 180.0, values + 360.0, values)
            average = float(values.mean()) % 360.0
        else:
            average = float(values.mean())

        # 359.6 rounds up to 360
        return round_half_up(average) % 360

    def straddles_seam(self) -> bool:
        has_low = any(v < self.seam_low for v in self.buffer)
        has_high = any(v > self.seam_high for v in self.buffer)
        return has_low and has_high

    def values(self) -> Tuple[float, ...]:
        return tuple(self.buffer)

    def clear(self) -> None:
        self.buffer.clear()
        self.last_value = None

    def __len__(self) -> int:
        return len(self.buffer)
