from dataclasses import dataclass
from typing import Optional


@dataclass
class HeadingState:
    """Current heading estimate, owned and mutated only by HeadingEngine"""
    raw_azimuth_deg: Optional[int] = None       # 0-359, North-referenced, before smoothing
    pitch_deg: Optional[int] = None             # -90..90, 0 = camera at horizon
    smoothed_azimuth_deg: Optional[int] = None  # 0-359, circular moving average
    has_received_any_sample: bool = False       # Diagnostics / permission state only


@dataclass(frozen=True)
class HeadingSnapshot:
    """Read-only view handed to display, map and metadata consumers"""
    azimuth: Optional[int]       # Smoothed azimuth
    pitch: Optional[int]
    direction: Optional[str]     # 16-point label of azimuth
    raw_azimuth: Optional[int]   # Unsmoothed, as embedded at capture time
