"""
Capture metadata: what gets embedded with every survey photo.

At the instant of capture the metadata preparer reads the raw azimuth and
the pitch from the heading engine and combines them with the pin location,
the user's GPS fix and a local timestamp with its UTC offset. Unknown
heading values stay None and render as "N/A"; an unknown heading is never
reported as 0° (North).

Outputs:
- CaptureMetadata record (prepare_metadata)
- Photo filename and text sidecar filename
- Human-readable sidecar text (metadata_text)
"""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Optional, Union

from fieldsurvey.core.orientation.heading_engine import HeadingEngine
from fieldsurvey.core.orientation.heading_state import HeadingSnapshot

EARTH_RADIUS_M = 6371000
NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class PinLocation:
    """Surveyed subject position (WGS84 degrees)."""
    lat: float
    lon: float


@dataclass(frozen=True)
class UserLocation:
    """Camera position from the GPS collaborator."""
    lat: float
    lon: float
    accuracy: Optional[float] = None  # metres


@dataclass(frozen=True)
class TimezoneInfo:
    name: str
    offset: str  # "UTC+02:00"

    @property
    def full(self) -> str:
        return f"{self.name} ({self.offset})"


@dataclass(frozen=True)
class CaptureMetadata:
    # Pin location
    latitude: float
    longitude: float
    # Camera data
    azimuth: Optional[int]
    elevation: Optional[int]
    distance: Optional[float]
    # User position
    user_latitude: Optional[float]
    user_longitude: Optional[float]
    accuracy: Optional[float]
    # Time data
    datetime: str
    timezone: str
    timestamp: int  # Unix time, milliseconds
    # Settings
    locked: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def utc_offset_label(offset: Optional[timedelta]) -> str:
    """timedelta(hours=5, minutes=30) -> 'UTC+05:30'."""
    total_minutes = int((offset or timedelta(0)).total_seconds() // 60)
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"UTC{sign}{hours:02d}:{minutes:02d}"


def _local(now: Optional[datetime]) -> datetime:
    """Aware local datetime; naive inputs are taken as system local time."""
    if now is None:
        return datetime.now().astimezone()
    return now.astimezone() if now.tzinfo is None else now


def timezone_info(now: Optional[datetime] = None) -> TimezoneInfo:
    local = _local(now)
    name = getattr(local.tzinfo, "key", None) or local.tzname() or "UTC"
    return TimezoneInfo(name=name, offset=utc_offset_label(local.utcoffset()))


def format_datetime(now: Optional[datetime] = None) -> str:
    """Local wall-clock time as 'YYYY-MM-DD HH:MM:SS'."""
    return _local(now).strftime("%Y-%m-%d %H:%M:%S")


def prepare_metadata(
    pin: PinLocation,
    heading: Union[HeadingEngine, HeadingSnapshot, None],
    user_location: Optional[UserLocation] = None,
    locked: bool = False,
    now: Optional[datetime] = None,
) -> CaptureMetadata:
    """
    Assemble the metadata record for a capture.

    Args:
        pin: Subject location the photo documents
        heading: Engine (read at this instant) or a snapshot taken at capture
        user_location: Latest GPS fix, if any
        locked: Whether the camera position was locked by the user
        now: Capture time (defaults to the current local time)

    Returns:
        CaptureMetadata with raw azimuth and pitch at capture time
    """
    if isinstance(heading, HeadingEngine):
        azimuth, elevation = heading.raw_azimuth_deg, heading.pitch_deg
    elif isinstance(heading, HeadingSnapshot):
        azimuth, elevation = heading.raw_azimuth, heading.pitch
    else:
        azimuth, elevation = None, None

    local = _local(now)
    distance = None
    if user_location is not None:
        distance = round(haversine_m(user_location.lat, user_location.lon, pin.lat, pin.lon), 1)

    return CaptureMetadata(
        latitude=pin.lat,
        longitude=pin.lon,
        azimuth=azimuth,
        elevation=elevation,
        distance=distance,
        user_latitude=user_location.lat if user_location else None,
        user_longitude=user_location.lon if user_location else None,
        accuracy=user_location.accuracy if user_location else None,
        datetime=format_datetime(local),
        timezone=timezone_info(local).full,
        timestamp=int(local.timestamp() * 1000),
        locked=locked,
    )


def _or_na(value) -> str:
    return NOT_AVAILABLE if value is None else str(value)


def metadata_filename(metadata: CaptureMetadata, prefix: str = "survey") -> str:
    """survey_<lat>_<lon>_az<azimuth>_<datetime>.jpg, filesystem-safe."""
    stamp = re.sub(r"[:\s]", "-", metadata.datetime).replace(",", "")
    lat = f"{metadata.latitude:.6f}".replace(".", "_")
    lon = f"{metadata.longitude:.6f}".replace(".", "_")
    azimuth = "NA" if metadata.azimuth is None else str(int(metadata.azimuth))
    return f"{prefix}_{lat}_{lon}_az{azimuth}_{stamp}.jpg"


def sidecar_filename(filename: str) -> str:
    return filename.replace(".jpg", "_metadata.txt")


def metadata_text(metadata: CaptureMetadata) -> str:
    """Human-readable sidecar stored next to the photo."""
    accuracy = NOT_AVAILABLE if metadata.accuracy is None else f"{metadata.accuracy:g}"
    return f"""Field Survey Metadata
=====================

PIN LOCATION:
  Latitude:  {metadata.latitude}
  Longitude: {metadata.longitude}

CAMERA POSITION:
  User Lat:  {_or_na(metadata.user_latitude)}
  User Lon:  {_or_na(metadata.user_longitude)}
  Distance:  {_or_na(metadata.distance)} meters
  Azimuth:   {_or_na(metadata.azimuth)}° (from subject)
  Elevation: {_or_na(metadata.elevation)}°
  Accuracy:  ±{accuracy} meters

TIMESTAMP:
  Date/Time: {metadata.datetime}
  Timezone:  {metadata.timezone}
  Unix Time: {metadata.timestamp}

SETTINGS:
  Position Locked: {'Yes' if metadata.locked else 'No'}

Generated by Field Survey App
"""
