"""
Typed configuration sections for the Field Survey heading engine.

Each section groups the Config constants that one subsystem reads, such as
the smoothing window of the engine or the band layout of captured photos.
The load_*_config() functions build a section from the current Config
values, so tests can monkeypatch a single constant or pass a whole section.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass
class HeadingEngineConfig:
    """Configuration for heading estimation and smoothing."""

    # Circular moving average
    smoothing_window: int = 5  # Raw azimuths kept in the FIFO buffer

    # Tilt compensation
    tilt_flip_pitch_deg: float = 45.0  # Pitch above this flips the heading by 180°

    # Platform beta -> camera pitch remapping
    pitch_offset_deg: float = 90.0
    pitch_limit_deg: float = 90.0

    # Wraparound detection
    seam_low_deg: float = 90.0
    seam_high_deg: float = 270.0

    def __post_init__(self) -> None:
        if self.smoothing_window < 1:
            raise ValueError("smoothing_window must be at least one")
        if not 0.0 <= self.tilt_flip_pitch_deg <= self.pitch_limit_deg:
            raise ValueError("tilt_flip_pitch_deg must lie within the pitch limit")
        if not 0.0 <= self.seam_low_deg < self.seam_high_deg <= 360.0:
            raise ValueError("seam bands must satisfy 0 <= low < high <= 360")


@dataclass
class PhotoOverlayConfig:
    """Configuration for the metadata band baked into captured photos."""

    padding: int = 10
    line_height: int = 20
    font_scale: float = 0.5
    band_lines: int = 6
    band_opacity: float = 0.7
    text_color: Tuple[int, int, int] = field(default_factory=lambda: (255, 255, 255))
    jpeg_quality: int = 95
    filename_prefix: str = "survey"


@dataclass
class TelemetryConfig:
    """Configuration for session log files."""

    log_dir: str = "logs"
    console_level: str = "WARNING"
    file_level: str = "DEBUG"


def load_heading_engine_config() -> HeadingEngineConfig:
    """
    Load heading engine configuration from Config with fallback defaults.

    Returns:
        HeadingEngineConfig with values from Config or defaults
    """
    from fieldsurvey.utils.config import Config

    return HeadingEngineConfig(
        smoothing_window=getattr(Config, "HEADING_SMOOTHING_WINDOW", 5),
        tilt_flip_pitch_deg=getattr(Config, "HEADING_TILT_FLIP_PITCH_DEG", 45.0),
        pitch_offset_deg=getattr(Config, "HEADING_PITCH_OFFSET_DEG", 90.0),
        pitch_limit_deg=getattr(Config, "HEADING_PITCH_LIMIT_DEG", 90.0),
        seam_low_deg=getattr(Config, "HEADING_SEAM_LOW_DEG", 90.0),
        seam_high_deg=getattr(Config, "HEADING_SEAM_HIGH_DEG", 270.0),
    )


def load_photo_overlay_config() -> PhotoOverlayConfig:
    """
    Load photo overlay configuration from Config with fallback defaults.

    Returns:
        PhotoOverlayConfig with values from Config or defaults
    """
    from fieldsurvey.utils.config import Config

    return PhotoOverlayConfig(
        padding=getattr(Config, "OVERLAY_PADDING", 10),
        line_height=getattr(Config, "OVERLAY_LINE_HEIGHT", 20),
        font_scale=getattr(Config, "OVERLAY_FONT_SCALE", 0.5),
        band_lines=getattr(Config, "OVERLAY_BAND_LINES", 6),
        band_opacity=getattr(Config, "OVERLAY_BAND_OPACITY", 0.7),
        text_color=tuple(getattr(Config, "OVERLAY_TEXT_COLOR", (255, 255, 255))),
        jpeg_quality=getattr(Config, "CAPTURE_JPEG_QUALITY", 95),
        filename_prefix=getattr(Config, "CAPTURE_FILENAME_PREFIX", "survey"),
    )


def load_telemetry_config() -> TelemetryConfig:
    """
    Load telemetry configuration from Config with fallback defaults.

    Returns:
        TelemetryConfig with values from Config or defaults
    """
    from fieldsurvey.utils.config import Config

    return TelemetryConfig(
        log_dir=getattr(Config, "TELEMETRY_LOG_DIR", "logs"),
        console_level=getattr(Config, "TELEMETRY_CONSOLE_LEVEL", "WARNING"),
        file_level=getattr(Config, "TELEMETRY_FILE_LEVEL", "DEBUG"),
    )
