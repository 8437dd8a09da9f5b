"""
Centralized configuration for the Field Survey heading engine.

This module provides all configuration constants for:
- Heading estimation (smoothing window, tilt compensation, pitch remapping)
- Capture metadata (overlay geometry, JPEG quality)
- Session telemetry (log directory, console level)

The Config class contains all constants as class attributes, making them
accessible throughout the application without instantiation.

Usage:
    from fieldsurvey.utils.config import Config

    window = Config.HEADING_SMOOTHING_WINDOW
    if pitch > Config.HEADING_TILT_FLIP_PITCH_DEG:
        # Heading reference flipped by 180 degrees
"""

import logging

log = logging.getLogger(__name__)


class Config:
    """System configuration constants for the Field Survey app."""

    # ==========================================================================
    # HEADING ENGINE: Smoothing & Tilt Compensation
    # ==========================================================================

    HEADING_SMOOTHING_WINDOW = 5        # Last N raw azimuths (FIFO)
    HEADING_TILT_FLIP_PITCH_DEG = 45    # Camera pointing up past this flips heading 180°
    HEADING_PITCH_OFFSET_DEG = 90       # beta=90 (phone vertical) is the horizon
    HEADING_PITCH_LIMIT_DEG = 90        # Pitch clamped to ±90°

    # Wraparound detection bands for the circular moving average
    HEADING_SEAM_LOW_DEG = 90           # Any value below this...
    HEADING_SEAM_HIGH_DEG = 270         # ...together with any value above this straddles 0°/360°

    # ==========================================================================
    # CAPTURE METADATA: Overlay & Encoding
    # ==========================================================================

    OVERLAY_PADDING = 10                # px around the text block
    OVERLAY_LINE_HEIGHT = 20            # px between baselines
    OVERLAY_FONT_SCALE = 0.5
    OVERLAY_BAND_LINES = 6              # Band height in lines (5 text lines + margin)
    OVERLAY_BAND_OPACITY = 0.7          # rgba(0, 0, 0, 0.7)
    OVERLAY_TEXT_COLOR = (255, 255, 255)
    CAPTURE_JPEG_QUALITY = 95
    CAPTURE_FILENAME_PREFIX = "survey"

    # ==========================================================================
    # TELEMETRY: Session logs
    # ==========================================================================

    TELEMETRY_LOG_DIR = "logs"
    TELEMETRY_CONSOLE_LEVEL = "WARNING"
    TELEMETRY_FILE_LEVEL = "DEBUG"
