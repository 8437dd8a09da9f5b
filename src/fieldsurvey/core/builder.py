"""
Composition root for the field-survey heading stack.

Creates the single HeadingEngine of a session and hands it, by reference,
to the components that feed or read it:
- OrientationTracker (the only writer)
- display / map-marker listeners (readers, pushed a snapshot per sample)
- SurveySystem.capture() (reads raw azimuth + pitch at capture time)

Usage:
    builder = SurveyBuilder()
    system = builder.build_full_system(platform, status_callback=show_status)
    system.tracker.start_tracking()
    system.capture(frame, PinLocation(46.5, 6.6), user_location, Path("captures"))
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from fieldsurvey.core.metadata.capture_metadata import (
    CaptureMetadata,
    PinLocation,
    UserLocation,
    prepare_metadata,
)
from fieldsurvey.core.metadata.photo_overlay import save_capture
from fieldsurvey.core.orientation.heading_engine import HeadingEngine
from fieldsurvey.core.orientation.orientation_tracker import (
    HeadingListener,
    OrientationPlatform,
    OrientationTracker,
    StatusCallback,
)
from fieldsurvey.utils.config_sections import (
    HeadingEngineConfig,
    PhotoOverlayConfig,
    load_heading_engine_config,
    load_photo_overlay_config,
)

log = logging.getLogger("survey.capture")


class SurveySystem:
    """Engine + tracker pair with the capture entry point."""

    def __init__(
        self,
        engine: HeadingEngine,
        tracker: OrientationTracker,
        overlay_config: Optional[PhotoOverlayConfig] = None,
    ) -> None:
        self.engine = engine
        self.tracker = tracker
        self.overlay_config = overlay_config or load_photo_overlay_config()

    def capture(
        self,
        image: np.ndarray,
        pin: PinLocation,
        user_location: Optional[UserLocation],
        directory: Path,
        locked: bool = False,
        now: Optional[datetime] = None,
    ) -> Tuple[CaptureMetadata, Path, Path]:
        """Read the heading at this instant, then write photo + sidecar."""
        metadata = prepare_metadata(pin, self.engine, user_location, locked=locked, now=now)
        if metadata.azimuth is None:
            log.warning("[Capture] No heading available, azimuth recorded as N/A")
        photo_path, sidecar_path = save_capture(directory, image, metadata, self.overlay_config)
        return metadata, photo_path, sidecar_path


class SurveyBuilder:
    """
    Builder that creates every heading-stack dependency.

    Responsibilities:
    - Load the typed config sections
    - Create the engine and the tracker that feeds it
    - Attach display / map listeners
    """

    def __init__(
        self,
        engine_config: Optional[HeadingEngineConfig] = None,
        overlay_config: Optional[PhotoOverlayConfig] = None,
    ) -> None:
        self.engine_config = engine_config or load_heading_engine_config()
        self.overlay_config = overlay_config or load_photo_overlay_config()

    def build_engine(self) -> HeadingEngine:
        log.debug("[Builder] Creating HeadingEngine")
        return HeadingEngine(config=self.engine_config)

    def build_tracker(
        self,
        engine: HeadingEngine,
        platform: OrientationPlatform,
        status_callback: Optional[StatusCallback] = None,
    ) -> OrientationTracker:
        log.debug("[Builder] Creating OrientationTracker")
        return OrientationTracker(engine, platform, status_callback=status_callback)

    def build_full_system(
        self,
        platform: OrientationPlatform,
        status_callback: Optional[StatusCallback] = None,
        display_listener: Optional[HeadingListener] = None,
        marker_listener: Optional[HeadingListener] = None,
    ) -> SurveySystem:
        """
        Build the complete heading stack.

        Args:
            platform: Orientation sample source
            status_callback: Receives capability/permission problems (once each)
            display_listener: Refreshes azimuth/pitch text per sample
            marker_listener: Rotates the user's map marker per sample

        Returns:
            SurveySystem ready for start_tracking()
        """
        engine = self.build_engine()
        tracker = self.build_tracker(engine, platform, status_callback)
        for listener in (display_listener, marker_listener):
            if listener is not None:
                tracker.add_listener(listener)
        log.info("[Builder] Heading stack built")
        return SurveySystem(engine, tracker, self.overlay_config)


def build_survey_system(platform: OrientationPlatform, **kwargs) -> SurveySystem:
    """Convenience function: build the full stack with config defaults."""
    return SurveyBuilder().build_full_system(platform, **kwargs)
