"""
Heading estimation from platform orientation samples.

This module turns raw, device-relative orientation samples into a stable
North-referenced azimuth and a horizon-referenced camera pitch.

Processing per sample:
1. Pitch: platform beta (0 = flat, 90 = vertical) remapped to camera pitch
   (0 = horizon, +90 = straight up, -90 = straight down), clamped to ±90°
2. Azimuth candidate by heading source (absolute alpha, platform compass
   heading, or 360 - alpha for the device-relative fallback)
3. Tilt compensation: past 45° of upward pitch the heading reference flips,
   so the candidate is rotated by 180°
4. Integer raw azimuth fed to a circular moving average (last 5 values)

The engine never raises from ingest(): missing or non-finite fields simply
mean "no update this tick". It holds no reference to the platform; a tracker
or any other single writer feeds it, any number of readers query it.

Usage:
    engine = HeadingEngine()
    engine.ingest(OrientationSample(HeadingSource.ABSOLUTE_COMPASS, alpha=10, beta=95))
    heading = engine.current_heading()
    print(heading.azimuth, heading.pitch, heading.direction)
"""

import logging
from typing import Optional, Tuple

from fieldsurvey.core.orientation.circular_smoother import CircularSmoother
from fieldsurvey.core.orientation.compass import cardinal_direction, clamp, round_half_up, wrap_360
from fieldsurvey.core.orientation.heading_state import HeadingSnapshot, HeadingState
from fieldsurvey.core.orientation.orientation_sample import HeadingSource, OrientationSample
from fieldsurvey.utils.config_sections import HeadingEngineConfig, load_heading_engine_config

log = logging.getLogger("survey.orientation")


class HeadingEngine:
    """Maintain azimuth/pitch estimates from a stream of orientation samples."""

    def __init__(self, config: Optional[HeadingEngineConfig] = None) -> None:
        self.config = config or load_heading_engine_config()
        self.state = HeadingState()
        self.smoother = CircularSmoother(
            window=self.config.smoothing_window,
            seam_low=self.config.seam_low_deg,
            seam_high=self.config.seam_high_deg,
        )
        self.samples_ingested = 0
        self.azimuth_updates = 0

    # ------------------------------------------------------------------
    # Ingestion (single writer)
    # ------------------------------------------------------------------
    def ingest(self, sample: OrientationSample) -> None:
        """Process one orientation sample and refresh the heading state."""
        self.samples_ingested += 1

        true_pitch = self.pitch_from_beta(sample.beta)
        pitch = round_half_up(true_pitch) if true_pitch is not None else None
        effective_pitch = true_pitch if true_pitch is not None else self.state.pitch_deg

        candidate = self.azimuth_candidate(sample)
        raw_azimuth = None
        if candidate is not None:
            corrected = self.tilt_compensate(candidate, effective_pitch)
            raw_azimuth = round_half_up(corrected) % 360

        # All fields of one sample are committed together
        if pitch is not None:
            self.state.pitch_deg = pitch
        if raw_azimuth is not None:
            self.state.raw_azimuth_deg = raw_azimuth
            self.state.smoothed_azimuth_deg = self.smoother.update(raw_azimuth)
            self.azimuth_updates += 1
        self.state.has_received_any_sample = True

        if sample.is_empty:
            log.debug("[Heading] %s sample without usable fields, skipped",
                      sample.heading_source.value)
        else:
            log.debug("[Heading] %s raw=%s smoothed=%s pitch=%s",
                      sample.heading_source.value, self.state.raw_azimuth_deg,
                      self.state.smoothed_azimuth_deg, self.state.pitch_deg)

    def pitch_from_beta(self, beta: Optional[float]) -> Optional[float]:
        """beta=90 (phone vertical, camera forward) -> 0, beta=180 -> +90, beta=0 -> -90."""
        if beta is None:
            return None
        limit = self.config.pitch_limit_deg
        return clamp(beta - self.config.pitch_offset_deg, -limit, limit)

    def azimuth_candidate(self, sample: OrientationSample) -> Optional[float]:
        """North-referenced heading candidate before tilt compensation."""
        value = sample.heading_value
        if value is None:
            return None
        if sample.heading_source is HeadingSource.DEVICE_RELATIVE_FALLBACK:
            # Approximation only: no magnetometer reference is guaranteed
            return wrap_360(360 - value)
        return wrap_360(value)

    def tilt_compensate(self, candidate: float, pitch: Optional[float]) -> float:
        """Rotate by 180° once the camera points more than halfway up."""
        if pitch is not None and pitch > self.config.tilt_flip_pitch_deg:
            return wrap_360(candidate + 180)
        return candidate

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------
    def current_heading(self) -> HeadingSnapshot:
        """Snapshot for display and metadata consumers; all None until first valid ingest."""
        azimuth = self.state.smoothed_azimuth_deg
        return HeadingSnapshot(
            azimuth=azimuth,
            pitch=self.state.pitch_deg,
            direction=cardinal_direction(azimuth) if azimuth is not None else None,
            raw_azimuth=self.state.raw_azimuth_deg,
        )

    @property
    def raw_azimuth_deg(self) -> Optional[int]:
        return self.state.raw_azimuth_deg

    @property
    def smoothed_azimuth_deg(self) -> Optional[int]:
        return self.state.smoothed_azimuth_deg

    @property
    def pitch_deg(self) -> Optional[int]:
        return self.state.pitch_deg

    @property
    def has_received_any_sample(self) -> bool:
        return self.state.has_received_any_sample

    @property
    def buffer(self) -> Tuple[float, ...]:
        return self.smoother.values()

    def get_status_summary(self) -> dict:
        """Counters for diagnostics panels and session logs."""
        return {
            'samples_ingested': self.samples_ingested,
            'azimuth_updates': self.azimuth_updates,
            'buffer_size': len(self.smoother),
            'has_received_any_sample': self.state.has_received_any_sample,
            'current_azimuth': self.state.smoothed_azimuth_deg,
            'current_pitch': self.state.pitch_deg,
        }
