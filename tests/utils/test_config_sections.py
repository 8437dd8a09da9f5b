"""Tests for typed config sections and their Config loaders."""

from __future__ import annotations

import pytest

from fieldsurvey.utils import config_sections
from fieldsurvey.utils.config import Config
from fieldsurvey.utils.config_sections import (
    HeadingEngineConfig,
    PhotoOverlayConfig,
    TelemetryConfig,
    load_heading_engine_config,
    load_photo_overlay_config,
    load_telemetry_config,
)


def test_loaders_mirror_config_defaults():
    engine = load_heading_engine_config()
    overlay = load_photo_overlay_config()
    telemetry = load_telemetry_config()

    assert engine.smoothing_window == Config.HEADING_SMOOTHING_WINDOW == 5
    assert engine.tilt_flip_pitch_deg == 45
    assert overlay.jpeg_quality == Config.CAPTURE_JPEG_QUALITY
    assert overlay.text_color == (255, 255, 255)
    assert telemetry.log_dir == Config.TELEMETRY_LOG_DIR


def test_dataclass_defaults_match_config():
    assert HeadingEngineConfig() == load_heading_engine_config()
    assert PhotoOverlayConfig() == load_photo_overlay_config()
    assert TelemetryConfig() == load_telemetry_config()


def test_loader_picks_up_config_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(Config, "HEADING_SMOOTHING_WINDOW", 8)
    monkeypatch.setattr(Config, "HEADING_TILT_FLIP_PITCH_DEG", 60)

    engine = config_sections.load_heading_engine_config()

    assert engine.smoothing_window == 8
    assert engine.tilt_flip_pitch_deg == 60


def test_loader_falls_back_when_constant_missing(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delattr(Config, "CAPTURE_JPEG_QUALITY")

    assert config_sections.load_photo_overlay_config().jpeg_quality == 95


@pytest.mark.parametrize(
    "kwargs",
    [
        {"smoothing_window": 0},
        {"tilt_flip_pitch_deg": 120},
        {"tilt_flip_pitch_deg": -1},
        {"seam_low_deg": 300, "seam_high_deg": 270},
    ],
)
def test_invalid_engine_config_rejected(kwargs):
    with pytest.raises(ValueError):
        HeadingEngineConfig(**kwargs)
