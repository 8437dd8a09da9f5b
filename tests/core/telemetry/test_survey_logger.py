"""Tests for the session log files."""

from __future__ import annotations

import logging

import pytest

from fieldsurvey.core.orientation.heading_engine import HeadingEngine
from fieldsurvey.core.orientation.orientation_sample import HeadingSource, OrientationSample
from fieldsurvey.core.telemetry.survey_logger import SurveyLogger, get_survey_logger
from fieldsurvey.utils.config_sections import HeadingEngineConfig


@pytest.fixture()
def survey_logger(tmp_path):
    logger = get_survey_logger(session_dir=tmp_path / "session")
    yield logger
    logger.close()


def test_channel_files_created(survey_logger, tmp_path):
    session = tmp_path / "session"
    assert survey_logger.log_dir == session
    for name in ("orientation.log", "capture.log", "replay.log"):
        assert (session / name).exists()


def test_singleton_until_closed(survey_logger, tmp_path):
    assert SurveyLogger() is survey_logger
    assert get_survey_logger(session_dir=tmp_path / "other") is survey_logger


def test_engine_debug_lines_reach_orientation_log(survey_logger, tmp_path):
    engine = HeadingEngine(config=HeadingEngineConfig())
    engine.ingest(OrientationSample(HeadingSource.ABSOLUTE_COMPASS, alpha=10, beta=140))
    for handler in survey_logger.orientation.handlers:
        handler.flush()

    content = (tmp_path / "session" / "orientation.log").read_text()

    assert "[DEBUG]" in content
    assert "absolute_compass raw=190 smoothed=190 pitch=50" in content


def test_close_detaches_handlers(tmp_path):
    logger = get_survey_logger(session_dir=tmp_path / "closing")
    logger.close()

    assert logging.getLogger("survey.orientation").handlers == []
    reopened = get_survey_logger(session_dir=tmp_path / "reopened")
    assert reopened.log_dir == tmp_path / "reopened"
    reopened.close()
