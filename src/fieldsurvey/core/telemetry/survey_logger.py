"""
Dedicated session logger for heading and capture debugging.

This module provides a singleton logger that separates survey debugging logs
into dedicated files for easier analysis and troubleshooting.

Features:
- Singleton pattern (one instance per session)
- Separate log files for orientation, capture and replay
- DEBUG level logging to files
- WARNING level console output for capability/permission problems

Log Files:
- orientation.log: Per-sample heading updates and tracker lifecycle
- capture.log: Photo + sidecar writes
- replay.log: Recorded-event replays

Modules log through logging.getLogger("survey.<channel>"); this class only
attaches the handlers, so logging works (unhandled) without it.

Usage:
    from fieldsurvey.core.telemetry.survey_logger import get_survey_logger

    survey_logger = get_survey_logger(session_dir=Path("logs/session_2024-01-15_10-30-00"))
    survey_logger.orientation.debug("Heading updated")
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from fieldsurvey.utils.config_sections import TelemetryConfig, load_telemetry_config

CHANNELS = {
    "orientation": "orientation.log",
    "capture": "capture.log",
    "replay": "replay.log",
}


class SurveyLogger:
    """Singleton logger for heading and capture debugging."""

    _instance = None
    _initialized = False

    def __new__(cls, session_dir: Optional[Path] = None, config: Optional[TelemetryConfig] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, session_dir: Optional[Path] = None, config: Optional[TelemetryConfig] = None):
        if self._initialized:
            return

        self.config = config or load_telemetry_config()

        # Use provided session directory or create new one
        if session_dir is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            self.log_dir = Path(self.config.log_dir) / f"session_{timestamp}"
        else:
            self.log_dir = Path(session_dir)

        self.log_dir.mkdir(parents=True, exist_ok=True)

        for name, filename in CHANNELS.items():
            self._setup_logger(name, filename)

        type(self)._initialized = True

    def _setup_logger(self, name: str, filename: str):
        """Setup individual logger with file handler."""
        logger = logging.getLogger(f"survey.{name}")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        # Clear existing handlers
        logger.handlers.clear()

        # File handler
        fh = logging.FileHandler(self.log_dir / filename, mode='w')
        fh.setLevel(getattr(logging, self.config.file_level.upper(), logging.DEBUG))

        # Console handler (capability/permission warnings)
        ch = logging.StreamHandler()
        ch.setLevel(getattr(logging, self.config.console_level.upper(), logging.WARNING))

        # Format
        formatter = logging.Formatter(
            '%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s',
            datefmt='%H:%M:%S'
        )
        fh.setFormatter(formatter)
        ch.setFormatter(formatter)

        logger.addHandler(fh)
        logger.addHandler(ch)

        setattr(self, name, logger)

    def close(self):
        """Close all handlers and allow a new session to be opened."""
        for name in CHANNELS:
            logger = getattr(self, name, None)
            if logger:
                for handler in logger.handlers[:]:
                    handler.close()
                    logger.removeHandler(handler)
                logger.propagate = True
        type(self)._instance = None
        type(self)._initialized = False


# Global instance
_survey_logger = None


def get_survey_logger(session_dir: Optional[Path] = None) -> SurveyLogger:
    """Get or create survey logger instance."""
    global _survey_logger
    if _survey_logger is None or not SurveyLogger._initialized:
        _survey_logger = SurveyLogger(session_dir=session_dir)
    return _survey_logger
