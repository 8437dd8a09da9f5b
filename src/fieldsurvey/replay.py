#!/usr/bin/env python3
"""
Replay a recorded orientation session through the heading engine.

Usage:
    fieldsurvey-replay recordings/walk.jsonl
    fieldsurvey-replay recordings/walk.jsonl --window 8 --session-dir logs/replay

Each recorded event is delivered through the same tracker path a live
platform uses; the heading after every event is printed as one line.
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from fieldsurvey.core.builder import SurveyBuilder
from fieldsurvey.core.orientation.heading_state import HeadingSnapshot
from fieldsurvey.core.orientation.replay_platform import ReplayPlatform
from fieldsurvey.core.telemetry.survey_logger import get_survey_logger
from fieldsurvey.utils.config_sections import load_heading_engine_config


def format_heading(index: int, heading: HeadingSnapshot) -> str:
    def show(value):
        return "--" if value is None else str(value)

    return (f"[{index:04d}] azimuth={show(heading.azimuth)} ({show(heading.direction)}) "
            f"raw={show(heading.raw_azimuth)} pitch={show(heading.pitch)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay orientation events through the heading engine")
    parser.add_argument('recording', type=Path, help='JSON-lines orientation recording')
    parser.add_argument('--window', type=int, default=None, help='Smoothing window override')
    parser.add_argument('--session-dir', type=Path, default=None, help='Write session logs here')
    parser.add_argument('--quiet', action='store_true', help='Only print the final heading')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.session_dir is not None:
        get_survey_logger(session_dir=args.session_dir)

    try:
        platform = ReplayPlatform.from_jsonl(args.recording)
    except (OSError, ValueError) as err:
        print(f"❌ Could not load recording: {err}", file=sys.stderr)
        return 1

    engine_config = load_heading_engine_config()
    if args.window is not None:
        try:
            engine_config = replace(engine_config, smoothing_window=args.window)
        except ValueError as err:
            print(f"❌ {err}", file=sys.stderr)
            return 2

    lines: List[str] = []

    def on_heading(heading: HeadingSnapshot) -> None:
        lines.append(format_heading(len(lines), heading))
        if not args.quiet:
            print(lines[-1])

    system = SurveyBuilder(engine_config=engine_config).build_full_system(
        platform,
        status_callback=lambda status, message: print(f"⚠️  {message}", file=sys.stderr),
        display_listener=on_heading,
    )
    if not system.tracker.start_tracking():
        return 1

    emitted = platform.replay()
    system.tracker.stop_tracking()

    final = system.engine.current_heading()
    if args.quiet:
        print(format_heading(max(0, len(lines) - 1), final))
    print(f"✅ Replayed {emitted} events, {system.engine.azimuth_updates} azimuth updates")
    return 0


if __name__ == "__main__":
    sys.exit(main())
