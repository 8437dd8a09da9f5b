"""Tests for recorded-event loading, replay and the replay CLI."""

from __future__ import annotations

import json

import pytest

from fieldsurvey import replay as replay_module
from fieldsurvey.core.orientation.event_adapter import OrientationChannel
from fieldsurvey.core.orientation.replay_platform import ReplayPlatform, load_events, parse_channel


def write_recording(path, records):
    lines = [json.dumps(record) for record in records]
    path.write_text("\n".join(lines[:1] + [""] + lines[1:]) + "\n")
    return path


@pytest.fixture()
def recording(tmp_path):
    return write_recording(
        tmp_path / "walk.jsonl",
        [
            {"channel": "absolute", "alpha": 350, "beta": 90},
            {"channel": "absolute", "alpha": 355, "beta": 90},
            {"channel": "deviceorientation", "alpha": 0, "beta": 90, "webkitCompassHeading": 5},
            {"channel": "relative", "alpha": 10, "beta": 90, "absolute": True},
        ],
    )


def test_parse_channel():
    assert parse_channel("absolute") is OrientationChannel.ABSOLUTE
    assert parse_channel("deviceorientationabsolute") is OrientationChannel.ABSOLUTE
    assert parse_channel("relative") is OrientationChannel.RELATIVE
    assert parse_channel(None) is OrientationChannel.RELATIVE


def test_load_events_skips_blank_lines(recording):
    events = load_events(recording)

    assert len(events) == 4
    assert events[0] == (OrientationChannel.ABSOLUTE, {"alpha": 350, "beta": 90})
    assert events[2][0] is OrientationChannel.RELATIVE


def test_load_events_rejects_invalid_json(tmp_path):
    path = tmp_path / "broken.jsonl"
    path.write_text('{"alpha": 1}\nnot json\n')

    with pytest.raises(ValueError, match=":2:"):
        load_events(path)


def test_load_events_reads_utf8_notes(tmp_path):
    path = tmp_path / "notes.jsonl"
    path.write_bytes('{"channel": "absolute", "alpha": 12, "note": "Gr\u00fcnhang \u00b0"}\n'.encode("utf-8"))

    events = load_events(path)

    assert events[0][1]["note"] == "Gr\u00fcnhang \u00b0"


def test_replay_delivers_in_order(recording):
    platform = ReplayPlatform.from_jsonl(recording)
    seen = []
    platform.subscribe(OrientationChannel.ABSOLUTE, lambda event: seen.append(("abs", event["alpha"])))
    platform.subscribe(OrientationChannel.RELATIVE, lambda event: seen.append(("rel", event["alpha"])))

    assert platform.replay() == 4
    assert seen == [("abs", 350), ("abs", 355), ("rel", 0), ("rel", 10)]


def test_cli_prints_heading_per_ingested_event(recording, capsys):
    exit_code = replay_module.main([str(recording)])

    out = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert out[0] == "[0000] azimuth=350 (N) raw=350 pitch=0"
    assert out[2] == "[0002] azimuth=357 (N) raw=5 pitch=0"
    assert out[-1] == "✅ Replayed 4 events, 3 azimuth updates"


def test_cli_quiet_prints_final_heading_only(recording, capsys):
    exit_code = replay_module.main([str(recording), "--quiet", "--window", "1"])

    out = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert out == ["[0002] azimuth=5 (N) raw=5 pitch=0", "✅ Replayed 4 events, 3 azimuth updates"]


def test_cli_missing_file(tmp_path, capsys):
    assert replay_module.main([str(tmp_path / "missing.jsonl")]) == 1
    assert "Could not load recording" in capsys.readouterr().err


def test_cli_rejects_bad_window(recording, capsys):
    assert replay_module.main([str(recording), "--window", "0"]) == 2
