"""Tests for platform event -> OrientationSample conversion."""

from __future__ import annotations

from types import SimpleNamespace

from fieldsurvey.core.orientation.event_adapter import OrientationChannel, sample_from_event
from fieldsurvey.core.orientation.orientation_sample import HeadingSource


def test_absolute_channel_yields_absolute_compass():
    sample = sample_from_event(
        {"alpha": 12.0, "beta": 91.0, "gamma": -3.0, "timestamp": 5.0},
        OrientationChannel.ABSOLUTE,
    )

    assert sample.heading_source is HeadingSource.ABSOLUTE_COMPASS
    assert (sample.alpha, sample.beta, sample.gamma) == (12.0, 91.0, -3.0)
    assert sample.timestamp == 5.0


def test_relative_channel_prefers_webkit_compass_heading():
    sample = sample_from_event(
        {"alpha": 80.0, "beta": 88.0, "webkitCompassHeading": 279.0},
        OrientationChannel.RELATIVE,
    )

    assert sample.heading_source is HeadingSource.PLATFORM_COMPASS_HEADING
    assert sample.compass_heading == 279.0
    assert sample.heading_value == 279.0


def test_relative_channel_falls_back_to_device_relative_alpha():
    sample = sample_from_event({"alpha": 80.0, "beta": 88.0, "absolute": False},
                               OrientationChannel.RELATIVE)

    assert sample.heading_source is HeadingSource.DEVICE_RELATIVE_FALLBACK
    assert sample.heading_value == 80.0


def test_relative_channel_ignores_absolute_events():
    assert sample_from_event({"alpha": 80.0, "absolute": True}, OrientationChannel.RELATIVE) is None


def test_attribute_style_events_and_garbage_values():
    event = SimpleNamespace(alpha="15.5", beta="not-a-number", gamma=None)

    sample = sample_from_event(event, OrientationChannel.ABSOLUTE)

    assert sample.alpha == 15.5
    assert sample.beta is None
    assert sample.gamma is None


def test_null_webkit_heading_is_not_platform_source():
    sample = sample_from_event({"alpha": None, "beta": None, "webkitCompassHeading": None},
                               OrientationChannel.RELATIVE)

    assert sample.heading_source is HeadingSource.DEVICE_RELATIVE_FALLBACK
    assert sample.is_empty


def test_none_event_is_dropped():
    assert sample_from_event(None, OrientationChannel.ABSOLUTE) is None
