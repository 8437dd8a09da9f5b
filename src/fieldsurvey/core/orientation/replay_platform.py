#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Replay platform for development and testing without a phone.

This module provides a drop-in OrientationPlatform that delivers recorded
orientation events to subscribers, synchronously and in file order. It can
also simulate the two ways a real platform refuses to deliver samples:
- supported=False: no orientation support at all
- grant_permission=False: consent required and refused

Recording format (JSON lines), one event per line:
    {"channel": "absolute", "alpha": 12.5, "beta": 91.0, "gamma": -1.2}
    {"channel": "relative", "alpha": 80.0, "beta": 88.0, "webkitCompassHeading": 279.0}

Usage:
    platform = ReplayPlatform.from_jsonl("recordings/walk.jsonl")
    tracker = OrientationTracker(HeadingEngine(), platform)
    tracker.start_tracking()
    platform.replay()
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from fieldsurvey.core.orientation.event_adapter import OrientationChannel
from fieldsurvey.core.orientation.orientation_tracker import EventCallback, PermissionResult

log = logging.getLogger("survey.replay")

ReplayEvent = Tuple[OrientationChannel, Dict[str, Any]]


def parse_channel(name: Optional[str]) -> OrientationChannel:
    """'absolute'/'deviceorientationabsolute' -> ABSOLUTE, anything else -> RELATIVE."""
    if name in ("absolute", OrientationChannel.ABSOLUTE.value):
        return OrientationChannel.ABSOLUTE
    return OrientationChannel.RELATIVE


def load_events(path: Union[str, Path]) -> List[ReplayEvent]:
    """Load a JSON-lines recording, skipping blank lines."""
    events: List[ReplayEvent] = []
    with open(path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as err:
                raise ValueError(f"{path}:{line_no}: invalid JSON ({err})") from err
            if not isinstance(record, dict):
                raise ValueError(f"{path}:{line_no}: expected an object")
            channel = parse_channel(record.pop("channel", None))
            events.append((channel, record))
    log.info(f"[Replay] Loaded {len(events)} events from {path}")
    return events


class ReplayPlatform:
    """In-process orientation platform fed from recorded events."""

    def __init__(
        self,
        events: Optional[Iterable[ReplayEvent]] = None,
        supported: bool = True,
        permission_required: bool = False,
        grant_permission: bool = True,
    ) -> None:
        self.events: List[ReplayEvent] = list(events or [])
        self.supported = supported
        self.permission_required = permission_required
        self.grant_permission = grant_permission
        self.permission_requests = 0
        self.subscribers: Dict[OrientationChannel, List[EventCallback]] = {
            OrientationChannel.ABSOLUTE: [],
            OrientationChannel.RELATIVE: [],
        }

    @classmethod
    def from_jsonl(cls, path: Union[str, Path], **kwargs) -> "ReplayPlatform":
        return cls(load_events(path), **kwargs)

    # OrientationPlatform API
    def supports_orientation(self) -> bool:
        return self.supported

    def requires_permission(self) -> bool:
        return self.permission_required

    def request_permission(self) -> PermissionResult:
        self.permission_requests += 1
        return PermissionResult.GRANTED if self.grant_permission else PermissionResult.DENIED

    def subscribe(self, channel: OrientationChannel, callback: EventCallback) -> None:
        if callback not in self.subscribers[channel]:
            self.subscribers[channel].append(callback)

    def unsubscribe(self, channel: OrientationChannel, callback: EventCallback) -> None:
        if callback in self.subscribers[channel]:
            self.subscribers[channel].remove(callback)

    # Delivery
    def emit(self, channel: OrientationChannel, event: Dict[str, Any]) -> int:
        """Deliver one event; returns how many subscribers received it."""
        callbacks = list(self.subscribers[channel])
        for callback in callbacks:
            callback(event)
        return len(callbacks)

    def replay(self) -> int:
        """Deliver every recorded event in order; returns the number emitted."""
        for channel, event in self.events:
            self.emit(channel, dict(event))
        return len(self.events)
