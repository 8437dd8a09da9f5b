"""
Orientation tracking lifecycle: capability check, consent, subscription.

The tracker is created by the composition root together with the engine it
feeds. It owns the platform subscription and nothing else:

- start_tracking(): idempotent while active. No orientation support is
  reported once (UNSUPPORTED) and the engine stays inert. Platforms that
  require consent are asked once; a denial is reported once and only an
  explicit request_permission() call asks again.
- stop_tracking(): deregisters from both channels. The engine keeps its last
  values and its smoothing buffer; a later start resumes into the same buffer.
- on_absolute_event() / on_relative_event(): platform callbacks. Each event
  is converted, ingested synchronously, and the fresh snapshot is pushed to
  heading listeners (display refresh, map marker rotation).

Usage:
    engine = HeadingEngine()
    tracker = OrientationTracker(engine, platform, status_callback=show_status)
    tracker.add_listener(lambda heading: marker.rotate(heading.azimuth))
    tracker.start_tracking()
"""

import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Set

from fieldsurvey.core.orientation.event_adapter import OrientationChannel, sample_from_event
from fieldsurvey.core.orientation.heading_engine import HeadingEngine
from fieldsurvey.core.orientation.heading_state import HeadingSnapshot

log = logging.getLogger("survey.orientation")

EventCallback = Callable[[Any], None]
HeadingListener = Callable[[HeadingSnapshot], None]


class PermissionResult(Enum):
    GRANTED = "granted"
    DENIED = "denied"


class TrackerStatus(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    STOPPED = "stopped"
    UNSUPPORTED = "unsupported"
    PERMISSION_DENIED = "permission_denied"
    PERMISSION_ERROR = "permission_error"


StatusCallback = Callable[[TrackerStatus, str], None]


class OrientationPlatform(Protocol):
    """Host platform orientation API (browser bridge, replay file, device SDK)."""

    def supports_orientation(self) -> bool: ...

    def requires_permission(self) -> bool: ...

    def request_permission(self) -> PermissionResult: ...

    def subscribe(self, channel: OrientationChannel, callback: EventCallback) -> None: ...

    def unsubscribe(self, channel: OrientationChannel, callback: EventCallback) -> None: ...


class OrientationTracker:
    """Connect a platform orientation stream to a HeadingEngine."""

    def __init__(
        self,
        engine: HeadingEngine,
        platform: OrientationPlatform,
        status_callback: Optional[StatusCallback] = None,
    ) -> None:
        self.engine = engine
        self.platform = platform
        self.status_callback = status_callback
        self.status = TrackerStatus.IDLE
        self.is_tracking = False
        self.permission_granted = False
        self._permission_requested = False
        self._reported: Set[TrackerStatus] = set()
        self._listeners: List[HeadingListener] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start_tracking(self) -> bool:
        """Begin delivering samples to the engine; True when tracking is active."""
        if self.is_tracking:
            return True

        if not self.platform.supports_orientation():
            self._report(TrackerStatus.UNSUPPORTED,
                         "Orientation sensors not supported on this device")
            return False

        if self.platform.requires_permission() and not self.permission_granted:
            if self._permission_requested:
                log.info("[Tracker] Permission previously refused, waiting for explicit request")
                return False
            return self.request_permission()

        self._subscribe()
        return True

    def request_permission(self) -> bool:
        """Ask the platform for consent; starts tracking when granted."""
        if not self.platform.supports_orientation():
            self._report(TrackerStatus.UNSUPPORTED,
                         "Orientation sensors not supported on this device")
            return False

        self._permission_requested = True
        log.info("[Tracker] Requesting device orientation permission")
        try:
            result = self.platform.request_permission()
        except Exception as err:
            log.error(f"[Tracker] Error requesting device orientation permission: {err}")
            self._report(TrackerStatus.PERMISSION_ERROR, "Could not request sensor permissions")
            return False

        if result is not PermissionResult.GRANTED:
            self._report(TrackerStatus.PERMISSION_DENIED, "Permission denied for orientation sensors")
            return False

        log.info("[Tracker] Device orientation permission granted")
        self.permission_granted = True
        # A fresh denial after a later revocation should be reported again
        self._reported.discard(TrackerStatus.PERMISSION_DENIED)
        self._reported.discard(TrackerStatus.PERMISSION_ERROR)
        if not self.is_tracking:
            self._subscribe()
        return True

    def stop_tracking(self) -> None:
        """Deregister from the platform; engine state stays frozen, not reset."""
        if not self.is_tracking:
            return
        self.platform.unsubscribe(OrientationChannel.ABSOLUTE, self.on_absolute_event)
        self.platform.unsubscribe(OrientationChannel.RELATIVE, self.on_relative_event)
        self.is_tracking = False
        self.status = TrackerStatus.STOPPED
        log.info("[Tracker] Orientation tracking stopped")

    def _subscribe(self) -> None:
        self.platform.subscribe(OrientationChannel.ABSOLUTE, self.on_absolute_event)
        self.platform.subscribe(OrientationChannel.RELATIVE, self.on_relative_event)
        self.is_tracking = True
        self.status = TrackerStatus.ACTIVE
        log.info("[Tracker] Orientation tracking started")

    def _report(self, status: TrackerStatus, message: str) -> None:
        """Surface a capability/permission problem once per tracker."""
        self.status = status
        if status in self._reported:
            return
        self._reported.add(status)
        log.warning(f"[Tracker] {message}")
        if self.status_callback is not None:
            self.status_callback(status, message)

    # ------------------------------------------------------------------
    # Platform callbacks
    # ------------------------------------------------------------------
    def on_absolute_event(self, event: Any) -> None:
        self._handle_event(event, OrientationChannel.ABSOLUTE)

    def on_relative_event(self, event: Any) -> None:
        self._handle_event(event, OrientationChannel.RELATIVE)

    def _handle_event(self, event: Any, channel: OrientationChannel) -> None:
        if not self.is_tracking:
            return
        sample = sample_from_event(event, channel)
        if sample is None:
            return
        self.engine.ingest(sample)
        self._notify_listeners()

    # ------------------------------------------------------------------
    # Heading listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: HeadingListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: HeadingListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_listeners(self) -> None:
        snapshot = self.engine.current_heading()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as err:
                log.warning(f"[Tracker] Heading listener failed: {err}")
