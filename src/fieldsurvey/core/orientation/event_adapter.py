"""
Convert platform orientation events into OrientationSample objects.

Browsers deliver orientation on two channels:
- 'deviceorientationabsolute': alpha is North-referenced
- 'deviceorientation': alpha is relative unless event.absolute is set;
  iOS Safari adds webkitCompassHeading (already a compass heading)

Events arriving on the relative channel with absolute=True are dropped,
the absolute channel already delivers them.
"""

import time
from enum import Enum
from typing import Any, Mapping, Optional

from fieldsurvey.core.orientation.orientation_sample import HeadingSource, OrientationSample, finite_or_none


class OrientationChannel(Enum):
    ABSOLUTE = "deviceorientationabsolute"
    RELATIVE = "deviceorientation"


def _field(event: Any, name: str) -> Any:
    """Read a field from a mapping or an attribute-style event object."""
    if isinstance(event, Mapping):
        return event.get(name)
    return getattr(event, name, None)


def sample_from_event(event: Any, channel: OrientationChannel) -> Optional[OrientationSample]:
    """
    Build a sample from a raw platform event.

    Args:
        event: Mapping or object with alpha/beta/gamma/absolute/webkitCompassHeading
        channel: Which orientation channel delivered the event

    Returns:
        OrientationSample, or None when the event belongs to the other channel
    """
    if event is None:
        return None

    timestamp = finite_or_none(_field(event, "timestamp"))
    if timestamp is None:
        timestamp = time.time()

    if channel is OrientationChannel.ABSOLUTE:
        source = HeadingSource.ABSOLUTE_COMPASS
        compass_heading = None
    else:
        if _field(event, "absolute") is True:
            return None
        compass_heading = finite_or_none(_field(event, "webkitCompassHeading"))
        if compass_heading is not None:
            source = HeadingSource.PLATFORM_COMPASS_HEADING
        else:
            source = HeadingSource.DEVICE_RELATIVE_FALLBACK

    return OrientationSample(
        heading_source=source,
        alpha=_field(event, "alpha"),
        beta=_field(event, "beta"),
        gamma=_field(event, "gamma"),
        compass_heading=compass_heading,
        timestamp=timestamp,
    )
