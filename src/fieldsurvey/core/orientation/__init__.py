"""
Heading estimation

Components:
- HeadingEngine: sample ingestion, tilt compensation, circular smoothing
- OrientationTracker: capability/permission lifecycle and platform callbacks
- cardinal_direction: 16-point compass label for an azimuth
"""

from .compass import cardinal_direction
from .heading_engine import HeadingEngine
from .heading_state import HeadingSnapshot, HeadingState
from .orientation_sample import HeadingSource, OrientationSample
from .orientation_tracker import OrientationTracker, PermissionResult, TrackerStatus
