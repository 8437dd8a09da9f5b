"""
Field Survey heading engine.

Turns raw platform orientation samples into a stable North-referenced
azimuth and a horizon-referenced camera pitch for display, map-marker
rotation and capture metadata.
"""

__version__ = "0.1.0"
