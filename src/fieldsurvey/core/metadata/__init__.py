"""Capture metadata: sidecar text, filenames and the baked-in photo overlay."""
