"""
Bake capture metadata into the photo pixels.

The overlay is a semi-transparent black band across the bottom of the image
with one white text line per field (location, azimuth/distance, elevation,
date, timezone). OpenCV's Hershey fonts have no degree glyph, so angles are
written as "deg".

Usage:
    overlaid = draw_metadata_overlay(frame, metadata)
    photo_path, sidecar_path = save_capture(Path("captures"), frame, metadata)
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import numpy as np

from fieldsurvey.core.metadata.capture_metadata import (
    NOT_AVAILABLE,
    CaptureMetadata,
    metadata_filename,
    metadata_text,
    sidecar_filename,
)
from fieldsurvey.utils.config_sections import PhotoOverlayConfig, load_photo_overlay_config

log = logging.getLogger("survey.capture")


def _fmt(value, suffix: str = "") -> str:
    return NOT_AVAILABLE if value is None else f"{value}{suffix}"


def overlay_lines(metadata: CaptureMetadata) -> List[str]:
    """Text lines drawn on the band, top to bottom."""
    return [
        f"Location: {metadata.latitude:.6f}, {metadata.longitude:.6f}",
        f"Azimuth: {_fmt(metadata.azimuth, ' deg')} | Distance: {_fmt(metadata.distance, 'm')}",
        f"Elevation: {_fmt(metadata.elevation, ' deg')}",
        f"Date: {metadata.datetime}",
        f"Timezone: {metadata.timezone}",
    ]


def draw_metadata_overlay(
    image: np.ndarray,
    metadata: CaptureMetadata,
    config: Optional[PhotoOverlayConfig] = None,
) -> np.ndarray:
    """
    Draw the metadata band onto a copy of the image.

    Args:
        image: BGR (H, W, 3) or grayscale (H, W) uint8 frame
        metadata: Record to render
        config: Overlay geometry (defaults from Config)

    Returns:
        New BGR image with the band blended in; the input is not modified
    """
    cfg = config or load_photo_overlay_config()
    if image.ndim == 2:
        canvas = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    else:
        canvas = image.copy()

    height, width = canvas.shape[:2]
    band_height = min(height, cfg.line_height * cfg.band_lines + cfg.padding * 2)
    top = height - band_height

    # Semi-transparent black band
    band = canvas[top:height, 0:width]
    darkened = np.zeros_like(band)
    canvas[top:height, 0:width] = cv2.addWeighted(
        band, 1.0 - cfg.band_opacity, darkened, cfg.band_opacity, 0
    )

    y = top + cfg.padding + cfg.line_height
    for line in overlay_lines(metadata):
        if y > height:
            break
        cv2.putText(
            canvas,
            line,
            (cfg.padding, y),
            cv2.FONT_HERSHEY_SIMPLEX,
            cfg.font_scale,
            tuple(int(c) for c in cfg.text_color),
            1,
            cv2.LINE_AA,
        )
        y += cfg.line_height

    return canvas


def encode_jpeg(image: np.ndarray, quality: int = 95) -> bytes:
    ok, buffer = cv2.imencode(".jpg", image, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    if not ok:
        raise RuntimeError("JPEG encoding failed")
    return buffer.tobytes()


def save_capture(
    directory: Path,
    image: np.ndarray,
    metadata: CaptureMetadata,
    config: Optional[PhotoOverlayConfig] = None,
) -> Tuple[Path, Path]:
    """
    Write the overlaid JPEG and its text sidecar.

    Returns:
        (photo_path, sidecar_path)
    """
    cfg = config or load_photo_overlay_config()
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    filename = metadata_filename(metadata, prefix=cfg.filename_prefix)
    photo_path = directory / filename
    sidecar_path = directory / sidecar_filename(filename)

    overlaid = draw_metadata_overlay(image, metadata, cfg)
    photo_path.write_bytes(encode_jpeg(overlaid, cfg.jpeg_quality))
    sidecar_path.write_text(metadata_text(metadata), encoding="utf-8")

    log.info(f"[Capture] Saved {photo_path.name} (azimuth={_fmt(metadata.azimuth)}, "
             f"elevation={_fmt(metadata.elevation)})")
    return photo_path, sidecar_path
