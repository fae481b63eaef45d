"""
Pixel-level face heuristics.

Derives a rough age/gender/confidence guess from skin-tone, brightness and
saturation statistics of an RGBA buffer. Pure and deterministic; never raises.
"""

import re
from typing import Optional, Union

import numpy as np

from shared.logging import get_logger
from shared.models.character import RawEstimate

from .config import (
    BASE_AGE,
    BRIGHT_BRIGHTNESS,
    DARK_BRIGHTNESS,
    ESTIMATED_AGE_RANGE,
    FACE_RATIO_RANGE,
    FEMALE_KEYWORDS,
    FEMALE_MIN_BRIGHTNESS,
    FEMALE_MIN_SATURATION,
    FILENAME_AGE_PATTERN,
    FILENAME_CONFIDENCE,
    FILENAME_DEFAULT_AGE,
    HIGH_SATURATION,
    LOW_SATURATION,
    MALE_KEYWORDS,
    MALE_MAX_SATURATION,
    MAX_PIXEL_CONFIDENCE,
    SKIN_BLUE_RANGE,
    SKIN_GREEN_RANGE,
    SKIN_RB_RATIO_RANGE,
    SKIN_RED_RANGE,
    SKIN_RG_RATIO_RANGE,
)

logger = get_logger("face_analyzer.heuristics")

PixelBuffer = Union[np.ndarray, bytes, bytearray, memoryview]

NO_FACE = RawEstimate(age=BASE_AGE, gender="unknown", confidence=0.0, face_detected=False)


def _as_rgba_rows(pixels: PixelBuffer, width: Optional[int], height: Optional[int]) -> Optional[np.ndarray]:
    """Flatten a buffer into an (N, 4) float array, or None if it is unusable."""
    try:
        if isinstance(pixels, np.ndarray):
            arr = pixels
        else:
            arr = np.frombuffer(bytes(pixels), dtype=np.uint8)
        if arr.size == 0 or arr.size % 4 != 0:
            return None
        if width is not None and height is not None and arr.size != width * height * 4:
            return None
        return arr.reshape(-1, 4).astype(np.float64)
    except (TypeError, ValueError) as e:
        logger.warning(f"Unusable pixel buffer: {str(e)}")
        return None


def skin_tone_mask(rgb: np.ndarray) -> np.ndarray:
    """Boolean mask of skin-tone-like pixels for an (N, 3+) float array."""
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    rg_ratio = r / (g + 1)
    rb_ratio = r / (b + 1)
    return (
        (r > SKIN_RED_RANGE[0]) & (r < SKIN_RED_RANGE[1])
        & (g > SKIN_GREEN_RANGE[0]) & (g < SKIN_GREEN_RANGE[1])
        & (b > SKIN_BLUE_RANGE[0]) & (b < SKIN_BLUE_RANGE[1])
        & (r > g) & (g > b)
        & (rg_ratio > SKIN_RG_RATIO_RANGE[0]) & (rg_ratio < SKIN_RG_RATIO_RANGE[1])
        & (rb_ratio > SKIN_RB_RATIO_RANGE[0]) & (rb_ratio < SKIN_RB_RATIO_RANGE[1])
    )


def estimate_age(brightness: float, saturation: float) -> int:
    """Darker, less saturated photos read older."""
    age = BASE_AGE
    if brightness < DARK_BRIGHTNESS:
        age += 10
    elif brightness > BRIGHT_BRIGHTNESS:
        age -= 5
    if saturation < LOW_SATURATION:
        age += 5
    elif saturation > HIGH_SATURATION:
        age -= 5
    return max(ESTIMATED_AGE_RANGE[0], min(ESTIMATED_AGE_RANGE[1], age))


def estimate_gender(saturation: float, brightness: float) -> str:
    if saturation > FEMALE_MIN_SATURATION and brightness > FEMALE_MIN_BRIGHTNESS:
        return "female"
    if saturation < MALE_MAX_SATURATION:
        return "male"
    return "unknown"


def analyze(
    pixels: PixelBuffer,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> RawEstimate:
    """
    Analyze an RGBA buffer for face-like skin-tone statistics.

    Args:
        pixels: (height, width, 4) array or flat RGBA bytes
        width: Buffer width in pixels (checked against the buffer size when given)
        height: Buffer height in pixels

    Returns:
        RawEstimate. Empty/mis-sized buffers and frames without a face-like
        region yield the neutral default (age 30, unknown, confidence 0).
    """
    rows = _as_rgba_rows(pixels, width, height)
    if rows is None:
        return NO_FACE

    total = rows.shape[0]
    rgb = rows[:, :3]

    skin_ratio = float(np.count_nonzero(skin_tone_mask(rgb))) / total
    brightness = float(rgb.sum(axis=1).mean() / 3)

    channel_max = rgb.max(axis=1)
    channel_min = rgb.min(axis=1)
    safe_max = np.where(channel_max > 0, channel_max, 1.0)
    saturation = float(np.where(channel_max > 0, (channel_max - channel_min) / safe_max, 0.0).mean())

    face_detected = FACE_RATIO_RANGE[0] < skin_ratio < FACE_RATIO_RANGE[1]
    logger.debug(
        "Pixel statistics computed",
        extra={
            "skin_ratio": round(skin_ratio, 4),
            "brightness": round(brightness, 2),
            "saturation": round(saturation, 4),
            "face_detected": face_detected,
        }
    )
    if not face_detected:
        return NO_FACE

    return RawEstimate(
        age=estimate_age(brightness, saturation),
        gender=estimate_gender(saturation, brightness),
        confidence=min(skin_ratio * 2, MAX_PIXEL_CONFIDENCE),
        face_detected=True,
    )


def analyze_from_filename(filename: str) -> RawEstimate:
    """
    Guess age and gender from a filename.

    Only used when no pixel data is available.
    """
    lower = (filename or "").lower()

    age = FILENAME_DEFAULT_AGE
    match = re.search(FILENAME_AGE_PATTERN, lower)
    if match:
        age = int(match.group(1))

    # "female"/"woman" contain "male"/"man", so check them first
    gender = "unknown"
    if any(k in lower for k in FEMALE_KEYWORDS):
        gender = "female"
    elif any(k in lower for k in MALE_KEYWORDS):
        gender = "male"

    return RawEstimate(
        age=age,
        gender=gender,
        confidence=FILENAME_CONFIDENCE,
        face_detected=False,
    )
