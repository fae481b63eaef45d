"""
Local photo analysis.

Decodes a photo off the event loop and runs the pixel heuristic on it.
"""

import asyncio
from typing import Tuple

from shared.errors import ResourceError
from shared.image_processing import decode_rgba
from shared.logging import get_logger
from shared.models.character import RawEstimate, SourcePhoto

from .heuristics import analyze, analyze_from_filename

logger = get_logger("face_analyzer")


def _analyze_sync(photo: SourcePhoto, max_side: int) -> RawEstimate:
    with decode_rgba(photo, max_side=max_side) as pixels:
        height, width = pixels.shape[:2]
        return analyze(pixels, width=width, height=height)


def analyze_photo_sync(photo: SourcePhoto, max_side: int = 512) -> Tuple[RawEstimate, str]:
    """
    Analyze a photo, degrading to the filename heuristic when it cannot be decoded.

    Returns:
        (estimate, source) where source is "local" or "filename"
    """
    try:
        return _analyze_sync(photo, max_side), "local"
    except ResourceError as e:
        logger.warning(
            "Photo could not be decoded, using filename heuristic",
            extra={"photo_filename": photo.filename, "error": str(e)}
        )
        return analyze_from_filename(photo.filename), "filename"


async def analyze_photo(photo: SourcePhoto, max_side: int = 512) -> Tuple[RawEstimate, str]:
    """Async wrapper: decoding and pixel statistics run in a worker thread."""
    estimate, source = await asyncio.to_thread(analyze_photo_sync, photo, max_side)
    logger.info(
        "Local photo analysis complete",
        extra={
            "source": source,
            "face_detected": estimate.face_detected,
            "confidence": estimate.confidence,
        }
    )
    return estimate, source
