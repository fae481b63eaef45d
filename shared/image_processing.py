"""
Image processing utilities.

Decodes user photos into RGBA pixel buffers for local analysis. Decoded
buffers are scoped: they are only valid inside the decode_rgba() block and
are released on every exit path.
"""

import base64
import io
from contextlib import contextmanager
from typing import Iterator

import numpy as np
from PIL import Image, UnidentifiedImageError

from shared.errors import ResourceError
from shared.logging import get_logger
from shared.models.character import SourcePhoto

logger = get_logger("image_processing")


@contextmanager
def decode_rgba(photo: SourcePhoto, max_side: int = 512) -> Iterator[np.ndarray]:
    """
    Decode a photo into an (height, width, 4) uint8 RGBA array.

    The image is downscaled so its longest side is at most max_side
    (aspect ratio preserved).

    Args:
        photo: Source photo
        max_side: Longest side of the decoded buffer in pixels

    Yields:
        Read-only RGBA pixel array

    Raises:
        ResourceError: If the photo cannot be decoded
    """
    if not photo.data:
        raise ResourceError("Photo has no image data")

    source = None
    try:
        source = Image.open(io.BytesIO(photo.data))
        # JPEG only: decode at reduced scale instead of full resolution
        source.draft("RGB", (max_side, max_side))
        source.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        if source is not None:
            source.close()
        logger.warning(
            f"Failed to decode photo: {str(e)}",
            extra={"photo_filename": photo.filename, "size_bytes": photo.size_bytes}
        )
        raise ResourceError(f"Failed to decode photo: {str(e)}") from e
    except MemoryError as e:
        if source is not None:
            source.close()
        logger.warning(
            "Not enough memory to decode photo",
            extra={"photo_filename": photo.filename, "size_bytes": photo.size_bytes}
        )
        raise ResourceError("Not enough memory to decode photo") from e

    rgba = None
    try:
        rgba = source.convert("RGBA")
        if max(rgba.size) > max_side:
            rgba.thumbnail((max_side, max_side), Image.Resampling.LANCZOS)
        pixels = np.asarray(rgba, dtype=np.uint8)
        pixels.flags.writeable = False
        yield pixels
    except MemoryError as e:
        raise ResourceError("Not enough memory to decode photo") from e
    finally:
        if rgba is not None:
            rgba.close()
        source.close()


def encode_image_bytes(data: bytes, mime_type: str = "image/png") -> str:
    """Encode raw image bytes as a data URI."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
