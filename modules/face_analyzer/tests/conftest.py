"""Test fixtures for face analyzer module."""

import io

import numpy as np
import pytest
from PIL import Image

from shared.models.character import SourcePhoto

SKIN = (200, 150, 100, 255)
DARK = (10, 10, 10, 255)
YELLOW = (255, 255, 0, 255)


def make_frame(skin_count: int, total: int = 100, filler=DARK, side: int = 10) -> np.ndarray:
    """Frame with skin_count skin pixels followed by filler pixels."""
    rows = [SKIN] * skin_count + [filler] * (total - skin_count)
    return np.array(rows, dtype=np.uint8).reshape(side, total // side, 4)


@pytest.fixture
def frame_factory():
    """Builds 10x10 frames with a given number of skin pixels."""
    return make_frame


@pytest.fixture
def half_skin_frame():
    """10x10 frame, 50% skin-tone pixels on a dark background."""
    return make_frame(50)


@pytest.fixture
def bright_saturated_frame():
    """10x10 frame, 50% skin-tone pixels on a saturated yellow background."""
    return make_frame(50, filler=YELLOW)


def _png_bytes(width: int, height: int) -> bytes:
    image = Image.new("RGBA", (width, height), DARK)
    image.paste(Image.new("RGBA", (width // 2, height), SKIN), (0, 0))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def half_skin_photo():
    """Decodable PNG whose left half is skin-toned."""
    return SourcePhoto(filename="portrait.png", content_type="image/png", data=_png_bytes(40, 40))


@pytest.fixture
def large_half_skin_photo():
    """PNG larger than the analysis size limit."""
    return SourcePhoto(filename="large.png", content_type="image/png", data=_png_bytes(1200, 600))


@pytest.fixture
def corrupt_photo():
    """Photo whose bytes are not an image."""
    return SourcePhoto(filename="old_man_70yr.jpg", content_type="image/jpeg", data=b"definitely not a jpeg")
