"""Shared test fixtures."""

import io

import pytest
from PIL import Image

from shared.models.character import SourcePhoto


@pytest.fixture
def png_photo():
    """Factory for a solid-color PNG photo of a given size."""
    def _make(width: int = 32, height: int = 24, color=(200, 150, 120, 255), filename: str = "portrait.png"):
        buffer = io.BytesIO()
        Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
        return SourcePhoto(filename=filename, content_type="image/png", data=buffer.getvalue())
    return _make
