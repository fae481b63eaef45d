"""Test fixtures for cartoon renderer module."""

import httpx
import pytest

from shared.config import Settings
from shared.models.character import CharacterAttributes, SourcePhoto


@pytest.fixture
def render_settings():
    return Settings(
        _env_file=None,
        huggingface_token="hf_test_token_1234",
        hf_api_url="https://inference.test/models",
        render_model="timbrooks/instruct-pix2pix",
        request_timeout_seconds=5.0,
    )


@pytest.fixture
def photo():
    return SourcePhoto(filename="me.png", content_type="image/png", data=b"\x89PNG\r\n\x1a\nsource")


@pytest.fixture
def named_attributes():
    return CharacterAttributes(name="Milo", age=32, height=178, weight=74)


@pytest.fixture
def make_client():
    """Builds an AsyncClient whose transport records requests and answers with handler."""
    def _make(handler):
        requests = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(_record)), requests
    return _make
