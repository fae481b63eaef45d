"""Test fixtures for attribute estimator module."""

import json
import random

import httpx
import pytest

from shared.config import Settings
from shared.models.character import SourcePhoto

CLASSIFIER_LABELS = [
    {"label": "portrait, headshot", "score": 0.62},
    {"label": "smile", "score": 0.21},
    {"label": "Windsor tie", "score": 0.05},
]


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        huggingface_token="hf_test_token_1234",
        hf_api_url="https://inference.test/models",
        estimator_model="acme/face-classifier",
        request_timeout_seconds=5.0,
    )


@pytest.fixture
def no_token_settings():
    return Settings(_env_file=None, huggingface_token=None, hf_api_url="https://inference.test/models")


@pytest.fixture
def sample_photo():
    return SourcePhoto(filename="old_man.jpg", content_type="image/jpeg", data=b"\xff\xd8\xff\xe0fake-jpeg")


@pytest.fixture
def seeded_rng():
    return random.Random(42)


@pytest.fixture
def recorded_transport():
    """
    MockTransport factory recording every request.

    Returns (transport, requests); handler is a callable(request) -> Response.
    """
    def _make(handler):
        requests = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        return httpx.MockTransport(_record), requests
    return _make


@pytest.fixture
def labels_response():
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=json.dumps(CLASSIFIER_LABELS), headers={"content-type": "application/json"})
    return _handler
