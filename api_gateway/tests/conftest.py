"""Test fixtures for the HTTP layer."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api_gateway.dependencies import get_registry
from api_gateway.main import app
from api_gateway.services.session_registry import SessionRegistry
from modules.character_flow.controller import CharacterFlowController
from modules.gallery.store import InMemoryGallery
from shared.config import Settings
from shared.cost_tracking import CostTracker
from shared.models.character import (
    EmotionVector,
    Landmarks,
    RenderArtifact,
    RichEstimate,
    StyleVector,
)


@pytest.fixture
def api_settings():
    return Settings(
        _env_file=None,
        huggingface_token="hf_test_token_1234",
        estimation_mode="remote",
        intake_delay_seconds=0.0,
    )


@pytest.fixture
def fake_estimator():
    estimator = MagicMock()
    estimator.model = "acme/face-classifier"
    estimator.estimate = AsyncMock(return_value=RichEstimate(
        age=33.2,
        gender="female",
        confidence=0.9,
        face_detected=True,
        face_shape="oval",
        eye_color="#2E8B57",
        hair_color="#8B4513",
        hair_style="long",
        emotions=EmotionVector(happy=70, neutral=20),
        landmarks=Landmarks(
            left_eye=(36.0, 41.0), right_eye=(64.0, 41.0), nose=(50.0, 56.0),
            mouth=(50.0, 71.0), chin=(50.0, 89.0),
        ),
        style=StyleVector(casual=60, formal=20, artistic=40, sporty=10),
    ))
    return estimator


@pytest.fixture
def fake_renderer():
    renderer = MagicMock()
    renderer.render = AsyncMock(return_value=RenderArtifact(
        image_url="https://cdn.test/cartoons/ada.png",
        cost=Decimal("0.021"),
        model_used="timbrooks/instruct-pix2pix",
        processing_time_ms=900,
    ))
    return renderer


@pytest.fixture
def gallery():
    return InMemoryGallery()


@pytest.fixture
def registry(api_settings, fake_estimator, fake_renderer, gallery):
    def _factory(shared_gallery):
        return CharacterFlowController(
            estimator=fake_estimator,
            renderer=fake_renderer,
            settings=api_settings,
            cost_tracker=CostTracker(),
            gallery=shared_gallery,
        )
    return SessionRegistry(controller_factory=_factory, gallery=gallery)


@pytest.fixture
def client(registry):
    """Test client wired to an isolated registry."""
    app.dependency_overrides[get_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def photo_upload():
    return {"photo": ("ada.png", b"\x89PNG\r\n\x1a\nada-portrait", "image/png")}
