"""Test fixtures for character flow module."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from modules.character_flow.controller import CharacterFlowController
from modules.gallery.store import InMemoryGallery
from shared.config import Settings
from shared.cost_tracking import CostTracker
from shared.models.character import (
    CostBreakdown,
    EmotionVector,
    Landmarks,
    RenderArtifact,
    RichEstimate,
    SourcePhoto,
    StyleVector,
)


@pytest.fixture
def flow_settings():
    return Settings(
        _env_file=None,
        huggingface_token="hf_test_token_1234",
        estimation_mode="remote",
        intake_delay_seconds=2.0,
    )


@pytest.fixture
def photo():
    return SourcePhoto(filename="old_man.jpg", content_type="image/jpeg", data=b"\xff\xd8\xff\xe0old-man")


@pytest.fixture
def rich_estimate():
    return RichEstimate(
        age=41.7,
        gender="male",
        confidence=0.83,
        face_detected=True,
        face_shape="square",
        eye_color="#4A90E2",
        hair_color="#C0C0C0",
        hair_style="short",
        emotions=EmotionVector(happy=80, surprised=40, neutral=10),
        landmarks=Landmarks(
            left_eye=(35.0, 40.0), right_eye=(65.0, 40.0), nose=(50.0, 55.0),
            mouth=(50.0, 70.0), chin=(50.0, 90.0),
        ),
        style=StyleVector(casual=30, formal=75, artistic=20, sporty=10),
    )


@pytest.fixture
def artifact():
    return RenderArtifact(
        image_url="https://cdn.test/cartoons/abc.png",
        cost=Decimal("0.021"),
        model_used="timbrooks/instruct-pix2pix",
        processing_time_ms=1500,
        breakdown=CostBreakdown(analysis=Decimal("0.001"), generation=Decimal("0.020"), total=Decimal("0.021")),
    )


@pytest.fixture
def mock_estimator(rich_estimate):
    estimator = MagicMock()
    estimator.model = "acme/face-classifier"
    estimator.estimate = AsyncMock(return_value=rich_estimate)
    return estimator


@pytest.fixture
def mock_renderer(artifact):
    renderer = MagicMock()
    renderer.render = AsyncMock(return_value=artifact)
    return renderer


@pytest.fixture
def gallery():
    return InMemoryGallery()


@pytest.fixture
def mock_sleep():
    return AsyncMock()


@pytest.fixture
def controller(flow_settings, mock_estimator, mock_renderer, gallery, mock_sleep):
    return CharacterFlowController(
        estimator=mock_estimator,
        renderer=mock_renderer,
        settings=flow_settings,
        cost_tracker=CostTracker(),
        gallery=gallery,
        sleep=mock_sleep,
    )


@pytest.fixture
def drive_to_confirm(photo):
    """Advance a controller from intake to confirm with a named character."""
    async def _drive(flow: CharacterFlowController, name: str = "Milo"):
        await flow.start()
        flow.set_name(name)
        await flow.submit_photo(photo)
        flow.confirm_age(40)
        flow.confirm_measures(180, 80)
        return flow.session
    return _drive
