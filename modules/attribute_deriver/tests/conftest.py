"""Test fixtures for attribute deriver module."""

import pytest

from shared.models.character import (
    EmotionVector,
    Landmarks,
    PersonalityProfile,
    RawEstimate,
    RichEstimate,
    StyleVector,
)

LANDMARKS = Landmarks(
    left_eye=(35.0, 40.0),
    right_eye=(65.0, 40.0),
    nose=(50.0, 55.0),
    mouth=(50.0, 70.0),
    chin=(50.0, 90.0),
)


@pytest.fixture
def make_rich_estimate():
    """Factory for RichEstimates with chosen emotions and style."""
    def _make(age=34.6, emotions=None, style=None):
        return RichEstimate(
            age=age,
            gender="female",
            confidence=0.9,
            face_detected=True,
            face_shape="oval",
            eye_color="#4A90E2",
            hair_color="#8B4513",
            hair_style="curly",
            emotions=EmotionVector(**(emotions or {})),
            landmarks=LANDMARKS,
            style=StyleVector(**(style or {})),
        )
    return _make


@pytest.fixture
def happy_estimate(make_rich_estimate):
    """Happy 80, surprised 40, neutral 10; artistic style."""
    return make_rich_estimate(
        emotions={"happy": 80, "surprised": 40, "neutral": 10},
        style={"casual": 20, "formal": 10, "artistic": 90, "sporty": 30},
    )


@pytest.fixture
def raw_estimate():
    return RawEstimate(age=45, gender="male", confidence=0.6, face_detected=True)


@pytest.fixture
def sample_personality():
    return PersonalityProfile(
        energy=90,
        friendliness=40,
        creativity=75,
        confidence=60,
        dominant_style="sporty",
        dominant_emotion="happy",
        accessories=("hat", "watch", "headband"),
        special_features=("sparkly eyes", "dimples", "bright smile"),
    )
