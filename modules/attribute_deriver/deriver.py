"""
Attribute derivation.

Turns an estimate into slider seeds, a personality profile and appearance
traits. Pure table rules: the same estimate always yields the same result.
"""

import math
from typing import Iterable, Tuple

from shared.logging import get_logger
from shared.models.character import (
    AGE_RANGE,
    AppearanceTraits,
    DerivedAttributes,
    EmotionVector,
    Estimate,
    InitialAttributes,
    PersonalityProfile,
    RichEstimate,
    StyleVector,
)

from .config import (
    ACCESSORIES_BY_STYLE,
    DEFAULT_ACCESSORIES,
    DEFAULT_AGE,
    DEFAULT_FEATURES,
    DEFAULT_HEIGHT_CM,
    DEFAULT_WEIGHT_KG,
    FEATURES_BY_EMOTION,
    NEUTRAL_EMOTIONS,
    NEUTRAL_STYLE,
)

logger = get_logger("attribute_deriver")

NEUTRAL_EMOTION_VECTOR = EmotionVector(**NEUTRAL_EMOTIONS)
NEUTRAL_STYLE_VECTOR = StyleVector(**NEUTRAL_STYLE)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def dominant_component(components: Iterable[Tuple[str, float]]) -> str:
    """Name of the largest component; ties go to the earliest one."""
    best_name, best_value = None, -math.inf
    for name, value in components:
        if value > best_value:
            best_name, best_value = name, value
    return best_name


def dominant_emotion(emotions: EmotionVector) -> str:
    return dominant_component(emotions.as_ordered())


def dominant_style(style: StyleVector) -> str:
    return dominant_component(style.as_ordered())


def initial_age(age: float) -> int:
    """Round half up and clamp to the slider range."""
    if not math.isfinite(age):
        return DEFAULT_AGE
    return int(clamp(math.floor(age + 0.5), AGE_RANGE[0], AGE_RANGE[1]))


def build_personality(emotions: EmotionVector, style: StyleVector) -> PersonalityProfile:
    """
    Personality scores from emotion and style vectors.

    Every score is clamped to [0, 100].
    """
    energy = clamp(emotions.happy + emotions.surprised + emotions.fearful * 0.5)
    friendliness = clamp(emotions.happy + (100 - emotions.angry) + emotions.neutral * 0.3)
    creativity = clamp(style.artistic + emotions.surprised * 0.4)
    confidence = clamp(emotions.neutral + emotions.happy + (100 - emotions.fearful))

    top_style = dominant_style(style)
    top_emotion = dominant_emotion(emotions)

    return PersonalityProfile(
        energy=energy,
        friendliness=friendliness,
        creativity=creativity,
        confidence=confidence,
        dominant_style=top_style,
        dominant_emotion=top_emotion,
        accessories=ACCESSORIES_BY_STYLE.get(top_style, DEFAULT_ACCESSORIES),
        special_features=FEATURES_BY_EMOTION.get(top_emotion, DEFAULT_FEATURES),
    )


def derive(estimate: Estimate) -> DerivedAttributes:
    """
    Derive initial attributes, personality and appearance from an estimate.

    Height and weight are never inferred from a photo; they always start
    at the fixed defaults.

    Args:
        estimate: RichEstimate from the remote estimator or RawEstimate
            from the local heuristic

    Returns:
        DerivedAttributes. For a RawEstimate the personality is computed
        against a neutral baseline and appearance is None.
    """
    initial = InitialAttributes(
        age=initial_age(estimate.age),
        height=DEFAULT_HEIGHT_CM,
        weight=DEFAULT_WEIGHT_KG,
    )

    if isinstance(estimate, RichEstimate):
        personality = build_personality(estimate.emotions, estimate.style)
        appearance = AppearanceTraits(
            face_shape=estimate.face_shape,
            eye_color=estimate.eye_color,
            hair_color=estimate.hair_color,
            hair_style=estimate.hair_style,
        )
    else:
        personality = build_personality(NEUTRAL_EMOTION_VECTOR, NEUTRAL_STYLE_VECTOR)
        appearance = None

    logger.debug(
        "Derived character attributes",
        extra={
            "initial_age": initial.age,
            "dominant_style": personality.dominant_style,
            "dominant_emotion": personality.dominant_emotion,
            "rich_estimate": appearance is not None,
        }
    )

    return DerivedAttributes(
        initial_attributes=initial,
        personality=personality,
        appearance=appearance,
    )
