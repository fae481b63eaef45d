"""
Classifier response normalization.

Validates the label list returned by the remote classifier and expands it
into a RichEstimate.
"""

import random
from numbers import Real
from typing import Any, List, Optional
from uuid import UUID

from modules.attribute_deriver.emotions import (
    emotion_vector_from_labels,
    label_parts,
    matches_vocabulary,
)
from shared.errors import EstimatorError, RemoteFailureReason
from shared.models.character import (
    FACE_SHAPES,
    HAIR_STYLES,
    STYLE_ORDER,
    LabelScore,
    Landmarks,
    RichEstimate,
    StyleVector,
)

from .config import (
    EYE_COLOR_PALETTE,
    HAIR_COLOR_PALETTE,
    LANDMARK_NAMES,
    OTHER_AGE_RANGE,
    PERSON_AGE_RANGE,
    SYNTHETIC_FIELDS,
)


def _invalid(message: str, session_id: Optional[UUID]) -> EstimatorError:
    return EstimatorError(message, RemoteFailureReason.INVALID_RESPONSE, session_id=session_id)


def parse_labels(payload: Any, session_id: Optional[UUID] = None) -> List[LabelScore]:
    """
    Parse a classifier response body.

    Expected: a non-empty list of {"label": str, "score": number}; "confidence"
    is accepted in place of "score".

    Raises:
        EstimatorError: reason invalid_response for any other shape
    """
    if isinstance(payload, dict) and "error" in payload:
        raise _invalid(f"Classifier returned an error: {payload['error']}", session_id)
    if not isinstance(payload, list) or not payload:
        raise _invalid("Classifier response is not a non-empty list", session_id)

    labels = []
    for item in payload:
        if not isinstance(item, dict):
            raise _invalid("Classifier entry is not an object", session_id)
        label = item.get("label")
        score = item.get("score", item.get("confidence"))
        if not isinstance(label, str) or not label.strip():
            raise _invalid("Classifier entry has no label", session_id)
        if isinstance(score, bool) or not isinstance(score, Real) or not 0.0 <= score <= 1.0:
            raise _invalid(f"Classifier entry '{label}' has no valid score", session_id)
        labels.append(LabelScore(label=label, score=float(score)))
    return labels


def build_rich_estimate(labels: List[LabelScore], rng: random.Random) -> RichEstimate:
    """
    Expand classifier labels into a RichEstimate.

    Only confidence, face_detected and the label-dependent emotion ranges
    come from the classifier. Everything listed in SYNTHETIC_FIELDS is drawn
    from rng within fixed bounds.
    """
    parts = label_parts(labels)
    has_person = matches_vocabulary(parts, "person")

    emotions = emotion_vector_from_labels(labels, rng)
    low, span = PERSON_AGE_RANGE if has_person else OTHER_AGE_RANGE
    age = low + rng.random() * span
    gender = "male" if rng.random() > 0.5 else "female"

    landmarks = Landmarks(**{
        name: (rng.random() * 100, rng.random() * 100) for name in LANDMARK_NAMES
    })
    style = StyleVector(**{name: rng.random() * 100 for name in STYLE_ORDER})

    return RichEstimate(
        age=age,
        gender=gender,
        confidence=max(label.score for label in labels),
        face_detected=has_person,
        face_shape=rng.choice(FACE_SHAPES),
        eye_color=rng.choice(EYE_COLOR_PALETTE),
        hair_color=rng.choice(HAIR_COLOR_PALETTE),
        hair_style=rng.choice(HAIR_STYLES),
        emotions=emotions,
        landmarks=landmarks,
        style=style,
        labels=tuple(labels),
        synthetic_fields=SYNTHETIC_FIELDS,
    )
