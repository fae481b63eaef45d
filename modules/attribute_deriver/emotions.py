"""
Label vocabulary and label-driven emotion scoring.
"""

import random
from typing import FrozenSet, Iterable, Union

from shared.models.character import EMOTION_ORDER, EmotionVector, LabelScore

from .config import EMOTION_RANGES, LABEL_VOCABULARY

LabelLike = Union[LabelScore, str]


def label_parts(labels: Iterable[LabelLike]) -> FrozenSet[str]:
    """
    Lower-cased, comma-separated parts of every label.

    "Windsor tie, tie" contributes both "windsor tie" and "tie".
    """
    parts = set()
    for label in labels:
        text = label.label if isinstance(label, LabelScore) else str(label)
        for part in text.split(","):
            part = part.strip().lower()
            if part:
                parts.add(part)
    return frozenset(parts)


def matches_vocabulary(parts: FrozenSet[str], vocabulary: str) -> bool:
    """True if any label part is a word of the named vocabulary."""
    if not vocabulary:
        return False
    return any(word in parts for word in LABEL_VOCABULARY[vocabulary])


def emotion_vector_from_labels(labels: Iterable[LabelLike], rng: random.Random) -> EmotionVector:
    """
    Score emotions from classifier labels.

    Each emotion is drawn from a fixed range that depends on whether its
    vocabulary appears among the labels. Draws happen in enumeration order
    so a seeded rng gives reproducible vectors.
    """
    parts = label_parts(labels)
    scores = {}
    for emotion in EMOTION_ORDER:
        vocabulary, matched_range, default_range = EMOTION_RANGES[emotion]
        low, span = matched_range if matches_vocabulary(parts, vocabulary) else default_range
        scores[emotion] = low + rng.random() * span
    return EmotionVector(**scores)
