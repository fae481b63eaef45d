"""
Attribute deriver module.

Deterministic rules from estimates to slider seeds and personality, the
classifier label vocabulary, and render prompt synthesis.
"""

from .deriver import derive, dominant_emotion, dominant_style
from .emotions import emotion_vector_from_labels, label_parts, matches_vocabulary
from .prompts import build_render_prompt

__all__ = [
    "derive",
    "dominant_emotion",
    "dominant_style",
    "emotion_vector_from_labels",
    "label_parts",
    "matches_vocabulary",
    "build_render_prompt",
]
