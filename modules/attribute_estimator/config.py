"""
Attribute estimator configuration.

Bounds for the fields a classifier cannot measure. They are generated, not
estimated, and reported as synthetic.
"""

from decimal import Decimal
from typing import Tuple

EYE_COLOR_PALETTE: Tuple[str, ...] = ("#4A90E2", "#7ED321", "#F5A623", "#D0021B", "#9013FE")
HAIR_COLOR_PALETTE: Tuple[str, ...] = ("#8B4513", "#000000", "#FFD700", "#FF69B4", "#C0C0C0")

# (low, span) in years
PERSON_AGE_RANGE: Tuple[float, float] = (20.0, 50.0)
OTHER_AGE_RANGE: Tuple[float, float] = (25.0, 40.0)

LANDMARK_NAMES: Tuple[str, ...] = ("left_eye", "right_eye", "nose", "mouth", "chin")

SYNTHETIC_FIELDS: Tuple[str, ...] = (
    "age",
    "gender",
    "face_shape",
    "eye_color",
    "hair_color",
    "hair_style",
    "emotions",
    "landmarks",
    "style",
)

# Hosted classification is billed per call
ESTIMATION_COST = Decimal("0.001")
