"""
Attribute deriver configuration.

Rule tables mapping estimates to personality, accessories and prompt phrases.
"""

from typing import Dict, Tuple

# Slider seed for measurements the photo cannot tell us
DEFAULT_HEIGHT_CM = 170
DEFAULT_WEIGHT_KG = 70
DEFAULT_AGE = 25

# RawEstimates carry no emotion/style vectors; they are derived against these
NEUTRAL_EMOTIONS: Dict[str, float] = {
    "happy": 0.0,
    "sad": 0.0,
    "angry": 0.0,
    "surprised": 0.0,
    "fearful": 0.0,
    "disgusted": 0.0,
    "neutral": 100.0,
}
NEUTRAL_STYLE: Dict[str, float] = {
    "casual": 50.0,
    "formal": 50.0,
    "artistic": 50.0,
    "sporty": 50.0,
}

ACCESSORIES_BY_STYLE: Dict[str, Tuple[str, ...]] = {
    "casual": ("hat", "watch", "bracelet"),
    "formal": ("glasses", "watch", "tie"),
    "artistic": ("glasses", "earrings", "necklace"),
    "sporty": ("hat", "watch", "headband"),
}
DEFAULT_ACCESSORIES: Tuple[str, ...] = ("glasses", "watch")

FEATURES_BY_EMOTION: Dict[str, Tuple[str, ...]] = {
    "happy": ("sparkly eyes", "dimples", "bright smile"),
    "sad": ("expressive eyes", "gentle features"),
    "angry": ("strong eyebrows", "determined look"),
    "surprised": ("wide eyes", "expressive eyebrows"),
    "fearful": ("gentle eyes", "soft features"),
    "disgusted": ("distinctive nose", "strong features"),
    "neutral": ("balanced features", "calm expression"),
}
DEFAULT_FEATURES: Tuple[str, ...] = ("unique smile", "expressive eyes")

# Classifier label vocabulary, matched against comma-separated label parts
LABEL_VOCABULARY: Dict[str, Tuple[str, ...]] = {
    "person": ("person", "human", "face", "portrait", "selfie"),
    "smile": ("smile", "grin", "happy", "laughing"),
    "serious": ("serious", "stern", "frown", "angry"),
    "surprise": ("surprise", "shock", "amazed"),
}

# emotion -> (vocabulary, (low, span) when matched, (low, span) otherwise)
EMOTION_RANGES: Dict[str, Tuple[str, Tuple[float, float], Tuple[float, float]]] = {
    "happy": ("smile", (70.0, 30.0), (0.0, 50.0)),
    "sad": ("serious", (30.0, 40.0), (0.0, 20.0)),
    "angry": ("serious", (20.0, 30.0), (0.0, 15.0)),
    "surprised": ("surprise", (60.0, 30.0), (0.0, 30.0)),
    "fearful": ("", (0.0, 20.0), (0.0, 20.0)),
    "disgusted": ("", (0.0, 10.0), (0.0, 10.0)),
    "neutral": ("person", (40.0, 40.0), (0.0, 30.0)),
}

# Prompt building
TRAIT_PHRASE_THRESHOLD = 70.0
TRAIT_PHRASES: Dict[str, str] = {
    "energy": "energetic and lively expression",
    "friendliness": "warm and welcoming smile",
    "creativity": "artistic and colorful style",
    "confidence": "bold and confident pose",
}
STYLE_PHRASES: Dict[str, str] = {
    "casual": "casual clothing",
    "formal": "smart formal outfit",
    "artistic": "artistic accessories",
    "sporty": "sporty outfit",
}
RENDER_STYLE_OPENINGS: Dict[str, str] = {
    "cute": "A cute pop character",
    "anime": "An anime character",
    "comic": "A comic book character",
    "pop_art": "A pop art portrait character",
    "watercolor": "A watercolor storybook character",
}
RENDER_STYLE_SUFFIXES: Dict[str, str] = {
    "cute": "pop art style, cartoon character, vibrant colors, cute and friendly",
    "anime": "anime style, cel shading, cartoon character, vibrant colors",
    "comic": "comic book style, bold ink outlines, cartoon character, flat colors",
    "pop_art": "pop art style, halftone dots, bold primary colors, cartoon character",
    "watercolor": "watercolor illustration, soft washes, cartoon character, pastel colors",
}
TALL_HEIGHT_CM = 185
SHORT_HEIGHT_CM = 155
SLIM_BMI = 18.5
STURDY_BMI = 30.0
MAX_PROMPT_LENGTH = 500
