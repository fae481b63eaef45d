"""
Face analyzer constants.

Thresholds for the skin-tone heuristic and the fixed results it falls back to.
"""

# Skin-tone rule: channel ranges are exclusive bounds
SKIN_RED_RANGE = (95, 255)
SKIN_GREEN_RANGE = (40, 255)
SKIN_BLUE_RANGE = (20, 255)
SKIN_RG_RATIO_RANGE = (1.0, 2.5)   # R / (G + 1)
SKIN_RB_RATIO_RANGE = (1.2, 3.0)   # R / (B + 1)

# A face-like region covers part of the frame, never (almost) all of it
FACE_RATIO_RANGE = (0.15, 0.85)

# Age heuristic
BASE_AGE = 30
DARK_BRIGHTNESS = 100
BRIGHT_BRIGHTNESS = 180
LOW_SATURATION = 0.3
HIGH_SATURATION = 0.6
ESTIMATED_AGE_RANGE = (18, 65)

# Gender heuristic
FEMALE_MIN_SATURATION = 0.5
FEMALE_MIN_BRIGHTNESS = 150
MALE_MAX_SATURATION = 0.4

# Confidence is capped: the method is intentionally low-confidence
MAX_PIXEL_CONFIDENCE = 0.75

# Filename fallback
FILENAME_DEFAULT_AGE = 25
FILENAME_CONFIDENCE = 0.3
FILENAME_AGE_PATTERN = r"(\d{1,2})(yr|year|yo|age)"
FEMALE_KEYWORDS = ("female", "woman", "girl")
MALE_KEYWORDS = ("male", "man", "boy")
