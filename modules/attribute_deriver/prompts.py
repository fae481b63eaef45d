"""
Prompt synthesis for cartoon rendering.

Builds the render prompt from the personality profile, the render style and,
when known, appearance traits and the confirmed attributes.
"""

from typing import List, Optional

from shared.logging import get_logger
from shared.models.character import AppearanceTraits, CharacterAttributes, PersonalityProfile

from .config import (
    MAX_PROMPT_LENGTH,
    RENDER_STYLE_OPENINGS,
    RENDER_STYLE_SUFFIXES,
    SHORT_HEIGHT_CM,
    SLIM_BMI,
    STURDY_BMI,
    STYLE_PHRASES,
    TALL_HEIGHT_CM,
    TRAIT_PHRASE_THRESHOLD,
    TRAIT_PHRASES,
)

logger = get_logger("attribute_deriver.prompts")

DEFAULT_RENDER_STYLE = "cute"


def trait_phrases(personality: PersonalityProfile) -> List[str]:
    """Phrases for every personality trait above the threshold."""
    return [
        phrase
        for trait, phrase in TRAIT_PHRASES.items()
        if getattr(personality, trait) > TRAIT_PHRASE_THRESHOLD
    ]


def body_phrases(attributes: CharacterAttributes) -> List[str]:
    phrases = [f"about {attributes.age} years old"]

    if attributes.height >= TALL_HEIGHT_CM:
        phrases.append("tall")
    elif attributes.height <= SHORT_HEIGHT_CM:
        phrases.append("petite")

    bmi = attributes.weight / ((attributes.height / 100) ** 2)
    if bmi < SLIM_BMI:
        phrases.append("slim build")
    elif bmi >= STURDY_BMI:
        phrases.append("sturdy build")

    return phrases


def appearance_phrases(appearance: AppearanceTraits) -> List[str]:
    return [f"{appearance.hair_style} hair", f"{appearance.face_shape} face"]


def compose_prompt(
    opening: str,
    phrases: List[str],
    suffix: str,
    max_length: int = MAX_PROMPT_LENGTH,
) -> str:
    """
    Join "<opening> with <phrases>, <suffix>" within max_length.

    The opening and the style suffix are always kept; descriptive phrases
    are dropped from the end until the prompt fits.
    """
    kept = list(phrases)
    while kept and len(f"{opening} with {', '.join(kept + [suffix])}") > max_length:
        kept.pop()
    if len(kept) < len(phrases):
        logger.warning(
            f"Prompt shortened: dropped {len(phrases) - len(kept)} of {len(phrases)} phrases",
            extra={"max_length": max_length, "dropped": phrases[len(kept):]}
        )
    return f"{opening} with {', '.join(kept + [suffix])}"


def build_render_prompt(
    personality: PersonalityProfile,
    render_style: str = DEFAULT_RENDER_STYLE,
    appearance: Optional[AppearanceTraits] = None,
    attributes: Optional[CharacterAttributes] = None,
) -> str:
    """
    Build the render prompt.

    Phrase order: traits, dominant style, special features, appearance,
    body, then the render style suffix.

    Args:
        personality: Derived personality profile
        render_style: Render style token (unknown tokens use the cute style)
        appearance: Appearance traits from a rich estimate
        attributes: Confirmed character attributes

    Returns:
        Prompt string
    """
    opening = RENDER_STYLE_OPENINGS.get(render_style, RENDER_STYLE_OPENINGS[DEFAULT_RENDER_STYLE])
    suffix = RENDER_STYLE_SUFFIXES.get(render_style, RENDER_STYLE_SUFFIXES[DEFAULT_RENDER_STYLE])

    phrases = trait_phrases(personality)
    style_phrase = STYLE_PHRASES.get(personality.dominant_style)
    if style_phrase:
        phrases.append(style_phrase)
    phrases.extend(personality.special_features)
    if appearance is not None:
        phrases.extend(appearance_phrases(appearance))
    if attributes is not None:
        phrases.extend(body_phrases(attributes))

    return compose_prompt(opening, phrases, suffix)
