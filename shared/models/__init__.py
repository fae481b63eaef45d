"""
Data models for the character creation pipeline.

This module exports all Pydantic models used across pipeline modules.
"""

from .character import (
    AGE_RANGE,
    DEFAULT_ATTRIBUTES,
    EMOTION_ORDER,
    HEIGHT_RANGE_CM,
    RENDER_STYLES,
    STYLE_ORDER,
    WEIGHT_RANGE_KG,
    AppearanceTraits,
    CharacterAttributes,
    CostBreakdown,
    DerivedAttributes,
    EmotionVector,
    Estimate,
    InitialAttributes,
    LabelScore,
    Landmarks,
    PersonalityProfile,
    RawEstimate,
    RenderArtifact,
    RichEstimate,
    SourcePhoto,
    StyleVector,
)
from .flow import FlowErrorInfo, FlowSession, FlowState

__all__ = [
    # Constants
    "AGE_RANGE",
    "DEFAULT_ATTRIBUTES",
    "EMOTION_ORDER",
    "HEIGHT_RANGE_CM",
    "RENDER_STYLES",
    "STYLE_ORDER",
    "WEIGHT_RANGE_KG",
    # Estimate models
    "RawEstimate",
    "RichEstimate",
    "Estimate",
    "EmotionVector",
    "StyleVector",
    "Landmarks",
    "LabelScore",
    # Character models
    "SourcePhoto",
    "InitialAttributes",
    "CharacterAttributes",
    "AppearanceTraits",
    "PersonalityProfile",
    "DerivedAttributes",
    "CostBreakdown",
    "RenderArtifact",
    # Flow models
    "FlowState",
    "FlowSession",
    "FlowErrorInfo",
]
