"""
Character data models.

Estimates produced from a photo, the user-adjustable attribute set, the
derived personality profile and the rendered artifact.
"""

import base64
from decimal import Decimal
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_serializer

Gender = Literal["male", "female", "unknown"]
FaceShape = Literal["round", "oval", "square", "heart", "diamond"]
HairStyle = Literal["short", "medium", "long", "curly", "straight", "wavy"]
RenderStyle = Literal["cute", "anime", "comic", "pop_art", "watercolor"]

# Enumeration order doubles as the tie-break order for dominant components
EMOTION_ORDER: Tuple[str, ...] = (
    "happy", "sad", "angry", "surprised", "fearful", "disgusted", "neutral"
)
STYLE_ORDER: Tuple[str, ...] = ("casual", "formal", "artistic", "sporty")
FACE_SHAPES: Tuple[str, ...] = ("round", "oval", "square", "heart", "diamond")
HAIR_STYLES: Tuple[str, ...] = ("short", "medium", "long", "curly", "straight", "wavy")
RENDER_STYLES: Tuple[str, ...] = ("cute", "anime", "comic", "pop_art", "watercolor")

AGE_RANGE = (18, 80)
HEIGHT_RANGE_CM = (120, 220)
WEIGHT_RANGE_KG = (40, 150)

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"

Score = Annotated[float, Field(ge=0.0, le=100.0)]
Point = Tuple[float, float]


class SourcePhoto(BaseModel):
    """A user-supplied photo as received from the client."""

    model_config = ConfigDict(frozen=True)

    filename: str = ""
    content_type: Optional[str] = None
    data: bytes = Field(default=b"", repr=False)

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def mime_type(self) -> str:
        """Content type, guessed from the filename when the client sent none."""
        if self.content_type:
            return self.content_type
        suffix = self.filename.rsplit(".", 1)[-1].lower() if "." in self.filename else ""
        return {
            "png": "image/png",
            "webp": "image/webp",
        }.get(suffix, "image/jpeg")

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


class RawEstimate(BaseModel):
    """
    Rough guess about the person in a photo.

    confidence is a quality signal, not a calibrated probability.
    """

    model_config = ConfigDict(frozen=True)

    age: float
    gender: Gender = "unknown"
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    face_detected: bool = False


class EmotionVector(BaseModel):
    """Independently scored emotions. Components are not normalized."""

    model_config = ConfigDict(frozen=True)

    happy: Score = 0.0
    sad: Score = 0.0
    angry: Score = 0.0
    surprised: Score = 0.0
    fearful: Score = 0.0
    disgusted: Score = 0.0
    neutral: Score = 0.0

    def as_ordered(self) -> List[Tuple[str, float]]:
        """Components in enumeration order."""
        return [(name, getattr(self, name)) for name in EMOTION_ORDER]


class StyleVector(BaseModel):
    """Style affinity scores."""

    model_config = ConfigDict(frozen=True)

    casual: Score = 0.0
    formal: Score = 0.0
    artistic: Score = 0.0
    sporty: Score = 0.0

    def as_ordered(self) -> List[Tuple[str, float]]:
        return [(name, getattr(self, name)) for name in STYLE_ORDER]


class Landmarks(BaseModel):
    """Facial landmark positions in image-relative units (0-100)."""

    model_config = ConfigDict(frozen=True)

    left_eye: Point
    right_eye: Point
    nose: Point
    mouth: Point
    chin: Point


class LabelScore(BaseModel):
    """One classification label returned by the remote estimator."""

    model_config = ConfigDict(frozen=True)

    label: str
    score: float = Field(ge=0.0, le=1.0)


class RichEstimate(RawEstimate):
    """
    Remote estimate.

    Fields named in synthetic_fields were generated within fixed bounds
    rather than measured; they must never be presented as measurements.
    """

    face_shape: FaceShape
    eye_color: str = Field(pattern=HEX_COLOR_PATTERN)
    hair_color: str = Field(pattern=HEX_COLOR_PATTERN)
    hair_style: HairStyle
    emotions: EmotionVector
    landmarks: Landmarks
    style: StyleVector
    labels: Tuple[LabelScore, ...] = ()
    synthetic_fields: Tuple[str, ...] = ()


Estimate = Union[RichEstimate, RawEstimate]


class InitialAttributes(BaseModel):
    """Slider seed values derived from an estimate."""

    model_config = ConfigDict(frozen=True)

    age: int = Field(ge=AGE_RANGE[0], le=AGE_RANGE[1])
    height: int = Field(ge=HEIGHT_RANGE_CM[0], le=HEIGHT_RANGE_CM[1])
    weight: int = Field(ge=WEIGHT_RANGE_KG[0], le=WEIGHT_RANGE_KG[1])


DEFAULT_ATTRIBUTES = InitialAttributes(age=25, height=170, weight=70)


class AppearanceTraits(BaseModel):
    """Visual traits carried over from a rich estimate."""

    model_config = ConfigDict(frozen=True)

    face_shape: FaceShape
    eye_color: str
    hair_color: str
    hair_style: HairStyle


class PersonalityProfile(BaseModel):
    """Derived personality. Not user-editable."""

    model_config = ConfigDict(frozen=True)

    energy: Score = 0.0
    friendliness: Score = 0.0
    creativity: Score = 0.0
    confidence: Score = 0.0
    dominant_style: str
    dominant_emotion: str
    accessories: Tuple[str, ...] = ()
    special_features: Tuple[str, ...] = ()


class DerivedAttributes(BaseModel):
    """Everything the deriver produces from one estimate."""

    model_config = ConfigDict(frozen=True)

    initial_attributes: InitialAttributes
    personality: PersonalityProfile
    appearance: Optional[AppearanceTraits] = None


class CharacterAttributes(BaseModel):
    """
    User-visible, user-adjustable attributes.

    The estimate and the initial guess are snapshots: they are set once per
    photo through seed() and are read-only afterwards. Only name, age,
    height and weight change.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    age: int = Field(default=DEFAULT_ATTRIBUTES.age, ge=AGE_RANGE[0], le=AGE_RANGE[1])
    height: int = Field(default=DEFAULT_ATTRIBUTES.height, ge=HEIGHT_RANGE_CM[0], le=HEIGHT_RANGE_CM[1])
    weight: int = Field(default=DEFAULT_ATTRIBUTES.weight, ge=WEIGHT_RANGE_KG[0], le=WEIGHT_RANGE_KG[1])

    _original_estimate: Optional[Estimate] = PrivateAttr(default=None)
    _initial_guess: Optional[InitialAttributes] = PrivateAttr(default=None)

    @property
    def original_estimate(self) -> Optional[Estimate]:
        return self._original_estimate

    @property
    def initial_guess(self) -> Optional[InitialAttributes]:
        return self._initial_guess

    @property
    def is_seeded(self) -> bool:
        return self._initial_guess is not None

    def seed(self, initial: InitialAttributes, estimate: Optional[Estimate] = None) -> None:
        """
        Initialize the sliders from an estimate (or from fixed defaults).

        Raises:
            RuntimeError: If the attributes were already seeded for this photo
        """
        if self.is_seeded:
            raise RuntimeError("Character attributes were already seeded for this photo")
        self._initial_guess = initial
        self._original_estimate = estimate
        self.age = initial.age
        self.height = initial.height
        self.weight = initial.weight


class CostBreakdown(BaseModel):
    """Per-step cost of a render in USD."""

    analysis: Decimal = Field(default=Decimal("0.00"), ge=0)
    generation: Decimal = Field(default=Decimal("0.00"), ge=0)
    total: Decimal = Field(default=Decimal("0.00"), ge=0)

    @field_serializer("analysis", "generation", "total")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal to string."""
        return str(value)


class RenderArtifact(BaseModel):
    """A finished cartoon rendering."""

    model_config = ConfigDict(frozen=True)

    image_url: str
    cost: Decimal = Field(default=Decimal("0.00"), ge=0, description="Cost in USD")
    model_used: str
    processing_time_ms: int = Field(default=0, ge=0)
    breakdown: Optional[CostBreakdown] = None

    @field_serializer("cost")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal to string."""
        return str(value)
