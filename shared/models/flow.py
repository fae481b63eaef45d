"""
Flow session models.

FlowSession is the mutable aggregate owned by a single CharacterFlowController.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_serializer

from shared.models.character import (
    AppearanceTraits,
    CharacterAttributes,
    PersonalityProfile,
    RenderArtifact,
    SourcePhoto,
)


class FlowState(str, Enum):
    """Character creation flow states."""

    INTAKE = "intake"
    IDENTIFY = "identify"
    ESTIMATING = "estimating"
    ATTRIBUTE_REVIEW_AGE = "attribute_review_age"
    ATTRIBUTE_REVIEW_MEASURES = "attribute_review_measures"
    CONFIRM = "confirm"
    RENDERING = "rendering"
    COMPLETE = "complete"
    FAILED = "failed"


EstimateSource = Literal["remote", "local", "filename", "defaults"]


class FlowErrorInfo(BaseModel):
    """Last error surfaced to the user."""

    kind: str
    message: str
    reason: Optional[str] = None


class FlowSession(BaseModel):
    """State of one character being created."""

    session_id: UUID = Field(default_factory=uuid4)
    state: FlowState = FlowState.INTAKE
    attributes: CharacterAttributes = Field(default_factory=CharacterAttributes)
    photo: Optional[SourcePhoto] = None
    estimate_source: Optional[EstimateSource] = None
    personality: Optional[PersonalityProfile] = None
    appearance: Optional[AppearanceTraits] = None
    render_style: Optional[str] = None
    artifact: Optional[RenderArtifact] = None
    last_error: Optional[FlowErrorInfo] = None
    failed_from: Optional[FlowState] = None
    gallery_id: Optional[str] = None
    total_cost: Decimal = Field(default=Decimal("0.00"), description="Total cost in USD")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_terminal(self) -> bool:
        return self.state in (FlowState.COMPLETE, FlowState.FAILED)

    @field_serializer("session_id")
    def serialize_uuid(self, value: UUID) -> str:
        """Serialize UUID to string."""
        return str(value)

    @field_serializer("total_cost")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal to string."""
        return str(value)

    @field_serializer("created_at")
    def serialize_datetime(self, value: datetime) -> str:
        """Serialize datetime to ISO format string."""
        return value.isoformat()
