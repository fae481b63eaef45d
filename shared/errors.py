"""
Error taxonomy for the character creation pipeline.

Every error carries an optional session_id and a machine-readable code so
the flow controller and the HTTP layer can react without string matching.
"""

from enum import Enum
from typing import Optional
from uuid import UUID


class PipelineError(Exception):
    """Base error for all pipeline failures."""

    def __init__(
        self,
        message: str,
        session_id: Optional[UUID] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.session_id = session_id
        self.code = code

    def __str__(self) -> str:
        return self.message


class ConfigError(PipelineError):
    """Invalid or missing configuration."""


class ValidationError(PipelineError):
    """Missing or out-of-range user input. Blocks the transition."""


class InvalidTransitionError(PipelineError):
    """An event was sent that the current flow state does not accept."""


class ResourceError(PipelineError):
    """Local decode or allocation failure (e.g. unreadable photo)."""


class RemoteFailureReason(str, Enum):
    """Why a remote call failed."""

    UNAUTHENTICATED = "unauthenticated"
    TRANSPORT_FAILURE = "transport_failure"
    INVALID_RESPONSE = "invalid_response"


class EstimatorError(PipelineError):
    """Remote attribute estimation failed."""

    def __init__(
        self,
        message: str,
        reason: RemoteFailureReason,
        session_id: Optional[UUID] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, session_id=session_id, code=reason.value)
        self.reason = reason
        self.status_code = status_code


class RenderError(PipelineError):
    """Remote cartoon rendering failed. Never replaced by a fallback image."""

    def __init__(
        self,
        message: str,
        reason: RemoteFailureReason,
        session_id: Optional[UUID] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, session_id=session_id, code=reason.value)
        self.reason = reason
        self.status_code = status_code
