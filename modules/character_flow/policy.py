"""
Flow policy.

Which events each state accepts, where an acknowledged failure returns to,
and which estimator a photo goes through.
"""

from typing import Dict, FrozenSet, Optional
from uuid import UUID

from shared.config import Settings
from shared.errors import InvalidTransitionError
from shared.models.flow import FlowState

REVIEW_STATES: FrozenSet[FlowState] = frozenset({
    FlowState.ATTRIBUTE_REVIEW_AGE,
    FlowState.ATTRIBUTE_REVIEW_MEASURES,
})

EVENT_STATES: Dict[str, FrozenSet[FlowState]] = {
    "start": frozenset({FlowState.INTAKE}),
    "submit_photo": frozenset({FlowState.IDENTIFY}),
    "set_name": frozenset({FlowState.IDENTIFY, FlowState.CONFIRM}) | REVIEW_STATES,
    "confirm_age": frozenset({FlowState.ATTRIBUTE_REVIEW_AGE}),
    "confirm_measures": frozenset({FlowState.ATTRIBUTE_REVIEW_MEASURES}),
    "request_render": frozenset({FlowState.CONFIRM}),
    "acknowledge_failure": frozenset({FlowState.FAILED}),
    "save_to_gallery": frozenset({FlowState.COMPLETE}),
}


def ensure_event_allowed(event: str, state: FlowState, session_id: Optional[UUID] = None) -> None:
    """
    Raises:
        InvalidTransitionError: If the state does not accept the event
    """
    allowed = EVENT_STATES[event]
    if state not in allowed:
        expected = ", ".join(sorted(s.value for s in allowed))
        raise InvalidTransitionError(
            f"Cannot {event.replace('_', ' ')} in state '{state.value}' (expected: {expected})",
            session_id=session_id,
            code="invalid_transition",
        )


def recovery_state(failed_from: Optional[FlowState]) -> FlowState:
    """State an acknowledged failure returns to."""
    if failed_from in (FlowState.ESTIMATING, FlowState.IDENTIFY):
        return FlowState.IDENTIFY
    return FlowState.CONFIRM


def use_remote_estimator(settings: Settings) -> bool:
    """
    Remote estimation unless local mode is configured.

    A missing credential does not switch to local analysis: the remote call
    fails as unauthenticated and the flow continues with default attributes.
    """
    return settings.estimation_mode == "remote"
