"""
FastAPI dependencies.

Session lookup and the process-wide registry.
"""

from uuid import UUID

from fastapi import Depends, HTTPException, status

from api_gateway.services.session_registry import SessionRegistry
from modules.character_flow.controller import CharacterFlowController
from shared.logging import bind_session, get_logger

logger = get_logger(__name__)

registry = SessionRegistry()


def get_registry() -> SessionRegistry:
    """Return the process-wide session registry (overridden in tests)."""
    return registry


def get_controller(
    session_id: UUID,
    sessions: SessionRegistry = Depends(get_registry),
) -> CharacterFlowController:
    """
    Resolve the controller owning a session.

    Raises:
        HTTPException: 404 if the session is unknown (or was restarted)
    """
    controller = sessions.get(session_id)
    if controller is None:
        logger.warning("Unknown session", extra={"requested_session_id": str(session_id)})
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found"
        )
    bind_session(controller.session)
    return controller
