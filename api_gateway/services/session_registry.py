"""
Session registry.

Keeps one CharacterFlowController per live session, keyed by the id of the
session the controller currently owns.
"""

from decimal import Decimal
from typing import Callable, Dict, Optional
from uuid import UUID

from modules.character_flow.controller import CharacterFlowController
from modules.gallery.store import GalleryStore, InMemoryGallery
from shared.logging import get_logger
from shared.models.flow import FlowSession

logger = get_logger("api_gateway.session_registry")

ControllerFactory = Callable[[GalleryStore], CharacterFlowController]


def _default_factory(gallery: GalleryStore) -> CharacterFlowController:
    return CharacterFlowController(gallery=gallery)


class SessionRegistry:
    """
    In-process map of session id -> controller.

    Args:
        controller_factory: Builds a controller bound to the shared gallery
        gallery: Gallery shared by every session (in-memory when None)
    """

    def __init__(
        self,
        controller_factory: Optional[ControllerFactory] = None,
        gallery: Optional[GalleryStore] = None,
    ):
        self._factory = controller_factory or _default_factory
        self.gallery = gallery or InMemoryGallery()
        self._controllers: Dict[UUID, CharacterFlowController] = {}

    def create(self) -> CharacterFlowController:
        controller = self._factory(self.gallery)
        self._controllers[controller.session.session_id] = controller
        logger.info("Session created", extra={"active_sessions": len(self._controllers)})
        return controller

    def get(self, session_id: UUID) -> Optional[CharacterFlowController]:
        return self._controllers.get(session_id)

    def restart(self, session_id: UUID) -> Optional[FlowSession]:
        """Restart a session's controller and re-key it under the new session id."""
        controller = self._controllers.pop(session_id, None)
        if controller is None:
            return None
        session = controller.restart()
        self._controllers[session.session_id] = controller
        return session

    async def remove(self, session_id: UUID) -> Optional[Decimal]:
        """
        Drop a session and release its controller's cost ledger.

        Returns:
            The session's total cost, or None if the session is unknown
        """
        controller = self._controllers.pop(session_id, None)
        if controller is None:
            return None
        total = await controller.close()
        logger.info("Session removed", extra={"active_sessions": len(self._controllers)})
        return total

    def __len__(self) -> int:
        return len(self._controllers)


def session_view(controller: CharacterFlowController) -> dict:
    """JSON-safe view of a controller's session. Photo bytes are never echoed."""
    session = controller.session
    view = session.model_dump(mode="json", exclude={"photo", "failed_from"})
    initial = session.attributes.initial_guess
    view["attributes"]["initial_guess"] = initial.model_dump(mode="json") if initial else None
    view["photo_filename"] = session.photo.filename if session.photo else None
    view["busy"] = controller.is_busy
    view["is_terminal"] = session.is_terminal
    return view
