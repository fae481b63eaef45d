"""
Character creation flow controller.

Owns one FlowSession at a time and sequences photo intake, estimation,
attribute review, rendering and gallery hand-off. Events are serialized on
the event loop; while estimation or rendering is outstanding the controller
is busy and duplicate submissions are ignored. A result that arrives for a
session that has since been replaced (restart) is discarded.
"""

import asyncio
from decimal import Decimal
from typing import Awaitable, Callable, Optional, Tuple

from modules.attribute_deriver.deriver import derive
from modules.attribute_estimator.client import RemoteAttributeEstimator
from modules.attribute_estimator.config import ESTIMATION_COST
from modules.cartoon_renderer.renderer import CartoonRenderRequester
from modules.character_flow.policy import (
    ensure_event_allowed,
    recovery_state,
    use_remote_estimator,
)
from modules.face_analyzer.local import analyze_photo
from modules.gallery.store import GalleryRecord, GalleryStore
from shared.config import Settings, get_settings
from shared.cost_tracking import CostTracker, cost_tracker as default_cost_tracker
from shared.errors import EstimatorError, PipelineError, RenderError, ResourceError
from shared.logging import bind_session, get_logger
from shared.models.character import (
    DEFAULT_ATTRIBUTES,
    CharacterAttributes,
    Estimate,
    SourcePhoto,
)
from shared.models.flow import FlowErrorInfo, FlowSession, FlowState
from shared.validation import (
    validate_age,
    validate_measures,
    validate_name,
    validate_photo,
    validate_render_style,
)

logger = get_logger("character_flow")

LocalAnalyzer = Callable[[SourcePhoto, int], Awaitable[Tuple[Estimate, str]]]


def _error_info(kind: str, error: Exception) -> FlowErrorInfo:
    return FlowErrorInfo(
        kind=kind,
        message=str(error) or type(error).__name__,
        reason=error.code if isinstance(error, PipelineError) else None,
    )


class CharacterFlowController:
    """
    State machine for creating one character.

    Args:
        estimator: Remote estimator (built from settings when None)
        renderer: Render requester (built from settings when None)
        settings: Settings (process settings when None)
        cost_tracker: Cost ledger (process ledger when None)
        gallery: Default gallery for save_to_gallery()
        sleep: Awaitable sleep used for the intake delay
        local_analyzer: Local photo analysis used in local estimation mode
    """

    def __init__(
        self,
        estimator: Optional[RemoteAttributeEstimator] = None,
        renderer: Optional[CartoonRenderRequester] = None,
        settings: Optional[Settings] = None,
        cost_tracker: Optional[CostTracker] = None,
        gallery: Optional[GalleryStore] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        local_analyzer: LocalAnalyzer = analyze_photo,
    ):
        self._settings = settings or get_settings()
        self._estimator = estimator or RemoteAttributeEstimator(settings=self._settings)
        self._renderer = renderer or CartoonRenderRequester(settings=self._settings)
        self._cost_tracker = cost_tracker or default_cost_tracker
        self._gallery = gallery
        self._sleep = sleep
        self._local_analyzer = local_analyzer
        self._session = FlowSession()
        self._busy = False

    @property
    def session(self) -> FlowSession:
        return self._session

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_busy(self) -> bool:
        return self._busy

    def _is_current(self, session: FlowSession) -> bool:
        return self._session is session

    def _discard_stale(self, session: FlowSession, stage: str) -> FlowSession:
        logger.info(
            f"Discarding {stage} result for replaced session",
            extra={"stale_session_id": str(session.session_id), "stage": stage}
        )
        return self._session

    def _finish_busy(self, session: FlowSession) -> None:
        if self._is_current(session):
            self._busy = False

    def _fail(self, session: FlowSession, kind: str, error: Exception) -> None:
        session.failed_from = session.state
        session.last_error = _error_info(kind, error)
        session.state = FlowState.FAILED

    async def start(self) -> FlowSession:
        """intake -> identify after the intake delay."""
        session = self._session
        bind_session(session)
        ensure_event_allowed("start", session.state, session.session_id)
        if self._busy:
            return session

        self._busy = True
        try:
            await self._sleep(self._settings.intake_delay_seconds)
        finally:
            self._finish_busy(session)

        if not self._is_current(session):
            return self._discard_stale(session, "intake")

        session.state = FlowState.IDENTIFY
        logger.info("Flow started", extra={"state": session.state.value})
        return session

    def set_name(self, name: str) -> FlowSession:
        """Set the character name (identify, review and confirm states)."""
        session = self._session
        bind_session(session)
        ensure_event_allowed("set_name", session.state, session.session_id)
        session.attributes.name = validate_name(name)
        return session

    async def submit_photo(self, photo: Optional[SourcePhoto]) -> FlowSession:
        """
        identify -> estimating -> attribute_review_age.

        Estimator and decode failures continue with default attributes; any
        other error moves the flow to failed.

        Raises:
            ValidationError: Missing, empty, oversized or wrong-type photo
                (state stays identify)
            InvalidTransitionError: Not in identify
        """
        session = self._session
        bind_session(session)
        if self._busy and session.state == FlowState.ESTIMATING:
            logger.info("Ignoring photo submitted while estimating")
            return session
        ensure_event_allowed("submit_photo", session.state, session.session_id)
        validate_photo(photo, max_size_mb=self._settings.max_photo_size_mb)

        session.photo = photo
        session.attributes = CharacterAttributes(name=session.attributes.name)
        session.last_error = None
        session.state = FlowState.ESTIMATING
        self._busy = True
        try:
            try:
                estimate, source = await self._estimate(session, photo)
            except (EstimatorError, ResourceError) as e:
                if not self._is_current(session):
                    return self._discard_stale(session, "estimation")
                logger.warning(
                    f"Estimation unavailable, continuing with default attributes: {str(e)}",
                    extra={"error_type": type(e).__name__, "reason": e.code}
                )
                self._seed_defaults(session, e)
                return session
            except Exception as e:
                if not self._is_current(session):
                    return self._discard_stale(session, "estimation")
                logger.error(
                    f"Unexpected estimation failure: {str(e)}",
                    extra={"error_type": type(e).__name__},
                    exc_info=True
                )
                self._fail(session, "estimation", e)
                return session

            if not self._is_current(session):
                return self._discard_stale(session, "estimation")
            self._seed_from_estimate(session, estimate, source)
            return session
        finally:
            self._finish_busy(session)

    async def _estimate(self, session: FlowSession, photo: SourcePhoto) -> Tuple[Estimate, str]:
        if not use_remote_estimator(self._settings):
            return await self._local_analyzer(photo, self._settings.analysis_max_side)

        estimate = await self._estimator.estimate(photo, session_id=session.session_id)
        if not self._is_current(session):
            return estimate, "remote"
        session.total_cost = await self._cost_tracker.track_cost(
            session.session_id,
            "estimating",
            getattr(self._estimator, "model", "remote_estimator"),
            ESTIMATION_COST,
        )
        return estimate, "remote"

    def _seed_from_estimate(self, session: FlowSession, estimate: Estimate, source: str) -> None:
        derived = derive(estimate)
        session.attributes.seed(derived.initial_attributes, estimate)
        session.personality = derived.personality
        session.appearance = derived.appearance
        session.estimate_source = source
        session.state = FlowState.ATTRIBUTE_REVIEW_AGE
        logger.info(
            "Attributes seeded from estimate",
            extra={
                "source": source,
                "initial_age": derived.initial_attributes.age,
                "dominant_emotion": derived.personality.dominant_emotion,
            }
        )

    def _seed_defaults(self, session: FlowSession, error: PipelineError) -> None:
        session.attributes.seed(DEFAULT_ATTRIBUTES)
        session.personality = None
        session.appearance = None
        session.estimate_source = "defaults"
        session.last_error = _error_info("estimation", error)
        session.state = FlowState.ATTRIBUTE_REVIEW_AGE

    def confirm_age(self, age: int) -> FlowSession:
        """attribute_review_age -> attribute_review_measures."""
        session = self._session
        bind_session(session)
        ensure_event_allowed("confirm_age", session.state, session.session_id)
        session.attributes.age = validate_age(age)
        session.state = FlowState.ATTRIBUTE_REVIEW_MEASURES
        return session

    def confirm_measures(self, height: int, weight: int) -> FlowSession:
        """attribute_review_measures -> confirm."""
        session = self._session
        bind_session(session)
        ensure_event_allowed("confirm_measures", session.state, session.session_id)
        height, weight = validate_measures(height, weight)
        session.attributes.height = height
        session.attributes.weight = weight
        session.state = FlowState.CONFIRM
        return session

    async def request_render(self, style: Optional[str] = None) -> FlowSession:
        """
        confirm -> rendering -> complete | failed.

        Only one render runs per attempt; a request while rendering is a no-op.

        Raises:
            ValidationError: Missing name or unknown style (state stays confirm)
            InvalidTransitionError: Not in confirm
        """
        session = self._session
        bind_session(session)
        if session.state == FlowState.RENDERING:
            logger.info("Ignoring render request while rendering")
            return session
        ensure_event_allowed("request_render", session.state, session.session_id)
        style = validate_render_style(style or self._settings.default_render_style)
        validate_name(session.attributes.name)

        session.render_style = style
        session.last_error = None
        session.state = FlowState.RENDERING
        self._busy = True
        try:
            try:
                artifact = await self._renderer.render(
                    session.photo,
                    session.attributes,
                    style,
                    personality=session.personality,
                    appearance=session.appearance,
                    session_id=session.session_id,
                )
            except RenderError as e:
                if not self._is_current(session):
                    return self._discard_stale(session, "render")
                logger.error(
                    f"Render failed: {str(e)}",
                    extra={"reason": e.code, "status_code": e.status_code}
                )
                self._fail(session, "rendering", e)
                return session
            except Exception as e:
                if not self._is_current(session):
                    return self._discard_stale(session, "render")
                logger.error(
                    f"Unexpected render failure: {str(e)}",
                    extra={"error_type": type(e).__name__},
                    exc_info=True
                )
                self._fail(session, "rendering", e)
                return session

            if not self._is_current(session):
                return self._discard_stale(session, "render")

            session.total_cost = await self._cost_tracker.track_cost(
                session.session_id, "rendering", artifact.model_used, artifact.cost
            )
            session.artifact = artifact
            session.state = FlowState.COMPLETE
            logger.info(
                "Character complete",
                extra={"style": style, "cost": float(artifact.cost), "total_cost": float(session.total_cost)}
            )
            return session
        finally:
            self._finish_busy(session)

    def acknowledge_failure(self) -> FlowSession:
        """failed -> confirm (render failure) or identify (estimation failure)."""
        session = self._session
        bind_session(session)
        ensure_event_allowed("acknowledge_failure", session.state, session.session_id)

        target = recovery_state(session.failed_from)
        if target == FlowState.IDENTIFY:
            session.photo = None
            session.attributes = CharacterAttributes(name=session.attributes.name)
            session.personality = None
            session.appearance = None
            session.estimate_source = None
        session.artifact = None
        session.failed_from = None
        session.state = target
        logger.info("Failure acknowledged", extra={"state": target.value})
        return session

    def restart(self) -> FlowSession:
        """
        Replace the session. Results still in flight for the old one are
        discarded and its cost ledger is released.
        """
        old = self._session
        released = self._cost_tracker.discard(old.session_id)
        self._session = FlowSession()
        self._busy = False
        bind_session(self._session)
        logger.info(
            "Flow restarted",
            extra={
                "previous_session_id": str(old.session_id),
                "previous_state": old.state,
                "previous_total_cost": released,
            }
        )
        return self._session

    async def close(self) -> Decimal:
        """
        Release the current session's cost ledger (the user navigated away).

        Returns:
            Total cost recorded for the session
        """
        session = self._session
        bind_session(session)
        total = await self._cost_tracker.get_total_cost(session.session_id)
        self._cost_tracker.discard(session.session_id)
        logger.info("Flow closed", extra={"total_cost": total, "terminal": session.is_terminal})
        return total

    async def save_to_gallery(
        self,
        gallery: Optional[GalleryStore] = None,
        include_photo: bool = True,
    ) -> str:
        """
        Save a complete character to the gallery.

        Saving the same session again returns the existing gallery id.

        Raises:
            InvalidTransitionError: Session is not complete
            ValueError: No gallery configured
        """
        session = self._session
        bind_session(session)
        ensure_event_allowed("save_to_gallery", session.state, session.session_id)
        if session.gallery_id:
            return session.gallery_id

        gallery = gallery or self._gallery
        if gallery is None:
            raise ValueError("No gallery configured")

        attributes = session.attributes
        record = GalleryRecord(
            name=attributes.name,
            age=attributes.age,
            height=attributes.height,
            weight=attributes.weight,
            source_photo=session.photo.to_data_uri() if include_photo and session.photo else None,
            cartoon_image=session.artifact.image_url,
            generation_cost=session.artifact.cost,
            style=session.render_style,
        )
        session.gallery_id = await gallery.save(record)
        return session.gallery_id
