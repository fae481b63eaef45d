"""
Remote attribute estimator.

Sends the photo to a hosted image classifier and turns its labels into a
RichEstimate. Fails loudly: there is no retry and no local fallback here.
"""

import random
import time
from typing import Optional
from uuid import UUID

import httpx

from shared.config import Settings, get_settings
from shared.errors import EstimatorError, RemoteFailureReason
from shared.inference import post_json
from shared.logging import get_logger
from shared.models.character import RichEstimate, SourcePhoto

from .normalizer import build_rich_estimate, parse_labels

logger = get_logger("attribute_estimator")


class RemoteAttributeEstimator:
    """
    Estimator backed by the inference API.

    Args:
        settings: Settings (process settings when None)
        token: Bearer token (settings.huggingface_token when None)
        http_client: Shared httpx client
        rng: Random source for the synthetic fields
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        token: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        rng: Optional[random.Random] = None,
    ):
        self._settings = settings or get_settings()
        self._token = token if token is not None else self._settings.huggingface_token
        self._http_client = http_client
        self._rng = rng or random.Random()

    @property
    def model(self) -> str:
        return self._settings.estimator_model

    @property
    def endpoint(self) -> str:
        return f"{self._settings.hf_api_url}/{self._settings.estimator_model}"

    async def estimate(self, photo: SourcePhoto, session_id: Optional[UUID] = None) -> RichEstimate:
        """
        Estimate attributes for a photo.

        Raises:
            EstimatorError: unauthenticated (no token, checked before any
                network activity), transport_failure or invalid_response
        """
        if not self._token:
            raise EstimatorError(
                "No inference API token configured",
                RemoteFailureReason.UNAUTHENTICATED,
                session_id=session_id,
            )

        start_time = time.time()
        response = await post_json(
            self.endpoint,
            self._token,
            {"inputs": photo.to_base64()},
            timeout=self._settings.request_timeout_seconds,
            error_cls=EstimatorError,
            http_client=self._http_client,
            session_id=session_id,
        )

        try:
            payload = response.json()
        except ValueError as e:
            raise EstimatorError(
                "Classifier response is not valid JSON",
                RemoteFailureReason.INVALID_RESPONSE,
                session_id=session_id,
            ) from e

        labels = parse_labels(payload, session_id=session_id)
        estimate = build_rich_estimate(labels, self._rng)

        logger.info(
            f"Remote estimate built from {len(labels)} labels",
            extra={
                "model": self.model,
                "top_label": max(labels, key=lambda label: label.score).label,
                "confidence": estimate.confidence,
                "face_detected": estimate.face_detected,
                "duration_ms": int((time.time() - start_time) * 1000),
            }
        )
        return estimate
