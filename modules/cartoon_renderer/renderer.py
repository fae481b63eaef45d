"""
Cartoon render requester.

Image-to-image stylization through the inference API. A failed render is
always a RenderError; no fallback image is ever substituted.
"""

import base64
import binascii
import time
from typing import Any, Optional, Tuple
from uuid import UUID

import httpx

from modules.attribute_deriver.deriver import derive
from modules.attribute_deriver.prompts import build_render_prompt
from modules.cartoon_renderer.config import JSON_IMAGE_MIME_TYPE, NEGATIVE_PROMPT
from modules.cartoon_renderer.cost_estimator import breakdown_from_payload, estimate_render_cost
from shared.config import Settings, get_settings
from shared.errors import RemoteFailureReason, RenderError, ValidationError
from shared.image_processing import encode_image_bytes
from shared.inference import post_json
from shared.logging import get_logger
from shared.models.character import (
    AppearanceTraits,
    CharacterAttributes,
    CostBreakdown,
    PersonalityProfile,
    RawEstimate,
    RenderArtifact,
    SourcePhoto,
)
from shared.validation import validate_name, validate_render_style

logger = get_logger("cartoon_renderer")


def _invalid(message: str, session_id: Optional[UUID]) -> RenderError:
    return RenderError(message, RemoteFailureReason.INVALID_RESPONSE, session_id=session_id)


class CartoonRenderRequester:
    """
    Requests stylized renderings of a photo.

    Args:
        settings: Settings (process settings when None)
        token: Bearer token (settings.huggingface_token when None)
        http_client: Shared httpx client
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        token: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings or get_settings()
        self._token = token if token is not None else self._settings.huggingface_token
        self._http_client = http_client

    @property
    def model(self) -> str:
        return self._settings.render_model

    @property
    def endpoint(self) -> str:
        return f"{self._settings.hf_api_url}/{self._settings.render_model}"

    async def render(
        self,
        photo: Optional[SourcePhoto],
        attributes: CharacterAttributes,
        style: str,
        personality: Optional[PersonalityProfile] = None,
        appearance: Optional[AppearanceTraits] = None,
        session_id: Optional[UUID] = None,
    ) -> RenderArtifact:
        """
        Render a cartoon of the photo.

        Args:
            photo: Source photo
            attributes: Confirmed character attributes (name required)
            style: Render style token
            personality: Derived personality (neutral profile when None)
            appearance: Appearance traits from a rich estimate
            session_id: Flow session ID for logging/error context

        Returns:
            RenderArtifact

        Raises:
            ValidationError: Missing photo or name, unknown style
            RenderError: unauthenticated, transport_failure or invalid_response
        """
        if photo is None or photo.size_bytes == 0:
            raise ValidationError("Photo is required for rendering", session_id=session_id)
        validate_name(attributes.name)
        validate_render_style(style)

        if not self._token:
            raise RenderError(
                "No inference API token configured",
                RemoteFailureReason.UNAUTHENTICATED,
                session_id=session_id,
            )

        if personality is None:
            personality = derive(RawEstimate(age=attributes.age)).personality
        prompt = build_render_prompt(personality, style, appearance, attributes)

        logger.info(
            f"Requesting {style} render",
            extra={"model": self.model, "style": style, "prompt_length": len(prompt)}
        )

        start_time = time.time()
        response = await post_json(
            self.endpoint,
            self._token,
            {
                "inputs": photo.to_base64(),
                "parameters": {
                    "prompt": prompt,
                    "style": style,
                    "negative_prompt": NEGATIVE_PROMPT,
                },
            },
            timeout=self._settings.request_timeout_seconds,
            error_cls=RenderError,
            http_client=self._http_client,
            session_id=session_id,
        )
        processing_time_ms = int((time.time() - start_time) * 1000)

        image_url, breakdown = self._parse_response(response, session_id)

        artifact = RenderArtifact(
            image_url=image_url,
            cost=breakdown.total,
            model_used=self.model,
            processing_time_ms=processing_time_ms,
            breakdown=breakdown,
        )
        logger.info(
            f"Render complete in {processing_time_ms}ms",
            extra={
                "model": self.model,
                "style": style,
                "cost": float(artifact.cost),
                "processing_time_ms": processing_time_ms,
            }
        )
        return artifact

    def _parse_response(
        self,
        response: httpx.Response,
        session_id: Optional[UUID],
    ) -> Tuple[str, CostBreakdown]:
        content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()

        # Raw image body
        if content_type.startswith("image/"):
            if not response.content:
                raise _invalid("Render response image is empty", session_id)
            return encode_image_bytes(response.content, content_type), estimate_render_cost(self.model)

        try:
            payload = response.json()
        except ValueError as e:
            raise _invalid("Render response is neither an image nor JSON", session_id) from e

        if not isinstance(payload, dict):
            raise _invalid("Render response JSON is not an object", session_id)

        image_url = self._image_from_payload(payload, session_id)

        if payload.get("cost") is None:
            return image_url, estimate_render_cost(self.model)
        try:
            return image_url, breakdown_from_payload(payload["cost"])
        except ValueError as e:
            raise _invalid(f"Render response has an invalid cost: {str(e)}", session_id) from e

    @staticmethod
    def _image_from_payload(payload: Any, session_id: Optional[UUID]) -> str:
        image_url = payload.get("image_url")
        if isinstance(image_url, str) and image_url.strip():
            return image_url.strip()

        image = payload.get("image")
        if isinstance(image, str) and image.strip():
            encoded = image.split(",", 1)[1] if image.startswith("data:") else image
            try:
                data = base64.b64decode(encoded, validate=True)
            except (binascii.Error, ValueError) as e:
                raise _invalid("Render response image is not valid base64", session_id) from e
            if not data:
                raise _invalid("Render response image is empty", session_id)
            return encode_image_bytes(data, JSON_IMAGE_MIME_TYPE)

        raise _invalid("Render response has no image", session_id)
