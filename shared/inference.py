"""
Inference API transport.

Authenticated JSON POSTs to the hosted inference API. Transport problems are
translated into the caller's remote error type so callers never see httpx
exceptions.
"""

from typing import Any, Optional, Type, Union
from uuid import UUID

import httpx

from shared.errors import EstimatorError, RemoteFailureReason, RenderError
from shared.logging import get_logger

logger = get_logger("inference")

RemoteError = Union[Type[EstimatorError], Type[RenderError]]


async def post_json(
    url: str,
    token: str,
    payload: Any,
    timeout: float,
    error_cls: RemoteError,
    http_client: Optional[httpx.AsyncClient] = None,
    session_id: Optional[UUID] = None,
) -> httpx.Response:
    """
    POST a JSON payload with a bearer token.

    Args:
        url: Full model endpoint URL
        token: Bearer token
        payload: JSON-serializable request body
        timeout: Request timeout in seconds
        error_cls: EstimatorError or RenderError
        http_client: Shared client (a short-lived one is created when None)
        session_id: Flow session ID for error context

    Returns:
        The 2xx response

    Raises:
        error_cls: With reason transport_failure on timeout, connection
            error or non-2xx status
    """
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }
    try:
        if http_client is not None:
            response = await http_client.post(url, json=payload, headers=headers, timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
        response.raise_for_status()
        return response
    except httpx.TimeoutException as e:
        raise error_cls(
            f"Inference request timed out after {timeout}s",
            RemoteFailureReason.TRANSPORT_FAILURE,
            session_id=session_id,
        ) from e
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        logger.debug(
            f"Inference API returned HTTP {status_code}",
            extra={"url": url, "status_code": status_code, "body": e.response.text[:200]}
        )
        raise error_cls(
            f"Inference API returned HTTP {status_code}",
            RemoteFailureReason.TRANSPORT_FAILURE,
            session_id=session_id,
            status_code=status_code,
        ) from e
    except httpx.RequestError as e:
        raise error_cls(
            f"Network error calling inference API: {str(e)}",
            RemoteFailureReason.TRANSPORT_FAILURE,
            session_id=session_id,
        ) from e
