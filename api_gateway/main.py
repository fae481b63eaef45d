"""
FastAPI application.

Exposes the character creation flow under /api/v1/characters.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api_gateway.routes import characters
from shared.config import get_settings
from shared.errors import InvalidTransitionError, ValidationError
from shared.logging import get_logger

logger = get_logger(__name__)

app = FastAPI(title="Cartoon Character Creator", version="0.1.0")

app.include_router(characters.router, prefix="/api/v1/characters", tags=["characters"])


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.info(f"Rejected input: {exc.message}", extra={"path": request.url.path})
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(InvalidTransitionError)
async def invalid_transition_handler(request: Request, exc: InvalidTransitionError):
    logger.info(f"Rejected event: {exc.message}", extra={"path": request.url.path})
    return JSONResponse(
        status_code=409,
        content={"detail": exc.message, "code": exc.code},
    )


@app.get("/health")
def health():
    current = get_settings()
    return {
        "status": "ok",
        "estimation_mode": current.estimation_mode,
        "credential_configured": current.has_credential,
    }
