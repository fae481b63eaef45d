"""
Configuration management.

Centralized environment variable management and validation.
"""

from typing import Literal, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from shared.errors import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allow case-insensitive env var matching
        extra="ignore"
    )

    # Environment
    environment: Literal["development", "staging", "production", "test"] = "development"

    # Logging
    # LOG_FILE: optional path for a rotating JSON log file (stdout only when unset)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: Optional[str] = None

    # Remote inference credential
    # HUGGINGFACE_TOKEN: single bearer token shared by the estimator and the renderer.
    # When unset, both remote calls fail with reason "unauthenticated".
    huggingface_token: Optional[str] = None
    hf_api_url: str = "https://api-inference.huggingface.co/models"
    estimator_model: str = "google/vit-base-patch16-224"
    render_model: str = "timbrooks/instruct-pix2pix"
    request_timeout_seconds: float = 30.0

    # Attribute estimation
    # ESTIMATION_MODE: "remote" uses the inference API, "local" uses pixel heuristics
    estimation_mode: Literal["remote", "local"] = "remote"
    analysis_max_side: int = 512

    # Flow
    intake_delay_seconds: float = 2.0
    max_photo_size_mb: int = 10
    default_render_style: Literal["cute", "anime", "comic", "pop_art", "watercolor"] = "cute"

    @field_validator("huggingface_token", mode="before")
    @classmethod
    def validate_huggingface_token(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank tokens as missing; reject obviously truncated ones."""
        if v is None:
            return None
        v = str(v).strip()
        if not v:
            return None
        if len(v) < 8:
            raise ConfigError("HUGGINGFACE_TOKEN appears to be invalid")
        return v

    @field_validator("hf_api_url")
    @classmethod
    def validate_hf_api_url(cls, v: str) -> str:
        """Validate inference API base URL."""
        if not v.startswith(("http://", "https://")):
            raise ConfigError("HF_API_URL must be a valid HTTP/HTTPS URL")
        return v.rstrip("/")

    @field_validator("request_timeout_seconds", "intake_delay_seconds")
    @classmethod
    def validate_non_negative_seconds(cls, v: float) -> float:
        """Durations cannot be negative."""
        if v < 0:
            raise ConfigError("Durations must be non-negative")
        return v

    @field_validator("analysis_max_side", "max_photo_size_mb")
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Limits must be positive."""
        if v <= 0:
            raise ConfigError("Size limits must be positive")
        return v

    @property
    def has_credential(self) -> bool:
        """True when a bearer token is configured."""
        return bool(self.huggingface_token)


# Singleton instance
try:
    settings = Settings()
except Exception as e:
    # Re-raise as ConfigError for consistency
    if isinstance(e, ConfigError):
        raise
    raise ConfigError(f"Failed to load configuration: {str(e)}") from e


def get_settings() -> Settings:
    """Return the process-wide settings singleton."""
    return settings
