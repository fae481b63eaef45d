"""
Input validation utilities.

Validates photos and user-adjusted character attributes.
"""

from typing import Optional, Tuple

from shared.errors import ValidationError
from shared.models.character import (
    AGE_RANGE,
    HEIGHT_RANGE_CM,
    RENDER_STYLES,
    WEIGHT_RANGE_KG,
    SourcePhoto,
)

ALLOWED_PHOTO_TYPES = ["image/png", "image/jpeg", "image/jpg", "image/webp"]


def validate_photo(
    photo: Optional[SourcePhoto],
    max_size_mb: int = 10,
    allowed_formats: Optional[list] = None
) -> None:
    """
    Validate a user photo.

    Decodability is not checked here: an undecodable photo is a resource
    problem handled by the analysis step, not an input error.

    Args:
        photo: Photo to validate
        max_size_mb: Maximum file size in MB (default: 10)
        allowed_formats: List of allowed MIME types (default: PNG, JPEG, WEBP)

    Raises:
        ValidationError: If photo is missing, empty, too large or of the wrong type
    """
    if allowed_formats is None:
        allowed_formats = ALLOWED_PHOTO_TYPES

    if photo is None:
        raise ValidationError("Photo is required")

    if photo.size_bytes == 0:
        raise ValidationError("Photo is empty")

    validate_photo_size(photo.size_bytes, max_size_mb)

    if photo.content_type and photo.content_type not in allowed_formats:
        raise ValidationError(
            f"Invalid photo format. Supported formats: PNG, JPEG, WEBP. "
            f"Received: {photo.content_type}"
        )


def validate_photo_size(size_bytes: int, max_size_mb: int = 10) -> None:
    """
    Check a photo's byte size against the limit.

    Used on its own for uploads, before the body is read.

    Raises:
        ValidationError: If the photo is larger than max_size_mb
    """
    if size_bytes > max_size_mb * 1024 * 1024:
        raise ValidationError(
            f"Photo size ({size_bytes / (1024 * 1024):.2f} MB) exceeds maximum "
            f"of {max_size_mb} MB"
        )


def validate_name(name: Optional[str]) -> str:
    """
    Validate a character name.

    Returns:
        The stripped name

    Raises:
        ValidationError: If name is missing or blank
    """
    if name is None or not isinstance(name, str):
        raise ValidationError("Name is required")
    stripped = name.strip()
    if not stripped:
        raise ValidationError("Name cannot be blank")
    if len(stripped) > 50:
        raise ValidationError("Name must be at most 50 characters")
    return stripped


def _validate_bound(value: int, bounds: Tuple[int, int], label: str, unit: str = "") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be a whole number")
    low, high = bounds
    if value < low or value > high:
        raise ValidationError(f"{label} must be between {low} and {high}{unit}")
    return value


def validate_age(age: int) -> int:
    """Validate age in years (18-80)."""
    return _validate_bound(age, AGE_RANGE, "Age")


def validate_measures(height: int, weight: int) -> Tuple[int, int]:
    """Validate height (120-220 cm) and weight (40-150 kg)."""
    return (
        _validate_bound(height, HEIGHT_RANGE_CM, "Height", " cm"),
        _validate_bound(weight, WEIGHT_RANGE_KG, "Weight", " kg"),
    )


def validate_render_style(style: str) -> str:
    """Validate a render style token."""
    if style not in RENDER_STYLES:
        raise ValidationError(
            f"Invalid render style. Supported: {', '.join(RENDER_STYLES)}. "
            f"Received: {style}"
        )
    return style
