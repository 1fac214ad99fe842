"""
Input validation utilities for the ingestion engine.

Guards the identifiers and limits that callers hand to the engine. A failure
here is a caller bug, not a data-quality issue, so it raises.
"""

import re


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


_IDENTIFIER_PATTERN = re.compile(r'^[a-zA-Z0-9_\-\.]+$')


def validate_source_id(source_id: str, field_name: str = "source_id") -> str:
    """
    Validate a source ID.

    Source IDs must be non-empty strings containing only alphanumeric
    characters, hyphens, underscores, and dots.

    Args:
        source_id: The source ID to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated source ID (stripped of whitespace)

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_source_id("fda_510k")
        'fda_510k'
        >>> validate_source_id("ema-epar")
        'ema-epar'
    """
    if not source_id or not isinstance(source_id, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    source_id = source_id.strip()

    if not source_id:
        raise ValidationError(f"{field_name} cannot be empty or whitespace-only")

    if not _IDENTIFIER_PATTERN.match(source_id):
        raise ValidationError(
            f"{field_name} contains invalid characters. "
            "Only alphanumeric, hyphens, underscores, and dots are allowed."
        )

    if len(source_id) > 255:
        raise ValidationError(f"{field_name} exceeds maximum length of 255 characters")

    return source_id


def validate_limit(limit: int, field_name: str = "limit", max_limit: int = 10000) -> int:
    """
    Validate a positive, bounded integer limit (top-N sizes, capacities).

    Examples:
        >>> validate_limit(10)
        10
        >>> validate_limit(0)  # doctest: +SKIP
        ValidationError: limit must be a positive integer
    """
    if not isinstance(limit, int) or isinstance(limit, bool):
        raise ValidationError(f"{field_name} must be an integer, got {type(limit).__name__}")

    if limit <= 0:
        raise ValidationError(f"{field_name} must be a positive integer, got {limit}")

    if limit > max_limit:
        raise ValidationError(f"{field_name} exceeds maximum of {max_limit}")

    return limit
