"""
Base validator interface for all field checks.

All validators must inherit from BaseValidator and implement the validate() method.
"""

from abc import ABC, abstractmethod
from typing import Any


class ValidationError(Exception):
    """Raised when a field check fails. Carries the user-facing message."""

    def __init__(self, rule_type: str, field_name: str, message: str):
        self.rule_type = rule_type
        self.field_name = field_name
        self.message = message
        super().__init__(message)


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    Each validator implements one check of a ValidationRule
    (required, type, length, pattern, enum, custom).
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        """
        Initialize validator.

        Args:
            field_name: Name of the field to validate
            parameters: Check-specific parameters (e.g., min_length/max_length)
        """
        self.field_name = field_name
        self.parameters = parameters or {}

    @abstractmethod
    def validate(self, value: Any, record: dict[str, Any]) -> None:
        """
        Validate a value against this check.

        Args:
            value: The field value to validate
            record: The entire record (for context-dependent validation)

        Raises:
            ValidationError: If validation fails
        """
        pass

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the check type identifier."""
        pass

    def fail(self, message: str) -> None:
        raise ValidationError(
            rule_type=self.rule_type,
            field_name=self.field_name,
            message=f"Field '{self.field_name}' {message}",
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, params={self.parameters})"
