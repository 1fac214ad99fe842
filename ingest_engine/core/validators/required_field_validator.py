"""
RequiredFieldValidator - ensures a field is present and not null/empty.
"""

from typing import Any, Dict

from ingest_engine.core.models.record import is_missing

from .base_validator import BaseValidator


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a required field is present and not null/empty.

    Fails if:
    - Field is missing from the record
    - Field value is None
    - Field value is an empty or whitespace-only string
    """

    def validate(self, value: Any, record: Dict[str, Any]) -> None:
        if is_missing(value):
            self.fail("is required but missing")

    @property
    def rule_type(self) -> str:
        return "required"
