"""
ValidationResult model representing the outcome of validating a record (ephemeral).
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ValidationResult(BaseModel):
    """
    Outcome of validating one record against the rule set.

    Attributes:
        record: The record that was validated (never modified)
        is_valid: True iff no rule produced an error
        errors: Error messages in rule-evaluation order
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        json_schema_extra={
            "example": {
                "record": {"title": "Test", "source": "FDA"},
                "is_valid": False,
                "errors": ["Field 'title' is too short. Minimum length: 5"],
            }
        },
    )

    record: Any = None
    is_valid: bool
    errors: List[str] = Field(default_factory=list)

    @field_validator("errors")
    @classmethod
    def check_valid_consistency(cls, v, info):
        """Validate that is_valid=True implies errors is empty."""
        if info.data.get("is_valid") and len(v) > 0:
            raise ValueError("is_valid=True but errors is not empty")
        return v
