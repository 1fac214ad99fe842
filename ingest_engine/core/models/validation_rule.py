"""
ValidationRule model representing a declarative constraint on one record field.
"""

import re
from typing import Any, Callable, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

RuleType = Literal["string", "number", "date", "email", "url", "enum"]


class ValidationRule(BaseModel):
    """
    A constraint applied to one field of every record.

    Rules are configured once at startup and never mutated afterwards.

    Attributes:
        field: Name of the record field this rule applies to
        required: Whether a missing/empty value is an error
        type: Expected type: "string", "number", "date", "email", "url", "enum"
        min_length: Minimum length for string values
        max_length: Maximum length for string values
        pattern: Regular expression string values must match
        enum_values: Allowed values
        custom_predicate: Callable taking the value and returning True when valid
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        json_schema_extra={
            "example": {
                "field": "title",
                "required": True,
                "type": "string",
                "min_length": 5,
                "max_length": 500,
            }
        },
    )

    field: str = Field(..., min_length=1)
    required: bool = False
    type: RuleType = "string"
    min_length: int | None = Field(None, ge=0)
    max_length: int | None = Field(None, ge=0)
    pattern: re.Pattern | None = None
    enum_values: List[Any] | None = None
    custom_predicate: Callable[[Any], bool] | None = None

    @field_validator("pattern", mode="before")
    @classmethod
    def compile_pattern(cls, v):
        """Accept pattern strings and compile them once."""
        if v is None or isinstance(v, re.Pattern):
            return v
        if isinstance(v, str):
            try:
                return re.compile(v)
            except re.error as e:
                raise ValueError(f"Invalid regex pattern: {e}")
        raise ValueError(f"Pattern must be string or compiled Pattern, got {type(v).__name__}")

    @model_validator(mode="after")
    def check_consistency(self):
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError(
                f"min_length ({self.min_length}) exceeds max_length ({self.max_length}) "
                f"for field '{self.field}'"
            )
        if self.type == "enum" and not self.enum_values:
            raise ValueError(f"Rule for field '{self.field}' has type 'enum' but no enum_values")
        return self
