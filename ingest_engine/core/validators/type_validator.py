"""
TypeValidator - validates that a field holds a value of the declared type.
"""

import math
import re
from typing import Any

from ingest_engine.utils.dates import is_valid_timestamp

from .base_validator import BaseValidator

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
URL_PATTERN = re.compile(r"^https?://.+")


class TypeValidator(BaseValidator):
    """
    Validates that a field matches the expected type. No coercion is applied:
    a numeric string is not a number.

    Supported types:
    - string: any str
    - number: int or float, excluding bool and NaN
    - date: a value parseable as a timestamp
    - email: a string shaped like local@domain.tld
    - url: an http(s) URL string
    - enum: a member of the 'enum_values' parameter
    """

    SUPPORTED_TYPES = ("string", "number", "date", "email", "url", "enum")

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        expected_type = self.parameters.get("expected_type")
        if not expected_type:
            raise ValueError("TypeValidator requires 'expected_type' parameter")
        if expected_type not in self.SUPPORTED_TYPES:
            raise ValueError(f"Unsupported type: {expected_type}")

        self.expected_type: str = expected_type
        self.enum_values = list(self.parameters.get("enum_values") or [])

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if not self._matches(value):
            self.fail(f"has invalid type. Expected {self.expected_type}")

    def _matches(self, value: Any) -> bool:
        if self.expected_type == "string":
            return isinstance(value, str)
        if self.expected_type == "number":
            if isinstance(value, bool) or not isinstance(value, int | float):
                return False
            return not (isinstance(value, float) and math.isnan(value))
        if self.expected_type == "date":
            return is_valid_timestamp(value)
        if self.expected_type == "email":
            return isinstance(value, str) and bool(EMAIL_PATTERN.match(value))
        if self.expected_type == "url":
            return isinstance(value, str) and bool(URL_PATTERN.match(value))
        # enum
        return value in self.enum_values

    @property
    def rule_type(self) -> str:
        return "type"
