"""
EnumValidator - validates that a value is one of an allowed set.
"""

from typing import Any

from .base_validator import BaseValidator


class EnumValidator(BaseValidator):
    """
    Parameters:
    - enum_values: Allowed values (compared with ==, order kept for messages)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        enum_values = self.parameters.get("enum_values")
        if not enum_values:
            raise ValueError("EnumValidator requires a non-empty 'enum_values' parameter")
        self.enum_values = list(enum_values)

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if value not in self.enum_values:
            allowed = ", ".join(str(v) for v in self.enum_values)
            self.fail(f"has invalid value. Allowed values: {allowed}")

    @property
    def rule_type(self) -> str:
        return "enum"
