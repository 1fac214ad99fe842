"""
CustomValidator - validates using a caller-supplied predicate.
"""

from typing import Any

from ingest_engine.observability.logger import get_logger

from .base_validator import BaseValidator

logger = get_logger(__name__)


class CustomValidator(BaseValidator):
    """
    Validates using a custom predicate.

    Parameters:
    - predicate: A callable taking the field value and returning True when
                 the value is acceptable

    A predicate that raises is treated as a failed check: a bad record must
    never abort the validation of a batch.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.predicate = self.parameters.get("predicate")
        if not self.predicate:
            raise ValueError("CustomValidator requires 'predicate' parameter")

        if not callable(self.predicate):
            raise ValueError("predicate must be callable")

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        try:
            passed = bool(self.predicate(value))
        except Exception as e:
            logger.debug(
                f"Custom predicate raised for field '{self.field_name}': {e}",
                extra={"field_name": self.field_name, "error_type": type(e).__name__}
            )
            passed = False

        if not passed:
            self.fail("failed custom validation")

    @property
    def rule_type(self) -> str:
        return "custom"
