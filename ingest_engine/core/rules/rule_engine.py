"""
Rule engine for applying validation rules to ingested records.

The rule engine turns each ValidationRule into an ordered chain of field
checks, applies them to records and produces validation results.
"""

from collections.abc import Sequence
from typing import Any

from ingest_engine.core.models import RecordView, ValidationResult, ValidationRule, is_missing
from ingest_engine.core.validators import (
    BaseValidator,
    CustomValidator,
    EnumValidator,
    LengthValidator,
    RegexValidator,
    RequiredFieldValidator,
    TypeValidator,
    ValidationError,
)
from ingest_engine.observability.logger import get_logger

logger = get_logger(__name__)


class RuleEngine:
    """
    Applies validation rules to records.

    For every rule, in declaration order:
    - a required field that is missing/empty yields one error and the rest
      of that rule is skipped
    - an optional field that is missing/empty skips the rule
    - otherwise the type, length, pattern, enum and custom checks all run,
      each failure adding its own message
    """

    def __init__(self, rules: Sequence[ValidationRule]):
        """
        Initialize the rule engine with validation rules.

        Args:
            rules: Validation rules, evaluated in the given order

        Raises:
            ValueError: If a rule cannot be turned into validators
        """
        self.rules = list(rules)
        self.chains: list[tuple[ValidationRule, RequiredFieldValidator, list[BaseValidator]]] = []
        self._build_validators()

    def _build_validators(self) -> None:
        """Build the validator chain of each rule."""
        for rule in self.rules:
            if not isinstance(rule, ValidationRule):
                raise ValueError(f"Expected ValidationRule, got {type(rule).__name__}")

            field = rule.field
            checks: list[BaseValidator] = [
                TypeValidator(field, {"expected_type": rule.type, "enum_values": rule.enum_values})
            ]
            if rule.min_length is not None or rule.max_length is not None:
                checks.append(LengthValidator(
                    field, {"min_length": rule.min_length, "max_length": rule.max_length}
                ))
            if rule.pattern is not None:
                checks.append(RegexValidator(field, {"pattern": rule.pattern}))
            if rule.enum_values:
                checks.append(EnumValidator(field, {"enum_values": rule.enum_values}))
            if rule.custom_predicate is not None:
                checks.append(CustomValidator(field, {"predicate": rule.custom_predicate}))

            self.chains.append((rule, RequiredFieldValidator(field), checks))

    @property
    def required_fields(self) -> list[str]:
        return [rule.field for rule in self.rules if rule.required]

    def validate_record(self, record: Any) -> ValidationResult:
        """
        Validate one record against all rules.

        Args:
            record: The record to validate (any mapping; other values act as empty records)

        Returns:
            ValidationResult with errors in rule order
        """
        view = RecordView(record)
        payload = view.data
        errors: list[str] = []

        for rule, required_check, checks in self.chains:
            value = view.get(rule.field)

            if is_missing(value):
                if rule.required:
                    try:
                        required_check.validate(value, payload)
                    except ValidationError as e:
                        errors.append(e.message)
                continue

            for check in checks:
                try:
                    check.validate(value, payload)
                except ValidationError as e:
                    errors.append(e.message)

        return ValidationResult(record=record, is_valid=not errors, errors=errors)

    def validate_batch(self, records: Sequence[Any]) -> list[ValidationResult]:
        """
        Validate a batch of records.

        Returns:
            List of ValidationResult objects, one per record, in input order
        """
        return [self.validate_record(record) for record in records]

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule counts by type and requiredness
        """
        return {
            "total_rules": len(self.rules),
            "rules_by_type": self._count_by_type(),
            "required_fields": self.required_fields,
        }

    def _count_by_type(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for rule in self.rules:
            counts[rule.type] = counts.get(rule.type, 0) + 1
        return counts


def validate_all(records: Sequence[Any], rules: Sequence[ValidationRule]) -> list[ValidationResult]:
    """Validate every record against `rules`, one result per record."""
    engine = RuleEngine(rules)
    results = engine.validate_batch(records)
    logger.debug(
        "Validated batch",
        extra={
            "record_count": len(results),
            "invalid_count": sum(1 for r in results if not r.is_valid),
        }
    )
    return results
