"""
Rule configuration management.

Loads validation rules from YAML files and provides utilities
for building rule sets programmatically.
"""

from pathlib import Path
from typing import Any, Callable

import yaml

from ingest_engine.core.models import ValidationRule


class RuleConfigLoader:
    """
    Loads validation rules from YAML configuration files.

    Expected YAML format (one entry per field, evaluated in file order):
    ```yaml
    rules:
      title:
        required: true
        type: string
        min_length: 5
        max_length: 500
      region:
        type: enum
        enum_values: [US, EU, UK]
    ```

    Custom predicates cannot be expressed in YAML; use RuleConfigBuilder.
    """

    ALLOWED_KEYS = {"required", "type", "min_length", "max_length", "pattern", "enum_values"}

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_rules(self) -> list[ValidationRule]:
        """
        Load and parse validation rules from YAML file.

        Returns:
            List of ValidationRule in declaration order

        Raises:
            ValueError: If YAML is invalid or a rule is malformed
        """
        with open(self.config_path) as f:
            config = yaml.safe_load(f)

        return parse_rules(config)


def parse_rules(config: Any) -> list[ValidationRule]:
    """
    Parse an already-loaded configuration mapping with a 'rules' section.

    Raises:
        ValueError: If the section is missing or a rule is malformed
    """
    if not isinstance(config, dict) or "rules" not in config:
        raise ValueError("Configuration must contain 'rules' section")

    field_rules = config["rules"]
    if not isinstance(field_rules, dict):
        raise ValueError("'rules' section must map field names to rule definitions")

    return [_parse_rule(field, rule_def) for field, rule_def in field_rules.items()]


def _parse_rule(field_name: str, rule_def: Any) -> ValidationRule:
    """
    Parse a single rule definition.

    Raises:
        ValueError: If rule definition is invalid
    """
    if rule_def is None:
        rule_def = {}
    if not isinstance(rule_def, dict):
        raise ValueError(f"Rule for field '{field_name}' must be a mapping")

    unknown = set(rule_def) - RuleConfigLoader.ALLOWED_KEYS
    if unknown:
        raise ValueError(
            f"Rule for field '{field_name}' has unknown keys: {', '.join(sorted(unknown))}"
        )

    # pydantic's ValidationError subclasses ValueError
    return ValidationRule(field=field_name, **rule_def)


class RuleConfigBuilder:
    """
    Programmatically build rule sets (for tests, custom predicates or dynamic rules).
    """

    def __init__(self):
        self.rules: list[ValidationRule] = []

    def add_rule(
        self,
        field: str,
        type: str = "string",
        required: bool = False,
        min_length: int | None = None,
        max_length: int | None = None,
        pattern: str | None = None,
        enum_values: list[Any] | None = None,
        custom_predicate: Callable[[Any], bool] | None = None,
    ) -> "RuleConfigBuilder":
        """Add a rule for one field."""
        self.rules.append(ValidationRule(
            field=field,
            type=type,
            required=required,
            min_length=min_length,
            max_length=max_length,
            pattern=pattern,
            enum_values=enum_values,
            custom_predicate=custom_predicate,
        ))
        return self

    def add_required_string(
        self,
        field: str,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> "RuleConfigBuilder":
        """Add a required string rule."""
        return self.add_rule(field, "string", required=True, min_length=min_length, max_length=max_length)

    def add_enum(self, field: str, enum_values: list[Any], required: bool = False) -> "RuleConfigBuilder":
        """Add an enum membership rule."""
        return self.add_rule(field, "enum", required=required, enum_values=enum_values)

    def build(self) -> list[ValidationRule]:
        """Build and return the rule set."""
        return list(self.rules)


def default_rules() -> list[ValidationRule]:
    """Rule set applied to regulatory records when nothing else is configured."""
    return (
        RuleConfigBuilder()
        .add_required_string("title", min_length=5, max_length=500)
        .add_rule("description", "string", min_length=10, max_length=10000)
        .add_rule("published_at", "date")
        .add_rule("source", "string", min_length=2, max_length=100)
        .add_enum("region", ["US", "EU", "UK", "CA", "AU", "JP", "Global"])
        .build()
    )
