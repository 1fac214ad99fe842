"""
Validation rule engine and configuration management.
"""

from .rule_config import RuleConfigBuilder, RuleConfigLoader, default_rules, parse_rules
from .rule_engine import RuleEngine, validate_all

__all__ = [
    "RuleEngine",
    "RuleConfigLoader",
    "RuleConfigBuilder",
    "default_rules",
    "parse_rules",
    "validate_all",
]
