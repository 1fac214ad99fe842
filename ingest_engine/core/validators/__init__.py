"""
Field check implementations.

Provides validators for required fields, type checking, string length,
regex patterns, enum membership and custom predicates.
"""

from .base_validator import BaseValidator, ValidationError
from .custom_validator import CustomValidator
from .enum_validator import EnumValidator
from .length_validator import LengthValidator
from .regex_validator import RegexValidator
from .required_field_validator import RequiredFieldValidator
from .type_validator import TypeValidator

__all__ = [
    "BaseValidator",
    "ValidationError",
    "RequiredFieldValidator",
    "TypeValidator",
    "LengthValidator",
    "RegexValidator",
    "EnumValidator",
    "CustomValidator",
]
