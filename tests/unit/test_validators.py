"""
Unit tests for field validators.

Includes property-based testing with hypothesis for validators.
"""

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ingest_engine.core.validators import (
    CustomValidator,
    EnumValidator,
    LengthValidator,
    RegexValidator,
    RequiredFieldValidator,
    TypeValidator,
    ValidationError,
)


class TestRequiredFieldValidator:
    """Tests for RequiredFieldValidator"""

    def test_valid_required_field(self):
        """Test validation passes for present field"""
        validator = RequiredFieldValidator("title")
        record = {"title": "Recall notice"}
        validator.validate(record["title"], record)  # Should not raise

    def test_missing_field_raises_error(self):
        """Test validation fails for missing field"""
        validator = RequiredFieldValidator("title")

        with pytest.raises(ValidationError) as exc_info:
            validator.validate(None, {"source": "FDA"})

        assert exc_info.value.message == "Field 'title' is required but missing"
        assert exc_info.value.field_name == "title"
        assert exc_info.value.rule_type == "required"

    def test_blank_string_counts_as_missing(self):
        """Test whitespace-only strings are treated as missing"""
        validator = RequiredFieldValidator("title")

        with pytest.raises(ValidationError):
            validator.validate("   ", {"title": "   "})

    def test_zero_and_false_are_present(self):
        """Test falsy non-string values still count as present"""
        validator = RequiredFieldValidator("count")
        validator.validate(0, {"count": 0})
        validator.validate(False, {"count": False})

    @given(st.text(min_size=1).filter(lambda s: s.strip() != ""))
    def test_property_any_nonblank_string_passes(self, value):
        """Property test: any non-blank string should pass"""
        validator = RequiredFieldValidator("field")
        validator.validate(value, {"field": value})  # Should not raise


class TestTypeValidator:
    """Tests for TypeValidator"""

    @pytest.mark.parametrize("expected_type,value", [
        ("string", "hello"),
        ("number", 42),
        ("number", 3.14),
        ("date", "2024-01-15"),
        ("date", "Jan 15, 2024"),
        ("email", "alerts@fda.gov"),
        ("url", "https://www.ema.europa.eu/en/news"),
        ("url", "http://example.org"),
    ])
    def test_valid_values(self, expected_type, value):
        """Test values of the declared type pass"""
        validator = TypeValidator("field", {"expected_type": expected_type})
        validator.validate(value, {"field": value})

    @pytest.mark.parametrize("expected_type,value", [
        ("string", 42),
        ("number", "42"),
        ("number", True),
        ("number", float("nan")),
        ("date", "unknown"),
        ("date", 12),
        ("email", "alerts@fda"),
        ("email", "no spaces@fda.gov"),
        ("url", "ftp://files.fda.gov"),
        ("url", "www.fda.gov"),
    ])
    def test_invalid_values(self, expected_type, value):
        """Test values of another type fail without coercion"""
        validator = TypeValidator("field", {"expected_type": expected_type})

        with pytest.raises(ValidationError) as exc_info:
            validator.validate(value, {"field": value})

        assert exc_info.value.message == f"Field 'field' has invalid type. Expected {expected_type}"

    def test_enum_type_uses_enum_values(self):
        """Test enum type checks membership of enum_values"""
        validator = TypeValidator("region", {"expected_type": "enum", "enum_values": ["US", "EU"]})
        validator.validate("EU", {})

        with pytest.raises(ValidationError):
            validator.validate("Mars", {})

    def test_missing_expected_type(self):
        """Test that expected_type is required"""
        with pytest.raises(ValueError, match="expected_type"):
            TypeValidator("field", {})

    def test_unsupported_type(self):
        """Test that unknown types are rejected at construction"""
        with pytest.raises(ValueError, match="Unsupported type"):
            TypeValidator("field", {"expected_type": "uuid"})


class TestLengthValidator:
    """Tests for LengthValidator"""

    def test_within_bounds(self):
        validator = LengthValidator("title", {"min_length": 5, "max_length": 10})
        validator.validate("Recall", {})

    def test_too_short(self):
        """Test minimum length message"""
        validator = LengthValidator("title", {"min_length": 5})

        with pytest.raises(ValidationError) as exc_info:
            validator.validate("abc", {})

        assert exc_info.value.message == "Field 'title' is too short. Minimum length: 5"

    def test_too_long(self):
        """Test maximum length message"""
        validator = LengthValidator("title", {"max_length": 3})

        with pytest.raises(ValidationError) as exc_info:
            validator.validate("abcd", {})

        assert exc_info.value.message == "Field 'title' is too long. Maximum length: 3"

    def test_non_strings_are_not_checked(self):
        """Test length bounds only apply to strings"""
        validator = LengthValidator("count", {"min_length": 5})
        validator.validate(12, {})

    def test_requires_a_bound(self):
        with pytest.raises(ValueError):
            LengthValidator("title", {})

    @given(st.text(max_size=50))
    def test_property_bounds_match_len(self, value):
        """Property test: a string fails exactly when its length is out of bounds"""
        validator = LengthValidator("field", {"min_length": 5, "max_length": 20})
        in_bounds = 5 <= len(value) <= 20
        try:
            validator.validate(value, {})
            passed = True
        except ValidationError:
            passed = False
        assert passed == in_bounds


class TestRegexValidator:
    """Tests for RegexValidator"""

    def test_matching_value(self):
        validator = RegexValidator("code", {"pattern": r"K\d{6}"})
        validator.validate("Clearance K123456 granted", {})

    def test_non_matching_value(self):
        """Test pattern failure message"""
        validator = RegexValidator("code", {"pattern": r"^K\d{6}$"})

        with pytest.raises(ValidationError) as exc_info:
            validator.validate("P123456", {})

        assert exc_info.value.message == "Field 'code' does not match required pattern"
        assert exc_info.value.rule_type == "pattern"

    def test_compiled_pattern_with_flags(self):
        validator = RegexValidator("code", {"pattern": re.compile(r"^k\d+$", re.IGNORECASE)})
        validator.validate("K42", {})

    def test_invalid_pattern(self):
        with pytest.raises(ValueError, match="Invalid regex"):
            RegexValidator("code", {"pattern": "(unclosed"})


class TestEnumValidator:
    """Tests for EnumValidator"""

    def test_allowed_value(self):
        validator = EnumValidator("region", {"enum_values": ["US", "EU"]})
        validator.validate("US", {})

    def test_disallowed_value(self):
        """Test enum message lists allowed values in order"""
        validator = EnumValidator("region", {"enum_values": ["US", "EU", "UK"]})

        with pytest.raises(ValidationError) as exc_info:
            validator.validate("Mars", {})

        assert exc_info.value.message == "Field 'region' has invalid value. Allowed values: US, EU, UK"

    def test_requires_values(self):
        with pytest.raises(ValueError):
            EnumValidator("region", {"enum_values": []})


class TestCustomValidator:
    """Tests for CustomValidator"""

    def test_predicate_passes(self):
        validator = CustomValidator("score", {"predicate": lambda v: v > 0})
        validator.validate(5, {})

    def test_predicate_fails(self):
        """Test custom failure message"""
        validator = CustomValidator("score", {"predicate": lambda v: v > 0})

        with pytest.raises(ValidationError) as exc_info:
            validator.validate(-1, {})

        assert exc_info.value.message == "Field 'score' failed custom validation"

    def test_raising_predicate_counts_as_failure(self):
        """Test a predicate that raises is reported, not propagated"""
        validator = CustomValidator("score", {"predicate": lambda v: v > 0})

        with pytest.raises(ValidationError):
            validator.validate("not comparable", {})

    def test_requires_callable(self):
        with pytest.raises(ValueError):
            CustomValidator("score", {"predicate": "not callable"})
        with pytest.raises(ValueError):
            CustomValidator("score", {})
