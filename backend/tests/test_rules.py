"""Tests for field validation rules."""

from dataclasses import FrozenInstanceError
from datetime import date, datetime

import pytest

from kycform.validation.rules import (
    AlwaysPassRule,
    LengthRule,
    MaximumDateRule,
    MinimumDateRule,
    NotFutureDateRule,
    NotNilDateRule,
    RegexRule,
    RequiredRule,
    ValueRangeRule,
)
from kycform.validation.types import ValidationError, ValidationRule, first_error


# =============================================================================
# RequiredRule
# =============================================================================


class TestRequiredRule:
    def test_none_fails(self):
        error = RequiredRule().validate(None)
        assert error is not None
        assert error.message == "This field is required"
        assert error.code == "REQUIRED"

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_blank_strings_fail(self, value):
        assert RequiredRule().validate(value) is not None

    @pytest.mark.parametrize("value", ["John", 0, 0.0, date(2000, 1, 1)])
    def test_present_values_pass(self, value):
        assert RequiredRule().validate(value) is None

    def test_custom_message(self):
        error = RequiredRule(message="BSN is required").validate("")
        assert error.message == "BSN is required"


# =============================================================================
# RegexRule
# =============================================================================


class TestRegexRule:
    def test_matching_value_passes(self):
        rule = RegexRule(pattern=r"^\d{9}$", message="BSN must be exactly 9 digits")
        assert rule.validate("123456789") is None

    def test_non_matching_value_fails(self):
        rule = RegexRule(pattern=r"^\d{9}$", message="BSN must be exactly 9 digits")
        error = rule.validate("12345")
        assert error is not None
        assert error.message == "BSN must be exactly 9 digits"
        assert error.code == "PATTERN_MISMATCH"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_passes(self, value):
        assert RegexRule(pattern=r"^\d+$", message="digits").validate(value) is None

    def test_non_string_passes(self):
        assert RegexRule(pattern=r"^\d+$", message="digits").validate(12.5) is None

    def test_pattern_is_searched_not_anchored(self):
        rule = RegexRule(pattern=r"\d{3}", message="needs three digits")
        assert rule.validate("abc123def") is None

    def test_invalid_pattern_raises(self):
        with pytest.raises(ValueError, match="Invalid regex pattern"):
            RegexRule(pattern="([", message="broken")


# =============================================================================
# LengthRule
# =============================================================================


class TestLengthRule:
    def test_within_bounds_passes(self):
        assert LengthRule(message="2-50", min=2, max=50).validate("Jo") is None

    def test_too_short_fails(self):
        error = LengthRule(message="2-50", min=2, max=50).validate("J")
        assert error is not None
        assert error.code == "LENGTH"

    def test_too_long_fails(self):
        assert LengthRule(message="max 3", max=3).validate("abcd") is not None

    def test_no_upper_bound(self):
        assert LengthRule(message="min 1", min=1).validate("a" * 1000) is None

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_passes(self, value):
        assert LengthRule(message="2-50", min=2, max=50).validate(value) is None


# =============================================================================
# ValueRangeRule
# =============================================================================


class TestValueRangeRule:
    def test_number_in_range_passes(self):
        assert ValueRangeRule(message="0-100", min=0, max=100).validate(50) is None

    def test_bounds_are_inclusive(self):
        rule = ValueRangeRule(message="0-100", min=0, max=100)
        assert rule.validate(0) is None
        assert rule.validate(100.0) is None

    def test_below_minimum_fails(self):
        error = ValueRangeRule(message="0-100", min=0, max=100).validate(-1)
        assert error.code == "OUT_OF_RANGE"
        assert error.message == "0-100"

    def test_above_maximum_fails(self):
        assert ValueRangeRule(message="0-100", min=0, max=100).validate(100.5) is not None

    def test_numeric_string_is_checked(self):
        rule = ValueRangeRule(message="0-100", min=0, max=100)
        assert rule.validate("42") is None
        assert rule.validate("420") is not None

    def test_non_numeric_string_fails(self):
        error = ValueRangeRule(message="0-100", min=0, max=100).validate("lots")
        assert error.code == "NOT_A_NUMBER"
        assert error.message == "Value must be a number"

    @pytest.mark.parametrize("value", [None, "", True, date(2000, 1, 1)])
    def test_non_numbers_pass(self, value):
        assert ValueRangeRule(message="0-100", min=0, max=100).validate(value) is None

    def test_open_bounds(self):
        assert ValueRangeRule(message="positive", min=0).validate(10**9) is None


# =============================================================================
# MaximumDateRule / MinimumDateRule
# =============================================================================


class TestMaximumDateRule:
    BOUND = date(2024, 6, 15)

    @pytest.fixture
    def rule(self):
        return MaximumDateRule(maximum_date=self.BOUND, message="Too late")

    def test_same_day_passes(self, rule):
        assert rule.validate(self.BOUND) is None

    def test_day_after_fails(self, rule):
        error = rule.validate(date(2024, 6, 16))
        assert error is not None
        assert error.message == "Too late"
        assert error.code == "DATE_AFTER_MAXIMUM"

    def test_day_before_passes(self, rule):
        assert rule.validate(date(2024, 6, 14)) is None

    def test_none_passes(self, rule):
        assert rule.validate(None) is None

    @pytest.mark.parametrize("value", ["2030-01-01", 12, ""])
    def test_non_date_passes(self, rule, value):
        assert rule.validate(value) is None

    def test_compares_calendar_day_only(self, rule):
        assert rule.validate(datetime(2024, 6, 15, 23, 59, 59)) is None


class TestMinimumDateRule:
    def test_before_minimum_fails(self):
        rule = MinimumDateRule(minimum_date=date(1900, 1, 1), message="Too early")
        error = rule.validate(date(1899, 12, 31))
        assert error.code == "DATE_BEFORE_MINIMUM"

    def test_on_or_after_minimum_passes(self):
        rule = MinimumDateRule(minimum_date=date(1900, 1, 1), message="Too early")
        assert rule.validate(date(1900, 1, 1)) is None
        assert rule.validate(date(1990, 1, 15)) is None

    def test_none_passes(self):
        assert MinimumDateRule(minimum_date=date(1900, 1, 1), message="x").validate(None) is None


# =============================================================================
# NotNilDateRule
# =============================================================================


class TestNotNilDateRule:
    def test_none_fails(self):
        error = NotNilDateRule().validate(None)
        assert error.message == "Date cannot be empty"
        assert error.code == "DATE_REQUIRED"

    def test_blank_string_fails(self):
        assert NotNilDateRule().validate("  ").message == "Date cannot be empty"

    def test_date_passes(self):
        assert NotNilDateRule().validate(date(1990, 1, 15)) is None

    @pytest.mark.parametrize("value", ["1990-01-15", "01/15/90", "01/15/1990"])
    def test_parseable_strings_pass(self, value):
        assert NotNilDateRule().validate(value) is None

    def test_unparseable_string_fails(self):
        error = NotNilDateRule().validate("15th of January")
        assert error.message == "Invalid date format"
        assert error.code == "INVALID_DATE"

    def test_other_types_fail(self):
        assert NotNilDateRule().validate(19900115).message == "Value must be a valid date"


# =============================================================================
# NotFutureDateRule
# =============================================================================


class TestNotFutureDateRule:
    TODAY = date(2024, 6, 15)

    @pytest.fixture
    def rule(self):
        return NotFutureDateRule(reference_date=self.TODAY)

    def test_today_passes(self, rule):
        assert rule.validate(self.TODAY) is None

    def test_past_passes(self, rule):
        assert rule.validate(date(1990, 1, 15)) is None

    def test_tomorrow_fails(self, rule):
        error = rule.validate(date(2024, 6, 16))
        assert error.message == "Date cannot be in the future"
        assert error.code == "FUTURE_DATE"

    def test_later_today_passes(self, rule):
        assert rule.validate(datetime(2024, 6, 15, 23, 0)) is None

    def test_none_fails(self, rule):
        assert rule.validate(None).message == "Date value is required"

    def test_date_string_is_parsed(self, rule):
        assert rule.validate("2024-06-14") is None
        assert rule.validate("2025-01-01").code == "FUTURE_DATE"

    def test_unparseable_string_fails(self, rule):
        error = rule.validate("tomorrow")
        assert error.message == "Invalid date format. Expected format: yyyy-MM-dd"

    def test_other_types_fail(self, rule):
        assert rule.validate(42).message == "Value must be a date"

    def test_today_is_evaluated_at_validation_time(self):
        days = iter([date(2024, 1, 1), date(2024, 1, 3)])
        rule = NotFutureDateRule(now=lambda: next(days))
        assert rule.validate(date(2024, 1, 2)) is not None
        assert rule.validate(date(2024, 1, 2)) is None


# =============================================================================
# AlwaysPassRule / first_error
# =============================================================================


class TestAlwaysPassRule:
    @pytest.mark.parametrize("value", [None, "", "anything", 1, date(2000, 1, 1)])
    def test_never_fails(self, value):
        assert AlwaysPassRule(type_name="checksum").validate(value) is None


class TestValidationError:
    def test_is_a_plain_value(self):
        error = ValidationError(message="BSN must be exactly 9 digits", code="PATTERN_MISMATCH")
        assert error == ValidationError("BSN must be exactly 9 digits", "PATTERN_MISMATCH")
        assert ValidationError(message="x").code == ""
        assert not hasattr(error, "to_dict")

    def test_is_immutable(self):
        error = ValidationError(message="x")
        with pytest.raises(FrozenInstanceError):
            error.message = "y"


class TestFirstError:
    def test_rules_satisfy_protocol(self):
        assert isinstance(RequiredRule(), ValidationRule)
        assert isinstance(NotFutureDateRule(), ValidationRule)

    def test_first_failing_rule_wins(self):
        rules = [
            RequiredRule(),
            RegexRule(pattern=r"^\d+$", message="digits only"),
            LengthRule(message="exactly 9", min=9, max=9),
        ]
        assert first_error(rules, "").code == "REQUIRED"
        assert first_error(rules, "12a").message == "digits only"
        assert first_error(rules, "123").message == "exactly 9"
        assert first_error(rules, "123456789") is None

    def test_no_rules_is_valid(self):
        assert first_error([], None) is None
