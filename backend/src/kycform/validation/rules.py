"""Field validation rules.

Available rules:
- RequiredRule: value must be present and not blank
- RegexRule: non-empty strings must match a pattern
- LengthRule: non-empty strings must have a length within bounds
- ValueRangeRule: numeric values must fall within bounds
- MaximumDateRule / MinimumDateRule: dates must not be after / before a bound
- NotNilDateRule: a date (or parseable date string) must be present
- NotFutureDateRule: a date must not be after today
- AlwaysPassRule: placeholder for rule types this version does not know
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from kycform.validation.dates import as_day, parse_date
from kycform.validation.types import ValidationError

DEFAULT_REQUIRED_MESSAGE = "This field is required"
NOT_A_NUMBER_MESSAGE = "Value must be a number"


def _is_blank(value: Any) -> bool:
    return isinstance(value, str) and value.strip() == ""


def _non_empty_string(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


# =============================================================================
# Presence
# =============================================================================


@dataclass(frozen=True)
class RequiredRule:
    """Fails if the value is None or a whitespace-only string."""

    message: str = DEFAULT_REQUIRED_MESSAGE

    def validate(self, value: Any) -> ValidationError | None:
        if value is None or _is_blank(value):
            return ValidationError(message=self.message, code="REQUIRED")
        return None


# =============================================================================
# String rules
# =============================================================================


@dataclass(frozen=True)
class RegexRule:
    """Fails if a non-empty string does not contain a match for `pattern`.

    The pattern is searched, not implicitly anchored; use ^...$ to match the
    whole value.
    """

    pattern: str
    message: str
    _compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re.compile(self.pattern)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern '{self.pattern}': {e}") from e
        object.__setattr__(self, "_compiled", compiled)

    def validate(self, value: Any) -> ValidationError | None:
        text = _non_empty_string(value)
        if text is None:
            return None
        if self._compiled.search(text) is None:
            return ValidationError(message=self.message, code="PATTERN_MISMATCH")
        return None


@dataclass(frozen=True)
class LengthRule:
    """Fails if a non-empty string's length is outside [min, max].

    `max=None` means no upper bound.
    """

    message: str
    min: int = 0
    max: int | None = None

    def validate(self, value: Any) -> ValidationError | None:
        text = _non_empty_string(value)
        if text is None:
            return None
        length = len(text)
        if length < self.min or (self.max is not None and length > self.max):
            return ValidationError(message=self.message, code="LENGTH")
        return None


# =============================================================================
# Numeric rules
# =============================================================================


@dataclass(frozen=True)
class ValueRangeRule:
    """Fails if a numeric value falls outside [min, max].

    Accepts native numbers and numeric strings (the raw text of an input).
    A non-empty string that is not a number fails with NOT_A_NUMBER_MESSAGE.
    """

    message: str
    min: float | None = None
    max: float | None = None

    def validate(self, value: Any) -> ValidationError | None:
        if value is None:
            return None

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            numeric = float(value)
        elif isinstance(value, str) and value:
            try:
                numeric = float(value)
            except ValueError:
                return ValidationError(message=NOT_A_NUMBER_MESSAGE, code="NOT_A_NUMBER")
        else:
            return None

        if self.min is not None and numeric < self.min:
            return ValidationError(message=self.message, code="OUT_OF_RANGE")
        if self.max is not None and numeric > self.max:
            return ValidationError(message=self.message, code="OUT_OF_RANGE")
        return None


# =============================================================================
# Date rules
# =============================================================================


@dataclass(frozen=True)
class MaximumDateRule:
    """Fails if a date is after `maximum_date` (compared by calendar day).

    Non-date values pass; presence is RequiredRule's job.
    """

    maximum_date: date
    message: str

    def validate(self, value: Any) -> ValidationError | None:
        if not isinstance(value, date):
            return None
        if as_day(value) > as_day(self.maximum_date):
            return ValidationError(message=self.message, code="DATE_AFTER_MAXIMUM")
        return None


@dataclass(frozen=True)
class MinimumDateRule:
    """Fails if a date is before `minimum_date` (compared by calendar day)."""

    minimum_date: date
    message: str

    def validate(self, value: Any) -> ValidationError | None:
        if not isinstance(value, date):
            return None
        if as_day(value) < as_day(self.minimum_date):
            return ValidationError(message=self.message, code="DATE_BEFORE_MINIMUM")
        return None


@dataclass(frozen=True)
class NotNilDateRule:
    """Fails unless the value is a date or a parseable date string."""

    def validate(self, value: Any) -> ValidationError | None:
        if value is None:
            return ValidationError(message="Date cannot be empty", code="DATE_REQUIRED")

        if isinstance(value, date):
            return None

        if isinstance(value, str):
            if _is_blank(value):
                return ValidationError(message="Date cannot be empty", code="DATE_REQUIRED")
            if parse_date(value) is not None:
                return None
            return ValidationError(message="Invalid date format", code="INVALID_DATE")

        return ValidationError(message="Value must be a valid date", code="INVALID_DATE")


@dataclass(frozen=True)
class NotFutureDateRule:
    """Fails if the date is after the reference day.

    The reference day is `reference_date` when given, otherwise `now()` at
    the time of validation.
    """

    reference_date: date | None = None
    now: Callable[[], date] = field(default=date.today, compare=False)

    def validate(self, value: Any) -> ValidationError | None:
        if value is None:
            return ValidationError(message="Date value is required", code="DATE_REQUIRED")

        if isinstance(value, date):
            day = as_day(value)
        elif isinstance(value, str):
            parsed = parse_date(value)
            if parsed is None:
                return ValidationError(
                    message="Invalid date format. Expected format: yyyy-MM-dd",
                    code="INVALID_DATE",
                )
            day = parsed
        else:
            return ValidationError(message="Value must be a date", code="INVALID_DATE")

        reference = self.reference_date if self.reference_date is not None else self.now()
        if day > as_day(reference):
            return ValidationError(message="Date cannot be in the future", code="FUTURE_DATE")
        return None


# =============================================================================
# Fallback
# =============================================================================


@dataclass(frozen=True)
class AlwaysPassRule:
    """Stand-in for an unrecognised configured rule type. Never fails."""

    type_name: str = ""

    def validate(self, value: Any) -> ValidationError | None:
        return None
