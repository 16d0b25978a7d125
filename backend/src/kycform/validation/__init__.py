"""KYC form validation rules.

Usage:
    from kycform.validation import RequiredRule, RegexRule, first_error

    rules = [RequiredRule(), RegexRule(pattern=r"^\\d{9}$", message="Invalid BSN")]
    error = first_error(rules, "12345")
"""

from kycform.validation.registry import RuleRegistry, register_builtin_rules
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
from kycform.validation.types import (
    RuleDefinition,
    ValidationError,
    ValidationRule,
    first_error,
)

__all__ = [
    # Types
    "RuleDefinition",
    "ValidationError",
    "ValidationRule",
    "first_error",
    # Rules
    "AlwaysPassRule",
    "LengthRule",
    "MaximumDateRule",
    "MinimumDateRule",
    "NotFutureDateRule",
    "NotNilDateRule",
    "RegexRule",
    "RequiredRule",
    "ValueRangeRule",
    # Registry
    "RuleRegistry",
    "register_builtin_rules",
]
