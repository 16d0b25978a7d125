"""Core types for the KYC validation system.

A field carries an ordered list of rules. Each rule inspects the field's
current value and reports at most one error; the first failing rule wins.
Rules are orthogonal: only `RequiredRule` cares about presence, every other
rule passes on an empty value.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class ValidationError:
    """A single validation failure.

    Attributes:
        message: Human-readable message shown next to the field
        code: Machine-readable error code (e.g., "REQUIRED")
    """

    message: str
    code: str = ""


@runtime_checkable
class ValidationRule(Protocol):
    """Protocol that all field rules implement.

    Rules are stateless and must accept None without raising.
    """

    def validate(self, value: Any) -> ValidationError | None:
        """Validate a field value.

        Args:
            value: str, number, date, or None for an empty field

        Returns:
            A ValidationError if the value fails the rule, otherwise None.
        """
        ...


@dataclass
class RuleDefinition:
    """Declarative rule from a configuration document.

    Resolved to a ValidationRule instance by the RuleRegistry.

    Attributes:
        type: Rule type ("regex", "length", "range", ...)
        message: Error message shown when the rule fails
        value: Type-specific parameter (the pattern for "regex")
        min: Lower bound (length or numeric range)
        max: Upper bound (length or numeric range)
    """

    type: str
    message: str = ""
    value: str | None = None
    min: float | None = None
    max: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleDefinition":
        """Create RuleDefinition from a YAML/JSON dict."""
        value = data.get("value")
        return cls(
            type=data["type"],
            message=data.get("message", ""),
            value=str(value) if value is not None else None,
            min=data.get("min"),
            max=data.get("max"),
        )


def first_error(rules: list[ValidationRule], value: Any) -> ValidationError | None:
    """Run rules in order and return the first failure, if any."""
    for rule in rules:
        error = rule.validate(value)
        if error is not None:
            return error
    return None
