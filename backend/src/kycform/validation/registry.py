"""Rule registry for configured validation rules.

Maps the rule `type` strings used in configuration documents to factories
that build ValidationRule instances.
"""

import logging
from typing import Callable

from kycform.validation.rules import AlwaysPassRule, LengthRule, RegexRule, ValueRangeRule
from kycform.validation.types import RuleDefinition, ValidationRule

logger = logging.getLogger(__name__)

RuleFactory = Callable[[RuleDefinition], ValidationRule]


class RuleRegistry:
    """Registry for configurable rule types.

    Unknown types resolve to AlwaysPassRule instead of failing: a document
    written for a newer version still loads, its unknown rules are skipped.

    Example:
        RuleRegistry.register_factory("postcode", make_postcode_rule)
        rule = RuleRegistry.create(RuleDefinition(type="postcode", message="..."))
    """

    _factories: dict[str, RuleFactory] = {}

    @classmethod
    def register_factory(cls, name: str, factory: RuleFactory) -> None:
        """Register a factory for a rule type.

        Idempotent - re-registering the same name is a no-op.
        """
        if name in cls._factories:
            return
        cls._factories[name] = factory

    @classmethod
    def create(cls, definition: RuleDefinition) -> ValidationRule:
        """Create a rule instance from a definition.

        Returns AlwaysPassRule for unregistered types.
        """
        factory = cls._factories.get(definition.type)
        if factory is None:
            logger.warning(
                "Unknown validation rule type '%s'; it will always pass", definition.type
            )
            return AlwaysPassRule(type_name=definition.type)
        return factory(definition)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._factories

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered rule type names."""
        return sorted(cls._factories.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._factories.clear()


# =============================================================================
# Built-in factories
# =============================================================================


def _regex_factory(definition: RuleDefinition) -> RegexRule:
    return RegexRule(pattern=definition.value or "", message=definition.message)


def _length_factory(definition: RuleDefinition) -> LengthRule:
    return LengthRule(
        message=definition.message,
        min=int(definition.min) if definition.min is not None else 0,
        max=int(definition.max) if definition.max is not None else None,
    )


def _range_factory(definition: RuleDefinition) -> ValueRangeRule:
    return ValueRangeRule(
        message=definition.message,
        min=definition.min,
        max=definition.max,
    )


def register_builtin_rules() -> None:
    """Register the rule types understood by configuration documents."""
    RuleRegistry.register_factory("regex", _regex_factory)
    RuleRegistry.register_factory("length", _length_factory)
    RuleRegistry.register_factory("range", _range_factory)
