"""Per-country form behaviors.

A behavior can fetch pre-fill data for a country's form and transform the
loaded field definitions, for example locking fields whose values were
verified externally.

Usage:
    from kycform.behaviors import BehaviorRegistry

    registry = BehaviorRegistry.with_builtins()
    behavior = registry.behavior_for("NL")
"""

from kycform.behaviors.builtin import (
    NETHERLANDS_LOCKED_FIELDS,
    DefaultCountryBehavior,
    LockingPrefillBehavior,
    netherlands_behavior,
)
from kycform.behaviors.registry import BehaviorRegistry
from kycform.behaviors.types import CountryBehavior

__all__ = [
    "BehaviorRegistry",
    "CountryBehavior",
    "DefaultCountryBehavior",
    "LockingPrefillBehavior",
    "NETHERLANDS_LOCKED_FIELDS",
    "netherlands_behavior",
]
