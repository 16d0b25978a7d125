"""Behavior registry: country code -> CountryBehavior.

Follows the same pattern as RuleRegistry, but is instantiated per form so
tests and host applications can wire their own behaviors.
"""

from kycform.behaviors.builtin import DefaultCountryBehavior, netherlands_behavior
from kycform.behaviors.types import CountryBehavior
from kycform.config import FormSettings


class BehaviorRegistry:
    """Lookup table from country code to behavior, with a default fallback.

    Codes are matched case-insensitively.

    Example:
        registry = BehaviorRegistry()
        registry.register("NL", netherlands_behavior())
        behavior = registry.behavior_for("nl")
    """

    def __init__(
        self,
        behaviors: dict[str, CountryBehavior] | None = None,
        default: CountryBehavior | None = None,
    ):
        self._behaviors: dict[str, CountryBehavior] = {}
        self.default: CountryBehavior = default or DefaultCountryBehavior()
        for code, behavior in (behaviors or {}).items():
            self.register(code, behavior)

    @classmethod
    def with_builtins(cls, settings: FormSettings | None = None) -> "BehaviorRegistry":
        """Registry with every built-in country behavior registered."""
        return cls({"NL": netherlands_behavior(settings)})

    def register(self, code: str, behavior: CountryBehavior) -> None:
        """Register a behavior for a country code.

        Idempotent - re-registering the same code is a no-op.
        """
        key = code.upper()
        if key in self._behaviors:
            return
        self._behaviors[key] = behavior

    def behavior_for(self, code: str) -> CountryBehavior:
        """Return the behavior for `code`, or the default if none is registered."""
        return self._behaviors.get(code.upper(), self.default)

    def is_registered(self, code: str) -> bool:
        return code.upper() in self._behaviors

    def list_registered(self) -> list[str]:
        """List all registered country codes."""
        return sorted(self._behaviors.keys())
