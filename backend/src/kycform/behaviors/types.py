"""Country behavior types.

A country behavior post-processes a loaded configuration:
- prefilled_data_loader: optional source of values fetched before display
- apply: transforms the field definitions (e.g., locks verified fields)
"""

from typing import Protocol

from kycform.core.types import FieldDefinition, FormData
from kycform.prefill.loaders import PrefilledDataLoader


class CountryBehavior(Protocol):
    """Per-country hook for pre-fill and field transformation."""

    # True only for the fallback behavior used when a country has none
    is_default: bool

    def prefilled_data_loader(self) -> PrefilledDataLoader | None:
        """Return the loader for pre-fill data, or None if not needed."""
        ...

    def apply(
        self,
        definitions: list[FieldDefinition],
        prefilled_data: FormData | None,
    ) -> list[FieldDefinition]:
        """Transform field definitions after loading.

        Must return new definitions and leave the inputs untouched.

        Args:
            definitions: Field definitions from the configuration
            prefilled_data: Data returned by the loader, None if none was fetched
        """
        ...
