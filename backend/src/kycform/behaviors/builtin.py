"""Built-in country behaviors."""

from dataclasses import replace
from datetime import date
from typing import Callable

from kycform.config import FormSettings
from kycform.core.types import FieldDefinition, FormData
from kycform.prefill.loaders import (
    PrefilledDataLoader,
    RemotePrefilledDataLoader,
    StaticPrefilledDataLoader,
)

# Fields verified externally for Dutch applicants
NETHERLANDS_LOCKED_FIELDS = ("first_name", "last_name", "birth_date")

NETHERLANDS_SAMPLE_PROFILE: FormData = {
    "first_name": "John",
    "last_name": "Doe",
    "birth_date": date(1990, 1, 15),
}


class DefaultCountryBehavior:
    """Behavior for countries without special requirements.

    No pre-fill, no transformation.
    """

    is_default = True

    def prefilled_data_loader(self) -> PrefilledDataLoader | None:
        return None

    def apply(
        self,
        definitions: list[FieldDefinition],
        prefilled_data: FormData | None,
    ) -> list[FieldDefinition]:
        return list(definitions)


class LockingPrefillBehavior:
    """Pre-fills fields from a loader and marks a fixed set of them read-only.

    Models identity fields that become locked once verified elsewhere.
    """

    is_default = False

    def __init__(
        self,
        loader_factory: Callable[[], PrefilledDataLoader],
        read_only_field_ids: tuple[str, ...] | list[str],
    ):
        self.loader_factory = loader_factory
        self.read_only_field_ids = frozenset(read_only_field_ids)

    def prefilled_data_loader(self) -> PrefilledDataLoader | None:
        return self.loader_factory()

    def apply(
        self,
        definitions: list[FieldDefinition],
        prefilled_data: FormData | None,
    ) -> list[FieldDefinition]:
        return [
            replace(d, read_only=True) if d.id in self.read_only_field_ids else replace(d)
            for d in definitions
        ]


def netherlands_behavior(settings: FormSettings | None = None) -> LockingPrefillBehavior:
    """Build the NL behavior: profile pre-fill with name and birth date locked.

    Uses the remote profile endpoint when `settings.profile_url` is set,
    otherwise a local sample profile delivered after `settings.prefill_delay`.
    """
    settings = settings or FormSettings()

    def make_loader() -> PrefilledDataLoader:
        if settings.profile_url:
            return RemotePrefilledDataLoader(settings.profile_url, timeout=settings.http_timeout)
        return StaticPrefilledDataLoader(NETHERLANDS_SAMPLE_PROFILE, delay=settings.prefill_delay)

    return LockingPrefillBehavior(make_loader, NETHERLANDS_LOCKED_FIELDS)
