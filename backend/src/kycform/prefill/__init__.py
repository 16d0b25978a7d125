"""Pre-fill data sources for country behaviors."""

from kycform.prefill.loaders import (
    PrefilledDataConnectivityError,
    PrefilledDataError,
    PrefilledDataInvalidError,
    PrefilledDataLoader,
    RemotePrefilledDataLoader,
    StaticPrefilledDataLoader,
    map_profile,
)

__all__ = [
    "PrefilledDataConnectivityError",
    "PrefilledDataError",
    "PrefilledDataInvalidError",
    "PrefilledDataLoader",
    "RemotePrefilledDataLoader",
    "StaticPrefilledDataLoader",
    "map_profile",
]
