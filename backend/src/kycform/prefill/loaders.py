"""Pre-fill data sources.

A pre-fill loader fetches values for some form fields before the form is
shown, keyed by field id. Country behaviors decide which loader to use.
"""

import asyncio
import logging
from typing import Any, Protocol

import httpx

from kycform.core.types import FormData
from kycform.validation.dates import parse_iso_timestamp

logger = logging.getLogger(__name__)


class PrefilledDataError(Exception):
    """Base class for pre-fill failures."""


class PrefilledDataConnectivityError(PrefilledDataError):
    """The data source could not be reached."""


class PrefilledDataInvalidError(PrefilledDataError):
    """The data source answered with an unusable response."""


class PrefilledDataLoader(Protocol):
    """Protocol for pre-fill data sources."""

    async def load(self) -> FormData:
        """Fetch pre-fill values keyed by field id.

        Raises:
            PrefilledDataError: If the data cannot be loaded
        """
        ...


class StaticPrefilledDataLoader:
    """Returns a fixed payload after a fixed delay.

    Stands in for a network source (the delay models its latency).
    """

    def __init__(self, data: FormData, delay: float = 0.0):
        self.data = dict(data)
        self.delay = delay

    async def load(self) -> FormData:
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        return dict(self.data)


class RemotePrefilledDataLoader:
    """Loads a user profile over HTTP and maps it to form field ids.

    Expects a JSON object ``{"firstName", "lastName", "birthDate"}`` with
    ``birthDate`` as an ISO-8601 timestamp.
    """

    def __init__(
        self,
        url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.url = url
        self.client = client
        self.timeout = timeout

    async def load(self) -> FormData:
        try:
            if self.client is not None:
                response = await self.client.get(self.url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.url)
        except httpx.HTTPError as e:
            logger.warning("Profile request to %s failed: %s", self.url, e)
            raise PrefilledDataConnectivityError(str(e)) from e

        return map_profile(response)


def map_profile(response: httpx.Response) -> FormData:
    """Map a profile response to pre-fill data.

    Raises:
        PrefilledDataInvalidError: On a non-200 status or an unexpected body
    """
    if response.status_code != 200:
        raise PrefilledDataInvalidError(f"Unexpected status {response.status_code}")

    try:
        body: Any = response.json()
        return {
            "first_name": _require_str(body, "firstName"),
            "last_name": _require_str(body, "lastName"),
            "birth_date": parse_iso_timestamp(_require_str(body, "birthDate")),
        }
    except (ValueError, TypeError, KeyError) as e:
        raise PrefilledDataInvalidError(f"Invalid profile payload: {e}") from e


def _require_str(body: Any, key: str) -> str:
    value = body[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value
