"""NASA APOD API client — the upstream data source behind the cache.

Endpoint: GET https://api.nasa.gov/planetary/apod?api_key=<key>&date=YYYY-MM-DD

Any transport error, non-success status or non-JSON body is raised as
FetchError. No retries: a failed call is reported to the caller and nothing
is cached.
"""

import logging
from typing import Protocol

import httpx

from errors import FetchError

logger = logging.getLogger(__name__)


class DataSource(Protocol):
    def fetch(self, key: str) -> dict | None:
        """Return the upstream value for a date key, or None if there is none."""


class NasaApodClient:
    """Blocking httpx client, shared across request threads."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url
        self._api_key = api_key
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def fetch(self, key: str) -> dict | None:
        logger.info("Fetching APOD from upstream: date=%s", key)
        try:
            resp = self._client.get(self.base_url, params={"api_key": self._api_key, "date": key})
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("APOD upstream returned %d for %s", status, key)
            raise FetchError(f"NASA APOD API error for {key}: HTTP {status}", upstream_status=status) from e
        except httpx.HTTPError as e:
            logger.error("APOD upstream request failed for %s: %s", key, e)
            raise FetchError(f"NASA APOD API unreachable for {key}: {e}") from e

        # Empty responses count as "no value" and are never cached
        if not resp.content.strip():
            return None
        try:
            data = resp.json()
        except ValueError as e:
            raise FetchError(
                f"NASA APOD API returned a non-JSON body for {key}", upstream_status=resp.status_code
            ) from e

        if not data:
            return None
        if not isinstance(data, dict):
            raise FetchError(f"Unexpected APOD payload for {key}: {type(data).__name__}")
        return data

    def close(self) -> None:
        self._client.close()
