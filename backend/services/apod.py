"""Fetch orchestration: cache first, NASA on miss.

There is no deduplication of concurrent misses. Two requests for the same
uncached date both call upstream and both write the cache (last write wins).
"""

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Callable, Iterator

from config import settings
from services.cache import LRUTTLCache
from services.nasa_client import DataSource, NasaApodClient

logger = logging.getLogger(__name__)

_service = None


def to_key(day: date) -> str:
    return day.isoformat()


class ApodService:
    def __init__(
        self,
        cache: LRUTTLCache,
        source: DataSource,
        tz: tzinfo = timezone.utc,
        clock: Callable[[tzinfo], datetime] = datetime.now,
    ):
        self.cache = cache
        self.source = source
        self._tz = tz
        self._clock = clock

    def today(self) -> date:
        return self._clock(self._tz).date()

    def today_key(self) -> str:
        return to_key(self.today())

    def get_by_date(self, key: str) -> Any | None:
        """Return the picture for a date key, calling upstream only on a cache miss.

        FetchError from the source propagates as-is. An empty result (None or {}) is
        returned to the caller but never cached, so the next call retries.
        """
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached

        logger.info("Cache miss: %s", key)
        value = self.source.fetch(key)
        # {} is as empty as None; neither is cached
        if value:
            self.cache.put(key, value)
        return value

    def get_today(self) -> Any | None:
        return self.get_by_date(self.today_key())

    def iter_range(self, anchor: date, count: int) -> Iterator[Any]:
        """Yield values for anchor, anchor - 1 day, ... (count days), skipping empty ones."""
        for offset in range(count):
            value = self.get_by_date(to_key(anchor - timedelta(days=offset)))
            if value is not None:
                yield value

    def fetch_range(self, anchor: date, count: int) -> list:
        """Most recent first. The first FetchError aborts the whole range."""
        return list(self.iter_range(anchor, count))

    def get_recent(self, days: int) -> list:
        return self.fetch_range(self.today(), days)


def get_service() -> ApodService:
    """Return the process-wide service, creating it on first call."""
    global _service
    if _service is None:
        _service = ApodService(
            cache=LRUTTLCache(max_size=settings.cache_max_size, ttl_seconds=settings.cache_ttl_seconds),
            source=NasaApodClient(
                base_url=settings.nasa_base_url,
                api_key=settings.api_key,
                timeout=settings.upstream_timeout,
            ),
            tz=settings.timezone,
        )
    return _service


def close_service() -> None:
    global _service
    if _service is not None and isinstance(_service.source, NasaApodClient):
        _service.source.close()
    _service = None
