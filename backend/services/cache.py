"""In-memory LRU + TTL cache for upstream APOD responses. No Redis needed.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
a date may be fetched twice (once per worker). This is acceptable for this
project's scale. The cache still eliminates repeated calls within the
same worker.

One lock guards the whole structure: recency bookkeeping and expiry removal
are not safe to interleave, and every operation is in-memory and O(1).
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 50
DEFAULT_TTL_SECONDS = 60 * 60


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    cached_at: float


class LRUTTLCache:
    """Bounded key -> value map with least-recently-used eviction and lazy TTL expiry."""

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self._max_size = max(max_size, 0)
        self._ttl = ttl_seconds
        self._clock = clock
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.cached_at > self._ttl

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None
            if self._is_expired(entry, self._clock()):
                del self._store[key]
                self._expirations += 1
                self._misses += 1
                logger.debug("Cache entry expired: %s", key)
                return None
            # access order, not insertion order
            self._store.move_to_end(key)
            self._hits += 1
            return entry.value

    def put(self, key: str, value: Any) -> None:
        if value is None:
            return
        # TTL 0 means nothing is ever served back, so don't retain it
        if self._ttl <= 0:
            return

        with self._lock:
            self._store[key] = CacheEntry(value=value, cached_at=self._clock())
            self._store.move_to_end(key)
            if len(self._store) > self._max_size:
                evicted, _ = self._store.popitem(last=False)
                self._evictions += 1
                logger.debug("Cache full (%d), evicted %s", self._max_size, evicted)

    def __contains__(self, key: str) -> bool:
        """Membership test that respects TTL but leaves recency untouched."""
        with self._lock:
            entry = self._store.get(key)
            return entry is not None and not self._is_expired(entry, self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def stats(self) -> dict:
        with self._lock:
            return {
                "size": len(self._store),
                "max_size": self._max_size,
                "ttl_seconds": self._ttl,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "expirations": self._expirations,
            }
