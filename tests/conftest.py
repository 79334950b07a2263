"""Shared fixtures: fake clock, scripted upstream and a wired service."""

import threading
from datetime import datetime, timezone

import pytest

from services.apod import ApodService
from services.cache import LRUTTLCache


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSource:
    """DataSource stub returning scripted values and counting calls per key.

    `values` maps key -> value or exception instance. Keys not listed get a
    generated picture dict.
    """

    def __init__(self, values: dict | None = None):
        self.values = values or {}
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch(self, key: str):
        with self._lock:
            self.calls.append(key)
        value = self.values.get(key, {"date": key, "title": f"Picture {key}", "media_type": "image"})
        if isinstance(value, Exception):
            raise value
        return value

    def count(self, key: str) -> int:
        return self.calls.count(key)


def fixed_clock(year: int, month: int, day: int, hour: int = 12):
    def clock(tz):
        return datetime(year, month, day, hour, tzinfo=timezone.utc).astimezone(tz)

    return clock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def service(clock, source):
    return ApodService(
        cache=LRUTTLCache(max_size=50, ttl_seconds=3600, clock=clock),
        source=source,
        clock=fixed_clock(2024, 3, 10),
    )
