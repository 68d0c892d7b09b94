"""Pytest configuration and fixtures."""

from datetime import date

import pytest
import requests

from analytics_connector.auth.credentials import InMemoryPropertyStore
from analytics_connector.cache import InMemoryCacheStore, ResponseCache


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, json_data=None, json_raises=False):
        self.status_code = status_code
        self._json_data = json_data
        self._json_raises = json_raises

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        if self._json_raises:
            raise ValueError("Invalid JSON")
        return self._json_data


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def fake_response():
    """FakeResponse class, for building canned HTTP responses."""
    return FakeResponse


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache_store(clock):
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def response_cache(cache_store):
    return ResponseCache(cache_store, ttl_seconds=20)


@pytest.fixture
def properties():
    return InMemoryPropertyStore()


@pytest.fixture
def today():
    """Fixed reference date for date ranges."""
    return date(2024, 3, 7)


@pytest.fixture
def search_items():
    """Algolia top searches items."""
    return [
        {"search": "shoes", "count": 120, "nbHits": 42},
        {"search": "red dress", "count": 75, "nbHits": 9},
        {"search": "", "count": 30, "nbHits": 1000},
    ]


@pytest.fixture
def metric_entries():
    """ChartMogul all-metrics entries (rates in percent, money in cents)."""
    return [
        {
            "date": "2024-01-31",
            "customer-churn-rate": 12.5,
            "mrr-churn-rate": 4.0,
            "ltv": 1234500,
            "customers": 310,
            "asp": 9900,
            "arpa": 4950,
            "arr": 18414000,
            "mrr": 1534500,
        },
        {
            "date": "2024-02-29",
            "customer-churn-rate": 0,
            "mrr-churn-rate": 1.5,
            "ltv": 1300000,
            "customers": 322,
            "asp": 9900,
            "arpa": 5000,
            "arr": 19320000,
            "mrr": 1610000,
        },
    ]
