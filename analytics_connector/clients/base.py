"""Base API client with query building, caching and retry."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from analytics_connector.cache import ResponseCache, build_cache_key
from analytics_connector.errors import FetchFailure
from analytics_connector.utils.connector_logger import ConnectorLogger
from analytics_connector.utils.env import env_number

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
MAX_ATTEMPTS = 3


def build_query_string(base_url: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Append query parameters to a URL.

    List values expand to repeated ``key=value`` pairs and ``None`` values
    are left out entirely. Values are percent-encoded; keys are emitted
    as given.

    Example:
        >>> build_query_string("https://x/m", {"interval": "day", "geo": None, "plans": ["a", "b"]})
        'https://x/m?interval=day&plans=a&plans=b'
    """
    pairs: list[str] = []
    for name, value in (params or {}).items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            pairs.append(f"{name}={quote(str(item), safe='')}")

    if not pairs:
        return base_url
    return f"{base_url}?{'&'.join(pairs)}"


@dataclass
class RequestMetrics:
    """Metrics for API requests."""

    total_attempts: int = 0
    successful_requests: int = 0
    failed_attempts: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    total_duration_ms: float = 0
    request_durations: list[float] = field(default_factory=list)

    def record_attempt(self, duration_ms: float, success: bool) -> None:
        """Record a single HTTP attempt."""
        self.total_attempts += 1
        self.total_duration_ms += duration_ms
        self.request_durations.append(duration_ms)
        if success:
            self.successful_requests += 1
        else:
            self.failed_attempts += 1

    def record_cache(self, hit: bool) -> None:
        """Record a cache lookup."""
        if hit:
            self.cache_hits += 1
        else:
            self.cache_misses += 1

    @property
    def avg_duration_ms(self) -> float:
        """Average attempt duration."""
        if not self.request_durations:
            return 0
        return sum(self.request_durations) / len(self.request_durations)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total_attempts": self.total_attempts,
            "successful_requests": self.successful_requests,
            "failed_attempts": self.failed_attempts,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "total_duration_ms": round(self.total_duration_ms, 2),
            "avg_duration_ms": round(self.avg_duration_ms, 2),
        }


class BaseAPIClient(ABC):
    """Base class for upstream analytics API clients.

    A call reads through the response cache, then makes up to
    ``max_attempts`` immediate attempts. Any exception raised by the
    transport, the HTTP status check or the JSON decode consumes one
    attempt. When every attempt fails a ``FetchFailure`` is raised and no
    partial result is returned.
    """

    PROVIDER = "base"

    def __init__(
        self,
        base_url: str,
        cache: Optional[ResponseCache] = None,
        timeout: Optional[float] = None,
        max_attempts: int = MAX_ATTEMPTS,
        request_logger: Optional[ConnectorLogger] = None,
    ):
        """Initialize base API client.

        Args:
            base_url: Base URL for the API
            cache: Optional response cache (no caching if omitted)
            timeout: Request timeout in seconds (or from env: ANALYTICS_CONNECTOR_TIMEOUT)
            max_attempts: Attempts per call before giving up
            request_logger: Optional structured logger for the host request
        """
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.timeout = timeout or env_number("ANALYTICS_CONNECTOR_TIMEOUT", DEFAULT_TIMEOUT)
        self.max_attempts = max_attempts
        self.request_logger = request_logger

        self.metrics = RequestMetrics()

        # Transport-level retries are off; call() owns the attempt count
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def close(self) -> None:
        """Close the HTTP session and log the client's request metrics."""
        self.session.close()
        logger.info(
            f"{self.PROVIDER} client closed",
            extra={"provider": self.PROVIDER, **self.metrics.to_dict()}
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @abstractmethod
    def get_auth_headers(self) -> dict:
        """Get authentication headers for requests."""
        pass

    def build_url(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Full request URL for an endpoint and its query parameters."""
        return build_query_string(f"{self.base_url}/{endpoint.lstrip('/')}", params)

    def cache_key(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Deterministic cache key for an endpoint and its query parameters."""
        return build_cache_key(
            self.PROVIDER,
            f"{self.base_url}/{endpoint.lstrip('/')}",
            params,
        )

    def _get_json(self, url: str, endpoint: str) -> Any:
        """Make one GET attempt and return the decoded JSON body."""
        start_time = time.time()
        try:
            response = self.session.get(
                url,
                headers=self.get_auth_headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except Exception:
            self.metrics.record_attempt((time.time() - start_time) * 1000, success=False)
            raise

        duration_ms = (time.time() - start_time) * 1000
        self.metrics.record_attempt(duration_ms, success=True)

        logger.info(
            "API request completed",
            extra={
                "provider": self.PROVIDER,
                "endpoint": endpoint,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            }
        )
        if self.request_logger:
            self.request_logger.log_api_request(endpoint, duration_ms, response.status_code)
        return body

    def fetch_json(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """GET an endpoint with bounded, immediate retries.

        Raises:
            FetchFailure: After ``max_attempts`` failed attempts
        """
        url = self.build_url(endpoint, params)
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return self._get_json(url, endpoint)
            except Exception as e:
                last_error = e
                logger.warning(
                    f"Request to {self.PROVIDER} failed",
                    extra={
                        "provider": self.PROVIDER,
                        "endpoint": endpoint,
                        "attempt": attempt,
                        "max_attempts": self.max_attempts,
                        "error": str(e),
                    }
                )
                if self.request_logger and attempt < self.max_attempts:
                    self.request_logger.increment_retry()

        raise FetchFailure(
            provider=self.PROVIDER,
            endpoint=endpoint,
            params=params,
            attempts=self.max_attempts,
        ) from last_error

    @staticmethod
    def extract_items(envelope: Any, item_field: str) -> list[dict]:
        """Pull the item list out of a response envelope.

        A missing, null or non-list field yields an empty list.
        """
        if not isinstance(envelope, dict):
            return []
        items = envelope.get(item_field)
        if not isinstance(items, list):
            return []
        return list(items)

    def call(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]],
        item_field: str,
    ) -> list[dict]:
        """Fetch the item list for a request, reading through the cache.

        Args:
            endpoint: API endpoint path
            params: Ordered query parameters (None values are omitted)
            item_field: Envelope field holding the item list

        Returns:
            List of raw items

        Raises:
            FetchFailure: When every attempt failed
        """
        key = self.cache_key(endpoint, params)

        if self.cache is not None:
            cached = self.cache.get(key)
            self.metrics.record_cache(hit=cached is not None)
            if self.request_logger:
                self.request_logger.log_cache(
                    key, hit=cached is not None, row_count=len(cached or [])
                )
            if cached is not None:
                logger.debug("Cache hit", extra={"cache_key": key, "item_count": len(cached)})
                return cached

        envelope = self.fetch_json(endpoint, params)
        items = self.extract_items(envelope, item_field)

        if self.cache is not None:
            self.cache.put(key, items)

        logger.info(
            f"Fetched {len(items)} items from {self.PROVIDER}",
            extra={"provider": self.PROVIDER, "endpoint": endpoint, "item_count": len(items)}
        )
        return items
