"""Compressed, TTL-bounded cache of upstream item lists."""

import gzip
import json
import logging
from typing import Any, Mapping, Optional

from analytics_connector.cache.store import CacheStore
from analytics_connector.utils.env import env_number

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 20


def build_cache_key(
    provider: str,
    endpoint: str,
    params: Optional[Mapping[str, Any]] = None,
) -> str:
    """Build a deterministic cache key for a logical request.

    Parameters keep the caller's order, ``None`` values are skipped and
    list values expand in order, so semantically identical requests
    always produce the same key.

    Example:
        >>> build_cache_key("chartmogul", "/v1/metrics/all", {"interval": "day", "geo": None})
        'chartmogul|/v1/metrics/all|interval=day'
    """
    parts = [provider, endpoint]
    for name, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            parts.extend(f"{name}={item}" for item in value)
        else:
            parts.append(f"{name}={value}")
    return "|".join(parts)


class ResponseCache:
    """Caches item lists as gzipped JSON in a host cache store.

    Caching is an optimization only: read errors are reported as a miss and
    write errors are logged and swallowed.
    """

    def __init__(self, store: CacheStore, ttl_seconds: Optional[int] = None):
        """Initialize response cache.

        Args:
            store: Cache store to read from and write to
            ttl_seconds: Entry lifetime (or from env: ANALYTICS_CONNECTOR_CACHE_TTL)
        """
        self.store = store
        if ttl_seconds is None:
            ttl_seconds = env_number(
                "ANALYTICS_CONNECTOR_CACHE_TTL", DEFAULT_TTL_SECONDS, cast=int
            )
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def encode(items: list[dict]) -> bytes:
        payload = json.dumps(items, sort_keys=True, separators=(",", ":"))
        return gzip.compress(payload.encode("utf-8"))

    @staticmethod
    def decode(blob: bytes) -> list[dict]:
        return json.loads(gzip.decompress(blob).decode("utf-8"))

    def get(self, key: str) -> Optional[list[dict]]:
        """Return the cached item list, or None when absent or expired."""
        blob = self.store.get(key)
        if blob is None:
            return None

        try:
            return self.decode(blob)
        except (OSError, EOFError, ValueError) as e:
            logger.warning(
                "Discarding unreadable cache entry",
                extra={"cache_key": key, "error": str(e)}
            )
            return None

    def put(self, key: str, items: list[dict], ttl_seconds: Optional[int] = None) -> None:
        """Store an item list under ``key``. Never raises."""
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        try:
            blob = self.encode(items)
            self.store.put(key, blob, ttl)
        except Exception as e:
            # Usually the payload is too big for the host store
            logger.warning(
                "Cache write skipped",
                extra={"cache_key": key, "item_count": len(items), "error": str(e)}
            )
            return

        logger.debug(
            "Cached response",
            extra={"cache_key": key, "item_count": len(items), "size_bytes": len(blob)}
        )
