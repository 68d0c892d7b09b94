"""Response caching for upstream API calls."""

from .response_cache import DEFAULT_TTL_SECONDS, ResponseCache, build_cache_key
from .store import CacheStore, InMemoryCacheStore

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "ResponseCache",
    "build_cache_key",
    "DEFAULT_TTL_SECONDS",
]
