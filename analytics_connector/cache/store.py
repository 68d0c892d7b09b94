"""Key-value cache stores with per-entry expiry."""

import logging
import time
from typing import Callable, Optional, Protocol

from analytics_connector.errors import CacheWriteFailure

logger = logging.getLogger(__name__)

# Host cache stores reject values above this size
DEFAULT_MAX_VALUE_BYTES = 100_000


class CacheStore(Protocol):
    """Host-provided cache capability."""

    def get(self, key: str) -> Optional[bytes]:
        ...

    def put(self, key: str, value: bytes, ttl_seconds: int) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryCacheStore:
    """TTL-bounded dict store.

    Expired entries are dropped lazily on read. Values above
    ``max_value_bytes`` are rejected with ``CacheWriteFailure``, leaving
    any previous entry for the key untouched.
    """

    def __init__(
        self,
        max_value_bytes: int = DEFAULT_MAX_VALUE_BYTES,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_value_bytes = max_value_bytes
        self._clock = clock
        self._entries: dict[str, tuple[bytes, float]] = {}

    def get(self, key: str) -> Optional[bytes]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def put(self, key: str, value: bytes, ttl_seconds: int) -> None:
        if len(value) > self.max_value_bytes:
            raise CacheWriteFailure(
                f"Value for {key} is {len(value)} bytes, "
                f"limit is {self.max_value_bytes}"
            )
        self._entries[key] = (value, self._clock() + ttl_seconds)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
