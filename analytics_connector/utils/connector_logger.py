"""Structured per-request logging for connector calls.

Every record carries ``provider``, ``request_id``, ``step`` and ``status``
as ``extra`` fields so the lines of one host call can be joined. The
closing ``success`` record also carries the request's counters: upstream
requests and their total time, retries, and cache hits and misses.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional


@dataclass
class RequestStats:
    """Counters accumulated while serving one host request."""

    api_requests: int = 0
    api_time_ms: float = 0
    retries: int = 0
    cache_hits: int = 0
    cache_misses: int = 0

    def to_dict(self) -> dict:
        return {
            "api_requests": self.api_requests,
            "api_time_ms": round(self.api_time_ms, 2),
            "retries": self.retries,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
        }


class ConnectorLogger:
    """Structured logger for one host request against one provider."""

    def __init__(self, provider: str, request_id: str):
        """Initialize connector logger.

        Args:
            provider: Upstream provider name (e.g., 'algolia', 'chartmogul')
            request_id: Identifier for the host request being served
        """
        self.provider = provider
        self.request_id = request_id
        self.logger = logging.getLogger(f"{__name__}.{provider}")
        self.stats = RequestStats()
        self._started_at: Optional[float] = None

    def _emit(self, level: int, step: str, status: str, **fields) -> None:
        record = {
            "provider": self.provider,
            "request_id": self.request_id,
            "step": step,
            "status": status,
        }
        record.update({name: value for name, value in fields.items() if value is not None})
        self.logger.log(level, f"{step} {status}", extra=record)

    def _elapsed_ms(self) -> Optional[float]:
        if self._started_at is None:
            return None
        return round((time.time() - self._started_at) * 1000, 2)

    def start(self, step: str) -> None:
        self._started_at = time.time()
        self._emit(logging.INFO, step, "started")

    def success(self, step: str, **fields) -> None:
        """Log step success together with the request's counters."""
        self._emit(
            logging.INFO,
            step,
            "success",
            duration_ms=self._elapsed_ms(),
            **self.get_metrics(),
            **fields
        )

    def error(self, step: str, error: Exception, **fields) -> None:
        self._emit(
            logging.ERROR,
            step,
            "error",
            error=str(error),
            duration_ms=self._elapsed_ms(),
            **self.get_metrics(),
            **fields
        )

    def increment_retry(self) -> int:
        self.stats.retries += 1
        return self.stats.retries

    def log_api_request(self, endpoint: str, duration_ms: float, status_code: int) -> None:
        """Log one completed upstream request."""
        self.stats.api_requests += 1
        self.stats.api_time_ms += duration_ms
        self._emit(
            logging.DEBUG,
            "api_request",
            "success" if status_code < 400 else "error",
            endpoint=endpoint,
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
        )

    def log_cache(self, cache_key: str, hit: bool, row_count: int = 0) -> None:
        if hit:
            self.stats.cache_hits += 1
        else:
            self.stats.cache_misses += 1
        self._emit(
            logging.DEBUG,
            "cache",
            "hit" if hit else "miss",
            cache_key=cache_key,
            row_count=row_count,
        )

    def get_metrics(self) -> dict:
        return self.stats.to_dict()


@dataclass
class Timer:
    started_at: float
    duration_ms: float = 0


@contextmanager
def timed_operation(name: str, log: Optional[logging.Logger] = None):
    """Time the body of a ``with`` block.

    Yields a ``Timer`` whose ``duration_ms`` is set when the block exits,
    also when it raises.
    """
    timer = Timer(started_at=time.time())
    try:
        yield timer
    finally:
        timer.duration_ms = (time.time() - timer.started_at) * 1000
        if log:
            log.debug(
                f"{name} took {timer.duration_ms:.1f}ms",
                extra={"operation": name, "duration_ms": round(timer.duration_ms, 2)}
            )
