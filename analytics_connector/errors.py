"""Error types surfaced to the reporting host."""

from typing import Any, Optional


class ConfigurationError(ValueError):
    """Raised when a required request parameter is missing or invalid."""

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.parameter = parameter


class FetchFailure(RuntimeError):
    """Raised when an upstream call fails on every retry attempt.

    Carries enough context to identify the request without exposing
    credentials.
    """

    def __init__(
        self,
        provider: str,
        endpoint: str,
        params: Optional[dict[str, Any]],
        attempts: int,
    ):
        self.provider = provider
        self.endpoint = endpoint
        self.params = dict(params or {})
        self.attempts = attempts
        super().__init__(
            f"Failed to complete fetch from {provider} after {attempts} attempts. "
            f"Endpoint: {endpoint}, Params: {self.params}"
        )


class CacheWriteFailure(RuntimeError):
    """Raised by a cache store that cannot hold a value."""
