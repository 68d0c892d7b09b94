"""Numeric settings read from the environment."""

import os
from typing import Union

from analytics_connector.errors import ConfigurationError


def env_number(name: str, default: Union[int, float], cast=float) -> Union[int, float]:
    """Read a positive number from an environment variable.

    Raises:
        ConfigurationError: The variable is set but is not a positive number
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = cast(raw.strip())
    except ValueError:
        raise ConfigurationError(
            f"{name} must be a number, got {raw!r}", parameter=name
        ) from None

    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}", parameter=name)
    return value
