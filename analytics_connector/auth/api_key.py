"""API key header authentication."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class APIKeyAuth:
    """Sends one or more named API keys as request headers.

    Headers whose key has no value are left out, so an unconfigured
    connector still sends the request and the upstream API rejects it.
    """

    def __init__(self, headers: dict[str, Optional[str]]):
        """Initialize API key auth.

        Args:
            headers: Mapping of header name to key value
        """
        self.headers = dict(headers)

        missing = [name for name, value in self.headers.items() if not value]
        if missing:
            logger.debug("API key headers not configured", extra={"headers": missing})

    def get_auth_header(self) -> dict:
        """Headers for the keys that have a value."""
        return {name: value for name, value in self.headers.items() if value}
