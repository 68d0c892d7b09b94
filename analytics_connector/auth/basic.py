"""HTTP Basic authentication from an account token and secret."""

import base64
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class BasicAuth:
    """Builds an ``Authorization: Basic`` header.

    The header is only produced when both the username and the password
    are set; otherwise requests go out unauthenticated.
    """

    def __init__(self, username: Optional[str], password: Optional[str]):
        self.username = username
        self.password = password

    @property
    def is_configured(self) -> bool:
        """Whether both parts of the credential pair are present."""
        return bool(self.username) and bool(self.password)

    def encode(self) -> str:
        """Return the base64 encoded ``username:password`` pair."""
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def get_auth_header(self) -> dict:
        """Get authorization header dict for requests."""
        if not self.is_configured:
            logger.debug("Basic auth credentials not set, sending request unauthenticated")
            return {}
        return {"Authorization": f"Basic {self.encode()}"}
