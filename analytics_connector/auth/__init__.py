"""Authentication modules for API access.

Supports:
- API key header authentication
- HTTP Basic authentication
- Credential storage in the host's per-user property store
"""

from .api_key import APIKeyAuth
from .basic import BasicAuth
from .credentials import (
    Credentials,
    CredentialStore,
    InMemoryPropertyStore,
    PropertyStore,
)

__all__ = [
    "APIKeyAuth",
    "BasicAuth",
    "Credentials",
    "CredentialStore",
    "InMemoryPropertyStore",
    "PropertyStore",
]
