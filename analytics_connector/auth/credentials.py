"""Per-user credential storage backed by the host's property store."""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class PropertyStore(Protocol):
    """Host-managed per-user key-value store (no TTL)."""

    def get_property(self, key: str) -> Optional[str]:
        ...

    def set_property(self, key: str, value: str) -> None:
        ...

    def delete_property(self, key: str) -> None:
        ...


class InMemoryPropertyStore:
    """Dict-backed property store for local runs and tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._properties: dict[str, str] = dict(initial or {})

    def get_property(self, key: str) -> Optional[str]:
        return self._properties.get(key)

    def set_property(self, key: str, value: str) -> None:
        self._properties[key] = value

    def delete_property(self, key: str) -> None:
        self._properties.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._properties


@dataclass(frozen=True)
class Credentials:
    """Identity and secret pair for one provider."""

    identity: Optional[str] = None
    secret: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.identity) and bool(self.secret)


class CredentialStore:
    """Reads and writes a provider's two secrets in a property store.

    The fetch pipeline only ever reads from this store; writes happen
    through the host's auth lifecycle calls.
    """

    def __init__(self, store: PropertyStore, identity_key: str, secret_key: str):
        """Initialize credential store.

        Args:
            store: Host property store
            identity_key: Property name holding the identity (app id, token)
            secret_key: Property name holding the secret (API key, secret)
        """
        self.store = store
        self.identity_key = identity_key
        self.secret_key = secret_key

    def get(self) -> Credentials:
        """Read the current credentials (either part may be None)."""
        return Credentials(
            identity=self.store.get_property(self.identity_key),
            secret=self.store.get_property(self.secret_key),
        )

    def set(self, identity: str, secret: str) -> None:
        """Store a new credential pair."""
        self.store.set_property(self.identity_key, identity)
        self.store.set_property(self.secret_key, secret)
        logger.info("Credentials updated", extra={"identity_key": self.identity_key})

    def reset(self) -> None:
        """Delete both stored secrets."""
        self.store.delete_property(self.identity_key)
        self.store.delete_property(self.secret_key)
        logger.info("Credentials reset", extra={"identity_key": self.identity_key})

    def is_valid(self) -> bool:
        """Both parts present and non-empty."""
        return self.get().is_complete
