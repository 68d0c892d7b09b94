"""Reporting-host connectors, one per upstream provider."""

from typing import Optional

from analytics_connector.auth.credentials import InMemoryPropertyStore, PropertyStore
from analytics_connector.cache import CacheStore

from .base import HOST_FUNCTIONS, BaseConnector
from .algolia import AlgoliaConnector
from .chartmogul import ChartMogulConnector

CONNECTORS = {
    AlgoliaConnector.PROVIDER: AlgoliaConnector,
    ChartMogulConnector.PROVIDER: ChartMogulConnector,
}


def get_connector(
    provider: str,
    properties: Optional[PropertyStore] = None,
    cache_store: Optional[CacheStore] = None,
    **kwargs,
) -> BaseConnector:
    """Build the connector for a provider name.

    Raises:
        ValueError: For an unknown provider
    """
    try:
        connector_cls = CONNECTORS[provider]
    except KeyError:
        raise ValueError(
            f"Unknown provider: {provider}. Expected one of {sorted(CONNECTORS)}"
        ) from None

    if properties is None:
        properties = InMemoryPropertyStore()
    return connector_cls(properties, cache_store, **kwargs)


__all__ = [
    "HOST_FUNCTIONS",
    "BaseConnector",
    "AlgoliaConnector",
    "ChartMogulConnector",
    "CONNECTORS",
    "get_connector",
]
