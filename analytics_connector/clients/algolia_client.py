"""Algolia Analytics client - application id / API key header authentication."""

import logging
import os
from enum import Enum
from typing import Optional

from analytics_connector.auth.api_key import APIKeyAuth
from analytics_connector.auth.credentials import Credentials
from analytics_connector.cache import ResponseCache
from analytics_connector.clients.base import BaseAPIClient
from analytics_connector.errors import ConfigurationError
from analytics_connector.utils.connector_logger import ConnectorLogger

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us"


class AnalyticsType(str, Enum):
    """Analytics subtypes offered by the connector."""

    TOP_SEARCHES = "top_searches"
    TOP_NO_RESULTS = "top_no_results"
    TOP_HITS = "top_hits"
    TOP_FILTER_ATTRIBUTES = "top_filter_attributes"

    @classmethod
    def parse(cls, value) -> "AnalyticsType":
        """Resolve a config value to a subtype."""
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(
                f"Unknown Analytics Type: {value}", parameter="analyticsType"
            ) from None


# Endpoint path and envelope field holding the item list, per subtype
ENDPOINTS: dict[AnalyticsType, tuple[str, str]] = {
    AnalyticsType.TOP_SEARCHES: ("/2/searches", "searches"),
    AnalyticsType.TOP_NO_RESULTS: ("/2/searches/noResults", "searches"),
    AnalyticsType.TOP_HITS: ("/2/hits", "hits"),
    AnalyticsType.TOP_FILTER_ATTRIBUTES: ("/2/filters", "attributes"),
}


class AlgoliaClient(BaseAPIClient):
    """Client for the Algolia Analytics REST API.

    Features:
    - X-Algolia-Application-Id / X-Algolia-API-Key headers
    - Regional analytics hosts
    - Response caching and bounded retries (see BaseAPIClient)
    """

    PROVIDER = "algolia"

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        region: Optional[str] = None,
        base_url: Optional[str] = None,
        cache: Optional[ResponseCache] = None,
        timeout: Optional[float] = None,
        request_logger: Optional[ConnectorLogger] = None,
    ):
        """Initialize Algolia client.

        Args:
            credentials: Application id and API key (unauthenticated if omitted)
            region: Analytics region (or from env: ALGOLIA_REGION, default 'us')
            base_url: Full analytics base URL (or from env: ALGOLIA_ANALYTICS_URL)
            cache: Optional response cache
            timeout: Request timeout in seconds
            request_logger: Optional structured logger for the host request
        """
        region = region or os.getenv("ALGOLIA_REGION", DEFAULT_REGION)
        base_url = (
            base_url
            or os.getenv("ALGOLIA_ANALYTICS_URL")
            or f"https://analytics.{region}.algolia.com"
        )

        super().__init__(
            base_url=base_url,
            cache=cache,
            timeout=timeout,
            request_logger=request_logger,
        )

        credentials = credentials or Credentials()
        self.app_id = credentials.identity
        self.api_key_auth = APIKeyAuth({
            "X-Algolia-Application-Id": credentials.identity,
            "X-Algolia-API-Key": credentials.secret,
        })

    def get_auth_headers(self) -> dict:
        """Get application id and API key headers."""
        return self.api_key_auth.get_auth_header()

    def fetch_analytics(self, analytics_type, index: str) -> list[dict]:
        """Fetch analytics items for one index.

        Args:
            analytics_type: AnalyticsType (or its string value)
            index: Index name

        Returns:
            List of raw analytics items
        """
        analytics_type = AnalyticsType.parse(analytics_type)
        endpoint, item_field = ENDPOINTS[analytics_type]

        logger.info(
            f"Fetching {analytics_type.value} for index {index}",
            extra={"provider": self.PROVIDER, "index": index}
        )

        return self.call(endpoint, {"index": index}, item_field)
