"""API client wrappers for the upstream analytics providers.

Each client handles:
- Authentication
- Query string construction
- Response caching
- Bounded, immediate retries
"""

from .base import BaseAPIClient, RequestMetrics, build_query_string
from .algolia_client import AlgoliaClient, AnalyticsType
from .chartmogul_client import ChartMogulClient, DateRange, Interval, resolve_date_range

__all__ = [
    "BaseAPIClient",
    "RequestMetrics",
    "build_query_string",
    "AlgoliaClient",
    "AnalyticsType",
    "ChartMogulClient",
    "DateRange",
    "Interval",
    "resolve_date_range",
]
