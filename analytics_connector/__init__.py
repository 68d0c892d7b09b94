"""Data source connectors for search-analytics and subscription-metrics APIs.

Each connector exposes the reporting host's plugin contract
(get_config, get_schema, get_data, auth lifecycle) and turns upstream
API responses into schema-ordered rows.
"""

from .connectors import AlgoliaConnector, ChartMogulConnector, get_connector
from .errors import CacheWriteFailure, ConfigurationError, FetchFailure

__version__ = "0.1.0"

__all__ = [
    "AlgoliaConnector",
    "ChartMogulConnector",
    "get_connector",
    "CacheWriteFailure",
    "ConfigurationError",
    "FetchFailure",
]
