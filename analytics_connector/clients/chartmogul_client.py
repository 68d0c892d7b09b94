"""ChartMogul Metrics client - HTTP Basic authentication."""

import logging
import os
from datetime import date, timedelta
from enum import Enum
from typing import Optional, Union

from analytics_connector.auth.basic import BasicAuth
from analytics_connector.auth.credentials import Credentials
from analytics_connector.cache import ResponseCache
from analytics_connector.clients.base import BaseAPIClient
from analytics_connector.errors import ConfigurationError
from analytics_connector.utils.connector_logger import ConnectorLogger

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.chartmogul.com"
METRICS_ENDPOINT = "/v1/metrics/all"
METRICS_ITEM_FIELD = "entries"


class DateRange(str, Enum):
    """Relative date ranges selectable in the connector config."""

    THIS_YEAR = "this_year"
    THIS_MONTH = "this_month"
    LAST_30_DAYS = "last_30_days"
    LAST_YEAR = "last_year"


class Interval(str, Enum):
    """Metric aggregation intervals."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


def resolve_date_range(
    date_range: Union[DateRange, str],
    today: Optional[date] = None,
) -> dict[str, str]:
    """Turn a relative date range into ChartMogul start/end dates.

    Args:
        date_range: DateRange (or its string value)
        today: Reference date (defaults to the current local date)

    Returns:
        ``{"start-date": "YYYY-MM-DD", "end-date": "YYYY-MM-DD"}``
    """
    try:
        date_range = DateRange(date_range)
    except ValueError:
        raise ConfigurationError(
            f"Unknown Date Range: {date_range}", parameter="dateRange"
        ) from None

    today = today or date.today()

    if date_range == DateRange.THIS_YEAR:
        start, end = today.replace(month=1, day=1), today
    elif date_range == DateRange.THIS_MONTH:
        start, end = today.replace(day=1), today
    elif date_range == DateRange.LAST_30_DAYS:
        start, end = today - timedelta(days=29), today
    else:
        start = date(today.year - 1, 1, 1)
        end = date(today.year - 1, 12, 31)

    return {"start-date": start.isoformat(), "end-date": end.isoformat()}


class ChartMogulClient(BaseAPIClient):
    """Client for the ChartMogul metrics API.

    Features:
    - Basic auth from account token and secret key
    - Response caching and bounded retries (see BaseAPIClient)
    """

    PROVIDER = "chartmogul"

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        base_url: Optional[str] = None,
        cache: Optional[ResponseCache] = None,
        timeout: Optional[float] = None,
        request_logger: Optional[ConnectorLogger] = None,
    ):
        """Initialize ChartMogul client.

        Args:
            credentials: Account token and secret key (unauthenticated if omitted)
            base_url: API base URL (or from env: CHARTMOGUL_API_URL)
            cache: Optional response cache
            timeout: Request timeout in seconds
            request_logger: Optional structured logger for the host request
        """
        super().__init__(
            base_url=base_url or os.getenv("CHARTMOGUL_API_URL", DEFAULT_BASE_URL),
            cache=cache,
            timeout=timeout,
            request_logger=request_logger,
        )

        credentials = credentials or Credentials()
        self.account_token = credentials.identity
        self.basic_auth = BasicAuth(credentials.identity, credentials.secret)

    def get_auth_headers(self) -> dict:
        """Get Basic authorization header."""
        return self.basic_auth.get_auth_header()

    @staticmethod
    def build_params(
        date_range: Union[DateRange, str],
        interval: Optional[str] = None,
        geo: Optional[str] = None,
        plans: Optional[list[str]] = None,
        today: Optional[date] = None,
    ) -> dict:
        """Ordered query parameters for the all-metrics endpoint."""
        return {
            **resolve_date_range(date_range, today),
            "interval": interval,
            "geo": geo,
            "plans": plans or None,
        }

    def fetch_metrics(
        self,
        date_range: Union[DateRange, str],
        interval: Optional[str] = None,
        geo: Optional[str] = None,
        plans: Optional[list[str]] = None,
        today: Optional[date] = None,
    ) -> list[dict]:
        """Fetch metric entries.

        Args:
            date_range: Relative date range
            interval: Aggregation interval (omitted from the query if None)
            geo: Country filter (omitted if None)
            plans: Plan names (each sent as its own ``plans=`` parameter)
            today: Reference date for the date range

        Returns:
            List of raw metric entries
        """
        params = self.build_params(date_range, interval, geo, plans, today)

        logger.info(
            "Fetching all metrics",
            extra={
                "provider": self.PROVIDER,
                "start_date": params["start-date"],
                "end_date": params["end-date"],
                "interval": interval,
            }
        )

        return self.call(METRICS_ENDPOINT, params, METRICS_ITEM_FIELD)
