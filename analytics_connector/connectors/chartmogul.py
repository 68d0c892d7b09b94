"""ChartMogul subscription metrics data source connector."""

import logging
from datetime import date
from typing import Optional

from analytics_connector.clients.chartmogul_client import ChartMogulClient, DateRange, Interval
from analytics_connector.connectors.base import BaseConnector
from analytics_connector.errors import ConfigurationError
from analytics_connector.schema import Schema, chartmogul_schema
from analytics_connector.transform import CHARTMOGUL_PREDEFINED_FIELDS
from analytics_connector.utils.connector_logger import ConnectorLogger

logger = logging.getLogger(__name__)


def _split_csv(value: Optional[str]) -> Optional[list[str]]:
    if not value:
        return None
    parts = [part.strip() for part in str(value).split(",") if part.strip()]
    return parts or None


class ChartMogulConnector(BaseConnector):
    """MRR, ARR, churn and related metrics over a relative date range."""

    PROVIDER = "chartmogul"
    IDENTITY_PROPERTY = "dscc.accountToken"
    SECRET_PROPERTY = "dscc.secret"
    PREDEFINED_FIELDS = CHARTMOGUL_PREDEFINED_FIELDS

    def __init__(self, *args, today: Optional[date] = None, **kwargs):
        """See BaseConnector; ``today`` pins the reference date for date ranges."""
        super().__init__(*args, **kwargs)
        self.today = today

    def get_config(self, request: Optional[dict] = None) -> dict:
        return {
            "configParams": [
                {
                    "name": "dateRange",
                    "type": "SELECT_SINGLE",
                    "displayName": "Date Range",
                    "options": [
                        {"label": "This Year", "value": DateRange.THIS_YEAR.value},
                        {"label": "This Month", "value": DateRange.THIS_MONTH.value},
                        {"label": "Last 30 Days", "value": DateRange.LAST_30_DAYS.value},
                        {"label": "Last Year", "value": DateRange.LAST_YEAR.value},
                    ],
                },
                {
                    "name": "interval",
                    "type": "SELECT_SINGLE",
                    "displayName": "Interval",
                    "helpText": "Aggregation interval for the metrics",
                    "options": [
                        {"label": interval.value.capitalize(), "value": interval.value}
                        for interval in Interval
                    ],
                },
                {
                    "name": "geo",
                    "type": "TEXTINPUT",
                    "displayName": "Countries",
                    "helpText": "Optional comma-separated ISO country codes",
                },
                {
                    "name": "plans",
                    "type": "TEXTINPUT",
                    "displayName": "Plans",
                    "helpText": "Optional comma-separated plan names",
                },
            ]
        }

    def base_schema(self, config: dict) -> Schema:
        return chartmogul_schema()

    def validate_config(self, config: dict) -> dict:
        date_range = self.require(config, "dateRange", "Date Range")
        try:
            date_range = DateRange(date_range)
        except ValueError:
            raise ConfigurationError(
                f"Unknown Date Range: {date_range}", parameter="dateRange"
            ) from None

        interval = config.get("interval") or None
        if interval is not None:
            try:
                interval = Interval(interval).value
            except ValueError:
                raise ConfigurationError(
                    f"Unknown Interval: {interval}", parameter="interval"
                ) from None

        geo = config.get("geo")
        return {
            "date_range": date_range,
            "interval": interval,
            "geo": geo.strip() if isinstance(geo, str) and geo.strip() else None,
            "plans": _split_csv(config.get("plans")),
        }

    def fetch_rows(
        self,
        config: dict,
        schema: Schema,
        request_logger: ConnectorLogger,
    ) -> list[dict]:
        with ChartMogulClient(
            credentials=self.credentials.get(),
            cache=self.cache,
            request_logger=request_logger,
            **self.client_options,
        ) as client:
            items = client.fetch_metrics(
                config["date_range"],
                interval=config["interval"],
                geo=config["geo"],
                plans=config["plans"],
                today=self.today,
            )
        return self.row_mapper.project(items, schema)
