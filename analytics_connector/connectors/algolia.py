"""Algolia Analytics data source connector."""

import logging
from typing import Optional

from analytics_connector.clients.algolia_client import AlgoliaClient, AnalyticsType
from analytics_connector.connectors.base import BaseConnector
from analytics_connector.errors import ConfigurationError
from analytics_connector.schema import TYPE_FIELD, Schema, algolia_schema_for_type
from analytics_connector.transform import ALGOLIA_PREDEFINED_FIELDS
from analytics_connector.utils.connector_logger import ConnectorLogger

logger = logging.getLogger(__name__)


class AlgoliaConnector(BaseConnector):
    """Top searches, hits and filter attributes for one or more indices."""

    PROVIDER = "algolia"
    IDENTITY_PROPERTY = "dscc.appId"
    SECRET_PROPERTY = "dscc.key"
    PREDEFINED_FIELDS = ALGOLIA_PREDEFINED_FIELDS

    def get_config(self, request: Optional[dict] = None) -> dict:
        return {
            "configParams": [
                {
                    "name": "indices",
                    "type": "TEXTINPUT",
                    "displayName": "Indices",
                    "helpText": (
                        "Select the Algolia indices to use for this Data Source. "
                        "To use multiple indices, separate each index by comma."
                    ),
                },
                {
                    "name": "analyticsType",
                    "type": "SELECT_SINGLE",
                    "displayName": "Type of Analytics",
                    "helpText": "Select which results you want to get",
                    "options": [
                        {"label": "Top Searches", "value": AnalyticsType.TOP_SEARCHES.value},
                        {"label": "Top Search with no Results", "value": AnalyticsType.TOP_NO_RESULTS.value},
                        {"label": "Top Hits", "value": AnalyticsType.TOP_HITS.value},
                        {"label": "Top Filter Attributes", "value": AnalyticsType.TOP_FILTER_ATTRIBUTES.value},
                    ],
                },
            ]
        }

    def base_schema(self, config: dict) -> Schema:
        analytics_type = self.require(config, "analyticsType", "Analytics Type")
        return algolia_schema_for_type(analytics_type) + [TYPE_FIELD]

    def validate_config(self, config: dict) -> dict:
        indices_value = self.require(config, "indices", "Algolia Indices")
        analytics_type = AnalyticsType.parse(
            self.require(config, "analyticsType", "Analytics Type")
        )

        indices = [index.strip() for index in str(indices_value).split(",") if index.strip()]
        if not indices:
            raise ConfigurationError("Missing Algolia Indices", parameter="indices")

        return {"indices": indices, "analytics_type": analytics_type}

    def fetch_rows(
        self,
        config: dict,
        schema: Schema,
        request_logger: ConnectorLogger,
    ) -> list[dict]:
        analytics_type = config["analytics_type"]
        rows = []
        with AlgoliaClient(
            credentials=self.credentials.get(),
            cache=self.cache,
            request_logger=request_logger,
            **self.client_options,
        ) as client:
            # Indices are fetched one after another; rows keep request order
            for index in config["indices"]:
                items = client.fetch_analytics(analytics_type, index)
                rows.extend(
                    self.row_mapper.project(
                        items, schema, {"analytics_type": analytics_type.value, "index": index}
                    )
                )
        return rows
