"""Base schemas for the Algolia analytics subtypes."""

from analytics_connector.clients.algolia_client import AnalyticsType
from analytics_connector.schema.fields import DataType, Schema, SchemaField

TYPE_FIELD = SchemaField(
    name="type",
    label="type",
    description="The type of analytics for this data set.",
    data_type=DataType.STRING,
)


def _count_field(description: str) -> SchemaField:
    return SchemaField(
        name="count",
        label="Count",
        description=description,
        data_type=DataType.NUMBER,
        is_default=True,
    )


def schema_for_searches(include_filter_count: bool = False) -> Schema:
    schema = [
        SchemaField(
            name="search",
            label="Search",
            description="The performed search",
            data_type=DataType.STRING,
            is_default=True,
        )
    ]
    if include_filter_count:
        schema.append(
            SchemaField(
                name="withFilterCount",
                label="With Filter Count",
                description="How many times the search occurred with a filter",
                data_type=DataType.NUMBER,
                is_default=False,
            )
        )
    schema.append(_count_field("How many times the search occurred"))
    return schema


def schema_for_hits() -> Schema:
    return [
        SchemaField(
            name="hit",
            label="Hit",
            description="The hit item",
            data_type=DataType.STRING,
            is_default=True,
        ),
        _count_field("How many times this item was shown in a search query."),
    ]


def schema_for_attributes() -> Schema:
    return [
        SchemaField(
            name="attribute",
            label="Attribute",
            description="The attribute used in the searches",
            data_type=DataType.STRING,
            is_default=True,
        ),
        _count_field("How many times this attribute was used in a search query."),
    ]


def algolia_schema_for_type(analytics_type) -> Schema:
    """Subtype-specific fields, without the synthetic ``type`` field.

    Raises:
        ConfigurationError: For an unknown subtype
    """
    analytics_type = AnalyticsType.parse(analytics_type)

    if analytics_type == AnalyticsType.TOP_SEARCHES:
        return schema_for_searches()
    if analytics_type == AnalyticsType.TOP_NO_RESULTS:
        return schema_for_searches(include_filter_count=True)
    if analytics_type == AnalyticsType.TOP_HITS:
        return schema_for_hits()
    return schema_for_attributes()
