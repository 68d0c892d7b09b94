"""Tests for transformation modules."""

import pytest

from analytics_connector.schema import chartmogul_schema
from analytics_connector.transform import (
    ALGOLIA_PREDEFINED_FIELDS,
    CHARTMOGUL_PREDEFINED_FIELDS,
    RowMapper,
    divide_by_100,
    from_context,
    strip_separators,
)


def _schema(*names):
    return [{"name": name} for name in names]


@pytest.fixture
def algolia_mapper():
    return RowMapper(ALGOLIA_PREDEFINED_FIELDS)


@pytest.fixture
def chartmogul_mapper():
    return RowMapper(CHARTMOGUL_PREDEFINED_FIELDS)


class TestFieldTransforms:
    """Tests for individual predefined transforms."""

    def test_strip_separators(self):
        """Test date separators are removed."""
        assert strip_separators("date")({"date": "2024-03-07"}, {}) == "20240307"

    def test_strip_separators_missing(self):
        """Test a missing date maps to None."""
        assert strip_separators("date")({}, {}) is None

    def test_divide_by_100(self):
        """Test percent and cents scaling."""
        transform = divide_by_100("customer-churn-rate")

        assert transform({"customer-churn-rate": 12.5}, {}) == 0.125
        assert transform({"customer-churn-rate": 0}, {}) == 0

    def test_divide_by_100_non_numeric(self):
        """Test missing, null, bool and string values map to None."""
        transform = divide_by_100("mrr")

        assert transform({}, {}) is None
        assert transform({"mrr": None}, {}) is None
        assert transform({"mrr": True}, {}) is None
        assert transform({"mrr": "100"}, {}) is None

    def test_from_context(self):
        """Test request-level values are injected."""
        assert from_context("analytics_type")({}, {"analytics_type": "top_hits"}) == "top_hits"


class TestPredefinedSets:
    """Tests for the provider predefined-field tables."""

    def test_algolia_predefined_names(self):
        assert set(ALGOLIA_PREDEFINED_FIELDS) == {"type"}

    def test_chartmogul_predefined_names(self):
        assert set(CHARTMOGUL_PREDEFINED_FIELDS) == {
            "date",
            "mrrchurnrate",
            "customerchurnrate",
            "ltv",
            "asp",
            "arpa",
            "arr",
            "mrr",
        }

    def test_classification_is_case_sensitive(self, chartmogul_mapper):
        """Test only exact names are predefined."""
        assert chartmogul_mapper.is_predefined("mrr")
        assert not chartmogul_mapper.is_predefined("MRR")
        assert not chartmogul_mapper.is_predefined("customers")


class TestAlgoliaRows:
    """Tests for Algolia row projection."""

    def test_type_injected_from_context(self, algolia_mapper):
        """Test the type column carries the analytics subtype."""
        rows = algolia_mapper.project(
            [{"hit": "sku-1", "count": 3}],
            _schema("hit", "count", "type"),
            {"analytics_type": "top_hits"},
        )

        assert rows == [{"values": ["sku-1", 3, "top_hits"]}]

    def test_type_overrides_item_value(self, algolia_mapper):
        """Test an upstream 'type' key does not leak into the type column."""
        rows = algolia_mapper.project(
            [{"type": "upstream"}], _schema("type"), {"analytics_type": "top_searches"}
        )

        assert rows[0]["values"] == ["top_searches"]

    def test_schema_order_drives_value_order(self, algolia_mapper, search_items):
        """Test values follow schema order, not item key order."""
        rows = algolia_mapper.project(search_items, _schema("count", "search"))

        assert [row["values"] for row in rows] == [[120, "shoes"], [75, "red dress"], [30, ""]]


class TestChartMogulRows:
    """Tests for ChartMogul row projection."""

    def test_metric_conversions(self, chartmogul_mapper, metric_entries):
        """Test dates, rates and money values are converted."""
        rows = chartmogul_mapper.project(metric_entries, chartmogul_schema())

        assert rows[0]["values"] == [
            "20240131",
            310,
            0.125,
            0.04,
            12345,
            99,
            49.5,
            184140,
            15345,
        ]

    def test_customers_is_pass_through(self, chartmogul_mapper):
        """Test non-predefined fields are read directly."""
        rows = chartmogul_mapper.project([{"customers": 5}], _schema("customers"))

        assert rows[0]["values"] == [5]


class TestRowWidth:
    """Tests for the row width and null policy."""

    @pytest.mark.parametrize(
        "items",
        [
            [],
            [{}],
            [{"search": "a", "count": 1}, {"unrelated": True}],
            [{"date": "2024-01-01"}, {"mrr": 100}, {}],
        ],
    )
    def test_every_row_matches_schema_length(self, chartmogul_mapper, items):
        """Test rows always have exactly len(schema) values."""
        schema = chartmogul_schema() + [{"name": "foo"}]

        rows = chartmogul_mapper.project(items, schema)

        assert len(rows) == len(items)
        assert all(len(row["values"]) == len(schema) for row in rows)

    def test_missing_pass_through_is_null(self, algolia_mapper):
        """Test a missing pass-through field is None, not omitted."""
        rows = algolia_mapper.project([{"search": "a"}], _schema("search", "foo"))

        assert rows[0]["values"] == ["a", None]

    def test_empty_schema(self, algolia_mapper):
        """Test an empty schema yields empty rows."""
        assert algolia_mapper.project([{"a": 1}], []) == [{"values": []}]

    def test_non_dict_item(self, algolia_mapper):
        """Test a malformed item maps to nulls rather than failing."""
        rows = algolia_mapper.project(["garbage"], _schema("search", "count"))

        assert rows == [{"values": [None, None]}]
