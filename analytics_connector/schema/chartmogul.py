"""Base schema for ChartMogul all-metrics entries.

Rates are fractions (12.5% is 0.125) and money values are in currency
units rather than cents; see CHARTMOGUL_PREDEFINED_FIELDS.
"""

from analytics_connector.schema.fields import (
    ConceptType,
    DataType,
    Schema,
    SchemaField,
    SemanticGroup,
    Semantics,
    SemanticType,
)

_CURRENCY = Semantics(
    concept_type=ConceptType.METRIC,
    semantic_type=SemanticType.CURRENCY_USD,
    semantic_group=SemanticGroup.CURRENCY,
    is_reaggregatable=False,
)

_PERCENT = Semantics(
    concept_type=ConceptType.METRIC,
    semantic_type=SemanticType.PERCENT,
    semantic_group=SemanticGroup.NUMERIC,
    is_reaggregatable=False,
)


def _currency_field(name: str, label: str, description: str, is_default: bool = False) -> SchemaField:
    return SchemaField(
        name=name,
        label=label,
        description=description,
        data_type=DataType.NUMBER,
        is_default=is_default,
        semantics=_CURRENCY,
    )


def chartmogul_schema() -> Schema:
    return [
        SchemaField(
            name="date",
            label="Date",
            description="Start of the metric interval",
            data_type=DataType.STRING,
            is_default=True,
            semantics=Semantics(
                concept_type=ConceptType.DIMENSION,
                semantic_type=SemanticType.YEAR_MONTH_DAY,
                semantic_group=SemanticGroup.DATETIME,
                is_reaggregatable=False,
            ),
        ),
        SchemaField(
            name="customers",
            label="Customers",
            description="Number of active customers",
            data_type=DataType.NUMBER,
            is_default=True,
            semantics=Semantics(
                concept_type=ConceptType.METRIC,
                semantic_type=SemanticType.NUMBER,
                semantic_group=SemanticGroup.NUMERIC,
                is_reaggregatable=False,
            ),
        ),
        SchemaField(
            name="customerchurnrate",
            label="Customer Churn Rate",
            description="Share of customers lost in the interval",
            data_type=DataType.NUMBER,
            semantics=_PERCENT,
        ),
        SchemaField(
            name="mrrchurnrate",
            label="MRR Churn Rate",
            description="Share of MRR lost in the interval",
            data_type=DataType.NUMBER,
            semantics=_PERCENT,
        ),
        _currency_field("ltv", "LTV", "Customer lifetime value"),
        _currency_field("asp", "ASP", "Average sale price"),
        _currency_field("arpa", "ARPA", "Average revenue per account"),
        _currency_field("arr", "ARR", "Annual run rate"),
        _currency_field("mrr", "MRR", "Monthly recurring revenue", is_default=True),
    ]
