"""Schema declarations for the connectors."""

from .fields import (
    ConceptType,
    DataType,
    Schema,
    SchemaField,
    SemanticGroup,
    Semantics,
    SemanticType,
    filter_schema,
    schema_to_dicts,
)
from .algolia import TYPE_FIELD, algolia_schema_for_type
from .chartmogul import chartmogul_schema

__all__ = [
    "ConceptType",
    "DataType",
    "Schema",
    "SchemaField",
    "SemanticGroup",
    "Semantics",
    "SemanticType",
    "filter_schema",
    "schema_to_dicts",
    "TYPE_FIELD",
    "algolia_schema_for_type",
    "chartmogul_schema",
]
