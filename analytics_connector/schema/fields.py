"""Schema field declarations in the reporting host's shape."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from analytics_connector.transform.row_mapper import field_name


class DataType(str, Enum):
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"


class ConceptType(str, Enum):
    DIMENSION = "DIMENSION"
    METRIC = "METRIC"


class SemanticType(str, Enum):
    TEXT = "TEXT"
    NUMBER = "NUMBER"
    PERCENT = "PERCENT"
    CURRENCY_USD = "CURRENCY_USD"
    YEAR_MONTH_DAY = "YEAR_MONTH_DAY"


class SemanticGroup(str, Enum):
    SEARCH = "SEARCH"
    ITEM = "ITEM"
    ATTRIBUTE = "ATTRIBUTE"
    NUMERIC = "NUMERIC"
    DATETIME = "DATETIME"
    CURRENCY = "CURRENCY"


@dataclass(frozen=True)
class Semantics:
    """Display semantics of a field."""

    concept_type: ConceptType
    semantic_type: Optional[SemanticType] = None
    semantic_group: Optional[SemanticGroup] = None
    is_reaggregatable: Optional[bool] = None

    def to_dict(self) -> dict:
        data = {"conceptType": self.concept_type.value}
        if self.semantic_type is not None:
            data["semanticType"] = self.semantic_type.value
        if self.semantic_group is not None:
            data["semanticGroup"] = self.semantic_group.value
        if self.is_reaggregatable is not None:
            data["isReaggregatable"] = self.is_reaggregatable
        return data


@dataclass(frozen=True)
class SchemaField:
    """One column of a schema. Names are unique within a schema."""

    name: str
    label: str
    description: str
    data_type: DataType
    is_default: Optional[bool] = None
    semantics: Optional[Semantics] = None

    def to_dict(self) -> dict:
        """Render in the host's camelCase shape, omitting unset optionals."""
        data = {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "dataType": self.data_type.value,
        }
        if self.is_default is not None:
            data["isDefault"] = self.is_default
        if self.semantics is not None:
            data["semantics"] = self.semantics.to_dict()
        return data


Schema = list[SchemaField]


def filter_schema(base: Sequence[SchemaField], requested: Iterable[Any]) -> Schema:
    """Keep the requested fields, in the base schema's order.

    Args:
        base: Full ordered schema
        requested: Field names or host field dicts (``{"name": ...}``)

    Returns:
        Subset of ``base``; unknown names are ignored
    """
    wanted = {field_name(field) if not isinstance(field, str) else field for field in requested}
    return [field for field in base if field.name in wanted]


def schema_to_dicts(schema: Sequence[SchemaField]) -> list[dict]:
    return [field.to_dict() for field in schema]
