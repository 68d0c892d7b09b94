"""Per-field value transforms for predefined schema fields."""

import logging
from numbers import Number
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)

# (raw item, request context) -> mapped value
FieldTransform = Callable[[Mapping[str, Any], Mapping[str, Any]], Any]


def from_context(key: str) -> FieldTransform:
    """Emit a request-level value that is not part of the raw item."""
    def transform(item: Mapping[str, Any], context: Mapping[str, Any]) -> Any:
        return context.get(key)
    return transform


def strip_separators(source: str, separator: str = "-") -> FieldTransform:
    """Remove separators from a string, e.g. ``2024-03-07`` -> ``20240307``."""
    def transform(item: Mapping[str, Any], context: Mapping[str, Any]) -> Any:
        value = item.get(source)
        if not isinstance(value, str):
            return None
        return value.replace(separator, "")
    return transform


def divide_by_100(source: str) -> FieldTransform:
    """Scale an integer-percent or cents value to a fractional unit.

    Missing and non-numeric values map to None.
    """
    def transform(item: Mapping[str, Any], context: Mapping[str, Any]) -> Any:
        value = item.get(source)
        if isinstance(value, bool) or not isinstance(value, Number):
            return None
        return value / 100
    return transform


ALGOLIA_PREDEFINED_FIELDS: dict[str, FieldTransform] = {
    "type": from_context("analytics_type"),
}

CHARTMOGUL_PREDEFINED_FIELDS: dict[str, FieldTransform] = {
    "date": strip_separators("date"),
    "customerchurnrate": divide_by_100("customer-churn-rate"),
    "mrrchurnrate": divide_by_100("mrr-churn-rate"),
    "ltv": divide_by_100("ltv"),
    "asp": divide_by_100("asp"),
    "arpa": divide_by_100("arpa"),
    "arr": divide_by_100("arr"),
    "mrr": divide_by_100("mrr"),
}
