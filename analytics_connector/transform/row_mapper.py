"""Projection of raw upstream items into schema-ordered rows."""

import logging
from typing import Any, Mapping, Optional, Sequence

from analytics_connector.transform.fields import FieldTransform

logger = logging.getLogger(__name__)


def field_name(field: Any) -> str:
    """Name of a schema field given as a SchemaField or a host field dict."""
    if isinstance(field, Mapping):
        return field["name"]
    return field.name


class RowMapper:
    """Maps raw items to rows, one value per schema field.

    Fields listed in ``predefined`` are produced by their transform; every
    other field is read from the item by name, with None standing in for a
    missing key. Matching is exact and case-sensitive.
    """

    def __init__(self, predefined: Optional[Mapping[str, FieldTransform]] = None):
        self.predefined: dict[str, FieldTransform] = dict(predefined or {})

    def is_predefined(self, name: str) -> bool:
        return name in self.predefined

    def map_value(
        self,
        item: Mapping[str, Any],
        name: str,
        context: Mapping[str, Any],
    ) -> Any:
        transform = self.predefined.get(name)
        if transform is not None:
            return transform(item, context)
        return item.get(name)

    def project(
        self,
        items: Sequence[Mapping[str, Any]],
        schema: Sequence[Any],
        context: Optional[Mapping[str, Any]] = None,
    ) -> list[dict]:
        """Project items onto a schema.

        Args:
            items: Raw upstream items
            schema: Ordered SchemaFields (or host field dicts)
            context: Request-level values available to transforms

        Returns:
            Host rows, ``{"values": [...]}`` with ``len(schema)`` values each
        """
        context = context or {}
        names = [field_name(field) for field in schema]

        rows = []
        for item in items:
            if not isinstance(item, Mapping):
                item = {}
            rows.append({
                "values": [self.map_value(item, name, context) for name in names]
            })

        logger.debug(
            f"Projected {len(rows)} rows",
            extra={"row_count": len(rows), "field_count": len(names)}
        )
        return rows
