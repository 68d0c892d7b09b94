"""Data transformation modules.

Handles:
- Predefined field transforms (injected tags, date formats, unit scaling)
- Pass-through field reads
- Row projection in schema order
"""

from .fields import (
    ALGOLIA_PREDEFINED_FIELDS,
    CHARTMOGUL_PREDEFINED_FIELDS,
    FieldTransform,
    divide_by_100,
    from_context,
    strip_separators,
)
from .row_mapper import RowMapper, field_name

__all__ = [
    # Field transforms
    "FieldTransform",
    "from_context",
    "strip_separators",
    "divide_by_100",
    "ALGOLIA_PREDEFINED_FIELDS",
    "CHARTMOGUL_PREDEFINED_FIELDS",
    # Row projection
    "RowMapper",
    "field_name",
]
