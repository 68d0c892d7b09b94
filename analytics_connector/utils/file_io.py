"""File I/O utilities for exporting connector rows."""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Optional, Union

logger = logging.getLogger(__name__)


def rows_to_records(schema: list[dict], rows: list[dict]) -> list[dict]:
    """Zip host rows back into ``{field_name: value}`` records.

    Args:
        schema: Host schema (list of field dicts with a ``name`` key)
        rows: Host rows (``{"values": [...]}``) in schema order

    Returns:
        One dict per row
    """
    names = [field["name"] for field in schema]
    return [dict(zip(names, row["values"])) for row in rows]


def write_jsonl(
    records: list[dict],
    output: Union[str, Path, IO[str]],
    request_id: Optional[str] = None,
    provider: Optional[str] = None,
) -> dict:
    """Write records as JSON lines to a file path or an open text stream.

    Args:
        records: List of records to write
        output: Output file path, or a writable text stream (e.g. stdout)
        request_id: Optional request identifier (generated if not provided)
        provider: Provider name for metadata

    Returns:
        Metadata dict with export info
    """
    if request_id is None:
        request_id = uuid.uuid4().hex[:12]

    exported_at = datetime.now(timezone.utc).isoformat()
    lines = [json.dumps(record, default=str) + "\n" for record in records]

    metadata = {
        "request_id": request_id,
        "provider": provider,
        "exported_at": exported_at,
        "record_count": len(records),
    }

    if isinstance(output, (str, Path)):
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.writelines(lines)
        metadata["file_path"] = str(output_path)
        metadata["file_size_bytes"] = output_path.stat().st_size
    else:
        output.writelines(lines)
        output.flush()

    logger.info(
        f"Wrote {len(records)} records",
        extra=metadata
    )

    return metadata
