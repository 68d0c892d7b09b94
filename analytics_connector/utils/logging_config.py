"""Root logging configuration."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

# Attributes present on every LogRecord; anything else came from `extra`
_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line, including `extra` fields."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                data[key] = value
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def setup_logging(
    level: Optional[str] = None,
    json_format: bool = True,
) -> None:
    """Configure the root logger.

    Args:
        level: Log level name (or from env: LOG_LEVEL, default INFO)
        json_format: Emit JSON lines instead of plain text
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # urllib3 connection chatter is noise at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
