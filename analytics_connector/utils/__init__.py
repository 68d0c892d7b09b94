"""Utility modules for the connectors.

Includes:
- Logging configuration
- Structured connector logging
- JSONL export helpers
- Numeric settings from the environment
"""

from .logging_config import setup_logging
from .file_io import rows_to_records, write_jsonl
from .connector_logger import ConnectorLogger, timed_operation
from .env import env_number

__all__ = [
    "setup_logging",
    "rows_to_records",
    "write_jsonl",
    "ConnectorLogger",
    "timed_operation",
    "env_number",
]
