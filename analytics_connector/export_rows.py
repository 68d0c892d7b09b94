"""Command-line export: connector request → rows → JSONL.

Usage:
    python -m analytics_connector.export_rows --provider algolia --indices products --analytics-type top_searches
    python -m analytics_connector.export_rows --provider chartmogul --date-range this_year --interval month --output mrr.jsonl
"""

import argparse
import logging
import os
import sys
import uuid
from datetime import datetime, timezone
from typing import IO, Optional, Union

from dotenv import load_dotenv

from analytics_connector.auth.credentials import InMemoryPropertyStore
from analytics_connector.cache import InMemoryCacheStore
from analytics_connector.connectors import CONNECTORS, get_connector
from analytics_connector.errors import ConfigurationError, FetchFailure
from analytics_connector.utils import rows_to_records, setup_logging, write_jsonl

logger = logging.getLogger(__name__)

# provider -> (property name, env var) for each credential part
CREDENTIAL_ENV = {
    "algolia": (
        ("dscc.appId", "ALGOLIA_APP_ID"),
        ("dscc.key", "ALGOLIA_API_KEY"),
    ),
    "chartmogul": (
        ("dscc.accountToken", "CHARTMOGUL_ACCOUNT_TOKEN"),
        ("dscc.secret", "CHARTMOGUL_SECRET"),
    ),
}


def properties_from_env(provider: str) -> InMemoryPropertyStore:
    """Seed a property store with credentials from the environment."""
    store = InMemoryPropertyStore()
    for property_name, env_var in CREDENTIAL_ENV.get(provider, ()):
        value = os.getenv(env_var)
        if value:
            store.set_property(property_name, value)
    return store


def build_request(args: argparse.Namespace) -> dict:
    """Translate CLI arguments into a host getData request."""
    if args.provider == "algolia":
        config = {
            "indices": args.indices,
            "analyticsType": args.analytics_type,
        }
    else:
        config = {
            "dateRange": args.date_range,
            "interval": args.interval,
            "geo": args.geo,
            "plans": args.plans,
        }

    request = {"configParams": {k: v for k, v in config.items() if v is not None}}
    if args.fields:
        request["fields"] = [
            {"name": name.strip()} for name in args.fields.split(",") if name.strip()
        ]
    return request


def export_rows(
    provider: str,
    request: dict,
    output: Union[str, IO[str]],
    properties: Optional[InMemoryPropertyStore] = None,
    request_id: Optional[str] = None,
) -> dict:
    """Run getData for a provider and write the rows as JSONL.

    Args:
        provider: Provider name ('algolia' or 'chartmogul')
        request: Host getData request
        output: Output file path or text stream
        properties: Credential store (seeded from env if not provided)
        request_id: Optional identifier for logging

    Returns:
        Export result metadata
    """
    if request_id is None:
        request_id = uuid.uuid4().hex[:12]

    start_time = datetime.now(timezone.utc)
    logger.info(f"Starting export for {provider}", extra={"request_id": request_id})

    try:
        connector = get_connector(
            provider,
            properties=properties or properties_from_env(provider),
            cache_store=InMemoryCacheStore(),
        )
        response = connector.get_data(request)
    except (ConfigurationError, FetchFailure) as e:
        logger.error(f"Failed to export {provider}: {e}", exc_info=True)
        return {
            "provider": provider,
            "request_id": request_id,
            "status": "error",
            "error": str(e),
        }

    records = rows_to_records(response["schema"], response["rows"])
    metadata = write_jsonl(records, output, request_id=request_id, provider=provider)

    result = {
        "provider": provider,
        "request_id": request_id,
        "status": "success",
        "fields": [field["name"] for field in response["schema"]],
        "records_exported": metadata["record_count"],
        "file_path": metadata.get("file_path"),
        "duration_seconds": (datetime.now(timezone.utc) - start_time).total_seconds(),
    }

    logger.info(f"Completed export for {provider}", extra=result)
    return result


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export analytics rows from a connector as JSON lines"
    )
    parser.add_argument(
        "--provider",
        choices=sorted(CONNECTORS),
        required=True,
        help="Upstream provider",
    )
    parser.add_argument(
        "--fields",
        type=str,
        default=None,
        help="Comma-separated field names (default: all fields)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSONL path (default: stdout)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)",
    )

    algolia = parser.add_argument_group("algolia")
    algolia.add_argument("--indices", type=str, help="Comma-separated index names")
    algolia.add_argument("--analytics-type", type=str, help="e.g. top_searches, top_hits")

    chartmogul = parser.add_argument_group("chartmogul")
    chartmogul.add_argument("--date-range", type=str, help="e.g. this_year, last_30_days")
    chartmogul.add_argument("--interval", type=str, help="day, week, month or quarter")
    chartmogul.add_argument("--geo", type=str, help="Comma-separated country codes")
    chartmogul.add_argument("--plans", type=str, help="Comma-separated plan names")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None):
    """CLI entrypoint."""
    # Load environment variables
    load_dotenv()

    args = parse_args(argv)

    # Setup logging
    setup_logging(level=args.log_level, json_format=True)

    result = export_rows(
        args.provider,
        build_request(args),
        args.output or sys.stdout,
    )

    # Exit with error code on failure
    if result["status"] != "success":
        sys.exit(1)


if __name__ == "__main__":
    main()
