"""Host plugin contract shared by the provider connectors."""

import json
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional

from analytics_connector.auth.credentials import CredentialStore, PropertyStore
from analytics_connector.cache import CacheStore, ResponseCache
from analytics_connector.errors import ConfigurationError
from analytics_connector.schema import Schema, filter_schema, schema_to_dicts
from analytics_connector.transform import FieldTransform, RowMapper
from analytics_connector.utils.connector_logger import ConnectorLogger, timed_operation

logger = logging.getLogger(__name__)

# Host function name -> connector method
HOST_FUNCTIONS = {
    "getConfig": "get_config",
    "getSchema": "get_schema",
    "getData": "get_data",
    "getAuthType": "get_auth_type",
    "isAuthValid": "is_auth_valid",
    "setCredentials": "set_credentials",
    "resetAuth": "reset_auth",
    "isAdminUser": "is_admin_user",
}

# Request keys whose contents never reach the logs
SECRET_REQUEST_KEYS = ("userPass", "userToken", "key")


def redact_request(request: Optional[dict]) -> Optional[dict]:
    if not isinstance(request, dict):
        return request
    return {
        key: "***" if key in SECRET_REQUEST_KEYS else value
        for key, value in request.items()
    }


class BaseConnector(ABC):
    """Core functionality for a reporting-host data source connector.

    Requests and responses are plain dicts in the host's shape
    (``configParams``, ``fields``, ``userPass``). The property store and
    cache store are host capabilities passed in by the caller.
    """

    PROVIDER = "base"
    IDENTITY_PROPERTY = ""
    SECRET_PROPERTY = ""
    PREDEFINED_FIELDS: dict[str, FieldTransform] = {}

    def __init__(
        self,
        properties: PropertyStore,
        cache_store: Optional[CacheStore] = None,
        enable_logging: bool = True,
        cache_ttl: Optional[int] = None,
        client_options: Optional[dict] = None,
    ):
        """Initialize connector.

        Args:
            properties: Host per-user property store holding credentials
            cache_store: Host cache store (responses are not cached if omitted)
            enable_logging: Log request and response of host calls
            cache_ttl: Cache entry lifetime in seconds
            client_options: Extra keyword arguments for the API client
                (e.g. base_url, timeout)
        """
        self.credentials = CredentialStore(
            properties, self.IDENTITY_PROPERTY, self.SECRET_PROPERTY
        )
        self.cache = ResponseCache(cache_store, cache_ttl) if cache_store is not None else None
        self.row_mapper = RowMapper(self.PREDEFINED_FIELDS)
        self.enable_logging = enable_logging
        self.client_options = dict(client_options or {})

    def log_and_execute(self, function_name: str, request: Optional[dict] = None) -> Any:
        """Run a host function by name, logging its request and response.

        Args:
            function_name: Host name (``getData``) or method name (``get_data``)
            request: Host request dict

        Returns:
            The host function's response
        """
        method_name = HOST_FUNCTIONS.get(function_name, function_name)
        if method_name not in HOST_FUNCTIONS.values():
            raise ValueError(f"Unknown connector function: {function_name}")

        if self.enable_logging:
            logger.info(
                f"{function_name} request",
                extra={
                    "provider": self.PROVIDER,
                    "request": json.dumps(redact_request(request), default=str),
                }
            )

        with timed_operation(function_name, logger) as timer:
            response = getattr(self, method_name)(request)

        if self.enable_logging:
            logger.info(
                f"{function_name} response",
                extra={
                    "provider": self.PROVIDER,
                    "response": json.dumps(response, default=str),
                    "duration_ms": round(timer.duration_ms, 2),
                }
            )

        return response

    # ------------------------------------------------------------------
    # Config and schema
    # ------------------------------------------------------------------

    @staticmethod
    def config_params(request: Optional[dict]) -> dict:
        return (request or {}).get("configParams") or {}

    @staticmethod
    def require(config: dict, name: str, label: str) -> Any:
        """Return a config value or raise a ConfigurationError naming it."""
        value = config.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ConfigurationError(f"Missing {label}", parameter=name)
        return value

    def is_admin_user(self, request: Optional[dict] = None) -> bool:
        return True

    @abstractmethod
    def get_config(self, request: Optional[dict] = None) -> dict:
        """Connector configuration to be displayed to the user."""

    @abstractmethod
    def base_schema(self, config: dict) -> Schema:
        """Full ordered schema for a config, synthetic fields last."""

    def get_schema(self, request: Optional[dict] = None) -> dict:
        schema = self.base_schema(self.config_params(request))
        return {"schema": schema_to_dicts(schema)}

    def get_filtered_schema(self, request: Optional[dict]) -> Schema:
        """Base schema filtered by the requested fields, in base order.

        All fields are returned when the request names none.
        """
        schema = self.base_schema(self.config_params(request))
        requested = (request or {}).get("fields")
        if not requested:
            return schema
        return filter_schema(schema, requested)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def new_request_logger(self) -> ConnectorLogger:
        return ConnectorLogger(self.PROVIDER, uuid.uuid4().hex[:12])

    @abstractmethod
    def validate_config(self, config: dict) -> dict:
        """Check required parameters and return the parsed config.

        Raises:
            ConfigurationError: Naming the first missing or invalid parameter
        """

    @abstractmethod
    def fetch_rows(
        self,
        config: dict,
        schema: Schema,
        request_logger: ConnectorLogger,
    ) -> list[dict]:
        """Fetch items for a validated config and map them onto ``schema``."""

    def get_data(self, request: Optional[dict] = None) -> dict:
        """Fetch rows for the requested fields.

        Returns:
            ``{"schema": [field dicts], "rows": [{"values": [...]}]}``

        Raises:
            ConfigurationError: A required config parameter is missing
            FetchFailure: The upstream API failed on every attempt
        """
        request_logger = self.new_request_logger()
        request_logger.start("get_data")

        try:
            config = self.validate_config(self.config_params(request))
            requested_schema = self.get_filtered_schema(request)
            rows = self.fetch_rows(config, requested_schema, request_logger)
        except Exception as e:
            request_logger.error("get_data", e)
            raise

        request_logger.success("get_data", row_count=len(rows))
        return {"schema": schema_to_dicts(requested_schema), "rows": rows}

    # ------------------------------------------------------------------
    # Auth lifecycle
    # ------------------------------------------------------------------

    def get_auth_type(self, request: Optional[dict] = None) -> dict:
        return {"type": "USER_PASS"}

    def is_auth_valid(self, request: Optional[dict] = None) -> bool:
        return self.credentials.is_valid()

    def set_credentials(self, request: Optional[dict] = None) -> dict:
        user_pass = (request or {}).get("userPass") or {}
        username = user_pass.get("username")
        password = user_pass.get("password")
        if username is None or password is None:
            return {"errorCode": "INVALID_CREDENTIALS"}

        self.credentials.set(username, password)
        return {"errorCode": "NONE"}

    def reset_auth(self, request: Optional[dict] = None) -> None:
        self.credentials.reset()
