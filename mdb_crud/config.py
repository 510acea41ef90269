"""
Configuration management for MDB_CRUD.

Settings are read from environment variables once, at application start,
and then passed explicitly to the components that need them (the Mongo
client factory, the HTTP error handlers). Nothing below is looked up
ambiently at request time.
"""

import os

from .constants import (
    DEFAULT_API_PREFIX,
    DEFAULT_MAX_POOL_SIZE,
    DEFAULT_MIN_POOL_SIZE,
    DEFAULT_PORT,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    ENV_DEVELOPMENT,
    ENV_PRODUCTION,
    SUPPORTED_ENVIRONMENTS,
)
from .exceptions import ConfigurationError


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be an integer", config_key=name, config_value=raw
        ) from e


class Settings:
    """
    Application configuration.

    Example:
        # Using environment variables
        settings = Settings()
        settings.validate()

        # Or using direct parameters
        settings = Settings(
            mongo_uri="mongodb://localhost:27017",
            db_name="my_db",
            environment="production",
        )
    """

    def __init__(
        self,
        environment: str | None = None,
        port: int | None = None,
        mongo_uri: str | None = None,
        db_name: str | None = None,
        max_pool_size: int | None = None,
        min_pool_size: int | None = None,
        server_selection_timeout_ms: int | None = None,
        api_prefix: str | None = None,
        expose_validation_errors: bool | None = None,
    ):
        """
        Initialize configuration.

        Args:
            environment: "development" or "production" (defaults to APP_ENV env var)
            port: HTTP port (defaults to PORT or 3000)
            mongo_uri: MongoDB connection URI (defaults to MONGO_URI env var)
            db_name: Database name (defaults to DB_NAME env var)
            max_pool_size: Maximum connection pool size (defaults to 50 or MONGO_MAX_POOL_SIZE)
            min_pool_size: Minimum connection pool size (defaults to 10 or MONGO_MIN_POOL_SIZE)
            server_selection_timeout_ms: Server selection timeout in ms (defaults to 5000)
            api_prefix: Global route prefix (defaults to API_PREFIX or "/api")
            expose_validation_errors: Whether validation details are returned to
                clients (defaults to True outside production)
        """
        self.environment = (environment or os.getenv("APP_ENV", ENV_DEVELOPMENT)).lower()
        self.port = port or _int_env("PORT", DEFAULT_PORT)
        self.mongo_uri = mongo_uri or os.getenv("MONGO_URI", "")
        self.db_name = db_name or os.getenv("DB_NAME", "")
        self.max_pool_size = max_pool_size or _int_env(
            "MONGO_MAX_POOL_SIZE", DEFAULT_MAX_POOL_SIZE
        )
        self.min_pool_size = min_pool_size or _int_env(
            "MONGO_MIN_POOL_SIZE", DEFAULT_MIN_POOL_SIZE
        )
        self.server_selection_timeout_ms = server_selection_timeout_ms or _int_env(
            "MONGO_SERVER_SELECTION_TIMEOUT_MS", DEFAULT_SERVER_SELECTION_TIMEOUT_MS
        )
        self.api_prefix = api_prefix if api_prefix is not None else os.getenv(
            "API_PREFIX", DEFAULT_API_PREFIX
        )
        if expose_validation_errors is None:
            expose_validation_errors = self.environment != ENV_PRODUCTION
        self.expose_validation_errors = expose_validation_errors

    @property
    def is_production(self) -> bool:
        return self.environment == ENV_PRODUCTION

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If required configuration is missing or invalid
        """
        if self.environment not in SUPPORTED_ENVIRONMENTS:
            raise ConfigurationError(
                f"environment must be one of {', '.join(SUPPORTED_ENVIRONMENTS)}",
                config_key="environment",
                config_value=self.environment,
            )

        if not self.mongo_uri:
            raise ConfigurationError(
                "mongo_uri is required (set MONGO_URI environment variable or pass directly)",
                config_key="mongo_uri",
            )

        if not self.db_name:
            raise ConfigurationError(
                "db_name is required (set DB_NAME environment variable or pass directly)",
                config_key="db_name",
            )

        if not 0 < self.port < 65536:
            raise ConfigurationError(
                f"port must be between 1 and 65535, got {self.port}",
                config_key="port",
                config_value=self.port,
            )

        if self.max_pool_size < 1:
            raise ConfigurationError(
                f"max_pool_size must be >= 1, got {self.max_pool_size}",
                config_key="max_pool_size",
                config_value=self.max_pool_size,
            )

        if self.min_pool_size < 1:
            raise ConfigurationError(
                f"min_pool_size must be >= 1, got {self.min_pool_size}",
                config_key="min_pool_size",
                config_value=self.min_pool_size,
            )

        if self.min_pool_size > self.max_pool_size:
            raise ConfigurationError(
                f"min_pool_size ({self.min_pool_size}) cannot be greater than "
                f"max_pool_size ({self.max_pool_size})",
                config_key="min_pool_size",
                config_value=self.min_pool_size,
            )

        if self.server_selection_timeout_ms < 1000:
            raise ConfigurationError(
                f"server_selection_timeout_ms must be >= 1000, got "
                f"{self.server_selection_timeout_ms}",
                config_key="server_selection_timeout_ms",
                config_value=self.server_selection_timeout_ms,
            )

        if self.api_prefix and not self.api_prefix.startswith("/"):
            raise ConfigurationError(
                "api_prefix must start with '/'",
                config_key="api_prefix",
                config_value=self.api_prefix,
            )

    def __repr__(self) -> str:
        return (
            f"Settings(environment={self.environment!r}, port={self.port}, "
            f"db_name={self.db_name!r}, api_prefix={self.api_prefix!r})"
        )
