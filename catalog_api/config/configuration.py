"""Configuration module for the Catalog API.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml (local MongoDB, OpenAPI docs enabled)
- APP_ENV=test → config_test.yaml
- Default      → config.yaml

The database connection string is loaded from the environment or a .env file.
Fails fast with clear error messages if required configuration is missing.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml
from dotenv import load_dotenv

CONNECTION_STRING_ENV = "CATALOG_DB_CONNECTION_STRING"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from catalog_api/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - APP_ENV=test → config_test.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_connection_string(section: dict) -> str:
    """Resolve the connection string, preferring the environment over YAML."""
    value = os.environ.get(CONNECTION_STRING_ENV) or section.get("connection_string")
    if not value:
        raise ConfigurationError(
            f"Connection string is not configured. "
            f"Set '{CONNECTION_STRING_ENV}' in your environment or .env file."
        )
    return value


@dataclass(frozen=True)
class CatalogDbSettings:
    """MongoDB settings for the product catalog."""
    connection_string: str
    database_name: str
    catalog_collection_name: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""
    host: str
    port: int
    https_redirect: bool
    forwarded_allow_ips: str


@dataclass(frozen=True)
class CorsConfig:
    """CORS configuration."""
    allow_origins: Tuple[str, ...]


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    catalog_db: CatalogDbSettings
    logging: LoggingConfig
    server: ServerConfig
    cors: CorsConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from the YAML config file for non-sensitive settings and from the
    environment (or .env) for the connection string.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    # Load environment variables from .env file
    load_dotenv()

    yaml_config = _load_yaml_config()

    # Build catalog database settings
    catalog_db_section = yaml_config.get("catalog_db", {})

    catalog_db_settings = CatalogDbSettings(
        connection_string=_get_connection_string(catalog_db_section),
        database_name=catalog_db_section.get("database_name", "CatalogDb"),
        catalog_collection_name=catalog_db_section.get("catalog_collection_name", "Products"),
    )

    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
    )

    server_section = yaml_config.get("server", {})

    server_config = ServerConfig(
        host=server_section.get("host", "0.0.0.0"),
        port=int(os.environ.get("PORT", server_section.get("port", 8000))),
        https_redirect=bool(server_section.get("https_redirect", False)),
        forwarded_allow_ips=str(server_section.get("forwarded_allow_ips", "127.0.0.1")),
    )

    cors_section = yaml_config.get("cors", {})

    cors_config = CorsConfig(
        allow_origins=tuple(cors_section.get("allow_origins", ["*"])),
    )

    return AppConfig(
        catalog_db=catalog_db_settings,
        logging=logging_config,
        server=server_config,
        cors=cors_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    """Get current environment name.

    Returns:
        'dev', 'test', or 'default' based on APP_ENV.
    """
    app_env = os.environ.get("APP_ENV", "").lower()
    return app_env if app_env in ("dev", "test") else "default"


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
