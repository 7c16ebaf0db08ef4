"""Configuration module."""

from catalog_api.config.configuration import (
    AppConfig,
    CatalogDbSettings,
    ConfigurationError,
    CorsConfig,
    LoggingConfig,
    ServerConfig,
    get_config,
    get_environment,
    load_config,
    reset_config,
)

__all__ = [
    "AppConfig",
    "CatalogDbSettings",
    "ConfigurationError",
    "CorsConfig",
    "LoggingConfig",
    "ServerConfig",
    "get_config",
    "get_environment",
    "load_config",
    "reset_config",
]
