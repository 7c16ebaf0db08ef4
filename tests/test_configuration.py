"""Tests for configuration loading.

These tests verify:
- YAML file selection by APP_ENV
- Connection string resolution (environment wins over YAML)
- Fail-fast behaviour when required configuration is missing
- Singleton caching and reset
"""

import pytest
import yaml

from catalog_api.config import configuration
from catalog_api.config.configuration import (
    AppConfig,
    ConfigurationError,
    get_config,
    get_environment,
    load_config,
    reset_config,
)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the loader at a temporary project root with no .env loading."""
    monkeypatch.setattr(configuration, "_get_project_root", lambda: tmp_path)
    monkeypatch.setattr(configuration, "load_dotenv", lambda: None)
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv(configuration.CONNECTION_STRING_ENV, raising=False)
    reset_config()
    yield tmp_path
    reset_config()


def write_config(directory, content, filename="config.yaml"):
    with open(directory / filename, "w") as f:
        yaml.dump(content, f)


class TestLoadConfig:
    """Test load_config against temporary YAML files."""

    def test_loads_all_sections(self, config_dir, monkeypatch):
        monkeypatch.setenv(configuration.CONNECTION_STRING_ENV, "mongodb://db:27017")
        write_config(config_dir, {
            "catalog_db": {"database_name": "Shop", "catalog_collection_name": "Items"},
            "logging": {"level": "DEBUG"},
            "server": {"host": "127.0.0.1", "port": 9000, "https_redirect": True, "forwarded_allow_ips": "10.0.0.5"},
            "cors": {"allow_origins": ["http://localhost:4200"]},
        })

        config = load_config()

        assert isinstance(config, AppConfig)
        assert config.catalog_db.connection_string == "mongodb://db:27017"
        assert config.catalog_db.database_name == "Shop"
        assert config.catalog_db.catalog_collection_name == "Items"
        assert config.logging.level == "DEBUG"
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 9000
        assert config.server.https_redirect is True
        assert config.server.forwarded_allow_ips == "10.0.0.5"
        assert config.cors.allow_origins == ("http://localhost:4200",)

    def test_defaults_for_missing_sections(self, config_dir, monkeypatch):
        monkeypatch.setenv(configuration.CONNECTION_STRING_ENV, "mongodb://db:27017")
        write_config(config_dir, {})

        config = load_config()

        assert config.catalog_db.database_name == "CatalogDb"
        assert config.catalog_db.catalog_collection_name == "Products"
        assert config.logging.level == "INFO"
        assert config.server.port == 8000
        assert config.server.https_redirect is False
        assert config.server.forwarded_allow_ips == "127.0.0.1"
        assert config.cors.allow_origins == ("*",)

    def test_environment_overrides_yaml_connection_string(self, config_dir, monkeypatch):
        monkeypatch.setenv(configuration.CONNECTION_STRING_ENV, "mongodb://from-env:27017")
        write_config(config_dir, {"catalog_db": {"connection_string": "mongodb://from-yaml:27017"}})

        config = load_config()

        assert config.catalog_db.connection_string == "mongodb://from-env:27017"

    def test_yaml_connection_string_used_without_environment(self, config_dir):
        write_config(config_dir, {"catalog_db": {"connection_string": "mongodb://from-yaml:27017"}})

        config = load_config()

        assert config.catalog_db.connection_string == "mongodb://from-yaml:27017"

    def test_port_environment_variable_wins(self, config_dir, monkeypatch):
        monkeypatch.setenv(configuration.CONNECTION_STRING_ENV, "mongodb://db:27017")
        monkeypatch.setenv("PORT", "8123")
        write_config(config_dir, {"server": {"port": 9000}})

        assert load_config().server.port == 8123

    def test_missing_connection_string_fails_fast(self, config_dir):
        write_config(config_dir, {"catalog_db": {"database_name": "Shop"}})

        with pytest.raises(ConfigurationError, match="Connection string is not configured"):
            load_config()

    def test_empty_connection_string_fails_fast(self, config_dir, monkeypatch):
        monkeypatch.setenv(configuration.CONNECTION_STRING_ENV, "")
        write_config(config_dir, {"catalog_db": {"connection_string": ""}})

        with pytest.raises(ConfigurationError):
            load_config()

    def test_missing_config_file(self, config_dir):
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            load_config()

    def test_config_is_immutable(self, config_dir, monkeypatch):
        monkeypatch.setenv(configuration.CONNECTION_STRING_ENV, "mongodb://db:27017")
        write_config(config_dir, {})

        config = load_config()

        with pytest.raises(AttributeError):
            config.catalog_db.database_name = "Other"


class TestEnvironmentSelection:
    """Test APP_ENV driven file selection."""

    @pytest.mark.parametrize(
        "app_env, filename",
        [("dev", "config_dev.yaml"), ("TEST", "config_test.yaml"), ("", "config.yaml"), ("prod", "config.yaml")],
    )
    def test_config_filename(self, monkeypatch, app_env, filename):
        monkeypatch.setenv("APP_ENV", app_env)
        assert configuration._get_config_filename() == filename

    def test_dev_file_is_loaded(self, config_dir, monkeypatch):
        monkeypatch.setenv("APP_ENV", "dev")
        write_config(config_dir, {"catalog_db": {"connection_string": "mongodb://localhost:27017"}}, "config_dev.yaml")
        write_config(config_dir, {}, "config.yaml")

        config = load_config()

        assert config.catalog_db.connection_string == "mongodb://localhost:27017"

    def test_get_environment(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "dev")
        assert get_environment() == "dev"
        monkeypatch.setenv("APP_ENV", "staging")
        assert get_environment() == "default"


class TestConfigSingleton:
    """Test get_config caching."""

    def test_get_config_caches_until_reset(self, config_dir, monkeypatch):
        monkeypatch.setenv(configuration.CONNECTION_STRING_ENV, "mongodb://db:27017")
        write_config(config_dir, {"catalog_db": {"database_name": "First"}})

        first = get_config()
        write_config(config_dir, {"catalog_db": {"database_name": "Second"}})

        assert get_config() is first

        reset_config()
        assert get_config().catalog_db.database_name == "Second"
