"""Tests for environment configuration."""
import pytest

from dex_mcp.client import DEFAULT_GRAPHQL_URL, DEFAULT_REST_URL
from dex_mcp.config import load_settings
from dex_mcp.errors import ConfigurationError


class TestLoadSettings:

    def test_api_key_required(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({})
        assert "DEX_API_KEY" in str(exc_info.value)

    def test_empty_api_key_rejected(self):
        with pytest.raises(ConfigurationError):
            load_settings({"DEX_API_KEY": ""})

    def test_defaults(self):
        settings = load_settings({"DEX_API_KEY": "secret"})

        assert settings.api_key == "secret"
        assert settings.graphql_url == DEFAULT_GRAPHQL_URL
        assert settings.rest_url == DEFAULT_REST_URL
        assert settings.log_level == "INFO"

    def test_overrides(self):
        settings = load_settings({
            "DEX_API_KEY": "secret",
            "DEX_API_BASE_URL": "http://localhost:8080/v1/graphql",
            "DEX_REST_BASE_URL": "http://localhost:8080/api/rest",
            "DEX_LOG_LEVEL": "debug",
        })

        assert settings.graphql_url == "http://localhost:8080/v1/graphql"
        assert settings.rest_url == "http://localhost:8080/api/rest"
        assert settings.log_level == "DEBUG"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("DEX_API_KEY", "from-env")
        assert load_settings().api_key == "from-env"
