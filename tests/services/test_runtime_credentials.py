"""Tests for environment-driven Canada Tire configuration."""

import pytest

from src.errors import AdapterError
from src.services.connection_types import DEFAULT_REALM, DEFAULT_TIMEOUT_MS
from src.services.runtime_credentials import (
    REQUIRED_ENV_VARS,
    get_env,
    load_canada_tire_config,
    missing_env_vars,
    parse_timeout_ms,
    sanitize_base_url,
)
from tests.helpers import BASE_URL, CANADA_TIRE_ENV


class TestLoadCanadaTireConfig:
    """Tests for load_canada_tire_config()."""

    def test_complete_environment(self):
        config = load_canada_tire_config(CANADA_TIRE_ENV)

        assert config.base_url == BASE_URL
        assert config.realm == "8031691_SB1"
        assert config.credentials.consumer_key == "ck-1234567890"
        assert config.credentials.token_secret == "ts-secret-value"
        assert config.customer_id == "4242"
        assert config.customer_token == "cust-token-value"
        assert config.timeout_ms == DEFAULT_TIMEOUT_MS

    def test_reads_process_environment(self, canada_tire_env):
        assert load_canada_tire_config().base_url == BASE_URL

    def test_realm_defaults_to_sandbox(self):
        env = {k: v for k, v in CANADA_TIRE_ENV.items() if k != "CANADA_TIRE_REALM"}
        assert load_canada_tire_config(env).realm == DEFAULT_REALM

    def test_blank_realm_uses_default(self):
        env = {**CANADA_TIRE_ENV, "CANADA_TIRE_REALM": "   "}
        assert load_canada_tire_config(env).realm == DEFAULT_REALM

    @pytest.mark.parametrize("name", REQUIRED_ENV_VARS)
    def test_missing_variable_named_and_hidden(self, name):
        env = {k: v for k, v in CANADA_TIRE_ENV.items() if k != name}

        with pytest.raises(AdapterError) as exc_info:
            load_canada_tire_config(env)

        error = exc_info.value
        assert error.status == 500
        assert error.expose is False
        assert name in error.message
        assert error.details["variable"] == name
        assert name not in error.public_message

    def test_blank_value_counts_as_missing(self):
        env = {**CANADA_TIRE_ENV, "CANADA_TIRE_TOKEN_SECRET": "  "}
        with pytest.raises(AdapterError, match="CANADA_TIRE_TOKEN_SECRET"):
            load_canada_tire_config(env)

    def test_timeout_override(self):
        env = {**CANADA_TIRE_ENV, "CANADA_TIRE_TIMEOUT_MS": "1500"}
        config = load_canada_tire_config(env)
        assert config.timeout_ms == 1500
        assert config.timeout_seconds == 1.5


class TestSanitizeBaseUrl:
    """Tests for base URL validation."""

    def test_trailing_slashes_stripped(self):
        assert sanitize_base_url("https://x.example.com/api///", "V") == "https://x.example.com/api"

    def test_query_dropped(self):
        assert sanitize_base_url("https://x.example.com/api?a=1", "V") == "https://x.example.com/api"

    @pytest.mark.parametrize("value", ["x.example.com", "ftp://x.example.com", "https://"])
    def test_invalid_url_rejected(self, value):
        with pytest.raises(AdapterError) as exc_info:
            sanitize_base_url(value, "CANADA_TIRE_BASE_URL")
        assert exc_info.value.status == 500
        assert "CANADA_TIRE_BASE_URL" in exc_info.value.message


class TestParseTimeout:
    """Tests for the timeout override."""

    def test_default(self):
        assert parse_timeout_ms(None) == DEFAULT_TIMEOUT_MS

    @pytest.mark.parametrize("raw", ["0", "-5", "abc", "1.5"])
    def test_invalid(self, raw):
        with pytest.raises(AdapterError, match="CANADA_TIRE_TIMEOUT_MS"):
            parse_timeout_ms(raw)


class TestEnvHelpers:
    """Tests for get_env() and missing_env_vars()."""

    def test_get_env_blank_is_fallback(self):
        assert get_env("X", "fb", {"X": " "}) == "fb"

    def test_missing_env_vars_lists_all(self):
        assert missing_env_vars({}) == list(REQUIRED_ENV_VARS)

    def test_missing_env_vars_empty_when_complete(self):
        assert missing_env_vars(CANADA_TIRE_ENV) == []
