"""Runtime credential resolution: single contract for gateway configuration.

All call sites use this module to build the Canada Tire AdapterConfig from
the process environment. Values are read once per call and returned as an
immutable config; nothing here touches the network or caches state, so a
duplicated call is harmless.

Missing or invalid values raise a non-exposed 500 AdapterError naming the
variable, which the gateway logs and renders as a generic failure.
"""

import os
from collections.abc import Mapping
from urllib.parse import urlsplit, urlunsplit

from src.errors import AdapterError
from src.services.connection_types import (
    DEFAULT_REALM,
    DEFAULT_TIMEOUT_MS,
    AdapterConfig,
    OAuthCredentials,
)

ENV_BASE_URL = "CANADA_TIRE_BASE_URL"
ENV_REALM = "CANADA_TIRE_REALM"
ENV_CONSUMER_KEY = "CANADA_TIRE_CONSUMER_KEY"
ENV_CONSUMER_SECRET = "CANADA_TIRE_CONSUMER_SECRET"
ENV_TOKEN_ID = "CANADA_TIRE_TOKEN_ID"
ENV_TOKEN_SECRET = "CANADA_TIRE_TOKEN_SECRET"
ENV_CUSTOMER_ID = "CANADA_TIRE_CUSTOMER_ID"
ENV_CUSTOMER_TOKEN = "CANADA_TIRE_CUSTOMER_TOKEN"
ENV_TIMEOUT_MS = "CANADA_TIRE_TIMEOUT_MS"

REQUIRED_ENV_VARS: tuple[str, ...] = (
    ENV_BASE_URL,
    ENV_CONSUMER_KEY,
    ENV_CONSUMER_SECRET,
    ENV_TOKEN_ID,
    ENV_TOKEN_SECRET,
    ENV_CUSTOMER_ID,
    ENV_CUSTOMER_TOKEN,
)


def get_required_env(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Return a required, non-blank environment value.

    Raises:
        AdapterError: E-4001 if the variable is unset or blank.
    """
    env = os.environ if environ is None else environ
    value = env.get(name, "").strip()
    if not value:
        raise AdapterError.from_code("E-4001", name=name, details={"variable": name})
    return value


def get_env(
    name: str,
    fallback: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Return an optional environment value, treating blank as unset."""
    env = os.environ if environ is None else environ
    value = env.get(name, "").strip()
    return value or fallback


def sanitize_base_url(value: str, name: str) -> str:
    """Validate an absolute http(s) URL and strip trailing slashes.

    Args:
        value: Raw URL from the environment.
        name: Variable name for error reporting.

    Returns:
        URL without query, fragment or trailing slash.

    Raises:
        AdapterError: E-4002 if the URL is not absolute http(s).
    """
    parts = urlsplit(value)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise AdapterError.from_code("E-4002", name=name, details={"variable": name})
    return urlunsplit((parts.scheme, parts.netloc, parts.path.rstrip("/"), "", ""))


def parse_timeout_ms(raw: str | None, name: str = ENV_TIMEOUT_MS) -> int:
    """Parse the optional timeout override, defaulting to 30 s."""
    if raw is None:
        return DEFAULT_TIMEOUT_MS
    try:
        timeout_ms = int(raw)
    except ValueError:
        timeout_ms = 0
    if timeout_ms <= 0:
        raise AdapterError.from_code("E-4002", name=name, details={"variable": name})
    return timeout_ms


def load_canada_tire_config(environ: Mapping[str, str] | None = None) -> AdapterConfig:
    """Build the AdapterConfig from environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ`` (tests).

    Returns:
        Immutable AdapterConfig.

    Raises:
        AdapterError: 500, not exposed, naming the first missing or
            invalid variable.
    """
    base_url = sanitize_base_url(get_required_env(ENV_BASE_URL, environ), ENV_BASE_URL)
    credentials = OAuthCredentials(
        consumer_key=get_required_env(ENV_CONSUMER_KEY, environ),
        consumer_secret=get_required_env(ENV_CONSUMER_SECRET, environ),
        token_id=get_required_env(ENV_TOKEN_ID, environ),
        token_secret=get_required_env(ENV_TOKEN_SECRET, environ),
    )
    return AdapterConfig(
        base_url=base_url,
        realm=get_env(ENV_REALM, DEFAULT_REALM, environ) or DEFAULT_REALM,
        credentials=credentials,
        customer_id=get_required_env(ENV_CUSTOMER_ID, environ),
        customer_token=get_required_env(ENV_CUSTOMER_TOKEN, environ),
        timeout_ms=parse_timeout_ms(get_env(ENV_TIMEOUT_MS, environ=environ)),
    )


def missing_env_vars(environ: Mapping[str, str] | None = None) -> list[str]:
    """List required variables that are unset or blank."""
    env = os.environ if environ is None else environ
    return [name for name in REQUIRED_ENV_VARS if not env.get(name, "").strip()]
