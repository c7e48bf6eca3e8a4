"""Root-level pytest fixtures for all tests.

Provides shared fixtures:
- A complete Canada Tire environment and the matching AdapterConfig
- Fake RESTlet transport and an adapter wired to it
- Adapter singleton reset between tests
"""

from collections.abc import Generator

import pytest

from src.services.canada_tire_adapter import CanadaTireAdapter
from src.services.connection_types import AdapterConfig, OAuthCredentials
from tests.helpers import BASE_URL, CANADA_TIRE_ENV, FakeRestlet


@pytest.fixture
def canada_tire_env(monkeypatch) -> dict[str, str]:
    """Set a complete Canada Tire environment for the test."""
    for name, value in CANADA_TIRE_ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("CANADA_TIRE_TIMEOUT_MS", raising=False)
    return dict(CANADA_TIRE_ENV)


@pytest.fixture
def clear_canada_tire_env(monkeypatch) -> None:
    """Remove every Canada Tire variable from the environment."""
    for name in [*CANADA_TIRE_ENV, "CANADA_TIRE_TIMEOUT_MS"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def adapter_config() -> AdapterConfig:
    """AdapterConfig matching CANADA_TIRE_ENV."""
    return AdapterConfig(
        base_url=BASE_URL,
        realm="8031691_SB1",
        credentials=OAuthCredentials(
            consumer_key="ck-1234567890",
            consumer_secret="cs-secret-value",
            token_id="tid-0987654321",
            token_secret="ts-secret-value",
        ),
        customer_id="4242",
        customer_token="cust-token-value",
    )


@pytest.fixture
def fake_restlet() -> FakeRestlet:
    """Fake RESTlet replying ``{success: true, data: []}`` by default."""
    return FakeRestlet()


@pytest.fixture
def adapter(adapter_config: AdapterConfig, fake_restlet: FakeRestlet) -> CanadaTireAdapter:
    """CanadaTireAdapter wired to the fake RESTlet."""
    return CanadaTireAdapter(adapter_config, transport=fake_restlet)


@pytest.fixture(autouse=True)
def reset_adapter_singleton() -> Generator[None, None, None]:
    """Drop the cached adapter before and after every test."""
    from src.services.gateway_provider import reset_adapters

    reset_adapters()
    yield
    reset_adapters()
