"""Pytest fixtures for API tests.

Provides a TestClient and a gateway whose adapter singleton is wired to
the fake RESTlet transport.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

import src.services.gateway_provider as provider
from src.api.main import app
from src.services.canada_tire_adapter import CanadaTireAdapter


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a TestClient for the gateway app.

    Yields:
        TestClient configured for testing.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def wired_adapter(adapter: CanadaTireAdapter) -> CanadaTireAdapter:
    """Install the fake-transport adapter as the process singleton."""
    provider._canada_tire_adapter = adapter
    return adapter
