"""Test helper utilities for adapter and gateway testing."""

from tests.helpers.canada_tire_env import BASE_URL, CANADA_TIRE_ENV
from tests.helpers.fake_restlet import FakeRestlet, RecordedRequest

__all__ = [
    "BASE_URL",
    "CANADA_TIRE_ENV",
    "FakeRestlet",
    "RecordedRequest",
]
