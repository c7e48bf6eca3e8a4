"""Service layer for the distributor gateway.

Provides OAuth request signing, Canada Tire payload validation, the
RESTlet adapter, and the process-wide adapter provider.
"""

from src.services.canada_tire_adapter import CanadaTireAdapter
from src.services.connection_types import (
    ROUTES,
    AdapterConfig,
    CanadaTireAction,
    OAuthCredentials,
    RestletRoute,
)
from src.services.oauth_signer import build_oauth_header

__all__ = [
    "AdapterConfig",
    "CanadaTireAction",
    "CanadaTireAdapter",
    "OAuthCredentials",
    "ROUTES",
    "RestletRoute",
    "build_oauth_header",
]
