"""Shared types and constants for the Canada Tire RESTlet connection.

Neutral module with no HTTP or service-layer imports. Used by the OAuth
signer, the vendor adapter, runtime_credentials.py, and the API schemas.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


SUPPORTED_VENDOR = "canadaTire"

DEFAULT_REALM = "8031691_SB1"  # Sandbox account; production drops the _SB1 suffix
DEFAULT_TIMEOUT_MS = 30_000


class CanadaTireAction(str, Enum):
    """Remote operations exposed by the Canada Tire RESTlets."""

    SEARCH_PRODUCTS = "searchProducts"
    GET_SHIP_TO_ADDRESSES = "getShipToAddresses"
    SUBMIT_ORDER = "submitOrder"
    UPDATE_ORDER_ADDRESS = "updateOrderAddress"


# --- Credential Dataclasses ---


def _mask(value: str) -> str:
    if len(value) <= 4:
        return "***"
    return f"{value[:4]}***"


@dataclass(frozen=True)
class OAuthCredentials:
    """Typed OAuth 1.0 token-based-auth credentials for NetSuite RESTlets."""

    consumer_key: str
    consumer_secret: str = field(repr=False)
    token_id: str
    token_secret: str = field(repr=False)

    def __repr__(self) -> str:
        return (
            f"OAuthCredentials(consumer_key={_mask(self.consumer_key)!r}, "
            f"token_id={_mask(self.token_id)!r})"
        )


@dataclass(frozen=True)
class RestletRoute:
    """Script/deploy pair that identifies one RESTlet endpoint."""

    script: str
    deploy: str


ROUTES: MappingProxyType[CanadaTireAction, RestletRoute] = MappingProxyType({
    CanadaTireAction.SEARCH_PRODUCTS: RestletRoute(
        script="customscript_item_search_rl",
        deploy="customdeploy_item_search_rl",
    ),
    CanadaTireAction.GET_SHIP_TO_ADDRESSES: RestletRoute(
        script="customscript_get_cust_addr_rl",
        deploy="customdeploy_get_cust_addr_rl",
    ),
    CanadaTireAction.SUBMIT_ORDER: RestletRoute(
        script="customscript_create_sales_order_rl",
        deploy="customdeploy_create_sales_order_rl",
    ),
    CanadaTireAction.UPDATE_ORDER_ADDRESS: RestletRoute(
        script="customscript_update_order_addr_rl",
        deploy="customdeploy_update_order_addr_rl",
    ),
})


@dataclass(frozen=True)
class AdapterConfig:
    """Everything the adapter needs to reach one Canada Tire account."""

    base_url: str
    realm: str
    credentials: OAuthCredentials
    customer_id: str
    customer_token: str = field(repr=False)
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000
