"""Request and response contracts for the distributor gateway.

The response side is a pydantic envelope so every route renders the same
``{success, data}`` / ``{success, error: {code, message}}`` shape. The
request side is a small tagged union of frozen dataclasses built from the
raw ``{vendor, action, payload}`` body, so the route can dispatch on the
concrete type.
"""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel

from src.errors import AdapterError, ensure
from src.services.connection_types import SUPPORTED_VENDOR, CanadaTireAction


# Response envelope


class ErrorBody(BaseModel):
    """Error portion of a failed response."""

    code: int
    message: str


class ResponseEnvelope(BaseModel):
    """Stable response shape for every gateway reply."""

    success: bool
    data: Any = None
    error: ErrorBody | None = None

    @classmethod
    def ok(cls, data: Any) -> "ResponseEnvelope":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, status: int, message: str) -> "ResponseEnvelope":
        return cls(success=False, error=ErrorBody(code=status, message=message))

    def to_content(self) -> dict[str, Any]:
        """Serialize without the unused half of the envelope."""
        return self.model_dump(exclude_unset=True)


# Action requests


@dataclass(frozen=True)
class SearchProductsRequest:
    filters: Any = None
    action: Literal[CanadaTireAction.SEARCH_PRODUCTS] = CanadaTireAction.SEARCH_PRODUCTS


@dataclass(frozen=True)
class GetShipToAddressesRequest:
    action: Literal[CanadaTireAction.GET_SHIP_TO_ADDRESSES] = (
        CanadaTireAction.GET_SHIP_TO_ADDRESSES
    )


@dataclass(frozen=True)
class SubmitOrderRequest:
    order_details: Any = None
    action: Literal[CanadaTireAction.SUBMIT_ORDER] = CanadaTireAction.SUBMIT_ORDER


@dataclass(frozen=True)
class UpdateOrderAddressRequest:
    so_id: Any = None
    shipping: Any = None
    action: Literal[CanadaTireAction.UPDATE_ORDER_ADDRESS] = (
        CanadaTireAction.UPDATE_ORDER_ADDRESS
    )


ActionRequest = (
    SearchProductsRequest
    | GetShipToAddressesRequest
    | SubmitOrderRequest
    | UpdateOrderAddressRequest
)


@dataclass(frozen=True)
class GatewayRequest:
    """Parsed ``{vendor, action, payload}`` body."""

    vendor: str
    request: ActionRequest


def _parse_action(value: Any) -> CanadaTireAction:
    try:
        return CanadaTireAction(value)
    except ValueError as exc:
        raise AdapterError.from_code("E-1004", details={"action": repr(value)}) from exc


def build_action_request(action: CanadaTireAction, payload: dict[str, Any]) -> ActionRequest:
    """Map an action name and payload onto its request type.

    Args:
        action: Parsed action.
        payload: The envelope's payload object.

    Returns:
        The concrete ActionRequest. Field contents are validated later by
        the adapter.
    """
    if action is CanadaTireAction.SEARCH_PRODUCTS:
        return SearchProductsRequest(filters=payload.get("filters"))
    if action is CanadaTireAction.GET_SHIP_TO_ADDRESSES:
        return GetShipToAddressesRequest()
    if action is CanadaTireAction.SUBMIT_ORDER:
        return SubmitOrderRequest(order_details=payload.get("orderDetails"))

    order_details = payload.get("orderDetails")
    ensure(
        isinstance(order_details, dict),
        "orderDetails must be an object containing soId and shipping",
    )
    return UpdateOrderAddressRequest(
        so_id=order_details.get("soId"),
        shipping=order_details.get("shipping"),
    )


def parse_gateway_request(body: Any) -> GatewayRequest:
    """Validate the decoded JSON body of a gateway call.

    Args:
        body: Decoded JSON value.

    Returns:
        GatewayRequest with the typed action request.

    Raises:
        AdapterError: 400 for a non-object body, unsupported vendor or
            action, or a non-object payload.
    """
    if not isinstance(body, dict):
        raise AdapterError.from_code("E-1002")

    vendor = body.get("vendor")
    if vendor != SUPPORTED_VENDOR:
        raise AdapterError.from_code("E-1003", details={"vendor": repr(vendor)})

    action = _parse_action(body.get("action"))

    payload = body.get("payload")
    if payload is None:
        payload = {}
    ensure(isinstance(payload, dict), "payload must be an object")

    return GatewayRequest(
        vendor=vendor,
        request=build_action_request(action, payload),
    )
