"""FastAPI route for the distributor gateway.

Single endpoint ``/`` accepting ``{vendor, action, payload}``. Every reply,
success or failure, is a ResponseEnvelope whose ``error.code`` equals the
HTTP status, with CORS headers attached.

Architecture:
    Caller -> FastAPI -> CanadaTireAdapter -> OAuth-signed RESTlet POST
"""

import logging
from typing import Any, assert_never

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from src.api.middleware.cors import build_cors_headers
from src.api.schemas import (
    ActionRequest,
    GetShipToAddressesRequest,
    ResponseEnvelope,
    SearchProductsRequest,
    SubmitOrderRequest,
    UpdateOrderAddressRequest,
    parse_gateway_request,
)
from src.errors import AdapterError, render_adapter_error, render_unexpected_error
from src.services.canada_tire_adapter import CanadaTireAdapter, decode_json
from src.services.gateway_provider import get_canada_tire_adapter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["distributor"])

_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def envelope_response(
    envelope: ResponseEnvelope,
    status_code: int,
    origin: str | None,
) -> JSONResponse:
    """Render an envelope as JSON with CORS headers."""
    return JSONResponse(
        status_code=status_code,
        content=envelope.to_content(),
        headers=build_cors_headers(origin),
    )


def error_response(status: int, message: str, origin: str | None) -> JSONResponse:
    return envelope_response(ResponseEnvelope.failure(status, message), status, origin)


async def execute_action(adapter: CanadaTireAdapter, request: ActionRequest) -> Any:
    """Dispatch a typed action request to the adapter.

    Args:
        adapter: The shared CanadaTireAdapter.
        request: One of the four action request types.

    Returns:
        The vendor's ``data`` payload.
    """
    if isinstance(request, SearchProductsRequest):
        return await adapter.search_products(request.filters)
    if isinstance(request, GetShipToAddressesRequest):
        return await adapter.get_ship_to_addresses()
    if isinstance(request, SubmitOrderRequest):
        return await adapter.submit_order(request.order_details)
    if isinstance(request, UpdateOrderAddressRequest):
        return await adapter.update_order_address(request.so_id, request.shipping)
    assert_never(request)


async def _decode_body(request: Request) -> Any:
    raw = await request.body()
    try:
        return decode_json(raw)
    except ValueError as exc:
        raise AdapterError.from_code("E-1001") from exc


@router.api_route("/", methods=_ALL_METHODS, response_model=None)
async def distributor(request: Request) -> Response:
    """Handle a gateway call.

    OPTIONS answers the CORS pre-flight with 204. Any method other than
    POST gets a 405 envelope.
    """
    origin = request.headers.get("origin")

    if request.method == "OPTIONS":
        return Response(status_code=204, headers=build_cors_headers(origin))

    try:
        if request.method != "POST":
            raise AdapterError.from_code("E-1005", details={"method": request.method})

        body = await _decode_body(request)
        gateway_request = parse_gateway_request(body)
        adapter = get_canada_tire_adapter()
        logger.info(
            "Dispatching %s to %s",
            gateway_request.request.action.value,
            gateway_request.vendor,
        )
        data = await execute_action(adapter, gateway_request.request)
        return envelope_response(ResponseEnvelope.ok(data), 200, origin)
    except AdapterError as exc:
        status, message = render_adapter_error(exc, logger)
        return error_response(status, message, origin)
    except Exception as exc:
        status, message = render_unexpected_error(exc, logger)
        return error_response(status, message, origin)
