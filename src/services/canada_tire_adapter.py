"""Canada Tire RESTlet adapter.

Translates the four logical distributor actions into OAuth-signed POSTs
against Canada Tire's NetSuite RESTlets and normalizes the replies.

Every action follows the same path:
1. Validate the caller's payload (canada_tire_validation), before any I/O
2. Build ``{customerId, customerToken, ...actionBody}``
3. Sign the request for the action's script/deploy route
4. POST with an overall deadline; the in-flight request is cancelled on expiry
5. Classify the reply into the data payload or a typed AdapterError

Example usage:
    adapter = CanadaTireAdapter(config)
    rows = await adapter.search_products({"brand": "PIRELLI", "isTire": True})
"""

import asyncio
import json
import logging
from typing import Any, Protocol

import httpx

from src.errors import AdapterError
from src.services.canada_tire_validation import (
    validate_address_update,
    validate_filters,
    validate_order_details,
)
from src.services.connection_types import (
    ROUTES,
    AdapterConfig,
    CanadaTireAction,
)
from src.services.oauth_signer import build_oauth_header, mask_oauth_signature
from src.utils.redaction import redact_for_logging, sanitize_text

RESTLET_PATH = "/restlet.nl"

# Vendor error codes passed through as HTTP statuses; anything else falls back
_PASSTHROUGH_VENDOR_CODES = frozenset({400, 401, 500})
# Vendor-reported failures whose message is safe to show the caller
_EXPOSED_VENDOR_CODES = frozenset({400, 401})

_HTML_PREFIXES = ("<!doctype", "<html")
_HTML_PREVIEW_CHARS = 200
_RAW_EXCERPT_CHARS = 500


class GatewayLogger(Protocol):
    """Logging collaborator injected into the adapter.

    ``logging.Logger`` satisfies this protocol; tests may pass a recorder.
    """

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


def map_error_status(vendor_code: Any, fallback: int) -> int:
    """Map a vendor error code onto an HTTP status.

    Args:
        vendor_code: ``error.code`` from the RESTlet reply (may be "" or None).
        fallback: Status to use when the code is not 400, 401 or 500.

    Returns:
        The HTTP status to render.
    """
    if (
        isinstance(vendor_code, int)
        and not isinstance(vendor_code, bool)
        and vendor_code in _PASSTHROUGH_VENDOR_CODES
    ):
        return vendor_code
    return fallback


def looks_like_html(text: str) -> bool:
    """Return True when a body is an HTML page rather than JSON.

    NetSuite answers bad OAuth credentials with an HTML login page.
    """
    head = text.lstrip()[:16].lower()
    return head.startswith(_HTML_PREFIXES)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite number {name} is not valid JSON")


def decode_json(text: str | bytes) -> Any:
    """Decode strict JSON, rejecting the NaN and Infinity extensions.

    Raises:
        ValueError: If the text is not valid JSON.
    """
    return json.loads(text, parse_constant=_reject_constant)


def _vendor_error(parsed: Any) -> tuple[Any, str | None]:
    """Extract (code, errorMsg) from a parsed RESTlet reply."""
    if not isinstance(parsed, dict):
        return None, None
    error = parsed.get("error")
    if not isinstance(error, dict):
        return None, None
    message = error.get("errorMsg")
    if not isinstance(message, str) or not message.strip():
        message = None
    return error.get("code"), message


class CanadaTireAdapter:
    """Signed RESTlet client for one Canada Tire account.

    Holds an immutable AdapterConfig; safe to share across concurrent
    requests since every call opens its own HTTP client.
    """

    def __init__(
        self,
        config: AdapterConfig,
        *,
        logger: GatewayLogger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Endpoint, realm and credentials.
            logger: Logging collaborator; defaults to this module's logger.
            transport: Optional httpx transport (tests inject a fake).
        """
        self._config = config
        self._log: GatewayLogger = logger or logging.getLogger(__name__)
        self._transport = transport

    @property
    def config(self) -> AdapterConfig:
        return self._config

    # --- Actions ---

    async def search_products(self, filters: Any = None) -> Any:
        """Search the catalog.

        Args:
            filters: Optional filter object. Empty or absent filters send a
                body without a ``filters`` key.

        Returns:
            List of product rows as returned by the RESTlet.
        """
        normalized = validate_filters(filters)
        body = {"filters": normalized} if normalized else {}
        return await self._post(CanadaTireAction.SEARCH_PRODUCTS, body)

    async def get_ship_to_addresses(self) -> Any:
        """List the customer's saved ship-to addresses."""
        return await self._post(CanadaTireAction.GET_SHIP_TO_ADDRESSES, {})

    async def submit_order(self, order_details: Any) -> Any:
        """Create a sales order.

        Args:
            order_details: Location, shipping and line items.

        Returns:
            Order confirmation (id, orderNumber, totals, items).
        """
        order = validate_order_details(order_details)
        return await self._post(CanadaTireAction.SUBMIT_ORDER, {"orderDetails": order})

    async def update_order_address(self, so_id: Any, shipping: Any) -> Any:
        """Change the ship-to address of an existing sales order.

        Args:
            so_id: Sales order internal id.
            shipping: Replacement shipping block.

        Returns:
            ``{"soId": ...}`` as confirmed by the RESTlet.
        """
        update = validate_address_update(so_id, shipping)
        return await self._post(
            CanadaTireAction.UPDATE_ORDER_ADDRESS, {"orderDetails": update}
        )

    # --- Request execution ---

    def build_url(self, action: CanadaTireAction) -> httpx.URL:
        """Return ``{base_url}/restlet.nl?script=..&deploy=..`` for an action."""
        route = ROUTES[action]
        return httpx.URL(
            f"{self._config.base_url}{RESTLET_PATH}",
            params={"script": route.script, "deploy": route.deploy},
        )

    def build_body(self, body: dict[str, Any]) -> dict[str, Any]:
        """Prefix an action body with the customer credentials."""
        return {
            "customerId": self._config.customer_id,
            "customerToken": self._config.customer_token,
            **body,
        }

    async def _post(self, action: CanadaTireAction, body: dict[str, Any]) -> Any:
        url = self.build_url(action)
        request_body = self.build_body(body)
        authorization = build_oauth_header(
            ROUTES[action],
            self._config.credentials,
            self._config.realm,
            str(url),
        )

        self._log.info("Canada Tire %s -> %s", action.value, url)
        self._log.debug("Canada Tire request body: %s", redact_for_logging(request_body))
        self._log.debug("Canada Tire OAuth header: %s", mask_oauth_signature(authorization))

        headers = {
            "Authorization": authorization,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        timeout = self._config.timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                async with httpx.AsyncClient(
                    transport=self._transport, timeout=timeout
                ) as client:
                    response = await client.post(url, json=request_body, headers=headers)
        except (TimeoutError, httpx.TimeoutException) as exc:
            self._log.error(
                "Canada Tire %s timed out after %d ms", action.value, self._config.timeout_ms
            )
            raise AdapterError.from_code(
                "E-3001", timeout_ms=self._config.timeout_ms
            ) from exc
        except httpx.HTTPError as exc:
            self._log.error("Canada Tire %s transport failure: %r", action.value, exc)
            raise AdapterError.from_code(
                "E-3002", details={"action": action.value, "error": repr(exc)}
            ) from exc

        return self._classify_response(action, response)

    def _classify_response(self, action: CanadaTireAction, response: httpx.Response) -> Any:
        """Turn a RESTlet reply into its data payload or an AdapterError."""
        status = response.status_code
        text = response.text
        self._log.info("Canada Tire %s <- HTTP %d", action.value, status)
        self._log.debug(
            "Canada Tire response body: %s", sanitize_text(text, _RAW_EXCERPT_CHARS)
        )

        if not text or not text.strip():
            raise AdapterError.from_code("E-3003", details={"httpStatus": status})

        if looks_like_html(text):
            self._log.error(
                "Canada Tire %s returned HTML instead of JSON (HTTP %d)", action.value, status
            )
            raise AdapterError.from_code(
                "E-5001",
                details={
                    "httpStatus": status,
                    "responsePreview": sanitize_text(text, _HTML_PREVIEW_CHARS),
                },
            )

        try:
            parsed = decode_json(text)
        except ValueError as exc:
            raise AdapterError.from_code(
                "E-3004",
                details={
                    "httpStatus": status,
                    "parseError": str(exc),
                    "responseText": sanitize_text(text, _RAW_EXCERPT_CHARS),
                },
            ) from exc

        vendor_code, vendor_message = _vendor_error(parsed)

        if status == 401:
            raise AdapterError.from_code(
                "E-5002",
                details={"apiError": {"code": vendor_code, "message": vendor_message}},
            )

        if not response.is_success:
            raise AdapterError.from_code(
                "E-3005",
                status=map_error_status(vendor_code, status),
                vendor_message=vendor_message or f"HTTP {status}",
                details={"code": vendor_code, "message": vendor_message},
            )

        if not isinstance(parsed, dict) or parsed.get("success") is not True:
            raise AdapterError.from_code(
                "E-3006",
                status=map_error_status(vendor_code, 502),
                expose=map_error_status(vendor_code, 0) in _EXPOSED_VENDOR_CODES,
                vendor_message=vendor_message or "Canada Tire API error",
                details={"action": action.value, "code": vendor_code, "message": vendor_message},
            )

        self._log.info("Canada Tire %s succeeded", action.value)
        return parsed.get("data")
