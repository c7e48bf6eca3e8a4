"""Payload validation for Canada Tire RESTlet actions.

The RESTlets accept almost anything and fail in unhelpful ways, so every
payload is checked here before a request is signed. Each validator returns
the normalized body fragment to send; any violation raises a 400
AdapterError (via ensure/fail) whose message names the offending field.

JSON arrives as plain Python values, so type checks are explicit:
``bool`` is rejected wherever a number is expected, and integral floats
(``2.0``) count as integers.
"""

import math
from typing import Any

from src.errors import ensure, fail

NUMERIC_FILTERS = ("width", "rimSize", "aspectRatio")
STRING_FILTERS = ("size", "brand", "searchKey")
BOOLEAN_FILTERS = ("isWinter", "isRunFlat", "isTire", "isWheel")

FULL_ADDRESS_FIELDS = ("addr1", "province", "postalCode", "country")
OPTIONAL_ADDRESS_FIELDS = ("addr2", "attention", "addressee", "city")
OPTIONAL_ORDER_FIELDS = ("poNumber", "email", "phone")


# --- Scalar normalizers ---


def normalize_string(value: Any, field: str) -> str | None:
    """Return the stripped string, or None when absent or blank."""
    if value is None:
        return None
    ensure(isinstance(value, str), f"{field} must be a string")
    trimmed = value.strip()
    return trimmed or None


def normalize_number(value: Any, field: str) -> int | float | None:
    """Return a finite number, or None when absent."""
    if value is None:
        return None
    message = f"{field} must be a finite number"
    ensure(isinstance(value, (int, float)) and not isinstance(value, bool), message)
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # int too large to convert to float
        finite = False
    ensure(finite, message)
    return value


def normalize_integer(value: Any, field: str) -> int | None:
    """Return an int, or None when absent."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    ensure(
        isinstance(value, int) and not isinstance(value, bool),
        f"{field} must be an integer",
    )
    return value


def normalize_positive_integer(value: Any, field: str) -> int | None:
    """Return an int greater than zero, or None when absent."""
    number = normalize_integer(value, field)
    if number is not None:
        ensure(number > 0, f"{field} must be a positive integer")
    return number


def normalize_boolean(value: Any, field: str) -> bool | None:
    """Accept True/False/None; reject every other type."""
    if value is None:
        return None
    ensure(isinstance(value, bool), f"{field} must be a boolean or null")
    return value


def require_object(value: Any, field: str) -> dict[str, Any]:
    """Return ``value`` if it is a JSON object, else raise."""
    ensure(isinstance(value, dict), f"{field} must be an object")
    return value


# --- Product search ---


def validate_filters(raw: Any) -> dict[str, Any]:
    """Validate and normalize product search filters.

    Args:
        raw: The caller's ``filters`` value, possibly None.

    Returns:
        Normalized filters; empty when nothing usable was provided.
        Unknown keys are dropped.
    """
    if raw is None:
        return {}
    raw = require_object(raw, "filters")
    filters: dict[str, Any] = {}

    for name in NUMERIC_FILTERS:
        number = normalize_number(raw.get(name), f"filters.{name}")
        if number is not None:
            filters[name] = number

    for name in STRING_FILTERS:
        text = normalize_string(raw.get(name), f"filters.{name}")
        if text:
            filters[name] = text

    if "partNumber" in raw and raw["partNumber"] is not None:
        parts = raw["partNumber"]
        ensure(
            isinstance(parts, list) and parts,
            "filters.partNumber must be a non-empty array",
        )
        normalized = []
        for index, value in enumerate(parts):
            part = normalize_string(value, f"filters.partNumber[{index}]")
            ensure(part, f"filters.partNumber[{index}] must be a non-empty string")
            normalized.append(part)
        filters["partNumber"] = normalized

    for name in BOOLEAN_FILTERS:
        # Explicit null is meaningful to the RESTlet ("either"), omitted is not
        if name in raw:
            filters[name] = normalize_boolean(raw[name], f"filters.{name}")

    page = normalize_positive_integer(raw.get("page"), "filters.page")
    if page is not None:
        filters["page"] = page

    return filters


# --- Shipping ---


def normalize_shipping(raw: Any, field: str) -> dict[str, Any]:
    """Validate a shipping block and reduce it to one addressing mode.

    Either a saved ship-to ``addrId`` or a full address is required. When
    ``addrId`` is present the full-address fields are dropped, since the
    RESTlet treats the two as mutually exclusive.

    Args:
        raw: Caller-supplied shipping object.
        field: Field path used in error messages.

    Returns:
        Normalized shipping dict.
    """
    shipping = require_object(raw, field)
    normalized: dict[str, Any] = {}

    addr_id = normalize_positive_integer(shipping.get("addrId"), f"{field}.addrId")
    if addr_id is not None:
        normalized["addrId"] = addr_id
    else:
        address = {
            name: normalize_string(shipping.get(name), f"{field}.{name}")
            for name in FULL_ADDRESS_FIELDS
        }
        missing = [name for name, value in address.items() if not value]
        if missing:
            fail(
                f"{field} requires addrId or full address fields "
                f"(missing: {', '.join(missing)})"
            )
        address["province"] = address["province"].upper()
        address["country"] = address["country"].upper()
        normalized.update(address)

    for name in OPTIONAL_ADDRESS_FIELDS:
        text = normalize_string(shipping.get(name), f"{field}.{name}")
        if text:
            normalized[name] = text

    return normalized


# --- Orders ---


def normalize_order_items(raw: Any) -> list[dict[str, Any]]:
    """Validate order lines: non-empty part numbers, positive quantities."""
    ensure(
        isinstance(raw, list) and raw,
        "orderDetails.items must be a non-empty array",
    )
    items = []
    for index, entry in enumerate(raw):
        field = f"orderDetails.items[{index}]"
        entry = require_object(entry, field)
        part_number = normalize_string(entry.get("partNumber"), f"{field}.partNumber")
        ensure(part_number, f"{field}.partNumber must be provided")
        quantity = normalize_positive_integer(entry.get("quantity"), f"{field}.quantity")
        ensure(quantity is not None, f"{field}.quantity must be a positive integer")
        items.append({"partNumber": part_number, "quantity": quantity})
    return items


def validate_order_details(raw: Any) -> dict[str, Any]:
    """Validate a submitOrder payload's ``orderDetails``.

    Args:
        raw: Caller-supplied order details.

    Returns:
        Normalized order details ready for the RESTlet body.
    """
    ensure(raw is not None, "orderDetails must be provided")
    details = require_object(raw, "orderDetails")

    location = normalize_string(details.get("location"), "orderDetails.location")
    ensure(location, "orderDetails.location is required")
    ensure(details.get("shipping") is not None, "orderDetails.shipping is required")
    shipping = normalize_shipping(details["shipping"], "orderDetails.shipping")
    items = normalize_order_items(details.get("items"))

    order: dict[str, Any] = {
        "location": location,
        "shipping": shipping,
        "items": items,
    }
    for name in OPTIONAL_ORDER_FIELDS:
        text = normalize_string(details.get(name), f"orderDetails.{name}")
        if text:
            order[name] = text
    return order


def validate_address_update(so_id: Any, shipping: Any) -> dict[str, Any]:
    """Validate an updateOrderAddress request.

    Args:
        so_id: Sales order internal id.
        shipping: Replacement shipping block.

    Returns:
        ``{"soId": ..., "shipping": ...}`` for the ``orderDetails`` body key.
    """
    normalized_id = normalize_positive_integer(so_id, "orderDetails.soId")
    ensure(normalized_id is not None, "orderDetails.soId must be a positive integer")
    ensure(shipping is not None, "orderDetails.shipping is required")
    return {
        "soId": normalized_id,
        "shipping": normalize_shipping(shipping, "orderDetails.shipping"),
    }
