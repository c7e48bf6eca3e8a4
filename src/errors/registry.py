"""Error code registry with E-XXXX format codes.

This module defines the error catalog for the distributor gateway,
organizing errors into categories:
- E-1xxx: Request envelope errors
- E-2xxx: Payload validation errors
- E-3xxx: Vendor (Canada Tire) errors
- E-4xxx: System/internal errors
- E-5xxx: Vendor authentication errors

Each entry carries the HTTP status it renders with, whether its message is
safe to return to the caller, and an operator hint that only reaches logs.
Codes themselves are internal; the public envelope only carries the status.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    REQUEST = "request"  # E-1xxx: Envelope errors
    VALIDATION = "validation"  # E-2xxx: Payload validation errors
    VENDOR = "vendor"  # E-3xxx: Upstream errors
    SYSTEM = "system"  # E-4xxx: System/internal errors
    AUTH = "auth"  # E-5xxx: Vendor authentication errors


@dataclass(frozen=True)
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for logs.
        message_template: Message with {placeholders} for context.
        status: HTTP status the error renders with.
        expose: Whether the formatted message may be returned to callers.
        remediation: Operator hint, logged but never returned.
    """

    code: str
    category: ErrorCategory
    title: str
    message_template: str
    status: int
    expose: bool
    remediation: str = ""


ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Request envelope errors (E-1xxx)
    "E-1001": ErrorCode(
        code="E-1001",
        category=ErrorCategory.REQUEST,
        title="Invalid JSON",
        message_template="Request body must be valid JSON",
        status=400,
        expose=True,
    ),
    "E-1002": ErrorCode(
        code="E-1002",
        category=ErrorCategory.REQUEST,
        title="Invalid Envelope",
        message_template="Request body must be an object",
        status=400,
        expose=True,
    ),
    "E-1003": ErrorCode(
        code="E-1003",
        category=ErrorCategory.REQUEST,
        title="Unsupported Vendor",
        message_template="Unsupported vendor",
        status=400,
        expose=True,
    ),
    "E-1004": ErrorCode(
        code="E-1004",
        category=ErrorCategory.REQUEST,
        title="Unsupported Action",
        message_template="Unsupported action",
        status=400,
        expose=True,
    ),
    "E-1005": ErrorCode(
        code="E-1005",
        category=ErrorCategory.REQUEST,
        title="Method Not Allowed",
        message_template="Method Not Allowed",
        status=405,
        expose=True,
    ),
    "E-1006": ErrorCode(
        code="E-1006",
        category=ErrorCategory.REQUEST,
        title="Not Found",
        message_template="Not Found",
        status=404,
        expose=True,
    ),
    # Validation errors (E-2xxx)
    "E-2001": ErrorCode(
        code="E-2001",
        category=ErrorCategory.VALIDATION,
        title="Invalid Payload",
        message_template="{message}",
        status=400,
        expose=True,
    ),
    # Vendor errors (E-3xxx)
    "E-3001": ErrorCode(
        code="E-3001",
        category=ErrorCategory.VENDOR,
        title="Vendor Timeout",
        message_template="Canada Tire API request timed out",
        status=504,
        expose=True,
        remediation="The RESTlet did not answer within {timeout_ms} ms. Retry later.",
    ),
    "E-3002": ErrorCode(
        code="E-3002",
        category=ErrorCategory.VENDOR,
        title="Vendor Unreachable",
        message_template="Unexpected error while contacting Canada Tire",
        status=502,
        expose=False,
        remediation="Check network egress and CANADA_TIRE_BASE_URL.",
    ),
    "E-3003": ErrorCode(
        code="E-3003",
        category=ErrorCategory.VENDOR,
        title="Empty Vendor Response",
        message_template="Canada Tire API returned empty response",
        status=502,
        expose=True,
    ),
    "E-3004": ErrorCode(
        code="E-3004",
        category=ErrorCategory.VENDOR,
        title="Malformed Vendor Response",
        message_template="Canada Tire API returned malformed JSON",
        status=502,
        expose=True,
    ),
    "E-3005": ErrorCode(
        code="E-3005",
        category=ErrorCategory.VENDOR,
        title="Vendor HTTP Error",
        message_template="{vendor_message}",
        status=502,
        expose=True,
    ),
    "E-3006": ErrorCode(
        code="E-3006",
        category=ErrorCategory.VENDOR,
        title="Vendor Rejected Request",
        message_template="{vendor_message}",
        status=502,
        expose=False,
    ),
    # System errors (E-4xxx)
    "E-4001": ErrorCode(
        code="E-4001",
        category=ErrorCategory.SYSTEM,
        title="Missing Configuration",
        message_template="Missing environment variable: {name}",
        status=500,
        expose=False,
        remediation="Set {name} in the gateway environment and restart.",
    ),
    "E-4002": ErrorCode(
        code="E-4002",
        category=ErrorCategory.SYSTEM,
        title="Invalid Configuration",
        message_template="Invalid value provided for {name}",
        status=500,
        expose=False,
        remediation="Correct {name} in the gateway environment and restart.",
    ),
    "E-4003": ErrorCode(
        code="E-4003",
        category=ErrorCategory.SYSTEM,
        title="Unexpected Error",
        message_template="An unexpected error occurred.",
        status=500,
        expose=False,
    ),
    # Auth errors (E-5xxx)
    "E-5001": ErrorCode(
        code="E-5001",
        category=ErrorCategory.AUTH,
        title="Vendor Returned HTML",
        message_template=(
            "Canada Tire API returned HTML instead of JSON "
            "(OAuth authentication likely failed)"
        ),
        status=401,
        expose=True,
        remediation=(
            "Check OAuth credentials (consumer key/secret, token ID/secret) "
            "and realm configuration"
        ),
    ),
    "E-5002": ErrorCode(
        code="E-5002",
        category=ErrorCategory.AUTH,
        title="Vendor Authentication Failed",
        message_template="OAuth authentication failed",
        status=401,
        expose=True,
        remediation="Verify consumer key, consumer secret, token ID, token secret, and realm",
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Get error definition by code.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all errors in a category.

    Args:
        category: The error category to filter by.

    Returns:
        List of ErrorCode objects in the specified category.
    """
    return [e for e in ERROR_REGISTRY.values() if e.category == category]
