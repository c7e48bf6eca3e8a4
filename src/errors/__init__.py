"""Error handling framework for the distributor gateway.

This package provides:
- Error code registry with E-XXXX format codes
- AdapterError with status/exposure policy
- Rendering helpers that keep internal detail out of responses

Error categories:
- E-1xxx: Request envelope errors
- E-2xxx: Payload validation errors
- E-3xxx: Vendor errors
- E-4xxx: System/internal errors
- E-5xxx: Vendor authentication errors
"""

from src.errors.registry import (
    ErrorCategory,
    ErrorCode,
    ERROR_REGISTRY,
    get_error,
    get_errors_by_category,
)
from src.errors.formatter import (
    GENERIC_ERROR_MESSAGE,
    AdapterError,
    ensure,
    fail,
    format_error,
    render_adapter_error,
    render_unexpected_error,
)

__all__ = [
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # Formatter
    "AdapterError",
    "GENERIC_ERROR_MESSAGE",
    "ensure",
    "fail",
    "format_error",
    "render_adapter_error",
    "render_unexpected_error",
]
