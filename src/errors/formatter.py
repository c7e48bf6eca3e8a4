"""Gateway error type and rendering utilities.

This module provides:
- AdapterError exception class carrying status, exposure and detail
- ensure() for caller-facing validation failures
- Rendering helpers that turn any failure into (status, public message)
  while keeping hidden detail in server-side logs

Rendering lives here, not in the API layer, so sibling validators that
share the response envelope (e.g. a payment module) render identically.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, NoReturn

from src.errors.registry import get_error
from src.utils.redaction import redact_for_logging

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = get_error("E-4003").message_template


@dataclass
class AdapterError(Exception):
    """Gateway failure with HTTP status and exposure policy.

    Attributes:
        message: Human-readable message. Returned verbatim only when
            ``expose`` is True.
        status: HTTP status the error renders with.
        expose: Whether ``message`` is safe to send to the caller.
        details: Extra context for logs only, never rendered.
        code: Registry code in E-XXXX format, if built from the registry.
    """

    message: str
    status: int = 500
    expose: bool = False
    details: dict[str, Any] = field(default_factory=dict)
    code: str | None = None

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.code:
            return f"{self.code}: {self.message}"
        return self.message

    @property
    def public_message(self) -> str:
        """Message that may be returned to the caller."""
        return self.message if self.expose else GENERIC_ERROR_MESSAGE

    @classmethod
    def from_code(
        cls,
        code: str,
        *,
        status: int | None = None,
        expose: bool | None = None,
        details: dict[str, Any] | None = None,
        **context: object,
    ) -> "AdapterError":
        """Create error from registry code with context substitution.

        Args:
            code: Error code in E-XXXX format.
            status: Override for the registry status (vendor-mapped codes).
            expose: Override for the registry exposure flag.
            details: Log-only context. The registry remediation, formatted
                with ``context``, is added under ``hint``.
            **context: Values for message template substitution.

        Returns:
            AdapterError instance with formatted message.
        """
        details = dict(details or {})
        error_def = get_error(code)
        if not error_def:
            return cls(
                message=f"Unknown error: {code}",
                status=status or 500,
                expose=bool(expose),
                details=details,
                code=code,
            )

        message = _format_template(error_def.message_template, context)
        if error_def.remediation:
            details.setdefault(
                "hint", _format_template(error_def.remediation, context)
            )

        return cls(
            message=message,
            status=status if status is not None else error_def.status,
            expose=error_def.expose if expose is None else expose,
            details=details,
            code=error_def.code,
        )


def _format_template(template: str, context: dict[str, object]) -> str:
    try:
        return template.format(**context)
    except (KeyError, IndexError):
        # Keep template if some placeholders are missing
        return template


def ensure(condition: object, message: str) -> None:
    """Raise a caller-facing 400 AdapterError unless ``condition`` holds.

    Args:
        condition: Value checked for truthiness.
        message: Message naming the offending field.

    Raises:
        AdapterError: E-2001, status 400, exposed.
    """
    if not condition:
        fail(message)


def fail(message: str) -> NoReturn:
    """Raise a caller-facing 400 AdapterError unconditionally."""
    raise AdapterError.from_code("E-2001", message=message)


def format_error(error: AdapterError) -> str:
    """Format error for server-side logs.

    Args:
        error: The AdapterError to format.

    Returns:
        Multi-line string with status, exposure, and redacted details.
    """
    lines = [f"{error} (status={error.status}, exposed={error.expose})"]
    if error.details:
        safe = redact_for_logging(error.details)
        for key, value in safe.items():
            lines.append(f"  {key}: {value}")
    return "\n".join(lines)


def render_adapter_error(
    error: AdapterError,
    log: logging.Logger | None = None,
) -> tuple[int, str]:
    """Resolve an AdapterError into its HTTP status and public message.

    Hidden errors are logged at ERROR level with full detail; exposed
    errors at INFO since they describe the caller's own request.

    Args:
        error: The failure to render.
        log: Logger to write to, defaults to this module's logger.

    Returns:
        Tuple of (status, message safe for the response body).
    """
    log = log or logger
    if error.expose:
        log.info("Gateway request rejected: %s", format_error(error))
    else:
        log.error("Gateway adapter error: %s", format_error(error))
    return error.status, error.public_message


def render_unexpected_error(
    exc: BaseException,
    log: logging.Logger | None = None,
) -> tuple[int, str]:
    """Resolve an unanticipated exception into a generic 500.

    Args:
        exc: The exception that escaped the handler.
        log: Logger to write to, defaults to this module's logger.

    Returns:
        Tuple of (500, generic message).
    """
    log = log or logger
    log.error("Gateway handler crashed: %r", exc, exc_info=exc)
    return 500, GENERIC_ERROR_MESSAGE
