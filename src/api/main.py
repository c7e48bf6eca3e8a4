"""FastAPI application for the distributor gateway.

Provides the main application instance with the gateway router, the
health endpoint, and exception handlers that keep framework errors
(unknown paths, unsupported methods) inside the response envelope.
"""

import logging
import os
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

LOG_LEVEL_ENV = "DISTRIBUTOR_LOG_LEVEL"

# Configure logging to stdout for uvicorn to capture
_log_level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
logging.basicConfig(
    level=logging.getLevelNamesMapping().get(_log_level_name, logging.INFO),
    format="%(levelname)s:%(name)s:%(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

from src.api.middleware.cors import build_cors_headers
from src.api.routes import distributor
from src.api.schemas import ResponseEnvelope
from src.errors import AdapterError, render_adapter_error
from src.services.gateway_provider import get_canada_tire_adapter_if_built
from src.services.runtime_credentials import missing_env_vars

logger = logging.getLogger(__name__)

PACKAGE_NAME = "distributor-gateway"

_HTTP_ERROR_CODES = {404: "E-1006", 405: "E-1005"}


def _package_version() -> str:
    # Version from package metadata (matches pyproject.toml)
    try:
        return _pkg_version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "unknown"


app = FastAPI(
    title="Distributor Gateway",
    description="OAuth-signed gateway to the Canada Tire NetSuite RESTlets",
    version=_package_version(),
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors as a response envelope.

    Args:
        request: The incoming request.
        exc: The HTTP exception raised by routing.

    Returns:
        JSONResponse with ``{success: false, error: {code, message}}``.
    """
    code = _HTTP_ERROR_CODES.get(exc.status_code)
    if code:
        error = AdapterError.from_code(code, details={"path": request.url.path})
    else:
        error = AdapterError(message=str(exc.detail), status=exc.status_code, expose=True)
    status, message = render_adapter_error(error, logger)
    envelope = ResponseEnvelope.failure(status, message)
    return JSONResponse(
        status_code=status,
        content=envelope.to_content(),
        headers=build_cors_headers(request.headers.get("origin")),
    )


app.include_router(distributor.router)


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint.

    Reports whether the adapter could be built from the current
    environment without building it or contacting the vendor.

    Returns:
        Dictionary with status, version and configuration state.
    """
    missing = missing_env_vars()
    return {
        "status": "healthy" if not missing else "degraded",
        "version": _package_version(),
        "adapter_configured": not missing,
        "adapter_initialized": get_canada_tire_adapter_if_built() is not None,
    }
