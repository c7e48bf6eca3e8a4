"""CORS headers for the distributor endpoint.

Starlette's CORSMiddleware answers a pre-flight itself with a 200 and a
plain-text "OK" body, and decorates other responses only when the request
carries an Origin. The gateway answers OPTIONS with a bare 204 from the
route and attaches the same header set to every envelope it renders,
including the error, 404 and 405 envelopes from the app's exception
handler. The caller's Origin is echoed, falling back to ``*`` for
non-browser clients.
"""

ALLOWED_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization, X-Client-Info, Apikey"


def build_cors_headers(origin: str | None) -> dict[str, str]:
    """Build the CORS response headers for a request.

    Args:
        origin: The request's Origin header, if any.

    Returns:
        Header dict to merge into the response.
    """
    headers = {
        "Access-Control-Allow-Origin": origin or "*",
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }
    if origin:
        headers["Vary"] = "Origin"
    return headers
