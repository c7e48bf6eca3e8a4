"""OAuth 1.0 request signing for NetSuite RESTlet calls.

Builds the ``Authorization: OAuth ...`` header the Canada Tire back office
expects on every RESTlet POST. The signature uses HMAC-SHA256 over the
standard OAuth signature base string, where the RESTlet ``script`` and
``deploy`` query parameters are signed alongside the oauth_* parameters.

Pure functions only: no I/O, no module state. Each call to
build_oauth_header() draws a fresh nonce and timestamp unless they are
injected (tests inject them to get deterministic signatures).
"""

import base64
import hashlib
import hmac
import re
import secrets
import time
from collections.abc import Iterable, Mapping
from urllib.parse import quote, urlsplit

from src.services.connection_types import OAuthCredentials, RestletRoute

OAUTH_SIGNATURE_METHOD = "HMAC-SHA256"
OAUTH_VERSION = "1.0"
HTTP_METHOD = "POST"

_NONCE_BYTES = 16  # 128 bits, hex-encoded to 32 chars

_SIGNATURE_PATTERN = re.compile(r'oauth_signature="[^"]*"', re.IGNORECASE)


def percent_encode(value: str) -> str:
    """Percent-encode a value per RFC 3986 for OAuth.

    Only the unreserved set ``A-Za-z0-9-._~`` survives. Unlike some URL
    encoders, ``! ' ( ) *`` are encoded and ``~`` is left as-is.

    Args:
        value: Raw string (UTF-8 encoded before escaping).

    Returns:
        Encoded string with uppercase hex escapes.
    """
    return quote(value, safe="~")


def generate_nonce() -> str:
    """Return a random 128-bit hex nonce."""
    return secrets.token_hex(_NONCE_BYTES)


def generate_timestamp() -> str:
    """Return the current Unix time in whole seconds."""
    return str(int(time.time()))


def normalize_url(request_url: str) -> str:
    """Reduce a request URL to ``scheme://host/path`` for signing.

    Args:
        request_url: Absolute URL, possibly with a query string.

    Returns:
        The URL without query string or fragment.

    Raises:
        ValueError: If the URL is not absolute.
    """
    parts = urlsplit(request_url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"request_url must be absolute, got {request_url!r}")
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


def build_parameter_string(
    params: Mapping[str, str] | Iterable[tuple[str, str]],
) -> str:
    """Encode and sort parameters into the OAuth parameter string.

    Args:
        params: Mapping or (key, value) pairs in any order.

    Returns:
        ``key=value`` pairs sorted by key and joined with ``&``.
    """
    pairs = params.items() if isinstance(params, Mapping) else params
    return "&".join(
        f"{percent_encode(key)}={percent_encode(value)}"
        for key, value in sorted(pairs)
    )


def build_signature_base_string(url: str, parameter_string: str) -> str:
    """Build ``POST&enc(url)&enc(params)``."""
    return "&".join([
        HTTP_METHOD,
        percent_encode(normalize_url(url)),
        percent_encode(parameter_string),
    ])


def build_signing_key(consumer_secret: str, token_secret: str) -> str:
    """Join the encoded secrets with a literal ampersand."""
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"


def sign_base_string(signing_key: str, base_string: str) -> str:
    """Return Base64(HMAC-SHA256(signing_key, base_string))."""
    digest = hmac.new(
        signing_key.encode("utf-8"),
        base_string.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def _require_credentials(credentials: OAuthCredentials, realm: str) -> None:
    missing = [
        name
        for name in ("consumer_key", "consumer_secret", "token_id", "token_secret")
        if not getattr(credentials, name, None)
    ]
    if not realm:
        missing.append("realm")
    if missing:
        raise ValueError(f"Missing OAuth signing inputs: {', '.join(missing)}")


def build_oauth_header(
    route: RestletRoute,
    credentials: OAuthCredentials,
    realm: str,
    request_url: str,
    *,
    nonce: str | None = None,
    timestamp: str | None = None,
) -> str:
    """Build the OAuth 1.0 Authorization header for a RESTlet POST.

    Args:
        route: RESTlet script/deploy identifiers (signed as parameters).
        credentials: Consumer and token credentials.
        realm: NetSuite account id. Sandbox accounts carry an ``_SB1``
            suffix and must match the environment of the base URL.
        request_url: Absolute RESTlet URL. Any query string is ignored for
            the signing base.
        nonce: Override for the random nonce (tests only).
        timestamp: Override for the Unix timestamp (tests only).

    Returns:
        Header value starting with ``OAuth ``.

    Raises:
        ValueError: If a credential field or the realm is empty, or the URL
            is not absolute.
    """
    _require_credentials(credentials, realm)
    oauth_nonce = nonce or generate_nonce()
    oauth_timestamp = timestamp or generate_timestamp()

    signed_params = {
        "deploy": route.deploy,
        "oauth_consumer_key": credentials.consumer_key,
        "oauth_nonce": oauth_nonce,
        "oauth_signature_method": OAUTH_SIGNATURE_METHOD,
        "oauth_timestamp": oauth_timestamp,
        "oauth_token": credentials.token_id,
        "oauth_version": OAUTH_VERSION,
        "script": route.script,
    }
    base_string = build_signature_base_string(
        request_url, build_parameter_string(signed_params)
    )
    signature = sign_base_string(
        build_signing_key(credentials.consumer_secret, credentials.token_secret),
        base_string,
    )

    header_params = [
        ("realm", realm),
        ("oauth_consumer_key", credentials.consumer_key),
        ("oauth_token", credentials.token_id),
        ("oauth_signature_method", OAUTH_SIGNATURE_METHOD),
        ("oauth_timestamp", oauth_timestamp),
        ("oauth_nonce", oauth_nonce),
        ("oauth_version", OAUTH_VERSION),
        ("oauth_signature", signature),
    ]
    return "OAuth " + ", ".join(
        f'{key}="{percent_encode(value)}"' for key, value in header_params
    )


def mask_oauth_signature(header: str) -> str:
    """Replace the signature value so the header can be logged."""
    return _SIGNATURE_PATTERN.sub('oauth_signature="***"', header)
