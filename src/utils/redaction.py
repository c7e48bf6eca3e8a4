"""Secret redaction for gateway logs and error details.

Two layers: ``redact_for_logging`` walks structured values and masks
whole values by key, while ``sanitize_text`` scrubs ``key=value`` style
secrets out of free text. Raw vendor excerpts (``responseText``,
``responsePreview``) are strings inside a details dict, so the walker
routes them through ``sanitize_text`` as well.
"""

import re
from typing import Any

# Substring patterns matched case-insensitively against dict keys
_DEFAULT_SENSITIVE_PATTERNS = frozenset({
    "secret", "token", "authorization", "api_key", "apikey", "password",
    "consumer_key", "consumerkey", "signature",
})

# Keys whose entire value is redacted (regardless of content type)
_CONTAINER_KEYS = frozenset({"credentials", "headers"})

# Keys holding raw vendor text; string values are scrubbed, not dropped
_FREE_TEXT_KEYS = frozenset({"responsetext", "responsepreview", "parseerror"})

_REDACTED = "***REDACTED***"

# Sensitive pairs in free text: "key": "value", key="quoted", key=value.
_SENSITIVE_KEYWORDS = (
    r"secret|token|password|api_?key|consumer_?key|customer_?token|"
    r"oauth_signature|authorization"
)
_SENSITIVE_VALUE_PATTERNS = re.compile(
    r"(?i)"
    r"(?:"
    # JSON-style, key may carry a prefix (customerToken)
    r'"\w*(?:' + _SENSITIVE_KEYWORDS + r')\w*"\s*:\s*"[^"]*"'
    r"|"
    r"(?:" + _SENSITIVE_KEYWORDS + r")\s*[=:]\s*\"[^\"]*\""
    r"|"
    # unquoted, up to whitespace or comma
    r"(?:" + _SENSITIVE_KEYWORDS + r")\s*[=:]\s*[^\s,]+"
    r")",
)


def sanitize_text(text: str | None, max_length: int = 2000) -> str | None:
    """Redact sensitive-looking pairs in free text and truncate it.

    Args:
        text: Raw text (None passes through).
        max_length: Maximum number of characters kept from the input.

    Returns:
        Sanitized and truncated text, or None.
    """
    if text is None:
        return None
    excerpt = text[:max_length]
    return _SENSITIVE_VALUE_PATTERNS.sub(_REDACTED, excerpt)


def _redacts_whole_value(key: str, sensitive_patterns: frozenset[str]) -> bool:
    key_lower = key.lower()
    if key_lower in _CONTAINER_KEYS:
        return True
    return any(pattern in key_lower for pattern in sensitive_patterns)


def _redact_value(key: str, value: Any, sensitive_patterns: frozenset[str]) -> Any:
    if _redacts_whole_value(key, sensitive_patterns):
        return _REDACTED
    if isinstance(value, str) and key.lower() in _FREE_TEXT_KEYS:
        return sanitize_text(value, max_length=len(value))
    if isinstance(value, dict):
        return redact_for_logging(value, sensitive_patterns)
    if isinstance(value, (list, tuple)):
        return [_redact_value(key, item, sensitive_patterns) for item in value]
    return value


def redact_for_logging(
    obj: dict,
    sensitive_patterns: frozenset[str] = _DEFAULT_SENSITIVE_PATTERNS,
) -> dict:
    """Return a copy of ``obj`` that is safe to log.

    Values under sensitive or container keys become ``***REDACTED***``.
    Free-text excerpt keys keep their text with secret pairs scrubbed.
    Nested dicts and lists are walked; ``obj`` itself is not mutated.

    Args:
        obj: Dict to redact.
        sensitive_patterns: Case-insensitive substrings marking a key as
            sensitive.
    """
    return {
        key: _redact_value(str(key), value, sensitive_patterns)
        for key, value in obj.items()
    }
