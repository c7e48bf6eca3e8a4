"""Centralized adapter provider: single owner of the process-global adapter.

The API route imports the adapter accessor from HERE. This module owns the
singleton lifecycle. Never instantiate CanadaTireAdapter elsewhere in
request handling code.

The adapter is built lazily on first use from environment configuration
and reused for the life of the process. Construction only reads the
environment and allocates immutable objects, so the lock exists to keep
exactly one instance, not to protect any external resource.
"""

import logging
import threading

from src.services.canada_tire_adapter import CanadaTireAdapter
from src.services.runtime_credentials import load_canada_tire_config

logger = logging.getLogger(__name__)

# -- CanadaTireAdapter singleton --------------------------------------------
_canada_tire_adapter: CanadaTireAdapter | None = None
_canada_tire_lock = threading.Lock()


def get_canada_tire_adapter() -> CanadaTireAdapter:
    """Get or create the process-global CanadaTireAdapter.

    Thread-safe via double-checked locking. A failed build (missing
    configuration) is not cached, so the next call retries it.

    Returns:
        The shared CanadaTireAdapter instance.

    Raises:
        AdapterError: If required configuration is missing or invalid.
    """
    global _canada_tire_adapter
    if _canada_tire_adapter is not None:
        return _canada_tire_adapter
    with _canada_tire_lock:
        if _canada_tire_adapter is None:
            _canada_tire_adapter = CanadaTireAdapter(load_canada_tire_config())
            logger.info("CanadaTireAdapter singleton initialized")
    return _canada_tire_adapter


def get_canada_tire_adapter_if_built() -> CanadaTireAdapter | None:
    """Return the adapter if already built, None otherwise.

    Non-building peek used by the health endpoint.
    """
    return _canada_tire_adapter


def reset_adapters() -> None:
    """Drop the cached adapter. Used by tests and config reloads."""
    global _canada_tire_adapter
    with _canada_tire_lock:
        _canada_tire_adapter = None
