"""FastAPI route modules.

Exports all route modules for inclusion in the main application.
"""

from src.api.routes import distributor

__all__ = [
    "distributor",
]
