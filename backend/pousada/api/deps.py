"""Shared API dependencies: single import point for all routers.

Re-exports the database session and provides the property-local clock so
that tests can pin "now" through ``app.dependency_overrides``::

    from pousada.api.deps import get_db, get_now
"""

from datetime import datetime

from pousada.config import settings
from pousada.database import get_db


def get_now() -> datetime:
    """Current wall-clock time in the property's timezone."""
    return settings.now()


__all__ = [
    "get_db",
    "get_now",
]
