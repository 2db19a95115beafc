"""
Shared FastAPI dependencies.
"""

from functools import lru_cache

from recruit.db.session import get_db
from recruit.services.notification_service import PositionNotifier, build_transport

__all__ = ["get_db", "get_notifier"]


@lru_cache(maxsize=1)
def get_notifier() -> PositionNotifier:
    """Process-wide notifier using the configured mail transport."""
    return PositionNotifier(build_transport())
