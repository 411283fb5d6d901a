"""SQLAlchemy models package."""

from usermgmt.models.base import TimestampMixin, UUIDMixin
from usermgmt.models.user import User

__all__ = [
    "TimestampMixin",
    "UUIDMixin",
    "User",
]
