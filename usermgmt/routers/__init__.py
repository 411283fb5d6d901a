"""API routers package."""

from usermgmt.routers import health, users

__all__ = [
    "health",
    "users",
]
