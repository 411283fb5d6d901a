"""Data access layer."""

from usermgmt.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]
