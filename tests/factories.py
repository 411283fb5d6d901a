"""Test data factories using factory_boy pattern.

Usage:
    # Simple creation
    user = UserFactory.build()

    # With overrides
    user = UserFactory.build(username="alice", active=False)

    # Create and commit to DB
    user = await UserFactory.create_async(db, username="alice")
"""

from datetime import UTC, datetime
from typing import TypeVar
from uuid import uuid4

import factory
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.models.user import User
from usermgmt.security import hash_password

T = TypeVar("T")

DEFAULT_PASSWORD = "password123"
# Hashed once per test run; bcrypt is deliberately slow
DEFAULT_PASSWORD_HASH = hash_password(DEFAULT_PASSWORD)


class AsyncFactoryMixin:
    """Mixin providing async database persistence for factories."""

    @classmethod
    async def create_async(cls, db: AsyncSession, **kwargs) -> T:
        """Create and commit so sessions on other connections can see the row."""
        instance = cls.build(**kwargs)
        db.add(instance)
        await db.commit()
        await db.refresh(instance)
        return instance


class UserFactory(factory.Factory, AsyncFactoryMixin):
    class Meta:
        model = User

    id = factory.LazyFunction(uuid4)
    username = factory.Sequence(lambda n: f"user{n:03d}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    password_hash = DEFAULT_PASSWORD_HASH
    active = True
    created_at = factory.LazyFunction(lambda: datetime.now(UTC))
    updated_at = factory.LazyFunction(lambda: datetime.now(UTC))
