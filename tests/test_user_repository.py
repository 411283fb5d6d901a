"""Tests for the user repository queries."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import UserFactory
from usermgmt.pagination import PageRequest, SortDirection, SortSpec
from usermgmt.repositories import UserRepository


@pytest.mark.asyncio
async def test_find_by_username_and_email(db: AsyncSession):
    user = await UserFactory.create_async(db, username="alice", email="alice@example.com")
    repo = UserRepository(db)

    assert (await repo.find_by_username("alice")).id == user.id
    assert (await repo.find_by_email("alice@example.com")).id == user.id
    assert await repo.find_by_username("ALICE") is None


@pytest.mark.asyncio
async def test_find_active_filters_and_counts(db: AsyncSession):
    await UserFactory.create_async(db, username="alice")
    await UserFactory.create_async(db, username="bob", active=False)
    await UserFactory.create_async(db, username="carol")
    repo = UserRepository(db)

    users, total = await repo.find_active(PageRequest(size=1, sort=SortSpec("username", SortDirection.ASC)))

    assert total == 2
    assert [user.username for user in users] == ["alice"]


@pytest.mark.asyncio
async def test_find_all_orders_by_sort_field(db: AsyncSession):
    await UserFactory.create_async(db, username="bob", email="z@example.com")
    await UserFactory.create_async(db, username="alice", email="y@example.com", active=False)
    repo = UserRepository(db)

    users, total = await repo.find_all(PageRequest(sort=SortSpec("email", SortDirection.ASC)))

    assert total == 2
    assert [user.username for user in users] == ["alice", "bob"]


@pytest.mark.asyncio
async def test_search_active_matches_either_column(db: AsyncSession):
    await UserFactory.create_async(db, username="alice", email="alice@example.com")
    await UserFactory.create_async(db, username="bob", email="bob@wonderland.org")
    await UserFactory.create_async(db, username="carol", email="carol@example.com")
    repo = UserRepository(db)

    users, total = await repo.search_active("WONDER", PageRequest())
    assert total == 1
    assert users[0].username == "bob"

    users, total = await repo.search_active("example", PageRequest())
    assert total == 2


@pytest.mark.asyncio
async def test_search_escapes_like_wildcards(db: AsyncSession):
    await UserFactory.create_async(db, username="alice")
    repo = UserRepository(db)

    _, total = await repo.search_active("%", PageRequest())

    assert total == 0


@pytest.mark.asyncio
async def test_delete(db: AsyncSession):
    user = await UserFactory.create_async(db)
    repo = UserRepository(db)

    await repo.delete(user)
    await db.commit()

    assert await repo.find_by_id(user.id) is None
    assert await repo.exists_by_username(user.username) is False
