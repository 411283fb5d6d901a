"""User management service.

Lookups return None when the user is absent. Mutations raise
UserNotFoundError / UserAlreadyExistsError. Username and email uniqueness
is pre-checked here; the table's unique constraints catch concurrent writers,
and those violations surface as the same UserAlreadyExistsError.
"""

from datetime import UTC, datetime
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.errors import UserAlreadyExistsError, UserNotFoundError
from usermgmt.logger import async_log_timing, get_logger
from usermgmt.models import User
from usermgmt.pagination import PageRequest
from usermgmt.repositories import UserRepository
from usermgmt.schemas.user import UserBase, UserPageResponse, UserResponse, UserUpdate
from usermgmt.security import hash_password, verify_against_dummy, verify_password

logger = get_logger(__name__)


def to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


def _to_page(users: list[User], total: int, page_request: PageRequest) -> UserPageResponse:
    return UserPageResponse.build(
        items=[to_response(user) for user in users],
        total=total,
        page=page_request.page,
        size=page_request.size,
    )


async def _conflict_for(
    repo: UserRepository,
    username: str,
    email: str,
    exclude_id: UUID | None = None,
) -> UserAlreadyExistsError | None:
    """Return the conflict error for the first taken field, if any."""
    owner = await repo.find_by_username(username)
    if owner is not None and owner.id != exclude_id:
        return UserAlreadyExistsError("username", username)
    owner = await repo.find_by_email(email)
    if owner is not None and owner.id != exclude_id:
        return UserAlreadyExistsError("email", email)
    return None


async def _commit(
    db: AsyncSession,
    repo: UserRepository,
    username: str,
    email: str,
    exclude_id: UUID | None = None,
) -> None:
    """Commit, translating unique constraint violations into a conflict."""
    try:
        await db.flush()
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning(
            "Unique constraint rejected user write",
            username=username,
            error_type=type(exc.orig).__name__,
        )
        conflict = await _conflict_for(repo, username, email, exclude_id)
        # A violation that no longer reproduces still means a concurrent writer won
        raise (conflict or UserAlreadyExistsError("username or email", f"{username} / {email}")) from exc


async def create_user(db: AsyncSession, user_data: UserBase, password: str) -> UserResponse:
    repo = UserRepository(db)

    if await repo.exists_by_username(user_data.username):
        raise UserAlreadyExistsError("username", user_data.username)
    if await repo.exists_by_email(user_data.email):
        raise UserAlreadyExistsError("email", user_data.email)

    password_hash = await run_in_threadpool(hash_password, password)
    user = User(
        username=user_data.username,
        email=user_data.email,
        password_hash=password_hash,
        active=True,
    )
    repo.add(user)
    await _commit(db, repo, user.username, user.email)
    await db.refresh(user)

    logger.info("User created", user_id=str(user.id), username=user.username)
    return to_response(user)


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> UserResponse | None:
    user = await UserRepository(db).find_by_id(user_id)
    return to_response(user) if user else None


async def get_user_by_username(db: AsyncSession, username: str) -> UserResponse | None:
    user = await UserRepository(db).find_by_username(username)
    return to_response(user) if user else None


async def get_user_by_email(db: AsyncSession, email: str) -> UserResponse | None:
    user = await UserRepository(db).find_by_email(email)
    return to_response(user) if user else None


async def list_users(db: AsyncSession, page_request: PageRequest) -> UserPageResponse:
    """Every user, active or not."""
    users, total = await UserRepository(db).find_all(page_request)
    return _to_page(users, total, page_request)


async def list_active_users(db: AsyncSession, page_request: PageRequest) -> UserPageResponse:
    users, total = await UserRepository(db).find_active(page_request)
    return _to_page(users, total, page_request)


async def search_users(
    db: AsyncSession, query: str | None, page_request: PageRequest
) -> UserPageResponse:
    """Substring search over username and email of active users.

    A blank query is the same as list_active_users.
    """
    term = (query or "").strip()
    if not term:
        return await list_active_users(db, page_request)

    async with async_log_timing("search_users", logger=logger, level="debug", term=term) as ctx:
        users, total = await UserRepository(db).search_active(term, page_request)
        ctx["total"] = total
    return _to_page(users, total, page_request)


async def update_user(db: AsyncSession, user_id: UUID, changes: UserUpdate) -> UserResponse:
    repo = UserRepository(db)
    user = await repo.find_by_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)

    update_data = changes.model_dump(exclude_unset=True, exclude_none=True)
    new_username = update_data.get("username", user.username)
    new_email = update_data.get("email", user.email)

    # Comparing against the record's own values keeps a no-op rename legal
    if new_username != user.username and await repo.exists_by_username(new_username):
        raise UserAlreadyExistsError("username", new_username)
    if new_email != user.email and await repo.exists_by_email(new_email):
        raise UserAlreadyExistsError("email", new_email)

    user.username = new_username
    user.email = new_email
    user.updated_at = datetime.now(UTC)
    await _commit(db, repo, new_username, new_email, exclude_id=user.id)
    await db.refresh(user)

    logger.info("User updated", user_id=str(user.id), fields=sorted(update_data))
    return to_response(user)


async def delete_user(db: AsyncSession, user_id: UUID) -> None:
    repo = UserRepository(db)
    user = await repo.find_by_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)

    await repo.delete(user)
    await db.commit()
    logger.info("User deleted", user_id=str(user_id))


async def _set_active(db: AsyncSession, user_id: UUID, active: bool) -> None:
    user = await UserRepository(db).find_by_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)

    if user.active == active:
        logger.debug("User active flag unchanged", user_id=str(user_id), active=active)
        return

    user.active = active
    await db.commit()
    logger.info("User active flag changed", user_id=str(user_id), active=active)


async def deactivate_user(db: AsyncSession, user_id: UUID) -> None:
    await _set_active(db, user_id, False)


async def activate_user(db: AsyncSession, user_id: UUID) -> None:
    await _set_active(db, user_id, True)


async def exists_by_username(db: AsyncSession, username: str) -> bool:
    return await UserRepository(db).exists_by_username(username)


async def exists_by_email(db: AsyncSession, email: str) -> bool:
    return await UserRepository(db).exists_by_email(email)


async def authenticate(db: AsyncSession, username: str, password: str) -> User | None:
    """Resolve HTTP Basic credentials to an active user."""
    user = await UserRepository(db).find_by_username(username)
    if user is None or not user.active:
        await run_in_threadpool(verify_against_dummy, password)
        return None
    if not await run_in_threadpool(verify_password, password, user.password_hash):
        return None
    return user
