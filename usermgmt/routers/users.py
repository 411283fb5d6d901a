"""User management API router."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Query, status

from usermgmt.config import settings
from usermgmt.deps import DbSession
from usermgmt.errors import UserNotFoundError
from usermgmt.pagination import PageRequest, SortSpec
from usermgmt.schemas import (
    ErrorResponse,
    UserCreate,
    UserPageResponse,
    UserResponse,
    UserUpdate,
    ValidationErrorResponse,
)
from usermgmt.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])

# Keeps page * size within a signed 64-bit OFFSET
MAX_PAGE_INDEX = (2**63 - 1) // settings.max_page_size

NOT_FOUND: dict[int | str, dict[str, Any]] = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "User not found"},
}
INVALID: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse, "description": "Invalid input data"},
}
CONFLICT: dict[int | str, dict[str, Any]] = {
    status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "Username or email already exists"},
}


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
    responses={**INVALID, **CONFLICT},
)
async def create_user(user_data: UserCreate, db: DbSession) -> UserResponse:
    """Create a new active user; the password is stored only as a bcrypt hash."""
    return await user_service.create_user(db, user_data, user_data.password)


@router.get("", response_model=UserPageResponse, summary="List or search users", responses=INVALID)
async def list_users(
    db: DbSession,
    search: str | None = Query(None, description="Substring matched against username or email"),
    page: int = Query(0, ge=0, le=MAX_PAGE_INDEX, description="Zero-based page index"),
    size: int = Query(
        settings.default_page_size, ge=1, le=settings.max_page_size, description="Page size"
    ),
    sort: str | None = Query(None, description="Sort as field[,asc|desc], default created_at,desc"),
    include_inactive: bool = Query(False, description="Include deactivated users when not searching"),
) -> UserPageResponse:
    """Page through active users, or search them when `search` is non-blank."""
    page_request = PageRequest(page=page, size=size, sort=SortSpec.parse(sort))

    if search is not None and search.strip():
        return await user_service.search_users(db, search.strip(), page_request)
    if include_inactive:
        return await user_service.list_users(db, page_request)
    return await user_service.list_active_users(db, page_request)


@router.get(
    "/username/{username}",
    response_model=UserResponse,
    summary="Get user by username",
    responses=NOT_FOUND,
)
async def get_user_by_username(username: str, db: DbSession) -> UserResponse:
    user = await user_service.get_user_by_username(db, username)
    if user is None:
        raise UserNotFoundError(username, field="username")
    return user


@router.get(
    "/email/{email}",
    response_model=UserResponse,
    summary="Get user by email",
    responses=NOT_FOUND,
)
async def get_user_by_email(email: str, db: DbSession) -> UserResponse:
    user = await user_service.get_user_by_email(db, email)
    if user is None:
        raise UserNotFoundError(email, field="email")
    return user


@router.get("/{user_id}", response_model=UserResponse, summary="Get user by ID", responses=NOT_FOUND)
async def get_user(user_id: UUID, db: DbSession) -> UserResponse:
    user = await user_service.get_user_by_id(db, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    responses={**INVALID, **NOT_FOUND, **CONFLICT},
)
async def update_user(user_id: UUID, user_data: UserUpdate, db: DbSession) -> UserResponse:
    """Update username and/or email; omitted fields keep their value."""
    return await user_service.update_user(db, user_id, user_data)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    responses=NOT_FOUND,
)
async def delete_user(user_id: UUID, db: DbSession) -> None:
    """Permanently delete a user."""
    await user_service.delete_user(db, user_id)


@router.patch(
    "/{user_id}/deactivate",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate user",
    responses=NOT_FOUND,
)
async def deactivate_user(user_id: UUID, db: DbSession) -> None:
    await user_service.deactivate_user(db, user_id)


@router.patch(
    "/{user_id}/activate",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Activate user",
    responses=NOT_FOUND,
)
async def activate_user(user_id: UUID, db: DbSession) -> None:
    await user_service.activate_user(db, user_id)
