"""Pydantic schemas for users."""

from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from usermgmt.models.user import USERNAME_MAX_LENGTH
from usermgmt.schemas.base import PageResponse

USERNAME_MIN_LENGTH = 3
# bcrypt only looks at the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72

Username = Annotated[str, Field(min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)]


def _reject_blank_username(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("Username is required")
    return value


class UserBase(BaseModel):
    """Base user schema."""

    username: Username
    email: EmailStr

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        return _reject_blank_username(v)


class UserCreate(UserBase):
    """Schema for creating a user."""

    password: Annotated[str, Field(min_length=1, max_length=128)]

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return v


class UserUpdate(BaseModel):
    """Schema for updating a user. Omitted fields stay unchanged."""

    username: Username | None = None
    email: EmailStr | None = None

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str | None) -> str | None:
        return _reject_blank_username(v)


class UserResponse(BaseModel):
    """Schema for user response. Never carries the password hash.

    Stored values are echoed as-is; input rules apply only on the way in.
    """

    id: UUID
    username: str
    email: str
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def ensure_timezone_aware(cls, v: datetime) -> datetime:
        """Ensure datetime fields are timezone-aware."""
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


UserPageResponse = PageResponse[UserResponse]
