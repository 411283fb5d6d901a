"""User model."""

from sqlalchemy import Boolean, String, true
from sqlalchemy.orm import Mapped, mapped_column

from usermgmt.database import Base
from usermgmt.models.base import TimestampMixin, UUIDMixin

USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 255


class User(UUIDMixin, TimestampMixin, Base):
    """Application user account.

    username and email carry unique constraints; the service checks them
    first, but the constraint is what holds under concurrent writes.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(USERNAME_MAX_LENGTH), unique=True, index=True, nullable=False
    )
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH), unique=True, index=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    def __repr__(self) -> str:
        return f"<User {self.username} active={self.active}>"
