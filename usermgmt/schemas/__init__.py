from usermgmt.schemas.base import PageResponse
from usermgmt.schemas.errors import ErrorResponse, ValidationErrorResponse
from usermgmt.schemas.health import HealthResponse, ProbeResponse
from usermgmt.schemas.user import (
    UserCreate,
    UserPageResponse,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "PageResponse",
    "ErrorResponse",
    "ValidationErrorResponse",
    "HealthResponse",
    "ProbeResponse",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserPageResponse",
]
