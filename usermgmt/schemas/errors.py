"""Error response schemas shared by every route."""

from datetime import datetime

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Structured error body."""

    status: int
    message: str
    timestamp: datetime
    path: str


class ValidationErrorResponse(ErrorResponse):
    """Error body for rejected payloads, keyed by offending field."""

    field_errors: dict[str, str]
