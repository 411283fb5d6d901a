"""Global exception handlers.

Every failure leaves the API as {status, message, timestamp, path}; rejected
payloads add field_errors. Domain errors map to fixed statuses here and
nowhere else. The catch-all never echoes exception text to the client.
"""

from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from usermgmt.errors import (
    UserAlreadyExistsError,
    UserNotFoundError,
    UserServiceError,
    ValidationFailedError,
)
from usermgmt.logger import get_logger
from usermgmt.schemas.errors import ErrorResponse, ValidationErrorResponse

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"
MALFORMED_BODY_MESSAGE = "Malformed request body"
VALIDATION_FAILED_MESSAGE = "Validation failed"

_DOMAIN_STATUS: dict[type[UserServiceError], int] = {
    UserNotFoundError: status.HTTP_404_NOT_FOUND,
    UserAlreadyExistsError: status.HTTP_409_CONFLICT,
    ValidationFailedError: status.HTTP_400_BAD_REQUEST,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(UserServiceError, user_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


def _error_body(status_code: int, message: str, request: Request) -> dict[str, Any]:
    return ErrorResponse(
        status=status_code,
        message=message,
        timestamp=datetime.now(UTC),
        path=request.url.path,
    ).model_dump(mode="json")


def _validation_body(
    message: str, field_errors: dict[str, str], request: Request
) -> dict[str, Any]:
    return ValidationErrorResponse(
        status=status.HTTP_400_BAD_REQUEST,
        message=message,
        timestamp=datetime.now(UTC),
        path=request.url.path,
        field_errors=field_errors,
    ).model_dump(mode="json")


def status_for(exc: UserServiceError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in _DOMAIN_STATUS:
            return _DOMAIN_STATUS[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def user_service_error_handler(request: Request, exc: UserServiceError) -> JSONResponse:
    status_code = status_for(exc)
    logger.warning(
        "Request rejected by user service",
        error_type=type(exc).__name__,
        status_code=status_code,
        error=exc.message,
    )
    if isinstance(exc, ValidationFailedError):
        content = _validation_body(exc.message, exc.field_errors, request)
    else:
        content = _error_body(status_code, exc.message, request)
    return JSONResponse(status_code=status_code, content=content)


def _field_name(loc: tuple[Any, ...]) -> str:
    # loc starts with the source ("body", "query", "path"); drop it when a field follows
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


def _reason(error: dict[str, Any]) -> str:
    message = str(error.get("msg", "Invalid value"))
    return message.removeprefix("Value error, ")


def collect_field_errors(errors: list[dict[str, Any]]) -> dict[str, str]:
    """Flatten pydantic errors into one reason per field (first one wins)."""
    field_errors: dict[str, str] = {}
    for error in errors:
        field_errors.setdefault(_field_name(tuple(error.get("loc", ()))), _reason(error))
    return field_errors


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = list(exc.errors())
    if any(error.get("type") == "json_invalid" for error in errors):
        logger.warning("Malformed request body")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(status.HTTP_400_BAD_REQUEST, MALFORMED_BODY_MESSAGE, request),
        )

    field_errors = collect_field_errors(errors)
    logger.warning("Request validation failed", fields=sorted(field_errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_validation_body(VALIDATION_FAILED_MESSAGE, field_errors, request),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, str(exc.detail), request),
        headers=getattr(exc, "headers", None),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE, request),
    )
