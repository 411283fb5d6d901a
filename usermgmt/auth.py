"""HTTP Basic authentication gated by the access policy."""

from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.access_policy import is_public
from usermgmt.database import get_db
from usermgmt.logger import get_logger
from usermgmt.services import user_service

logger = get_logger(__name__)

# Called by hand after the policy check; public routes never parse the header
basic_scheme = HTTPBasic(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Basic"},
    )


async def require_authorized(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> UUID | None:
    """Let public routes through; resolve Basic credentials for the rest.

    Returns the authenticated user's id, or None on a public route.
    """
    if is_public(request.method, request.url.path):
        return None

    # Raises 401 itself for a header that is not valid Basic
    credentials = await basic_scheme(request)
    if credentials is None:
        raise _unauthorized("Authentication required")

    user = await user_service.authenticate(db, credentials.username, credentials.password)
    if user is None:
        logger.warning("Basic authentication failed", username=credentials.username)
        raise _unauthorized("Invalid credentials")

    return user.id
