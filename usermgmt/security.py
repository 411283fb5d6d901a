"""Password hashing utilities.

bcrypt is CPU-bound; async callers run these through run_in_threadpool.
"""

from functools import lru_cache

import bcrypt

from usermgmt.config import settings
from usermgmt.logger import get_logger

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as exc:
        # Stored value is not a bcrypt hash
        logger.warning("Password hash check failed", error=str(exc))
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash at the configured cost, checked when no real account matches.

    Rejecting an unknown username then takes as long as a wrong password.
    """
    return hash_password("placeholder-password-never-matches")


def verify_against_dummy(plain_password: str) -> bool:
    """Spend one bcrypt check on a password that has no account behind it."""
    return verify_password(plain_password, dummy_password_hash())
