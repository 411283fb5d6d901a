"""Domain error hierarchy for user management.

Lookups signal absence with None; every failure is one of these exceptions.
The HTTP layer maps each class to a fixed status in api/error_handlers.py.
"""


class UserServiceError(Exception):
    """Base exception for user service errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UserNotFoundError(UserServiceError):
    """The targeted user does not exist."""

    def __init__(self, value: object, field: str = "id") -> None:
        super().__init__(f"User not found with {field}: {value}")
        self.field = field
        self.value = value


class UserAlreadyExistsError(UserServiceError):
    """A username or email is already taken by another user."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"{field.capitalize()} already exists: {value}")
        self.field = field
        self.value = value


class ValidationFailedError(UserServiceError):
    """Input passed request binding but is still unacceptable."""

    def __init__(self, message: str, field_errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.field_errors = field_errors or {}
