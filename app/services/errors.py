"""Typed service errors. Each carries an ErrorKind that the HTTP layer maps to a status code."""

from enum import Enum


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    IN_USE = "in_use"
    VALIDATION = "validation"
    SYSTEM = "system"


class ServiceError(Exception):
    """Base for every error raised by the RBAC services."""

    kind: ErrorKind = ErrorKind.SYSTEM

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationError(ServiceError):
    """Missing, invalid or expired token, or a token whose user no longer exists."""

    kind = ErrorKind.AUTHENTICATION


class InvalidCredentialsError(AuthenticationError):
    """Wrong email or password. One message for both so accounts cannot be enumerated."""

    MESSAGE = "Invalid email or password!"

    def __init__(self) -> None:
        super().__init__(self.MESSAGE)


class AuthorizationError(ServiceError):
    """Authenticated caller lacks the required permission."""

    kind = ErrorKind.AUTHORIZATION


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(ServiceError):
    """A uniqueness key is already taken."""

    kind = ErrorKind.CONFLICT


class DuplicateEmailError(ConflictError):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"User with email '{email}' already exists")


class RoleExistsError(ConflictError):
    """Role name already taken; identical_permissions tells the two cases apart."""

    def __init__(self, name: str, identical_permissions: bool) -> None:
        self.name = name
        self.identical_permissions = identical_permissions
        if identical_permissions:
            message = f"Role with name '{name}' and identical permissions already exists"
        else:
            message = f"Role with name '{name}' already exists"
        super().__init__(message)


class InUseError(ServiceError):
    """Deletion blocked because the entity is still referenced."""

    kind = ErrorKind.IN_USE

    def __init__(self, message: str, user_count: int) -> None:
        self.user_count = user_count
        super().__init__(message)


class InvalidInputError(ServiceError):
    kind = ErrorKind.VALIDATION


class SystemFailureError(ServiceError):
    """Unexpected failure (database unavailable, constraint we did not anticipate)."""

    kind = ErrorKind.SYSTEM


class AuthSystemError(SystemFailureError):
    """Login could not be completed for reasons unrelated to the credentials."""

    def __init__(self) -> None:
        super().__init__("An error occurred during authentication")
