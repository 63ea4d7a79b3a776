"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"
    PROFILE_ALREADY_EXISTS = "PROFILE_ALREADY_EXISTS"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Registration consistency errors (500)
    IDENTITY_ID_MISSING = "IDENTITY_ID_MISSING"
    ACTIVATION_CODE_COLLISION = "ACTIVATION_CODE_COLLISION"
    PROFILE_ID_COLLISION = "PROFILE_ID_COLLISION"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    IDENTITY_PROVIDER_ERROR = "IDENTITY_PROVIDER_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class PasswordMismatchError(AppException):
    """Password and repeated password differ."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.PASSWORD_MISMATCH,
            message="Password and repeat password must match",
            status_code=400,
        )


class ProfileAlreadyExistsError(AppException):
    """Conditional insert rejected because the profile id is taken."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_ALREADY_EXISTS,
            message=f"User id {profile_id} already exists",
            status_code=400,
            details={"profile_id": profile_id},
        )


class ProfileStoreError(AppException):
    """Profile store failed for a reason other than an id conflict."""

    def __init__(self, message: str = "User registration error") -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
            status_code=500,
        )


class MissingIdentityIdError(AppException):
    """The identity provider created an identity without a subject id.

    The external identity exists but cannot be linked to a profile and
    must be reconciled by an operator.
    """

    def __init__(self, username: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.IDENTITY_ID_MISSING,
            message="User registration failed: identity provider did not return a sub/id",
            status_code=500,
            details={"username": username} if username else None,
        )


# Collisions map to 500 rather than 409; see DESIGN.md before changing.
class ActivationCodeCollisionError(AppException):
    """A freshly generated activation code is already stored."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.ACTIVATION_CODE_COLLISION,
            message="User registration failed: activationCode collision",
            status_code=500,
        )


class ProfileIdCollisionError(AppException):
    """The provider's subject id already belongs to a stored profile."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_ID_COLLISION,
            message="User registration failed: User id collision",
            status_code=500,
            details={"profile_id": profile_id},
        )
