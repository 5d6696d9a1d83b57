"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    GAME_ACCESS_DENIED = "GAME_ACCESS_DENIED"
    ADMIN_PROFILE_PROTECTED = "ADMIN_PROFILE_PROTECTED"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    NO_GAME_SELECTED = "NO_GAME_SELECTED"

    # Validation errors (400/422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    GAME_ALREADY_SELECTED = "GAME_ALREADY_SELECTED"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500/503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


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


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class ProfileNotFoundError(AppException):
    """The caller has not completed their profile yet."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found. Complete your profile to continue",
            status_code=404,
            details={"user_id": user_id},
        )


class UserNotFoundError(AppException):
    """Target user of an admin operation does not exist."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class GameAccessDeniedError(AppException):
    """User tried to select a game they have not been granted."""

    def __init__(self, game: str) -> None:
        super().__init__(
            error_code=ErrorCode.GAME_ACCESS_DENIED,
            message=f"You do not have access to the '{game}' game yet",
            status_code=403,
            details={"game": game},
        )


class GameAlreadySelectedError(AppException):
    """Selection is locked until an administrator resets it."""

    def __init__(self, current_game: str) -> None:
        super().__init__(
            error_code=ErrorCode.GAME_ALREADY_SELECTED,
            message="Your game selection is locked. Ask an administrator to reset it",
            status_code=409,
            details={"current_game": current_game},
        )


class NoGameSelectedError(AppException):
    """User has not locked in a game yet."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.NO_GAME_SELECTED,
            message="No game has been selected yet",
            status_code=404,
        )


class AdminProfileProtectedError(AppException):
    """Admin profiles are excluded from console mutations."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ADMIN_PROFILE_PROTECTED,
            message="Administrator profiles cannot be modified from the admin console",
            status_code=403,
            details={"user_id": user_id},
        )


class ProfileStoreError(AppException):
    """The profile store could not be reached or rejected the operation."""

    def __init__(self, message: str = "Profile store unavailable") -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
            status_code=503,
        )
