"""Caller-facing authentication failures.

One message per failure category. The precise reason (``user_not_found``,
``bad_password``, ``revoked``, ...) is kept in ``details`` for logs and
audit only, so callers cannot tell which check failed.
"""

from authcore.core.enums import ErrorCode
from authcore.core.errors import AuthenticationError, ConflictError


class AuthErrorMessage:
    """User-facing messages, one per category."""

    INVALID_CREDENTIALS = "Invalid credentials"
    ACCOUNT_LOCKED = "Too many failed login attempts. Try again later."
    INVALID_REFRESH_TOKEN = "Invalid refresh token"
    REFRESH_TOKEN_MISSING = "Refresh token missing"
    IDENTITY_CONFLICT = "Username or email already exists"
    USER_UNAVAILABLE = "User not found or inactive"


def invalid_credentials(reason: str) -> AuthenticationError:
    """Login failure (unknown identity, wrong password, inactive account)."""
    return AuthenticationError(
        code=ErrorCode.INVALID_CREDENTIALS,
        message=AuthErrorMessage.INVALID_CREDENTIALS,
        details={"reason": reason},
    )


def account_locked() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.ACCOUNT_LOCKED,
        message=AuthErrorMessage.ACCOUNT_LOCKED,
        details={"reason": "locked"},
    )


def invalid_refresh_token(reason: str) -> AuthenticationError:
    """Refresh failure (unknown, revoked, expired, lost race, owner gone)."""
    return AuthenticationError(
        code=ErrorCode.TOKEN_INVALID,
        message=AuthErrorMessage.INVALID_REFRESH_TOKEN,
        details={"reason": reason},
    )


def refresh_token_missing() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.TOKEN_MISSING,
        message=AuthErrorMessage.REFRESH_TOKEN_MISSING,
    )


def user_unavailable() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.USER_NOT_FOUND,
        message=AuthErrorMessage.USER_UNAVAILABLE,
    )


def identity_conflict() -> ConflictError:
    """Duplicate username or email on registration."""
    return ConflictError(
        code=ErrorCode.USER_ALREADY_EXISTS,
        message=AuthErrorMessage.IDENTITY_CONFLICT,
        resource_type="User",
    )
