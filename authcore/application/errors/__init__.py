"""Application error messages and builders.

Usage:
    from authcore.application.errors import AuthErrorMessage, invalid_credentials
"""

from authcore.application.errors.auth_errors import (
    AuthErrorMessage,
    account_locked,
    identity_conflict,
    invalid_credentials,
    invalid_refresh_token,
    refresh_token_missing,
    user_unavailable,
)

__all__ = [
    "AuthErrorMessage",
    "account_locked",
    "identity_conflict",
    "invalid_credentials",
    "invalid_refresh_token",
    "refresh_token_missing",
    "user_unavailable",
]
