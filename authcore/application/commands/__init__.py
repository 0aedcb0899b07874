"""Session lifecycle commands (CQRS write operations)."""

from authcore.application.commands.auth_commands import (
    LoginUser,
    LogoutAllSessions,
    LogoutUser,
    RefreshSession,
    RegisterUser,
    RequestMetadata,
)

__all__ = [
    "LoginUser",
    "LogoutAllSessions",
    "LogoutUser",
    "RefreshSession",
    "RegisterUser",
    "RequestMetadata",
]
