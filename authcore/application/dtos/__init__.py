"""Application DTOs returned by handlers and the session facade."""

from authcore.application.dtos.session_dtos import (
    IssuedTokens,
    PublicUserView,
    RotatedSession,
    SessionResult,
    WidgetToken,
)

__all__ = [
    "IssuedTokens",
    "PublicUserView",
    "RotatedSession",
    "SessionResult",
    "WidgetToken",
]
