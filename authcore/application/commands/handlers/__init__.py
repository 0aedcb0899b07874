"""Command handlers, one per session operation."""

from authcore.application.commands.handlers.login_user_handler import (
    LoginUserHandler,
)
from authcore.application.commands.handlers.logout_all_sessions_handler import (
    LogoutAllSessionsHandler,
)
from authcore.application.commands.handlers.logout_user_handler import (
    LogoutUserHandler,
)
from authcore.application.commands.handlers.refresh_session_handler import (
    RefreshSessionHandler,
)
from authcore.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)

__all__ = [
    "LoginUserHandler",
    "LogoutAllSessionsHandler",
    "LogoutUserHandler",
    "RefreshSessionHandler",
    "RegisterUserHandler",
]
