"""Container module - Centralized dependency injection.

Re-exports the factory functions so callers import from one place:

    from authcore.core.container import build_session_facade, get_database

The container is organized into modules:
- infrastructure: App-scoped services (database, logging, hashing, signing,
  login attempt tracking) and the session-scoped audit adapter
- session: Per-unit-of-work wiring of repositories, services, handlers and
  the SessionFacade
"""

from authcore.core.container.infrastructure import (
    get_access_token_service,
    get_audit,
    get_database,
    get_logger,
    get_login_attempt_tracker,
    get_password_service,
    get_refresh_token_service,
    get_user_bootstrap,
)
from authcore.core.container.session import build_session_facade

__all__ = [
    "build_session_facade",
    "get_access_token_service",
    "get_audit",
    "get_database",
    "get_logger",
    "get_login_attempt_tracker",
    "get_password_service",
    "get_refresh_token_service",
    "get_user_bootstrap",
]
