"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console adapter)
- Database (PostgreSQL via asyncpg)
- Password hashing (bcrypt)
- Access token signing (JWT)
- Refresh token generation
- Login attempt tracking (Redis when configured, in-memory otherwise)

The audit adapter is session-scoped and built per unit of work.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from authcore.core.config import get_settings
from authcore.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from authcore.domain.protocols import (
        AccessTokenServiceProtocol,
        AuditProtocol,
        LoggerProtocol,
        LoginAttemptTrackerProtocol,
        PasswordHashingProtocol,
        RefreshTokenServiceProtocol,
        UserBootstrapProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Get logger singleton (app-scoped).

    JSON output when LOG_JSON is set (CI/production), console text otherwise.
    """
    from authcore.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(use_json=settings.log_json, level=settings.log_level)


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns:
        Database instance owning the async engine and session factory.

    Usage:
        db = get_database()
        async with db.get_session() as session:
            facade = build_session_facade(session)
    """
    settings = get_settings()
    return Database(database_url=settings.database_url, echo=settings.db_echo)


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Returns BcryptPasswordService with BCRYPT_ROUNDS cost factor.
    """
    from authcore.infrastructure.security.bcrypt_password_service import (
        BcryptPasswordService,
    )

    return BcryptPasswordService(cost_factor=get_settings().bcrypt_rounds)


@lru_cache()
def get_access_token_service() -> "AccessTokenServiceProtocol":
    """Get access token service singleton (app-scoped)."""
    from authcore.infrastructure.security.jwt_service import JWTService

    settings = get_settings()
    return JWTService(
        settings.signing_secret,
        issuer=settings.issuer,
        audience=settings.audience,
        algorithm=settings.signing_algorithm,
    )


@lru_cache()
def get_refresh_token_service() -> "RefreshTokenServiceProtocol":
    """Get refresh token service singleton (app-scoped)."""
    from authcore.infrastructure.security.refresh_token_service import (
        RefreshTokenService,
    )

    return RefreshTokenService(ttl_seconds=get_settings().refresh_ttl_seconds)


@lru_cache()
def get_login_attempt_tracker() -> "LoginAttemptTrackerProtocol":
    """Get login attempt tracker singleton (app-scoped).

    Returns RedisLoginAttemptTracker when REDIS_URL is set so every instance
    shares one counter, InMemoryLoginAttemptTracker otherwise.
    """
    settings = get_settings()
    thresholds = {
        "max_failures": settings.login_max_failures,
        "window_seconds": settings.login_window_seconds,
        "lockout_seconds": settings.login_lockout_seconds,
        "key_by_origin": settings.login_key_by_origin,
    }

    if settings.redis_url:
        from redis.asyncio import Redis

        from authcore.infrastructure.login_attempts.redis_tracker import (
            RedisLoginAttemptTracker,
        )

        redis_client = Redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        return RedisLoginAttemptTracker(
            redis_client, logger=get_logger(), **thresholds
        )

    from authcore.infrastructure.login_attempts.memory_tracker import (
        InMemoryLoginAttemptTracker,
    )

    return InMemoryLoginAttemptTracker(**thresholds)


@lru_cache()
def get_user_bootstrap() -> "UserBootstrapProtocol":
    """Get user bootstrap hook singleton (app-scoped)."""
    from authcore.infrastructure.bootstrap.noop_bootstrap import NoOpUserBootstrap

    return NoOpUserBootstrap()


# ============================================================================
# Session-Scoped Dependencies
# ============================================================================


def get_audit(session: AsyncSession) -> "AuditProtocol":
    """Get audit trail adapter for one unit of work.

    AUDIT_BACKEND=database writes to audit_logs through ``session`` (pass a
    separate session to keep audit commits apart from business writes);
    AUDIT_BACKEND=logger sends entries to the structured log stream.
    """
    if get_settings().audit_backend == "logger":
        from authcore.infrastructure.audit.logger_adapter import LoggerAuditAdapter

        return LoggerAuditAdapter(get_logger())

    from authcore.infrastructure.audit.database_adapter import DatabaseAuditAdapter

    return DatabaseAuditAdapter(session=session)
