"""Pytest configuration shared by unit and integration tests.

Provides:
1. Marker registration and automatic asyncio marking of coroutine tests
2. In-memory SQLite (aiosqlite) database with the schema created per test
3. Fast bcrypt and fixed signing settings for wiring a SessionFacade
"""

import inspect
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from authcore.application.commands.handlers import (
    LoginUserHandler,
    LogoutAllSessionsHandler,
    LogoutUserHandler,
    RefreshSessionHandler,
    RegisterUserHandler,
)
from authcore.application.services.rotation_coordinator import RotationCoordinator
from authcore.application.services.security_audit_log import SecurityAuditLog
from authcore.application.services.session_facade import SessionFacade
from authcore.application.services.token_issuer import TokenIssuer
from authcore.infrastructure.audit.database_adapter import DatabaseAuditAdapter
from authcore.infrastructure.bootstrap.noop_bootstrap import NoOpUserBootstrap
from authcore.infrastructure.logging.console_adapter import ConsoleAdapter
from authcore.infrastructure.login_attempts.memory_tracker import (
    InMemoryLoginAttemptTracker,
)
from authcore.infrastructure.persistence.database import Database
from authcore.infrastructure.persistence.repositories import (
    RefreshTokenRepository,
    UserRepository,
)
from authcore.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from authcore.infrastructure.security.jwt_service import JWTService
from authcore.infrastructure.security.refresh_token_service import (
    RefreshTokenService,
)

TEST_SECRET = "test-signing-secret-that-is-long-enough-0123456789"
TEST_ISSUER = "cal3-backend"
TEST_AUDIENCE = "cal3-users"


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real adapters"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


# ============================================================================
# Database
# ============================================================================


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory SQLite database with all tables."""
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """One session per test (in-memory SQLite lives on a single connection)."""
    async with database.async_session() as db_session:
        yield db_session


# ============================================================================
# Services
# ============================================================================


@pytest.fixture
def logger() -> ConsoleAdapter:
    return ConsoleAdapter(use_json=True, level="WARNING")


@pytest.fixture
def password_service() -> BcryptPasswordService:
    """bcrypt at the minimum cost factor keeps tests fast."""
    return BcryptPasswordService(cost_factor=4)


@pytest.fixture
def token_service() -> JWTService:
    return JWTService(TEST_SECRET, issuer=TEST_ISSUER, audience=TEST_AUDIENCE)


@pytest.fixture
def refresh_token_service() -> RefreshTokenService:
    return RefreshTokenService(ttl_seconds=1_209_600)


@pytest.fixture
def login_tracker() -> InMemoryLoginAttemptTracker:
    return InMemoryLoginAttemptTracker(
        max_failures=5, window_seconds=900, lockout_seconds=900
    )


@pytest.fixture
def build_facade(
    session: AsyncSession,
    logger: ConsoleAdapter,
    password_service: BcryptPasswordService,
    token_service: JWTService,
    refresh_token_service: RefreshTokenService,
    login_tracker: InMemoryLoginAttemptTracker,
):
    """Factory wiring a SessionFacade on the test session.

    Keyword overrides: ``admin_email``, ``reuse_revokes_all``.
    """

    def _build(
        *, admin_email: str | None = None, reuse_revokes_all: bool = True
    ) -> SessionFacade:
        user_repo = UserRepository(session=session)
        refresh_token_repo = RefreshTokenRepository(session=session)
        audit_log = SecurityAuditLog(
            audit=DatabaseAuditAdapter(session=session), logger=logger
        )
        token_issuer = TokenIssuer(
            token_service=token_service,
            refresh_token_service=refresh_token_service,
            refresh_token_repo=refresh_token_repo,
            logger=logger,
            access_ttl_seconds=900,
            widget_ttl_seconds=86_400,
        )
        coordinator = RotationCoordinator(
            refresh_token_repo=refresh_token_repo,
            refresh_token_service=refresh_token_service,
            user_repo=user_repo,
            token_issuer=token_issuer,
            audit_log=audit_log,
            logger=logger,
            reuse_revokes_all=reuse_revokes_all,
        )
        return SessionFacade(
            register_handler=RegisterUserHandler(
                user_repo=user_repo,
                password_service=password_service,
                token_issuer=token_issuer,
                user_bootstrap=NoOpUserBootstrap(),
                audit_log=audit_log,
                logger=logger,
                admin_email=admin_email,
            ),
            login_handler=LoginUserHandler(
                user_repo=user_repo,
                password_service=password_service,
                token_issuer=token_issuer,
                login_attempts=login_tracker,
                audit_log=audit_log,
                logger=logger,
            ),
            refresh_handler=RefreshSessionHandler(
                rotation_coordinator=coordinator, audit_log=audit_log, logger=logger
            ),
            logout_handler=LogoutUserHandler(
                rotation_coordinator=coordinator, audit_log=audit_log, logger=logger
            ),
            logout_all_handler=LogoutAllSessionsHandler(
                rotation_coordinator=coordinator, audit_log=audit_log
            ),
            user_repo=user_repo,
            token_issuer=token_issuer,
            token_service=token_service,
        )

    return _build


@pytest.fixture
def facade(build_facade) -> SessionFacade:
    return build_facade()
