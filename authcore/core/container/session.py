"""Session facade wiring.

One SessionFacade per unit of work: repositories and the audit adapter
share the caller's AsyncSession, app-scoped services come from the
infrastructure factories.
"""

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
from authcore.core.config import get_settings
from authcore.core.container.infrastructure import (
    get_access_token_service,
    get_audit,
    get_logger,
    get_login_attempt_tracker,
    get_password_service,
    get_refresh_token_service,
    get_user_bootstrap,
)
from authcore.infrastructure.persistence.repositories import (
    RefreshTokenRepository,
    UserRepository,
)


def build_session_facade(
    session: AsyncSession,
    audit_session: AsyncSession | None = None,
) -> SessionFacade:
    """Wire a SessionFacade around one database session.

    Args:
        session: Session used by the user and refresh token repositories.
        audit_session: Optional separate session for audit writes
            (defaults to ``session``).

    Returns:
        Ready-to-use SessionFacade.

    Usage:
        async with get_database().get_session() as session:
            facade = build_session_facade(session)
            result = await facade.refresh_session(token, metadata)
    """
    settings = get_settings()
    logger = get_logger()
    password_service = get_password_service()
    token_service = get_access_token_service()
    refresh_token_service = get_refresh_token_service()

    user_repo = UserRepository(session=session)
    refresh_token_repo = RefreshTokenRepository(session=session)
    audit_log = SecurityAuditLog(
        audit=get_audit(audit_session or session), logger=logger
    )

    token_issuer = TokenIssuer(
        token_service=token_service,
        refresh_token_service=refresh_token_service,
        refresh_token_repo=refresh_token_repo,
        logger=logger,
        access_ttl_seconds=settings.access_ttl_seconds,
        widget_ttl_seconds=settings.widget_ttl_seconds,
    )
    rotation_coordinator = RotationCoordinator(
        refresh_token_repo=refresh_token_repo,
        refresh_token_service=refresh_token_service,
        user_repo=user_repo,
        token_issuer=token_issuer,
        audit_log=audit_log,
        logger=logger,
        reuse_revokes_all=settings.refresh_reuse_revokes_all,
    )

    return SessionFacade(
        register_handler=RegisterUserHandler(
            user_repo=user_repo,
            password_service=password_service,
            token_issuer=token_issuer,
            user_bootstrap=get_user_bootstrap(),
            audit_log=audit_log,
            logger=logger,
            admin_email=settings.admin_email,
        ),
        login_handler=LoginUserHandler(
            user_repo=user_repo,
            password_service=password_service,
            token_issuer=token_issuer,
            login_attempts=get_login_attempt_tracker(),
            audit_log=audit_log,
            logger=logger,
        ),
        refresh_handler=RefreshSessionHandler(
            rotation_coordinator=rotation_coordinator,
            audit_log=audit_log,
            logger=logger,
        ),
        logout_handler=LogoutUserHandler(
            rotation_coordinator=rotation_coordinator,
            audit_log=audit_log,
            logger=logger,
        ),
        logout_all_handler=LogoutAllSessionsHandler(
            rotation_coordinator=rotation_coordinator,
            audit_log=audit_log,
        ),
        user_repo=user_repo,
        token_issuer=token_issuer,
        token_service=token_service,
    )
