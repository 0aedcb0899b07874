"""Refresh session handler.

Flow:
1. Reject a missing refresh token
2. Rotate through RotationCoordinator
3. Audit auth.refresh
4. Return Success(SessionResult)

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- Rotation details live in RotationCoordinator
"""

from authcore.application.commands.auth_commands import RefreshSession
from authcore.application.dtos import SessionResult
from authcore.application.errors import refresh_token_missing
from authcore.application.services.rotation_coordinator import RotationCoordinator
from authcore.application.services.security_audit_log import SecurityAuditLog
from authcore.core.errors import AuthenticationError
from authcore.core.result import Failure, Result, Success
from authcore.domain.enums import AuditAction
from authcore.domain.protocols import LoggerProtocol


class RefreshSessionHandler:
    """Handler for refresh session command."""

    def __init__(
        self,
        *,
        rotation_coordinator: RotationCoordinator,
        audit_log: SecurityAuditLog,
        logger: LoggerProtocol,
    ) -> None:
        self._rotation_coordinator = rotation_coordinator
        self._audit_log = audit_log
        self._logger = logger

    async def handle(
        self, cmd: RefreshSession
    ) -> Result[SessionResult, AuthenticationError]:
        """Handle refresh session command.

        Args:
            cmd: RefreshSession command.

        Returns:
            Success(SessionResult) with the rotated pair.
            Failure(AuthenticationError) for a missing, unknown, revoked,
            expired or concurrently rotated token.
        """
        # Step 1: Token present
        if not cmd.refresh_token:
            return Failure(error=refresh_token_missing())

        # Step 2: Rotate
        result = await self._rotation_coordinator.rotate_refresh_token(
            cmd.refresh_token, cmd.metadata
        )
        if isinstance(result, Failure):
            return Failure(error=result.error)
        session = result.value

        # Step 3: Audit
        await self._audit_log.log(
            AuditAction.AUTH_REFRESH,
            user_id=session.user.id,
            resource_id=session.tokens.refresh_token_id,
            metadata=cmd.metadata,
            context={
                "jti": session.tokens.jti,
                "replaced_token_id": str(session.replaced_token_id),
            },
        )
        self._logger.info(
            "Session refreshed",
            user_id=str(session.user.id),
            jti=session.tokens.jti,
        )

        # Step 4: Session
        return Success(value=SessionResult.build(session.user, session.tokens))
