"""Logout user handler.

Flow:
1. Revoke the refresh token (idempotent)
2. Audit auth.logout
3. Return Success(None)

Logout always succeeds for unknown, missing or already-revoked tokens.
Persistence errors still propagate.
"""

from authcore.application.commands.auth_commands import LogoutUser
from authcore.application.services.rotation_coordinator import RotationCoordinator
from authcore.application.services.security_audit_log import SecurityAuditLog
from authcore.core.errors import DomainError
from authcore.core.result import Result, Success
from authcore.domain.enums import AuditAction, RevocationReason
from authcore.domain.protocols import LoggerProtocol


class LogoutUserHandler:
    """Handler for logout command."""

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

    async def handle(self, cmd: LogoutUser) -> Result[None, DomainError]:
        """Handle logout command.

        Args:
            cmd: LogoutUser command.

        Returns:
            Success(None), always.
        """
        # Step 1: Revoke
        record = await self._rotation_coordinator.revoke_token(
            cmd.refresh_token, RevocationReason.LOGOUT
        )
        user_id = cmd.user_id or (record.user_id if record else None)

        # Step 2: Audit
        await self._audit_log.log(
            AuditAction.AUTH_LOGOUT,
            user_id=user_id,
            resource_id=record.id if record else None,
            metadata=cmd.metadata,
            context={"token_revoked": record is not None},
        )
        self._logger.info(
            "User logged out",
            user_id=str(user_id) if user_id else None,
            token_revoked=record is not None,
        )

        # Step 3: Done
        return Success(value=None)
