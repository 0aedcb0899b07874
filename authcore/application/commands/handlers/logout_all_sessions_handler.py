"""Logout all sessions handler.

Flow:
1. Revoke every live refresh token of the user
2. Audit auth.logout_all
3. Return Success(count)
"""

from authcore.application.commands.auth_commands import LogoutAllSessions
from authcore.application.services.rotation_coordinator import RotationCoordinator
from authcore.application.services.security_audit_log import SecurityAuditLog
from authcore.core.errors import DomainError
from authcore.core.result import Result, Success
from authcore.domain.enums import AuditAction, RevocationReason


class LogoutAllSessionsHandler:
    """Handler for logout-everywhere command."""

    def __init__(
        self,
        *,
        rotation_coordinator: RotationCoordinator,
        audit_log: SecurityAuditLog,
    ) -> None:
        self._rotation_coordinator = rotation_coordinator
        self._audit_log = audit_log

    async def handle(self, cmd: LogoutAllSessions) -> Result[int, DomainError]:
        """Handle logout-everywhere command.

        Returns:
            Success(number of sessions revoked).
        """
        # Step 1: Bulk revoke
        count = await self._rotation_coordinator.revoke_all_for_user(
            cmd.user_id, RevocationReason.LOGOUT_ALL
        )

        # Step 2: Audit
        await self._audit_log.log(
            AuditAction.AUTH_LOGOUT_ALL,
            user_id=cmd.user_id,
            metadata=cmd.metadata,
            context={"sessions_revoked": count},
        )

        # Step 3: Count
        return Success(value=count)
