"""SecurityAuditLog - best-effort audit trail for session events.

Wraps an AuditProtocol sink. A sink failure is logged locally and never
fails the operation that produced the event.

Usage:
    audit_log = SecurityAuditLog(audit=adapter, logger=logger)
    await audit_log.log(
        AuditAction.AUTH_LOGOUT,
        user_id=user.id,
        metadata=RequestMetadata(ip_address="10.0.0.1"),
    )
"""

from typing import Any
from uuid import UUID

from authcore.application.commands.auth_commands import RequestMetadata
from authcore.core.result import Failure
from authcore.domain.enums import AuditAction
from authcore.domain.protocols import AuditProtocol, LoggerProtocol

SECRET_CONTEXT_KEYS = frozenset(
    {"password", "token", "refresh_token", "access_token", "token_hash"}
)

_RESOURCE_TYPES: dict[AuditAction, str] = {
    AuditAction.AUTH_REGISTER: "user",
    AuditAction.AUTH_LOGIN_SUCCESS: "session",
    AuditAction.AUTH_LOGIN_FAILURE: "session",
    AuditAction.AUTH_REFRESH: "refresh_token",
    AuditAction.AUTH_REFRESH_REUSE_DETECTED: "refresh_token",
    AuditAction.AUTH_LOGOUT: "session",
    AuditAction.AUTH_LOGOUT_ALL: "session",
}


class SecurityAuditLog:
    """Append security events to the audit sink without secrets."""

    def __init__(self, audit: AuditProtocol, logger: LoggerProtocol) -> None:
        """Initialize with the audit sink and a local logger.

        Args:
            audit: Audit sink (database or log stream).
            logger: Logger for sink failures.
        """
        self._audit = audit
        self._logger = logger

    async def log(
        self,
        action: AuditAction,
        *,
        user_id: UUID | None = None,
        resource_id: UUID | None = None,
        metadata: RequestMetadata | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Record one event. Never raises.

        Args:
            action: Event type.
            user_id: User the event concerns, if known.
            resource_id: Refresh token record id, if any.
            metadata: Client details.
            context: Extra event context. Secret-bearing keys are dropped.
        """
        metadata = metadata or RequestMetadata()
        safe_context = {
            key: value
            for key, value in (context or {}).items()
            if key not in SECRET_CONTEXT_KEYS
        }

        try:
            result = await self._audit.record(
                action=action,
                resource_type=_RESOURCE_TYPES.get(action, "session"),
                user_id=user_id,
                resource_id=resource_id,
                ip_address=metadata.ip_address,
                user_agent=metadata.user_agent,
                context=safe_context,
            )
        except Exception as e:
            self._logger.error(
                "Audit sink raised",
                error=e,
                action=action.value,
                user_id=str(user_id) if user_id else None,
            )
            return

        if isinstance(result, Failure):
            self._logger.warning(
                "Audit event not recorded",
                action=action.value,
                error_code=result.error.code.value,
                reason=result.error.message,
            )
