"""Audit trail protocol (port).

Infrastructure adapters implement this protocol to persist security events
(database table, structured log stream, in-memory fake in tests).

Following hexagonal architecture:
- Domain defines the PORT (this protocol)
- Infrastructure provides ADAPTERS (DatabaseAuditAdapter, LoggerAuditAdapter)
- Application layer uses the protocol through SecurityAuditLog

Usage:
    result = await audit.record(
        action=AuditAction.AUTH_LOGIN_SUCCESS,
        user_id=user_id,
        resource_type="session",
        ip_address="203.0.113.7",
        context={"jti": jti},
    )
"""

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from authcore.core.result import Result
from authcore.domain.enums import AuditAction
from authcore.domain.errors import AuditError


class AuditProtocol(Protocol):
    """Protocol for append-only audit sinks.

    Implementations MUST never update or delete entries and MUST report
    failures as Failure(AuditError) rather than raising.

    Implementations:
        - DatabaseAuditAdapter: audit_logs table (SQLAlchemy)
        - LoggerAuditAdapter: structured log stream (structlog)
    """

    async def record(
        self,
        *,
        action: AuditAction,
        resource_type: str,
        user_id: UUID | None = None,
        resource_id: UUID | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> Result[None, AuditError]:
        """Record an immutable audit entry.

        Args:
            action: What happened.
            resource_type: What was affected (user, session, refresh_token).
            user_id: Who the event concerns (None when unknown).
            resource_id: Specific resource identifier (refresh token record id).
            ip_address: Client IP address.
            user_agent: Client user agent string.
            context: Additional non-secret event context.

        Returns:
            Success(None) when written, Failure(AuditError) otherwise.
        """
        ...

    async def query(
        self,
        *,
        user_id: UUID | None = None,
        action: AuditAction | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Result[list[dict[str, Any]], AuditError]:
        """Query the audit trail, newest first.

        Args:
            user_id: Filter by user (None = all users).
            action: Filter by action (None = all actions).
            start_date: From date inclusive.
            end_date: To date inclusive.
            limit: Maximum results (capped at 1000).
            offset: Pagination offset.

        Returns:
            Success(entries) or Failure(AuditError).
        """
        ...
