"""Database implementation of AuditProtocol.

Append-only audit logging in the audit_logs table:
- Async SQLAlchemy for database operations
- Result types for error handling (no exceptions)
- JSON storage for flexible context data

Following hexagonal architecture:
- Infrastructure implements domain protocol (AuditProtocol)
- Domain doesn't know about SQLAlchemy
- Easy to swap implementations (log stream, in-memory for testing)

Immutability:
    The adapter only ever INSERTs. There is no update or delete method.

Usage:
    adapter = DatabaseAuditAdapter(session)

    result = await adapter.record(
        action=AuditAction.AUTH_LOGIN_SUCCESS,
        user_id=user_id,
        resource_type="session",
        ip_address="203.0.113.7",
        context={"jti": jti},
    )
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from authcore.core.enums import ErrorCode
from authcore.core.result import Failure, Result, Success
from authcore.domain.enums import AuditAction
from authcore.domain.errors import AuditError
from authcore.infrastructure.persistence.models.audit_log import AuditLogModel

_MAX_QUERY_LIMIT = 1000
_MAX_USER_AGENT = 500


class DatabaseAuditAdapter:
    """SQLAlchemy implementation of AuditProtocol.

    This adapter is stateless - all state lives in the database.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Note:
        Handlers audit after their own writes have committed, so the
        rollback performed on an audit failure never undoes
        authentication state.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize adapter with database session.

        Args:
            session: SQLAlchemy async session (injected by container).
        """
        self.session = session

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
            action: What happened (enum for type safety).
            resource_type: What was affected (user, session, refresh_token).
            user_id: Who the event concerns (None when unknown).
            resource_id: Specific resource identifier (optional).
            ip_address: Client IP address.
            user_agent: Client user agent string (truncated to 500 chars).
            context: Additional event context (stored as JSON).

        Returns:
            Result[None, AuditError]:
                - Success(None) if audit entry recorded
                - Failure(AuditError) if database operation failed
        """
        try:
            audit_log = AuditLogModel(
                action=action.value,
                user_id=user_id,
                resource_type=resource_type,
                resource_id=resource_id,
                ip_address=ip_address,
                user_agent=user_agent[:_MAX_USER_AGENT] if user_agent else None,
                context=context,
            )

            self.session.add(audit_log)
            await self.session.commit()  # Commit immediately for durability

            return Success(value=None)

        except SQLAlchemyError as e:
            await self.session.rollback()
            return Failure(
                error=AuditError(
                    message=f"Failed to record audit log: {str(e)}",
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    details={
                        "action": action.value,
                        "resource_type": resource_type,
                        "error_type": type(e).__name__,
                    },
                )
            )

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
        """Query audit trail (read-only, for security investigations).

        Args:
            user_id: Filter by user (None = all users).
            action: Filter by specific action type (None = all actions).
            start_date: From date inclusive (None = no lower bound).
            end_date: To date inclusive (None = no upper bound).
            limit: Maximum results (default 100, capped at 1000).
            offset: Pagination offset (skip this many results).

        Returns:
            Result[list[dict[str, Any]], AuditError]:
                - Success(entries) if query succeeded (list may be empty)
                - Failure(AuditError) if database operation failed

            Each entry dict contains id, action, user_id, resource_type,
            resource_id, ip_address, user_agent, context and created_at
            (UUIDs as strings, created_at in ISO 8601).

        Note:
            Results are ordered by created_at DESC (newest first).
        """
        try:
            limit = min(limit, _MAX_QUERY_LIMIT)

            query = select(AuditLogModel)

            if user_id is not None:
                query = query.where(AuditLogModel.user_id == user_id)

            if action is not None:
                query = query.where(AuditLogModel.action == action.value)

            if start_date is not None:
                query = query.where(AuditLogModel.created_at >= start_date)

            if end_date is not None:
                query = query.where(AuditLogModel.created_at <= end_date)

            query = (
                query.order_by(AuditLogModel.created_at.desc())
                .limit(limit)
                .offset(offset)
            )

            result = await self.session.execute(query)
            audit_logs = result.scalars().all()

            entries: list[dict[str, Any]] = [
                {
                    "id": str(log.id),
                    "action": log.action,
                    "user_id": str(log.user_id) if log.user_id else None,
                    "resource_type": log.resource_type,
                    "resource_id": str(log.resource_id) if log.resource_id else None,
                    "ip_address": log.ip_address,
                    "user_agent": log.user_agent,
                    "context": log.context,
                    "created_at": log.created_at.isoformat(),
                }
                for log in audit_logs
            ]

            return Success(value=entries)

        except SQLAlchemyError as e:
            error_details: dict[str, Any] = {"error_type": type(e).__name__}
            if user_id is not None:
                error_details["user_id"] = str(user_id)
            if action is not None:
                error_details["action"] = action.value

            return Failure(
                error=AuditError(
                    message=f"Failed to query audit logs: {str(e)}",
                    code=ErrorCode.AUDIT_QUERY_FAILED,
                    details=error_details,
                )
            )
