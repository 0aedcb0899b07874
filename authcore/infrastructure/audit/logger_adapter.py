"""Log stream implementation of AuditProtocol.

Writes each audit entry as one structured log event through the injected
LoggerProtocol (structlog). Where the events end up (stdout, a log
aggregator) is decided by the logging configuration, not by this class.

The stream is write-only: query() reports AUDIT_QUERY_FAILED.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from authcore.core.enums import ErrorCode
from authcore.core.result import Failure, Result, Success
from authcore.domain.enums import AuditAction
from authcore.domain.errors import AuditError
from authcore.domain.protocols.logger_protocol import LoggerProtocol


class LoggerAuditAdapter:
    """Audit sink backed by structured logging.

    Args:
        logger: Logger the entries are written to (bound with audit=True).
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger.bind(audit=True)

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
        """Emit one audit log event."""
        try:
            self._logger.info(
                action.value,
                event_type=action.value,
                resource_type=resource_type,
                user_id=str(user_id) if user_id else None,
                resource_id=str(resource_id) if resource_id else None,
                ip_address=ip_address,
                user_agent=user_agent,
                context=context or {},
            )
        except Exception as e:
            return Failure(
                error=AuditError(
                    message=f"Failed to write audit event: {str(e)}",
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    details={
                        "action": action.value,
                        "error_type": type(e).__name__,
                    },
                )
            )
        return Success(value=None)

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
        """Log streams cannot be queried from here."""
        return Failure(
            error=AuditError(
                message="Audit log stream does not support queries",
                code=ErrorCode.AUDIT_QUERY_FAILED,
            )
        )
