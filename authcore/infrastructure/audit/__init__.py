"""Audit sink adapters implementing AuditProtocol."""

from authcore.infrastructure.audit.database_adapter import DatabaseAuditAdapter
from authcore.infrastructure.audit.logger_adapter import LoggerAuditAdapter

__all__ = ["DatabaseAuditAdapter", "LoggerAuditAdapter"]
