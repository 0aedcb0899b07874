"""Domain errors package.

Usage:
    from authcore.domain.errors import AuditError
"""

from authcore.domain.errors.audit_error import AuditError

__all__ = ["AuditError"]
