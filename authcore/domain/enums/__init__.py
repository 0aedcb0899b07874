"""Domain enums package.

Usage:
    from authcore.domain.enums import AuditAction, UserRole
"""

from authcore.domain.enums.audit_action import AuditAction
from authcore.domain.enums.login_attempt_status import LoginAttemptStatus
from authcore.domain.enums.revocation_reason import RevocationReason
from authcore.domain.enums.user_role import UserRole

__all__ = [
    "AuditAction",
    "LoginAttemptStatus",
    "RevocationReason",
    "UserRole",
]
