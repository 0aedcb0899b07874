"""Security audit event types.

Values are the dotted event names written to the audit trail. Event-specific
context (failure reason, jti, record ids) goes in the JSON context column,
so adding an action needs no schema change.

Usage:
    await audit_log.log(AuditAction.AUTH_LOGOUT, user_id=user_id)
"""

from enum import Enum


class AuditAction(str, Enum):
    """Auditable authentication events.

    String Enum:
        Inherits from str for easy serialization and database storage.
    """

    AUTH_REGISTER = "auth.register"
    AUTH_LOGIN_SUCCESS = "auth.login.success"
    AUTH_LOGIN_FAILURE = "auth.login.failure"
    AUTH_REFRESH = "auth.refresh"
    AUTH_REFRESH_REUSE_DETECTED = "auth.refresh.reuse_detected"
    AUTH_LOGOUT = "auth.logout"
    AUTH_LOGOUT_ALL = "auth.logout_all"
