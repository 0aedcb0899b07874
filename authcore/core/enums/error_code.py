"""Machine-readable error codes.

Error codes follow ENTITY_ACTION_REASON naming convention and travel inside
DomainError instances carried by Failure results.

Categories:
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS)
- Authentication errors (INVALID_CREDENTIALS, TOKEN_*, ACCOUNT_*)
- Audit trail errors (AUDIT_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Error codes shared by every layer."""

    # Resource errors
    USER_NOT_FOUND = "user_not_found"

    # Conflict errors
    USER_ALREADY_EXISTS = "user_already_exists"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_LOCKED = "account_locked"
    TOKEN_INVALID = "token_invalid"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_MISSING = "token_missing"

    # Audit trail errors
    AUDIT_RECORD_FAILED = "audit_record_failed"
    AUDIT_QUERY_FAILED = "audit_query_failed"
