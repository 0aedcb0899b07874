"""Error classes shared across layers.

Error Types:
- ConflictError: duplicate identity on register
- AuthenticationError: bad credentials, lockout, invalid refresh or access token

Usage:
    from authcore.core.errors import AuthenticationError
    from authcore.core.enums import ErrorCode
    from authcore.core.result import Failure

    return Failure(
        error=AuthenticationError(
            code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid credentials",
        )
    )
"""

from dataclasses import dataclass

from authcore.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate identity).

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        resource_type: Type of resource in conflict.
        conflicting_field: Field that conflicts, when it may be disclosed.
        details: Additional context.
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (surfaced to callers as Unauthorized).

    One message is used per failure category so callers cannot tell which
    check failed. The precise reason goes into ``details`` for logging.
    """

    pass
