"""Authentication commands (CQRS write operations).

Commands represent caller intent to change session state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Handlers return Result types, commands never return anything
"""

from dataclasses import dataclass, field
from uuid import UUID

from authcore.domain.enums import UserRole


@dataclass(frozen=True, kw_only=True)
class RequestMetadata:
    """Client details recorded on refresh tokens and in the audit trail.

    Attributes:
        ip_address: Client IP address, if known.
        user_agent: Client user agent string, if known.
    """

    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Create an account and start its first session.

    Attributes:
        username: Unique login name.
        email: Unique email address.
        password: Plain-text password (hashed by the handler).
        first_name: Optional given name.
        last_name: Optional family name.
        role: Requested role. Defaults to USER; the configured admin
            email always receives ADMIN.
        metadata: Client details.

    Example:
        >>> command = RegisterUser(
        ...     username="alice",
        ...     email="alice@example.com",
        ...     password="s3cret!",
        ... )
        >>> result = await handler.handle(command)
    """

    username: str
    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole | None = None
    metadata: RequestMetadata = field(default_factory=RequestMetadata)


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Authenticate by username or email and start a session.

    Attributes:
        identity: Username or email address.
        password: Plain-text password.
        metadata: Client details.
    """

    identity: str
    password: str
    metadata: RequestMetadata = field(default_factory=RequestMetadata)


@dataclass(frozen=True, kw_only=True)
class RefreshSession:
    """Exchange a refresh token for a new token pair (rotation).

    Attributes:
        refresh_token: Opaque refresh token presented by the client.
        metadata: Client details.
    """

    refresh_token: str | None
    metadata: RequestMetadata = field(default_factory=RequestMetadata)


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """End one session by revoking its refresh token.

    Attributes:
        user_id: Authenticated user, if the caller knows it.
        refresh_token: Refresh token to revoke, if any.
        metadata: Client details.
    """

    user_id: UUID | None = None
    refresh_token: str | None = None
    metadata: RequestMetadata = field(default_factory=RequestMetadata)


@dataclass(frozen=True, kw_only=True)
class LogoutAllSessions:
    """Revoke every live refresh token of a user.

    Attributes:
        user_id: User whose sessions end.
        metadata: Client details.
    """

    user_id: UUID
    metadata: RequestMetadata = field(default_factory=RequestMetadata)
