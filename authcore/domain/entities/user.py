"""User domain entity.

Pure data plus the few rules this core reads (active status, role). Profile
management belongs to the user-management collaborator.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from authcore.domain.enums import UserRole


@dataclass
class User:
    """User account as seen by the session lifecycle manager.

    Attributes:
        id: Unique user identifier.
        username: Unique login name.
        email: Unique email address (lowercase).
        password_hash: Bcrypt hash (never plaintext).
        role: Role carried in access tokens.
        is_active: Deactivated users cannot log in or refresh.
        first_name: Optional given name.
        last_name: Optional family name.
        theme_color: UI accent colour, returned in the public view.
        created_at: Timestamp when user was created.
        updated_at: Timestamp when user was last updated.

    Example:
        >>> user = User(
        ...     id=uuid7(),
        ...     username="alice",
        ...     email="alice@example.com",
        ...     password_hash="$2b$12$...",
        ... )
        >>> user.can_authenticate()
        True
    """

    id: UUID
    username: str
    email: str
    password_hash: str
    role: UserRole = UserRole.USER
    is_active: bool = True
    first_name: str | None = None
    last_name: str | None = None
    theme_color: str = "#3b82f6"
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def can_authenticate(self) -> bool:
        """Whether this account may start or renew a session."""
        return self.is_active
