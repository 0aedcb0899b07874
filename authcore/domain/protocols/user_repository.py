"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture. Infrastructure layer
implements this protocol.
"""

from typing import Protocol
from uuid import UUID

from authcore.domain.entities.user import User


class UserRepository(Protocol):
    """User repository protocol (port).

    This is a Protocol (not ABC) for structural typing. Implementations
    don't need to inherit from this.

    Methods:
        find_by_id: Retrieve user by ID
        find_by_identity: Retrieve user by username or email
        exists: Check username/email uniqueness
        save: Create new user
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_identity(self, identity: str) -> User | None:
        """Find user by username or email.

        Email comparison is case-insensitive.

        Args:
            identity: Username or email address.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def exists(self, *, username: str, email: str) -> bool:
        """Check whether the username or the email is already taken.

        Args:
            username: Candidate username.
            email: Candidate email.

        Returns:
            True if either is in use.
        """
        ...

    async def save(self, user: User) -> User | None:
        """Persist a new user and commit.

        Args:
            user: User entity to create.

        Returns:
            The stored user (timestamps filled in), or None when a concurrent
            registration took the username or email first.
        """
        ...
