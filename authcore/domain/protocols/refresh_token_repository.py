"""RefreshTokenRepository protocol (port).

Durable table of hashed refresh tokens with revocation metadata. The
plaintext secret never reaches this layer; lookups use its SHA-256 digest.

Token Lifecycle:
    1. Created on register, login and every rotation
    2. Looked up by hash when presented for rotation or logout
    3. Revoked (rotated, logout, logout_all, reuse_detected), never deleted
    4. Expires naturally after the refresh TTL
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID


@dataclass
class RefreshTokenData:
    """Data transfer object for refresh token records.

    Used by protocol methods to return token data without exposing
    infrastructure model classes to the application layer.
    """

    id: UUID
    user_id: UUID
    token_hash: str
    jti: str
    expires_at: datetime
    revoked: bool
    revoked_at: datetime | None
    revocation_reason: str | None
    replaced_by_token_id: UUID | None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the record has reached its expiry."""
        return self.expires_at <= (now or datetime.now(UTC))

    def is_usable(self, now: datetime | None = None) -> bool:
        """Not revoked and not expired."""
        return not self.revoked and not self.is_expired(now)


@dataclass(frozen=True, slots=True, kw_only=True)
class NewRefreshToken:
    """Values for a record about to be inserted."""

    id: UUID
    user_id: UUID
    token_hash: str
    jti: str
    expires_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None


class RefreshTokenRepository(Protocol):
    """Protocol for refresh token persistence operations.

    Every revoking method is conditional ("only if not already revoked") so
    concurrent callers cannot both win.

    Implementations:
        - RefreshTokenRepository (SQLAlchemy): authcore/infrastructure/persistence/repositories/
    """

    async def save(self, token: NewRefreshToken) -> RefreshTokenData:
        """Insert a new record and commit.

        Args:
            token: Values for the new record.

        Returns:
            Created RefreshTokenData.
        """
        ...

    async def rotate(
        self,
        token: NewRefreshToken,
        *,
        replaced_token_id: UUID,
        revoked_at: datetime,
    ) -> RefreshTokenData | None:
        """Insert the successor and revoke the replaced record atomically.

        Both writes are one transaction. The replaced record is revoked with
        reason ``rotated`` and ``replaced_by_token_id=token.id`` only if it
        is still live; otherwise the insert is rolled back.

        Args:
            token: Values for the successor record.
            replaced_token_id: Record being rotated away.
            revoked_at: Revocation timestamp.

        Returns:
            The successor record, or None if the replaced record was already
            revoked (lost a concurrent rotation).
        """
        ...

    async def find_by_token_hash(self, token_hash: str) -> RefreshTokenData | None:
        """Find a record by hash, revoked or not.

        Args:
            token_hash: SHA-256 hex digest of the presented token.

        Returns:
            RefreshTokenData if found, None otherwise.
        """
        ...

    async def find_by_id(self, token_id: UUID) -> RefreshTokenData | None:
        """Find a record by id.

        Args:
            token_id: Record id.

        Returns:
            RefreshTokenData if found, None otherwise.
        """
        ...

    async def revoke(
        self, token_id: UUID, *, reason: str, revoked_at: datetime
    ) -> bool:
        """Revoke one record if it is not already revoked.

        Returns:
            True if this call revoked it, False if it was already revoked
            or does not exist.
        """
        ...

    async def revoke_all_for_user(
        self, user_id: UUID, *, reason: str, revoked_at: datetime
    ) -> int:
        """Revoke every live record of a user.

        Returns:
            Number of records revoked by this call.
        """
        ...
