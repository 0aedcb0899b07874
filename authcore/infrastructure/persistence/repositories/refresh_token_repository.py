"""RefreshTokenRepository - SQLAlchemy implementation for refresh token persistence.

Every revocation is a conditional UPDATE (``WHERE revoked = false``) so two
concurrent callers cannot both revoke, and therefore cannot both rotate,
the same record.

Bulk UPDATEs run with synchronize_session=False, so reads use
populate_existing to refresh any instance already in the identity map.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from authcore.domain.protocols.refresh_token_repository import (
    NewRefreshToken,
    RefreshTokenData,
)
from authcore.infrastructure.persistence.models.refresh_token import RefreshTokenModel


def _to_data(model: RefreshTokenModel) -> RefreshTokenData:
    """Convert database model to domain DTO."""
    return RefreshTokenData(
        id=model.id,
        user_id=model.user_id,
        token_hash=model.token_hash,
        jti=model.jti,
        expires_at=model.expires_at,
        revoked=model.revoked,
        revoked_at=model.revoked_at,
        revocation_reason=model.revocation_reason,
        replaced_by_token_id=model.replaced_by_token_id,
        ip_address=model.ip_address,
        user_agent=model.user_agent,
        created_at=model.created_at,
    )


def _to_model(token: NewRefreshToken) -> RefreshTokenModel:
    return RefreshTokenModel(
        id=token.id,
        user_id=token.user_id,
        token_hash=token.token_hash,
        jti=token.jti,
        expires_at=token.expires_at,
        revoked=False,
        ip_address=token.ip_address,
        user_agent=token.user_agent,
    )


class RefreshTokenRepository:
    """SQLAlchemy implementation for refresh token persistence.

    Manages refresh tokens with support for:
    - Token creation and storage
    - Hash lookup (revoked rows included, for reuse detection)
    - Atomic rotation (insert successor + conditional revoke, one commit)
    - Single and bulk revocation

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with db.get_session() as session:
        ...     repo = RefreshTokenRepository(session)
        ...     token = await repo.find_by_token_hash(token_hash)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def save(self, token: NewRefreshToken) -> RefreshTokenData:
        """Create new refresh token in database.

        Args:
            token: Values for the new record.

        Returns:
            Created RefreshTokenData.
        """
        model = _to_model(token)
        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)
        return _to_data(model)

    async def rotate(
        self,
        token: NewRefreshToken,
        *,
        replaced_token_id: UUID,
        revoked_at: datetime,
    ) -> RefreshTokenData | None:
        """Insert the successor and revoke the replaced record in one commit.

        The successor row is flushed first so the replaced row's
        replaced_by_token_id foreign key points at an existing row. If the
        conditional revoke matches nothing, the whole transaction is rolled
        back and the successor never becomes visible.

        Args:
            token: Values for the successor record.
            replaced_token_id: Record being rotated away.
            revoked_at: Revocation timestamp.

        Returns:
            The successor RefreshTokenData, or None if the replaced record was
            already revoked.
        """
        model = _to_model(token)
        self.session.add(model)
        await self.session.flush()

        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.id == replaced_token_id)
            .where(RefreshTokenModel.revoked.is_(False))
            .values(
                revoked=True,
                revoked_at=revoked_at,
                revocation_reason="rotated",
                replaced_by_token_id=token.id,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        if result.rowcount != 1:  # type: ignore[attr-defined]
            await self.session.rollback()
            return None

        await self.session.commit()
        await self.session.refresh(model)
        return _to_data(model)

    async def find_by_token_hash(self, token_hash: str) -> RefreshTokenData | None:
        """Find refresh token by hash.

        Args:
            token_hash: SHA-256 hex digest of the token.

        Returns:
            RefreshTokenData if found (revoked or not), None otherwise.
        """
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model else None

    async def find_by_id(self, token_id: UUID) -> RefreshTokenData | None:
        """Find refresh token by ID.

        Args:
            token_id: Token's unique identifier.

        Returns:
            RefreshTokenData if found, None otherwise.
        """
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.id == token_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model else None

    async def revoke(
        self, token_id: UUID, *, reason: str, revoked_at: datetime
    ) -> bool:
        """Revoke one refresh token unless it is already revoked.

        Args:
            token_id: Token's unique identifier.
            reason: Reason for revocation (for audit).
            revoked_at: Revocation timestamp.

        Returns:
            True if this call revoked the record.
        """
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.id == token_id)
            .where(RefreshTokenModel.revoked.is_(False))
            .values(revoked=True, revoked_at=revoked_at, revocation_reason=reason)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def revoke_all_for_user(
        self, user_id: UUID, *, reason: str, revoked_at: datetime
    ) -> int:
        """Revoke all live refresh tokens for a user.

        Used for "sign out everywhere" and reuse detection.

        Args:
            user_id: User's unique identifier.
            reason: Reason for revocation (for audit).
            revoked_at: Revocation timestamp.

        Returns:
            Number of records revoked.
        """
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.user_id == user_id)
            .where(RefreshTokenModel.revoked.is_(False))
            .values(revoked=True, revoked_at=revoked_at, revocation_reason=reason)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return int(result.rowcount)  # type: ignore[attr-defined]
