"""Refresh token database model.

Security:
    - token_hash: SHA-256 hex digest of the secret (NOT plaintext)
    - expires_at: refresh TTL from creation (14 days by default)
    - revoked/revoked_at/revocation_reason: set once, never cleared
    - replaced_by_token_id: next record in the rotation chain
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from authcore.infrastructure.persistence.base import BaseMutableModel, UTCDateTime


class RefreshTokenModel(BaseMutableModel):
    """Refresh token model.

    Token Lifecycle:
        1. Created on register, login or rotation
        2. Presented once for rotation, then revoked with reason "rotated"
        3. Revoked on logout, logout-all or reuse detection
        4. Expires naturally after the refresh TTL

    Rows are never deleted by the session core; revoked rows form the
    audit trail of the rotation chain.

    Indexes:
        - token_hash: unique, lookup on every refresh/logout
        - user_id: bulk revocation
        - idx_refresh_tokens_user_live: (user_id, revoked) for live-session queries
    """

    __tablename__ = "refresh_tokens"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who owns this refresh token",
    )

    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="SHA-256 hex digest of the refresh token (NEVER plaintext)",
    )

    jti: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="jti of the access token issued alongside",
    )

    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        index=True,
    )

    revoked: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    revoked_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        default=None,
    )

    revocation_reason: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="rotated, logout, logout_all, reuse_detected",
    )

    replaced_by_token_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("refresh_tokens.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
        comment="Successor record in the rotation chain",
    )

    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (Index("idx_refresh_tokens_user_live", "user_id", "revoked"),)

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            str: Human-readable representation of refresh token.
        """
        return (
            f"<RefreshTokenModel("
            f"id={self.id}, "
            f"user_id={self.user_id}, "
            f"expires_at={self.expires_at}, "
            f"revoked={self.revoked}"
            f")>"
        )
