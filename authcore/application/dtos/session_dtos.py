"""Session DTOs (Data Transfer Objects).

Response/result dataclasses for session handlers.
These carry data from handlers back to the calling surface.

DTOs:
    - IssuedTokens: Access + refresh pair from TokenIssuer
    - RotatedSession: Owner and new pair from RotationCoordinator
    - WidgetToken: Long-lived, widget-scoped access token
    - PublicUserView: User fields that may leave the service
    - SessionResult: What register/login/refresh hand back to callers
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from authcore.domain.entities.user import User


@dataclass(frozen=True, kw_only=True)
class IssuedTokens:
    """A freshly issued token pair.

    Attributes:
        access_token: Signed JWT.
        refresh_token: Opaque refresh token (plaintext, shown once).
        access_expires_in: Access token lifetime in seconds.
        refresh_expires_at: Refresh token expiry (UTC).
        issued_at: Issue time (UTC).
        jti: Identifier shared by the access token and its refresh record.
        refresh_token_id: Id of the stored refresh record.
    """

    access_token: str
    refresh_token: str
    access_expires_in: int
    refresh_expires_at: datetime
    issued_at: datetime
    jti: str
    refresh_token_id: UUID


@dataclass(frozen=True, kw_only=True)
class RotatedSession:
    """Result of a successful refresh token rotation."""

    user: User
    tokens: IssuedTokens
    replaced_token_id: UUID


@dataclass(frozen=True, kw_only=True)
class WidgetToken:
    """Access token restricted to the embeddable widget scope."""

    token: str
    expires_in: int
    expires_at: datetime


@dataclass(frozen=True, kw_only=True)
class PublicUserView:
    """User projection safe to return to callers (no password hash)."""

    id: UUID
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    role: str
    theme_color: str

    @classmethod
    def from_user(cls, user: User) -> "PublicUserView":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            theme_color=user.theme_color,
        )


@dataclass(frozen=True, kw_only=True)
class SessionResult:
    """Session handed back by register, login and refresh.

    The refresh token travels separately from the response body (for
    example in an HttpOnly cookie), so ``to_response`` leaves it out.

    Attributes:
        access_token: Signed JWT.
        refresh_token: Opaque refresh token for the transport layer.
        refresh_expires_at: When the refresh token stops working.
        issued_at: When the pair was issued.
        expires_in: Access token lifetime in seconds.
        user: Public user view.
        token_type: Always "Bearer".
    """

    access_token: str
    refresh_token: str
    refresh_expires_at: datetime
    issued_at: datetime
    expires_in: int
    user: PublicUserView
    token_type: str = "Bearer"

    @classmethod
    def build(cls, user: User, tokens: IssuedTokens) -> "SessionResult":
        return cls(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            refresh_expires_at=tokens.refresh_expires_at,
            issued_at=tokens.issued_at,
            expires_in=tokens.access_expires_in,
            user=PublicUserView.from_user(user),
        )

    def to_response(self) -> dict[str, Any]:
        """Response body: ``{token, tokenType, expiresIn, issuedAt, refreshExpiresAt, user}``."""
        return {
            "token": self.access_token,
            "tokenType": self.token_type,
            "expiresIn": self.expires_in,
            "issuedAt": self.issued_at.isoformat(),
            "refreshExpiresAt": self.refresh_expires_at.isoformat(),
            "user": {
                "id": str(self.user.id),
                "username": self.user.username,
                "email": self.user.email,
                "firstName": self.user.first_name,
                "lastName": self.user.last_name,
                "role": self.user.role,
                "themeColor": self.user.theme_color,
            },
        }
