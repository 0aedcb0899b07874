"""Access token signing protocol.

Access tokens are short-lived signed claim sets. The domain needs only
"sign these claims" and "verify and decode"; the JWT library stays in
infrastructure.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from authcore.core.errors import AuthenticationError
from authcore.core.result import Result


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessTokenClaims:
    """Decoded, verified access token claims.

    Attributes:
        sub: User id.
        username: Username at issue time.
        role: Role at issue time.
        jti: Unique token id, shared with the refresh token record.
        issuer: iss claim.
        audience: aud claim.
        issued_at: iat claim.
        expires_at: exp claim.
        scope: Restricted scope (``"widget"``), None for full access.
    """

    sub: UUID
    username: str
    role: str
    jti: str
    issuer: str
    audience: str
    issued_at: datetime
    expires_at: datetime
    scope: str | None = None


class AccessTokenServiceProtocol(Protocol):
    """Access token generation and validation.

    Implementations:
        - JWTService: PyJWT, HMAC-SHA256
    """

    def generate_access_token(
        self,
        *,
        user_id: UUID,
        username: str,
        role: str,
        jti: str,
        expires_in: int,
        scope: str | None = None,
    ) -> str:
        """Sign an access token.

        Args:
            user_id: Subject.
            username: Username claim.
            role: Role claim.
            jti: Unique token id.
            expires_in: Lifetime in seconds.
            scope: Optional restricted scope claim.

        Returns:
            Encoded token string.
        """
        ...

    def validate_access_token(
        self, token: str
    ) -> Result[AccessTokenClaims, AuthenticationError]:
        """Verify signature, expiry, issuer and audience.

        Args:
            token: Encoded token.

        Returns:
            Success(AccessTokenClaims) or Failure(AuthenticationError).
        """
        ...
