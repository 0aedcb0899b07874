"""JWT access token service (adapter).

Implements AccessTokenServiceProtocol using PyJWT with HMAC-SHA256.

Security:
    - HMAC-SHA256 (HS256) by default
    - 256-bit secret key minimum
    - iss and aud claims set on issue and enforced on validation
    - Unique JWT ID (jti) for correlation with refresh records and audit

Performance:
    - Stateless validation (no database lookup)
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from authcore.core.enums import ErrorCode
from authcore.core.errors import AuthenticationError
from authcore.core.result import Failure, Result, Success
from authcore.domain.protocols.access_token_service_protocol import AccessTokenClaims

_REQUIRED_CLAIMS = ["sub", "jti", "iat", "exp", "iss", "aud"]


class JWTService:
    """JWT access token generation and validation service.

    Usage:
        token_service = JWTService(
            secret_key=settings.signing_secret,
            issuer=settings.issuer,
            audience=settings.audience,
        )

        token = token_service.generate_access_token(
            user_id=user.id,
            username=user.username,
            role=user.role.value,
            jti=jti,
            expires_in=900,
        )

        result = token_service.validate_access_token(token)
    """

    def __init__(
        self,
        secret_key: str,
        *,
        issuer: str,
        audience: str,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC signing.
                MUST be at least 256 bits (32 bytes) for security.
            issuer: Value of the iss claim.
            audience: Value of the aud claim.
            algorithm: JWT signing algorithm (default: HS256).

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._audience = audience
        self._algorithm = algorithm

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
        """Generate JWT access token.

        Args:
            user_id: User's unique identifier (sub claim).
            username: Username claim.
            role: Role claim.
            jti: Unique token id.
            expires_in: Lifetime in seconds.
            scope: Optional restricted scope (``"widget"``).

        Returns:
            JWT access token string (header.payload.signature).
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(seconds=expires_in)

        payload: dict[str, Any] = {
            "sub": str(user_id),
            "username": username,
            "role": role,
            "jti": jti,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        if scope is not None:
            payload["scope"] = scope

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(
        self, token: str
    ) -> Result[AccessTokenClaims, AuthenticationError]:
        """Validate JWT access token and extract claims.

        Args:
            token: JWT access token string to validate.

        Returns:
            Success(AccessTokenClaims) if valid.
            Failure(AuthenticationError) with TOKEN_EXPIRED or TOKEN_INVALID.

        Note:
            PyJWT verifies signature, exp, iss and aud; missing required
            claims or a non-UUID subject are treated as invalid.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": _REQUIRED_CLAIMS},
            )
            claims = AccessTokenClaims(
                sub=UUID(payload["sub"]),
                username=str(payload.get("username", "")),
                role=str(payload.get("role", "")),
                jti=str(payload["jti"]),
                issuer=payload["iss"],
                audience=payload["aud"],
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
                scope=payload.get("scope"),
            )
        except ExpiredSignatureError:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message="Access token expired",
                )
            )
        except (InvalidTokenError, ValueError):
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Invalid access token",
                )
            )

        return Success(value=claims)
