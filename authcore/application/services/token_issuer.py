"""TokenIssuer - mints access/refresh token pairs.

Flow (issue_tokens):
1. Generate a fresh jti shared by the access token and its refresh record
2. Sign the access token
3. Generate the opaque refresh token, keep only its SHA-256 hash
4. Persist the record (or rotate it in place of the replaced record)
5. Return IssuedTokens with the plaintext refresh token

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- Signing and persistence arrive through injected protocols
"""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from uuid_extensions import uuid7

from authcore.application.commands.auth_commands import RequestMetadata
from authcore.application.dtos import IssuedTokens, WidgetToken
from authcore.application.errors import invalid_refresh_token
from authcore.core.errors import AuthenticationError
from authcore.core.result import Failure, Result, Success
from authcore.domain.entities.user import User
from authcore.domain.protocols import (
    AccessTokenServiceProtocol,
    LoggerProtocol,
    NewRefreshToken,
    RefreshTokenRepository,
    RefreshTokenServiceProtocol,
)

WIDGET_SCOPE = "widget"


class TokenIssuer:
    """Issue token pairs and widget tokens.

    Attributes:
        access_ttl_seconds: Access token lifetime.
        widget_ttl_seconds: Widget token lifetime.
    """

    def __init__(
        self,
        *,
        token_service: AccessTokenServiceProtocol,
        refresh_token_service: RefreshTokenServiceProtocol,
        refresh_token_repo: RefreshTokenRepository,
        logger: LoggerProtocol,
        access_ttl_seconds: int = 900,
        widget_ttl_seconds: int = 86_400,
    ) -> None:
        self._token_service = token_service
        self._refresh_token_service = refresh_token_service
        self._refresh_token_repo = refresh_token_repo
        self._logger = logger
        self.access_ttl_seconds = access_ttl_seconds
        self.widget_ttl_seconds = widget_ttl_seconds

    async def issue_tokens(
        self,
        user: User,
        metadata: RequestMetadata,
        *,
        replaced_token_id: UUID | None = None,
    ) -> Result[IssuedTokens, AuthenticationError]:
        """Issue an access token and a refresh token for ``user``.

        Args:
            user: Token subject.
            metadata: Client details stored on the refresh record.
            replaced_token_id: Record being rotated away, if this is a refresh.

        Returns:
            Success(IssuedTokens), or Failure(AuthenticationError) when the
            replaced record was revoked by a concurrent request.
        """
        now = datetime.now(UTC)

        # Step 1: One jti per pair
        jti = str(uuid4())

        # Step 2: Access token
        access_token = self._token_service.generate_access_token(
            user_id=user.id,
            username=user.username,
            role=user.role.value,
            jti=jti,
            expires_in=self.access_ttl_seconds,
        )

        # Step 3: Refresh token (only the hash is stored)
        refresh_token, token_hash = self._refresh_token_service.generate_token()
        new_token = NewRefreshToken(
            id=uuid7(),
            user_id=user.id,
            token_hash=token_hash,
            jti=jti,
            expires_at=self._refresh_token_service.calculate_expiration(now),
            ip_address=metadata.ip_address,
            user_agent=metadata.user_agent,
        )

        # Step 4: Persist
        if replaced_token_id is None:
            record = await self._refresh_token_repo.save(new_token)
        else:
            rotated = await self._refresh_token_repo.rotate(
                new_token,
                replaced_token_id=replaced_token_id,
                revoked_at=now,
            )
            if rotated is None:
                self._logger.warning(
                    "Refresh token already revoked by a concurrent request",
                    user_id=str(user.id),
                    token_id=str(replaced_token_id),
                )
                return Failure(error=invalid_refresh_token("concurrent_rotation"))
            record = rotated

        self._logger.info(
            "Tokens issued",
            user_id=str(user.id),
            jti=jti,
            token_id=str(record.id),
            rotated=replaced_token_id is not None,
        )

        # Step 5: Plaintext refresh token leaves exactly once
        return Success(
            value=IssuedTokens(
                access_token=access_token,
                refresh_token=refresh_token,
                access_expires_in=self.access_ttl_seconds,
                refresh_expires_at=record.expires_at,
                issued_at=now,
                jti=jti,
                refresh_token_id=record.id,
            )
        )

    def issue_widget_token(self, user: User) -> WidgetToken:
        """Sign a long-lived access token limited to the widget scope.

        No refresh record is written; the token simply expires.
        """
        now = datetime.now(UTC)
        token = self._token_service.generate_access_token(
            user_id=user.id,
            username=user.username,
            role=user.role.value,
            jti=str(uuid4()),
            expires_in=self.widget_ttl_seconds,
            scope=WIDGET_SCOPE,
        )
        self._logger.info("Widget token issued", user_id=str(user.id))
        return WidgetToken(
            token=token,
            expires_in=self.widget_ttl_seconds,
            expires_at=now + timedelta(seconds=self.widget_ttl_seconds),
        )
