"""RotationCoordinator - refresh token rotation, reuse detection and revocation.

Flow (rotate_refresh_token):
1. Look up the record by SHA-256 of the presented token (revoked rows included)
2. Revoked record: replay of a rotated token triggers reuse handling
3. Reject expired records
4. Load the owner and require an active account
5. Issue a new pair that atomically replaces the record

Every failure returns the same "Invalid refresh token" error; the precise
reason is only logged.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- Repositories and services are injected via protocols
"""

from datetime import UTC, datetime
from uuid import UUID

from authcore.application.commands.auth_commands import RequestMetadata
from authcore.application.dtos import RotatedSession
from authcore.application.errors import invalid_refresh_token
from authcore.application.services.security_audit_log import SecurityAuditLog
from authcore.application.services.token_issuer import TokenIssuer
from authcore.core.errors import AuthenticationError
from authcore.core.result import Failure, Result, Success
from authcore.domain.enums import AuditAction, RevocationReason
from authcore.domain.protocols import (
    LoggerProtocol,
    RefreshTokenData,
    RefreshTokenRepository,
    RefreshTokenServiceProtocol,
    UserRepository,
)


class RotationCoordinator:
    """Rotate, revoke and bulk-revoke refresh tokens."""

    def __init__(
        self,
        *,
        refresh_token_repo: RefreshTokenRepository,
        refresh_token_service: RefreshTokenServiceProtocol,
        user_repo: UserRepository,
        token_issuer: TokenIssuer,
        audit_log: SecurityAuditLog,
        logger: LoggerProtocol,
        reuse_revokes_all: bool = True,
    ) -> None:
        """Initialize coordinator with dependencies.

        Args:
            refresh_token_repo: Refresh token persistence.
            refresh_token_service: Hashes presented tokens.
            user_repo: Loads token owners.
            token_issuer: Issues the replacement pair.
            audit_log: Records reuse detection.
            logger: Structured logger.
            reuse_revokes_all: Revoke every session of a user whose rotated
                token is replayed.
        """
        self._refresh_token_repo = refresh_token_repo
        self._refresh_token_service = refresh_token_service
        self._user_repo = user_repo
        self._token_issuer = token_issuer
        self._audit_log = audit_log
        self._logger = logger
        self._reuse_revokes_all = reuse_revokes_all

    async def rotate_refresh_token(
        self,
        presented_token: str,
        metadata: RequestMetadata,
    ) -> Result[RotatedSession, AuthenticationError]:
        """Exchange a live refresh token for a new pair.

        Args:
            presented_token: Plaintext refresh token from the client.
            metadata: Client details for the new record.

        Returns:
            Success(RotatedSession) or Failure(AuthenticationError).
        """
        # Step 1: Look up by hash
        token_hash = self._refresh_token_service.hash_token(presented_token)
        record = await self._refresh_token_repo.find_by_token_hash(token_hash)
        if record is None:
            return self._reject("not_found")

        # Step 2: Revoked (replay of a rotated token is reuse)
        if record.revoked:
            if record.revocation_reason == RevocationReason.ROTATED.value:
                await self._handle_reuse(record, metadata)
            return self._reject("revoked", record)

        # Step 3: Expired
        if record.is_expired(datetime.now(UTC)):
            return self._reject("expired", record)

        # Step 4: Owner must exist and be active
        user = await self._user_repo.find_by_id(record.user_id)
        if user is None or not user.can_authenticate():
            return self._reject("user_unavailable", record)

        # Step 5: Issue replacement (atomic with revoking this record)
        result = await self._token_issuer.issue_tokens(
            user, metadata, replaced_token_id=record.id
        )
        match result:
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=tokens):
                return Success(
                    value=RotatedSession(
                        user=user,
                        tokens=tokens,
                        replaced_token_id=record.id,
                    )
                )

    async def revoke_token(
        self,
        token: str | None,
        reason: RevocationReason = RevocationReason.LOGOUT,
    ) -> RefreshTokenData | None:
        """Revoke a refresh token if it is still live.

        Idempotent: a missing, unknown or already-revoked token is not an
        error.

        Args:
            token: Plaintext refresh token, or None.
            reason: Stored revocation reason.

        Returns:
            The record this call revoked (state before revocation), or None
            when nothing was revoked.
        """
        if not token:
            return None

        token_hash = self._refresh_token_service.hash_token(token)
        record = await self._refresh_token_repo.find_by_token_hash(token_hash)
        if record is None or record.revoked:
            return None

        revoked = await self._refresh_token_repo.revoke(
            record.id, reason=reason.value, revoked_at=datetime.now(UTC)
        )
        if not revoked:
            return None

        self._logger.info(
            "Refresh token revoked",
            user_id=str(record.user_id),
            token_id=str(record.id),
            reason=reason.value,
        )
        return record

    async def revoke_all_for_user(
        self,
        user_id: UUID,
        reason: RevocationReason = RevocationReason.LOGOUT_ALL,
    ) -> int:
        """Revoke every live refresh token of a user.

        Returns:
            Number of records revoked by this call.
        """
        count = await self._refresh_token_repo.revoke_all_for_user(
            user_id, reason=reason.value, revoked_at=datetime.now(UTC)
        )
        self._logger.info(
            "Refresh tokens revoked for user",
            user_id=str(user_id),
            reason=reason.value,
            count=count,
        )
        return count

    async def _handle_reuse(
        self, record: RefreshTokenData, metadata: RequestMetadata
    ) -> None:
        """Respond to a rotated token being presented again."""
        revoked_count = 0
        if self._reuse_revokes_all:
            revoked_count = await self.revoke_all_for_user(
                record.user_id, RevocationReason.REUSE_DETECTED
            )

        self._logger.warning(
            "Refresh token reuse detected",
            user_id=str(record.user_id),
            token_id=str(record.id),
            jti=record.jti,
            sessions_revoked=revoked_count,
        )
        await self._audit_log.log(
            AuditAction.AUTH_REFRESH_REUSE_DETECTED,
            user_id=record.user_id,
            resource_id=record.id,
            metadata=metadata,
            context={
                "jti": record.jti,
                "replaced_by_token_id": (
                    str(record.replaced_by_token_id)
                    if record.replaced_by_token_id
                    else None
                ),
                "sessions_revoked": revoked_count,
            },
        )

    def _reject(
        self, reason: str, record: RefreshTokenData | None = None
    ) -> Failure[AuthenticationError]:
        self._logger.warning(
            "Refresh token rejected",
            reason=reason,
            user_id=str(record.user_id) if record else None,
            token_id=str(record.id) if record else None,
        )
        return Failure(error=invalid_refresh_token(reason))
