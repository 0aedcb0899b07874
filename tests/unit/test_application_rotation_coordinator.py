"""Unit tests for RotationCoordinator.

Tests cover:
- Rejections (unknown, revoked, expired, owner missing/inactive)
- Reuse detection (audit + optional revoke-all)
- Successful rotation delegates to TokenIssuer with the replaced id
- Idempotent revoke and bulk revoke
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from authcore.application.commands.auth_commands import RequestMetadata
from authcore.application.dtos import IssuedTokens
from authcore.application.services.rotation_coordinator import RotationCoordinator
from authcore.core.enums import ErrorCode
from authcore.core.result import Failure, Success
from authcore.domain.entities.user import User
from authcore.domain.enums import AuditAction, RevocationReason
from authcore.domain.protocols import RefreshTokenData


def create_record(**overrides) -> RefreshTokenData:
    values = {
        "id": uuid7(),
        "user_id": uuid7(),
        "token_hash": "h" * 64,
        "jti": "jti-1",
        "expires_at": datetime.now(UTC) + timedelta(days=1),
        "revoked": False,
        "revoked_at": None,
        "revocation_reason": None,
        "replaced_by_token_id": None,
        "ip_address": None,
        "user_agent": None,
    }
    values.update(overrides)
    return RefreshTokenData(**values)


def create_tokens() -> IssuedTokens:
    return IssuedTokens(
        access_token="access",
        refresh_token="refresh",
        access_expires_in=900,
        refresh_expires_at=datetime.now(UTC) + timedelta(days=14),
        issued_at=datetime.now(UTC),
        jti="jti-2",
        refresh_token_id=uuid7(),
    )


@pytest.fixture
def deps():
    refresh_token_repo = AsyncMock()
    refresh_token_service = Mock()
    refresh_token_service.hash_token.return_value = "h" * 64
    user_repo = AsyncMock()
    token_issuer = AsyncMock()
    audit_log = AsyncMock()
    return {
        "refresh_token_repo": refresh_token_repo,
        "refresh_token_service": refresh_token_service,
        "user_repo": user_repo,
        "token_issuer": token_issuer,
        "audit_log": audit_log,
        "logger": Mock(),
    }


def build(deps, **kwargs) -> RotationCoordinator:
    return RotationCoordinator(**deps, **kwargs)


@pytest.mark.unit
class TestRotateRejections:
    async def test_unknown_token_rejected(self, deps):
        deps["refresh_token_repo"].find_by_token_hash.return_value = None

        result = await build(deps).rotate_refresh_token("nope", RequestMetadata())

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID
        assert result.error.message == "Invalid refresh token"
        assert result.error.details == {"reason": "not_found"}

    async def test_expired_token_rejected(self, deps):
        deps["refresh_token_repo"].find_by_token_hash.return_value = create_record(
            expires_at=datetime.now(UTC) - timedelta(seconds=1)
        )

        result = await build(deps).rotate_refresh_token("old", RequestMetadata())

        assert isinstance(result, Failure)
        assert result.error.details == {"reason": "expired"}
        deps["token_issuer"].issue_tokens.assert_not_called()

    async def test_inactive_owner_rejected(self, deps):
        record = create_record()
        deps["refresh_token_repo"].find_by_token_hash.return_value = record
        deps["user_repo"].find_by_id.return_value = User(
            id=record.user_id,
            username="alice",
            email="alice@example.com",
            password_hash="x",
            is_active=False,
        )

        result = await build(deps).rotate_refresh_token("t", RequestMetadata())

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid refresh token"
        assert result.error.details == {"reason": "user_unavailable"}

    async def test_logged_out_token_rejected_without_reuse_response(self, deps):
        deps["refresh_token_repo"].find_by_token_hash.return_value = create_record(
            revoked=True, revocation_reason=RevocationReason.LOGOUT.value
        )

        result = await build(deps).rotate_refresh_token("t", RequestMetadata())

        assert isinstance(result, Failure)
        deps["refresh_token_repo"].revoke_all_for_user.assert_not_called()
        deps["audit_log"].log.assert_not_called()


@pytest.mark.unit
class TestReuseDetection:
    async def test_rotated_token_replay_revokes_family(self, deps):
        record = create_record(
            revoked=True,
            revocation_reason=RevocationReason.ROTATED.value,
            replaced_by_token_id=uuid7(),
        )
        deps["refresh_token_repo"].find_by_token_hash.return_value = record
        deps["refresh_token_repo"].revoke_all_for_user.return_value = 2

        result = await build(deps).rotate_refresh_token("t", RequestMetadata())

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid refresh token"
        call = deps["refresh_token_repo"].revoke_all_for_user.call_args
        assert call.args[0] == record.user_id
        assert call.kwargs["reason"] == "reuse_detected"
        audit_call = deps["audit_log"].log.call_args
        assert audit_call.args[0] == AuditAction.AUTH_REFRESH_REUSE_DETECTED
        assert audit_call.kwargs["resource_id"] == record.id
        assert audit_call.kwargs["context"]["sessions_revoked"] == 2

    async def test_reuse_without_family_revocation(self, deps):
        deps["refresh_token_repo"].find_by_token_hash.return_value = create_record(
            revoked=True, revocation_reason=RevocationReason.ROTATED.value
        )

        result = await build(deps, reuse_revokes_all=False).rotate_refresh_token(
            "t", RequestMetadata()
        )

        assert isinstance(result, Failure)
        deps["refresh_token_repo"].revoke_all_for_user.assert_not_called()
        deps["audit_log"].log.assert_awaited_once()


@pytest.mark.unit
class TestRotateSuccess:
    async def test_rotation_passes_replaced_id(self, deps):
        record = create_record()
        user = User(
            id=record.user_id,
            username="alice",
            email="alice@example.com",
            password_hash="x",
        )
        tokens = create_tokens()
        deps["refresh_token_repo"].find_by_token_hash.return_value = record
        deps["user_repo"].find_by_id.return_value = user
        deps["token_issuer"].issue_tokens.return_value = Success(value=tokens)
        metadata = RequestMetadata(ip_address="10.0.0.2")

        result = await build(deps).rotate_refresh_token("t", metadata)

        assert isinstance(result, Success)
        assert result.value.user == user
        assert result.value.tokens == tokens
        assert result.value.replaced_token_id == record.id
        deps["token_issuer"].issue_tokens.assert_awaited_once_with(
            user, metadata, replaced_token_id=record.id
        )

    async def test_issuer_failure_propagates(self, deps):
        record = create_record()
        deps["refresh_token_repo"].find_by_token_hash.return_value = record
        deps["user_repo"].find_by_id.return_value = User(
            id=record.user_id, username="a", email="a@x.io", password_hash="x"
        )
        failure = Failure(error=Mock(code=ErrorCode.TOKEN_INVALID))
        deps["token_issuer"].issue_tokens.return_value = failure

        result = await build(deps).rotate_refresh_token("t", RequestMetadata())

        assert isinstance(result, Failure)
        assert result.error is failure.error


@pytest.mark.unit
class TestRevocation:
    async def test_revoke_none_is_noop(self, deps):
        assert await build(deps).revoke_token(None) is None
        deps["refresh_token_repo"].find_by_token_hash.assert_not_called()

    async def test_revoke_already_revoked_is_noop(self, deps):
        deps["refresh_token_repo"].find_by_token_hash.return_value = create_record(
            revoked=True, revocation_reason="logout"
        )

        assert await build(deps).revoke_token("t") is None
        deps["refresh_token_repo"].revoke.assert_not_called()

    async def test_revoke_live_token_returns_record(self, deps):
        record = create_record()
        deps["refresh_token_repo"].find_by_token_hash.return_value = record
        deps["refresh_token_repo"].revoke.return_value = True

        revoked = await build(deps).revoke_token("t")

        assert revoked == record
        assert deps["refresh_token_repo"].revoke.call_args.kwargs["reason"] == "logout"

    async def test_revoke_lost_to_concurrent_revoke(self, deps):
        deps["refresh_token_repo"].find_by_token_hash.return_value = create_record()
        deps["refresh_token_repo"].revoke.return_value = False

        assert await build(deps).revoke_token("t") is None

    async def test_revoke_all_returns_count(self, deps):
        deps["refresh_token_repo"].revoke_all_for_user.return_value = 3
        user_id = uuid7()

        count = await build(deps).revoke_all_for_user(user_id)

        assert count == 3
        call = deps["refresh_token_repo"].revoke_all_for_user.call_args
        assert call.kwargs["reason"] == "logout_all"
