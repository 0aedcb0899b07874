"""Unit tests for refresh, logout and logout-all handlers."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from authcore.application.commands.auth_commands import (
    LogoutAllSessions,
    LogoutUser,
    RefreshSession,
)
from authcore.application.commands.handlers import (
    LogoutAllSessionsHandler,
    LogoutUserHandler,
    RefreshSessionHandler,
)
from authcore.application.dtos import IssuedTokens, RotatedSession
from authcore.application.errors import invalid_refresh_token
from authcore.core.enums import ErrorCode
from authcore.core.result import Failure, Success
from authcore.domain.entities.user import User
from authcore.domain.enums import AuditAction, RevocationReason
from authcore.domain.protocols import RefreshTokenData


@pytest.mark.unit
class TestRefreshSessionHandler:
    @pytest.mark.parametrize("token", [None, ""])
    async def test_missing_token(self, token):
        coordinator = AsyncMock()
        handler = RefreshSessionHandler(
            rotation_coordinator=coordinator, audit_log=AsyncMock(), logger=Mock()
        )

        result = await handler.handle(RefreshSession(refresh_token=token))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_MISSING
        assert result.error.message == "Refresh token missing"
        coordinator.rotate_refresh_token.assert_not_called()

    async def test_rotation_failure_is_returned_unaudited(self):
        coordinator = AsyncMock()
        coordinator.rotate_refresh_token.return_value = Failure(
            error=invalid_refresh_token("revoked")
        )
        audit_log = AsyncMock()
        handler = RefreshSessionHandler(
            rotation_coordinator=coordinator, audit_log=audit_log, logger=Mock()
        )

        result = await handler.handle(RefreshSession(refresh_token="t"))

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid refresh token"
        audit_log.log.assert_not_called()

    async def test_success_audits_refresh(self):
        user = User(id=uuid7(), username="alice", email="a@x.io", password_hash="x")
        tokens = IssuedTokens(
            access_token="access",
            refresh_token="refresh",
            access_expires_in=900,
            refresh_expires_at=datetime.now(UTC) + timedelta(days=14),
            issued_at=datetime.now(UTC),
            jti="jti-2",
            refresh_token_id=uuid7(),
        )
        replaced_id = uuid7()
        coordinator = AsyncMock()
        coordinator.rotate_refresh_token.return_value = Success(
            value=RotatedSession(user=user, tokens=tokens, replaced_token_id=replaced_id)
        )
        audit_log = AsyncMock()
        handler = RefreshSessionHandler(
            rotation_coordinator=coordinator, audit_log=audit_log, logger=Mock()
        )

        result = await handler.handle(RefreshSession(refresh_token="t"))

        assert isinstance(result, Success)
        assert result.value.refresh_token == "refresh"
        audit_call = audit_log.log.call_args
        assert audit_call.args[0] == AuditAction.AUTH_REFRESH
        assert audit_call.kwargs["resource_id"] == tokens.refresh_token_id
        assert audit_call.kwargs["context"]["replaced_token_id"] == str(replaced_id)


@pytest.mark.unit
class TestLogoutHandlers:
    async def test_logout_unknown_token_still_succeeds(self):
        coordinator = AsyncMock()
        coordinator.revoke_token.return_value = None
        audit_log = AsyncMock()
        handler = LogoutUserHandler(
            rotation_coordinator=coordinator, audit_log=audit_log, logger=Mock()
        )

        result = await handler.handle(LogoutUser(refresh_token="never-issued"))

        assert isinstance(result, Success)
        assert result.value is None
        assert audit_log.log.call_args.args[0] == AuditAction.AUTH_LOGOUT
        assert audit_log.log.call_args.kwargs["context"] == {"token_revoked": False}

    async def test_logout_attributes_to_token_owner(self):
        record = RefreshTokenData(
            id=uuid7(),
            user_id=uuid7(),
            token_hash="h" * 64,
            jti="j",
            expires_at=datetime.now(UTC) + timedelta(days=1),
            revoked=False,
            revoked_at=None,
            revocation_reason=None,
            replaced_by_token_id=None,
            ip_address=None,
            user_agent=None,
        )
        coordinator = AsyncMock()
        coordinator.revoke_token.return_value = record
        audit_log = AsyncMock()
        handler = LogoutUserHandler(
            rotation_coordinator=coordinator, audit_log=audit_log, logger=Mock()
        )

        await handler.handle(LogoutUser(refresh_token="t"))

        coordinator.revoke_token.assert_awaited_once_with("t", RevocationReason.LOGOUT)
        assert audit_log.log.call_args.kwargs["user_id"] == record.user_id
        assert audit_log.log.call_args.kwargs["resource_id"] == record.id

    async def test_logout_all_returns_count(self):
        coordinator = AsyncMock()
        coordinator.revoke_all_for_user.return_value = 4
        audit_log = AsyncMock()
        handler = LogoutAllSessionsHandler(
            rotation_coordinator=coordinator, audit_log=audit_log
        )
        user_id = uuid7()

        result = await handler.handle(LogoutAllSessions(user_id=user_id))

        assert isinstance(result, Success)
        assert result.value == 4
        assert audit_log.log.call_args.args[0] == AuditAction.AUTH_LOGOUT_ALL
        assert audit_log.log.call_args.kwargs["context"] == {"sessions_revoked": 4}
