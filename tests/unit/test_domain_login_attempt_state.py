"""Unit tests for LoginAttemptState and RefreshTokenData rules."""

from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from authcore.domain.entities.login_attempt import LoginAttemptState
from authcore.domain.enums import LoginAttemptStatus
from authcore.domain.protocols import RefreshTokenData


@pytest.mark.unit
class TestLoginAttemptState:
    """Test NORMAL/WARNING/LOCKED derivation."""

    def test_fresh_state_is_normal(self):
        state = LoginAttemptState(key="alice")

        assert state.status == LoginAttemptStatus.NORMAL
        assert state.is_locked() is False

    def test_failures_without_lock_is_warning(self):
        state = LoginAttemptState(key="alice", failure_count=3)

        assert state.status == LoginAttemptStatus.WARNING

    def test_future_lock_is_locked(self):
        state = LoginAttemptState(
            key="alice",
            failure_count=5,
            locked_until=datetime.now(UTC) + timedelta(minutes=15),
        )

        assert state.is_locked() is True
        assert state.status == LoginAttemptStatus.LOCKED

    def test_elapsed_lock_is_not_locked(self):
        now = datetime.now(UTC)
        state = LoginAttemptState(
            key="alice", failure_count=5, locked_until=now - timedelta(seconds=1)
        )

        assert state.is_locked(now) is False
        assert state.status == LoginAttemptStatus.WARNING


@pytest.mark.unit
class TestRefreshTokenData:
    """Test expiry and usability of refresh token records."""

    def _record(self, **overrides) -> RefreshTokenData:
        values = {
            "id": uuid7(),
            "user_id": uuid7(),
            "token_hash": "a" * 64,
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

    def test_live_record_is_usable(self):
        assert self._record().is_usable() is True

    def test_expiry_boundary_counts_as_expired(self):
        now = datetime.now(UTC)
        record = self._record(expires_at=now)

        assert record.is_expired(now) is True
        assert record.is_usable(now) is False

    def test_revoked_record_is_not_usable(self):
        record = self._record(revoked=True, revocation_reason="logout")

        assert record.is_usable() is False
