"""Unit tests for container factories.

Settings are patched at the import location
(authcore.core.container.infrastructure.get_settings) and the lru_cache of
each factory is cleared around every test.
"""

from unittest.mock import MagicMock, patch

import pytest

from authcore.core.container import infrastructure
from authcore.infrastructure.audit.database_adapter import DatabaseAuditAdapter
from authcore.infrastructure.audit.logger_adapter import LoggerAuditAdapter
from authcore.infrastructure.login_attempts.memory_tracker import (
    InMemoryLoginAttemptTracker,
)
from authcore.infrastructure.login_attempts.redis_tracker import (
    RedisLoginAttemptTracker,
)


def make_settings(**overrides) -> MagicMock:
    settings = MagicMock()
    settings.log_json = True
    settings.log_level = "WARNING"
    settings.redis_url = None
    settings.login_max_failures = 5
    settings.login_window_seconds = 900
    settings.login_lockout_seconds = 900
    settings.login_key_by_origin = False
    settings.audit_backend = "database"
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


@pytest.fixture(autouse=True)
def clear_factory_caches():
    infrastructure.get_logger.cache_clear()
    infrastructure.get_login_attempt_tracker.cache_clear()
    yield
    infrastructure.get_logger.cache_clear()
    infrastructure.get_login_attempt_tracker.cache_clear()


@pytest.mark.unit
class TestGetAudit:
    def test_database_backend(self):
        session = MagicMock()
        with patch(
            "authcore.core.container.infrastructure.get_settings",
            return_value=make_settings(),
        ):
            audit = infrastructure.get_audit(session)

        assert isinstance(audit, DatabaseAuditAdapter)
        assert audit.session is session

    def test_logger_backend(self):
        with patch(
            "authcore.core.container.infrastructure.get_settings",
            return_value=make_settings(audit_backend="logger"),
        ):
            audit = infrastructure.get_audit(MagicMock())

        assert isinstance(audit, LoggerAuditAdapter)


@pytest.mark.unit
class TestGetLoginAttemptTracker:
    def test_in_memory_without_redis_url(self):
        with patch(
            "authcore.core.container.infrastructure.get_settings",
            return_value=make_settings(login_max_failures=3),
        ):
            tracker = infrastructure.get_login_attempt_tracker()

        assert isinstance(tracker, InMemoryLoginAttemptTracker)
        assert tracker._max_failures == 3

    def test_redis_when_url_configured(self):
        with patch(
            "authcore.core.container.infrastructure.get_settings",
            return_value=make_settings(redis_url="redis://localhost:6379/0"),
        ):
            with patch("redis.asyncio.Redis.from_url") as mock_from_url:
                tracker = infrastructure.get_login_attempt_tracker()

        assert isinstance(tracker, RedisLoginAttemptTracker)
        mock_from_url.assert_called_once()
        assert mock_from_url.call_args.kwargs["decode_responses"] is True

    def test_tracker_is_singleton(self):
        with patch(
            "authcore.core.container.infrastructure.get_settings",
            return_value=make_settings(),
        ):
            first = infrastructure.get_login_attempt_tracker()
            second = infrastructure.get_login_attempt_tracker()

        assert first is second
