"""Integration tests for audit adapters.

Tests cover:
- DatabaseAuditAdapter record/query against in-memory SQLite
- Query filters, pagination and limit cap
- LoggerAuditAdapter emits a structured event and refuses queries
"""

from unittest.mock import Mock

import pytest
from uuid_extensions import uuid7

from authcore.core.enums import ErrorCode
from authcore.core.result import Failure, Success
from authcore.domain.enums import AuditAction
from authcore.infrastructure.audit.database_adapter import DatabaseAuditAdapter
from authcore.infrastructure.audit.logger_adapter import LoggerAuditAdapter


@pytest.mark.integration
class TestDatabaseAuditAdapter:
    async def test_record_and_query(self, session):
        adapter = DatabaseAuditAdapter(session=session)
        user_id = uuid7()
        resource_id = uuid7()

        result = await adapter.record(
            action=AuditAction.AUTH_LOGIN_SUCCESS,
            resource_type="session",
            user_id=user_id,
            resource_id=resource_id,
            ip_address="10.0.0.1",
            user_agent="x" * 600,
            context={"jti": "abc"},
        )
        entries = await adapter.query(user_id=user_id)

        assert isinstance(result, Success)
        assert isinstance(entries, Success)
        assert len(entries.value) == 1
        entry = entries.value[0]
        assert entry["action"] == "auth.login.success"
        assert entry["user_id"] == str(user_id)
        assert entry["resource_id"] == str(resource_id)
        assert entry["context"] == {"jti": "abc"}
        assert len(entry["user_agent"]) == 500

    async def test_query_filters_by_action(self, session):
        adapter = DatabaseAuditAdapter(session=session)
        user_id = uuid7()
        for action in (
            AuditAction.AUTH_LOGIN_FAILURE,
            AuditAction.AUTH_LOGIN_FAILURE,
            AuditAction.AUTH_LOGOUT,
        ):
            await adapter.record(action=action, resource_type="session", user_id=user_id)

        failures = await adapter.query(action=AuditAction.AUTH_LOGIN_FAILURE)
        page = await adapter.query(user_id=user_id, limit=2, offset=2)

        assert isinstance(failures, Success)
        assert len(failures.value) == 2
        assert isinstance(page, Success)
        assert len(page.value) == 1

    async def test_anonymous_entry(self, session):
        adapter = DatabaseAuditAdapter(session=session)

        result = await adapter.record(
            action=AuditAction.AUTH_LOGIN_FAILURE,
            resource_type="session",
            context={"identity": "ghost", "reason": "user_not_found"},
        )
        entries = await adapter.query()

        assert isinstance(result, Success)
        assert isinstance(entries, Success)
        assert entries.value[0]["user_id"] is None


@pytest.mark.integration
class TestLoggerAuditAdapter:
    async def test_record_logs_event(self):
        logger = Mock()
        bound = Mock()
        logger.bind.return_value = bound
        adapter = LoggerAuditAdapter(logger)
        user_id = uuid7()

        result = await adapter.record(
            action=AuditAction.AUTH_LOGOUT, resource_type="session", user_id=user_id
        )

        assert isinstance(result, Success)
        logger.bind.assert_called_once_with(audit=True)
        bound.info.assert_called_once()
        assert bound.info.call_args.args[0] == "auth.logout"
        assert bound.info.call_args.kwargs["user_id"] == str(user_id)

    async def test_record_reports_logger_failure(self):
        logger = Mock()
        logger.bind.return_value.info.side_effect = RuntimeError("closed stream")
        adapter = LoggerAuditAdapter(logger)

        result = await adapter.record(
            action=AuditAction.AUTH_LOGOUT, resource_type="session"
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.AUDIT_RECORD_FAILED

    async def test_query_not_supported(self):
        adapter = LoggerAuditAdapter(Mock())

        result = await adapter.query()

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.AUDIT_QUERY_FAILED
