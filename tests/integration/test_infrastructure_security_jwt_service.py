"""Integration tests for JWT access token service.

Architecture:
- Tests against real PyJWT (no mocking)
- Verifies Result type error handling
- Tests security properties (expiration, tampering, issuer/audience)
"""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from authcore.core.enums import ErrorCode
from authcore.core.result import Failure, Success
from authcore.infrastructure.security.jwt_service import JWTService

SECRET = "x" * 32


def make_service(**overrides) -> JWTService:
    values = {"issuer": "cal3-backend", "audience": "cal3-users"}
    values.update(overrides)
    return JWTService(SECRET, **values)


@pytest.mark.integration
class TestJWTServiceIntegration:
    def test_short_secret_rejected(self):
        with pytest.raises(ValueError):
            JWTService("too-short", issuer="i", audience="a")

    def test_token_round_trips_claims(self):
        service = make_service()
        user_id = uuid7()

        token = service.generate_access_token(
            user_id=user_id, username="alice", role="user", jti="jti-1", expires_in=900
        )
        result = service.validate_access_token(token)

        assert isinstance(result, Success)
        claims = result.value
        assert claims.sub == user_id
        assert claims.username == "alice"
        assert claims.role == "user"
        assert claims.jti == "jti-1"
        assert claims.issuer == "cal3-backend"
        assert claims.audience == "cal3-users"
        assert claims.scope is None
        assert claims.expires_at - claims.issued_at == timedelta(seconds=900)

    def test_widget_scope_claim(self):
        service = make_service()

        token = service.generate_access_token(
            user_id=uuid7(),
            username="alice",
            role="user",
            jti="j",
            expires_in=86_400,
            scope="widget",
        )
        result = service.validate_access_token(token)

        assert isinstance(result, Success)
        assert result.value.scope == "widget"

    def test_expired_token(self):
        service = make_service()
        with freeze_time(datetime.now(UTC) - timedelta(hours=1)):
            token = service.generate_access_token(
                user_id=uuid7(), username="a", role="user", jti="j", expires_in=900
            )

        result = service.validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED

    def test_tampered_signature(self):
        service = make_service()
        token = service.generate_access_token(
            user_id=uuid7(), username="a", role="user", jti="j", expires_in=900
        )
        other = JWTService("y" * 32, issuer="cal3-backend", audience="cal3-users")

        result = other.validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    @pytest.mark.parametrize(
        "overrides", [{"issuer": "someone-else"}, {"audience": "other-app"}]
    )
    def test_wrong_issuer_or_audience(self, overrides):
        token = make_service(**overrides).generate_access_token(
            user_id=uuid7(), username="a", role="user", jti="j", expires_in=900
        )

        result = make_service().validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_non_uuid_subject_is_invalid(self):
        now = int(datetime.now(UTC).timestamp())
        token = jwt.encode(
            {
                "sub": "not-a-uuid",
                "jti": "j",
                "iss": "cal3-backend",
                "aud": "cal3-users",
                "iat": now,
                "exp": now + 900,
            },
            SECRET,
            algorithm="HS256",
        )

        result = make_service().validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_garbage_token(self):
        result = make_service().validate_access_token("not.a.jwt")

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid access token"
