"""Integration tests for refresh token and bcrypt password services."""

import re
from datetime import UTC, datetime, timedelta

import pytest

from authcore.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from authcore.infrastructure.security.refresh_token_service import (
    RefreshTokenService,
)


@pytest.mark.integration
class TestRefreshTokenService:
    def test_token_is_long_urlsafe_and_hashed(self):
        service = RefreshTokenService()

        token, token_hash = service.generate_token()

        assert len(token) >= 43
        assert re.fullmatch(r"[A-Za-z0-9_-]+", token)
        assert re.fullmatch(r"[0-9a-f]{64}", token_hash)
        assert token_hash != token

    def test_hash_is_deterministic(self):
        service = RefreshTokenService()
        token, token_hash = service.generate_token()

        assert service.hash_token(token) == token_hash

    def test_hash_accepts_lone_surrogates(self):
        digest = RefreshTokenService.hash_token("bad\ud800token")

        assert len(digest) == 64
        assert digest == RefreshTokenService.hash_token("bad\ud800token")
        assert digest != RefreshTokenService.hash_token("badtoken")

    def test_tokens_are_unique(self):
        service = RefreshTokenService()

        tokens = {service.generate_token()[0] for _ in range(100)}

        assert len(tokens) == 100

    def test_expiration_uses_ttl(self):
        service = RefreshTokenService(ttl_seconds=3600)
        now = datetime(2026, 1, 1, tzinfo=UTC)

        assert service.calculate_expiration(now) == now + timedelta(hours=1)
        assert service.ttl_seconds == 3600


@pytest.mark.integration
class TestBcryptPasswordService:
    def test_hash_and_verify(self):
        service = BcryptPasswordService(cost_factor=4)

        password_hash = service.hash_password("s3cret!")

        assert password_hash.startswith("$2b$04$")
        assert service.verify_password("s3cret!", password_hash) is True
        assert service.verify_password("wrong", password_hash) is False

    def test_malformed_hash_does_not_raise(self):
        service = BcryptPasswordService(cost_factor=4)

        assert service.verify_password("s3cret!", "not-a-bcrypt-hash") is False

    @pytest.mark.parametrize("cost", [3, 32])
    def test_cost_factor_bounds(self, cost):
        with pytest.raises(ValueError):
            BcryptPasswordService(cost_factor=cost)
