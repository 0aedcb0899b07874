"""Refresh token service.

Generates opaque refresh secrets and their lookup digests.

Token Strategy:
    - Opaque tokens (NOT JWT, no claims)
    - 64 random bytes (512 bits), urlsafe base64 without padding (86 chars)
    - SHA-256 hex digest stored; the digest is deterministic so the record
      can be found by an indexed equality lookup
    - Rotated on every use
"""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta

_TOKEN_BYTES = 64


class RefreshTokenService:
    """Refresh token generation and hashing.

    Usage:
        service = RefreshTokenService(ttl_seconds=1_209_600)

        token, token_hash = service.generate_token()
        # Store token_hash, return token to the caller

        # Later: look the presented token up by its digest
        record = await repo.find_by_token_hash(service.hash_token(presented))
    """

    def __init__(self, ttl_seconds: int = 1_209_600) -> None:
        """Initialize refresh token service.

        Args:
            ttl_seconds: Token lifetime (default: 14 days).

        Note:
            Expiration is tracked in the database, not in the token itself.
        """
        self._ttl_seconds = ttl_seconds

    @property
    def ttl_seconds(self) -> int:
        """Configured refresh token lifetime."""
        return self._ttl_seconds

    def generate_token(self) -> tuple[str, str]:
        """Generate refresh token and its hash.

        Returns:
            Tuple of (token, token_hash):
                - token: Plain token to return to the caller (urlsafe base64)
                - token_hash: SHA-256 hex digest to store

        Example:
            >>> token, token_hash = RefreshTokenService().generate_token()
            >>> len(token)
            86
            >>> len(token_hash)
            64
        """
        token = secrets.token_urlsafe(_TOKEN_BYTES)
        return token, self.hash_token(token)

    @staticmethod
    def hash_token(token: str) -> str:
        """Digest a presented token for lookup.

        Args:
            token: Plain token.

        Any string digests, including one carrying lone surrogates, so a
        malformed token is simply unknown rather than an encoding error.

        Returns:
            Lowercase SHA-256 hex digest (same input, same digest).
        """
        return hashlib.sha256(token.encode("utf-8", "surrogatepass")).hexdigest()

    def calculate_expiration(self, now: datetime | None = None) -> datetime:
        """Calculate expiration timestamp for a new token.

        Args:
            now: Issue time (defaults to current UTC time).

        Returns:
            Expiration datetime (UTC).
        """
        return (now or datetime.now(UTC)) + timedelta(seconds=self._ttl_seconds)
