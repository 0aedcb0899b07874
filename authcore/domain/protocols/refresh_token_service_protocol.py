"""RefreshTokenServiceProtocol - refresh secret generation and hashing.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (RefreshTokenService)
- Application layer uses protocol, not concrete implementation
"""

from datetime import datetime
from typing import Protocol


class RefreshTokenServiceProtocol(Protocol):
    """Protocol for opaque refresh token generation.

    Implementations:
        - RefreshTokenService: authcore/infrastructure/security/refresh_token_service.py
    """

    @property
    def ttl_seconds(self) -> int:
        """Refresh token lifetime in seconds."""
        ...

    def generate_token(self) -> tuple[str, str]:
        """Generate refresh token and its hash.

        Returns:
            Tuple of (token, token_hash):
                - token: Plain token to return to the caller
                - token_hash: Deterministic digest to store
        """
        ...

    def hash_token(self, token: str) -> str:
        """Digest a presented token for lookup."""
        ...

    def calculate_expiration(self, now: datetime | None = None) -> datetime:
        """Expiration timestamp for a token issued at ``now``."""
        ...
