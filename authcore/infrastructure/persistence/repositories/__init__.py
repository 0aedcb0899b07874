"""SQLAlchemy repository implementations."""

from authcore.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from authcore.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = ["RefreshTokenRepository", "UserRepository"]
