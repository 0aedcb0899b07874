"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from authcore.domain.protocols import PasswordHashingProtocol, RefreshTokenRepository
"""

from authcore.domain.protocols.access_token_service_protocol import (
    AccessTokenClaims,
    AccessTokenServiceProtocol,
)
from authcore.domain.protocols.audit_protocol import AuditProtocol
from authcore.domain.protocols.logger_protocol import LoggerProtocol
from authcore.domain.protocols.login_attempt_tracker_protocol import (
    LoginAttemptTrackerProtocol,
)
from authcore.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from authcore.domain.protocols.refresh_token_repository import (
    NewRefreshToken,
    RefreshTokenData,
    RefreshTokenRepository,
)
from authcore.domain.protocols.refresh_token_service_protocol import (
    RefreshTokenServiceProtocol,
)
from authcore.domain.protocols.user_bootstrap_protocol import UserBootstrapProtocol
from authcore.domain.protocols.user_repository import UserRepository

__all__ = [
    # Service protocols
    "AccessTokenClaims",
    "AccessTokenServiceProtocol",
    "AuditProtocol",
    "LoggerProtocol",
    "LoginAttemptTrackerProtocol",
    "PasswordHashingProtocol",
    "RefreshTokenServiceProtocol",
    "UserBootstrapProtocol",
    # Repository protocols
    "NewRefreshToken",
    "RefreshTokenData",
    "RefreshTokenRepository",
    "UserRepository",
]
