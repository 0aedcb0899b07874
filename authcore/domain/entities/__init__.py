"""Domain entities package.

Usage:
    from authcore.domain.entities import User, LoginAttemptState
"""

from authcore.domain.entities.login_attempt import LoginAttemptState
from authcore.domain.entities.user import User

__all__ = ["LoginAttemptState", "User"]
