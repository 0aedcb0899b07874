"""Login attempt tracker adapters.

Usage:
    from authcore.infrastructure.login_attempts import InMemoryLoginAttemptTracker
"""

from authcore.infrastructure.login_attempts.memory_tracker import (
    InMemoryLoginAttemptTracker,
)
from authcore.infrastructure.login_attempts.redis_tracker import (
    RedisLoginAttemptTracker,
)

__all__ = ["InMemoryLoginAttemptTracker", "RedisLoginAttemptTracker"]
