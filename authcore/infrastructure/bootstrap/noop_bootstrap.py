"""Default user bootstrap hook.

The owning application replaces this with a hook that seeds its own
defaults (for the calendar backend: a personal calendar).
"""

from authcore.domain.entities.user import User


class NoOpUserBootstrap:
    """UserBootstrapProtocol implementation that creates nothing."""

    async def ensure_user_defaults(self, user: User) -> None:
        return None
