"""User bootstrap hook protocol.

Called once after a user is registered so the owning application can seed
default resources (a personal calendar, preferences). The session core does
not know what gets created.
"""

from typing import Protocol

from authcore.domain.entities.user import User


class UserBootstrapProtocol(Protocol):
    """Seeds default resources for a new account.

    Implementations:
        - NoOpUserBootstrap: does nothing (default wiring)
    """

    async def ensure_user_defaults(self, user: User) -> None:
        """Create missing default resources for ``user``.

        Must be idempotent. Exceptions propagate to the caller.
        """
        ...
