"""Login attempt tracker protocol.

Per-identity failure counter with a rolling window and lockout. Injected
into the login handler; never a module-level singleton.

Lifecycle:
    - register_failure() on every failed login, including unknown identities
    - get_state() before verifying credentials to refuse locked identities
    - reset() on successful login
    - State expires on its own once the window and lockout have passed
"""

from typing import Protocol

from authcore.domain.entities.login_attempt import LoginAttemptState


class LoginAttemptTrackerProtocol(Protocol):
    """Failed-login throttling interface.

    Implementations:
        - InMemoryLoginAttemptTracker: process-local TTL map (single instance)
        - RedisLoginAttemptTracker: shared Redis state (horizontal scaling)
    """

    async def register_failure(
        self, identity: str, origin: str | None = None
    ) -> LoginAttemptState:
        """Record one failure and return the updated state.

        Args:
            identity: Username or email as typed by the caller.
            origin: Client IP address (used when keying by origin).

        Returns:
            State after counting this failure.
        """
        ...

    async def reset(self, identity: str, origin: str | None = None) -> None:
        """Clear the counter and any lockout for the identity."""
        ...

    async def get_state(
        self, identity: str, origin: str | None = None
    ) -> LoginAttemptState:
        """Return the current state without modifying it."""
        ...
