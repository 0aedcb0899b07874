"""Login attempt state for one throttling key."""

from dataclasses import dataclass
from datetime import UTC, datetime

from authcore.domain.enums import LoginAttemptStatus


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginAttemptState:
    """Snapshot of the failure counter for an identity.

    Attributes:
        key: Throttling key (normalized identity, optionally with origin).
        failure_count: Failures inside the current rolling window.
        locked_until: End of the lockout, None when not locked.
    """

    key: str
    failure_count: int = 0
    locked_until: datetime | None = None

    def is_locked(self, now: datetime | None = None) -> bool:
        """Check whether the lockout is still in force."""
        if self.locked_until is None:
            return False
        return self.locked_until > (now or datetime.now(UTC))

    @property
    def status(self) -> LoginAttemptStatus:
        """Current position in the NORMAL/WARNING/LOCKED state machine."""
        if self.is_locked():
            return LoginAttemptStatus.LOCKED
        if self.failure_count > 0:
            return LoginAttemptStatus.WARNING
        return LoginAttemptStatus.NORMAL
