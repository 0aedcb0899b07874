"""In-memory login attempt tracker.

Process-local rolling-window counters guarded by an asyncio lock. Suitable
for a single service instance; use RedisLoginAttemptTracker when several
instances must share counters.

Entries are evicted once their window and lockout have both elapsed: on
access, through purge_expired(), and by a full sweep that register_failure
runs at most once per window.
"""

import asyncio
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from authcore.domain.entities.login_attempt import LoginAttemptState
from authcore.infrastructure.login_attempts.keys import attempt_key


@dataclass
class _Entry:
    failures: deque[datetime] = field(default_factory=deque)
    locked_until: datetime | None = None


class InMemoryLoginAttemptTracker:
    """Rolling-window failure counter with lockout.

    Args:
        max_failures: Failures inside the window that trigger a lockout.
        window_seconds: Rolling window length.
        lockout_seconds: Lockout duration.
        key_by_origin: Count per identity and client IP.

    Example:
        >>> tracker = InMemoryLoginAttemptTracker(max_failures=5)
        >>> state = await tracker.register_failure("alice", "203.0.113.7")
        >>> state.failure_count
        1
    """

    def __init__(
        self,
        *,
        max_failures: int = 5,
        window_seconds: int = 900,
        lockout_seconds: int = 900,
        key_by_origin: bool = False,
    ) -> None:
        if max_failures < 1:
            raise ValueError("max_failures must be at least 1")

        self._max_failures = max_failures
        self._window = timedelta(seconds=window_seconds)
        self._lockout = timedelta(seconds=lockout_seconds)
        self._key_by_origin = key_by_origin
        self._entries: dict[str, _Entry] = {}
        self._lock = asyncio.Lock()
        self._next_sweep_at: datetime | None = None

    async def register_failure(
        self, identity: str, origin: str | None = None
    ) -> LoginAttemptState:
        """Count one failure; lock the key when the threshold is reached."""
        key = attempt_key(identity, origin, key_by_origin=self._key_by_origin)
        now = datetime.now(UTC)

        async with self._lock:
            if self._next_sweep_at is None or now >= self._next_sweep_at:
                self._sweep(now)
                self._next_sweep_at = now + self._window

            entry = self._entries.setdefault(key, _Entry())
            self._prune(entry, now)
            entry.failures.append(now)

            if len(entry.failures) >= self._max_failures:
                entry.locked_until = now + self._lockout

            return self._snapshot(key, entry)

    async def reset(self, identity: str, origin: str | None = None) -> None:
        """Forget every failure and lockout for the key."""
        key = attempt_key(identity, origin, key_by_origin=self._key_by_origin)
        async with self._lock:
            self._entries.pop(key, None)

    async def get_state(
        self, identity: str, origin: str | None = None
    ) -> LoginAttemptState:
        """Current state for the key (evicting it if fully expired)."""
        key = attempt_key(identity, origin, key_by_origin=self._key_by_origin)
        now = datetime.now(UTC)

        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return LoginAttemptState(key=key)

            self._prune(entry, now)
            if self._is_expired(entry):
                del self._entries[key]
                return LoginAttemptState(key=key)

            return self._snapshot(key, entry)

    async def purge_expired(self) -> int:
        """Evict every fully expired entry.

        Returns:
            Number of entries removed.
        """
        now = datetime.now(UTC)
        async with self._lock:
            return self._sweep(now)

    def __len__(self) -> int:
        return len(self._entries)

    def _sweep(self, now: datetime) -> int:
        expired = []
        for key, entry in self._entries.items():
            self._prune(entry, now)
            if self._is_expired(entry):
                expired.append(key)
        for key in expired:
            del self._entries[key]
        return len(expired)

    def _prune(self, entry: _Entry, now: datetime) -> None:
        cutoff = now - self._window
        while entry.failures and entry.failures[0] <= cutoff:
            entry.failures.popleft()
        if entry.locked_until is not None and entry.locked_until <= now:
            entry.locked_until = None

    @staticmethod
    def _is_expired(entry: _Entry) -> bool:
        return not entry.failures and entry.locked_until is None

    @staticmethod
    def _snapshot(key: str, entry: _Entry) -> LoginAttemptState:
        return LoginAttemptState(
            key=key,
            failure_count=len(entry.failures),
            locked_until=entry.locked_until,
        )
