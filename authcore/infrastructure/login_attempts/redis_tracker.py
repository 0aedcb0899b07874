"""Redis login attempt tracker.

Shares failure counters across service instances.

Data layout (per throttling key):
    {prefix}:fail:{key}  sorted set, one member per failure scored by epoch
                         seconds; members older than the window are trimmed
    {prefix}:lock:{key}  string holding the lockout end (epoch seconds),
                         expiring with the lockout

Window trim, insert, count and TTL refresh run in one MULTI/EXEC
transaction, so concurrent failures for the same key are all counted.

Fail-open: a RedisError is logged and reported as a clean state. An
unavailable cache must not lock every user out.
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from redis.asyncio import Redis
from redis.exceptions import RedisError

from authcore.domain.entities.login_attempt import LoginAttemptState
from authcore.domain.protocols.logger_protocol import LoggerProtocol
from authcore.infrastructure.login_attempts.keys import attempt_key


class RedisLoginAttemptTracker:
    """Redis-backed rolling-window failure counter with lockout.

    Usage:
        redis_client = Redis.from_url(settings.redis_url)
        tracker = RedisLoginAttemptTracker(redis_client, logger=logger)
        state = await tracker.register_failure("alice", "203.0.113.7")
    """

    def __init__(
        self,
        redis_client: Redis,
        *,
        logger: LoggerProtocol,
        max_failures: int = 5,
        window_seconds: int = 900,
        lockout_seconds: int = 900,
        key_by_origin: bool = False,
        key_prefix: str = "login_attempts",
    ) -> None:
        if max_failures < 1:
            raise ValueError("max_failures must be at least 1")

        self._redis = redis_client
        self._logger = logger
        self._max_failures = max_failures
        self._window_seconds = window_seconds
        self._lockout_seconds = lockout_seconds
        self._key_by_origin = key_by_origin
        self._prefix = key_prefix

    async def register_failure(
        self, identity: str, origin: str | None = None
    ) -> LoginAttemptState:
        """Count one failure; set the lock key when the threshold is reached."""
        key = attempt_key(identity, origin, key_by_origin=self._key_by_origin)
        fail_key, lock_key = self._keys(key)
        now = datetime.now(UTC)
        now_ts = now.timestamp()

        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.zremrangebyscore(fail_key, "-inf", now_ts - self._window_seconds)
                pipe.zadd(fail_key, {f"{now_ts}:{uuid4().hex}": now_ts})
                pipe.zcard(fail_key)
                pipe.expire(fail_key, self._window_seconds)
                _, _, count, _ = await pipe.execute()

            if count >= self._max_failures:
                lock_end = now + timedelta(seconds=self._lockout_seconds)
                await self._redis.set(
                    lock_key, str(lock_end.timestamp()), ex=self._lockout_seconds
                )
                locked_until: datetime | None = lock_end
                self._logger.warning(
                    "Login identity locked",
                    failure_count=count,
                    lockout_seconds=self._lockout_seconds,
                )
            else:
                locked_until = await self._read_lock(lock_key, now)

            return LoginAttemptState(
                key=key, failure_count=int(count), locked_until=locked_until
            )
        except RedisError as e:
            self._logger.error(
                "Login attempt tracking unavailable, failing open",
                error=e,
                operation="register_failure",
            )
            return LoginAttemptState(key=key)

    async def reset(self, identity: str, origin: str | None = None) -> None:
        """Delete the failure set and lock key."""
        key = attempt_key(identity, origin, key_by_origin=self._key_by_origin)
        try:
            await self._redis.delete(*self._keys(key))
        except RedisError as e:
            self._logger.error(
                "Login attempt reset failed",
                error=e,
                operation="reset",
            )

    async def get_state(
        self, identity: str, origin: str | None = None
    ) -> LoginAttemptState:
        """Count failures inside the window and read the lock key."""
        key = attempt_key(identity, origin, key_by_origin=self._key_by_origin)
        fail_key, lock_key = self._keys(key)
        now = datetime.now(UTC)
        now_ts = now.timestamp()

        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.zremrangebyscore(fail_key, "-inf", now_ts - self._window_seconds)
                pipe.zcard(fail_key)
                _, count = await pipe.execute()

            locked_until = await self._read_lock(lock_key, now)
            return LoginAttemptState(
                key=key, failure_count=int(count), locked_until=locked_until
            )
        except RedisError as e:
            self._logger.error(
                "Login attempt tracking unavailable, failing open",
                error=e,
                operation="get_state",
            )
            return LoginAttemptState(key=key)

    async def _read_lock(self, lock_key: str, now: datetime) -> datetime | None:
        raw = await self._redis.get(lock_key)
        if raw is None:
            return None
        locked_until = datetime.fromtimestamp(float(raw), UTC)
        return locked_until if locked_until > now else None

    def _keys(self, key: str) -> tuple[str, str]:
        return f"{self._prefix}:fail:{key}", f"{self._prefix}:lock:{key}"
