"""Sliding-window rate limiting for unauthenticated endpoints.

A limiter is built once when the application is created and handed to the
endpoints that need it, so its lifetime is the process lifetime. The in-memory
variant only throttles within one process; the Redis variant shares the window
across every instance pointed at the same Redis database.
"""

import threading
import time
import uuid
from collections import defaultdict, deque
from typing import Callable, Protocol

from campus_portal.utils.logging import get_logger

logger = get_logger(__name__)


class RateLimiter(Protocol):
    async def check_and_record(self, key: str) -> bool: ...


class InMemoryRateLimiter:
    """Per-key deque of request timestamps guarded by a lock."""

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be > 0")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: dict[str, deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def check_and_record_sync(self, key: str) -> bool:
        with self._lock:
            now = self._clock()
            cutoff = now - self.window_seconds
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now

            timestamps = self._requests[key]
            while timestamps and timestamps[0] <= cutoff:
                timestamps.popleft()

            if len(timestamps) >= self.max_requests:
                return False

            timestamps.append(now)
            return True

    def _sweep(self, cutoff: float) -> None:
        # Drop keys whose newest request has left the window.
        stale = [key for key, timestamps in self._requests.items() if not timestamps or timestamps[-1] <= cutoff]
        for key in stale:
            del self._requests[key]
        if stale:
            logger.debug("Evicted %d idle rate-limit keys", len(stale))

    async def check_and_record(self, key: str) -> bool:
        return self.check_and_record_sync(key)


class RedisRateLimiter:
    """Same window semantics on a Redis sorted set per key (score = timestamp)."""

    def __init__(
        self,
        redis_client,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        prefix: str = "rate_limit:",
        clock: Callable[[], float] = time.time,
    ):
        self.redis = redis_client
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.prefix = prefix
        self._clock = clock

    async def check_and_record(self, key: str) -> bool:
        redis_key = f"{self.prefix}{key}"
        now = self._clock()
        cutoff = now - self.window_seconds
        member = f"{now}:{uuid.uuid4().hex}"

        # Trim, record and count in one MULTI block so concurrent callers on
        # other instances always see each other's entries.
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.zremrangebyscore(redis_key, "-inf", cutoff)
            pipe.zadd(redis_key, {member: now})
            pipe.zcard(redis_key)
            pipe.expire(redis_key, int(self.window_seconds) + 1)
            _, _, count, _ = await pipe.execute()

        if count > self.max_requests:
            # Rejected requests do not occupy the window.
            await self.redis.zrem(redis_key, member)
            return False
        return True


def build_rate_limiter(backend: str, max_requests: int, window_seconds: float, redis_url: str = "") -> RateLimiter:
    if backend == "redis":
        import redis.asyncio as redis

        logger.info("Using Redis rate limiter at %s", redis_url)
        client = redis.from_url(redis_url, encoding="utf-8", decode_responses=True)
        return RedisRateLimiter(client, max_requests=max_requests, window_seconds=window_seconds)
    logger.info("Using in-memory rate limiter (%d requests / %.0fs)", max_requests, window_seconds)
    return InMemoryRateLimiter(max_requests=max_requests, window_seconds=window_seconds)
