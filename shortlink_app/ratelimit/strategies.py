"""
Rate limiter strategies using Strategy Pattern.
Allows switching between different counter backends (Redis, In-Memory, Null).

All strategies implement a fixed window: requests are counted per key
within windows of `window_seconds`, and the count starts over in each new window.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import redis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of counting one request against a key"""
    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # seconds until the current window ends

    def headers(self) -> Dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_after),
        }


class RateLimitStrategy(ABC):
    """
    Abstract base class for rate limiter strategies.

    Methods are plain sync calls; FastAPI runs the rate limit dependency in
    its thread pool, so a slow backend never blocks the event loop.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time
    ):
        """
        Args:
            max_requests: Requests allowed per key per window
            window_seconds: Window length in seconds
            clock: Time source (seconds since epoch), replaceable in tests
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock

    def _window(self) -> Tuple[int, int]:
        """Return (window index, seconds until the window ends)"""
        now = int(self.clock())
        return now // self.window_seconds, self.window_seconds - (now % self.window_seconds)

    def _result(self, count: int, reset_after: int) -> RateLimitResult:
        return RateLimitResult(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_after=reset_after,
        )

    @abstractmethod
    def hit(self, key: str) -> RateLimitResult:
        """
        Count one request for key in the current window.

        Args:
            key: Client identifier (e.g. IP address)

        Returns:
            RateLimitResult telling whether the request is allowed
        """
        pass

    def close(self) -> None:
        """Release backend connections (called on app shutdown)"""
        pass


class RedisRateLimiter(RateLimitStrategy):
    """
    Redis implementation with INCR + EXPIRE per window key.

    Production-ready:
    - Shared across all API processes
    - INCR is atomic, so concurrent requests are never under-counted
    - Keys expire with their window

    If Redis errors, the request is allowed (fail open) and a warning is logged.
    """

    KEY_PREFIX = "rl"

    def __init__(self, redis_client: redis.Redis, max_requests: int, window_seconds: int, **kwargs):
        """
        Initialize Redis rate limiter.

        Args:
            redis_client: Redis client instance (redis.Redis)
        """
        super().__init__(max_requests, window_seconds, **kwargs)
        self.redis = redis_client

    def hit(self, key: str) -> RateLimitResult:
        window, reset_after = self._window()
        redis_key = f"{self.KEY_PREFIX}:{key}:{window}"

        try:
            # One round trip; the key name carries the window, so refreshing the TTL is harmless
            pipe = self.redis.pipeline()
            pipe.incr(redis_key)
            pipe.expire(redis_key, self.window_seconds)
            count, _ = pipe.execute()
        except redis.RedisError as e:
            logger.warning("Redis rate limit error, allowing request: %s", e)
            return RateLimitResult(
                allowed=True,
                limit=self.max_requests,
                remaining=self.max_requests,
                reset_after=reset_after,
            )

        return self._result(int(count), reset_after)

    def close(self) -> None:
        self.redis.close()


class InMemoryRateLimiter(RateLimitStrategy):
    """
    In-memory rate limiter using a Python dict.

    Pros:
    - Simple (no external dependencies)
    - Good for development and testing

    Cons:
    - Not distributed (each process counts separately)
    - Lost on restart

    Only the current window's counts are kept; they are dropped in one go
    when the window index moves on.
    """

    def __init__(self, max_requests: int, window_seconds: int, **kwargs):
        super().__init__(max_requests, window_seconds, **kwargs)
        self._window_index = None
        self._counts: Dict[str, int] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitResult:
        window, reset_after = self._window()

        with self._lock:
            if window != self._window_index:
                self._counts = {}
                self._window_index = window
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count

        return self._result(count, reset_after)


class NullRateLimiter(RateLimitStrategy):
    """
    Null Object Pattern - limiter that allows everything.

    Used for:
    - Test environment
    - Disabling rate limiting in certain deployments
    """

    def __init__(self, max_requests: int = 0, window_seconds: int = 1, **kwargs):
        super().__init__(max_requests, window_seconds, **kwargs)

    def hit(self, key: str) -> RateLimitResult:
        """Always allowed"""
        _, reset_after = self._window()
        return RateLimitResult(
            allowed=True,
            limit=self.max_requests,
            remaining=self.max_requests,
            reset_after=reset_after,
        )
