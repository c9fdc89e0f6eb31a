"""
Factory for creating rate limiter instances.
"""

import logging
from enum import Enum

import redis

from .strategies import RateLimitStrategy, RedisRateLimiter, InMemoryRateLimiter, NullRateLimiter
from shortlink_app.config import Settings

logger = logging.getLogger(__name__)


class RateLimiterBackend(Enum):
    """Available rate limiter backends"""
    REDIS = "redis"
    MEMORY = "memory"
    NULL = "null"


class RateLimiterFactory:
    """
    Simple factory for creating rate limiter instances.

    Limits come from settings; called once by the app factory at startup.
    """

    @classmethod
    def create(cls, backend: RateLimiterBackend, settings: Settings) -> RateLimitStrategy:
        """
        Create a rate limiter.

        Args:
            backend: Type of limiter backend (from enum)
            settings: Application settings (limits, redis_url)

        Returns:
            RateLimitStrategy instance
        """
        max_requests = settings.rate_limit_max
        window_seconds = settings.rate_limit_window_seconds

        if backend == RateLimiterBackend.REDIS:
            try:
                redis_client = redis.from_url(
                    settings.redis_url,
                    decode_responses=True,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )

                # Test connection immediately
                redis_client.ping()

                logger.info("Redis rate limiter initialized")
                return RedisRateLimiter(redis_client, max_requests, window_seconds)

            except redis.RedisError as e:
                logger.warning("Redis connection failed (%s), falling back to in-memory rate limiter", e)
                return InMemoryRateLimiter(max_requests, window_seconds)

        elif backend == RateLimiterBackend.MEMORY:
            logger.info("In-memory rate limiter initialized")
            return InMemoryRateLimiter(max_requests, window_seconds)

        elif backend == RateLimiterBackend.NULL:
            logger.info("Rate limiting disabled")
            return NullRateLimiter(max_requests, window_seconds)

        raise ValueError(f"Unknown rate limiter backend: {backend}")
