"""
Rate limiting module for the shortlink service.
Implements Strategy Pattern for flexible counter backends.
"""

from .strategies import (
    RateLimitResult,
    RateLimitStrategy,
    RedisRateLimiter,
    InMemoryRateLimiter,
    NullRateLimiter,
)
from .factory import RateLimiterFactory, RateLimiterBackend

__all__ = [
    "RateLimitResult",
    "RateLimitStrategy",
    "RedisRateLimiter",
    "InMemoryRateLimiter",
    "NullRateLimiter",
    "RateLimiterFactory",
    "RateLimiterBackend",
]
