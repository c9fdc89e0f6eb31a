"""
FastAPI dependencies for dependency injection.

Services are built once by the app factory and kept on `app.state`;
these functions hand them to the routes.

Pattern: Dependency Injection
- No module-level singletons
- Easy to test (build the app with stub collaborators)
"""

from fastapi import Depends, Request, Response

from shortlink_app.config import Settings
from shortlink_app.exceptions import RateLimitExceededError
from shortlink_app.ratelimit.strategies import RateLimitStrategy
from shortlink_app.services.analytics_service import AnalyticsService
from shortlink_app.services.shortening_service import ShorteningService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_shortening_service(request: Request) -> ShorteningService:
    return request.app.state.shortening_service


def get_analytics_service(request: Request) -> AnalyticsService:
    return request.app.state.analytics_service


def get_rate_limiter(request: Request) -> RateLimitStrategy:
    return request.app.state.rate_limiter


def enforce_rate_limit(
    request: Request,
    response: Response,
    limiter: RateLimitStrategy = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Count the request against the client's window.

    Adds X-RateLimit-* headers to the response; raises
    RateLimitExceededError (429) once the window is used up.
    Skipped entirely in the test environment. A plain def, so FastAPI runs
    it in the thread pool and a slow Redis only holds up this request.
    """
    if settings.is_test:
        return

    client_ip = request.client.host if request.client else "unknown"
    result = limiter.hit(client_ip)

    if not result.allowed:
        minutes = max(1, limiter.window_seconds // 60)
        raise RateLimitExceededError(
            f"Rate limit exceeded. Maximum {result.limit} requests per {minutes} minutes.",
            retry_after=result.reset_after,
            headers=result.headers(),
        )

    response.headers.update(result.headers())
