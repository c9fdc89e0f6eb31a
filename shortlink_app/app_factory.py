"""FastAPI application factory."""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from sqlalchemy.orm import sessionmaker

from shortlink_app.config import Settings, settings as default_settings
from shortlink_app.database.connection import build_engine, build_session_factory, init_db
from shortlink_app.logging_config import setup_logging
from shortlink_app.api.error_handlers import register_exception_handlers
from shortlink_app.api.middleware import RequestLoggingMiddleware
from shortlink_app.api.v1 import urls, redirect, analytics
from shortlink_app.ratelimit import RateLimiterFactory, RateLimiterBackend, RateLimitStrategy
from shortlink_app.schemas.short_url import HealthResponse
from shortlink_app.services.analytics_service import AnalyticsService
from shortlink_app.services.short_id_strategies import ShortIdStrategy, RandomShortIdStrategy
from shortlink_app.services.shortening_service import ShorteningService
from shortlink_app.storage import UrlStore, UrlStoreFactory, StoreBackend

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
    store: Optional[UrlStore] = None,
    generator: Optional[ShortIdStrategy] = None,
    rate_limiter: Optional[RateLimitStrategy] = None,
) -> FastAPI:
    """
    Build the FastAPI app and everything it depends on.

    Collaborators are created here once and kept on `app.state`; any of them
    can be passed in instead (tests inject a test database or stub generator).
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, json_format=settings.log_json or settings.is_production)

    engine = None
    if store is None:
        backend = StoreBackend(settings.store_backend)
        if backend == StoreBackend.SQL and session_factory is None:
            engine = build_engine(settings.database_url)
            # Create database tables
            init_db(engine)
            session_factory = build_session_factory(engine)
        store = UrlStoreFactory.create(backend, session_factory=session_factory)

    generator = generator or RandomShortIdStrategy(length=settings.short_id_length)
    owns_rate_limiter = rate_limiter is None
    if owns_rate_limiter:
        rate_limiter = RateLimiterFactory.create(
            RateLimiterBackend(settings.rate_limit_backend), settings
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Only resources built here are released; injected ones belong to the caller
        if engine is not None:
            engine.dispose()
        if owns_rate_limiter:
            rate_limiter.close()
        logger.info("%s shut down", settings.app_name)

    app = FastAPI(
        lifespan=lifespan,
        title=settings.app_name,
        version=settings.app_version,
        description="URL shortener with collision-safe short IDs and atomic click analytics",
        # Starlette debug mode serves tracebacks instead of the JSON 500 handler
        debug=settings.debug and settings.is_development,
        docs_url="/documentation",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.store = store
    app.state.rate_limiter = rate_limiter
    app.state.shortening_service = ShorteningService(
        store=store,
        generator=generator,
        base_url=settings.base_url,
        max_attempts=settings.max_attempts,
    )
    app.state.analytics_service = AnalyticsService(store=store)
    app.state.started_at = time.monotonic()

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app, settings)

    @app.get("/", tags=["System"])
    def read_root(request: Request):
        """Root endpoint with API information"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "docs": "/documentation",
        }

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    def health_check(request: Request):
        """Health check endpoint"""
        database_ok = request.app.state.store.health_check()
        return HealthResponse(
            status="healthy" if database_ok else "unhealthy",
            environment=settings.environment,
            database="healthy" if database_ok else "unhealthy",
            timestamp=datetime.now(timezone.utc),
            uptime=time.monotonic() - request.app.state.started_at,
        )

    ######## Include routers
    # Catch-all /{short_id} must come last
    app.include_router(urls.router)
    app.include_router(analytics.router)
    app.include_router(redirect.router)

    logger.info(
        "%s %s configured (environment=%s, store=%s, base_url=%s)",
        settings.app_name,
        settings.app_version,
        settings.environment,
        settings.store_backend,
        settings.base_url,
    )
    return app
