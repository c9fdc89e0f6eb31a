"""
Exception handlers mapping shortlink errors to consistent JSON error responses.

Body shape for every failure:
    {"statusCode": 404, "error": "Not Found", "message": "...", "requestId": "..."}
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlink_app.api.middleware import REQUEST_ID_HEADER
from shortlink_app.config import Settings
from shortlink_app.exceptions import ShortLinkError, RateLimitExceededError
from shortlink_app.schemas.short_url import ErrorResponse

logger = logging.getLogger(__name__)


def _error_name(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _request_context(request: Request) -> dict:
    return {
        "request_id": getattr(request.state, "request_id", None),
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Attach the shortlink exception handlers to the app."""

    def build_response(
        request: Request,
        status_code: int,
        message: str,
        headers: dict = None,
        retry_after: int = None,
    ) -> JSONResponse:
        # Don't expose internal details of server errors in production
        if settings.is_production and status_code >= 500:
            message = "Internal Server Error"

        body = ErrorResponse(
            status_code=status_code,
            error=_error_name(status_code),
            message=message,
            request_id=getattr(request.state, "request_id", None),
            retry_after=retry_after,
        )
        return JSONResponse(
            status_code=status_code,
            content=body.model_dump(by_alias=True, exclude_none=True),
            headers=headers,
        )

    @app.exception_handler(ShortLinkError)
    async def handle_shortlink_error(request: Request, exc: ShortLinkError):
        context = _request_context(request)
        if exc.status_code >= 500:
            logger.error(
                "%s: %s",
                type(exc).__name__,
                exc.message,
                exc_info=exc if settings.is_development else None,
                extra=context,
            )
        else:
            logger.info("%s: %s", type(exc).__name__, exc.message, extra=context)

        if isinstance(exc, RateLimitExceededError):
            headers = dict(exc.headers)
            headers["Retry-After"] = str(exc.retry_after)
            return build_response(
                request, exc.status_code, exc.message, headers=headers, retry_after=exc.retry_after
            )

        return build_response(request, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        issues = ", ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ())) or 'root'}: {error.get('msg')}"
            for error in exc.errors()
        )
        logger.info("Request validation failed: %s", issues, extra=_request_context(request))
        return build_response(request, status.HTTP_400_BAD_REQUEST, f"Validation failed: {issues}")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return build_response(request, exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra=_request_context(request))
        # Answered by ServerErrorMiddleware, outside RequestLoggingMiddleware
        request_id = getattr(request.state, "request_id", None)
        headers = {REQUEST_ID_HEADER: request_id} if request_id else None
        return build_response(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", headers=headers
        )
