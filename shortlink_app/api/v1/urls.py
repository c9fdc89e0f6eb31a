from fastapi import APIRouter, Depends, status
from shortlink_app.schemas.short_url import ShortenRequest, ShortenResponse, ErrorResponse
from shortlink_app.services.shortening_service import ShorteningService
from shortlink_app.dependencies import get_shortening_service, enforce_rate_limit

router = APIRouter(tags=["URLs"])


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Short ID allocation failed"},
    },
    summary="Shorten URL",
)
def create_short_url(
    payload: ShortenRequest,
    shortening_service: ShorteningService = Depends(get_shortening_service)
):
    """Create a shortened URL from a long URL"""
    return shortening_service.create_short_url(payload.original_url)
