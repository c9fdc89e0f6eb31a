from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from shortlink_app.schemas.short_url import ErrorResponse
from shortlink_app.services.analytics_service import AnalyticsService
from shortlink_app.dependencies import get_analytics_service

router = APIRouter(tags=["URLs"])


@router.get(
    "/{short_id}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={404: {"model": ErrorResponse, "description": "Short URL not found"}},
    summary="Redirect to original URL",
)
def redirect_to_original_url(
    short_id: str,
    analytics_service: AnalyticsService = Depends(get_analytics_service)
):
    """
    Redirect to the original URL and count the click.

    The click is counted synchronously in the same atomic store call that
    resolves the URL, so analytics are exact as soon as the redirect returns.
    """
    original_url = analytics_service.resolve_and_count(short_id)
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
