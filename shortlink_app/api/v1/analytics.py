from fastapi import APIRouter, Depends
from shortlink_app.schemas.short_url import AnalyticsResponse, ErrorResponse
from shortlink_app.services.analytics_service import AnalyticsService
from shortlink_app.dependencies import get_analytics_service

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get(
    "/{short_id}",
    response_model=AnalyticsResponse,
    responses={404: {"model": ErrorResponse, "description": "Short URL not found"}},
    summary="Get URL analytics",
)
def get_url_analytics(
    short_id: str,
    analytics_service: AnalyticsService = Depends(get_analytics_service)
):
    """Get analytics data for a shortened URL (read-only, does not count as a click)"""
    return analytics_service.get_analytics(short_id)
