import logging

from shortlink_app.exceptions import NotFoundError
from shortlink_app.models.records import UrlAnalytics
from shortlink_app.storage.strategies import UrlStore
from shortlink_app.validators import validate_short_id

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Redirect resolution with click counting, and read-only analytics."""

    def __init__(self, store: UrlStore):
        self.store = store

    def resolve_and_count(self, short_id: str) -> str:
        """
        Get the original URL for a redirect and count the click.

        Lookup and increment are one atomic store call; there is no separate
        existence check before the increment.

        Raises:
            NotFoundError: unknown short id
        """
        short_id = validate_short_id(short_id)

        record = self.store.increment_and_fetch(short_id)
        if record is None:
            logger.info("Short ID not found: %s", short_id)
            raise NotFoundError("Short URL not found")

        logger.debug("Resolved %s -> %s (clicks=%d)", short_id, record.original_url, record.click_count)
        return record.original_url

    def get_analytics(self, short_id: str) -> UrlAnalytics:
        """
        Get click statistics for a short URL. Never changes click_count.

        Raises:
            NotFoundError: unknown short id
        """
        short_id = validate_short_id(short_id)

        record = self.store.find_analytics(short_id)
        if record is None:
            raise NotFoundError("Short URL not found")

        return UrlAnalytics.from_record(record)
