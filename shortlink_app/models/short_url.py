from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from shortlink_app.database.connection import Base
from shortlink_app.validators import MAX_SHORT_ID_LENGTH, MAX_URL_LENGTH


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShortUrl(Base):
    """
    Table model for short URL records.

    Lifecycle is create-once, read-many, increment-many:
    - short_id and original_url are never updated or deleted
    - click_count only moves up, one atomic UPDATE at a time

    The unique index on short_id is the backstop against two writers
    allocating the same identifier concurrently.
    """
    __tablename__ = "short_urls"
    __table_args__ = (
        CheckConstraint("click_count >= 0", name="ck_short_urls_click_count_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    original_url = Column(String(MAX_URL_LENGTH), nullable=False)
    # unique=True + index=True creates a unique index
    short_id = Column(String(MAX_SHORT_ID_LENGTH), unique=True, nullable=False, index=True)
    click_count = Column(Integer, nullable=False, default=0)
    # Indexed for time-ordered analytics queries
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
