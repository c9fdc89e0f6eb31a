"""
Plain value objects passed between the store, the services and the API layer.

Stores return these instead of ORM instances so callers never hold a
session-bound object and every backend hands back the same shape.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


@dataclass(frozen=True)
class ShortUrlRecord:
    original_url: str
    short_id: str
    click_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Any) -> "ShortUrlRecord":
        """Build from anything with matching attributes (ORM instance or result Row)."""
        created_at = row.created_at
        # SQLite hands back naive datetimes; stored values are always UTC
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            id=row.id,
            original_url=row.original_url,
            short_id=row.short_id,
            click_count=row.click_count,
            created_at=created_at,
        )


@dataclass(frozen=True)
class ShortenedUrl:
    """External shape of a freshly created short URL."""
    short_id: str
    short_url: str
    original_url: str


@dataclass(frozen=True)
class UrlAnalytics:
    short_id: str
    original_url: str
    click_count: int
    created_at: datetime

    @classmethod
    def from_record(cls, record: ShortUrlRecord) -> "UrlAnalytics":
        return cls(
            short_id=record.short_id,
            original_url=record.original_url,
            click_count=record.click_count,
            created_at=record.created_at,
        )
