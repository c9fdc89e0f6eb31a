"""
Models for the shortlink service.

ShortUrl is the SQLAlchemy table model; the records module holds the plain
value objects the rest of the code works with.
"""

from .short_url import ShortUrl
from .records import ShortUrlRecord, ShortenedUrl, UrlAnalytics

__all__ = ["ShortUrl", "ShortUrlRecord", "ShortenedUrl", "UrlAnalytics"]
