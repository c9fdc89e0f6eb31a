"""
Tests for redirect resolution, click counting and analytics reads.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest

from shortlink_app.exceptions import NotFoundError, ValidationError


class TestResolveAndCount:
    """Test that resolving counts every click exactly once"""

    def test_round_trip_returns_original_url(self, shortening_service, analytics_service):
        url = "https://example.com/some/path?q=1&lang=en#section"
        created = shortening_service.create_short_url(url)

        assert analytics_service.resolve_and_count(created.short_id) == url

    def test_each_resolve_adds_one_click(self, shortening_service, analytics_service):
        created = shortening_service.create_short_url("https://example.com")

        for expected in (1, 2, 3):
            analytics_service.resolve_and_count(created.short_id)
            assert analytics_service.get_analytics(created.short_id).click_count == expected

    def test_unknown_short_id(self, analytics_service):
        with pytest.raises(NotFoundError):
            analytics_service.resolve_and_count("doesNotExist")

    def test_blank_short_id(self, analytics_service):
        with pytest.raises(ValidationError):
            analytics_service.resolve_and_count("   ")

    def test_concurrent_resolves_are_not_lost(self, shortening_service, analytics_service):
        """Test that N concurrent clicks add exactly N"""
        created = shortening_service.create_short_url("https://example.com")
        analytics_service.resolve_and_count(created.short_id)
        prior = analytics_service.get_analytics(created.short_id).click_count
        clicks = 50

        with ThreadPoolExecutor(max_workers=10) as executor:
            urls = list(executor.map(analytics_service.resolve_and_count, [created.short_id] * clicks))

        assert urls == ["https://example.com"] * clicks
        assert analytics_service.get_analytics(created.short_id).click_count == prior + clicks


class TestGetAnalytics:
    """Test read-only analytics"""

    def test_fresh_url_has_zero_clicks(self, shortening_service, analytics_service):
        created = shortening_service.create_short_url("https://example.com")

        analytics = analytics_service.get_analytics(created.short_id)

        assert analytics.short_id == created.short_id
        assert analytics.original_url == "https://example.com"
        assert analytics.click_count == 0
        assert analytics.created_at.tzinfo is not None

    def test_reading_analytics_does_not_count(self, shortening_service, analytics_service):
        created = shortening_service.create_short_url("https://example.com")
        analytics_service.resolve_and_count(created.short_id)

        for _ in range(5):
            assert analytics_service.get_analytics(created.short_id).click_count == 1

    def test_unknown_short_id(self, analytics_service):
        with pytest.raises(NotFoundError, match="Short URL not found"):
            analytics_service.get_analytics("doesNotExist")

    def test_short_id_is_trimmed(self, shortening_service, analytics_service):
        created = shortening_service.create_short_url("https://example.com")

        assert analytics_service.get_analytics(f" {created.short_id} ").short_id == created.short_id
