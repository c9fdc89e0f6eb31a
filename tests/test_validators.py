"""
Tests for URL and record field validation.
"""
import pytest

from shortlink_app.exceptions import InvalidRecordError, ValidationError
from shortlink_app.validators import (
    MAX_URL_LENGTH,
    validate_original_url,
    validate_record_fields,
    validate_short_id,
)


class TestValidateOriginalUrl:

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.google.com/",
            "http://localhost:3000/path",
            "https://example.com/search?q=a+b&page=2#results",
        ],
    )
    def test_accepts_well_formed_urls(self, url):
        assert validate_original_url(url) == url

    def test_returns_url_unchanged_apart_from_trimming(self):
        """No normalization: trailing slash and case are kept as submitted"""
        assert validate_original_url("  https://Example.com  ") == "https://Example.com"

    @pytest.mark.parametrize("raw", ["", "   ", None, 123, ["https://example.com"]])
    def test_missing_or_non_string(self, raw):
        with pytest.raises(ValidationError, match="required and must be a string"):
            validate_original_url(raw)

    @pytest.mark.parametrize("raw", ["not a url", "example.com", "://missing-scheme"])
    def test_malformed(self, raw):
        with pytest.raises(ValidationError, match="valid URL format"):
            validate_original_url(raw)

    def test_too_long(self):
        url = "https://example.com/" + "a" * MAX_URL_LENGTH

        with pytest.raises(ValidationError, match="too long"):
            validate_original_url(url)


class TestValidateShortId:

    def test_trims(self):
        assert validate_short_id("  abc123  ") == "abc123"

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_rejects_blank(self, raw):
        with pytest.raises(ValidationError):
            validate_short_id(raw)


class TestValidateRecordFields:

    def test_valid_record(self):
        validate_record_fields("https://example.com", "abc12345", 0)

    def test_invalid_record_error_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            validate_record_fields("https://example.com", "", 0)

    @pytest.mark.parametrize(
        "original_url, short_id, click_count",
        [
            ("nope", "abc12345", 0),
            ("https://example.com", "x" * 51, 0),
            ("https://example.com", " abc ", 0),
            ("https://example.com", 12345678, 0),
            ("https://example.com", "abc12345", -1),
            ("https://example.com", "abc12345", True),
        ],
    )
    def test_invalid_fields(self, original_url, short_id, click_count):
        with pytest.raises(InvalidRecordError):
            validate_record_fields(original_url, short_id, click_count)
