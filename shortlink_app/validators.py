"""Field validation for short URL records.

These run before a record is built, so every store backend sees the same checks.
"""

from typing import Any

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shortlink_app.exceptions import ValidationError, InvalidRecordError

MAX_URL_LENGTH = 2048
MIN_SHORT_ID_LENGTH = 1
MAX_SHORT_ID_LENGTH = 50

_url_adapter = TypeAdapter(AnyUrl)


def validate_original_url(raw_url: Any) -> str:
    """
    Validate and normalize a URL submitted for shortening.

    Returns the trimmed URL exactly as submitted (no scheme/host rewriting),
    so a redirect sends visitors where the submitter asked.

    Raises:
        ValidationError: missing, non-string, too long or malformed URL
    """
    if not raw_url or not isinstance(raw_url, str):
        raise ValidationError("Original URL is required and must be a string")

    url = raw_url.strip()
    if not url:
        raise ValidationError("Original URL is required and must be a string")

    if len(url) > MAX_URL_LENGTH:
        raise ValidationError(f"URL is too long (max {MAX_URL_LENGTH} characters)")

    try:
        _url_adapter.validate_python(url)
    except PydanticValidationError:
        raise ValidationError("Please provide a valid URL format") from None

    return url


def validate_short_id(short_id: Any) -> str:
    """Trim and check a short id taken from a request path."""
    if not short_id or not isinstance(short_id, str) or not short_id.strip():
        raise ValidationError("Short ID is required and must be a string")
    return short_id.strip()


def validate_record_fields(original_url: Any, short_id: Any, click_count: Any = 0) -> None:
    """
    Check the field constraints of a ShortUrlRecord before it is persisted.

    Raises:
        InvalidRecordError: any constraint violated
    """
    try:
        validate_original_url(original_url)
    except ValidationError as exc:
        raise InvalidRecordError(f"originalUrl: {exc.message}") from None

    if not isinstance(short_id, str) or short_id != short_id.strip():
        raise InvalidRecordError("shortId must be a string without surrounding whitespace")
    if not MIN_SHORT_ID_LENGTH <= len(short_id) <= MAX_SHORT_ID_LENGTH:
        raise InvalidRecordError(
            f"shortId must be {MIN_SHORT_ID_LENGTH}-{MAX_SHORT_ID_LENGTH} characters"
        )

    if not isinstance(click_count, int) or isinstance(click_count, bool) or click_count < 0:
        raise InvalidRecordError("clickCount cannot be negative")
