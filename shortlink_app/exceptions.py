"""
Exceptions raised by the shortlink core and mapped to HTTP responses at the API boundary.

Classes:
    ShortLinkError:
        Base class. Carries the HTTP status code the boundary should answer with.

    ValidationError:
        Malformed or missing input (client fault, 400).

    InvalidRecordError:
        A record handed to the store violates the field constraints (400).

    NotFoundError:
        Unknown short id (404).

    DuplicateKeyError:
        Insert hit the unique constraint on short_id. Internal race signal,
        absorbed by the shortening retry loop and never surfaced to clients.

    DatabaseError:
        Storage unavailable or failing (500).

    ExhaustedRetriesError:
        No unique short id could be allocated within the attempt budget (500).

    RateLimitExceededError:
        Client sent too many requests in the current window (429).
"""

from typing import Optional


class ShortLinkError(Exception):
    """Base class for all shortlink errors."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(ShortLinkError):
    status_code = 400
    default_message = "Validation failed"


class InvalidRecordError(ValidationError):
    default_message = "Record violates field constraints"


class NotFoundError(ShortLinkError):
    status_code = 404
    default_message = "Short URL not found"


class DuplicateKeyError(ShortLinkError):
    status_code = 409
    default_message = "Short ID already exists"


class DatabaseError(ShortLinkError):
    status_code = 500
    default_message = "Database operation failed"


class ExhaustedRetriesError(DatabaseError):
    default_message = "Failed to generate a unique Short ID after maximum attempts"


class RateLimitExceededError(ShortLinkError):
    status_code = 429
    default_message = "Rate limit exceeded"

    def __init__(
        self,
        message: Optional[str] = None,
        retry_after: int = 0,
        headers: Optional[dict] = None,
    ):
        super().__init__(message)
        self.retry_after = retry_after
        self.headers = headers or {}
