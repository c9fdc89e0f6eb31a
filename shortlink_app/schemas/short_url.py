from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API schemas: snake_case in Python, camelCase on the wire

    - from_attributes=True reads straight from the service dataclasses
    - populate_by_name=True lets tests and code use the Python names
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ShortenRequest(CamelModel):
    # Plain str on purpose: URL checks run in the shortening service so every
    # caller gets the same rules and the same 400 error
    original_url: str = Field(..., description="The original URL to be shortened")


class ShortenResponse(CamelModel):
    short_id: str = Field(..., description="The unique identifier for the shortened URL")
    short_url: str = Field(..., description="The complete shortened URL")
    original_url: str = Field(..., description="The original URL that was shortened")


class AnalyticsResponse(CamelModel):
    short_id: str = Field(..., description="The unique identifier for the shortened URL")
    original_url: str = Field(..., description="The original URL")
    click_count: int = Field(..., description="Number of times the shortened URL has been accessed")
    created_at: datetime = Field(..., description="Timestamp when the URL was created")


class ErrorResponse(CamelModel):
    status_code: int
    error: str
    message: str
    request_id: Optional[str] = None
    retry_after: Optional[int] = None


class HealthResponse(BaseModel):
    status: str
    environment: str
    database: str
    timestamp: datetime
    uptime: float
