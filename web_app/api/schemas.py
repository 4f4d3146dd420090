"""Pydantic schemas for API requests and responses.

JSON payloads use camelCase keys (``longUrl``, ``shortCode``, ...); the Python
side keeps snake_case field names.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShortenRequest(CamelModel):
    """Request to shorten a URL."""

    long_url: str = Field(..., description="The absolute http(s) URL to shorten")
    custom_short_code: Optional[str] = Field(None, description="Optional custom short code")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "longUrl": "https://example.com/very/long/path/to/resource",
                    "customShortCode": None
                },
                {
                    "longUrl": "https://github.com/user/repo",
                    "customShortCode": "my_repo"
                }
            ]
        },
    )


class CreateUrlResponse(CamelModel):
    """Response after shortening a URL."""

    short_code: str = Field(..., description="The assigned short code")
    short_url: str = Field(..., description="The complete short URL")
    long_url: str = Field(..., description="The original long URL")
    created_at_utc: datetime = Field(..., description="Creation timestamp")


class ResolveUrlResponse(CamelModel):
    """Response for a resolved short code."""

    short_code: str
    long_url: str


class UrlStatsResponse(CamelModel):
    """Click statistics for a short code."""

    short_code: str
    long_url: str
    clicks: int
    created_at_utc: datetime
    last_accessed_at_utc: Optional[datetime] = None


class UrlListItemResponse(CamelModel):
    """One entry of the owner's URL list."""

    short_code: str
    short_url: str
    long_url: str
    clicks: int
    created_at_utc: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="Mapping store status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
