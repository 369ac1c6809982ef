"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel


class ShortenRequest(BaseModel):
    """Request schema for creating a shortened URL.

    Both fields are optional at this level: a missing URL or a malformed
    custom code is reported in the response body, not as a 422.
    """
    url: Optional[str] = None
    custom_code: Optional[str] = None


class ShortenResponse(BaseModel):
    """Response schema for a successfully shortened URL."""
    shortened_url: str
    original_url: str


class URLInfoResponse(BaseModel):
    """Response schema for URL information."""
    short_code: str
    original_url: str
    created_at: datetime


class ErrorResponse(BaseModel):
    """Error payload; /shorten sends it with status 200."""
    error: str
    error_id: Optional[str] = None
    detail: Optional[List[Any]] = None
