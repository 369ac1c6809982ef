"""URL shortener data models.

This module defines the UrlRecord model for storing shortened URLs in the database.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


class UrlRecordBase(SQLModel):
    """Base model for short URL data."""

    original_url: str = Field(
        description="The original (long) URL to redirect to",
        min_length=1,
    )
    # The unique index is what makes concurrent inserts of the same code
    # impossible. The registry's availability check only avoids a wasted
    # insert; dropping this index would reintroduce the check-then-insert race.
    short_code: str = Field(
        description="Unique code for the shortened URL",
        max_length=10,
        unique=True,
        index=True,
    )
    is_custom: bool = Field(
        default=False,
        description="Whether the short code was supplied by the caller"
    )


class UrlRecord(UrlRecordBase, table=True):
    """
    Persisted mapping between a short code and the original URL.

    Records are created by allocation or reservation, read by lookups and
    removed by explicit deletion. They are never updated in place.
    """

    __tablename__ = "urls"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False,
        description="Timestamp when this short URL was created"
    )


class UrlRecordCreate(UrlRecordBase):
    """Schema for creating a new short URL."""
    pass
