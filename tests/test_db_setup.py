"""Basic tests to verify test DB setup."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError

from shortener.models.url import UrlRecord, utcnow


@pytest.mark.asyncio
async def test_create_tables(test_db):
    """Verify tables are created correctly in test database."""
    result = await test_db.execute(text("SELECT name FROM sqlite_master WHERE type='table' AND name='urls'"))
    tables = [row[0] for row in result.fetchall()]
    assert "urls" in tables

    url = UrlRecord(
        original_url="https://example.com",
        short_code="test123",
        is_custom=True,
    )

    test_db.add(url)
    await test_db.flush()

    result = await test_db.execute(select(UrlRecord).where(UrlRecord.short_code == "test123"))
    retrieved_url = result.scalars().first()

    assert retrieved_url is not None
    assert retrieved_url.id is not None
    assert retrieved_url.original_url == "https://example.com"
    assert retrieved_url.is_custom is True
    assert retrieved_url.created_at is not None


@pytest.mark.asyncio
async def test_short_code_has_unique_index(test_db):
    """The store itself must enforce short code uniqueness."""
    result = await test_db.execute(text("PRAGMA index_list('urls')"))
    unique_indexes = [row[1] for row in result.fetchall() if row[2] == 1]
    assert unique_indexes

    indexed_columns = set()
    for index_name in unique_indexes:
        info = await test_db.execute(text(f"PRAGMA index_info('{index_name}')"))
        indexed_columns.update(row[2] for row in info.fetchall())
    assert "short_code" in indexed_columns


@pytest.mark.asyncio
async def test_store_rejects_duplicate_code(test_db):
    test_db.add(UrlRecord(original_url="https://a.example.com", short_code="dupe1"))
    await test_db.flush()

    test_db.add(UrlRecord(original_url="https://b.example.com", short_code="dupe1"))
    with pytest.raises(IntegrityError):
        await test_db.flush()


@pytest.mark.asyncio
async def test_ids_increase(test_db):
    first = UrlRecord(original_url="https://a.example.com", short_code="first")
    second = UrlRecord(original_url="https://b.example.com", short_code="second")
    test_db.add(first)
    await test_db.flush()
    test_db.add(second)
    await test_db.flush()

    assert second.id > first.id


def test_utcnow_is_timezone_aware():
    now = utcnow()
    assert now.utcoffset() == timedelta(0)


@pytest.mark.asyncio
async def test_created_at_is_stored_through_the_model(test_db, url_repository):
    before = datetime.now(timezone.utc) - timedelta(seconds=5)

    record = await url_repository.create_short_url(
        test_db, {"original_url": "https://example.com", "short_code": "stamp1"}
    )

    created_at = record.created_at
    # SQLite keeps the UTC wall-clock time without the offset
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    assert before <= created_at <= datetime.now(timezone.utc) + timedelta(seconds=5)
