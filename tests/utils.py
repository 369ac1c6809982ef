"""Test utilities for URL shortener tests."""

import random
import string
from typing import Any, Dict, Optional

from shortener.models.url import UrlRecord


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


def create_test_url_data(
    original_url: Optional[str] = None,
    short_code: Optional[str] = None,
    is_custom: bool = False,
) -> Dict[str, Any]:
    """Create test data dict for a UrlRecord."""
    return {
        "original_url": original_url or random_url(),
        "short_code": short_code or random_string(6),
        "is_custom": is_custom,
    }


async def create_test_url(
    db,
    original_url: Optional[str] = None,
    short_code: Optional[str] = None,
    is_custom: bool = False,
) -> UrlRecord:
    """Create and persist a test UrlRecord in the database."""
    url = UrlRecord(**create_test_url_data(
        original_url=original_url,
        short_code=short_code,
        is_custom=is_custom,
    ))
    db.add(url)
    await db.flush()
    await db.refresh(url)
    return url


class SequenceRandom:
    """Random source replaying a fixed list of draws."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def randrange(self, stop: int) -> int:
        value = self.values[self.calls]
        self.calls += 1
        assert 0 <= value < stop
        return value
