"""Validation of inbound URLs and custom short codes.

Pure functions with no store access; they never raise on bad input.
"""

import re
from typing import Any
from urllib.parse import urlsplit

ALLOWED_SCHEMES = frozenset({"http", "https"})

SHORT_CODE_MIN_LENGTH = 4
SHORT_CODE_MAX_LENGTH = 10
SHORT_CODE_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")

# Unreserved and reserved characters of RFC 3986, plus "%" for escapes.
# Anything else, including whitespace and non-ASCII text, makes a URI unparseable.
_URI_CHARS = r"A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%"
URI_PATTERN = re.compile(r"[" + _URI_CHARS + r"]+")
# "%" must start a two-digit hex escape
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def validate_url(raw: Any) -> bool:
    """
    Check that ``raw`` parses as an absolute http or https URL.

    Args:
        raw: Candidate URL

    Returns:
        bool: True if the URL is usable as a redirect target, False otherwise
    """
    if not isinstance(raw, str) or not raw:
        return False
    if not URI_PATTERN.fullmatch(raw):
        return False
    if _BAD_PERCENT_ESCAPE.search(raw) or raw.count("#") > 1:
        return False

    try:
        parts = urlsplit(raw)
        # Accessing port validates it; a bad port raises ValueError
        parts.port
    except ValueError:
        return False

    # Square brackets belong only around an IPv6 host
    rest = parts.path + parts.query + parts.fragment
    if "[" in rest or "]" in rest:
        return False

    return parts.scheme in ALLOWED_SCHEMES and bool(parts.netloc)


def validate_short_code(code: Any) -> bool:
    """
    Check a caller-supplied short code.

    Codes are 4 to 10 characters of letters, digits, underscore or hyphen.
    Matching is case-sensitive, so "ABC123" and "abc123" are distinct codes.
    """
    if not isinstance(code, str) or not code:
        return False
    if not SHORT_CODE_MIN_LENGTH <= len(code) <= SHORT_CODE_MAX_LENGTH:
        return False
    return bool(SHORT_CODE_PATTERN.fullmatch(code))
