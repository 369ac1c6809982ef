"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.

Every ``URLError`` is an expected, user-facing outcome; its ``message`` is the
text the HTTP layer puts in the ``error`` field of the response.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""

    message = "Internal server error"

    def __init__(self, detail: str = None):
        super().__init__(detail or self.message)


class URLError(ServiceError):
    """Base exception for URL-related errors."""
    pass


class ShortenRejectedError(URLError):
    """A shorten request was refused; answered with a 200 error payload."""
    pass


class MissingURLError(ShortenRejectedError):
    """The request carried no URL."""
    message = "URL is required"


class InvalidURLFormatError(ShortenRejectedError):
    """The URL is not an absolute http/https URL."""
    message = "Invalid URL format"


class InvalidCustomCodeFormatError(ShortenRejectedError):
    """The requested custom code doesn't meet requirements."""
    message = "Invalid custom code format"


class CodeTakenError(ShortenRejectedError):
    """The requested custom code is already in use."""
    message = "Custom code already taken"


class URLNotFoundError(URLError):
    """URL with the specified short code was not found."""
    message = "URL not found"


class StoreUnavailableError(ServiceError):
    """The store failed for a reason other than a duplicate code."""
    pass
