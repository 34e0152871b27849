"""
Error taxonomy for the product search service.

Every failure surfaced by this package derives from SearchServiceError so
callers (the HTTP layer and the import job) can classify outcomes without
knowing about the underlying HTTP library.
"""

from typing import Optional


class SearchServiceError(Exception):
    """Base class for all service errors."""


class InvalidArgument(SearchServiceError):
    """A client-supplied filter could not be parsed."""


class InternalError(SearchServiceError):
    """Local serialization or decoding failure."""


class StoreError(SearchServiceError):
    """Base class for failures talking to the document store."""


class Unavailable(StoreError):
    """The store could not be reached (connection error, timeout, ...)."""


class UpstreamError(StoreError):
    """
    The store was reachable but answered with an error status.

    Attributes:
        status_code: HTTP status code returned by the store
        status_text: Status line text, e.g. "503 Service Unavailable"
        body: Raw response body, kept for diagnostics
    """

    def __init__(self, status_code: int, status_text: str, body: Optional[str] = None):
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(status_text)


class RetriesExhausted(SearchServiceError):
    """A write failed on every attempt of its backoff schedule."""
