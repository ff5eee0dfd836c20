"""Exception taxonomy for the scripture client.

Validation errors are raised before any I/O. NetworkError and
ApiResponseError are raised by the resilient HTTP client after its retry
budget (if any) is spent. TransportError is the adapter-level signal for a
connection failure and never escapes the resilient client.
"""

from typing import Optional


class BibleApiError(Exception):
    """Base exception for all Bible API related errors."""


class InvalidChapterError(BibleApiError):
    """Raised when a chapter number below 1 is requested."""
    def __init__(self, chapter: int):
        self.chapter = chapter
        super().__init__(f"Chapter number must be positive, got: {chapter}")


class InvalidVerseError(BibleApiError):
    """Raised when a verse number below 1 is requested."""
    def __init__(self, verse: int):
        self.verse = verse
        super().__init__(f"Verse number must be positive, got: {verse}")


class NetworkError(BibleApiError):
    """Connection failure, non-retryable HTTP status, or exhausted retries.

    The underlying transport cause (if any) is chained as ``__cause__``.
    """
    def __init__(
        self,
        message: str,
        path: str,
        attempts: int,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.path = path
        self.attempts = attempts
        self.status_code = status_code
        self.body = body
        super().__init__(f"Network error: {message}")


class ApiResponseError(BibleApiError):
    """A successful response whose body is not valid JSON or has an unusable shape."""
    def __init__(
        self,
        message: str,
        path: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.path = path
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class TransportError(Exception):
    """Connection-level failure (DNS, refused, timeout) reported by a Transport."""
    def __init__(self, message: str, timed_out: bool = False, retryable: bool = True):
        self.timed_out = timed_out
        self.retryable = retryable
        super().__init__(message)
