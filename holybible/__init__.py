"""holybible: resilient client for the Bible Digital scripture API.

Fetches books, versions, chapters and verses over HTTP with input
validation, cache-through lookups and retry with exponential backoff.
"""

from holybible.core.bible import Bible
from holybible.core.services.bible_service import BibleService
from holybible.domain.exceptions import (
    ApiResponseError,
    BibleApiError,
    InvalidChapterError,
    InvalidVerseError,
    NetworkError,
)
from holybible.domain.models.books import Book
from holybible.domain.models.dto import BookDTO, ChapterDTO, VerseDTO, VersionDTO
from holybible.infrastructure.config.bible_config import BibleConfig
from holybible.infrastructure.resilience.retry_policy import RetryPolicy

__version__ = "1.0.0"

__all__ = [
    "ApiResponseError",
    "Bible",
    "BibleApiError",
    "BibleConfig",
    "BibleService",
    "Book",
    "BookDTO",
    "ChapterDTO",
    "InvalidChapterError",
    "InvalidVerseError",
    "NetworkError",
    "RetryPolicy",
    "VerseDTO",
    "VersionDTO",
]
