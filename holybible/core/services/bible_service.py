"""
Core service for scripture lookups.

Orchestrates validation, cache lookup, the API call, DTO construction and
cache population. Validation always runs before any cache or network
access, and chapter is checked before verse.
"""

import logging
from typing import Any, List, Mapping, Type, TypeVar, Union

from holybible.domain.exceptions import ApiResponseError, InvalidChapterError, InvalidVerseError
from holybible.domain.interfaces.bible_client import BibleClient
from holybible.domain.interfaces.cache import CacheStore
from holybible.domain.models.books import Book
from holybible.domain.models.common import (
    BOOKS_CACHE_KEY,
    VERSIONS_CACHE_KEY,
    ApiPath,
    CacheKey,
    VersionCode,
    chapter_cache_key,
    verse_cache_key,
)
from holybible.domain.models.dto import BookDTO, ChapterDTO, VerseDTO, VersionDTO

logger = logging.getLogger(__name__)

DEFAULT_VERSION = VersionCode("nvi")
DEFAULT_CACHE_TTL = 60 * 60  # 1 hour

T = TypeVar("T")
BookLike = Union[Book, str]


class BibleService:
    """Cache-through access to books, versions, chapters and verses."""

    def __init__(
        self,
        client: BibleClient,
        cache: CacheStore,
        version: str = DEFAULT_VERSION,
        cache_ttl: int = DEFAULT_CACHE_TTL,
    ):
        """Initializes the BibleService with its dependencies.

        Args:
            client: Client returning decoded JSON for API paths.
            cache: Cache store; pass a NullCacheStore to disable caching.
            version: Active Bible version code used in keys and paths.
            cache_ttl: Lifetime of cached results in seconds.
        """
        self.client = client
        self.cache = cache
        self._version = VersionCode(version)
        self.cache_ttl = cache_ttl
        logger.info(
            f"BibleService initialized: version={version}, cache={cache.__class__.__name__}, ttl={cache_ttl}s"
        )

    # --- Version ---

    def set_version(self, version: str) -> None:
        """Switches the active version. Entries cached under other versions stay addressable."""
        self._version = VersionCode(version)
        logger.debug(f"Active version set to: {version}")

    def get_version(self) -> VersionCode:
        return self._version

    # --- Lookups ---

    def get_books(self) -> List[BookDTO]:
        return self._fetch_list(BOOKS_CACHE_KEY, ApiPath("books"), BookDTO)

    def get_available_versions(self) -> List[VersionDTO]:
        return self._fetch_list(VERSIONS_CACHE_KEY, ApiPath("versions"), VersionDTO)

    def get_chapter(self, book: BookLike, chapter: int) -> ChapterDTO:
        """Returns a chapter with all its verses.

        Raises:
            InvalidChapterError: If chapter < 1 (before any I/O).
            ValueError: If ``book`` names no known book.
            NetworkError, ApiResponseError: From the client.
        """
        self._validate_chapter(chapter)
        book = self._resolve_book(book)
        version = self._version
        return self._fetch_one(
            chapter_cache_key(version, book, chapter),
            ApiPath(f"verses/{version}/{book.value}/{chapter}"),
            ChapterDTO,
        )

    def get_verse(self, book: BookLike, chapter: int, verse: int) -> VerseDTO:
        """Returns a single verse.

        Raises:
            InvalidChapterError: If chapter < 1 (checked first).
            InvalidVerseError: If verse < 1.
            ValueError: If ``book`` names no known book.
            NetworkError, ApiResponseError: From the client.
        """
        self._validate_chapter(chapter)
        self._validate_verse(verse)
        book = self._resolve_book(book)
        version = self._version
        return self._fetch_one(
            verse_cache_key(version, book, chapter, verse),
            ApiPath(f"verses/{version}/{book.value}/{chapter}/{verse}"),
            VerseDTO,
        )

    # --- Helpers ---

    def _fetch_one(self, cache_key: CacheKey, path: ApiPath, dto_type: Type[T]) -> T:
        cached = self.cache.get(cache_key)
        if isinstance(cached, dto_type):
            logger.debug(f"Returning cached result for: {cache_key}")
            return cached
        self._note_unusable_entry(cache_key, cached)

        data = self.client.get(path)
        if not isinstance(data, Mapping):
            raise ApiResponseError(
                f"Expected a JSON object from '{path}', got {type(data).__name__}", path=path
            )
        result = dto_type.from_dict(data)
        self._store(cache_key, result)
        return result

    def _fetch_list(self, cache_key: CacheKey, path: ApiPath, dto_type: Type[T]) -> List[T]:
        cached = self.cache.get(cache_key)
        if isinstance(cached, tuple) and all(isinstance(item, dto_type) for item in cached):
            logger.debug(f"Returning cached result for: {cache_key}")
            return list(cached)
        self._note_unusable_entry(cache_key, cached)

        data = self.client.get(path)
        if not isinstance(data, list):
            raise ApiResponseError(
                f"Expected a JSON array from '{path}', got {type(data).__name__}", path=path
            )
        items = [dto_type.from_dict(item) for item in data if isinstance(item, Mapping)]
        if len(items) != len(data):
            logger.warning(f"Skipped {len(data) - len(items)} non-object element(s) in '{path}' response")
        # Stored as a tuple so callers mutating their list cannot touch the cached value
        self._store(cache_key, tuple(items))
        return items

    def _note_unusable_entry(self, cache_key: CacheKey, cached: Any) -> None:
        """Treats an entry of an unexpected type as a miss."""
        if cached is not None:
            logger.warning(f"Ignoring cached {type(cached).__name__} under '{cache_key}', refetching")

    def _store(self, cache_key: CacheKey, value: Any) -> None:
        if not self.cache.set(cache_key, value, self.cache_ttl):
            logger.warning(f"Failed to cache result for: {cache_key}")

    @staticmethod
    def _resolve_book(book: BookLike) -> Book:
        return book if isinstance(book, Book) else Book.parse(book)

    @staticmethod
    def _validate_chapter(chapter: int) -> None:
        if chapter < 1:
            raise InvalidChapterError(chapter)

    @staticmethod
    def _validate_verse(verse: int) -> None:
        if verse < 1:
            raise InvalidVerseError(verse)
