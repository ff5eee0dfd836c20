"""Defines common Value Objects used across the domain.

These objects represent simple values like cache keys and scripture
references, ensuring consistency and type safety.
"""

from dataclasses import dataclass
from typing import NewType, Optional

from .books import Book

# === Caching Context ===
CacheKey = NewType("CacheKey", str)  # Unique key for a cache entry

# === Request Context ===
ApiPath = NewType("ApiPath", str)  # Path relative to the API base URL, e.g. 'books'
VersionCode = NewType("VersionCode", str)  # Bible version code, e.g. 'nvi', 'acf'


@dataclass(frozen=True)
class Reference:
    """A (book, chapter[, verse]) tuple identifying scripture content."""
    book: Book
    chapter: int
    verse: Optional[int] = None

    def __str__(self) -> str:
        if self.verse is None:
            return f"{self.book.name} {self.chapter}"
        return f"{self.book.name} {self.chapter}:{self.verse}"


# --- Cache key builders ---
BOOKS_CACHE_KEY = CacheKey("books")
VERSIONS_CACHE_KEY = CacheKey("versions")


def chapter_cache_key(version: str, book: Book, chapter: int) -> CacheKey:
    return CacheKey(f"chapter:{version}:{book.value}:{chapter}")


def verse_cache_key(version: str, book: Book, chapter: int, verse: int) -> CacheKey:
    return CacheKey(f"verse:{version}:{book.value}:{chapter}:{verse}")
