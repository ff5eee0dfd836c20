"""Facade bundling a configured client, cache and BibleService.

Each Bible instance owns its own collaborators; there is no shared or
global instance.
"""

import logging
from typing import List, Optional

from holybible.core.services.bible_service import BibleService, BookLike
from holybible.domain.interfaces.cache import CacheStore
from holybible.domain.models.dto import BookDTO, ChapterDTO, VerseDTO, VersionDTO
from holybible.infrastructure.config.bible_config import BibleConfig
from holybible.infrastructure.resilience.resilient_client import ResilientClient

logger = logging.getLogger(__name__)


class Bible:
    """Entry point for applications: wires collaborators from a BibleConfig."""

    def __init__(
        self,
        config: Optional[BibleConfig] = None,
        *,
        client: Optional[ResilientClient] = None,
        cache: Optional[CacheStore] = None,
    ):
        """Initializes the Bible facade.

        Args:
            config: Settings to build collaborators from (defaults to BibleConfig()).
            client: Pre-built client, used as is; its own token and timeout apply.
            cache: Pre-built cache store; replaces the one the config would build.
        """
        self.config = config or BibleConfig()
        self._client = client or ResilientClient(
            base_url=self.config.api_url,
            retry_policy=self.config.build_retry_policy(),
            timeout=self.config.timeout,
            user_token=self.config.user_token,
        )
        self._cache = cache if cache is not None else self.config.build_cache()
        self._service = BibleService(
            client=self._client,
            cache=self._cache,
            version=self.config.version,
            cache_ttl=self.config.cache_ttl,
        )

    @classmethod
    def with_config(cls, config: BibleConfig) -> "Bible":
        return cls(config)

    @property
    def service(self) -> BibleService:
        return self._service

    @property
    def client(self) -> ResilientClient:
        return self._client

    @property
    def cache(self) -> CacheStore:
        return self._cache

    # --- Lookups ---

    def get_books(self) -> List[BookDTO]:
        return self._service.get_books()

    def get_versions(self) -> List[VersionDTO]:
        return self._service.get_available_versions()

    def get_chapter(self, book: BookLike, chapter: int) -> ChapterDTO:
        return self._service.get_chapter(book, chapter)

    def get_verse(self, book: BookLike, chapter: int, verse: int) -> VerseDTO:
        return self._service.get_verse(book, chapter, verse)

    # --- Settings (fluent) ---

    def set_version(self, version: str) -> "Bible":
        self._service.set_version(version)
        return self

    def get_current_version(self) -> str:
        return self._service.get_version()

    def set_user_token(self, token: Optional[str]) -> "Bible":
        self._client.set_user_token(token)
        return self

    def get_user_token(self) -> Optional[str]:
        return self._client.user_token

    def set_timeout(self, timeout: float) -> "Bible":
        self._client.set_timeout(timeout)
        return self

    def get_timeout(self) -> float:
        return self._client.timeout

    def clear_cache(self) -> bool:
        cleared = self._cache.clear()
        logger.info(f"Cache cleared: {cleared}")
        return cleared

    def close(self) -> None:
        self._client.close()
        self._cache.close()
