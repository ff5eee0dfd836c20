"""Configuration for assembling a Bible client.

BibleConfig holds the values the core consumes (version, token, timeout,
cache settings, retry settings, base URL) and builds the matching cache
store and retry policy.
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from holybible.domain.interfaces.cache import CacheStore
from holybible.infrastructure.cache.disk_cache import DiskCacheStore
from holybible.infrastructure.cache.file_cache import FileCacheStore
from holybible.infrastructure.cache.null_cache import NullCacheStore
from holybible.infrastructure.config.settings import get_config, load_configuration
from holybible.infrastructure.resilience.resilient_client import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS
from holybible.infrastructure.resilience.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)

CACHE_BACKENDS = ("file", "disk")


@dataclass
class BibleConfig:
    version: str = "nvi"
    user_token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    cache_enabled: bool = True
    cache_ttl: int = 3600
    cache_dir: Optional[str] = None
    cache_backend: str = "file"
    api_url: str = DEFAULT_API_URL
    retry_enabled: bool = True
    retry_policy: Optional[RetryPolicy] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got: {self.timeout}")
        if self.cache_ttl < 0:
            raise ValueError(f"Cache TTL must be non-negative, got: {self.cache_ttl}")
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"Cache backend must be one of {', '.join(CACHE_BACKENDS)}, got: {self.cache_backend!r}"
            )

    @classmethod
    def from_settings(cls, config_file: Optional[Path] = None, **overrides: Any) -> "BibleConfig":
        """Builds a config from environment/.env/YAML settings.

        Keyword overrides whose value is not None take precedence over settings.
        """
        load_configuration(config_file=config_file, force=config_file is not None)

        token = get_config("bible_user_token")
        cache_dir = get_config("bible_cache_dir")
        values = {
            "version": str(get_config("bible_version", cls.version)),
            "user_token": str(token) if token is not None else None,
            "timeout": float(get_config("bible_timeout", cls.timeout)),
            "cache_enabled": _as_bool(get_config("bible_cache_enabled", cls.cache_enabled)),
            "cache_ttl": int(get_config("bible_cache_ttl", cls.cache_ttl)),
            "cache_dir": str(cache_dir) if cache_dir is not None else None,
            "cache_backend": str(get_config("bible_cache_backend", cls.cache_backend)).lower(),
            "api_url": str(get_config("bible_api_url", cls.api_url)),
            "retry_enabled": _as_bool(get_config("bible_retry_enabled", cls.retry_enabled)),
            "log_level": str(get_config("bible_log_level", cls.log_level)).upper(),
        }
        known = {f.name for f in fields(cls)}
        for key, value in overrides.items():
            if key not in known:
                raise TypeError(f"Unknown configuration option: {key}")
            if value is not None:
                values[key] = value
        return cls(**values)

    def with_overrides(self, **changes: Any) -> "BibleConfig":
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def build_cache(self) -> CacheStore:
        if not self.cache_enabled:
            logger.debug("Caching disabled, using NullCacheStore.")
            return NullCacheStore()
        if self.cache_backend == "disk":
            return DiskCacheStore(self.cache_dir)
        return FileCacheStore(self.cache_dir)

    def build_retry_policy(self) -> RetryPolicy:
        if self.retry_policy is not None:
            return self.retry_policy
        return RetryPolicy.default() if self.retry_enabled else RetryPolicy.disabled()


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
