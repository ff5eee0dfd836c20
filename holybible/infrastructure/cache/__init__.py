"""Cache Store Implementations.

Provides concrete implementations of the CacheStore interface: a
file-based store, a diskcache-backed store, and a no-op store used when
caching is disabled.
Bounded Context: Cache Management
"""
