"""Response caching for youscore.

This package provides the pieces of the caching layer:

* :class:`Cache` -- the protocol an application implements to plug in its
  own store (Redis, a database, disk, ...).
* :class:`CachedResponse` -- the immutable snapshot handed to the store.
* :class:`CachingTransport` -- an :class:`httpx.BaseTransport` decorator
  that consults the cache before dispatching and stores live responses.
* :func:`cache_key` and :func:`sanitize_url` -- request fingerprinting and
  removal of secret query parameters before a URL reaches the store.
* :class:`MemoryCache` -- a thread-safe in-process store.
"""

from youscore.cache.cache import Cache, CachedResponse, MemoryCache
from youscore.cache.keys import SENSITIVE_QUERY_PARAMS, cache_key, sanitize_url
from youscore.cache.transport import NON_CACHEABLE_PATHS, CachingTransport

__all__ = [
    "Cache",
    "CachedResponse",
    "CachingTransport",
    "MemoryCache",
    "NON_CACHEABLE_PATHS",
    "SENSITIVE_QUERY_PARAMS",
    "cache_key",
    "sanitize_url",
]
