"""Cache protocol, cached response snapshot, and an in-memory store.

The caching transport never persists anything itself.  It talks to a
:class:`Cache` supplied by the application, which owns TTLs, eviction and
the choice of which entries are worth keeping.  Entries are identified by
the opaque ``key`` from :func:`~youscore.cache.keys.cache_key`; the
``url`` argument is the *sanitized* request URL, provided only so that a
store can apply per-route policies (different TTLs, for example).
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, runtime_checkable

import httpx
from cachetools import LRUCache, TTLCache


@dataclass(frozen=True)
class CachedResponse:
    """Immutable snapshot of a completed HTTP response.

    Attributes:
        status_code: HTTP status code.
        headers: Ordered ``(name, value)`` pairs.  Repeated names are kept
            as separate pairs; lookups through :attr:`header_map` are
            case-insensitive.
        body: Raw (still content-encoded) response body.
    """

    status_code: int
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""

    @classmethod
    def from_response(cls, response: httpx.Response, body: bytes) -> CachedResponse:
        """Snapshot *response* with an already drained *body*."""
        return cls(
            status_code=response.status_code,
            headers=tuple(response.headers.multi_items()),
            body=bytes(body),
        )

    @property
    def header_map(self) -> httpx.Headers:
        """A fresh case-insensitive view of :attr:`headers`."""
        return httpx.Headers(list(self.headers))

    def to_response(self, request: httpx.Request) -> httpx.Response:
        """Build a new response for *request* with its own readable body stream.

        Every call returns an independent :class:`httpx.Response`, so the
        same snapshot can be served any number of times.
        """
        return httpx.Response(
            status_code=self.status_code,
            headers=list(self.headers),
            stream=httpx.ByteStream(self.body),
            request=request,
        )


@runtime_checkable
class Cache(Protocol):
    """Storage backend consulted by :class:`~youscore.cache.CachingTransport`.

    Implementations must be safe to call from several threads at once: the
    transport performs no locking on their behalf, and two identical
    requests may look up and store the same key concurrently.
    """

    def get(self, url: str, key: str) -> Optional[CachedResponse]:
        """Return the stored response for *key*, or ``None`` if absent.

        Internal failures should be reported as ``None``.
        """
        ...

    def set(self, url: str, key: str, response: CachedResponse) -> None:
        """Store *response* under *key*.  The return value is ignored."""
        ...


class MemoryCache:
    """Thread-safe in-process :class:`Cache` backed by :mod:`cachetools`.

    Entries live in a :class:`cachetools.TTLCache` when *ttl_seconds* is
    given, otherwise in a :class:`cachetools.LRUCache`.  Both are bounded by
    *maxsize*; cachetools containers are not thread-safe, so every access
    goes through a lock.

    Args:
        maxsize: Maximum number of stored responses.
        ttl_seconds: Optional lifetime of an entry in seconds.
        timer: Clock used for expiry, ``time.monotonic`` by default.

    Example::

        cache = MemoryCache(ttl_seconds=600)
        client = Client(api_keys=keys, cache=cache)
    """

    def __init__(
        self,
        maxsize: int = 4096,
        ttl_seconds: Optional[float] = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = threading.Lock()
        if ttl_seconds is None:
            self._entries = LRUCache(maxsize=maxsize)
        else:
            self._entries = TTLCache(maxsize=maxsize, ttl=ttl_seconds, timer=timer)

    def get(self, url: str, key: str) -> Optional[CachedResponse]:
        with self._lock:
            return self._entries.get(key)

    def set(self, url: str, key: str, response: CachedResponse) -> None:
        with self._lock:
            self._entries[key] = response

    def delete(self, key: str) -> None:
        """Remove the entry for *key* if present."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            if isinstance(self._entries, TTLCache):
                self._entries.expire()
            return len(self._entries)
