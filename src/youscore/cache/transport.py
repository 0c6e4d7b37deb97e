"""Caching transport decorator.

:class:`CachingTransport` wraps any :class:`httpx.BaseTransport` and adds
cache-aside behaviour::

    request -> cache_key -> cache.get(sanitized URL, key)
        hit  -> snapshot rebuilt as a response, no dispatch
        miss -> inner transport -> body drained -> cache.set(...) -> response

Both bodies are single-read streams: the request body is buffered while the
key is computed, and the response body is drained before storing.  Each is
replaced with a replayable in-memory copy, so neither the inner transport
nor the caller ever sees a consumed stream.

Cache failures never fail a request.  An exception from ``get`` counts as a
miss and an exception from ``set`` is logged and dropped.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import httpx

from youscore.cache.cache import Cache, CachedResponse
from youscore.cache.keys import cache_key, sanitize_url

logger = logging.getLogger(__name__)

NON_CACHEABLE_PATHS: tuple[str, ...] = ("/rateLimits",)
"""Path fragments whose responses are never stored (quota must always be live)."""


class CachingTransport(httpx.BaseTransport):
    """Transport that serves repeated requests from a :class:`~youscore.cache.Cache`.

    Args:
        transport: The wrapped transport that performs real dispatch.
        cache: Application-supplied store.  Only sanitized URLs are ever
            passed to it.
        non_cacheable: Path fragments that bypass storage.  Lookups for
            such paths still happen but never hit, since nothing is stored.

    Example::

        transport = CachingTransport(httpx.HTTPTransport(), MemoryCache())
        with httpx.Client(transport=transport) as client:
            client.get("https://api.youscore.com.ua/v1/usr/00032112")
    """

    def __init__(
        self,
        transport: httpx.BaseTransport,
        cache: Cache,
        non_cacheable: Optional[Iterable[str]] = None,
    ) -> None:
        self._transport = transport
        self._cache = cache
        self._non_cacheable = tuple(
            NON_CACHEABLE_PATHS if non_cacheable is None else non_cacheable
        )

    @property
    def cache(self) -> Cache:
        return self._cache

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        key = cache_key(request)
        url = sanitize_url(str(request.url))

        cached = self._cache_get(url, key)
        if cached is not None:
            logger.debug("Cache hit: %s %s", request.method, url)
            return cached.to_response(request)

        logger.debug("Cache miss: %s %s", request.method, url)
        response = self._transport.handle_request(request)

        try:
            body = b"".join(response.stream)
        finally:
            response.close()

        if self.is_cacheable(request):
            self._cache_set(url, key, CachedResponse.from_response(response, body))
        else:
            logger.debug("Not caching non-cacheable route: %s", url)

        return httpx.Response(
            status_code=response.status_code,
            headers=response.headers,
            stream=httpx.ByteStream(body),
            request=request,
            extensions=response.extensions,
        )

    def is_cacheable(self, request: httpx.Request) -> bool:
        """Return False if the request path contains a non-cacheable fragment."""
        path = request.url.path
        return not any(fragment in path for fragment in self._non_cacheable)

    def close(self) -> None:
        self._transport.close()

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _cache_get(self, url: str, key: str) -> Optional[CachedResponse]:
        try:
            return self._cache.get(url, key)
        except Exception:
            logger.warning("Cache lookup failed for %s; treating as a miss", url, exc_info=True)
            return None

    def _cache_set(self, url: str, key: str, response: CachedResponse) -> None:
        try:
            self._cache.set(url, key, response)
        except Exception:
            logger.warning("Cache store failed for %s", url, exc_info=True)
