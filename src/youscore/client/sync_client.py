"""Synchronous HTTP client with per-route auth, usage tracking and caching.

This module provides :class:`Client`, a thin layer over
:class:`httpx.Client`.  Every request passes through two stages:

- **Request editors** -- an immutable :class:`~youscore.editors.EditorChain`
  built in the constructor: auth injection first, then usage tracking,
  then any custom editors, in that order.
- **Transport stack** -- the inner transport (``httpx.HTTPTransport`` by
  default), wrapped in a :class:`~youscore.cache.CachingTransport` when a
  cache is configured.

Editors run before the caching transport, so usage callbacks fire for
every request, including those answered from the cache.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import httpx

from youscore.auth import api_keys_auth, bearer_auth
from youscore.cache import Cache, CachingTransport
from youscore.config import SERVER_URL
from youscore.editors import EditorChain, RequestEditor
from youscore.exceptions import ConfigError
from youscore.models import APIKeys, RequestConfig
from youscore.usage import UsageCallback, usage_tracking

RATE_LIMITS_PATH = "/v1/rateLimits"


class Client:
    """Synchronous client for the YouScore API.

    Must be used as a context manager so that the underlying transport is
    properly opened and closed.

    Args:
        base_url: API root.  Request paths are appended to it.
        api_key: A single key sent with every request.  Mutually exclusive
            with *api_keys*.
        api_keys: Per-category keys, selected per request by path.
        cache: Optional response store.  When set, requests go through a
            :class:`~youscore.cache.CachingTransport`.
        usage_tracker: Optional ``callback(context, api_type, path)``
            invoked for every request.
        request_editors: Extra editors run after the built-in ones.
        transport: Inner transport performing real dispatch.  Defaults to
            :class:`httpx.HTTPTransport`.
        config: Timeout and TLS settings.
        non_cacheable: Path fragments that are never stored in the cache.

    Raises:
        ConfigError: If both *api_key* and *api_keys* are given.

    Example::

        with Client(api_keys=keys, cache=MemoryCache()) as client:
            response = client.get("/v1/usr/00032112")
    """

    def __init__(
        self,
        base_url: str = SERVER_URL,
        *,
        api_key: Optional[str] = None,
        api_keys: Optional[APIKeys] = None,
        cache: Optional[Cache] = None,
        usage_tracker: Optional[UsageCallback] = None,
        request_editors: Iterable[RequestEditor] = (),
        transport: Optional[httpx.BaseTransport] = None,
        config: Optional[RequestConfig] = None,
        non_cacheable: Optional[Iterable[str]] = None,
    ) -> None:
        if api_key is not None and api_keys is not None:
            raise ConfigError("Use either a single api_key or per-route api_keys, not both")

        editors: list[RequestEditor] = []
        if api_key is not None:
            editors.append(bearer_auth(api_key))
        elif api_keys is not None:
            editors.append(api_keys_auth(api_keys))
        if usage_tracker is not None:
            editors.append(usage_tracking(usage_tracker))
        editors.extend(request_editors)

        self._base_url = base_url.rstrip("/")
        self._editors = EditorChain(editors)
        self._cache = cache
        self._transport = transport
        self._config = config or RequestConfig()
        self._non_cacheable = None if non_cacheable is None else tuple(non_cacheable)
        self._client: Optional[httpx.Client] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def request_editors(self) -> tuple[RequestEditor, ...]:
        """The editors applied to every request, in order."""
        return self._editors.editors

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Client:
        self._client = httpx.Client(
            base_url=self._base_url,
            transport=self._build_transport(),
            timeout=self._config.timeout,
            follow_redirects=self._config.follow_redirects,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        json: Optional[Any] = None,
        content: Optional[str | bytes] = None,
        context: Any = None,
    ) -> httpx.Response:
        """Build a request, run the editor chain and send it.

        Args:
            method: HTTP method (GET, POST, ...).
            path: URL path appended to ``base_url``.
            params: Query parameters.
            headers: Extra request headers.
            json: JSON-serialisable body.  Takes precedence over *content*.
            content: Raw body.
            context: Opaque value handed to every editor and usage callback.

        Returns:
            The :class:`httpx.Response`.  Non-2xx statuses are returned,
            not raised.

        Raises:
            httpx.HTTPError: Transport failures, unchanged.
            BodyReadError: If the body cannot be buffered for caching.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        merged_headers: dict[str, str] = {"Accept": "application/json"}
        merged_headers.update(headers or {})

        kwargs: dict[str, Any] = {"params": params, "headers": merged_headers}
        if json is not None:
            kwargs["json"] = json
        elif content is not None:
            kwargs["content"] = content

        request = self._client.build_request(method, path, **kwargs)
        self._editors.apply(context, request)
        return self._client.send(request)

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a GET request.  See :meth:`request`."""
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a POST request.  See :meth:`request`."""
        return self.request("POST", path, **kwargs)

    def get_rate_limits(self, context: Any = None) -> httpx.Response:
        """Query the quota of the key selected for ``/v1/rateLimits``.

        The endpoint falls under the default category, so with per-route
        keys the data/analytics key is the one reported on.
        """
        return self.get(RATE_LIMITS_PATH, context=context)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _build_transport(self) -> httpx.BaseTransport:
        transport = self._transport or httpx.HTTPTransport(verify=self._config.verify_ssl)
        if self._cache is None:
            return transport
        return CachingTransport(transport, self._cache, non_cacheable=self._non_cacheable)
