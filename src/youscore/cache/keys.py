"""Request fingerprinting and URL sanitization.

Cache keys are SHA-256 digests of the HTTP method, the full URL (query
included) and the raw request body, so identical requests always resolve
to the same entry and a change in any of the three yields a new one.

Before a URL is shown to a :class:`~youscore.cache.Cache` it passes
through :func:`sanitize_url`, which strips query parameters that commonly
carry credentials.
"""

from __future__ import annotations

import hashlib
import logging
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from youscore.exceptions import BodyReadError

logger = logging.getLogger(__name__)

SENSITIVE_QUERY_PARAMS = frozenset(
    {"apikey", "api_key", "api-key", "token", "access_token", "authorization"}
)
"""Lower-cased query parameter names removed by :func:`sanitize_url`."""


def cache_key(request: httpx.Request) -> str:
    """Return the hex SHA-256 fingerprint of *request*.

    The body is buffered with :meth:`httpx.Request.read`, which swaps a
    single-use stream for a replayable one, so the transport still sends
    the complete body afterwards.

    Raises:
        BodyReadError: If the request body cannot be read.
    """
    try:
        body = request.read()
    except (OSError, httpx.StreamError) as exc:
        raise BodyReadError(f"Cannot read request body for {request.method}: {exc}") from exc

    h = hashlib.sha256()
    h.update(request.method.encode())
    h.update(str(request.url).encode())
    h.update(body)
    return h.hexdigest()


def is_sensitive_param(name: str) -> bool:
    """Return True if *name* is a deny-listed query parameter (case-insensitive)."""
    return name.lower() in SENSITIVE_QUERY_PARAMS


def sanitize_url(url: str) -> str:
    """Remove credential-bearing query parameters from *url*.

    Query segments containing ``;`` are dropped as malformed, so a secret
    smuggled behind a semicolon never reaches the cache.  The remaining
    parameters are re-encoded sorted by name.  If *url* cannot be parsed
    it is returned unchanged.
    """
    try:
        parts = urlsplit(url)
        segments = [seg for seg in parts.query.split("&") if ";" not in seg]
        pairs = parse_qsl("&".join(segments), keep_blank_values=True)
    except ValueError:
        logger.debug("Cannot parse URL for sanitization; leaving it unchanged")
        return url

    kept = [(name, value) for name, value in pairs if not is_sensitive_param(name)]
    # sorted() is stable, so repeated names keep their value order.
    kept.sort(key=lambda pair: pair[0])
    return urlunsplit(parts._replace(query=urlencode(kept)))
