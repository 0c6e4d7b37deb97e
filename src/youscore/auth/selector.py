"""Per-route API key selection.

YouScore bills PDF reports and affiliate queries against separate keys.
:func:`key_name_for_path` matches the request path (leading ``/`` removed)
against :data:`KEY_ROUTES`; the first matching prefix wins and anything
else falls back to the data/analytics key.
"""

from __future__ import annotations

from typing import Any

import httpx

from youscore.editors import RequestEditor
from youscore.models import APIKeys

AUTH_SCHEME = "bearer"
"""Scheme literal sent in the ``Authorization`` header (lower-case)."""

KEY_ROUTES: tuple[tuple[str, str], ...] = (
    ("v1/contractors/pdf-file/", "pdf_legal_entities"),
    ("v1/individuals/pdf-reports", "pdf_individuals"),
    ("v1/affiliates", "affiliates"),
)
"""Ordered ``(path prefix, APIKeys field)`` rules."""

DEFAULT_KEY = "data_analytics"


def key_name_for_path(path: str) -> str:
    """Return the :class:`~youscore.models.APIKeys` field that serves *path*."""
    path = path.removeprefix("/")
    for prefix, name in KEY_ROUTES:
        if path.startswith(prefix):
            return name
    return DEFAULT_KEY


def api_key_for_path(keys: APIKeys, path: str) -> str:
    """Return the key from *keys* to use for a request to *path*."""
    return getattr(keys, key_name_for_path(path))


def _set_authorization(request: httpx.Request, api_key: str) -> None:
    request.headers["Authorization"] = f"{AUTH_SCHEME} {api_key}"


def bearer_auth(api_key: str) -> RequestEditor:
    """Build an editor that sends *api_key* on every request."""

    def editor(context: Any, request: httpx.Request) -> None:
        _set_authorization(request, api_key)

    return editor


def api_keys_auth(keys: APIKeys) -> RequestEditor:
    """Build an editor that picks the key for each request from *keys* by path."""

    def editor(context: Any, request: httpx.Request) -> None:
        _set_authorization(request, api_key_for_path(keys, request.url.path))

    return editor
