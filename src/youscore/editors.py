"""Request editors and the chain that applies them.

A *request editor* is a callable ``editor(context, request)`` run against
every outgoing :class:`httpx.Request` before it reaches the transport.
Editors may change headers (auth injection) or only observe the request
(usage tracking).  An editor reports failure by raising; the request is
then never sent.

``context`` is whatever object the caller passed to
:meth:`~youscore.client.Client.request` (``None`` by default).  It is not
interpreted by the client and exists so callbacks can attribute a request
to a tenant, job or trace.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

import httpx

RequestEditor = Callable[[Any, httpx.Request], None]
"""Signature of a request editor: ``(context, request) -> None``."""


class EditorChain:
    """Applies request editors in registration order.

    The chain takes an immutable snapshot of *editors* when it is built and
    is read-only afterwards, so one chain can be shared by concurrent
    requests without locking.
    """

    def __init__(self, editors: Iterable[RequestEditor] = ()) -> None:
        self._editors: tuple[RequestEditor, ...] = tuple(editors)

    @property
    def editors(self) -> tuple[RequestEditor, ...]:
        return self._editors

    def apply(self, context: Any, request: httpx.Request) -> httpx.Request:
        """Run every editor against *request* and return it.

        Exceptions raised by an editor propagate and stop the chain.
        """
        for editor in self._editors:
            editor(context, request)
        return request
