"""Shared test fixtures for youscore.

Provides a recording fake transport, a fresh in-memory cache, and a full
set of API keys.  The global output manager is reset after every test so
that CliRunner stream redirection does not leak between tests.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx
import pytest

from youscore.cache import MemoryCache
from youscore.models import APIKeys
from youscore.output import reset_output


BASE_URL = "https://api.youscore.com.ua"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------


class RecordingHandler:
    """Handler for :class:`httpx.MockTransport` that records every request.

    By default answers ``200 {"ok": true}`` with an ``X-Test`` header.
    Pass *respond* to customise the response per request.
    """

    def __init__(self, respond: Optional[Callable[[httpx.Request], httpx.Response]] = None) -> None:
        self.requests: list[httpx.Request] = []
        self.bodies: list[bytes] = []
        self._respond = respond

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(request.read())
        if self._respond is not None:
            return self._respond(request)
        return httpx.Response(
            200,
            headers={"X-Test": "value", "content-type": "application/json"},
            content=json.dumps({"ok": True}).encode(),
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def handler() -> RecordingHandler:
    """A recording handler answering 200 to everything."""
    return RecordingHandler()


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def api_keys() -> APIKeys:
    return APIKeys(
        data_analytics="da-key",
        pdf_legal_entities="pdf-legal-key",
        pdf_individuals="pdf-ind-key",
        affiliates="aff-key",
    )


def json_response(data: Any, status_code: int = 200) -> httpx.Response:
    """Build an httpx.Response with a JSON body."""
    return httpx.Response(status_code, json=data)
