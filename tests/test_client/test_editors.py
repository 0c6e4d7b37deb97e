"""Tests for the request editor chain."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from youscore.editors import EditorChain


def _request() -> httpx.Request:
    return httpx.Request("GET", "https://api.youscore.com.ua/v1/usr/1")


class TestEditorChain:
    def test_applies_in_registration_order(self) -> None:
        calls: list[str] = []

        def first(ctx: Any, request: httpx.Request) -> None:
            calls.append("first")
            request.headers["X-Order"] = "first"

        def second(ctx: Any, request: httpx.Request) -> None:
            calls.append("second")
            request.headers["X-Order"] = request.headers["X-Order"] + ",second"

        request = EditorChain([first, second]).apply(None, _request())
        assert calls == ["first", "second"]
        assert request.headers["X-Order"] == "first,second"

    def test_snapshot_is_immutable(self) -> None:
        editors = [lambda ctx, request: None]
        chain = EditorChain(editors)
        editors.append(lambda ctx, request: None)
        assert len(chain.editors) == 1
        assert isinstance(chain.editors, tuple)

    def test_error_stops_chain(self) -> None:
        calls: list[str] = []

        def fail(ctx: Any, request: httpx.Request) -> None:
            raise ValueError("nope")

        def after(ctx: Any, request: httpx.Request) -> None:
            calls.append("after")

        with pytest.raises(ValueError, match="nope"):
            EditorChain([fail, after]).apply(None, _request())
        assert calls == []

    def test_context_passed_to_every_editor(self) -> None:
        seen: list[Any] = []
        chain = EditorChain([lambda ctx, r: seen.append(ctx), lambda ctx, r: seen.append(ctx)])
        chain.apply("ctx", _request())
        assert seen == ["ctx", "ctx"]

    def test_empty_chain(self) -> None:
        request = _request()
        assert EditorChain().apply(None, request) is request
        assert EditorChain().editors == ()
