"""Tests for usage classification and the usage-tracking editor."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import pytest

from youscore.usage import APIType, UsageCounter, api_type_for_path, usage_tracking


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/v1/sanctions", APIType.ANALYSIS),
        ("/v1/sanctions/00032112", APIType.ANALYSIS),
        ("/v1/history/00032112", APIType.ANALYSIS),
        ("/v1/expressAnalysis/00032112", APIType.ANALYSIS),
        ("/v1/investigationsNatural", APIType.ANALYSIS),
        ("/v1/encumbrances/details/abc", APIType.ANALYSIS),
        ("/v1/tenders/risks/00032112", APIType.ANALYSIS),
        ("/v1/figures", APIType.ANALYSIS),
        ("/v1/affiliates/query", APIType.CUSTOM),
        ("/v1/contractors/pdf-file/00032112", APIType.CUSTOM),
        ("/v1/contractorsPdf/00032112", APIType.CUSTOM),
        ("/v1/individualsPdfReports", APIType.CUSTOM),
        ("/v1/setam/auctions", APIType.CUSTOM),
        ("/v1/usr/00032112", APIType.DATA),
        ("/v1/encumbrances/00032112", APIType.DATA),
        ("/v1/rateLimits", APIType.DATA),
        ("v1/sanctions", APIType.ANALYSIS),
        # Matching is case-sensitive
        ("/v1/Sanctions", APIType.DATA),
    ],
)
def test_api_type_for_path(path: str, expected: APIType) -> None:
    assert api_type_for_path(path) is expected


def test_api_type_values() -> None:
    assert [t.value for t in APIType] == ["custom", "analysis", "data"]


class TestUsageTracking:
    def test_reports_context_type_and_path(self) -> None:
        seen: list[tuple[Any, APIType, str]] = []
        editor = usage_tracking(lambda ctx, api_type, path: seen.append((ctx, api_type, path)))

        request = httpx.Request("GET", "https://api.youscore.com.ua/v1/sanctions?code=1")
        editor({"tenant": "acme"}, request)

        assert seen == [({"tenant": "acme"}, APIType.ANALYSIS, "/v1/sanctions")]

    def test_does_not_modify_request(self) -> None:
        request = httpx.Request("GET", "https://api.youscore.com.ua/v1/usr/1")
        before = list(request.headers.multi_items())
        usage_tracking(lambda *args: None)(None, request)
        assert list(request.headers.multi_items()) == before
        assert str(request.url) == "https://api.youscore.com.ua/v1/usr/1"

    def test_callback_errors_are_logged_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        def explode(ctx: Any, api_type: APIType, path: str) -> None:
            raise RuntimeError("billing down")

        request = httpx.Request("GET", "https://api.youscore.com.ua/v1/usr/1")
        with caplog.at_level(logging.ERROR, logger="youscore.usage"):
            usage_tracking(explode)(None, request)
        assert "Usage callback failed" in caplog.text


class TestUsageCounter:
    def test_counts_by_type_and_path(self) -> None:
        counter = UsageCounter()
        counter(None, APIType.DATA, "/v1/usr/1")
        counter(None, APIType.DATA, "/v1/usr/1")
        counter(None, APIType.CUSTOM, "/v1/affiliates/query")

        assert counter.totals() == {APIType.DATA: 2, APIType.CUSTOM: 1}
        assert counter.paths() == {"/v1/usr/1": 2, "/v1/affiliates/query": 1}
        assert counter.total() == 3
