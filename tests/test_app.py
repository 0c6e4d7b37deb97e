"""Tests for the youscore command line tool."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from conftest import RecordingHandler
import youscore.client
import youscore.rate_limits
from youscore import __version__
from youscore.app import app
from youscore.client import Client
from youscore.exceptions import RateLimitCheckError
from youscore.models import APIKeys, RateLimits, RateLimitsResponse

runner = CliRunner()

KEY_VARS = (
    "YOUSCORE_DATA_ANALYTICS_KEY",
    "YOUSCORE_PDF_LEGAL_KEY",
    "YOUSCORE_PDF_INDIVIDUALS_KEY",
    "YOUSCORE_AFFILIATES_KEY",
)


@pytest.fixture
def no_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in KEY_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def data_key(no_keys: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YOUSCORE_DATA_ANALYTICS_KEY", "da-key")


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestClassify:
    def test_json_output(self) -> None:
        result = runner.invoke(app, ["--json", "classify", "/v1/contractors/pdf-file/XYZ"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "path": "/v1/contractors/pdf-file/XYZ",
            "api_type": "custom",
            "key": "pdf_legal_entities",
        }

    def test_plain_output(self) -> None:
        result = runner.invoke(app, ["--plain", "classify", "/v1/sanctions"])
        assert result.exit_code == 0
        assert "api_type\tanalysis" in result.stdout
        assert "key\tdata_analytics" in result.stdout


class TestLimits:
    def test_missing_keys_fails(self, no_keys: None) -> None:
        result = runner.invoke(app, ["--no-color", "limits"])
        assert result.exit_code == 1
        assert "No API keys configured" in result.output

    def test_prints_table(self, data_key: None, monkeypatch: pytest.MonkeyPatch) -> None:
        captured: dict[str, Any] = {}

        def fake_check(keys: APIKeys, **kwargs: Any) -> RateLimitsResponse:
            captured["keys"] = keys
            return RateLimitsResponse(
                data_analytics=RateLimits(
                    actual_date=datetime(2024, 5, 1, tzinfo=timezone.utc),
                    requests_left=97,
                    total_limits=100,
                )
            )

        monkeypatch.setattr(youscore.rate_limits, "check_rate_limits", fake_check)
        result = runner.invoke(app, ["--json", "limits"])

        assert result.exit_code == 0
        assert captured["keys"].data_analytics == "da-key"
        assert json.loads(result.stdout) == [
            {
                "key": "data_analytics",
                "requests_left": "97",
                "total_limits": "100",
                "actual_date": "2024-05-01T00:00:00+00:00",
            }
        ]

    def test_check_failure_exit_code(self, data_key: None, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_check(keys: APIKeys, **kwargs: Any) -> RateLimitsResponse:
            raise RateLimitCheckError("get data analytics key limit: bad status: 401", "data_analytics")

        monkeypatch.setattr(youscore.rate_limits, "check_rate_limits", fake_check)
        result = runner.invoke(app, ["--no-color", "limits"])
        assert result.exit_code == RateLimitCheckError.exit_code
        assert "bad status: 401" in result.output


class TestGet:
    @pytest.fixture
    def handler(self, monkeypatch: pytest.MonkeyPatch) -> RecordingHandler:
        handler = RecordingHandler(
            lambda request: httpx.Response(200, json={"code": "00032112", "name": "ACME"})
        )

        def client_factory(*args: Any, **kwargs: Any) -> Client:
            return Client(*args, transport=handler.transport(), **kwargs)

        monkeypatch.setattr(youscore.client, "Client", client_factory)
        return handler

    def test_prints_body(self, data_key: None, handler: RecordingHandler) -> None:
        result = runner.invoke(app, ["--json", "get", "/v1/usr/00032112", "-Q", "showCurrentData=true"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"code": "00032112", "name": "ACME"}
        sent = handler.requests[0]
        assert sent.headers["Authorization"] == "bearer da-key"
        assert sent.url.params["showCurrentData"] == "true"

    def test_bad_query_is_usage_error(self, data_key: None, handler: RecordingHandler) -> None:
        result = runner.invoke(app, ["--no-color", "get", "/v1/usr/1", "-Q", "oops"])
        assert result.exit_code == 2
        assert handler.calls == 0

    def test_connection_error(self, data_key: None, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        def client_factory(*args: Any, **kwargs: Any) -> Client:
            return Client(*args, transport=RecordingHandler(fail).transport(), **kwargs)

        monkeypatch.setattr(youscore.client, "Client", client_factory)
        result = runner.invoke(app, ["--no-color", "get", "/v1/usr/1"])
        assert result.exit_code == 6
        assert "Request failed" in result.output
