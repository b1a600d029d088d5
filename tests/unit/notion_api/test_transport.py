"""Unit tests for notionkit/notion_api/transport.py.

Covers:
- _parse_retry_after
- _raise_for_status
- _dump_payload / _emit_debug_dump
- NotionTransport.request (success, error mapping, network errors, metrics)
- NotionTransport.close / context manager
- AsyncNotionTransport equivalents
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from notionkit.config import NotionkitConfig
from notionkit.errors import (
    NetworkError,
    RemoteApiError,
    RemoteAuthError,
    RemoteConflictError,
    RemoteNotFoundError,
    RemotePermissionError,
    RemoteRateLimitError,
    RemoteServerError,
    RemoteValidationError,
)
from notionkit.notion_api.transport import (
    AsyncNotionTransport,
    NotionTransport,
    _dump_payload,
    _emit_debug_dump,
    _parse_retry_after,
    _raise_for_status,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_response(
    status_code: int = 200,
    body: dict | list | None = None,
    headers: dict | None = None,
) -> httpx.Response:
    """Build a minimal httpx.Response with a request attached."""
    content = json.dumps(body).encode() if body is not None else b""
    resp = httpx.Response(status_code, content=content, headers=headers or {})
    resp.request = httpx.Request("GET", "https://api.notion.com/v1/test")
    return resp


def make_config(**overrides) -> NotionkitConfig:
    defaults = dict(token="test-token-1234")
    defaults.update(overrides)
    return NotionkitConfig(**defaults)


class RecordingMetricsHook:
    def __init__(self) -> None:
        self.increments: list[tuple[str, dict | None]] = []
        self.timings: list[tuple[str, float, dict | None]] = []

    def increment(self, name, value=1, tags=None):
        self.increments.append((name, tags))

    def timing(self, name, ms, tags=None):
        self.timings.append((name, ms, tags))


# ---------------------------------------------------------------------------
# _parse_retry_after
# ---------------------------------------------------------------------------

class TestParseRetryAfter:
    def test_numeric(self):
        assert _parse_retry_after(make_response(headers={"retry-after": "5"})) == 5.0

    def test_float(self):
        assert _parse_retry_after(make_response(headers={"retry-after": "2.5"})) == 2.5

    def test_invalid(self):
        assert _parse_retry_after(make_response(headers={"retry-after": "soon"})) is None

    def test_missing(self):
        assert _parse_retry_after(make_response()) is None


# ---------------------------------------------------------------------------
# _raise_for_status
# ---------------------------------------------------------------------------

class TestRaiseForStatus:
    def _resp(self, status: int, body: dict | None = None, headers: dict | None = None):
        return make_response(
            status_code=status,
            body=body or {"object": "error", "message": "err", "code": "test_code"},
            headers=headers,
        )

    @pytest.mark.parametrize(
        ("status", "error_cls"),
        [
            (400, RemoteValidationError),
            (401, RemoteAuthError),
            (403, RemotePermissionError),
            (404, RemoteNotFoundError),
            (409, RemoteConflictError),
            (429, RemoteRateLimitError),
            (500, RemoteServerError),
            (502, RemoteServerError),
            (503, RemoteServerError),
        ],
    )
    def test_status_mapping(self, status, error_cls):
        with pytest.raises(error_cls) as exc_info:
            _raise_for_status(self._resp(status), "GET", "pages/abc")
        err = exc_info.value
        assert isinstance(err, RemoteApiError)
        assert err.status_code == status
        assert err.notion_code == "test_code"
        assert err.body == {"object": "error", "message": "err", "code": "test_code"}

    def test_unmapped_status_raises_base_class(self):
        with pytest.raises(RemoteApiError) as exc_info:
            _raise_for_status(self._resp(418), "GET", "pages/abc")
        assert type(exc_info.value) is RemoteApiError
        assert exc_info.value.status_code == 418

    def test_message_includes_method_path_and_service_message(self):
        resp = self._resp(400, body={"message": "body.parent should be defined", "code": "v"})
        with pytest.raises(RemoteValidationError) as exc_info:
            _raise_for_status(resp, "POST", "pages")
        assert "POST pages" in str(exc_info.value)
        assert "body.parent should be defined" in str(exc_info.value)

    def test_rate_limit_carries_retry_after(self):
        resp = self._resp(429, headers={"retry-after": "7"})
        with pytest.raises(RemoteRateLimitError) as exc_info:
            _raise_for_status(resp, "GET", "pages/abc")
        assert exc_info.value.retry_after == 7.0

    def test_non_json_body(self):
        resp = httpx.Response(502, content=b"<html>Bad gateway</html>")
        resp.request = httpx.Request("GET", "https://api.notion.com/v1/pages/abc")
        with pytest.raises(RemoteServerError) as exc_info:
            _raise_for_status(resp, "GET", "pages/abc")
        assert exc_info.value.body == {}
        assert "Bad gateway" in str(exc_info.value)

    def test_non_object_json_body_is_wrapped(self):
        with pytest.raises(RemoteApiError) as exc_info:
            _raise_for_status(make_response(400, body=["x"]), "GET", "p")
        assert exc_info.value.body == {"raw": ["x"]}


# ---------------------------------------------------------------------------
# Debug dump
# ---------------------------------------------------------------------------

class TestDebugDump:
    def test_dump_written_to_stderr(self, capsys):
        _dump_payload("POST", "https://api.notion.com/v1/pages", {"a": 1}, 200, {"id": "x"})
        dumped = json.loads(capsys.readouterr().err)
        assert dumped == {
            "method": "POST",
            "url": "https://api.notion.com/v1/pages",
            "request_body": {"a": 1},
            "response_status": 200,
            "response_body": {"id": "x"},
        }

    def test_token_is_redacted(self, capsys):
        secret = "super-secret-token-9999"
        _dump_payload("POST", "u", {"note": f"uses {secret}"}, 200, None, token=secret)
        assert secret not in capsys.readouterr().err

    def test_disabled_by_default(self, capsys):
        _emit_debug_dump(make_config(), "GET", make_response(200, {"id": "x"}), None)
        assert capsys.readouterr().err == ""

    def test_enabled(self, capsys):
        cfg = make_config(debug_dump_payload=True)
        _emit_debug_dump(cfg, "GET", make_response(200, {"id": "x"}), None)
        assert '"response_status": 200' in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Sync NotionTransport
# ---------------------------------------------------------------------------

class TestNotionTransportRequest:
    def test_headers_and_base_url(self):
        transport = NotionTransport(make_config(notion_version="2022-06-28"))
        headers = transport._client.headers
        assert headers["Authorization"] == "Bearer test-token-1234"
        assert headers["Notion-Version"] == "2022-06-28"
        assert headers["Content-Type"] == "application/json"
        assert str(transport._client.base_url) == "https://api.notion.com/v1/"
        transport.close()

    def test_200_returns_json(self):
        transport = NotionTransport(make_config())
        resp = make_response(200, body={"id": "page-1", "object": "page"})
        with patch.object(transport._client, "request", return_value=resp) as mock_req:
            result = transport.request("GET", "pages/page-1")
        assert result == {"id": "page-1", "object": "page"}
        mock_req.assert_called_once_with("GET", "pages/page-1", json=None, params=None)

    def test_body_and_params_forwarded(self):
        transport = NotionTransport(make_config())
        resp = make_response(200, body={})
        with patch.object(transport._client, "request", return_value=resp) as mock_req:
            transport.request("PATCH", "pages/x", body={"archived": True}, params={"a": "b"})
        mock_req.assert_called_once_with(
            "PATCH", "pages/x", json={"archived": True}, params={"a": "b"}
        )

    def test_204_returns_empty_dict(self):
        transport = NotionTransport(make_config())
        with patch.object(transport._client, "request", return_value=make_response(204)):
            assert transport.request("DELETE", "blocks/abc") == {}

    def test_error_raised_without_retry(self):
        transport = NotionTransport(make_config())
        resp = make_response(500, body={"message": "boom", "code": "internal_server_error"})
        with (
            patch.object(transport._client, "request", return_value=resp) as mock_req,
            pytest.raises(RemoteServerError),
        ):
            transport.request("GET", "pages/abc")
        assert mock_req.call_count == 1

    def test_429_not_retried(self):
        transport = NotionTransport(make_config())
        resp = make_response(429, body={"code": "rate_limited"}, headers={"retry-after": "1"})
        with (
            patch.object(transport._client, "request", return_value=resp) as mock_req,
            pytest.raises(RemoteRateLimitError),
        ):
            transport.request("GET", "pages/abc")
        assert mock_req.call_count == 1

    @pytest.mark.parametrize(
        "exc",
        [
            httpx.ConnectError("refused"),
            httpx.ReadTimeout("slow"),
            httpx.RemoteProtocolError("Server disconnected"),
            httpx.ProxyError("proxy refused"),
            httpx.UnsupportedProtocol("no scheme"),
        ],
    )
    def test_network_failure_raises_network_error(self, exc):
        transport = NotionTransport(make_config())
        with (
            patch.object(transport._client, "request", side_effect=exc),
            pytest.raises(NetworkError) as exc_info,
        ):
            transport.request("GET", "pages/abc")
        err = exc_info.value
        assert err.status_code is None
        assert err.__cause__ is exc
        assert isinstance(err, RemoteApiError)

    def test_non_json_success_body_raises_remote_api_error(self):
        transport = NotionTransport(make_config())
        resp = httpx.Response(
            200,
            content=b"<html>gateway</html>",
            request=httpx.Request("GET", "https://api.notion.com/v1/pages/abc"),
        )
        with (
            patch.object(transport._client, "request", return_value=resp),
            pytest.raises(RemoteApiError) as exc_info,
        ):
            transport.request("GET", "pages/abc")
        err = exc_info.value
        assert type(err) is RemoteApiError
        assert err.status_code == 200
        assert "gateway" in err.context["text"]
        assert isinstance(err.__cause__, ValueError)

    def test_metrics_emitted(self):
        hook = RecordingMetricsHook()
        transport = NotionTransport(make_config(metrics=hook))
        with patch.object(transport._client, "request", return_value=make_response(200, {})):
            transport.request("GET", "pages/abc")
        assert hook.increments == [
            ("notionkit.requests_total", {"method": "GET", "path": "pages/abc", "status": "200"}),
        ]
        assert hook.timings[0][0] == "notionkit.request_duration_ms"

    def test_metrics_on_network_error(self):
        hook = RecordingMetricsHook()
        transport = NotionTransport(make_config(metrics=hook))
        with (
            patch.object(transport._client, "request", side_effect=httpx.ConnectError("x")),
            pytest.raises(NetworkError),
        ):
            transport.request("GET", "pages/abc")
        assert hook.increments[0][1]["status"] == "error"


class TestNotionTransportLifecycle:
    def test_close(self):
        transport = NotionTransport(make_config())
        with patch.object(transport._client, "close") as mock_close:
            transport.close()
        mock_close.assert_called_once()

    def test_context_manager(self):
        transport = NotionTransport(make_config())
        with patch.object(transport._client, "close") as mock_close:
            with transport as t:
                assert t is transport
        mock_close.assert_called_once()


# ---------------------------------------------------------------------------
# AsyncNotionTransport
# ---------------------------------------------------------------------------

class TestAsyncNotionTransport:
    @pytest.mark.asyncio
    async def test_200_returns_json(self):
        transport = AsyncNotionTransport(make_config())
        resp = make_response(200, body={"id": "p"})
        with patch.object(transport._client, "request", new=AsyncMock(return_value=resp)) as m:
            result = await transport.request("POST", "pages", body={"parent": {"page_id": "x"}})
        assert result == {"id": "p"}
        m.assert_awaited_once_with(
            "POST", "pages", json={"parent": {"page_id": "x"}}, params=None
        )
        await transport.close()

    @pytest.mark.asyncio
    async def test_404_raises(self):
        transport = AsyncNotionTransport(make_config())
        resp = make_response(404, body={"message": "nope", "code": "object_not_found"})
        with (
            patch.object(transport._client, "request", new=AsyncMock(return_value=resp)),
            pytest.raises(RemoteNotFoundError) as exc_info,
        ):
            await transport.request("GET", "pages/missing")
        assert exc_info.value.notion_code == "object_not_found"
        await transport.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [
            httpx.ConnectTimeout("t"),
            httpx.RemoteProtocolError("Server disconnected"),
        ],
    )
    async def test_network_error(self, exc):
        transport = AsyncNotionTransport(make_config())
        with (
            patch.object(transport._client, "request", new=AsyncMock(side_effect=exc)),
            pytest.raises(NetworkError) as exc_info,
        ):
            await transport.request("GET", "pages/abc")
        assert exc_info.value.status_code is None
        assert exc_info.value.__cause__ is exc
        await transport.close()

    @pytest.mark.asyncio
    async def test_non_json_success_body(self):
        transport = AsyncNotionTransport(make_config())
        resp = httpx.Response(
            200,
            content=b"<html>gateway</html>",
            request=httpx.Request("GET", "https://api.notion.com/v1/pages/abc"),
        )
        with (
            patch.object(transport._client, "request", new=AsyncMock(return_value=resp)),
            pytest.raises(RemoteApiError) as exc_info,
        ):
            await transport.request("GET", "pages/abc")
        assert type(exc_info.value) is RemoteApiError
        assert exc_info.value.status_code == 200
        await transport.close()

    @pytest.mark.asyncio
    async def test_async_context_manager_closes(self):
        transport = AsyncNotionTransport(make_config())
        with patch.object(transport._client, "aclose", new=AsyncMock()) as mock_close:
            async with transport as t:
                assert t is transport
        mock_close.assert_awaited_once()
