"""Sync and async HTTP transports for the Notion API.

Each transport performs exactly one round trip per call:

1. Send the HTTP request with auth and version headers.
2. On ``2xx`` -- return the parsed JSON response (``{}`` for empty bodies).
3. On any other status -- raise the matching :class:`RemoteApiError`.
4. On any httpx transport failure (timeout, connection, protocol, proxy)
   -- raise :class:`NetworkError`.

A ``2xx`` whose body is not JSON raises a plain :class:`RemoteApiError`.

Nothing is retried and nothing is paced; callers that need either wrap the
client themselves.
"""

from __future__ import annotations

import json as _json
import sys
import time
from typing import Any

import httpx

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
from notionkit.observability import NoopMetricsHook, get_logger, record_request

log = get_logger("notionkit.transport")

_STATUS_ERRORS: dict[int, type[RemoteApiError]] = {
    400: RemoteValidationError,
    401: RemoteAuthError,
    403: RemotePermissionError,
    404: RemoteNotFoundError,
    409: RemoteConflictError,
    429: RemoteRateLimitError,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Extract the ``Retry-After`` header value as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


def _raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    """Raise the :class:`RemoteApiError` subclass matching a failed response."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {"raw": body}

    notion_message = body.get("message", response.text[:500])
    context: dict[str, Any] = {
        "status_code": status,
        "notion_code": body.get("code", ""),
        "body": body,
        "method": method,
        "path": path,
    }

    if status >= 500:
        error_cls: type[RemoteApiError] = RemoteServerError
    else:
        error_cls = _STATUS_ERRORS.get(status, RemoteApiError)
    if error_cls is RemoteRateLimitError:
        context["retry_after"] = _parse_retry_after(response)

    raise error_cls(
        message=f"{method} {path} failed with {status}: {notion_message}",
        context=context,
    )


def _dump_payload(
    method: str,
    url: str,
    payload: Any | None,
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from notionkit.utils.redact import redact

    dump: dict[str, Any] = {"method": method, "url": url}
    if payload is not None:
        dump["request_body"] = payload
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    print(_json.dumps(redact(dump, token), indent=2, default=str), file=sys.stderr)


def _emit_debug_dump(
    config: NotionkitConfig,
    method: str,
    response: httpx.Response,
    body: Any,
) -> None:
    if not config.debug_dump_payload:
        return
    try:
        resp_body = response.json()
    except ValueError:
        resp_body = response.text[:1000]
    _dump_payload(
        method, str(response.url), body,
        response.status_code, resp_body,
        token=config.token,
    )


def _network_error(method: str, path: str, exc: Exception) -> NetworkError:
    log.warning(
        "Request network error",
        extra={
            "extra_fields": {
                "op": "request",
                "method": method,
                "path": path,
                "error": str(exc),
            }
        },
    )
    return NetworkError(
        message=f"Network error on {method} {path}: {exc}",
        context={"method": method, "path": path},
        cause=exc,
    )


def _build_headers(config: NotionkitConfig) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {config.token}",
        "Notion-Version": config.notion_version,
        "Content-Type": "application/json",
    }


class _TransportBase:
    """Response handling shared by the sync and async transports."""

    def __init__(self, config: NotionkitConfig) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    def _handle_response(
        self,
        method: str,
        path: str,
        body: Any,
        response: httpx.Response,
        elapsed_ms: float,
    ) -> Any:
        record_request(self._metrics, method, path, response.status_code, elapsed_ms)

        _emit_debug_dump(self._config, method, response, body)

        if 200 <= response.status_code < 300:
            log.debug(
                "Request completed",
                extra={
                    "extra_fields": {
                        "op": "request",
                        "method": method,
                        "path": path,
                        "status_code": response.status_code,
                        "elapsed_ms": round(elapsed_ms, 2),
                    }
                },
            )
            # Some endpoints return 204 with no body.
            if response.status_code == 204 or not response.content:
                return {}
            try:
                return response.json()
            except ValueError as exc:
                raise RemoteApiError(
                    message=(
                        f"{method} {path} returned {response.status_code} "
                        "with a body that is not JSON"
                    ),
                    context={
                        "status_code": response.status_code,
                        "method": method,
                        "path": path,
                        "body": {},
                        "text": response.text[:500],
                    },
                    cause=exc,
                ) from exc

        log.warning(
            "Request failed",
            extra={
                "extra_fields": {
                    "op": "request",
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                }
            },
        )
        _raise_for_status(response, method, path)


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class NotionTransport(_TransportBase):
    """Synchronous HTTP transport backed by :class:`httpx.Client`.

    Parameters
    ----------
    config:
        A :class:`NotionkitConfig` instance controlling transport behaviour.
    """

    def __init__(self, config: NotionkitConfig) -> None:
        super().__init__(config)
        self._client = httpx.Client(
            base_url=config.base_url,
            headers=_build_headers(config),
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    def request(
        self,
        method: str,
        path: str,
        body: Any | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Execute one HTTP request against the Notion API.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
        path:
            API path relative to ``base_url`` (e.g. ``pages/abc``).
        body:
            JSON-serialisable request body, or ``None`` to send none.
        params:
            Query-string parameters.

        Returns
        -------
        Any
            Parsed JSON response body.

        Raises
        ------
        RemoteApiError
            On any non-2xx response (a status-specific subclass where one
            exists).
        NetworkError
            On timeouts, connection, protocol and proxy failures.
        """
        t0 = time.monotonic()
        try:
            response = self._client.request(method, path, json=body, params=params)
        except httpx.TransportError as exc:
            record_request(self._metrics, method, path, None)
            raise _network_error(method, path, exc) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000
        return self._handle_response(method, path, body, response, elapsed_ms)

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> NotionTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport(_TransportBase):
    """Asynchronous HTTP transport backed by :class:`httpx.AsyncClient`.

    Mirrors :class:`NotionTransport`; see it for parameter documentation.
    """

    def __init__(self, config: NotionkitConfig) -> None:
        super().__init__(config)
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=_build_headers(config),
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    async def request(
        self,
        method: str,
        path: str,
        body: Any | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Execute one HTTP request against the Notion API (async)."""
        t0 = time.monotonic()
        try:
            response = await self._client.request(method, path, json=body, params=params)
        except httpx.TransportError as exc:
            record_request(self._metrics, method, path, None)
            raise _network_error(method, path, exc) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000
        return self._handle_response(method, path, body, response, elapsed_ms)

    async def close(self) -> None:
        """Close the underlying async HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
