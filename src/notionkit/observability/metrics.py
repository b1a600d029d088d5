"""Per-request metrics for the Notion transports.

Each round trip reports exactly two data points through a
:class:`MetricsHook`:

* ``notionkit.requests_total``      -- counter
* ``notionkit.request_duration_ms`` -- timing (omitted for network failures)

Both carry ``method``, ``path`` and ``status`` tags; ``status`` is the HTTP
status code, or ``"error"`` when no response arrived.  The default
:class:`NoopMetricsHook` discards everything.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

REQUESTS_TOTAL = "notionkit.requests_total"
REQUEST_DURATION_MS = "notionkit.request_duration_ms"


@runtime_checkable
class MetricsHook(Protocol):
    """What ``NotionkitConfig.metrics`` must provide."""

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        ...


class NoopMetricsHook:
    __slots__ = ()

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        pass

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        pass


def record_request(
    hook: MetricsHook,
    method: str,
    path: str,
    status: int | None,
    elapsed_ms: float | None = None,
) -> None:
    """Report one finished round trip to *hook*.

    Pass ``status=None`` when the request failed before any response.
    """
    tags = {
        "method": method,
        "path": path,
        "status": "error" if status is None else str(status),
    }
    hook.increment(REQUESTS_TOTAL, tags=tags)
    if elapsed_ms is not None:
        hook.timing(REQUEST_DURATION_MS, elapsed_ms, tags=tags)
