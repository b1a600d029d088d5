"""Tests for the MetricsHook protocol and its wiring into the transport."""
from __future__ import annotations

from typing import Any

from notionkit.config import NotionkitConfig
from notionkit.notion_api.transport import NotionTransport
from notionkit.observability.metrics import MetricsHook, NoopMetricsHook, record_request


class RecordingMetricsHook:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.calls.append(("increment", name, tags))

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        self.calls.append(("timing", name, tags))


class Incomplete:
    def increment(self, name, value=1, tags=None):
        pass


def test_noop_satisfies_protocol():
    assert isinstance(NoopMetricsHook(), MetricsHook)


def test_recording_hook_satisfies_protocol():
    assert isinstance(RecordingMetricsHook(), MetricsHook)


def test_incomplete_hook_does_not_satisfy_protocol():
    assert not isinstance(Incomplete(), MetricsHook)


def test_noop_methods_return_none():
    hook = NoopMetricsHook()
    assert hook.increment("a") is None
    assert hook.timing("a", 1.0, tags={"k": "v"}) is None


def test_transport_defaults_to_noop():
    transport = NotionTransport(NotionkitConfig(token="t"))
    assert isinstance(transport._metrics, NoopMetricsHook)
    transport.close()


def test_transport_uses_configured_hook():
    hook = RecordingMetricsHook()
    transport = NotionTransport(NotionkitConfig(token="t", metrics=hook))
    assert transport._metrics is hook
    transport.close()


def test_record_request_reports_status_and_duration():
    hook = RecordingMetricsHook()
    record_request(hook, "PATCH", "pages/abc", 200, 12.5)
    tags = {"method": "PATCH", "path": "pages/abc", "status": "200"}
    assert hook.calls == [
        ("increment", "notionkit.requests_total", tags),
        ("timing", "notionkit.request_duration_ms", tags),
    ]


def test_record_request_without_response_skips_timing():
    hook = RecordingMetricsHook()
    record_request(hook, "GET", "pages/abc", None)
    assert hook.calls == [
        ("increment", "notionkit.requests_total",
         {"method": "GET", "path": "pages/abc", "status": "error"}),
    ]
