"""Observability: structured logging and metrics hooks for notionkit."""

from __future__ import annotations

from .logger import StructuredFormatter, get_logger
from .metrics import MetricsHook, NoopMetricsHook, record_request

__all__ = [
    "MetricsHook",
    "NoopMetricsHook",
    "StructuredFormatter",
    "get_logger",
    "record_request",
]
