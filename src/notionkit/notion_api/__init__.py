"""notionkit.notion_api -- Notion API transport and endpoint wrappers.

This sub-package provides:

* :mod:`.request_builder` -- Operation descriptors, validation, and request building.
* :mod:`.dispatch` -- Per-verb helpers over a transport.
* :mod:`.transport` -- httpx-based HTTP transports.
* :mod:`.pages` -- Page endpoint wrappers.
"""

from __future__ import annotations

from .dispatch import AsyncTransport, AsyncVerbDispatcher, Transport, VerbDispatcher
from .pages import OPERATIONS, AsyncPageAPI, PageAPI
from .request_builder import MissingField, Operation, Request, build, resolve_field, validate
from .transport import AsyncNotionTransport, NotionTransport

__all__ = [
    "OPERATIONS",
    "AsyncNotionTransport",
    "AsyncPageAPI",
    "AsyncTransport",
    "AsyncVerbDispatcher",
    "MissingField",
    "NotionTransport",
    "Operation",
    "PageAPI",
    "Request",
    "Transport",
    "VerbDispatcher",
    "build",
    "resolve_field",
    "validate",
]
