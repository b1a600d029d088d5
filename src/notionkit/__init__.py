"""notionkit -- a thin Python binding for the Notion pages API.

Public re-exports
-----------------

* **Clients:** :class:`NotionClient`, :class:`AsyncNotionClient`
* **Configuration:** :class:`NotionkitConfig`
* **Errors:** every :class:`NotionkitError` subclass and :class:`ErrorCode`
* **Models:** parent variants and typed option objects

Usage::

    from notionkit import NotionClient, PageParent

    client = NotionClient(token="secret_xxx")
    page = client.create_page(
        parent=PageParent("<page_id>"),
        properties={"title": [{"text": {"content": "Hello"}}]},
    )
"""

from __future__ import annotations

# ── Clients ────────────────────────────────────────────────────────────
from notionkit.async_client import AsyncNotionClient
from notionkit.client import NotionClient

# ── Configuration ───────────────────────────────────────────────────────
from notionkit.config import NotionkitConfig

# ── Errors ──────────────────────────────────────────────────────────────
from notionkit.errors import (
    ErrorCode,
    MissingArgumentError,
    NetworkError,
    NotionkitError,
    RemoteApiError,
    RemoteAuthError,
    RemoteConflictError,
    RemoteNotFoundError,
    RemotePermissionError,
    RemoteRateLimitError,
    RemoteServerError,
    RemoteValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from notionkit.models import (
    CreatePageOptions,
    DatabaseParent,
    PageParent,
    PagePropertyItemOptions,
    RetrievePageOptions,
    UpdatePageOptions,
)

__version__ = "0.1.0"

__all__ = [
    # Clients
    "NotionClient",
    "AsyncNotionClient",
    # Configuration
    "NotionkitConfig",
    # Errors
    "NotionkitError",
    "ErrorCode",
    "MissingArgumentError",
    "RemoteApiError",
    "RemoteValidationError",
    "RemoteAuthError",
    "RemotePermissionError",
    "RemoteNotFoundError",
    "RemoteConflictError",
    "RemoteRateLimitError",
    "RemoteServerError",
    "NetworkError",
    # Models
    "DatabaseParent",
    "PageParent",
    "RetrievePageOptions",
    "CreatePageOptions",
    "UpdatePageOptions",
    "PagePropertyItemOptions",
]
