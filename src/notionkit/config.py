"""Client configuration for notionkit.

:class:`NotionkitConfig` is a dataclass that captures every tuneable knob
of the HTTP layer.  Instances are passed to both :class:`NotionClient` and
:class:`AsyncNotionClient`, which forward them to the transport.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


@dataclass
class NotionkitConfig:
    """Complete configuration for a notionkit client.

    Every parameter has a default so that the only *required* value is
    ``token``.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~notionkit.observability.MetricsHook`
        implementation.  Defaults to a no-op hook.
    debug_dump_payload:
        Write the (redacted) request and response of every call to
        *stderr*.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    notion_version: str = "2022-06-28"

    base_url: str = "https://api.notion.com/v1"

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in _LOCAL_HOSTS:
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"NotionkitConfig({', '.join(parts)})"
