"""Synchronous Notion client.

Usage::

    from notionkit import NotionClient

    with NotionClient(token="secret_xxx") as client:
        page = client.page(page_id="<page_id>")
        client.update_page(page_id="<page_id>", archived=True)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from notionkit.config import NotionkitConfig
from notionkit.notion_api.dispatch import Transport, VerbDispatcher
from notionkit.notion_api.pages import OPERATIONS, OptionsArg, PageAPI, build_request, coerce_options
from notionkit.notion_api.transport import NotionTransport


class NotionClient:
    """Synchronous Notion client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    transport:
        Optional transport to use instead of the default
        :class:`NotionTransport`.  The client does not close a transport it
        did not create.
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`NotionkitConfig`.
    """

    def __init__(self, token: str, transport: Transport | None = None, **kwargs: Any) -> None:
        self._config = NotionkitConfig(token=token, **kwargs)
        self._owns_transport = transport is None
        self._transport = transport if transport is not None else NotionTransport(self._config)
        self._dispatcher = VerbDispatcher(self._transport)
        self._pages = PageAPI(self._dispatcher)

    @property
    def config(self) -> NotionkitConfig:
        return self._config

    @property
    def pages(self) -> PageAPI:
        return self._pages

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Retrieve a page.  See :meth:`PageAPI.page`."""
        return self._pages.page(options, **kwargs)

    def create_page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Create a page.  See :meth:`PageAPI.create_page`."""
        return self._pages.create_page(options, **kwargs)

    def update_page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Update a page.  See :meth:`PageAPI.update_page`."""
        return self._pages.update_page(options, **kwargs)

    def page_property_item(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Retrieve a page property item.  See :meth:`PageAPI.page_property_item`."""
        return self._pages.page_property_item(options, **kwargs)

    def execute(self, name: str, options: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        """Invoke a registered operation by *name*.

        Raises
        ------
        KeyError
            If no operation called *name* exists.
        """
        operation = OPERATIONS[name]
        request = build_request(operation, coerce_options(options, kwargs))
        return self._dispatcher.send(request)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying transport if this client created it."""
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> NotionClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
