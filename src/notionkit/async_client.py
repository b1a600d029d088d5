"""Asynchronous Notion client.

:class:`AsyncNotionClient` mirrors :class:`NotionClient` but every I/O
method is a coroutine.

Usage::

    import asyncio
    from notionkit import AsyncNotionClient

    async def main():
        async with AsyncNotionClient(token="secret_xxx") as client:
            page = await client.page(page_id="<page_id>")
            print(page["id"])

    asyncio.run(main())
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from notionkit.config import NotionkitConfig
from notionkit.notion_api.dispatch import AsyncTransport, AsyncVerbDispatcher
from notionkit.notion_api.pages import (
    OPERATIONS,
    AsyncPageAPI,
    OptionsArg,
    build_request,
    coerce_options,
)
from notionkit.notion_api.transport import AsyncNotionTransport


class AsyncNotionClient:
    """Asynchronous Notion client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    transport:
        Optional async transport replacing :class:`AsyncNotionTransport`.
    **kwargs:
        Forwarded to :class:`NotionkitConfig`.
    """

    def __init__(
        self, token: str, transport: AsyncTransport | None = None, **kwargs: Any,
    ) -> None:
        self._config = NotionkitConfig(token=token, **kwargs)
        self._owns_transport = transport is None
        self._transport = (
            transport if transport is not None else AsyncNotionTransport(self._config)
        )
        self._dispatcher = AsyncVerbDispatcher(self._transport)
        self._pages = AsyncPageAPI(self._dispatcher)

    @property
    def config(self) -> NotionkitConfig:
        return self._config

    @property
    def pages(self) -> AsyncPageAPI:
        return self._pages

    async def page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        return await self._pages.page(options, **kwargs)

    async def create_page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        return await self._pages.create_page(options, **kwargs)

    async def update_page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        return await self._pages.update_page(options, **kwargs)

    async def page_property_item(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        return await self._pages.page_property_item(options, **kwargs)

    async def execute(
        self, name: str, options: Mapping[str, Any] | None = None, **kwargs: Any,
    ) -> Any:
        """Invoke a registered operation by *name* (async)."""
        operation = OPERATIONS[name]
        request = build_request(operation, coerce_options(options, kwargs))
        return await self._dispatcher.send(request)

    async def close(self) -> None:
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> AsyncNotionClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
