"""Per-verb helpers over a single transport call.

:class:`VerbDispatcher` and :class:`AsyncVerbDispatcher` give endpoint
wrappers ``get`` / ``post`` / ``patch`` / ``delete`` methods.  All of them
funnel into ``transport.request(method, path, body=..., params=...)``, so
any object satisfying :class:`Transport` (or :class:`AsyncTransport`) can
stand in for the default httpx transport.  Errors raised by the transport
propagate unchanged.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .request_builder import Request


@runtime_checkable
class Transport(Protocol):
    """Interface the sync dispatcher requires of its transport."""

    def request(
        self,
        method: str,
        path: str,
        body: Any | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Interface the async dispatcher requires of its transport."""

    async def request(
        self,
        method: str,
        path: str,
        body: Any | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        ...


class VerbDispatcher:
    """Synchronous verb helpers.

    Parameters
    ----------
    transport:
        Any object with a compatible ``request`` method, normally a
        :class:`~notionkit.notion_api.transport.NotionTransport`.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._transport.request("GET", path, body=None, params=params)

    def post(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return self._transport.request("POST", path, body=body, params=None)

    def patch(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return self._transport.request("PATCH", path, body=body, params=None)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._transport.request("DELETE", path, body=None, params=params)

    def send(self, request: Request) -> Any:
        """Dispatch a :class:`Request` produced by the request builder."""
        if request.method == "GET":
            return self.get(request.path, request.params)
        if request.method == "POST":
            return self.post(request.path, request.body)
        if request.method == "PATCH":
            return self.patch(request.path, request.body)
        if request.method == "DELETE":
            return self.delete(request.path, request.params)
        raise ValueError(f"Unsupported HTTP method: {request.method!r}")


class AsyncVerbDispatcher:
    """Asynchronous verb helpers.

    Mirrors :class:`VerbDispatcher` but every method is a coroutine.
    """

    def __init__(self, transport: AsyncTransport) -> None:
        self._transport = transport

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._transport.request("GET", path, body=None, params=params)

    async def post(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return await self._transport.request("POST", path, body=body, params=None)

    async def patch(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return await self._transport.request("PATCH", path, body=body, params=None)

    async def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._transport.request("DELETE", path, body=None, params=params)

    async def send(self, request: Request) -> Any:
        """Dispatch a :class:`Request` produced by the request builder (async)."""
        if request.method == "GET":
            return await self.get(request.path, request.params)
        if request.method == "POST":
            return await self.post(request.path, request.body)
        if request.method == "PATCH":
            return await self.patch(request.path, request.body)
        if request.method == "DELETE":
            return await self.delete(request.path, request.params)
        raise ValueError(f"Unsupported HTTP method: {request.method!r}")
