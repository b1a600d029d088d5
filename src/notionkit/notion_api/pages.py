"""Page endpoints of the Notion API.

The four operations are declared once as :class:`Operation` constants and
collected in :data:`OPERATIONS`.  :class:`PageAPI` (sync) and
:class:`AsyncPageAPI` (async) compose the request builder with a verb
dispatcher; responses are returned exactly as the service sent them.

Every method accepts options in any of these forms::

    api.page({"page_id": "abc"})
    api.page(page_id="abc")
    api.page(RetrievePageOptions(page_id="abc"))
    api.page({"page_id": "abc"}, filter_properties=["title"])
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Union

from notionkit.errors import MissingArgumentError
from notionkit.models import DatabaseParent, PageOptions, PageParent
from notionkit.observability import get_logger

from .dispatch import AsyncVerbDispatcher, VerbDispatcher
from .request_builder import Operation, Request, build

log = get_logger("notionkit.pages")

PAGE = Operation(
    name="page",
    method="GET",
    path_template="pages/{page_id}",
    required=(("page_id",),),
)

CREATE_PAGE = Operation(
    name="create_page",
    method="POST",
    path_template="pages",
    required=(("parent.database_id", "parent.page_id"),),
)

UPDATE_PAGE = Operation(
    name="update_page",
    method="PATCH",
    path_template="pages/{page_id}",
    required=(("page_id",),),
)

PAGE_PROPERTY_ITEM = Operation(
    name="page_property_item",
    method="GET",
    path_template="pages/{page_id}/properties/{property_id}",
    required=(("page_id",), ("property_id",)),
)

OPERATIONS: Mapping[str, Operation] = MappingProxyType({
    op.name: op for op in (PAGE, CREATE_PAGE, UPDATE_PAGE, PAGE_PROPERTY_ITEM)
})
"""Read-only registry of the page operations keyed by name."""


OptionsArg = Union[PageOptions, Mapping[str, Any], None]


def coerce_options(options: OptionsArg, overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Normalise the accepted option forms into one plain dict.

    Typed option objects are flattened with ``to_options()``; keyword
    *overrides* win over keys from *options*; parent variants passed as
    values are converted to their JSON form.
    """
    if options is None:
        merged: dict[str, Any] = {}
    elif hasattr(options, "to_options"):
        merged = options.to_options()
    else:
        merged = dict(options)
    merged.update(overrides)

    parent = merged.get("parent")
    if isinstance(parent, (DatabaseParent, PageParent)):
        merged["parent"] = parent.to_dict()
    return merged


def build_request(operation: Operation, options: Mapping[str, Any]) -> Request:
    """Build *operation*'s request, logging rejected option sets."""
    try:
        return build(operation, options)
    except MissingArgumentError as exc:
        log.debug(
            "Rejected call with missing arguments",
            extra={
                "extra_fields": {
                    "op": operation.name,
                    "missing": exc.missing,
                }
            },
        )
        raise


class PageAPI:
    """Synchronous wrapper for the Notion ``pages`` endpoints.

    Parameters
    ----------
    dispatcher:
        A :class:`VerbDispatcher` bound to a transport.
    """

    def __init__(self, dispatcher: VerbDispatcher) -> None:
        self._dispatcher = dispatcher

    def _call(self, operation: Operation, options: OptionsArg, overrides: Mapping[str, Any]) -> Any:
        request = build_request(operation, coerce_options(options, overrides))
        return self._dispatcher.send(request)

    def page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Retrieve a page object by ID.

        Only page properties are returned, not page content.

        Options
        -------
        page_id:
            **Required.**  The page to fetch.
        filter_properties:
            Optional list of property IDs to limit the response to.

        Returns
        -------
        dict
            The page object.
        """
        return self._call(PAGE, options, kwargs)

    def create_page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Create a page in a database or beneath an existing page.

        Options
        -------
        parent:
            **Required.**  ``{"database_id": ...}`` or ``{"page_id": ...}``
            (or a :class:`DatabaseParent` / :class:`PageParent`).
        properties:
            Property values keyed by property name or ID.  Under a database
            they must match its schema; under a page only ``title`` is valid.
        children:
            Page content as a list of block objects.
        icon, cover:
            Page icon and cover objects.

        The full option set is sent as the request body.
        """
        return self._call(CREATE_PAGE, options, kwargs)

    def update_page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Update a page's properties, icon, cover, or archive flag.

        ``page_id`` is **required** and selects the page; every other option
        is sent unchanged as the request body.  Properties not mentioned are
        left as they are.
        """
        return self._call(UPDATE_PAGE, options, kwargs)

    def page_property_item(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Retrieve one property item of a page.

        ``page_id`` and ``property_id`` are **required**.  Depending on the
        property type the response is either a single ``property_item``
        object or a paginated list (``object == "list"``) carrying
        ``results``, ``has_more`` and ``next_cursor``.  The list is returned
        as-is; pass ``start_cursor`` to fetch the next page.
        """
        return self._call(PAGE_PROPERTY_ITEM, options, kwargs)


class AsyncPageAPI:
    """Asynchronous wrapper for the Notion ``pages`` endpoints.

    Mirrors :class:`PageAPI` but all methods are coroutines.
    """

    def __init__(self, dispatcher: AsyncVerbDispatcher) -> None:
        self._dispatcher = dispatcher

    async def _call(
        self, operation: Operation, options: OptionsArg, overrides: Mapping[str, Any],
    ) -> Any:
        request = build_request(operation, coerce_options(options, overrides))
        return await self._dispatcher.send(request)

    async def page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Retrieve a page object by ID (async).

        See :meth:`PageAPI.page`.
        """
        return await self._call(PAGE, options, kwargs)

    async def create_page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Create a page (async).  See :meth:`PageAPI.create_page`."""
        return await self._call(CREATE_PAGE, options, kwargs)

    async def update_page(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Update a page (async).  See :meth:`PageAPI.update_page`."""
        return await self._call(UPDATE_PAGE, options, kwargs)

    async def page_property_item(self, options: OptionsArg = None, **kwargs: Any) -> Any:
        """Retrieve a page property item (async).

        See :meth:`PageAPI.page_property_item`.
        """
        return await self._call(PAGE_PROPERTY_ITEM, options, kwargs)
