"""Typed option objects for the page endpoints.

Each page operation accepts either a plain mapping of options or one of the
frozen dataclasses below.  A dataclass converts to the mapping form through
``to_options()``, which drops every field left at ``None`` so that omitted
values never reach the request body.

The parent of a new page is a tagged union: :class:`DatabaseParent` or
:class:`PageParent`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


# ---------------------------------------------------------------------------
# Parents
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatabaseParent:
    """The new page becomes a row of the database *database_id*."""

    database_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "database_id", "database_id": self.database_id}


@dataclass(frozen=True)
class PageParent:
    """The new page becomes a child of the page *page_id*."""

    page_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "page_id", "page_id": self.page_id}


Parent = Union[DatabaseParent, PageParent]


# ---------------------------------------------------------------------------
# Per-operation options
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RetrievePageOptions:
    """Options for ``page``.

    ``filter_properties`` limits the returned properties to the given
    property IDs.
    """

    page_id: str
    filter_properties: list[str] | None = None

    def to_options(self) -> dict[str, Any]:
        return _drop_none({
            "page_id": self.page_id,
            "filter_properties": self.filter_properties,
        })


@dataclass(frozen=True)
class CreatePageOptions:
    """Options for ``create_page``.

    When the parent is a database the ``properties`` must match its schema;
    when the parent is a page the only valid property is ``title``.
    ``children`` is the initial page content as a list of block objects.
    """

    parent: Parent
    properties: dict[str, Any] | None = None
    children: list[dict[str, Any]] | None = None
    icon: dict[str, Any] | None = None
    cover: dict[str, Any] | None = None

    def to_options(self) -> dict[str, Any]:
        return _drop_none({
            "parent": self.parent.to_dict(),
            "properties": self.properties,
            "children": self.children,
            "icon": self.icon,
            "cover": self.cover,
        })


@dataclass(frozen=True)
class UpdatePageOptions:
    """Options for ``update_page``.  Unset properties stay unchanged."""

    page_id: str
    properties: dict[str, Any] | None = None
    archived: bool | None = None
    icon: dict[str, Any] | None = None
    cover: dict[str, Any] | None = None

    def to_options(self) -> dict[str, Any]:
        return _drop_none({
            "page_id": self.page_id,
            "properties": self.properties,
            "archived": self.archived,
            "icon": self.icon,
            "cover": self.cover,
        })


@dataclass(frozen=True)
class PagePropertyItemOptions:
    """Options for ``page_property_item``.

    ``start_cursor`` and ``page_size`` are forwarded as query parameters
    for paginated property types; the client never follows cursors itself.
    """

    page_id: str
    property_id: str
    start_cursor: str | None = None
    page_size: int | None = None

    def to_options(self) -> dict[str, Any]:
        return _drop_none({
            "page_id": self.page_id,
            "property_id": self.property_id,
            "start_cursor": self.start_cursor,
            "page_size": self.page_size,
        })


PageOptions = Union[
    RetrievePageOptions,
    CreatePageOptions,
    UpdatePageOptions,
    PagePropertyItemOptions,
]
