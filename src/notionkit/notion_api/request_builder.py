"""Turn an operation descriptor plus caller options into an HTTP request.

An :class:`Operation` names an endpoint, its HTTP method, a path template
with ``{placeholder}`` segments, and the option fields that must be
present.  :func:`build` validates the options, substitutes the placeholders
and routes whatever is left to the body (POST/PATCH) or the query string
(GET/DELETE).

Validation is available on its own through :func:`validate`, which returns
a list of :class:`MissingField` results instead of raising.

Nothing in this module touches the network.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import quote

from notionkit.errors import MissingArgumentError

HttpMethod = Literal["GET", "POST", "PATCH", "DELETE"]

# Methods whose leftover options travel in the JSON body.
_BODY_METHODS = frozenset({"POST", "PATCH"})

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")

FieldRequirement = tuple[str, ...]
"""One or more dotted paths; satisfied when any of them is non-None."""


@dataclass(frozen=True)
class Operation:
    """Static description of one endpoint."""

    name: str
    method: HttpMethod
    path_template: str
    required: tuple[FieldRequirement, ...] = ()

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(_PLACEHOLDER_RE.findall(self.path_template))


@dataclass(frozen=True)
class MissingField:
    """An unsatisfied requirement, listing the paths that would satisfy it."""

    paths: FieldRequirement

    def __str__(self) -> str:
        return " or ".join(self.paths)


@dataclass(frozen=True)
class Request:
    """A fully built request, ready for the verb dispatcher."""

    method: HttpMethod
    path: str
    body: dict[str, Any] | None = None
    params: dict[str, Any] | None = None


def resolve_field(options: Mapping[str, Any], path: str) -> Any:
    """Look up a dotted *path* (``"parent.page_id"``) inside nested mappings.

    Returns ``None`` when a segment is missing or an intermediate value is
    not a mapping.
    """
    current: Any = options
    for segment in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
        if current is None:
            return None
    return current


def validate(operation: Operation, options: Mapping[str, Any]) -> list[MissingField]:
    """Return every requirement of *operation* that *options* fails to meet.

    An empty list means the options are complete.  Path placeholders count
    as requirements even when the operation does not list them.
    """
    requirements = list(operation.required)
    for param in operation.path_params:
        if (param,) not in requirements:
            requirements.append((param,))

    return [
        MissingField(paths)
        for paths in requirements
        if all(resolve_field(options, path) is None for path in paths)
    ]


def build(operation: Operation, options: Mapping[str, Any] | None = None) -> Request:
    """Validate *options* against *operation* and build the :class:`Request`.

    The caller's mapping is never mutated.

    Raises
    ------
    MissingArgumentError
        If any requirement is unmet.  The message names the first missing
        field; ``.missing`` lists all of them.
    """
    options = dict(options or {})

    missing = validate(operation, options)
    if missing:
        first = str(missing[0])
        raise MissingArgumentError(
            message=f"Required argument {first} missing",
            context={
                "operation": operation.name,
                "field": first,
                "missing": [str(m) for m in missing],
            },
        )

    # Property IDs arrive already percent-encoded (e.g. "%3AUPp").
    def _substitute(match: re.Match[str]) -> str:
        return quote(str(options[match.group(1)]), safe="%")

    path = _PLACEHOLDER_RE.sub(_substitute, operation.path_template)

    remainder = {
        key: value
        for key, value in options.items()
        if key not in operation.path_params
    }

    if operation.method in _BODY_METHODS:
        return Request(operation.method, path, body=remainder)
    return Request(operation.method, path, params=remainder or None)
