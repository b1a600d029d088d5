"""Error hierarchy for the notionkit client.

Every public error class inherits from :class:`NotionkitError`.  Each
carries a machine-readable ``code`` (from :class:`ErrorCode`), a
human-readable ``message``, an optional structured ``context`` dict, and an
optional ``cause`` (chained exception).

Two families exist:

* :class:`MissingArgumentError` -- raised locally, before any request is
  sent, when an operation's required option is absent.
* :class:`RemoteApiError` and its subclasses -- raised when the Notion API
  (or the network path to it) reports a failure.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the client can raise."""

    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    REMOTE_API_ERROR = "REMOTE_API_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NotionkitError(Exception):
    """Base exception for all notionkit errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Local argument errors
# ---------------------------------------------------------------------------

class MissingArgumentError(NotionkitError):
    """A required option was absent (or ``None``) when an operation was called.

    Raised synchronously by the request builder; no request is ever sent.

    Context keys: ``operation``, ``field``, ``missing``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.MISSING_ARGUMENT,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def field(self) -> str | None:
        """The first missing field, as a dotted path."""
        return self.context.get("field")

    @property
    def missing(self) -> list[str]:
        """Every missing field; alternatives are joined with ``" or "``."""
        return list(self.context.get("missing", []))


# ---------------------------------------------------------------------------
# Remote API errors
# ---------------------------------------------------------------------------

class RemoteApiError(NotionkitError):
    """The Notion API answered with a non-success status.

    Subclasses narrow the failure by status code.  The base class is raised
    directly for statuses without a dedicated subclass.

    Context keys: ``status_code``, ``notion_code``, ``body``, ``method``,
    ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str = ErrorCode.REMOTE_API_ERROR,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def status_code(self) -> int | None:
        return self.context.get("status_code")

    @property
    def body(self) -> Any:
        """Parsed error payload returned by the service, or ``{}``."""
        return self.context.get("body", {})

    @property
    def notion_code(self) -> str:
        return self.context.get("notion_code", "")


class RemoteValidationError(RemoteApiError):
    """Notion API returned 400 -- the request payload was invalid."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.VALIDATION_ERROR)


class RemoteAuthError(RemoteApiError):
    """Notion API returned 401 -- the integration token is invalid or expired."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.AUTH_ERROR)


class RemotePermissionError(RemoteApiError):
    """Notion API returned 403 -- the integration lacks access to the resource."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.PERMISSION_ERROR)


class RemoteNotFoundError(RemoteApiError):
    """Notion API returned 404 -- the resource does not exist or is not shared."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.NOT_FOUND)


class RemoteConflictError(RemoteApiError):
    """Notion API returned 409 -- the write conflicted with another change."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.CONFLICT)


class RemoteRateLimitError(RemoteApiError):
    """Notion API returned 429.  The request is **not** retried.

    Context keys: ``retry_after`` (seconds, or ``None``).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.RATE_LIMITED)

    @property
    def retry_after(self) -> float | None:
        return self.context.get("retry_after")


class RemoteServerError(RemoteApiError):
    """Notion API returned a 5xx status."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.SERVER_ERROR)


class NetworkError(RemoteApiError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    ``status_code`` is always ``None``.

    Context keys: ``method``, ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.NETWORK_ERROR)
