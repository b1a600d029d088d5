"""Single-line JSON logging for notionkit.

Records look like::

    {"ts": "2026-01-01T12:00:00+00:00", "level": "DEBUG",
     "logger": "notionkit.transport", "message": "Request completed",
     "op": "request", "method": "GET", "path": "pages/abc", "status_code": 200}

Structured fields are passed as ``extra={"extra_fields": {...}}`` and go
through :func:`~notionkit.utils.redact.redact` before they are written, so
credential-like keys and bearer headers never reach the log stream.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

from notionkit.utils.redact import redact


class StructuredFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields = getattr(record, "extra_fields", None)
        if fields:
            entry.update(redact(fields))

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


_configured: set[str] = set()


def get_logger(
    name: str = "notionkit",
    *,
    level: int | str = logging.WARNING,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Return the logger called *name*, attaching a JSON handler once.

    *level* and *stream* only take effect on the first call for a given
    name; later calls hand back the same logger untouched.  *level* may be
    an ``int`` or a level name in any case.
    """
    logger = logging.getLogger(name)
    if name in _configured:
        return logger

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _configured.add(name)
    return logger
