"""Payload redaction for debug dumps and logs.

:func:`redact` must be applied before a request or response is written
anywhere.  It removes the integration token wherever it appears and masks
the value of any key that looks like a credential.
"""

from __future__ import annotations

import copy
import re
from typing import Any

# Case-insensitive substrings marking a key as sensitive.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "authorization",
    "cookie",
    "api_key",
    "api-key",
})

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")


def _mask_token(value: str, token: str | None) -> str:
    if token and token in value:
        suffix = token[-4:] if len(token) >= 4 else "****"
        placeholder = f"<redacted:...{suffix}>"
        if token in placeholder:
            placeholder = "<redacted>"
        value = value.replace(token, placeholder)
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _redact_value(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        return _redact_dict(value, token)
    if isinstance(value, list):
        return [_redact_value(item, token) for item in value]
    if isinstance(value, str) and token:
        return _mask_token(value, token)
    return value


def _redact_dict(d: dict, token: str | None) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            result[key] = _mask_token(value, token) if isinstance(value, str) else "<redacted>"
        else:
            result[key] = _redact_value(value, token)
    return result


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a deep copy of *payload* with sensitive data removed.

    Parameters
    ----------
    payload:
        A request body, response body, header dict or debug dump.
    token:
        The integration token.  Every occurrence is replaced with
        ``<redacted:...XXXX>`` (its last four characters).

    Examples
    --------
    >>> redact({"Authorization": "Bearer ntn_abc123"})
    {'Authorization': 'Bearer <redacted>'}
    """
    return _redact_dict(copy.deepcopy(payload), token)
