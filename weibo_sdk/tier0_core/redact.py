"""
weibo_sdk.tier0_core.redact
────────────────────────────
Credential scrubbing for log output. The dispatcher logs endpoint URLs and
parameter names; this module guarantees the access token never leaves the
process through a log line, whether it sits in a field, an Authorization
header, or an ``access_token=`` query string.
"""
from __future__ import annotations

import re
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "token", "access_token", "refresh_token", "authorization",
    "client_secret", "app_secret", "password", "cookie",
})

_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b(Bearer|OAuth2)\s+[A-Za-z0-9\-._~+/]+=*", re.I), r"\1 [REDACTED]"),
    (re.compile(r"((?:access|refresh)_token)=[^\s&\"']+", re.I), r"\1=[REDACTED]"),
]

REDACTED = "[REDACTED]"


def redact_dict(
    data: dict[str, Any],
    sensitive_keys: frozenset[str] | None = None,
) -> dict[str, Any]:
    """
    Return a copy of *data* with sensitive values replaced by REDACTED and
    string values scrubbed of inline credentials. Nested dicts are walked.
    """
    keys = sensitive_keys if sensitive_keys is not None else _SENSITIVE_KEYS
    result: dict[str, Any] = {}
    for k, v in data.items():
        if isinstance(k, str) and k.lower() in keys:
            result[k] = REDACTED
        elif isinstance(v, dict):
            result[k] = redact_dict(v, keys)
        elif isinstance(v, str):
            result[k] = scrub_string(v)
        else:
            result[k] = v
    return result


def scrub_string(text: str) -> str:
    """Mask header-style and query-style tokens inside an arbitrary string."""
    for pattern, replacement in _PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def structlog_redact_processor(
    logger: Any,
    method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor; must run before the renderer."""
    return redact_dict(event_dict)


__all__ = [
    "REDACTED",
    "redact_dict",
    "scrub_string",
    "structlog_redact_processor",
]
