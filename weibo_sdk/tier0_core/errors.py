"""
weibo_sdk.tier0_core.errors
────────────────────────────
Error taxonomy shared by every API group. Each failure an SDK call can
produce maps to exactly one class here, whether it is raised directly
(validation, credentials) or carried inside a Failure envelope
(network, HTTP status).

Local errors (ValidationError and subclasses, MissingCredentialError) are
always raised before a request reaches the HTTP executor.
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class WeiboError(Exception):
    """
    Base class for all SDK errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface to end users
    - detail: internal context, never shown to users
    - status_code: HTTP-ish status describing the failure class
    """

    status_code: int = 500
    code: str = "sdk_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "An unexpected error occurred.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Local (pre-dispatch) errors ───────────────────────────────────────────────

class ValidationError(WeiboError):
    """Bad, missing or oversized input, detected before dispatch."""
    status_code = 422
    code = "validation_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Validation failed.",
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(code, user_message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


class EmptyBatchError(ValidationError):
    """A batch operation received an empty id list."""
    code = "empty_batch"

    def __init__(self, field: str = "ids", **metadata: Any) -> None:
        super().__init__(
            user_message=f"{field} must contain at least one id.",
            fields={field: "empty"},
            **metadata,
        )


class BatchSizeExceeded(ValidationError):
    """A batch operation received more ids than the endpoint accepts."""
    code = "batch_size_exceeded"

    def __init__(self, field: str, size: int, limit: int, **metadata: Any) -> None:
        self.size = size
        self.limit = limit
        super().__init__(
            user_message=f"{field} accepts at most {limit} ids, got {size}.",
            fields={field: f"max {limit}"},
            **metadata,
        )


class MissingCredentialError(WeiboError):
    """Access token is absent or expired."""
    status_code = 401
    code = "missing_credential"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "A valid access token is required.",
        **metadata: Any,
    ) -> None:
        super().__init__(code, user_message, **metadata)


# ── Remote (post-dispatch) errors ─────────────────────────────────────────────

class NetworkError(WeiboError):
    """Transport-level failure: no connection, timeout, malformed exchange."""
    status_code = 503
    code = "network_error"


class HttpStatusError(WeiboError):
    """
    The API answered with a non-2xx status. The raw body is preserved
    untouched; it is usually a Weibo error payload the caller may parse.
    """
    status_code = 502
    code = "http_status_error"

    def __init__(
        self,
        http_status: int,
        body: str | None = None,
        user_message: str | None = None,
        **metadata: Any,
    ) -> None:
        self.http_status = http_status
        self.body = body
        super().__init__(
            user_message=user_message or f"Weibo API returned HTTP {http_status}.",
            **metadata,
        )

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["error"]["http_status"] = self.http_status
        return d


# ── Programming errors ────────────────────────────────────────────────────────

class ConfigurationError(WeiboError):
    """Misconfiguration detected at load time."""
    status_code = 500
    code = "configuration_error"


class UnknownOperationError(WeiboError, LookupError):
    """An operation was looked up that the endpoint table does not define."""
    status_code = 500
    code = "unknown_operation"


class RequestStateError(WeiboError):
    """A request or parameter bag was used outside its lifecycle."""
    status_code = 500
    code = "request_state_error"


__all__ = [
    "WeiboError",
    "ValidationError",
    "EmptyBatchError",
    "BatchSizeExceeded",
    "MissingCredentialError",
    "NetworkError",
    "HttpStatusError",
    "ConfigurationError",
    "UnknownOperationError",
    "RequestStateError",
]
