"""
weibo_sdk.tier0_core.http
──────────────────────────
HTTP primitives and the outcome envelope every dispatch produces.

A dispatch ends in exactly one OutcomeEnvelope: ``Success`` carrying the
raw response body, or ``Failure`` carrying the failure kind, a message,
and (for HTTP failures) the status and untouched body. Blocking and
non-blocking calls produce the same envelope for the same exchange.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from weibo_sdk.tier0_core.errors import HttpStatusError, NetworkError, WeiboError


# ── Status code constants ──────────────────────────────────────────────────

class HTTP:
    """HTTP status codes the SDK reasons about."""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    TOO_MANY_REQUESTS = 429

    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503

    GET = "GET"
    POST = "POST"

    @staticmethod
    def is_success(status: int) -> bool:
        return 200 <= status < 300


# ── Outcome envelope ──────────────────────────────────────────────────────

class OutcomeKind(str, Enum):
    NETWORK = "network"
    HTTP_STATUS = "http_status"


@dataclass(frozen=True)
class Success:
    """2xx response. The body is passed through unparsed."""
    body: str
    status: int = field(default=HTTP.OK, compare=False)

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> str:
        return self.body


@dataclass(frozen=True)
class Failure:
    """Network failure or non-2xx response."""
    kind: OutcomeKind
    message: str
    status: int | None = None
    body: str | None = None

    @property
    def ok(self) -> bool:
        return False

    def to_error(self) -> WeiboError:
        if self.kind is OutcomeKind.HTTP_STATUS and self.status is not None:
            return HttpStatusError(self.status, self.body, detail=self.message)
        return NetworkError(user_message="Could not reach the Weibo API.", detail=self.message)

    def unwrap(self) -> str:
        raise self.to_error()


OutcomeEnvelope = Union[Success, Failure]


def network_failure(message: str) -> Failure:
    return Failure(kind=OutcomeKind.NETWORK, message=message)


def status_failure(status: int, body: str | None) -> Failure:
    return Failure(
        kind=OutcomeKind.HTTP_STATUS,
        message=f"HTTP {status}",
        status=status,
        body=body,
    )


__all__ = [
    "HTTP",
    "OutcomeKind",
    "Success",
    "Failure",
    "OutcomeEnvelope",
    "network_failure",
    "status_failure",
]
