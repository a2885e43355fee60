"""
weibo_sdk.tier1_runtime.dispatch
─────────────────────────────────
Authenticated request building and dispatch. This is the one path every
API-group method goes through:

    build_request(endpoint, params, token)  → RequestDescriptor
    Dispatcher.dispatch(request, blocking=…) → OutcomeEnvelope | Future

Blocking and non-blocking dispatch share the same begin/finish steps and
differ only in which executor primitive is called. The credential check
runs in build_request, so an absent or expired token is reported before
the executor is ever touched, in either mode.

Request lifecycle: BUILT → DISPATCHED → SUCCEEDED | FAILED. Terminal
states are final and a descriptor is dispatched at most once.
"""
from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from weibo_sdk.tier0_core.credentials import AccessToken
from weibo_sdk.tier0_core.errors import MissingCredentialError, RequestStateError
from weibo_sdk.tier0_core.http import (
    HTTP,
    OutcomeEnvelope,
    Success,
    network_failure,
    status_failure,
)
from weibo_sdk.tier0_core.logging import get_logger
from weibo_sdk.tier0_core.params import ParameterBag
from weibo_sdk.tier1_runtime.executor import HttpExecutor, HttpRequest, RawResponse

if TYPE_CHECKING:
    from weibo_sdk.tier3_platform.endpoints import EndpointDescriptor

log = get_logger(__name__)

OutcomeCallback = Callable[[OutcomeEnvelope], None]


# ── Request descriptor ────────────────────────────────────────────────────────

class RequestState(str, Enum):
    BUILT = "built"
    DISPATCHED = "dispatched"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class _Lifecycle:
    def __init__(self) -> None:
        self.state = RequestState.BUILT
        self._lock = threading.Lock()

    def advance(self, expected: RequestState, to: RequestState) -> bool:
        with self._lock:
            if self.state is not expected:
                return False
            self.state = to
            return True


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Endpoint + frozen parameter bag + token + auth headers. Equality ignores
    the lifecycle, so two builds from identical inputs compare equal.
    """
    endpoint: EndpointDescriptor
    params: ParameterBag
    token: AccessToken
    headers: tuple[tuple[str, str], ...] = ()
    _lifecycle: _Lifecycle = field(default_factory=_Lifecycle, compare=False, repr=False)

    @property
    def state(self) -> RequestState:
        return self._lifecycle.state

    def to_http(self) -> HttpRequest:
        return HttpRequest(
            method=self.endpoint.method,
            url=self.endpoint.url,
            params=self.params.to_wire(),
            files=self.params.files(),
            headers=dict(self.headers),
        )


def build_request(
    endpoint: EndpointDescriptor,
    params: ParameterBag,
    token: AccessToken | None,
    *,
    auth_mode: str = "header",
    auth_scheme: str = "OAuth2",
) -> RequestDescriptor:
    """
    Attach credentials and freeze the parameters into a RequestDescriptor.

    auth_mode="header" sends ``Authorization: <scheme> <token>``;
    auth_mode="param" adds ``access_token`` to the parameters instead.
    Raises MissingCredentialError for an absent or expired token.
    """
    if token is None or not isinstance(token, AccessToken) or not token.token:
        raise MissingCredentialError(detail=f"No access token for {endpoint.operation}")
    if token.is_expired():
        raise MissingCredentialError(
            "expired_credential",
            user_message="The access token has expired.",
            detail=f"Access token expired at {token.expires_at} for {endpoint.operation}",
        )

    bag = params.copy()
    headers: tuple[tuple[str, str], ...] = ()
    if auth_mode == "param":
        bag.put("access_token", token.token)
    else:
        headers = (("Authorization", f"{auth_scheme} {token.token}"),)

    return RequestDescriptor(
        endpoint=endpoint,
        params=bag.freeze(),
        token=token,
        headers=headers,
    )


# ── Outcome normalization ─────────────────────────────────────────────────────

def normalize(raw: RawResponse) -> OutcomeEnvelope:
    """Map an executor triple onto Success / Failure."""
    if raw.error is not None:
        return network_failure(f"{type(raw.error).__name__}: {raw.error}")
    if raw.status is None:
        return network_failure("Executor returned neither a status nor an error")
    if HTTP.is_success(raw.status):
        return Success(body=raw.body if raw.body is not None else "", status=raw.status)
    return status_failure(raw.status, raw.body)


# ── Dispatcher ────────────────────────────────────────────────────────────────

class Dispatcher:
    """
    Runs RequestDescriptors through an HttpExecutor.

    Holds no per-request state; concurrent dispatches are independent and
    their completions are unordered. Never retries.
    """

    def __init__(self, executor: HttpExecutor) -> None:
        self._executor = executor

    @property
    def executor(self) -> HttpExecutor:
        return self._executor

    def dispatch(
        self,
        request: RequestDescriptor,
        *,
        blocking: bool = True,
        callback: OutcomeCallback | None = None,
    ) -> OutcomeEnvelope | Future:
        if blocking:
            if callback is not None:
                raise TypeError("callback is only accepted for non-blocking dispatch")
            return self.dispatch_sync(request)
        return self.dispatch_async(request, callback)

    def dispatch_sync(self, request: RequestDescriptor) -> OutcomeEnvelope:
        """
        Block the calling thread on the executor's blocking primitive.
        Do not call from a context that cannot tolerate blocking.
        """
        http_request = self._begin(request)
        try:
            raw = self._executor.execute(http_request)
        except Exception as exc:
            raw = RawResponse(error=exc)
        outcome = self._finish(request, raw)
        if outcome is None:
            raise RequestStateError(detail="Blocking dispatch completed twice")
        return outcome

    def dispatch_async(
        self,
        request: RequestDescriptor,
        callback: OutcomeCallback | None = None,
    ) -> Future:
        """
        Hand the request to the executor and return immediately. The
        returned Future resolves to the envelope; *callback*, if given,
        receives the same envelope exactly once on the executor's thread.
        """
        http_request = self._begin(request)
        future: Future = Future()
        # no cancellation handle: cancellation belongs to the executor
        future.set_running_or_notify_cancel()

        def on_complete(raw: RawResponse) -> None:
            outcome = self._finish(request, raw)
            if outcome is None:
                return
            future.set_result(outcome)
            if callback is not None:
                callback(outcome)

        try:
            self._executor.submit(http_request, on_complete)
        except Exception as exc:
            # a completion already delivered makes this one a dropped duplicate
            on_complete(RawResponse(error=exc))
        return future

    def _begin(self, request: RequestDescriptor) -> HttpRequest:
        if not request._lifecycle.advance(RequestState.BUILT, RequestState.DISPATCHED):
            raise RequestStateError(
                user_message="A request can only be dispatched once.",
                detail=f"{request.endpoint.operation} is already {request.state.value}",
            )
        log.info(
            "dispatch.start",
            operation=str(request.endpoint.operation),
            method=request.endpoint.method,
            url=request.endpoint.url,
            params=request.params.keys(),
        )
        return request.to_http()

    def _finish(self, request: RequestDescriptor, raw: RawResponse) -> OutcomeEnvelope | None:
        outcome = normalize(raw)
        terminal = RequestState.SUCCEEDED if outcome.ok else RequestState.FAILED
        if not request._lifecycle.advance(RequestState.DISPATCHED, terminal):
            log.error(
                "dispatch.duplicate_completion",
                operation=str(request.endpoint.operation),
                state=request.state.value,
            )
            return None
        if outcome.ok:
            log.info(
                "dispatch.succeeded",
                operation=str(request.endpoint.operation),
                status=outcome.status,
            )
        else:
            log.warning(
                "dispatch.failed",
                operation=str(request.endpoint.operation),
                kind=outcome.kind.value,
                status=outcome.status,
                message=outcome.message,
            )
        return outcome


__all__ = [
    "RequestState",
    "RequestDescriptor",
    "build_request",
    "normalize",
    "Dispatcher",
    "OutcomeCallback",
]
