"""
weibo_sdk.tier1_runtime.executor
─────────────────────────────────
The HTTP executor boundary. The dispatcher hands a fully built HttpRequest
to an executor and gets back a RawResponse triple (body, status, error),
either by blocking on ``execute`` or through the completion callback given
to ``submit``. Connection pooling, TLS, timeouts, retries and the worker
threads behind ``submit`` all belong to the executor, never to the core.

Implementations:
  - HttpxExecutor  httpx.Client + a thread pool for non-blocking submits
  - MockExecutor   scripted responses, records calls (tests / local dev)
"""
from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import httpx

from weibo_sdk.tier0_core.logging import get_logger
from weibo_sdk.tier1_runtime.retry import retry_policy

log = get_logger(__name__)


# ── Wire types ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class HttpRequest:
    """What goes on the wire: verb, absolute URL, text params, files, headers."""
    method: str
    url: str
    params: Mapping[str, str] = field(default_factory=dict)
    files: Mapping[str, bytes] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RawResponse:
    """
    Executor result. ``error`` is set for transport failures; otherwise
    ``status`` and ``body`` describe the response exactly as received.
    """
    body: str | None = None
    status: int | None = None
    error: BaseException | None = None


CompletionCallback = Callable[[RawResponse], None]


@runtime_checkable
class HttpExecutor(Protocol):
    """Implement this protocol to plug in another transport."""

    def execute(self, request: HttpRequest) -> RawResponse:
        """Block until the exchange completes."""
        ...

    def submit(self, request: HttpRequest, on_complete: CompletionCallback) -> None:
        """Start the exchange and return; call on_complete exactly once."""
        ...


# ── httpx executor ────────────────────────────────────────────────────────────

_IMAGE_SIGNATURES: tuple[tuple[bytes, str, str], ...] = (
    (b"\xff\xd8\xff", "image/jpeg", "jpg"),
    (b"\x89PNG\r\n\x1a\n", "image/png", "png"),
    (b"GIF87a", "image/gif", "gif"),
    (b"GIF89a", "image/gif", "gif"),
)


def sniff_image(data: bytes) -> tuple[str, str] | None:
    """Return (content_type, extension) for JPEG/PNG/GIF bytes, else None."""
    for signature, content_type, ext in _IMAGE_SIGNATURES:
        if data.startswith(signature):
            return content_type, ext
    return None


class HttpxExecutor:
    """
    Executor backed by a shared httpx.Client.

    GET params travel in the query string; POST params as a form body, or
    multipart when the request carries files. Non-blocking submits run on
    a private ThreadPoolExecutor.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        max_workers: int = 4,
        max_attempts: int = 1,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
        retry_min_wait: float = 0.5,
    ) -> None:
        headers = {"User-Agent": user_agent} if user_agent else None
        self._client = httpx.Client(timeout=timeout, transport=transport, headers=headers)
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="weibo-sdk")
        self._send = retry_policy(max_attempts=max_attempts, min_wait=retry_min_wait)(self._send_once)

    @classmethod
    def from_config(cls, config, **kwargs) -> "HttpxExecutor":
        return cls(
            timeout=config.timeout,
            max_workers=config.max_workers,
            max_attempts=config.max_attempts,
            user_agent=config.user_agent,
            **kwargs,
        )

    def _send_once(self, request: HttpRequest) -> httpx.Response:
        headers = dict(request.headers)
        if request.method == "GET":
            return self._client.request(
                "GET", request.url, params=dict(request.params), headers=headers
            )
        files = None
        if request.files:
            files = {}
            for name, data in request.files.items():
                content_type, ext = sniff_image(data) or ("application/octet-stream", "bin")
                files[name] = (f"{name}.{ext}", data, content_type)
        return self._client.request(
            request.method,
            request.url,
            data=dict(request.params),
            files=files,
            headers=headers,
        )

    def execute(self, request: HttpRequest) -> RawResponse:
        try:
            response = self._send(request)
            return RawResponse(body=response.text, status=response.status_code)
        except Exception as exc:
            # anything raised while building or sending is a failed exchange
            return RawResponse(error=exc)

    def submit(self, request: HttpRequest, on_complete: CompletionCallback) -> None:
        future = self._pool.submit(self._run, request, on_complete)
        future.add_done_callback(_report_callback_error)

    def _run(self, request: HttpRequest, on_complete: CompletionCallback) -> None:
        on_complete(self.execute(request))

    def close(self) -> None:
        self._pool.shutdown(wait=True)
        self._client.close()

    def __enter__(self) -> "HttpxExecutor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _report_callback_error(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        log.error("executor.callback_failed", error=repr(exc))


# ── Mock executor (tests) ─────────────────────────────────────────────────────

class MockExecutor:
    """
    Deterministic executor that never touches the network.

    Responses are replayed in order, then ``default`` forever. With
    ``defer=True`` submitted requests are held until ``flush()``, which
    lets tests observe that a non-blocking call returned before completion.
    """

    def __init__(
        self,
        responses: Iterable[RawResponse] | None = None,
        *,
        default: RawResponse | None = None,
        defer: bool = False,
    ) -> None:
        self._responses: deque[RawResponse] = deque(responses or ())
        self._default = default or RawResponse(body="{}", status=200)
        self._defer = defer
        self._pending: list[tuple[RawResponse, CompletionCallback]] = []
        self.calls: list[HttpRequest] = []

    def _next(self, request: HttpRequest) -> RawResponse:
        self.calls.append(request)
        if self._responses:
            return self._responses.popleft()
        return self._default

    def execute(self, request: HttpRequest) -> RawResponse:
        return self._next(request)

    def submit(self, request: HttpRequest, on_complete: CompletionCallback) -> None:
        raw = self._next(request)
        if self._defer:
            self._pending.append((raw, on_complete))
        else:
            on_complete(raw)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def flush(self) -> int:
        """Deliver every held completion; returns how many were delivered."""
        delivered, self._pending = self._pending, []
        for raw, on_complete in delivered:
            on_complete(raw)
        return len(delivered)


__all__ = [
    "HttpRequest",
    "RawResponse",
    "CompletionCallback",
    "HttpExecutor",
    "HttpxExecutor",
    "MockExecutor",
    "sniff_image",
]
