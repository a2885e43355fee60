"""Tests for tier1_runtime modules."""
from __future__ import annotations

import threading
from datetime import datetime, timezone
from urllib.parse import parse_qs

import httpx
import pytest

from weibo_sdk.tier0_core.credentials import AccessToken
from weibo_sdk.tier0_core.errors import (
    MissingCredentialError,
    RequestStateError,
    ValidationError,
)
from weibo_sdk.tier0_core.http import Failure, OutcomeKind, Success
from weibo_sdk.tier0_core.params import ParameterBag
from weibo_sdk.tier1_runtime.clock import Clock, now, set_clock
from weibo_sdk.tier1_runtime.dispatch import (
    Dispatcher,
    RequestState,
    build_request,
    normalize,
)
from weibo_sdk.tier1_runtime.executor import (
    HttpRequest,
    HttpxExecutor,
    MockExecutor,
    RawResponse,
    sniff_image,
)
from weibo_sdk.tier1_runtime.retry import retry_policy
from weibo_sdk.tier1_runtime.validate import (
    AuthorFilter,
    InviteData,
    TimelinePage,
    require_enum,
    require_id,
    validate_input,
)
from weibo_sdk.tier3_platform.endpoints import Operation

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def destroy_endpoint(endpoints):
    return endpoints.lookup(Operation.COMMENTS_DESTROY)


@pytest.fixture
def request_for(destroy_endpoint, token):
    def _make(cid: int = 12):
        return build_request(destroy_endpoint, ParameterBag().put("cid", cid), token)
    return _make


class DoubleCompletingExecutor:
    """Misbehaving executor that reports every completion twice."""

    def __init__(self, raw: RawResponse) -> None:
        self._raw = raw

    def execute(self, request: HttpRequest) -> RawResponse:
        return self._raw

    def submit(self, request, on_complete) -> None:
        on_complete(self._raw)
        on_complete(self._raw)


class RaisingExecutor:
    """Executor whose primitives raise instead of reporting a RawResponse."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    def execute(self, request: HttpRequest) -> RawResponse:
        raise self._exc

    def submit(self, request, on_complete) -> None:
        raise self._exc


# ── clock ──────────────────────────────────────────────────────────────────

class TestClock:
    def test_frozen_clock(self, frozen_clock):
        assert now() == frozen_clock

    def test_advance(self):
        fixed = datetime(2025, 6, 15, 0, 0, 0, tzinfo=timezone.utc)
        clock = Clock().freeze(fixed).advance(90)
        assert (clock.now() - fixed).total_seconds() == 90

    def test_default_clock_is_utc(self):
        set_clock(Clock())
        assert now().tzinfo is not None


# ── validate ───────────────────────────────────────────────────────────────

class TestValidate:
    def test_timeline_page_defaults(self):
        page = validate_input(TimelinePage, {})
        assert (page.since_id, page.max_id, page.count, page.page) == (0, 0, 50, 1)

    @pytest.mark.parametrize("data", [{"count": 0}, {"count": 201}, {"page": 0}, {"since_id": -1}])
    def test_timeline_page_bounds(self, data):
        with pytest.raises(ValidationError) as exc_info:
            validate_input(TimelinePage, data)
        assert set(exc_info.value.fields) == set(data)

    def test_timeline_page_is_strict(self):
        with pytest.raises(ValidationError):
            validate_input(TimelinePage, {"count": "50"})

    def test_invite_data(self):
        data = validate_input(InviteData, {"text": "Try this app"})
        assert data.url is None
        with pytest.raises(ValidationError):
            validate_input(InviteData, {"text": "   "})
        with pytest.raises(ValidationError):
            validate_input(InviteData, {"text": "x" * 301})
        with pytest.raises(ValidationError):
            validate_input(InviteData, {"text": "hi", "extra": 1})

    def test_require_enum(self):
        assert require_enum(AuthorFilter, "author_type", AuthorFilter.STRANGER) == 2
        assert require_enum(AuthorFilter, "author_type", 1) == 1
        with pytest.raises(ValidationError):
            require_enum(AuthorFilter, "author_type", 3)
        with pytest.raises(ValidationError):
            require_enum(AuthorFilter, "author_type", True)

    def test_require_id(self):
        assert require_id("cid", 0) == 0
        for bad in (-1, True, "12", None):
            with pytest.raises(ValidationError):
                require_id("cid", bad)


# ── retry ──────────────────────────────────────────────────────────────────

class TestRetryPolicy:
    def test_single_attempt_is_passthrough(self):
        def fn():
            return 1
        assert retry_policy(max_attempts=1)(fn) is fn

    def test_retries_transport_errors(self):
        calls = []

        @retry_policy(max_attempts=3, min_wait=0, max_wait=0, jitter=0)
        def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise httpx.ConnectError("refused")
            return "ok"

        assert flaky() == "ok"
        assert len(calls) == 3

    def test_gives_up_and_reraises(self):
        calls = []

        @retry_policy(max_attempts=2, min_wait=0, max_wait=0, jitter=0)
        def down():
            calls.append(1)
            raise httpx.ReadTimeout("slow")

        with pytest.raises(httpx.ReadTimeout):
            down()
        assert len(calls) == 2

    def test_other_errors_not_retried(self):
        calls = []

        @retry_policy(max_attempts=3, min_wait=0, max_wait=0, jitter=0)
        def broken():
            calls.append(1)
            raise ValueError("bug")

        with pytest.raises(ValueError):
            broken()
        assert len(calls) == 1


# ── build_request ──────────────────────────────────────────────────────────

class TestBuildRequest:
    def test_header_auth(self, destroy_endpoint, token):
        params = ParameterBag().put("cid", 12)
        req = build_request(destroy_endpoint, params, token)
        assert req.headers == (("Authorization", "OAuth2 2.00abcDEF"),)
        assert "access_token" not in req.params
        assert req.params.frozen
        assert req.state is RequestState.BUILT

    def test_param_auth(self, destroy_endpoint, token):
        req = build_request(destroy_endpoint, ParameterBag().put("cid", 12), token, auth_mode="param")
        assert req.params["access_token"] == "2.00abcDEF"
        assert req.headers == ()

    def test_caller_bag_untouched(self, destroy_endpoint, token):
        params = ParameterBag().put("cid", 12)
        build_request(destroy_endpoint, params, token, auth_mode="param")
        assert not params.frozen
        assert "access_token" not in params

    def test_missing_token(self, destroy_endpoint):
        with pytest.raises(MissingCredentialError):
            build_request(destroy_endpoint, ParameterBag(), None)

    def test_expired_token(self, destroy_endpoint, expired_token):
        with pytest.raises(MissingCredentialError) as exc_info:
            build_request(destroy_endpoint, ParameterBag(), expired_token)
        assert exc_info.value.code == "expired_credential"

    def test_naive_expiry_is_compared_as_utc(self, destroy_endpoint):
        stale = AccessToken("2.00stale", expires_at=datetime(2024, 12, 31, 23, 59, 59))
        with pytest.raises(MissingCredentialError) as exc_info:
            build_request(destroy_endpoint, ParameterBag(), stale)
        assert exc_info.value.code == "expired_credential"

        fresh = AccessToken("2.00fresh", expires_at=datetime(2030, 1, 1))
        assert build_request(destroy_endpoint, ParameterBag(), fresh).token is fresh

    def test_identical_inputs_build_equal_requests(self, request_for):
        assert request_for(12) == request_for(12)
        assert request_for(12) != request_for(13)

    def test_to_http(self, request_for):
        http_request = request_for(12).to_http()
        assert http_request.method == "POST"
        assert http_request.url == "https://api.weibo.com/2/comments/destroy.json"
        assert http_request.params == {"cid": "12"}
        assert http_request.files == {}


# ── normalize ──────────────────────────────────────────────────────────────

class TestNormalize:
    def test_success(self):
        assert normalize(RawResponse(body='{"id":1}', status=200)) == Success('{"id":1}')

    def test_status_failure_keeps_body(self):
        outcome = normalize(RawResponse(body='{"error_code":21327}', status=401))
        assert outcome == Failure(
            kind=OutcomeKind.HTTP_STATUS,
            message="HTTP 401",
            status=401,
            body='{"error_code":21327}',
        )

    def test_transport_error(self):
        outcome = normalize(RawResponse(error=httpx.ConnectError("refused")))
        assert outcome.kind is OutcomeKind.NETWORK
        assert "ConnectError" in outcome.message

    def test_neither_status_nor_error(self):
        assert normalize(RawResponse()).kind is OutcomeKind.NETWORK


# ── Dispatcher ─────────────────────────────────────────────────────────────

class TestDispatcher:
    def test_sync_and_async_agree(self, request_for):
        ok = RawResponse(body='{"ok":true}', status=200)
        dispatcher = Dispatcher(MockExecutor(default=ok))

        sync_outcome = dispatcher.dispatch(request_for(), blocking=True)
        async_outcome = dispatcher.dispatch(request_for(), blocking=False).result(timeout=1)

        assert sync_outcome == async_outcome == Success('{"ok":true}')

    def test_sync_and_async_agree_on_failure(self, request_for):
        boom = RawResponse(body="internal", status=500)
        dispatcher = Dispatcher(MockExecutor(default=boom))

        sync_outcome = dispatcher.dispatch_sync(request_for())
        async_outcome = dispatcher.dispatch_async(request_for()).result(timeout=1)

        assert sync_outcome == async_outcome
        assert sync_outcome.status == 500
        assert sync_outcome.body == "internal"

    def test_lifecycle_reaches_terminal_state(self, request_for):
        ok_req, bad_req = request_for(), request_for()
        dispatcher = Dispatcher(MockExecutor([
            RawResponse(body="{}", status=200),
            RawResponse(error=httpx.ConnectError("refused")),
        ]))
        dispatcher.dispatch_sync(ok_req)
        dispatcher.dispatch_sync(bad_req)
        assert ok_req.state is RequestState.SUCCEEDED
        assert bad_req.state is RequestState.FAILED

    def test_request_dispatched_once(self, request_for):
        req = request_for()
        dispatcher = Dispatcher(MockExecutor())
        dispatcher.dispatch_sync(req)
        with pytest.raises(RequestStateError):
            dispatcher.dispatch_sync(req)
        with pytest.raises(RequestStateError):
            dispatcher.dispatch_async(req)

    def test_async_returns_before_completion(self, request_for):
        executor = MockExecutor(defer=True)
        received = []
        future = Dispatcher(executor).dispatch_async(request_for(), received.append)

        assert not future.done()
        assert received == []
        assert executor.pending == 1

        assert executor.flush() == 1
        assert future.result(timeout=1) == Success("{}")
        assert received == [Success("{}")]

    def test_duplicate_completion_is_dropped(self, request_for):
        req = request_for()
        received = []
        executor = DoubleCompletingExecutor(RawResponse(body="{}", status=200))
        future = Dispatcher(executor).dispatch_async(req, received.append)

        assert future.result(timeout=1) == Success("{}")
        assert len(received) == 1
        assert req.state is RequestState.SUCCEEDED

    def test_callback_rejected_for_blocking(self, request_for):
        with pytest.raises(TypeError):
            Dispatcher(MockExecutor()).dispatch(request_for(), callback=lambda outcome: None)

    def test_executor_sees_built_request(self, request_for):
        executor = MockExecutor()
        Dispatcher(executor).dispatch_sync(request_for(34))
        assert len(executor.calls) == 1
        assert executor.calls[0].params == {"cid": "34"}
        assert executor.calls[0].headers == {"Authorization": "OAuth2 2.00abcDEF"}

    def test_raising_executor_gives_same_failure_in_both_modes(self, request_for):
        dispatcher = Dispatcher(RaisingExecutor(UnicodeEncodeError("ascii", "tökén", 1, 2, "no")))
        sync_req, async_req = request_for(), request_for()
        received = []

        sync_outcome = dispatcher.dispatch_sync(sync_req)
        async_outcome = dispatcher.dispatch_async(async_req, received.append).result(timeout=1)

        assert sync_outcome == async_outcome
        assert sync_outcome.kind is OutcomeKind.NETWORK
        assert sync_outcome.message.startswith("UnicodeEncodeError")
        assert received == [async_outcome]
        assert sync_req.state is RequestState.FAILED
        assert async_req.state is RequestState.FAILED


# ── HttpxExecutor ──────────────────────────────────────────────────────────

class TestHttpxExecutor:
    @pytest.fixture
    def seen(self):
        return []

    @pytest.fixture
    def executor(self, seen):
        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path.endswith("/fail.json"):
                return httpx.Response(500, text='{"error":"boom"}')
            if request.url.path.endswith("/down.json"):
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, text='{"ok":true}')

        ex = HttpxExecutor(transport=httpx.MockTransport(handler), user_agent="weibo-sdk-test")
        yield ex
        ex.close()

    def test_get_sends_query_string(self, executor, seen):
        raw = executor.execute(HttpRequest(
            "GET",
            "https://api.weibo.com/2/users/show.json",
            params={"uid": "1404376560"},
            headers={"Authorization": "OAuth2 tok"},
        ))
        assert raw == RawResponse(body='{"ok":true}', status=200)
        assert seen[0].method == "GET"
        assert seen[0].url.params["uid"] == "1404376560"
        assert seen[0].headers["authorization"] == "OAuth2 tok"
        assert seen[0].headers["user-agent"] == "weibo-sdk-test"

    def test_post_sends_form_body(self, executor, seen):
        executor.execute(HttpRequest(
            "POST", "https://api.weibo.com/2/comments/sdestroy_batch.json",
            params={"cids": "12,34,56"},
        ))
        assert seen[0].headers["content-type"] == "application/x-www-form-urlencoded"
        assert parse_qs(seen[0].content.decode()) == {"cids": ["12,34,56"]}

    def test_post_with_files_is_multipart(self, executor, seen):
        executor.execute(HttpRequest(
            "POST", "https://api.weibo.com/2/statuses/upload.json",
            params={"status": "hello"},
            files={"pic": PNG},
        ))
        assert seen[0].headers["content-type"].startswith("multipart/form-data")
        assert b'filename="pic.png"' in seen[0].content
        assert b"image/png" in seen[0].content
        assert b"hello" in seen[0].content

    def test_non_2xx_is_a_response_not_an_error(self, executor):
        raw = executor.execute(HttpRequest("GET", "https://api.weibo.com/2/fail.json"))
        assert raw.error is None
        assert raw.status == 500
        assert raw.body == '{"error":"boom"}'

    def test_transport_error_is_captured(self, executor):
        raw = executor.execute(HttpRequest("GET", "https://api.weibo.com/2/down.json"))
        assert isinstance(raw.error, httpx.ConnectError)
        assert raw.status is None

    def test_non_ascii_header_is_captured(self, executor):
        request = HttpRequest(
            "GET",
            "https://api.weibo.com/2/users/show.json",
            headers={"Authorization": "OAuth2 tökén"},
        )
        raw = executor.execute(request)
        assert isinstance(raw.error, UnicodeEncodeError)
        assert raw.status is None

        done = threading.Event()
        results = []

        def on_complete(raw):
            results.append(raw)
            done.set()

        executor.submit(request, on_complete)
        assert done.wait(timeout=5)
        assert isinstance(results[0].error, UnicodeEncodeError)

    def test_submit_completes_on_worker_thread(self, executor):
        done = threading.Event()
        results = []

        def on_complete(raw):
            results.append((raw, threading.current_thread().name))
            done.set()

        executor.submit(HttpRequest("GET", "https://api.weibo.com/2/users/show.json"), on_complete)
        assert done.wait(timeout=5)
        raw, thread_name = results[0]
        assert raw.status == 200
        assert thread_name.startswith("weibo-sdk")


class TestSniffImage:
    def test_known_formats(self):
        assert sniff_image(PNG) == ("image/png", "png")
        assert sniff_image(b"\xff\xd8\xff\xe0rest") == ("image/jpeg", "jpg")
        assert sniff_image(b"GIF89a....") == ("image/gif", "gif")

    def test_unknown_format(self):
        assert sniff_image(b"BM not a supported format") is None
