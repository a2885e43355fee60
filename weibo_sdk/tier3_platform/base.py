"""
weibo_sdk.tier3_platform.base
──────────────────────────────
Base class for the API groups and the ``@operation`` decorator that turns a
private parameter builder into a blocking/non-blocking method pair.

Usage::

    class CommentsAPI(OpenAPI):
        group = ApiGroup.COMMENTS

        @operation(Operation.COMMENTS_DESTROY)
        def destroy(self, cid: int) -> ParameterBag:
            return ParameterBag().put("cid", require_id("cid", cid))

    api.destroy(12)                          # blocks, returns Success
    api.destroy.submit(12, callback=on_done) # returns a Future at once
    api.destroy.build(12)                    # RequestDescriptor, not sent

Building (input validation, credential check) happens on the caller's
thread in every mode, so local errors are raised before dispatch.
"""
from __future__ import annotations

import functools
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any, ClassVar

from weibo_sdk.tier0_core.config import WeiboConfig, get_config
from weibo_sdk.tier0_core.credentials import AccessToken
from weibo_sdk.tier0_core.http import Success
from weibo_sdk.tier0_core.params import ParameterBag
from weibo_sdk.tier1_runtime.dispatch import (
    Dispatcher,
    OutcomeCallback,
    RequestDescriptor,
    build_request,
)
from weibo_sdk.tier1_runtime.validate import TimelinePage, validate_input
from weibo_sdk.tier3_platform.endpoints import (
    ApiGroup,
    EndpointTable,
    Operation,
    get_endpoint_table,
)

ParamBuilder = Callable[..., ParameterBag]


def page_params(since_id: int, max_id: int, count: int, page: int) -> ParameterBag:
    """Validated since_id/max_id/count/page window shared by timeline reads."""
    window = validate_input(
        TimelinePage,
        {"since_id": since_id, "max_id": max_id, "count": count, "page": page},
    )
    return (
        ParameterBag()
        .put("since_id", window.since_id)
        .put("max_id", window.max_id)
        .put("count", window.count)
        .put("page", window.page)
    )


class OpenAPI:
    """Shared state of an API group: token, dispatcher, endpoint table, config."""

    group: ClassVar[ApiGroup]

    def __init__(
        self,
        token: AccessToken | None,
        dispatcher: Dispatcher,
        endpoints: EndpointTable | None = None,
        config: WeiboConfig | None = None,
    ) -> None:
        self._token = token
        self._dispatcher = dispatcher
        self._endpoints = endpoints if endpoints is not None else get_endpoint_table()
        self._config = config or get_config()

    @property
    def token(self) -> AccessToken | None:
        return self._token

    def _build(self, op: Operation, params: ParameterBag) -> RequestDescriptor:
        return build_request(
            self._endpoints.lookup(op),
            params,
            self._token,
            auth_mode=self._config.auth_mode,
            auth_scheme=self._config.auth_scheme,
        )


class BoundOperation:
    """An operation bound to one API-group instance."""

    def __init__(self, api: OpenAPI, op: Operation, builder: ParamBuilder) -> None:
        self._api = api
        self._builder = builder
        self.operation = op
        functools.update_wrapper(self, builder)

    def build(self, *args: Any, **kwargs: Any) -> RequestDescriptor:
        params = self._builder(self._api, *args, **kwargs)
        return self._api._build(self.operation, params)

    def __call__(self, *args: Any, **kwargs: Any) -> Success:
        """Blocking call. Raises NetworkError / HttpStatusError on failure."""
        outcome = self._api._dispatcher.dispatch_sync(self.build(*args, **kwargs))
        if not outcome.ok:
            raise outcome.to_error()
        return outcome

    def submit(
        self,
        *args: Any,
        callback: OutcomeCallback | None = None,
        **kwargs: Any,
    ) -> Future:
        """Non-blocking call. The Future and the callback get the same envelope."""
        return self._api._dispatcher.dispatch_async(self.build(*args, **kwargs), callback)

    def __repr__(self) -> str:
        return f"<operation {self.operation!s} of {type(self._api).__name__}>"


class _OperationDescriptor:
    def __init__(self, op: Operation, builder: ParamBuilder) -> None:
        self.operation = op
        self._builder = builder
        functools.update_wrapper(self, builder)

    def __set_name__(self, owner: type, name: str) -> None:
        group = getattr(owner, "group", None)
        if group is not None and self.operation.group is not group:
            raise TypeError(
                f"{owner.__name__}.{name} is declared for {self.operation!s}, "
                f"which is not in group {group.value!r}"
            )

    def __get__(self, instance: OpenAPI | None, owner: type) -> Any:
        if instance is None:
            return self
        return BoundOperation(instance, self.operation, self._builder)


def operation(op: Operation) -> Callable[[ParamBuilder], _OperationDescriptor]:
    """Declare a parameter builder as the implementation of *op*."""
    def decorator(builder: ParamBuilder) -> _OperationDescriptor:
        return _OperationDescriptor(op, builder)
    return decorator


__all__ = ["OpenAPI", "BoundOperation", "operation", "page_params"]
