"""
weibo_sdk.client
─────────────────
Facade that wires config, endpoint table, executor and dispatcher once and
exposes every API group over them.

Usage::

    from weibo_sdk import AccessToken, WeiboClient

    token = AccessToken.from_bundle(oauth_response)
    with WeiboClient(token) as weibo:
        weibo.comments.show(3604155930513843)              # blocking
        weibo.statuses.update.submit("hi", callback=cb)    # non-blocking
"""
from __future__ import annotations

from weibo_sdk.tier0_core.config import WeiboConfig, get_config
from weibo_sdk.tier0_core.credentials import AccessToken
from weibo_sdk.tier1_runtime.dispatch import Dispatcher
from weibo_sdk.tier1_runtime.executor import HttpExecutor, HttpxExecutor
from weibo_sdk.tier3_platform.comments import CommentsAPI
from weibo_sdk.tier3_platform.endpoints import (
    EndpointTable,
    build_endpoint_table,
    get_endpoint_table,
)
from weibo_sdk.tier3_platform.invite import InviteAPI
from weibo_sdk.tier3_platform.logout import LogoutAPI
from weibo_sdk.tier3_platform.statuses import StatusesAPI
from weibo_sdk.tier3_platform.users import UsersAPI


class WeiboClient:
    """All API groups sharing one token, one dispatcher and one endpoint table."""

    def __init__(
        self,
        token: AccessToken | None,
        *,
        config: WeiboConfig | None = None,
        executor: HttpExecutor | None = None,
        endpoints: EndpointTable | None = None,
    ) -> None:
        self._config = config or get_config()
        if endpoints is None:
            endpoints = (
                get_endpoint_table() if config is None else build_endpoint_table(self._config)
            )
        self._endpoints = endpoints
        self._owns_executor = executor is None
        self._executor = executor or HttpxExecutor.from_config(self._config)
        self._dispatcher = Dispatcher(self._executor)

        shared = (token, self._dispatcher, self._endpoints, self._config)
        self.comments = CommentsAPI(*shared)
        self.statuses = StatusesAPI(*shared)
        self.users = UsersAPI(*shared)
        self.invite = InviteAPI(*shared)
        self.logout = LogoutAPI(*shared)

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def endpoints(self) -> EndpointTable:
        return self._endpoints

    def close(self) -> None:
        """Close the executor if this client created it."""
        if self._owns_executor:
            self._executor.close()

    def __enter__(self) -> "WeiboClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["WeiboClient"]
