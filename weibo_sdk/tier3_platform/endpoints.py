"""
weibo_sdk.tier3_platform.endpoints
───────────────────────────────────
The endpoint table: every logical operation the SDK knows, mapped to its
absolute URL and HTTP verb. Built once from config and never mutated, so
it is shared across threads without locking.

Looking up an operation that is not in the table is a programming error
and raises UnknownOperationError.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType

from weibo_sdk.tier0_core.config import WeiboConfig, get_config
from weibo_sdk.tier0_core.errors import UnknownOperationError
from weibo_sdk.tier0_core.http import HTTP


class ApiGroup(str, Enum):
    COMMENTS = "comments"
    STATUSES = "statuses"
    USERS = "users"
    INVITE = "invite"
    LOGOUT = "logout"


class Operation(str, Enum):
    """Operation ids, ``<group>.<name>``."""

    COMMENTS_TO_ME = "comments.to_me"
    COMMENTS_BY_ME = "comments.by_me"
    COMMENTS_SHOW = "comments.show"
    COMMENTS_TIMELINE = "comments.timeline"
    COMMENTS_MENTIONS = "comments.mentions"
    COMMENTS_SHOW_BATCH = "comments.show_batch"
    COMMENTS_CREATE = "comments.create"
    COMMENTS_DESTROY = "comments.destroy"
    COMMENTS_DESTROY_BATCH = "comments.destroy_batch"
    COMMENTS_REPLY = "comments.reply"

    STATUSES_FRIENDS_TIMELINE = "statuses.friends_timeline"
    STATUSES_MENTIONS = "statuses.mentions"
    STATUSES_UPDATE = "statuses.update"
    STATUSES_REPOST = "statuses.repost"
    STATUSES_UPLOAD = "statuses.upload"
    STATUSES_UPLOAD_URL_TEXT = "statuses.upload_url_text"

    USERS_SHOW = "users.show"
    USERS_DOMAIN_SHOW = "users.domain_show"
    USERS_COUNTS = "users.counts"

    INVITE_SEND = "invite.send"

    LOGOUT_REVOKE = "logout.revoke"

    @property
    def group(self) -> ApiGroup:
        return ApiGroup(self.value.split(".", 1)[0])

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EndpointDescriptor:
    operation: Operation
    url: str
    method: str


# (operation, path under the API server, verb)
_API_SERVER_ROUTES: tuple[tuple[Operation, str, str], ...] = (
    (Operation.COMMENTS_TO_ME, "/comments/to_me.json", HTTP.GET),
    (Operation.COMMENTS_BY_ME, "/comments/by_me.json", HTTP.GET),
    (Operation.COMMENTS_SHOW, "/comments/show.json", HTTP.GET),
    (Operation.COMMENTS_TIMELINE, "/comments/timeline.json", HTTP.GET),
    (Operation.COMMENTS_MENTIONS, "/comments/mentions.json", HTTP.GET),
    (Operation.COMMENTS_SHOW_BATCH, "/comments/show_batch.json", HTTP.GET),
    (Operation.COMMENTS_CREATE, "/comments/create.json", HTTP.POST),
    (Operation.COMMENTS_DESTROY, "/comments/destroy.json", HTTP.POST),
    (Operation.COMMENTS_DESTROY_BATCH, "/comments/sdestroy_batch.json", HTTP.POST),
    (Operation.COMMENTS_REPLY, "/comments/reply.json", HTTP.POST),
    (Operation.STATUSES_FRIENDS_TIMELINE, "/statuses/friends_timeline.json", HTTP.GET),
    (Operation.STATUSES_MENTIONS, "/statuses/mentions.json", HTTP.GET),
    (Operation.STATUSES_UPDATE, "/statuses/update.json", HTTP.POST),
    (Operation.STATUSES_REPOST, "/statuses/repost.json", HTTP.POST),
    (Operation.STATUSES_UPLOAD, "/statuses/upload.json", HTTP.POST),
    (Operation.STATUSES_UPLOAD_URL_TEXT, "/statuses/upload_url_text.json", HTTP.POST),
    (Operation.USERS_SHOW, "/users/show.json", HTTP.GET),
    (Operation.USERS_DOMAIN_SHOW, "/users/domain_show.json", HTTP.GET),
    (Operation.USERS_COUNTS, "/users/counts.json", HTTP.GET),
)


class EndpointTable(Mapping):
    """Read-only Operation → EndpointDescriptor mapping."""

    def __init__(self, endpoints: Mapping[Operation, EndpointDescriptor]) -> None:
        self._endpoints = MappingProxyType(dict(endpoints))

    def lookup(self, operation: Operation) -> EndpointDescriptor:
        try:
            return self._endpoints[operation]
        except KeyError:
            raise UnknownOperationError(
                user_message="Unknown API operation.",
                detail=f"No endpoint registered for {operation!s}",
            ) from None

    def for_group(self, group: ApiGroup) -> tuple[EndpointDescriptor, ...]:
        return tuple(d for op, d in self._endpoints.items() if op.group is group)

    def __getitem__(self, operation: Operation) -> EndpointDescriptor:
        return self._endpoints[operation]

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._endpoints)

    def __len__(self) -> int:
        return len(self._endpoints)

    def __repr__(self) -> str:
        return f"EndpointTable({len(self)} operations)"


def build_endpoint_table(config: WeiboConfig | None = None) -> EndpointTable:
    """Build the full table from the configured endpoint roots."""
    config = config or get_config()
    endpoints: dict[Operation, EndpointDescriptor] = {
        op: EndpointDescriptor(op, f"{config.api_server}{path}", method)
        for op, path, method in _API_SERVER_ROUTES
    }
    endpoints[Operation.INVITE_SEND] = EndpointDescriptor(
        Operation.INVITE_SEND, config.invite_url, HTTP.POST
    )
    endpoints[Operation.LOGOUT_REVOKE] = EndpointDescriptor(
        Operation.LOGOUT_REVOKE, config.revoke_url, HTTP.POST
    )
    return EndpointTable(endpoints)


@lru_cache(maxsize=1)
def get_endpoint_table() -> EndpointTable:
    """Process-wide table built from get_config(). Cached after first call."""
    return build_endpoint_table(get_config())


def _reset_endpoint_table() -> None:
    """For tests: rebuild from config on next call."""
    get_endpoint_table.cache_clear()


__all__ = [
    "ApiGroup",
    "Operation",
    "EndpointDescriptor",
    "EndpointTable",
    "build_endpoint_table",
    "get_endpoint_table",
]
