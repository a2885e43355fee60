"""
weibo_sdk.tier3_platform.comments
──────────────────────────────────
Comments API: timelines of comments, batch lookup, create / reply /
destroy. See http://open.weibo.com/wiki/2/comments for field semantics.
"""
from __future__ import annotations

from collections.abc import Sequence

from weibo_sdk.tier0_core.params import (
    COMMENTS_DESTROY_BATCH_LIMIT,
    COMMENTS_SHOW_BATCH_LIMIT,
    ParameterBag,
    join_ids,
)
from weibo_sdk.tier1_runtime.validate import (
    AuthorFilter,
    SourceFilter,
    require_bool,
    require_enum,
    require_id,
    require_text,
)
from weibo_sdk.tier3_platform.base import OpenAPI, operation, page_params
from weibo_sdk.tier3_platform.endpoints import ApiGroup, Operation


class CommentsAPI(OpenAPI):
    group = ApiGroup.COMMENTS

    AUTHOR_FILTER_ALL = AuthorFilter.ALL
    AUTHOR_FILTER_ATTENTIONS = AuthorFilter.ATTENTIONS
    AUTHOR_FILTER_STRANGER = AuthorFilter.STRANGER

    SRC_FILTER_ALL = SourceFilter.ALL
    SRC_FILTER_WEIBO = SourceFilter.WEIBO
    SRC_FILTER_WEIQUN = SourceFilter.WEIQUN

    @operation(Operation.COMMENTS_SHOW)
    def show(
        self,
        id: int,
        since_id: int = 0,
        max_id: int = 0,
        count: int = 50,
        page: int = 1,
        author_type: int = AuthorFilter.ALL,
    ) -> ParameterBag:
        """Comments on the status *id*."""
        return (
            page_params(since_id, max_id, count, page)
            .put("id", require_id("id", id))
            .put("filter_by_author", require_enum(AuthorFilter, "author_type", author_type))
        )

    @operation(Operation.COMMENTS_BY_ME)
    def by_me(
        self,
        since_id: int = 0,
        max_id: int = 0,
        count: int = 50,
        page: int = 1,
        source_type: int = SourceFilter.ALL,
    ) -> ParameterBag:
        """Comments posted by the authenticated user."""
        return page_params(since_id, max_id, count, page).put(
            "filter_by_source", require_enum(SourceFilter, "source_type", source_type)
        )

    @operation(Operation.COMMENTS_TO_ME)
    def to_me(
        self,
        since_id: int = 0,
        max_id: int = 0,
        count: int = 50,
        page: int = 1,
        author_type: int = AuthorFilter.ALL,
        source_type: int = SourceFilter.ALL,
    ) -> ParameterBag:
        """Comments received by the authenticated user."""
        return (
            page_params(since_id, max_id, count, page)
            .put("filter_by_author", require_enum(AuthorFilter, "author_type", author_type))
            .put("filter_by_source", require_enum(SourceFilter, "source_type", source_type))
        )

    @operation(Operation.COMMENTS_TIMELINE)
    def timeline(
        self,
        since_id: int = 0,
        max_id: int = 0,
        count: int = 50,
        page: int = 1,
        trim_user: bool = False,
    ) -> ParameterBag:
        """All comments, posted or received. trim_user=True returns only user ids."""
        return page_params(since_id, max_id, count, page).put(
            "trim_user", require_bool("trim_user", trim_user)
        )

    @operation(Operation.COMMENTS_MENTIONS)
    def mentions(
        self,
        since_id: int = 0,
        max_id: int = 0,
        count: int = 50,
        page: int = 1,
        author_type: int = AuthorFilter.ALL,
        source_type: int = SourceFilter.ALL,
    ) -> ParameterBag:
        """Comments that @-mention the authenticated user."""
        return (
            page_params(since_id, max_id, count, page)
            .put("filter_by_author", require_enum(AuthorFilter, "author_type", author_type))
            .put("filter_by_source", require_enum(SourceFilter, "source_type", source_type))
        )

    @operation(Operation.COMMENTS_SHOW_BATCH)
    def show_batch(self, cids: Sequence[int]) -> ParameterBag:
        """Up to 50 comments by id."""
        return ParameterBag().put(
            "cids", join_ids(cids, limit=COMMENTS_SHOW_BATCH_LIMIT, field="cids")
        )

    @operation(Operation.COMMENTS_CREATE)
    def create(self, comment: str, id: int, comment_ori: bool = False) -> ParameterBag:
        """Comment on status *id*; comment_ori also comments on the original of a repost."""
        return (
            ParameterBag()
            .put("comment", require_text("comment", comment))
            .put("id", require_id("id", id))
            .put("comment_ori", require_bool("comment_ori", comment_ori))
        )

    @operation(Operation.COMMENTS_DESTROY)
    def destroy(self, cid: int) -> ParameterBag:
        return ParameterBag().put("cid", require_id("cid", cid))

    @operation(Operation.COMMENTS_DESTROY_BATCH)
    def destroy_batch(self, cids: Sequence[int]) -> ParameterBag:
        """Remove up to 20 comments in one request."""
        return ParameterBag().put(
            "cids", join_ids(cids, limit=COMMENTS_DESTROY_BATCH_LIMIT, field="cids")
        )

    @operation(Operation.COMMENTS_REPLY)
    def reply(
        self,
        cid: int,
        id: int,
        comment: str,
        without_mention: bool = False,
        comment_ori: bool = False,
    ) -> ParameterBag:
        """
        Reply to comment *cid* on status *id*. without_mention=True stops the
        server from prefixing the reply with "@author".
        """
        return (
            ParameterBag()
            .put("cid", require_id("cid", cid))
            .put("id", require_id("id", id))
            .put("comment", require_text("comment", comment))
            .put("without_mention", require_bool("without_mention", without_mention))
            .put("comment_ori", require_bool("comment_ori", comment_ori))
        )


__all__ = ["CommentsAPI"]
