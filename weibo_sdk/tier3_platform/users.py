"""
weibo_sdk.tier3_platform.users
───────────────────────────────
User profile lookups by uid, screen name or personal domain, and batched
follower/following/status counts.
"""
from __future__ import annotations

from collections.abc import Sequence

from weibo_sdk.tier0_core.errors import ValidationError
from weibo_sdk.tier0_core.params import USERS_COUNTS_LIMIT, ParameterBag, join_ids
from weibo_sdk.tier1_runtime.validate import require_id, require_text
from weibo_sdk.tier3_platform.base import OpenAPI, operation
from weibo_sdk.tier3_platform.endpoints import ApiGroup, Operation


class UsersAPI(OpenAPI):
    group = ApiGroup.USERS

    @operation(Operation.USERS_SHOW)
    def show(self, uid: int | None = None, *, screen_name: str | None = None) -> ParameterBag:
        """Profile of one user, by uid or by screen name (exactly one)."""
        if (uid is None) == (screen_name is None):
            raise ValidationError(
                user_message="Pass exactly one of uid or screen_name.",
                fields={"uid": "exclusive", "screen_name": "exclusive"},
            )
        if uid is not None:
            return ParameterBag().put("uid", require_id("uid", uid))
        return ParameterBag().put("screen_name", require_text("screen_name", screen_name))

    @operation(Operation.USERS_DOMAIN_SHOW)
    def domain_show(self, domain: str) -> ParameterBag:
        """Profile by personal domain: only the "xxx" of http://weibo.com/xxx."""
        domain = require_text("domain", domain)
        if "/" in domain:
            raise ValidationError(
                user_message="domain is the path segment only, not a URL.",
                fields={"domain": repr(domain)},
            )
        return ParameterBag().put("domain", domain)

    @operation(Operation.USERS_COUNTS)
    def counts(self, uids: Sequence[int]) -> ParameterBag:
        """Follower, following and status counts for up to 100 users."""
        return ParameterBag().put("uids", join_ids(uids, limit=USERS_COUNTS_LIMIT, field="uids"))


__all__ = ["UsersAPI"]
