"""
weibo_sdk.tier3_platform.logout
────────────────────────────────
Revokes the OAuth2 grant behind the current access token. The token object
itself is left untouched; discarding it is the caller's job.
"""
from __future__ import annotations

from weibo_sdk.tier0_core.params import ParameterBag
from weibo_sdk.tier3_platform.base import OpenAPI, operation
from weibo_sdk.tier3_platform.endpoints import ApiGroup, Operation


class LogoutAPI(OpenAPI):
    group = ApiGroup.LOGOUT

    @operation(Operation.LOGOUT_REVOKE)
    def logout(self) -> ParameterBag:
        return ParameterBag()


__all__ = ["LogoutAPI"]
