"""
weibo_sdk.tier3_platform.invite
────────────────────────────────
Private-message invitations. ``data`` is sent as a JSON string::

    {
        "text": "This app is great!",                    # required, ≤300 chars
        "url": "http://app.sina.com.cn/appdetail.php?appID=770915",
        "invite_logo": "http://hubimage.com2us.com/hubweb/contents/123_499.jpg"
    }

A missing uid or text is a ValidationError raised to the caller.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from weibo_sdk.tier0_core.errors import ValidationError
from weibo_sdk.tier0_core.params import ParameterBag
from weibo_sdk.tier1_runtime.validate import InviteData, validate_input
from weibo_sdk.tier3_platform.base import OpenAPI, operation
from weibo_sdk.tier3_platform.endpoints import ApiGroup, Operation

KEY_TEXT = "text"
KEY_URL = "url"
KEY_INVITE_LOGO = "invite_logo"


class InviteAPI(OpenAPI):
    group = ApiGroup.INVITE

    @operation(Operation.INVITE_SEND)
    def send_invite(self, uid: str | int, data: InviteData | Mapping[str, Any]) -> ParameterBag:
        if isinstance(uid, bool) or not isinstance(uid, (str, int)) or not str(uid).strip():
            raise ValidationError(user_message="uid is required.", fields={"uid": "required"})
        if not isinstance(data, InviteData):
            if not isinstance(data, Mapping) or not data:
                raise ValidationError(
                    user_message="Invitation data is required.",
                    fields={"data": "required"},
                )
            data = validate_input(InviteData, dict(data))
        return (
            ParameterBag()
            .put("uid", str(uid).strip())
            .put("data", data.model_dump_json(exclude_none=True))
        )


__all__ = ["InviteAPI", "KEY_TEXT", "KEY_URL", "KEY_INVITE_LOGO"]
