"""
weibo_sdk.tier3_platform.statuses
──────────────────────────────────
Statuses (Weibo posts): home timeline, mentions, posting text, reposting,
and posting with an image either uploaded inline or referenced by URL /
picture id.
"""
from __future__ import annotations

from collections.abc import Sequence

from weibo_sdk.tier0_core.errors import ValidationError
from weibo_sdk.tier0_core.params import PIC_ID_LIMIT, ParameterBag, join_batch
from weibo_sdk.tier1_runtime.executor import sniff_image
from weibo_sdk.tier1_runtime.validate import (
    AuthorFilter,
    Feature,
    GeoPoint,
    SourceFilter,
    TypeFilter,
    require_bool,
    require_enum,
    require_id,
    require_text,
    validate_input,
)
from weibo_sdk.tier3_platform.base import OpenAPI, operation, page_params
from weibo_sdk.tier3_platform.endpoints import ApiGroup, Operation

UPLOAD_MAX_BYTES = 5 * 1024 * 1024

Coordinate = float | str | None


class StatusesAPI(OpenAPI):
    group = ApiGroup.STATUSES

    FEATURE_ALL = Feature.ALL
    FEATURE_ORIGINAL = Feature.ORIGINAL
    FEATURE_PICTURE = Feature.PICTURE
    FEATURE_VIDEO = Feature.VIDEO
    FEATURE_MUSIC = Feature.MUSIC

    @operation(Operation.STATUSES_FRIENDS_TIMELINE)
    def friends_timeline(
        self,
        since_id: int = 0,
        max_id: int = 0,
        count: int = 50,
        page: int = 1,
        base_app: bool = False,
        feature: int = Feature.ALL,
        trim_user: bool = False,
    ) -> ParameterBag:
        """Statuses of the user and the accounts they follow."""
        return (
            page_params(since_id, max_id, count, page)
            .put("base_app", require_bool("base_app", base_app))
            .put("trim_user", require_bool("trim_user", trim_user))
            .put("feature", require_enum(Feature, "feature", feature))
        )

    @operation(Operation.STATUSES_MENTIONS)
    def mentions(
        self,
        since_id: int = 0,
        max_id: int = 0,
        count: int = 50,
        page: int = 1,
        author_type: int = AuthorFilter.ALL,
        source_type: int = SourceFilter.ALL,
        filter_type: int = TypeFilter.ALL,
        trim_user: bool = False,
    ) -> ParameterBag:
        """Statuses that @-mention the authenticated user."""
        return (
            page_params(since_id, max_id, count, page)
            .put("filter_by_author", require_enum(AuthorFilter, "author_type", author_type))
            .put("filter_by_source", require_enum(SourceFilter, "source_type", source_type))
            .put("filter_by_type", require_enum(TypeFilter, "filter_type", filter_type))
            .put("trim_user", require_bool("trim_user", trim_user))
        )

    @operation(Operation.STATUSES_UPDATE)
    def update(self, content: str, lat: Coordinate = None, lon: Coordinate = None) -> ParameterBag:
        """Post a text status. Two consecutive identical statuses are rejected server-side."""
        return _update_params(content, lat, lon)

    @operation(Operation.STATUSES_REPOST)
    def repost(self, id: int, status: str | None = None, is_comment: int = 0) -> ParameterBag:
        """
        Repost status *id*, optionally with added text. is_comment: 0 no
        comment, 1 comment on this status, 2 on the original, 3 on both.
        """
        if isinstance(is_comment, bool) or is_comment not in (0, 1, 2, 3):
            raise ValidationError(
                user_message="is_comment must be one of 0, 1, 2, 3.",
                fields={"is_comment": repr(is_comment)},
            )
        params = ParameterBag().put("id", require_id("id", id))
        if status is not None:
            params.put("status", require_text("status", status))
        return params.put("is_comment", is_comment)

    @operation(Operation.STATUSES_UPLOAD)
    def upload(
        self,
        content: str,
        image: bytes,
        lat: Coordinate = None,
        lon: Coordinate = None,
    ) -> ParameterBag:
        """Post a status with a JPEG, GIF or PNG image of at most 5 MB."""
        if not isinstance(image, (bytes, bytearray)) or not image:
            raise ValidationError(user_message="image is required.", fields={"pic": "required"})
        if len(image) > UPLOAD_MAX_BYTES:
            raise ValidationError(
                user_message="image must be at most 5 MB.",
                fields={"pic": f"{len(image)} bytes"},
            )
        if sniff_image(bytes(image)) is None:
            raise ValidationError(
                user_message="image must be JPEG, GIF or PNG.",
                fields={"pic": "unsupported format"},
            )
        return _update_params(content, lat, lon).put("pic", bytes(image))

    @operation(Operation.STATUSES_UPLOAD_URL_TEXT)
    def upload_url_text(
        self,
        status: str,
        image_url: str | None = None,
        pic_id: str | Sequence[str] | None = None,
        lat: Coordinate = None,
        lon: Coordinate = None,
    ) -> ParameterBag:
        """
        Post a status with an image referenced by URL or by uploaded picture
        id(s). The server prefers pic_id when both are present.
        """
        if not image_url and not pic_id:
            raise ValidationError(
                user_message="Either image_url or pic_id is required.",
                fields={"url": "required", "pic_id": "required"},
            )
        params = _update_params(status, lat, lon)
        if image_url:
            if not isinstance(image_url, str) or not image_url.startswith("http"):
                raise ValidationError(
                    user_message="image_url must be an http(s) URL.",
                    fields={"url": repr(image_url)},
                )
            params.put("url", image_url)
        if pic_id:
            ids = pic_id.split(",") if isinstance(pic_id, str) else list(pic_id)
            params.put("pic_id", join_batch(ids, limit=PIC_ID_LIMIT, field="pic_id"))
        return params


def _update_params(content: str, lat: Coordinate, lon: Coordinate) -> ParameterBag:
    lat, lon = _blank_to_none(lat), _blank_to_none(lon)
    point = validate_input(GeoPoint, {"lat": lat, "lon": lon})
    # range-checked, but a caller's string is sent exactly as written
    return (
        ParameterBag()
        .put("status", require_text("status", content))
        .put_optional("long", lon if isinstance(lon, str) else point.lon)
        .put_optional("lat", lat if isinstance(lat, str) else point.lat)
    )


def _blank_to_none(value: Coordinate) -> Coordinate:
    if isinstance(value, str) and not value.strip():
        return None
    return value


__all__ = ["StatusesAPI", "UPLOAD_MAX_BYTES"]
