"""
weibo_sdk.tier1_runtime.validate
─────────────────────────────────
Input validation via Pydantic v2. Operation arguments are checked against
the documented Weibo limits before any parameter bag is built. Raises the
SDK's ValidationError (not raw Pydantic errors) so callers handle one
exception type for every local input failure.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Any, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError as PydanticValidationError,
    field_validator,
)

T = TypeVar("T", bound=BaseModel)

TEXT_MAX_LENGTH = 140
INVITE_TEXT_MAX_LENGTH = 300
COUNT_MAX = 200


def validate_input(model: Type[T], data: Any) -> T:
    """
    Validate raw data against a Pydantic model.
    Raises weibo_sdk ValidationError (not Pydantic's) on failure.

    Usage:
        page = validate_input(TimelinePage, {"since_id": 0, "count": 50})
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        from weibo_sdk.tier0_core.errors import ValidationError

        fields = {
            ".".join(str(loc) for loc in err["loc"]) or "__root__": err["msg"]
            for err in exc.errors()
        }
        raise ValidationError(
            code="validation_error",
            user_message="Request validation failed.",
            fields=fields,
        ) from exc


# ── Filter enums ──────────────────────────────────────────────────────────────

class AuthorFilter(IntEnum):
    ALL = 0
    ATTENTIONS = 1
    STRANGER = 2


class SourceFilter(IntEnum):
    ALL = 0
    WEIBO = 1
    WEIQUN = 2


class Feature(IntEnum):
    ALL = 0
    ORIGINAL = 1
    PICTURE = 2
    VIDEO = 3
    MUSIC = 4


class TypeFilter(IntEnum):
    ALL = 0
    ORIGINAL = 1


# ── Shared input models ───────────────────────────────────────────────────────

class _Strict(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)


class TimelinePage(_Strict):
    """Paging window common to every timeline-style read."""
    since_id: int = Field(default=0, ge=0)
    max_id: int = Field(default=0, ge=0)
    count: int = Field(default=50, ge=1, le=COUNT_MAX)
    page: int = Field(default=1, ge=1)


class GeoPoint(BaseModel):
    """Optional coordinates; strings such as "39.9" are accepted."""
    model_config = ConfigDict(frozen=True)

    lat: float | None = Field(default=None, ge=-90.0, le=90.0)
    lon: float | None = Field(default=None, ge=-180.0, le=180.0)


class InviteData(BaseModel):
    """Payload of a private-message invitation, sent JSON-encoded as ``data``."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = Field(min_length=1, max_length=INVITE_TEXT_MAX_LENGTH)
    url: str | None = None
    invite_logo: str | None = None

    @field_validator("text")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


def require_id(name: str, value: Any) -> int:
    """Non-negative integer id; bools rejected."""
    from weibo_sdk.tier0_core.errors import ValidationError

    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(
            user_message=f"{name} must be a non-negative integer.",
            fields={name: repr(value)},
        )
    return value


def require_enum(enum: Type[IntEnum], name: str, value: Any) -> int:
    """Coerce *value* into *enum* and return its int value."""
    from weibo_sdk.tier0_core.errors import ValidationError

    if isinstance(value, bool):
        raise ValidationError(user_message=f"{name} is invalid.", fields={name: repr(value)})
    try:
        return int(enum(value))
    except (ValueError, TypeError) as exc:
        allowed = ", ".join(str(m.value) for m in enum)
        raise ValidationError(
            user_message=f"{name} must be one of {allowed}.",
            fields={name: repr(value)},
        ) from exc


def require_text(name: str, value: Any, *, max_length: int = TEXT_MAX_LENGTH) -> str:
    from weibo_sdk.tier0_core.errors import ValidationError

    if not isinstance(value, str) or not value.strip():
        raise ValidationError(user_message=f"{name} is required.", fields={name: "required"})
    if len(value) > max_length:
        raise ValidationError(
            user_message=f"{name} must be at most {max_length} characters.",
            fields={name: f"max {max_length}"},
        )
    return value


def require_bool(name: str, value: Any) -> bool:
    from weibo_sdk.tier0_core.errors import ValidationError

    if not isinstance(value, bool):
        raise ValidationError(user_message=f"{name} must be a boolean.", fields={name: repr(value)})
    return value


__all__ = [
    "validate_input",
    "AuthorFilter",
    "SourceFilter",
    "Feature",
    "TypeFilter",
    "TimelinePage",
    "GeoPoint",
    "InviteData",
    "require_id",
    "require_enum",
    "require_text",
    "require_bool",
]
