"""
weibo_sdk.tier0_core.credentials
─────────────────────────────────
OAuth2 access token as the SDK sees it: an opaque string plus an expiry
marker. Tokens are acquired and refreshed by the caller; the SDK only
reads them and refuses to dispatch with one that is absent or expired.

The raw token never appears in repr() or str(), so it cannot leak into
logs or tracebacks through an f-string.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from weibo_sdk.tier0_core.errors import ValidationError

_MASK = "**********"


@dataclass(frozen=True)
class AccessToken:
    """Immutable OAuth2 credential. expires_at=None means no expiry marker."""
    token: str = field(repr=False)
    expires_at: datetime | None = None
    refresh_token: str | None = field(default=None, repr=False)
    uid: str | None = None

    def __post_init__(self) -> None:
        # naive expiry markers are taken as UTC, the clock's zone
        if self.expires_at is not None and self.expires_at.tzinfo is None:
            object.__setattr__(self, "expires_at", self.expires_at.replace(tzinfo=timezone.utc))

    @classmethod
    def from_bundle(cls, bundle: Mapping[str, Any]) -> "AccessToken":
        """
        Build a token from an OAuth2 token response::

            {"access_token": "...", "expires_in": 157679999,
             "refresh_token": "...", "uid": "1404376560"}

        ``expires_in`` is counted from now.
        """
        from weibo_sdk.tier1_runtime.clock import now

        token = bundle.get("access_token")
        if not token or not isinstance(token, str):
            raise ValidationError(
                user_message="Token bundle has no access_token.",
                fields={"access_token": "required"},
            )
        expires_at = None
        expires_in = bundle.get("expires_in")
        if expires_in not in (None, ""):
            try:
                seconds = int(expires_in)
            except (TypeError, ValueError) as exc:
                raise ValidationError(
                    user_message="expires_in must be a number of seconds.",
                    fields={"expires_in": "not an integer"},
                ) from exc
            expires_at = now() + timedelta(seconds=seconds)
        uid = bundle.get("uid")
        return cls(
            token=token,
            expires_at=expires_at,
            refresh_token=bundle.get("refresh_token") or None,
            uid=str(uid) if uid is not None else None,
        )

    def is_expired(self, at: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        if at is None:
            from weibo_sdk.tier1_runtime.clock import now
            at = now()
        elif at.tzinfo is None:
            at = at.replace(tzinfo=timezone.utc)
        return at >= self.expires_at

    def is_valid(self, at: datetime | None = None) -> bool:
        """True when the token string is present and not past its expiry."""
        return bool(self.token) and not self.is_expired(at)

    def __str__(self) -> str:
        return _MASK


__all__ = ["AccessToken"]
