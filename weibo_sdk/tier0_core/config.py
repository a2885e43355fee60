"""
weibo_sdk.tier0_core.config
────────────────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic. Invalid values raise
ConfigurationError when the config is loaded, not on first request.

Minimal stack: pydantic-settings + python-dotenv
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from weibo_sdk.tier0_core.errors import ConfigurationError


class WeiboConfig(BaseSettings):
    """
    Typed SDK configuration. All env vars are prefixed with WEIBO_.
    Endpoint roots live here so the endpoint table can be pointed at a
    sandbox without code changes.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # ── Endpoints ─────────────────────────────────────────────────────────────
    api_server: str = Field(default="https://api.weibo.com/2", alias="WEIBO_API_SERVER")
    invite_url: str = Field(
        default="https://m.api.weibo.com/2/messages/invite.json",
        alias="WEIBO_INVITE_URL",
    )
    revoke_url: str = Field(
        default="https://api.weibo.com/oauth2/revokeoauth2",
        alias="WEIBO_REVOKE_URL",
    )

    # ── Transport ─────────────────────────────────────────────────────────────
    timeout: float = Field(default=30.0, gt=0, alias="WEIBO_TIMEOUT")
    max_workers: int = Field(default=4, ge=1, alias="WEIBO_MAX_WORKERS")
    max_attempts: int = Field(default=1, ge=1, alias="WEIBO_MAX_ATTEMPTS")
    user_agent: str = Field(default="weibo-sdk-python/0.1.0", alias="WEIBO_USER_AGENT")

    # ── Authentication ────────────────────────────────────────────────────────
    auth_mode: str = Field(default="header", alias="WEIBO_AUTH_MODE")
    auth_scheme: str = Field(default="OAuth2", alias="WEIBO_AUTH_SCHEME")

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="WEIBO_LOG_LEVEL")
    log_format: str = Field(default="json", alias="WEIBO_LOG_FORMAT")

    @field_validator("api_server", "invite_url", "revoke_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"must be an absolute http(s) URL, got {v!r}")
        return v.rstrip("/")

    @field_validator("auth_mode")
    @classmethod
    def validate_auth_mode(cls, v: str) -> str:
        allowed = {"header", "param"}
        if v.lower() not in allowed:
            raise ValueError(f"auth_mode must be one of {allowed}, got {v!r}")
        return v.lower()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()


def load_config(**overrides: object) -> WeiboConfig:
    """Build a WeiboConfig, turning pydantic failures into ConfigurationError."""
    try:
        return WeiboConfig(**overrides)
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        raise ConfigurationError(
            user_message="Invalid Weibo SDK configuration.",
            detail=f"Invalid configuration: {fields}",
            fields=fields,
        ) from exc


@lru_cache(maxsize=1)
def get_config() -> WeiboConfig:
    """
    Return the process-wide config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    return load_config()


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()


__all__ = ["WeiboConfig", "load_config", "get_config"]
