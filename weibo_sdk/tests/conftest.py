"""
weibo_sdk test configuration.

All tests run against MockExecutor or httpx.MockTransport; no network
access required. Environment defaults are set before any weibo_sdk module
is imported so the cached config picks them up.
"""
from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("WEIBO_LOG_LEVEL", "WARNING")
os.environ.setdefault("WEIBO_LOG_FORMAT", "console")
os.environ.setdefault("WEIBO_AUTH_MODE", "header")


FIXED_NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def frozen_clock():
    """Pin the SDK clock so token expiry is deterministic."""
    from weibo_sdk.tier1_runtime.clock import Clock, get_clock, set_clock

    original = get_clock()
    set_clock(Clock().freeze(FIXED_NOW))
    yield FIXED_NOW
    set_clock(original)


@pytest.fixture
def token():
    from weibo_sdk.tier0_core.credentials import AccessToken
    return AccessToken(token="2.00abcDEF", expires_at=FIXED_NOW + timedelta(days=1), uid="1404376560")


@pytest.fixture
def expired_token():
    from weibo_sdk.tier0_core.credentials import AccessToken
    return AccessToken(token="2.00stale", expires_at=FIXED_NOW - timedelta(seconds=1))


@pytest.fixture
def config():
    from weibo_sdk.tier0_core.config import load_config
    return load_config()


@pytest.fixture
def endpoints(config):
    from weibo_sdk.tier3_platform.endpoints import build_endpoint_table
    return build_endpoint_table(config)


@pytest.fixture
def mock_executor():
    from weibo_sdk.tier1_runtime.executor import MockExecutor
    return MockExecutor()


@pytest.fixture
def client(token, config, endpoints, mock_executor):
    """WeiboClient wired to a MockExecutor."""
    from weibo_sdk.client import WeiboClient
    return WeiboClient(token, config=config, executor=mock_executor, endpoints=endpoints)
