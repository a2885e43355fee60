"""
weibo_sdk.tier1_runtime.clock
──────────────────────────────
Mockable time source. Token expiry checks read the time from here rather
than from datetime.now(), so tests can pin "now" on either side of an
expiry marker.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable


class Clock:
    """UTC clock. Pass now_fn to control time in tests."""

    def __init__(self, now_fn: Callable[[], datetime] | None = None) -> None:
        self._now_fn = now_fn or (lambda: datetime.now(tz=timezone.utc))

    def now(self) -> datetime:
        return self._now_fn()

    def freeze(self, dt: datetime) -> "Clock":
        """Return a new Clock frozen at the given datetime."""
        return Clock(now_fn=lambda: dt)

    def advance(self, seconds: float) -> "Clock":
        """Return a new Clock frozen *seconds* after this clock's current time."""
        moved = self.now() + timedelta(seconds=seconds)
        return Clock(now_fn=lambda: moved)


_clock = Clock()


def get_clock() -> Clock:
    return _clock


def set_clock(clock: Clock) -> None:
    """Replace the global clock (use in tests)."""
    global _clock
    _clock = clock


def now() -> datetime:
    """Return the current UTC datetime from the global clock."""
    return _clock.now()


__all__ = ["Clock", "get_clock", "set_clock", "now"]
