"""Freshness checks and age strings for cached weather/photo snapshots.

All timestamps are milliseconds since the Unix epoch. Ages saturate at zero,
so a capture time in the future (clock skew) reads as "just captured" rather
than a negative duration.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_TTL_MS = 30 * 60 * 1000

_SECOND_MS = 1000
_MINUTE_MS = 60 * _SECOND_MS
_HOUR_MS = 60 * _MINUTE_MS


@dataclass
class CacheEntry:
    """Payload (photo, weather, location) with the time it was captured."""
    payload: Any
    captured_at_ms: int
    query: Optional[str] = None


@dataclass
class FreshnessReport:
    """Validity of a cache entry plus human-readable age/remaining strings."""
    fresh: bool
    age: str
    remaining: str


def current_time_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def age_ms(captured_at_ms: int, now_ms: int) -> int:
    """Elapsed milliseconds since capture, never negative."""
    return max(0, now_ms - captured_at_ms)


def is_fresh(captured_at_ms: int, now_ms: int, ttl_ms: int = DEFAULT_TTL_MS) -> bool:
    """True while the entry is younger than ttl_ms (the boundary is stale)."""
    return age_ms(captured_at_ms, now_ms) < ttl_ms


def remaining_ms(captured_at_ms: int, now_ms: int, ttl_ms: int = DEFAULT_TTL_MS) -> int:
    """Milliseconds until the entry goes stale, never negative."""
    return max(0, ttl_ms - age_ms(captured_at_ms, now_ms))


def format_age(captured_at_ms: int, now_ms: int) -> str:
    """Bucket the age into "Ns ago", "Nm ago", "Nh ago" or "Nd ago"."""
    seconds = age_ms(captured_at_ms, now_ms) // _SECOND_MS
    if seconds < 60:
        return f"{seconds}s ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def format_remaining(ms: int) -> str:
    """Render a countdown: "1h 01m", "4m 05s", "12s" or "0s"."""
    if ms <= 0:
        return "0s"
    hours = ms // _HOUR_MS
    minutes = (ms % _HOUR_MS) // _MINUTE_MS
    seconds = (ms % _MINUTE_MS) // _SECOND_MS
    if hours > 0:
        return f"{hours}h {minutes:02d}m"
    if minutes > 0:
        return f"{minutes}m {seconds:02d}s"
    return f"{seconds}s"


def describe(entry: CacheEntry, now_ms: int, ttl_ms: int = DEFAULT_TTL_MS) -> FreshnessReport:
    """Summarize an entry's freshness for display."""
    return FreshnessReport(
        fresh=is_fresh(entry.captured_at_ms, now_ms, ttl_ms),
        age=format_age(entry.captured_at_ms, now_ms),
        remaining=format_remaining(remaining_ms(entry.captured_at_ms, now_ms, ttl_ms)),
    )
