"""Utilities for epoch-millisecond timestamps."""

import time
from datetime import UTC, datetime


def now_ms() -> int:
    """Get current time as integer milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def to_iso(timestamp_ms: int) -> str:
    """Convert epoch milliseconds to an ISO format UTC string."""
    return datetime.fromtimestamp(timestamp_ms / 1000, UTC).isoformat()
