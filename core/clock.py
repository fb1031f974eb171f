"""Clock utilities for wall-clock and monotonic timekeeping."""

from __future__ import annotations

import time


def now_ms() -> int:
    """Return a UNIX epoch timestamp in milliseconds."""
    return time.time_ns() // 1_000_000


def now_mono_ns() -> int:
    """Return the current monotonic time in nanoseconds."""
    return time.perf_counter_ns()
