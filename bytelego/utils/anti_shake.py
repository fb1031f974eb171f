"""Helpers for suppressing accidental double clicks."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional, Tuple

from core.clock import now_ms as _now_ms
from core.config import DEFAULT_DEBOUNCE_INTERVAL_MS

__all__ = ["AntiShake", "DebounceState", "check_fast_double_click"]


@dataclass(frozen=True)
class DebounceState:
    """Timestamp of the last observed click; ``0`` means none seen yet."""

    last_event_ms: int = 0


def check_fast_double_click(
    state: DebounceState,
    *,
    now_ms: Optional[int] = None,
    interval_ms: int = DEFAULT_DEBOUNCE_INTERVAL_MS,
) -> Tuple[bool, DebounceState]:
    """Return whether a click arrives within ``interval_ms`` of the last one.

    The comparison uses the previous timestamp; the returned state always
    carries the current time, whether or not the click counted as fast.
    """

    now = _now_ms() if now_ms is None else int(now_ms)
    elapsed = now - state.last_event_ms
    return elapsed < interval_ms, DebounceState(last_event_ms=now)


class AntiShake:
    """Return True when clicks fire faster than the configured interval."""

    def __init__(self, interval_ms: int = DEFAULT_DEBOUNCE_INTERVAL_MS) -> None:
        self._interval_ms = max(0, int(interval_ms))
        self._state = DebounceState()
        self._lock = threading.Lock()

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def state(self) -> DebounceState:
        with self._lock:
            return self._state

    def is_fast_double_click(self, now_ms: Optional[int] = None) -> bool:
        with self._lock:
            fast, self._state = check_fast_double_click(
                self._state, now_ms=now_ms, interval_ms=self._interval_ms
            )
            return fast

    def reset(self) -> None:
        with self._lock:
            self._state = DebounceState()
