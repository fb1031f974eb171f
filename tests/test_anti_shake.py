"""Tests for the double-click debounce check."""

import threading

import pytest

from bytelego.utils.anti_shake import AntiShake, DebounceState, check_fast_double_click


def test_calls_spaced_by_interval_are_never_fast() -> None:
    state = DebounceState()
    verdicts = []
    for now in (1_000_000, 1_000_500, 1_001_200, 1_010_000):
        fast, state = check_fast_double_click(state, now_ms=now)
        verdicts.append(fast)
    assert verdicts == [False, False, False, False]


def test_second_call_inside_interval_is_fast() -> None:
    _, state = check_fast_double_click(DebounceState(), now_ms=2_000_000)
    fast, state = check_fast_double_click(state, now_ms=2_000_499)
    assert fast is True
    assert state.last_event_ms == 2_000_499


def test_timestamp_is_overwritten_even_when_fast() -> None:
    state = DebounceState(last_event_ms=5_000)
    fast, state = check_fast_double_click(state, now_ms=5_300)
    assert fast is True
    # measured from 5_300, not from the earlier 5_000
    fast, state = check_fast_double_click(state, now_ms=5_700)
    assert fast is True
    fast, _ = check_fast_double_click(state, now_ms=6_200)
    assert fast is False


def test_immediate_repeat_is_fast() -> None:
    _, state = check_fast_double_click(DebounceState(), now_ms=9_000)
    fast, _ = check_fast_double_click(state, now_ms=9_000)
    assert fast is True


def test_first_call_uses_wall_clock_and_is_not_fast() -> None:
    fast, state = check_fast_double_click(DebounceState())
    assert fast is False
    assert state.last_event_ms > 0


def test_custom_interval() -> None:
    state = DebounceState(last_event_ms=100)
    fast, _ = check_fast_double_click(state, now_ms=150, interval_ms=50)
    assert fast is False
    fast, _ = check_fast_double_click(state, now_ms=149, interval_ms=50)
    assert fast is True


def test_input_state_is_left_untouched() -> None:
    state = DebounceState(last_event_ms=42)
    check_fast_double_click(state, now_ms=1_000)
    assert state.last_event_ms == 42


def test_anti_shake_holder(monkeypatch: pytest.MonkeyPatch) -> None:
    guard = AntiShake(interval_ms=500)
    assert guard.interval_ms == 500
    assert guard.is_fast_double_click(now_ms=10_000) is False
    assert guard.is_fast_double_click(now_ms=10_100) is True
    assert guard.state.last_event_ms == 10_100

    monkeypatch.setattr("bytelego.utils.anti_shake._now_ms", lambda: 10_200)
    assert guard.is_fast_double_click() is True

    guard.reset()
    assert guard.state == DebounceState()


def test_anti_shake_is_consistent_across_threads() -> None:
    guard = AntiShake(interval_ms=1_000)
    barrier = threading.Barrier(8)
    results = []
    lock = threading.Lock()

    def _click() -> None:
        barrier.wait()
        fast = guard.is_fast_double_click(now_ms=50_000)
        with lock:
            results.append(fast)

    threads = [threading.Thread(target=_click) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(False) == 1
    assert results.count(True) == 7
